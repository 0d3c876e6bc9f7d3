"""Input validation domain service."""

import re

import pydantic

from passage.config import ValidationSettings
from passage.domain.error import ValidationError
from passage.domain.value import (
    Credentials,
    DisplayName,
    Email,
    FederatedIdentity,
    NamePolicy,
    PasswordResetInput,
    SignupInput,
)
from passage.domain.value.types import MAX_PASSWORD_BYTES

from .base import Service

# Letters in any script; \w minus digits and underscore
_LETTER = r"[^\W\d_]"
_NAME_PATTERNS = {
    NamePolicy.LETTERS: re.compile(rf"^{_LETTER}+(?:[ '\-]+{_LETTER}+)*$"),
    NamePolicy.SINGLE_WORD: re.compile(rf"^{_LETTER}+$"),
}


class InputValidator(Service):
    """Format and length checks applied before the state machine runs.

    Pure: no I/O, no state beyond the configured policy.
    """

    def __init__(self, validation_settings: ValidationSettings) -> None:
        """Initialize validator.

        Args:
            validation_settings: Name policy and password rules
        """
        self.name_policy = validation_settings.name_policy
        self.password_min_length = validation_settings.password_min_length

    def validate_signup(
        self, name: str | None, email: str | None, password: str | None
    ) -> SignupInput:
        """Validate a signup request.

        Raises:
            ValidationError: On the first failing field
        """
        return SignupInput(
            name=self.validate_name(name),
            email=self.validate_email(email),
            password=self.validate_password(password),
        )

    def validate_login(self, email: str | None, password: str | None) -> Credentials:
        """Validate a login request.

        Only presence is checked for the password: length rules apply to
        new passwords, not to login attempts.

        Raises:
            ValidationError: On the first failing field
        """
        validated_email = self.validate_email(email)
        if not password:
            raise ValidationError("password", "Password is required")
        return Credentials(email=validated_email, password=password)

    def validate_federated(
        self, name: str | None, email: str | None
    ) -> FederatedIdentity:
        """Validate a federated sign-in request.

        Provider names are free-form, so the name policy does not apply.

        Raises:
            ValidationError: On the first failing field
        """
        return FederatedIdentity(
            name=self._display_name(name),
            email=self.validate_email(email),
        )

    def validate_reset(
        self, token: str | None, new_password: str | None
    ) -> PasswordResetInput:
        """Validate a password reset completion request.

        Raises:
            ValidationError: On the first failing field
        """
        if not token or not token.strip():
            raise ValidationError("token", "Token is required")
        return PasswordResetInput(
            token=token.strip(),
            new_password=self.validate_password(new_password, field="new_password"),
        )

    def validate_email(self, email: str | None) -> Email:
        """Validate and normalize an email address.

        Raises:
            ValidationError: If missing or malformed
        """
        if not email or not email.strip():
            raise ValidationError("email", "Email is required")
        try:
            return Email(email)
        except pydantic.ValidationError:
            raise ValidationError("email", "Invalid email address")

    def validate_name(self, name: str | None) -> DisplayName:
        """Validate a display name against the configured policy.

        Raises:
            ValidationError: If missing or not allowed by the policy
        """
        display_name = self._display_name(name)
        pattern = _NAME_PATTERNS.get(self.name_policy)
        if pattern is not None and not pattern.match(display_name.root):
            if self.name_policy == NamePolicy.SINGLE_WORD:
                reason = "Name must be a single word of letters"
            else:
                reason = "Name may only contain letters, spaces, hyphens and apostrophes"
            raise ValidationError("name", reason)
        return display_name

    def validate_password(self, password: str | None, field: str = "password") -> str:
        """Validate a new password.

        Raises:
            ValidationError: If missing, too short, or too long for bcrypt
        """
        if not password:
            raise ValidationError(field, "Password is required")
        if len(password) < self.password_min_length:
            raise ValidationError(
                field,
                f"Password must be at least {self.password_min_length} characters",
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                field, f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )
        return password

    @staticmethod
    def _display_name(name: str | None) -> DisplayName:
        if not name or not name.strip():
            raise ValidationError("name", "Name is required")
        try:
            return DisplayName(name)
        except pydantic.ValidationError:
            raise ValidationError("name", "Name is too long")
