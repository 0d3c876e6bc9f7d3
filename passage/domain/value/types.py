"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

from enum import Enum

from email_validator import EmailNotValidError, validate_email
from pydantic import field_validator

from passage.domain.value.common import RootValueObject, ValueObject

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72
MAX_NAME_LENGTH = 255


class AccountState(str, Enum):
    """Authentication state of an email address.

    NONE means no record exists. A pending reset is tracked separately
    and can coexist with either of the other states.
    """

    NONE = "none"
    PASSWORD_AUTH = "password_auth"
    FEDERATED = "federated"


class NamePolicy(str, Enum):
    """Which display names signup accepts."""

    ANY = "any"  # Any non-empty text
    LETTERS = "letters"  # Letters, spaces, hyphens and apostrophes
    SINGLE_WORD = "single_word"  # One run of letters


class TokenPurpose(str, Enum):
    """What a signed token may be used for."""

    SESSION = "session"
    PASSWORD_RESET = "password_reset"


class Email(RootValueObject[str]):
    """Email address, normalized to lower case.

    Lower-casing the whole address makes the natural key compare
    case-insensitively.
    """

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email grammar (no deliverability lookup)."""
        try:
            result = validate_email(v.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email address")
        return result.normalized.lower()


class DisplayName(RootValueObject[str]):
    """Display name shown to the user. Trimmed, 1-255 characters."""

    @field_validator("root")
    @classmethod
    def validate_name_length(cls, v: str) -> str:
        """Validate name is not blank and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > MAX_NAME_LENGTH:
            raise ValueError(f"Name must be 1-{MAX_NAME_LENGTH} characters")
        return v


class SignupInput(ValueObject):
    """Validated signup request."""

    name: DisplayName
    email: Email
    password: str


class Credentials(ValueObject):
    """Validated password login request."""

    email: Email
    password: str


class FederatedIdentity(ValueObject):
    """Identity asserted by the federated provider (already verified upstream)."""

    name: DisplayName
    email: Email


class PasswordResetInput(ValueObject):
    """Validated password reset completion request."""

    token: str
    new_password: str
