"""Signup use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.service import AccountService, InputValidator


class SignupRequest(BaseModel):
    """Signup request."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class SignupResponse(BaseModel):
    """Signup response."""

    message: str
    token: str | None = None  # Only when signup tokens are enabled


class SignupUseCase(BaseUseCase):
    """Use case for creating a password account."""

    def __init__(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> None:
        """Initialize signup use case.

        Args:
            input_validator: Input validation domain service
            account_service: Account domain service
        """
        self.input_validator = input_validator
        self.account_service = account_service

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Execute signup flow.

        Steps:
        1. Validate name, email and password
        2. Register the account (hashes the password)
        3. Return confirmation, plus a session token if enabled

        Args:
            request: Raw signup fields

        Returns:
            Confirmation message

        Raises:
            ValidationError: If any field is malformed
            DuplicateAccountError: If the email is already registered
        """
        signup = self.input_validator.validate_signup(
            request.name, request.email, request.password
        )
        registration = await self.account_service.register(signup)
        return SignupResponse(message="Signup successful", token=registration.token)
