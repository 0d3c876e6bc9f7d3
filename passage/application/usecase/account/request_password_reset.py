"""Request password reset use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.service import AccountService, InputValidator

RESET_SENT_MESSAGE = "Password reset email sent"


class RequestPasswordResetRequest(BaseModel):
    """Forgot password request."""

    email: str | None = None


class RequestPasswordResetResponse(BaseModel):
    """Forgot password response."""

    message: str


class RequestPasswordResetUseCase(BaseUseCase):
    """Use case for emailing a password reset link."""

    def __init__(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> None:
        """Initialize request password reset use case.

        Args:
            input_validator: Input validation domain service
            account_service: Account domain service
        """
        self.input_validator = input_validator
        self.account_service = account_service

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> RequestPasswordResetResponse:
        """Execute forgot password flow.

        The response is the same whether or not an email went out when
        the disclosure policy hides unknown accounts.

        Raises:
            ValidationError: If the email is missing or malformed
            AccountNotFoundError: If no account uses this email (when disclosed)
            NotificationError: If the reset email could not be sent
        """
        email = self.input_validator.validate_email(request.email)
        await self.account_service.request_password_reset(email)
        return RequestPasswordResetResponse(message=RESET_SENT_MESSAGE)
