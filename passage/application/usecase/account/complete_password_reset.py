"""Complete password reset use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.service import AccountService, InputValidator


class CompletePasswordResetRequest(BaseModel):
    """Reset password request."""

    token: str | None = None
    new_password: str | None = None


class CompletePasswordResetResponse(BaseModel):
    """Reset password response."""

    message: str


class CompletePasswordResetUseCase(BaseUseCase):
    """Use case for setting a new password with a reset token."""

    def __init__(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> None:
        """Initialize complete password reset use case.

        Args:
            input_validator: Input validation domain service
            account_service: Account domain service
        """
        self.input_validator = input_validator
        self.account_service = account_service

    async def execute(
        self, request: CompletePasswordResetRequest
    ) -> CompletePasswordResetResponse:
        """Execute reset password flow.

        Raises:
            ValidationError: If the token or new password is missing or malformed
            InvalidOrExpiredTokenError: If the token is bad, expired, or used
        """
        reset = self.input_validator.validate_reset(request.token, request.new_password)
        await self.account_service.complete_password_reset(reset)
        return CompletePasswordResetResponse(message="Password has been reset")
