"""Federated sign-in use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.model import UserProjection
from passage.domain.service import AccountService, InputValidator

from .login import LoginResponse, UserInfo


class FederatedSignInRequest(BaseModel):
    """Identity asserted by the federated provider.

    The provider's ID token is verified upstream; only the resulting
    name and email reach this use case.
    """

    name: str | None = None
    email: str | None = None


class FederatedSignInUseCase(BaseUseCase):
    """Use case for Google sign-in."""

    def __init__(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> None:
        """Initialize federated sign-in use case.

        Args:
            input_validator: Input validation domain service
            account_service: Account domain service
        """
        self.input_validator = input_validator
        self.account_service = account_service

    async def execute(self, request: FederatedSignInRequest) -> LoginResponse:
        """Execute federated sign-in flow.

        Steps:
        1. Validate name and email
        2. Create or claim the account for this email
        3. Issue a session token

        Raises:
            ValidationError: If name or email is missing or malformed
        """
        identity = self.input_validator.validate_federated(request.name, request.email)
        session = await self.account_service.federated_sign_in(identity)
        return LoginResponse(
            message="Google sign-in successful",
            token=session.token,
            user=UserInfo.from_projection(UserProjection.from_account(session.account)),
        )
