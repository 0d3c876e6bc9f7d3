"""Get current user use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.model import UserProjection
from passage.domain.service import AccountService

from .login import UserInfo


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Session token


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the current authenticated user."""

    def __init__(self, account_service: AccountService) -> None:
        """Initialize get current user use case.

        Args:
            account_service: Account domain service
        """
        self.account_service = account_service

    async def execute(self, request: GetCurrentUserRequest) -> UserInfo:
        """Resolve the session token to its user.

        Raises:
            SessionExpiredError: If the session has expired
            InvalidSessionError: If the token is invalid
        """
        account = await self.account_service.current_user(request.token)
        return UserInfo.from_projection(UserProjection.from_account(account))
