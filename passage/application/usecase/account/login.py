"""Login use case."""

from pydantic import BaseModel

from passage.application.usecase.base import BaseUseCase
from passage.domain.model import UserProjection
from passage.domain.service import AccountService, InputValidator


class LoginRequest(BaseModel):
    """Password login request."""

    email: str | None = None
    password: str | None = None


class UserInfo(BaseModel):
    """Public user information. Never carries credentials."""

    id: str
    name: str
    email: str

    @classmethod
    def from_projection(cls, projection: UserProjection) -> "UserInfo":
        return cls(id=projection.id, name=projection.name, email=projection.email)


class LoginResponse(BaseModel):
    """Login response."""

    message: str
    token: str
    user: UserInfo


class LoginUseCase(BaseUseCase):
    """Use case for password login."""

    def __init__(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> None:
        """Initialize login use case.

        Args:
            input_validator: Input validation domain service
            account_service: Account domain service
        """
        self.input_validator = input_validator
        self.account_service = account_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute password login flow.

        Args:
            request: Email and password

        Returns:
            Session token and user information

        Raises:
            ValidationError: If a field is missing or malformed
            AccountNotFoundError: If no account uses this email
            FederatedAccountOnlyError: If the account must use federated sign-in
            InvalidCredentialsError: If the password does not match
        """
        credentials = self.input_validator.validate_login(
            request.email, request.password
        )
        session = await self.account_service.authenticate(credentials)
        return LoginResponse(
            message="Login successful",
            token=session.token,
            user=UserInfo.from_projection(UserProjection.from_account(session.account)),
        )
