"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, HTTPException, status

from passage.application.usecase.account import (
    CompletePasswordResetUseCase,
    FederatedSignInUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    SignupUseCase,
)
from passage.application.usecase.account.complete_password_reset import (
    CompletePasswordResetRequest,
    CompletePasswordResetResponse,
)
from passage.application.usecase.account.federated_sign_in import (
    FederatedSignInRequest,
)
from passage.application.usecase.account.get_current_user import (
    GetCurrentUserRequest,
)
from passage.application.usecase.account.login import (
    LoginRequest,
    LoginResponse,
    UserInfo,
)
from passage.application.usecase.account.request_password_reset import (
    RequestPasswordResetRequest,
    RequestPasswordResetResponse,
)
from passage.application.usecase.account.signup import SignupRequest, SignupResponse
from passage.domain.error import DomainError
from passage.interface.error import to_http_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def signup(
    request: SignupRequest,
    signup_use_case: FromDishka[SignupUseCase],
) -> SignupResponse:
    """Create a password account.

    Returns:
        Confirmation message, and a session token if signup tokens are enabled

    Raises:
        HTTPException: 400 on invalid input, 409 if the email is taken
    """
    try:
        return await signup_use_case.execute(request)
    except DomainError as e:
        logger.info("Signup failed: %s", type(e).__name__)
        raise to_http_exception(e) from e


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> LoginResponse:
    """Log in with email and password.

    Returns:
        Session token and user information

    Raises:
        HTTPException: 400, 401, 403 or 404 depending on the failure
    """
    try:
        return await login_use_case.execute(request)
    except DomainError as e:
        logger.info("Login failed: %s", type(e).__name__)
        raise to_http_exception(e) from e


@router.post("/google-signin", response_model=LoginResponse)
async def google_signin(
    request: FederatedSignInRequest,
    federated_sign_in_use_case: FromDishka[FederatedSignInUseCase],
) -> LoginResponse:
    """Sign in with a Google identity verified by the client.

    Returns:
        Session token and user information
    """
    try:
        return await federated_sign_in_use_case.execute(request)
    except DomainError as e:
        logger.info("Google sign-in failed: %s", type(e).__name__)
        raise to_http_exception(e) from e


@router.post("/forgot-password", response_model=RequestPasswordResetResponse)
async def forgot_password(
    request: RequestPasswordResetRequest,
    request_password_reset_use_case: FromDishka[RequestPasswordResetUseCase],
) -> RequestPasswordResetResponse:
    """Email a password reset link.

    Raises:
        HTTPException: 404 for unknown emails (when disclosed), 502 if the
            email could not be sent
    """
    try:
        return await request_password_reset_use_case.execute(request)
    except DomainError as e:
        logger.info("Forgot password failed: %s", type(e).__name__)
        raise to_http_exception(e) from e


@router.post("/reset-password", response_model=CompletePasswordResetResponse)
async def reset_password(
    request: CompletePasswordResetRequest,
    complete_password_reset_use_case: FromDishka[CompletePasswordResetUseCase],
) -> CompletePasswordResetResponse:
    """Set a new password with a reset token.

    Raises:
        HTTPException: 400 if the token is invalid, expired or already used
    """
    try:
        return await complete_password_reset_use_case.execute(request)
    except DomainError as e:
        logger.info("Reset password failed: %s", type(e).__name__)
        raise to_http_exception(e) from e


@router.get("/me", response_model=UserInfo)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    authorization: str | None = Header(default=None),
) -> UserInfo:
    """Get the user behind a Bearer session token.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=token.strip())
        )
    except DomainError as e:
        logger.info("Session rejected: %s", type(e).__name__)
        raise to_http_exception(e) from e
