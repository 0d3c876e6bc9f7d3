"""Account use cases."""

from .complete_password_reset import CompletePasswordResetUseCase
from .federated_sign_in import FederatedSignInUseCase
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase
from .request_password_reset import RequestPasswordResetUseCase
from .signup import SignupUseCase

__all__ = [
    "CompletePasswordResetUseCase",
    "FederatedSignInUseCase",
    "GetCurrentUserUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "SignupUseCase",
]
