"""Application layer DI providers."""

from dishka import Scope, provide

from passage.application.usecase.account import (
    CompletePasswordResetUseCase,
    FederatedSignInUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    RequestPasswordResetUseCase,
    SignupUseCase,
)
from passage.domain.service import AccountService, InputValidator
from passage.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_signup_use_case(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> SignupUseCase:
        """Provide signup use case."""
        return SignupUseCase(
            input_validator=input_validator, account_service=account_service
        )

    @provide
    def get_login_use_case(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            input_validator=input_validator, account_service=account_service
        )

    @provide
    def get_federated_sign_in_use_case(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> FederatedSignInUseCase:
        """Provide federated sign-in use case."""
        return FederatedSignInUseCase(
            input_validator=input_validator, account_service=account_service
        )

    @provide
    def get_request_password_reset_use_case(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> RequestPasswordResetUseCase:
        """Provide request password reset use case."""
        return RequestPasswordResetUseCase(
            input_validator=input_validator, account_service=account_service
        )

    @provide
    def get_complete_password_reset_use_case(
        self, input_validator: InputValidator, account_service: AccountService
    ) -> CompletePasswordResetUseCase:
        """Provide complete password reset use case."""
        return CompletePasswordResetUseCase(
            input_validator=input_validator, account_service=account_service
        )

    @provide
    def get_current_user_use_case(
        self, account_service: AccountService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(account_service=account_service)
