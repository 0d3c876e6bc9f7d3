"""Domain layer DI providers."""

from dishka import Scope, provide

from passage.config import (
    APISettings,
    AuthSettings,
    TimeoutSettings,
    ValidationSettings,
)
from passage.domain.repository import AccountRepository
from passage.domain.service import (
    AccountService,
    InputValidator,
    Mailer,
    NotificationService,
    PasswordHasher,
    TokenService,
)
from passage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Stateless services are APP-scoped. Services that touch the repository
    are REQUEST-scoped to align with the session lifecycle.
    """

    @provide(scope=Scope.APP)
    def get_password_hasher(
        self, auth_settings: AuthSettings, timeout_settings: TimeoutSettings
    ) -> PasswordHasher:
        """Provide credential hasher."""
        return PasswordHasher(
            auth_settings=auth_settings, timeout_settings=timeout_settings
        )

    @provide(scope=Scope.APP)
    def get_token_service(self, auth_settings: AuthSettings) -> TokenService:
        """Provide token issuer/verifier."""
        return TokenService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_input_validator(
        self, validation_settings: ValidationSettings
    ) -> InputValidator:
        """Provide input validator."""
        return InputValidator(validation_settings=validation_settings)

    @provide(scope=Scope.APP)
    def get_notification_service(
        self,
        mailer: Mailer,
        api_settings: APISettings,
        timeout_settings: TimeoutSettings,
    ) -> NotificationService:
        """Provide notification dispatcher."""
        return NotificationService(
            mailer=mailer,
            api_settings=api_settings,
            timeout_settings=timeout_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_account_service(
        self,
        account_repository: AccountRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        notification_service: NotificationService,
        auth_settings: AuthSettings,
        timeout_settings: TimeoutSettings,
    ) -> AccountService:
        """Provide account domain service."""
        return AccountService(
            account_repository=account_repository,
            password_hasher=password_hasher,
            token_service=token_service,
            notification_service=notification_service,
            auth_settings=auth_settings,
            timeout_settings=timeout_settings,
        )
