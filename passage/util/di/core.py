"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from passage.config import (
    APISettings,
    AuthSettings,
    MailSettings,
    Settings,
    TimeoutSettings,
    ValidationSettings,
)
from passage.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    A missing signing secret fails here, when the container first resolves
    Settings.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_validation_settings(self, settings: Settings) -> ValidationSettings:
        """Provide input validation settings."""
        return settings.validation

    @provide(scope=Scope.APP)
    def provide_timeout_settings(self, settings: Settings) -> TimeoutSettings:
        """Provide timeout settings."""
        return settings.timeouts

    @provide(scope=Scope.APP)
    def provide_mail_settings(self, settings: Settings) -> MailSettings:
        """Provide mail settings."""
        return settings.mail

    @provide(scope=Scope.APP)
    def provide_api_settings(self, settings: Settings) -> APISettings:
        """Provide API settings."""
        return settings.api
