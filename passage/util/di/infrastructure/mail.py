"""Mail infrastructure providers."""

from dishka import Scope, provide

from passage.adapter.mail import SmtpMailer
from passage.config import MailSettings, TimeoutSettings
from passage.domain.service import Mailer
from passage.util.di.base import ProviderBase


class MailProvider(ProviderBase):
    """Mail component base."""

    __mock_component__ = "mail"


class ProdMailProvider(MailProvider):
    """Production mail provider using SMTP."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_mailer(
        self, mail_settings: MailSettings, timeout_settings: TimeoutSettings
    ) -> Mailer:
        """Provide SMTP mailer.

        The socket timeout matches the send budget so a hung server does
        not keep a worker thread past the point the caller gave up.
        """
        return SmtpMailer(settings=mail_settings, timeout=timeout_settings.mail_seconds)
