"""Mock mail providers for testing."""

from dishka import Scope, provide

from passage.adapter.mail import InMemoryMailer
from passage.domain.service import Mailer
from passage.util.di.infrastructure.mail import MailProvider


class MockMailProvider(MailProvider):
    """Mock mail provider that records messages instead of sending them.

    Tests fetch ``Mailer`` from the container to read the outbox.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_mailer(self) -> Mailer:
        """Provide in-memory mailer."""
        return InMemoryMailer()
