"""SMTP mail client implementation."""

import asyncio
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import logfire
from pydantic import BaseModel

from passage.adapter.error import MailTransportError
from passage.config import MailSettings
from passage.domain.service.notification_service import Mailer


class SmtpMailer(Mailer):
    """Mailer that delivers through an SMTP relay.

    smtplib is blocking, so each send runs in a worker thread. One
    connection per message, no retries.
    """

    def __init__(self, settings: MailSettings, timeout: float) -> None:
        """Initialize SMTP mailer.

        Args:
            settings: SMTP host, credentials and sender address
            timeout: Socket timeout in seconds
        """
        self.settings = settings
        self.timeout = timeout

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """Send an HTML email.

        Raises:
            MailTransportError: If the server refused or could not be reached
        """
        message = MIMEMultipart("alternative")
        message["From"] = self.settings.sender
        message["To"] = to_address
        message["Subject"] = subject
        message.attach(MIMEText(html_body, "html"))

        with logfire.span("smtp_mailer.send", host=self.settings.smtp_host):
            try:
                await asyncio.to_thread(self._deliver, to_address, message)
            except (smtplib.SMTPException, OSError) as e:
                logfire.error(
                    "SMTP delivery failed",
                    host=self.settings.smtp_host,
                    error_type=type(e).__name__,
                )
                raise MailTransportError(f"SMTP delivery failed: {type(e).__name__}") from e

    def _deliver(self, to_address: str, message: MIMEMultipart) -> None:
        with smtplib.SMTP(
            self.settings.smtp_host, self.settings.smtp_port, timeout=self.timeout
        ) as server:
            if self.settings.use_tls:
                server.starttls()
            if self.settings.username and self.settings.password:
                server.login(self.settings.username, self.settings.password)
            server.sendmail(self.settings.sender, [to_address], message.as_string())


class SentMessage(BaseModel):
    """Message captured by the in-memory mailer."""

    to_address: str
    subject: str
    html_body: str


class InMemoryMailer(Mailer):
    """Mock mailer for testing.

    Records messages in ``outbox`` instead of sending them. Set
    ``fail = True`` to simulate a transport failure.
    """

    def __init__(self) -> None:
        self.outbox: list[SentMessage] = []
        self.fail = False

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """Record the message, or raise if told to fail.

        Raises:
            MailTransportError: If ``fail`` is set
        """
        if self.fail:
            raise MailTransportError("Simulated transport failure")
        self.outbox.append(
            SentMessage(to_address=to_address, subject=subject, html_body=html_body)
        )
