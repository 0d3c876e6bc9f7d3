"""Notification domain service."""

from html import escape
from urllib.parse import urlencode

import logfire

from passage.config import APISettings, TimeoutSettings
from passage.domain.error import NotificationError, TransientError
from passage.domain.model import Account

from .base import Service, bounded

RESET_SUBJECT = "Reset your password"


class TransportError(Exception):
    """The mail transport could not deliver a message."""

    pass


class Mailer:
    """Outbound email transport interface.

    Implementations make a single delivery attempt and raise
    TransportError on failure. Retrying is the caller's decision.
    """

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """Send an HTML email.

        Args:
            to_address: Recipient address
            subject: Subject line
            html_body: HTML message body

        Raises:
            TransportError: If delivery failed
        """
        raise NotImplementedError


class NotificationService(Service):
    """Domain service that composes and dispatches account emails."""

    def __init__(
        self,
        mailer: Mailer,
        api_settings: APISettings,
        timeout_settings: TimeoutSettings,
    ) -> None:
        """Initialize notification service.

        Args:
            mailer: Mail transport
            api_settings: API settings (frontend URL for links)
            timeout_settings: Upper bound for a single send
        """
        self.mailer = mailer
        self.frontend_url = api_settings.frontend_url
        self.timeout = timeout_settings.mail_seconds

    def reset_link(self, token: str) -> str:
        """Build the link the user follows to choose a new password.

        Args:
            token: Signed reset token

        Returns:
            ``<frontend>/reset-password?token=<token>``
        """
        return f"{self.frontend_url}/reset-password?{urlencode({'token': token})}"

    async def send_password_reset(self, account: Account, token: str) -> None:
        """Email a password reset link.

        Args:
            account: Account requesting the reset
            token: Signed reset token to embed in the link

        Raises:
            NotificationError: If the email could not be sent in time
        """
        link = self.reset_link(token)
        body = (
            f"<p>Hello {escape(account.display_name.root)},</p>"
            "<p>We received a request to reset your password. "
            "Click the link below to choose a new one:</p>"
            f'<p><a href="{escape(link)}">Reset password</a></p>'
            "<p>This link works once and expires soon. "
            "If you did not ask for a reset, you can ignore this email.</p>"
        )

        with logfire.span(
            "notification_service.send_password_reset", account_id=str(account.id)
        ):
            try:
                await bounded(
                    self.mailer.send(account.email.root, RESET_SUBJECT, body),
                    self.timeout,
                    "reset email",
                )
            except (TransportError, TransientError) as e:
                logfire.error(
                    "Reset email not sent; token remains valid",
                    account_id=str(account.id),
                    error=str(e),
                )
                raise NotificationError("Reset email could not be sent") from e

            logfire.info("Reset email sent", account_id=str(account.id))
