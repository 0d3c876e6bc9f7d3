"""Unit tests for NotificationService."""

import asyncio
from uuid import uuid4

import pytest

from passage.adapter.mail import InMemoryMailer
from passage.config import APISettings
from passage.domain.error import NotificationError
from passage.domain.model import Account
from passage.domain.service import Mailer, NotificationService
from passage.domain.value import AccountId, DisplayName, Email
from tests.conftest import make_timeout_settings

API_SETTINGS = APISettings(
    host="api.example.com",
    port=443,
    protocol="https",
    frontend_host="app.example.com",
)


def make_account(name: str = "Alice") -> Account:
    return Account(
        id=AccountId(uuid4()),
        display_name=DisplayName(name),
        email=Email("alice@example.com"),
    )


class SlowMailer(Mailer):
    """Mailer that never finishes in time."""

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        await asyncio.sleep(10)


class TestSendPasswordReset:
    """Tests for NotificationService.send_password_reset()."""

    @pytest.mark.asyncio
    async def test_sends_link_to_frontend(self):
        # Arrange
        mailer = InMemoryMailer()
        service = NotificationService(mailer, API_SETTINGS, make_timeout_settings())

        # Act
        await service.send_password_reset(make_account(), "abc.def.ghi")

        # Assert
        assert len(mailer.outbox) == 1
        message = mailer.outbox[0]
        assert message.to_address == "alice@example.com"
        assert message.subject == "Reset your password"
        assert (
            "https://app.example.com/reset-password?token=abc.def.ghi"
            in message.html_body
        )

    @pytest.mark.asyncio
    async def test_display_name_is_escaped(self):
        mailer = InMemoryMailer()
        service = NotificationService(mailer, API_SETTINGS, make_timeout_settings())

        await service.send_password_reset(make_account("<b>Eve</b>"), "t")

        assert "<b>Eve</b>" not in mailer.outbox[0].html_body
        assert "&lt;b&gt;Eve&lt;/b&gt;" in mailer.outbox[0].html_body

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_notification_error(self):
        mailer = InMemoryMailer()
        mailer.fail = True
        service = NotificationService(mailer, API_SETTINGS, make_timeout_settings())

        with pytest.raises(NotificationError):
            await service.send_password_reset(make_account(), "t")

    @pytest.mark.asyncio
    async def test_timeout_becomes_notification_error(self):
        service = NotificationService(
            SlowMailer(), API_SETTINGS, make_timeout_settings(mail_seconds=0.01)
        )

        with pytest.raises(NotificationError):
            await service.send_password_reset(make_account(), "t")

    def test_reset_link_escapes_token(self):
        service = NotificationService(
            InMemoryMailer(), API_SETTINGS, make_timeout_settings()
        )

        link = service.reset_link("a+b/c=")

        assert link == "https://app.example.com/reset-password?token=a%2Bb%2Fc%3D"
