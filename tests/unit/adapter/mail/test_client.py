"""Unit tests for the mail clients."""

import smtplib

import pytest

from passage.adapter.error import MailTransportError
from passage.adapter.mail import InMemoryMailer, SmtpMailer
from passage.config import MailSettings
from passage.domain.service import TransportError


class FakeSMTP:
    """Stands in for smtplib.SMTP and records the conversation."""

    instances: list["FakeSMTP"] = []
    refuse = False

    def __init__(self, host, port, timeout):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls: list[str] = []
        self.sent: list[tuple[str, list[str], str]] = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.calls.append("quit")
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(f"login:{username}")

    def sendmail(self, sender, recipients, message):
        if FakeSMTP.refuse:
            raise smtplib.SMTPRecipientsRefused({recipients[0]: (550, b"no")})
        self.sent.append((sender, recipients, message))


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.refuse = False
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    return FakeSMTP


class TestSmtpMailer:
    """Tests for SmtpMailer."""

    @pytest.mark.asyncio
    async def test_sends_html_message(self, fake_smtp):
        # Arrange
        settings = MailSettings(
            smtp_host="smtp.example.com",
            smtp_port=2525,
            username="mailer",
            password="pw",
            sender="no-reply@example.com",
        )
        mailer = SmtpMailer(settings, timeout=3.0)

        # Act
        await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")

        # Assert
        server = fake_smtp.instances[0]
        assert (server.host, server.port, server.timeout) == ("smtp.example.com", 2525, 3.0)
        assert server.calls == ["starttls", "login:mailer", "quit"]
        sender, recipients, message = server.sent[0]
        assert sender == "no-reply@example.com"
        assert recipients == ["alice@example.com"]
        assert "Subject: Hello" in message
        assert "text/html" in message

    @pytest.mark.asyncio
    async def test_skips_tls_and_login_when_not_configured(self, fake_smtp):
        mailer = SmtpMailer(MailSettings(use_tls=False), timeout=3.0)

        await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")

        assert fake_smtp.instances[0].calls == ["quit"]

    @pytest.mark.asyncio
    async def test_refusal_is_transport_error(self, fake_smtp):
        fake_smtp.refuse = True
        mailer = SmtpMailer(MailSettings(), timeout=3.0)

        with pytest.raises(MailTransportError) as exc_info:
            await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")

        assert isinstance(exc_info.value, TransportError)

    @pytest.mark.asyncio
    async def test_unreachable_server_is_transport_error(self, monkeypatch):
        def refuse_connection(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(smtplib, "SMTP", refuse_connection)
        mailer = SmtpMailer(MailSettings(), timeout=3.0)

        with pytest.raises(MailTransportError):
            await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")


class TestInMemoryMailer:
    """Tests for InMemoryMailer."""

    @pytest.mark.asyncio
    async def test_records_messages(self):
        mailer = InMemoryMailer()

        await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")

        assert mailer.outbox[0].to_address == "alice@example.com"

    @pytest.mark.asyncio
    async def test_fail_flag(self):
        mailer = InMemoryMailer()
        mailer.fail = True

        with pytest.raises(TransportError):
            await mailer.send("alice@example.com", "Hello", "<p>Hi</p>")

        assert mailer.outbox == []
