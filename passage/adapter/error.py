"""Infrastructure layer errors."""

from passage.domain.service.notification_service import TransportError


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class MailTransportError(AdapterError, TransportError):
    """SMTP server refused or could not be reached."""

    pass
