"""Domain services."""

from .account_service import AccountService, AuthenticatedSession, Registration
from .base import Service
from .input_validator import InputValidator
from .notification_service import Mailer, NotificationService, TransportError
from .password_service import PasswordHasher
from .token_service import ResetToken, TokenService

__all__ = [
    "AccountService",
    "AuthenticatedSession",
    "InputValidator",
    "Mailer",
    "NotificationService",
    "PasswordHasher",
    "Registration",
    "ResetToken",
    "Service",
    "TokenService",
    "TransportError",
]
