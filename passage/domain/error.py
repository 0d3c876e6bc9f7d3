"""Domain layer errors.

Every error carries a ``public_message`` that is safe to show to the
caller: it never contains passwords, hashes or token values.
"""


class DomainError(Exception):
    """Base domain error."""

    public_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class ValidationError(DomainError):
    """Malformed input. Raised before anything reaches storage."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return self.reason


class DuplicateAccountError(DomainError):
    """An account already exists for this email."""

    public_message = "An account with this email already exists"


class AccountNotFoundError(DomainError):
    """No account exists for this email."""

    public_message = "User not found"


class FederatedAccountOnlyError(DomainError):
    """Password login refused for an account claimed by federated sign-in."""

    public_message = "Use Google Sign-In instead"


class InvalidCredentialsError(DomainError):
    """Password does not match."""

    public_message = "Invalid email or password"


class InvalidOrExpiredTokenError(DomainError):
    """Reset token is invalid, expired, or already consumed.

    The three cases are deliberately indistinguishable to the caller.
    """

    public_message = "Invalid or expired token"


class NotificationError(DomainError):
    """A side effect (email) failed after state had already changed."""

    public_message = "Could not send email, please try again later"


class TransientError(DomainError):
    """Timeout or connectivity failure. Safe to retry."""

    public_message = "Service temporarily unavailable, please retry"


class HashingError(DomainError):
    """Password hashing failed for lack of resources."""

    public_message = "Internal server error"


class InternalError(DomainError):
    """Anything unanticipated."""

    public_message = "Internal server error"


class InvalidSessionError(DomainError):
    """Session token is malformed, tampered with, or names no account."""

    public_message = "Invalid session"


class SessionExpiredError(InvalidSessionError):
    """Session token signature is valid but it has expired."""

    public_message = "Session expired"
