"""Unit tests for domain error to HTTP mapping."""

import pytest

from passage.domain.error import (
    AccountNotFoundError,
    DomainError,
    DuplicateAccountError,
    FederatedAccountOnlyError,
    HashingError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidSessionError,
    NotificationError,
    SessionExpiredError,
    TransientError,
    ValidationError,
)
from passage.interface.error import status_code_for, to_http_exception


class TestStatusCodes:
    """Each domain error has a fixed status."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ValidationError("email", "Invalid email address"), 400),
            (DuplicateAccountError(), 409),
            (AccountNotFoundError(), 404),
            (FederatedAccountOnlyError(), 403),
            (InvalidCredentialsError(), 401),
            (InvalidOrExpiredTokenError(), 400),
            (InvalidSessionError(), 401),
            (SessionExpiredError(), 401),
            (NotificationError(), 502),
            (TransientError(), 503),
            (HashingError(), 500),
            (DomainError(), 500),
        ],
    )
    def test_status_for_error(self, error, code):
        assert status_code_for(error) == code


class TestToHTTPException:
    """Details carry only public messages."""

    def test_validation_detail_is_the_reason(self):
        exc = to_http_exception(ValidationError("password", "Password is required"))

        assert exc.status_code == 400
        assert exc.detail == "Password is required"

    def test_internal_detail_is_generic(self):
        exc = to_http_exception(HashingError("bcrypt ran out of memory"))

        assert exc.status_code == 500
        assert exc.detail == "Internal server error"

    def test_session_expired_detail(self):
        exc = to_http_exception(SessionExpiredError())

        assert exc.detail == "Session expired"
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_transient_is_retryable(self):
        exc = to_http_exception(TransientError("account lookup timed out"))

        assert exc.detail == "Service temporarily unavailable, please retry"
        assert "Retry-After" in exc.headers
