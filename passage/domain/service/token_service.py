"""Token issuing and verification domain service."""

from datetime import datetime, timedelta
from typing import Callable

import logfire

from passage.config import AuthSettings
from passage.domain.model import Account
from passage.domain.model.account import utc_now
from passage.domain.value import Email, TokenPurpose
from passage.domain.value.common import ValueObject
from passage.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class ResetToken(ValueObject):
    """Signed password reset token and its expiry."""

    token: str
    token_id: str
    expires_at: datetime


class TokenService(Service):
    """Domain service for signed, time-bounded bearer tokens.

    Session tokens and reset tokens share the signing secret but carry a
    ``purpose`` claim, so one can never be used as the other.
    """

    def __init__(
        self,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings (secret, lifetimes)
            clock: Source of the current time
        """
        self.auth_settings = auth_settings
        self.clock = clock

    def now(self) -> datetime:
        """Current time according to this service's clock."""
        return self.clock()

    def issue_session(self, account: Account, ttl: timedelta | None = None) -> str:
        """Issue a session token for an authenticated account.

        Args:
            account: Authenticated account
            ttl: Lifetime, defaults to the configured session expiry

        Returns:
            Signed session token
        """
        if ttl is None:
            ttl = timedelta(days=self.auth_settings.session_expiry_days)
        with logfire.span("token_service.issue_session", account_id=str(account.id)):
            token, _, _ = create_token(
                subject=account.email.root,
                purpose=TokenPurpose.SESSION.value,
                ttl=ttl,
                settings=self.auth_settings,
                now=self.now(),
                extra_claims={
                    "user_id": str(account.id),
                    "name": account.display_name.root,
                },
            )
            logfire.info("Session token issued", account_id=str(account.id))
            return token

    def issue_reset_token(self, email: Email, ttl: timedelta | None = None) -> ResetToken:
        """Issue a single-use password reset token.

        Single use is enforced by storing the token on the account and
        clearing it on completion, not by the token itself.

        Args:
            email: Account email
            ttl: Lifetime, defaults to the configured reset expiry

        Returns:
            Reset token, its id and its expiry
        """
        if ttl is None:
            ttl = timedelta(minutes=self.auth_settings.reset_expiry_minutes)
        with logfire.span("token_service.issue_reset_token"):
            token, expires_at, token_id = create_token(
                subject=email.root,
                purpose=TokenPurpose.PASSWORD_RESET.value,
                ttl=ttl,
                settings=self.auth_settings,
                now=self.now(),
            )
            logfire.info(
                "Reset token issued",
                token_id=token_id,
                expires_at=expires_at.isoformat(),
            )
            return ResetToken(token=token, token_id=token_id, expires_at=expires_at)

    def verify(self, token: str, purpose: TokenPurpose) -> TokenPayload:
        """Verify a token and extract its claims.

        Args:
            token: Signed token
            purpose: Purpose the token must have been issued for

        Returns:
            Token payload

        Raises:
            TokenExpiredError: If the token has expired by this service's clock
            InvalidTokenError: If the signature or purpose does not match
        """
        with logfire.span("token_service.verify", purpose=purpose.value):
            try:
                payload = verify_token(
                    token, purpose.value, self.auth_settings, self.now()
                )
                logfire.info("Token verified", purpose=purpose.value)
                return payload
            except Exception as e:
                logfire.info(
                    "Token verification failed",
                    purpose=purpose.value,
                    reason=str(e),
                )
                raise
