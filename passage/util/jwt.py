"""JWT token utilities."""

import secrets
from datetime import datetime, timedelta
from typing import Any

import jwt
from pydantic import BaseModel, ValidationError

from passage.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str  # Subject email
    purpose: str
    iat: datetime
    exp: datetime
    jti: str
    user_id: str | None = None
    name: str | None = None


class JWTError(Exception):
    """JWT-related error."""

    pass


class TokenExpiredError(JWTError):
    """Token signature is valid but its expiry has passed."""

    pass


class InvalidTokenError(JWTError):
    """Token is malformed, tampered with, or meant for another purpose."""

    pass


def create_token(
    subject: str,
    purpose: str,
    ttl: timedelta,
    settings: AuthSettings,
    now: datetime,
    extra_claims: dict[str, Any] | None = None,
) -> tuple[str, datetime, str]:
    """Create a signed JWT.

    Args:
        subject: Subject email
        purpose: Token purpose ("session" or "password_reset")
        ttl: Lifetime of the token
        settings: Authentication settings
        now: Issue time (timezone-aware)
        extra_claims: Additional claims to embed

    Returns:
        Tuple of (encoded token, expiry, token id)
    """
    expiry = now + ttl
    token_id = secrets.token_urlsafe(16)

    payload: dict[str, Any] = {
        "sub": subject,
        "purpose": purpose,
        "iat": now,
        "exp": expiry,
        # Unique per token so two tokens issued in the same second differ
        "jti": token_id,
    }
    if extra_claims:
        payload.update(extra_claims)

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return token, expiry, token_id


def verify_token(
    token: str, purpose: str, settings: AuthSettings, now: datetime
) -> TokenPayload:
    """Verify and decode a JWT token.

    Expiry is checked against ``now`` rather than the wall clock, so the
    caller's clock decides.

    Args:
        token: JWT token to verify
        purpose: Purpose the token must have been issued for
        settings: Authentication settings
        now: Current time (timezone-aware)

    Returns:
        Token payload if valid

    Raises:
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is invalid or has the wrong purpose
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={
                "require": ["exp", "iat", "sub", "jti"],
                "verify_exp": False,
                "verify_iat": False,
            },
        )
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Invalid token")

    if claims.get("purpose") != purpose:
        raise InvalidTokenError("Invalid token")

    try:
        payload = TokenPayload(**claims)
    except ValidationError:
        raise InvalidTokenError("Invalid token")

    if payload.exp <= now:
        raise TokenExpiredError("Token has expired")

    return payload
