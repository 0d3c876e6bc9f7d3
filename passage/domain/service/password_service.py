"""Credential hashing domain service."""

import asyncio
import secrets

import logfire
from passlib.context import CryptContext

from passage.config import AuthSettings, TimeoutSettings
from passage.domain.error import HashingError

from .base import Service, bounded


class PasswordHasher(Service):
    """Salted, slow, one-way password hashing (bcrypt).

    Hashing is CPU-bound, so it runs in a worker thread to keep the event
    loop responsive. Plaintext passwords are never logged or put in errors.
    """

    def __init__(
        self, auth_settings: AuthSettings, timeout_settings: TimeoutSettings
    ) -> None:
        """Initialize password hasher.

        Args:
            auth_settings: Authentication settings (bcrypt cost factor)
            timeout_settings: Upper bound for a single hash or verify
        """
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=auth_settings.bcrypt_rounds,
        )
        self.timeout = timeout_settings.hasher_seconds
        # Random digest checked by verify_dummy; never stored
        self._dummy_digest = self.context.hash(secrets.token_urlsafe(16))

    async def hash(self, plaintext: str) -> str:
        """Hash a password.

        Args:
            plaintext: Password to hash

        Returns:
            bcrypt digest including salt and cost

        Raises:
            HashingError: If the system ran out of resources
            TransientError: If hashing exceeded its time budget
        """
        with logfire.span("password_hasher.hash"):
            try:
                return await bounded(
                    asyncio.to_thread(self.context.hash, plaintext),
                    self.timeout,
                    "password hashing",
                )
            except MemoryError as e:
                logfire.error("Password hashing failed", error_type="MemoryError")
                raise HashingError("Password hashing failed") from e

    async def verify(self, plaintext: str, digest: str) -> bool:
        """Check a password against a stored digest in constant time.

        Args:
            plaintext: Candidate password
            digest: Stored bcrypt digest

        Returns:
            True if the password matches. A malformed digest never matches.

        Raises:
            HashingError: If the system ran out of resources
            TransientError: If verification exceeded its time budget
        """
        with logfire.span("password_hasher.verify"):
            try:
                return await bounded(
                    asyncio.to_thread(self._verify, plaintext, digest),
                    self.timeout,
                    "password verification",
                )
            except MemoryError as e:
                logfire.error("Password verification failed", error_type="MemoryError")
                raise HashingError("Password verification failed") from e

    async def verify_dummy(self, plaintext: str) -> None:
        """Spend the time of a real verification without a stored digest.

        Raises:
            HashingError: If the system ran out of resources
            TransientError: If verification exceeded its time budget
        """
        await self.verify(plaintext, self._dummy_digest)

    def _verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self.context.verify(plaintext, digest)
        except ValueError:
            # Unrecognized or corrupt digest
            logfire.warn("Stored password digest is malformed")
            return False
