"""Account domain service.

Drives an email address through its authentication states:
NONE -> PASSWORD_AUTH -> FEDERATED, with a pending reset tracked alongside.
Same-email races are resolved by the repository's atomic primitives.
"""

from typing import Awaitable, Optional, TypeVar
from uuid import UUID, uuid4

import logfire
import pydantic

from passage.config import AuthSettings, TimeoutSettings
from passage.domain.error import (
    AccountNotFoundError,
    DuplicateAccountError,
    FederatedAccountOnlyError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    InvalidSessionError,
    SessionExpiredError,
)
from passage.domain.model import Account, AccountChanges
from passage.domain.repository import AccountRepository
from passage.domain.value import (
    AccountId,
    Credentials,
    Email,
    FederatedIdentity,
    PasswordResetInput,
    SignupInput,
    TokenPurpose,
)
from passage.domain.value.common import ValueObject
from passage.util.jwt import JWTError, TokenExpiredError

from .base import Service, bounded
from .notification_service import NotificationService
from .password_service import PasswordHasher
from .token_service import TokenService

T = TypeVar("T")


class Registration(ValueObject):
    """Outcome of a successful signup."""

    account: Account
    token: Optional[str] = None


class AuthenticatedSession(ValueObject):
    """Session token issued to an authenticated account."""

    account: Account
    token: str


class AccountService(Service):
    """Domain service for the account lifecycle."""

    def __init__(
        self,
        account_repository: AccountRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        notification_service: NotificationService,
        auth_settings: AuthSettings,
        timeout_settings: TimeoutSettings,
    ) -> None:
        """Initialize account service.

        Args:
            account_repository: Identity store
            password_hasher: Credential hasher
            token_service: Token issuer/verifier
            notification_service: Email dispatcher
            auth_settings: Signup token and disclosure policies
            timeout_settings: Upper bound for store calls
        """
        self.account_repository = account_repository
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.notification_service = notification_service
        self.auth_settings = auth_settings
        self.store_timeout = timeout_settings.store_seconds

    async def _store(self, call: Awaitable[T], operation: str) -> T:
        return await bounded(call, self.store_timeout, operation)

    async def register(self, signup: SignupInput) -> Registration:
        """Create a password account for an unused email.

        Args:
            signup: Validated signup input

        Returns:
            The new account, with a session token only when
            ``issue_token_on_signup`` is enabled

        Raises:
            DuplicateAccountError: If any account already uses this email
        """
        with logfire.span("account_service.register"):
            existing = await self._store(
                self.account_repository.find_by_email(signup.email), "account lookup"
            )
            if existing:
                logfire.warn("Signup for existing account", account_id=str(existing.id))
                raise DuplicateAccountError()

            password_hash = await self.password_hasher.hash(signup.password)
            account = Account(
                id=AccountId(uuid4()),
                display_name=signup.name,
                email=signup.email,
                password_hash=password_hash,
            )

            # The lookup above is only a fast path; the insert decides races
            try:
                stored = await self._store(
                    self.account_repository.insert(account), "account insert"
                )
            except DuplicateAccountError:
                logfire.warn("Concurrent signup lost the race")
                raise

            logfire.info("Account registered", account_id=str(stored.id))

            token = None
            if self.auth_settings.issue_token_on_signup:
                token = self.token_service.issue_session(stored)
            return Registration(account=stored, token=token)

    async def authenticate(self, credentials: Credentials) -> AuthenticatedSession:
        """Log in with email and password.

        Args:
            credentials: Validated email and password

        Returns:
            Session for the account

        Raises:
            AccountNotFoundError: If no account uses this email (when disclosed)
            FederatedAccountOnlyError: If the account has no usable password
            InvalidCredentialsError: If the password does not match
        """
        with logfire.span("account_service.authenticate"):
            account = await self._store(
                self.account_repository.find_by_email(credentials.email),
                "account lookup",
            )
            if not account:
                logfire.warn("Login for unknown account")
                if self.auth_settings.reveal_unknown_account_on_login:
                    raise AccountNotFoundError()
                await self.password_hasher.verify_dummy(credentials.password)
                raise InvalidCredentialsError()

            if account.is_federated or account.password_hash is None:
                logfire.warn(
                    "Password login refused for federated account",
                    account_id=str(account.id),
                )
                raise FederatedAccountOnlyError()

            if not await self.password_hasher.verify(
                credentials.password, account.password_hash
            ):
                logfire.warn("Password mismatch", account_id=str(account.id))
                raise InvalidCredentialsError()

            token = self.token_service.issue_session(account)
            logfire.info("Login succeeded", account_id=str(account.id))
            return AuthenticatedSession(account=account, token=token)

    async def federated_sign_in(self, identity: FederatedIdentity) -> AuthenticatedSession:
        """Sign in with an identity already verified by the provider.

        Creates a federated account, or claims the existing one for this
        email. Calling it again with the same identity changes nothing but
        the display name.

        Args:
            identity: Validated provider name and email

        Returns:
            Session for the account
        """
        with logfire.span("account_service.federated_sign_in"):
            candidate = Account(
                id=AccountId(uuid4()),
                display_name=identity.name,
                email=identity.email,
                is_federated=True,
            )
            account = await self._store(
                self.account_repository.upsert_federated(candidate),
                "federated upsert",
            )
            token = self.token_service.issue_session(account)
            logfire.info(
                "Federated sign-in succeeded",
                account_id=str(account.id),
                created=account.id == candidate.id,
            )
            return AuthenticatedSession(account=account, token=token)

    async def request_password_reset(self, email: Email) -> bool:
        """Start a password reset and email the link.

        A newer request replaces any pending token.

        Args:
            email: Validated email

        Returns:
            True if a reset email was sent, False if the email is unknown
            and the disclosure policy hides that

        Raises:
            AccountNotFoundError: If no account uses this email (when disclosed)
            NotificationError: If the email failed; the stored token stays valid
        """
        with logfire.span("account_service.request_password_reset"):
            account = await self._store(
                self.account_repository.find_by_email(email), "account lookup"
            )
            if not account:
                logfire.warn("Reset requested for unknown account")
                if self.auth_settings.reveal_unknown_account_on_reset:
                    raise AccountNotFoundError()
                # Signing work matches the known-account path; nothing is sent
                self.token_service.issue_reset_token(email)
                return False

            reset = self.token_service.issue_reset_token(email)
            updated = await self._store(
                self.account_repository.update(
                    email,
                    AccountChanges(
                        reset_token=reset.token,
                        reset_token_expiry=reset.expires_at,
                    ),
                ),
                "reset token update",
            )
            if not updated:
                raise AccountNotFoundError()

            logfire.info(
                "Reset token stored",
                account_id=str(updated.id),
                token_id=reset.token_id,
            )

            await self.notification_service.send_password_reset(updated, reset.token)
            return True

    async def complete_password_reset(self, reset: PasswordResetInput) -> Account:
        """Set a new password using a pending reset token.

        The token is consumed by the same conditional update that writes
        the new hash, so a token can succeed at most once.

        Args:
            reset: Validated token and new password

        Returns:
            Updated account

        Raises:
            InvalidOrExpiredTokenError: If the token is bad, expired, or used
        """
        with logfire.span("account_service.complete_password_reset"):
            try:
                payload = self.token_service.verify(
                    reset.token, TokenPurpose.PASSWORD_RESET
                )
                email = Email(payload.sub)
            except (JWTError, pydantic.ValidationError) as e:
                raise InvalidOrExpiredTokenError() from e

            password_hash = await self.password_hasher.hash(reset.new_password)
            updated = await self._store(
                self.account_repository.update_conditionally(
                    email,
                    expected_reset_token=reset.token,
                    now=self.token_service.now(),
                    changes=AccountChanges(
                        password_hash=password_hash,
                        reset_token=None,
                        reset_token_expiry=None,
                    ),
                ),
                "password reset update",
            )
            if not updated:
                logfire.warn("Reset token not pending", token_id=payload.jti)
                raise InvalidOrExpiredTokenError()

            logfire.info(
                "Password reset completed",
                account_id=str(updated.id),
                token_id=payload.jti,
            )
            return updated

    async def current_user(self, token: str) -> Account:
        """Resolve the account behind a session token.

        Args:
            token: Session token

        Returns:
            The account the token was issued to

        Raises:
            SessionExpiredError: If the token has expired
            InvalidSessionError: If the token is invalid or its account is gone
        """
        with logfire.span("account_service.current_user"):
            try:
                payload = self.token_service.verify(token, TokenPurpose.SESSION)
            except TokenExpiredError as e:
                raise SessionExpiredError() from e
            except (JWTError, pydantic.ValidationError) as e:
                raise InvalidSessionError() from e

            try:
                account_id = AccountId(UUID(payload.user_id or ""))
            except ValueError as e:
                raise InvalidSessionError() from e

            account = await self._store(
                self.account_repository.find_by_id(account_id), "account lookup"
            )
            if not account:
                logfire.warn("Session for missing account", account_id=str(account_id))
                raise InvalidSessionError()
            return account
