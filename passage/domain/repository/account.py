"""Account repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from passage.domain.model.account import Account, AccountChanges
from passage.domain.value import AccountId, Email


class AccountRepository(ABC):
    """Repository for the Account aggregate.

    Defines the contract for account persistence operations.
    Implementations live in the infrastructure layer.

    Correctness under concurrency comes from the storage primitives
    described on each method, not from locks held by callers.
    """

    @abstractmethod
    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: The account's unique identifier

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by its (normalized) email.

        Args:
            email: The account's email address

        Returns:
            The account if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        At most one of several concurrent inserts for the same email wins.

        Args:
            account: The account to create

        Returns:
            The stored account

        Raises:
            DuplicateAccountError: If an account with this email already exists
        """
        pass

    @abstractmethod
    async def upsert_federated(self, account: Account) -> Account:
        """Atomically create a federated account or claim an existing one.

        If no account exists for ``account.email``, ``account`` is inserted.
        Otherwise the existing row gets ``is_federated = true`` and the new
        display name; its id, password hash and reset fields are kept.

        Args:
            account: Federated account to create if missing

        Returns:
            The stored account after the upsert
        """
        pass

    @abstractmethod
    async def update(self, email: Email, changes: AccountChanges) -> Optional[Account]:
        """Apply changes to the account with this email.

        Args:
            email: The account's email address
            changes: Fields to write

        Returns:
            The updated account, or None if no account has this email
        """
        pass

    @abstractmethod
    async def update_conditionally(
        self,
        email: Email,
        expected_reset_token: str,
        now: datetime,
        changes: AccountChanges,
    ) -> Optional[Account]:
        """Apply changes only while the given reset token is still pending.

        The check and the write are a single atomic step: of two concurrent
        calls with the same token, at most one succeeds.

        Args:
            email: The account's email address
            expected_reset_token: Token that must currently be stored
            now: Reference time; the stored expiry must be later than this
            changes: Fields to write

        Returns:
            The updated account, or None if the condition did not hold
        """
        pass
