"""In-memory account repository for testing."""

from datetime import datetime
from typing import Optional

from passage.domain.error import DuplicateAccountError
from passage.domain.model.account import Account, AccountChanges, utc_now
from passage.domain.repository.account import AccountRepository
from passage.domain.value import AccountId, Email


class InMemoryAccountRepository(AccountRepository):
    """In-memory implementation of AccountRepository for testing.

    No method awaits between reading and writing the dict, so each call
    is atomic with respect to other coroutines on the same event loop.
    """

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID."""
        for account in self._accounts.values():
            if account.id == account_id:
                return account
        return None

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by its email."""
        return self._accounts.get(email.root)

    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        Raises:
            DuplicateAccountError: If an account with this email already exists
        """
        if account.email.root in self._accounts:
            raise DuplicateAccountError()
        self._accounts[account.email.root] = account
        return account

    async def upsert_federated(self, account: Account) -> Account:
        """Create a federated account or claim the existing one."""
        existing = self._accounts.get(account.email.root)
        if existing is None:
            stored = account.model_copy(update={"is_federated": True})
        else:
            stored = existing.model_copy(
                update={
                    "display_name": account.display_name,
                    "is_federated": True,
                    "updated_at": utc_now(),
                }
            )
        self._accounts[account.email.root] = stored
        return stored

    async def update(self, email: Email, changes: AccountChanges) -> Optional[Account]:
        """Apply changes to the account with this email."""
        existing = self._accounts.get(email.root)
        if existing is None:
            return None
        updated = self._apply(existing, changes)
        self._accounts[email.root] = updated
        return updated

    async def update_conditionally(
        self,
        email: Email,
        expected_reset_token: str,
        now: datetime,
        changes: AccountChanges,
    ) -> Optional[Account]:
        """Apply changes only while the reset token is pending and unexpired."""
        existing = self._accounts.get(email.root)
        if (
            existing is None
            or existing.reset_token != expected_reset_token
            or existing.reset_token_expiry is None
            or existing.reset_token_expiry <= now
        ):
            return None
        updated = self._apply(existing, changes)
        self._accounts[email.root] = updated
        return updated

    def count(self) -> int:
        """Number of stored accounts."""
        return len(self._accounts)

    @staticmethod
    def _apply(account: Account, changes: AccountChanges) -> Account:
        update = changes.as_update()
        update["updated_at"] = utc_now()
        # Re-validate so the paired reset fields invariant is checked
        return Account.model_validate({**dict(account), **update})
