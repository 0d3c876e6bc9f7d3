"""PostgreSQL implementation of Account repository."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

import logfire
from sqlalchemy import and_, func, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from passage.domain.error import DuplicateAccountError, TransientError
from passage.domain.model import Account, AccountChanges
from passage.domain.repository import AccountRepository
from passage.domain.value import AccountId, Email
from passage.persistence.mappers import account_to_dict, row_to_account
from passage.persistence.tables import accounts_table

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


@asynccontextmanager
async def _connectivity_errors() -> AsyncIterator[None]:
    """Report lost or refused database connections as retryable."""
    try:
        yield
    except OperationalError as e:
        logfire.warn("Database unavailable", error_type=type(e.orig).__name__)
        raise TransientError("Database unavailable") from e


class PostgresAccountRepository(AccountRepository):
    """PostgreSQL implementation of AccountRepository.

    Uniqueness is enforced by the UNIQUE(email) constraint and reset
    completion by a single conditional UPDATE, so the guarantees hold
    across server processes.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, account_id: AccountId) -> Optional[Account]:
        """Find an account by ID.

        Args:
            account_id: Account ID to look up

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.id == account_id)
        async with _connectivity_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[Account]:
        """Find an account by its email.

        Args:
            email: Normalized email to search for

        Returns:
            Account if found, None otherwise
        """
        stmt = select(accounts_table).where(accounts_table.c.email == email.root)
        async with _connectivity_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def insert(self, account: Account) -> Account:
        """Insert a new account.

        The insert runs in a savepoint so a uniqueness violation leaves the
        surrounding transaction usable.

        Args:
            account: Account to create

        Returns:
            Stored account

        Raises:
            DuplicateAccountError: If the email is already taken
        """
        stmt = insert(accounts_table).values(**account_to_dict(account))
        try:
            async with _connectivity_errors():
                async with self.session.begin_nested():
                    await self.session.execute(stmt)
        except IntegrityError as e:
            if getattr(e.orig, "sqlstate", None) == UNIQUE_VIOLATION:
                raise DuplicateAccountError() from e
            raise
        return account

    async def upsert_federated(self, account: Account) -> Account:
        """Create a federated account or claim the existing one.

        Single INSERT ... ON CONFLICT (email) DO UPDATE statement.

        Args:
            account: Federated account to create if missing

        Returns:
            Stored account after the upsert
        """
        values = account_to_dict(account)
        values["is_federated"] = True
        stmt = insert(accounts_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[accounts_table.c.email],
            set_={
                "display_name": stmt.excluded.display_name,
                "is_federated": True,
                "updated_at": func.now(),
            },
        ).returning(accounts_table)
        async with _connectivity_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().one()
        return row_to_account(dict(row))

    async def update(self, email: Email, changes: AccountChanges) -> Optional[Account]:
        """Apply changes to the account with this email.

        Args:
            email: Account email
            changes: Fields to write

        Returns:
            Updated account, or None if no row matched
        """
        stmt = (
            update(accounts_table)
            .where(accounts_table.c.email == email.root)
            .values(**changes.as_dict(), updated_at=func.now())
            .returning(accounts_table)
        )
        async with _connectivity_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None

    async def update_conditionally(
        self,
        email: Email,
        expected_reset_token: str,
        now: datetime,
        changes: AccountChanges,
    ) -> Optional[Account]:
        """Apply changes only while the reset token is pending and unexpired.

        A concurrent second UPDATE waits on the row lock and then re-checks
        the WHERE clause, which no longer matches once the token is cleared.

        Args:
            email: Account email
            expected_reset_token: Token that must currently be stored
            now: Reference time for the expiry check
            changes: Fields to write

        Returns:
            Updated account, or None if the condition did not hold
        """
        stmt = (
            update(accounts_table)
            .where(
                and_(
                    accounts_table.c.email == email.root,
                    accounts_table.c.reset_token == expected_reset_token,
                    accounts_table.c.reset_token_expiry > now,
                )
            )
            .values(**changes.as_dict(), updated_at=func.now())
            .returning(accounts_table)
        )
        async with _connectivity_errors():
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_account(dict(row)) if row else None
