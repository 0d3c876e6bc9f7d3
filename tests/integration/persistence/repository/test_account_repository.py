"""Integration tests for PostgresAccountRepository.

Requires PostgreSQL at DATABASE__URL with migrations applied
(``python scripts/run_migrations.py``).
"""

import asyncio
import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from passage.domain.error import DuplicateAccountError
from passage.domain.model import Account, AccountChanges
from passage.domain.repository import AccountRepository
from passage.domain.value import AccountId, DisplayName, Email
from passage.persistence.repository import PostgresAccountRepository
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        "DATABASE__URL" not in os.environ, reason="DATABASE__URL not set"
    ),
]

# Integration test fixture - real PostgreSQL, in-memory mail
integration_env = create_env_fixture(unmock={"persistence"})


@pytest_asyncio.fixture(autouse=True)
async def clean_database(integration_env):
    """Clean database before each test."""
    session = await integration_env.get(AsyncSession)
    await session.execute(text("TRUNCATE TABLE accounts"))
    await session.commit()
    yield


def make_account(**overrides) -> Account:
    values = {
        "id": AccountId(uuid4()),
        "display_name": DisplayName("Alice"),
        "email": Email("alice@example.com"),
        "password_hash": "$2b$04$digest",
    }
    values.update(overrides)
    return Account(**values)


class TestPostgresAccountRepository:
    """Integration tests against a real database."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        account = make_account()

        await repo.insert(account)
        found = await repo.find_by_email(Email("alice@example.com"))

        assert found.id == account.id
        assert found.password_hash == "$2b$04$digest"
        assert found.is_federated is False

    @pytest.mark.asyncio
    async def test_duplicate_insert_leaves_session_usable(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        await repo.insert(make_account())

        with pytest.raises(DuplicateAccountError):
            await repo.insert(make_account())

        assert await repo.find_by_email(Email("alice@example.com")) is not None

    @pytest.mark.asyncio
    async def test_concurrent_inserts_one_winner(self, integration_env):
        """Separate sessions race on the unique constraint."""
        session_factory = await integration_env.get(async_sessionmaker[AsyncSession])

        async def attempt():
            async with session_factory() as session:
                repo = PostgresAccountRepository(session)
                await repo.insert(make_account())
                await session.commit()

        results = await asyncio.gather(*(attempt() for _ in range(5)), return_exceptions=True)

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 4
        assert all(isinstance(f, DuplicateAccountError) for f in failures)

    @pytest.mark.asyncio
    async def test_upsert_federated_claims_existing(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        existing = await repo.insert(make_account())

        stored = await repo.upsert_federated(
            make_account(display_name=DisplayName("Alice G"), password_hash=None)
        )

        assert stored.id == existing.id
        assert stored.is_federated is True
        assert stored.display_name.root == "Alice G"
        assert stored.password_hash == "$2b$04$digest"

    @pytest.mark.asyncio
    async def test_conditional_update_consumes_token_once(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        now = datetime.now(timezone.utc)
        await repo.insert(
            make_account(reset_token="t1", reset_token_expiry=now + timedelta(hours=1))
        )
        changes = AccountChanges(
            password_hash="new", reset_token=None, reset_token_expiry=None
        )

        first = await repo.update_conditionally(
            Email("alice@example.com"), "t1", now, changes
        )
        second = await repo.update_conditionally(
            Email("alice@example.com"), "t1", now, changes
        )

        assert first.password_hash == "new"
        assert first.reset_token is None
        assert second is None

    @pytest.mark.asyncio
    async def test_conditional_update_respects_expiry(self, integration_env):
        repo = await integration_env.get(AccountRepository)
        now = datetime.now(timezone.utc)
        await repo.insert(
            make_account(reset_token="t1", reset_token_expiry=now - timedelta(seconds=1))
        )

        updated = await repo.update_conditionally(
            Email("alice@example.com"),
            "t1",
            now,
            AccountChanges(password_hash="new", reset_token=None, reset_token_expiry=None),
        )

        assert updated is None
