"""Unit tests for InMemoryAccountRepository."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pydantic
import pytest

from passage.domain.error import DuplicateAccountError
from passage.domain.model import Account, AccountChanges
from passage.domain.value import AccountId, DisplayName, Email
from passage.persistence.repository.inmemory import InMemoryAccountRepository


def make_account(email: str = "alice@example.com", **overrides) -> Account:
    values = {
        "id": AccountId(uuid4()),
        "display_name": DisplayName("Alice"),
        "email": Email(email),
        "password_hash": "$2b$04$digest",
    }
    values.update(overrides)
    return Account(**values)


class TestInsertAndFind:
    """Tests for insert() and the finders."""

    @pytest.mark.asyncio
    async def test_insert_then_find(self):
        repo = InMemoryAccountRepository()
        account = make_account()

        await repo.insert(account)

        assert await repo.find_by_email(Email("alice@example.com")) == account
        assert await repo.find_by_id(account.id) == account

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self):
        repo = InMemoryAccountRepository()

        assert await repo.find_by_email(Email("nobody@example.com")) is None
        assert await repo.find_by_id(AccountId(uuid4())) is None

    @pytest.mark.asyncio
    async def test_duplicate_insert_is_rejected(self):
        repo = InMemoryAccountRepository()
        await repo.insert(make_account())

        with pytest.raises(DuplicateAccountError):
            await repo.insert(make_account())

        assert repo.count() == 1


class TestUpsertFederated:
    """Tests for upsert_federated()."""

    @pytest.mark.asyncio
    async def test_creates_when_missing(self):
        repo = InMemoryAccountRepository()
        candidate = make_account(password_hash=None)

        stored = await repo.upsert_federated(candidate)

        assert stored.id == candidate.id
        assert stored.is_federated is True

    @pytest.mark.asyncio
    async def test_keeps_identity_and_hash_of_existing(self):
        repo = InMemoryAccountRepository()
        existing = await repo.insert(make_account())

        stored = await repo.upsert_federated(
            make_account(display_name=DisplayName("Alice G"), password_hash=None)
        )

        assert stored.id == existing.id
        assert stored.password_hash == existing.password_hash
        assert stored.display_name.root == "Alice G"
        assert stored.is_federated is True


class TestUpdateConditionally:
    """Tests for update_conditionally()."""

    @pytest.mark.asyncio
    async def test_applies_when_token_matches(self):
        repo = InMemoryAccountRepository()
        now = datetime.now(timezone.utc)
        await repo.insert(
            make_account(reset_token="t1", reset_token_expiry=now + timedelta(hours=1))
        )

        updated = await repo.update_conditionally(
            Email("alice@example.com"),
            expected_reset_token="t1",
            now=now,
            changes=AccountChanges(
                password_hash="new", reset_token=None, reset_token_expiry=None
            ),
        )

        assert updated.password_hash == "new"
        assert updated.reset_token is None

    @pytest.mark.asyncio
    async def test_second_call_finds_token_consumed(self):
        repo = InMemoryAccountRepository()
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

        assert first is not None
        assert second is None

    @pytest.mark.asyncio
    async def test_expired_token_does_not_match(self):
        repo = InMemoryAccountRepository()
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
        stored = await repo.find_by_email(Email("alice@example.com"))
        assert stored.password_hash == "$2b$04$digest"

    @pytest.mark.asyncio
    async def test_update_rejects_unpaired_reset_fields(self):
        repo = InMemoryAccountRepository()
        await repo.insert(make_account())

        with pytest.raises(pydantic.ValidationError):
            await repo.update(Email("alice@example.com"), AccountChanges(reset_token="t"))
