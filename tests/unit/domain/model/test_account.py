"""Unit tests for the Account aggregate."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pydantic
import pytest

from passage.domain.model import Account, AccountChanges, UserProjection
from passage.domain.value import AccountId, AccountState, DisplayName, Email


def make_account(**overrides) -> Account:
    values = {
        "id": AccountId(uuid4()),
        "display_name": DisplayName("Alice"),
        "email": Email("alice@example.com"),
        "password_hash": "$2b$04$digest",
    }
    values.update(overrides)
    return Account(**values)


class TestAccount:
    """Tests for Account invariants and derived state."""

    def test_password_account_state(self):
        account = make_account()

        assert account.state == AccountState.PASSWORD_AUTH
        assert account.can_login_with_password
        assert not account.has_pending_reset

    def test_federated_account_state(self):
        account = make_account(is_federated=True)

        assert account.state == AccountState.FEDERATED
        assert not account.can_login_with_password

    def test_account_without_hash_cannot_use_password(self):
        account = make_account(password_hash=None)

        assert not account.can_login_with_password

    def test_reset_fields_must_be_paired(self):
        with pytest.raises(pydantic.ValidationError):
            make_account(reset_token="token")

        with pytest.raises(pydantic.ValidationError):
            make_account(reset_token_expiry=datetime.now(timezone.utc))

    def test_pending_reset(self):
        account = make_account(
            reset_token="token",
            reset_token_expiry=datetime.now(timezone.utc) + timedelta(hours=1),
        )

        assert account.has_pending_reset

    def test_repr_hides_credentials(self):
        account = make_account(
            reset_token="reset-token-value",
            reset_token_expiry=datetime.now(timezone.utc),
        )

        assert "$2b$04$digest" not in repr(account)
        assert "reset-token-value" not in repr(account)


class TestAccountChanges:
    """Tests for partial updates."""

    def test_only_set_fields_are_written(self):
        changes = AccountChanges(password_hash="new")

        assert changes.as_dict() == {"password_hash": "new"}

    def test_explicit_none_clears_field(self):
        changes = AccountChanges(reset_token=None, reset_token_expiry=None)

        assert changes.as_dict() == {"reset_token": None, "reset_token_expiry": None}

    def test_as_update_keeps_domain_values(self):
        changes = AccountChanges(display_name=DisplayName("Bob"))

        assert changes.as_update() == {"display_name": DisplayName("Bob")}
        assert changes.as_dict() == {"display_name": "Bob"}


class TestUserProjection:
    """Tests for the public user view."""

    def test_projection_has_no_credentials(self):
        account = make_account()

        projection = UserProjection.from_account(account)

        assert projection.model_dump() == {
            "id": str(account.id),
            "name": "Alice",
            "email": "alice@example.com",
        }
