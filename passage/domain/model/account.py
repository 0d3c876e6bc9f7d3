"""Account aggregate root.

One account per email address. An account is created either by password
signup or by the first federated sign-in for that email.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from passage.domain.model.common import DomainModel
from passage.domain.value import AccountId, AccountState, DisplayName, Email


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class Account(DomainModel):
    """User identity record.

    Business rules:
    - Email is unique across all accounts
    - No password hash means password login is impossible
    - reset_token and reset_token_expiry are set and cleared together
    - Once federated, always federated; an older password hash may remain
      but is never used for login
    """

    id: AccountId
    display_name: DisplayName
    email: Email
    password_hash: Optional[str] = Field(default=None, repr=False)
    is_federated: bool = False
    reset_token: Optional[str] = Field(default=None, repr=False)
    reset_token_expiry: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def reset_fields_paired(self) -> "Account":
        """Reset token and its expiry must be present together."""
        if (self.reset_token is None) != (self.reset_token_expiry is None):
            raise ValueError("reset_token and reset_token_expiry must be set together")
        return self

    @property
    def state(self) -> AccountState:
        """Authentication state of this record."""
        if self.is_federated:
            return AccountState.FEDERATED
        return AccountState.PASSWORD_AUTH

    @property
    def has_pending_reset(self) -> bool:
        return self.reset_token is not None

    @property
    def can_login_with_password(self) -> bool:
        return not self.is_federated and self.password_hash is not None


class AccountChanges(DomainModel):
    """Partial update to an account.

    Only fields that were explicitly set are written, so passing
    ``reset_token=None`` clears the column while omitting it leaves it alone.
    """

    display_name: Optional[DisplayName] = None
    password_hash: Optional[str] = Field(default=None, repr=False)
    is_federated: Optional[bool] = None
    reset_token: Optional[str] = Field(default=None, repr=False)
    reset_token_expiry: Optional[datetime] = None

    def as_dict(self) -> dict:
        """Explicitly set fields as primitive values."""
        return self.model_dump(exclude_unset=True)

    def as_update(self) -> dict:
        """Explicitly set fields as domain values, for model_copy(update=...)."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class UserProjection(DomainModel):
    """Safe public view of an account. Never includes credentials."""

    id: str
    name: str
    email: str

    @classmethod
    def from_account(cls, account: Account) -> "UserProjection":
        return cls(
            id=str(account.id),
            name=account.display_name.root,
            email=account.email.root,
        )
