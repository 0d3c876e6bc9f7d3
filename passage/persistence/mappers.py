"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from passage.domain.model import Account
from passage.domain.value import AccountId, DisplayName, Email


def row_to_account(row: Dict[str, Any]) -> Account:
    """Convert database row to Account domain model.

    Args:
        row: Database row as dict

    Returns:
        Account domain model
    """
    return Account(
        id=AccountId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        display_name=DisplayName(row["display_name"]),
        email=Email(row["email"]),
        password_hash=row.get("password_hash"),
        is_federated=row["is_federated"],
        reset_token=row.get("reset_token"),
        reset_token_expiry=row.get("reset_token_expiry"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def account_to_dict(account: Account) -> Dict[str, Any]:
    """Convert Account domain model to database dict.

    Args:
        account: Account domain model

    Returns:
        Column values for insert
    """
    return {
        "id": account.id,
        "display_name": account.display_name.root,
        "email": account.email.root,
        "password_hash": account.password_hash,
        "is_federated": account.is_federated,
        "reset_token": account.reset_token,
        "reset_token_expiry": account.reset_token_expiry,
        "created_at": account.created_at,
        "updated_at": account.updated_at,
    }
