"""Domain model entities."""

from passage.domain.model.account import Account, AccountChanges, UserProjection

__all__ = [
    "Account",
    "AccountChanges",
    "UserProjection",
]
