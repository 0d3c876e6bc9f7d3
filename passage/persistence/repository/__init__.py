"""PostgreSQL repository implementations."""

from passage.persistence.repository.account import PostgresAccountRepository

__all__ = [
    "PostgresAccountRepository",
]
