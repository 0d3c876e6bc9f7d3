"""SQLAlchemy table definitions.

These table definitions are used with SQLAlchemy Core statements.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Index,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (one row per email)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("display_name", String(255), nullable=False),
    Column("email", String(320), nullable=False, unique=True),  # Lower-cased
    Column("password_hash", String(255), nullable=True),  # NULL for federated-only
    Column("is_federated", Boolean, nullable=False, server_default="false"),
    Column("reset_token", Text, nullable=True),
    Column("reset_token_expiry", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "(reset_token IS NULL) = (reset_token_expiry IS NULL)",
        name="reset_fields_paired",
    ),
)

Index("idx_accounts_reset_token", accounts_table.c.reset_token)
