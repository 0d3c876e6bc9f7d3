"""create_accounts_table

Create the accounts table: one row per email address, covering password
accounts, federated accounts and pending password resets.

Revision ID: 3c1f9a7d2e40
Revises:
Create Date: 2026-10-17 09:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),  # Lower-cased
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column(
            "is_federated", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("reset_token", sa.Text(), nullable=True),
        sa.Column("reset_token_expiry", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="accounts_email_key"),
        sa.CheckConstraint(
            "(reset_token IS NULL) = (reset_token_expiry IS NULL)",
            name="reset_fields_paired",
        ),
    )

    op.create_index("idx_accounts_reset_token", "accounts", ["reset_token"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_accounts_reset_token", table_name="accounts")
    op.drop_table("accounts")
