"""Initial schema: core_watchlist table.

Revision ID: 001
Revises: 
Create Date: 2025-02-12

Tracked companies with a JSON trend window (24 monthly slots, most recent
first). Soft delete (is_deleted=true) allows re-adding a company; the partial
unique index prevents duplicate active entries.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "core_watchlist",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("company", sa.String(length=255), nullable=False),
        sa.Column("analysis_link", sa.String(length=2048), nullable=True),
        sa.Column("sector", sa.String(length=255), nullable=True),
        sa.Column("market_cap", sa.String(length=64), nullable=True),
        sa.Column(
            "market_trends",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("is_deleted", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column(
            "created",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "last_modified",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_core_watchlist_company_active",
        "core_watchlist",
        ["company"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
        sqlite_where=sa.text("is_deleted = 0"),
    )


def downgrade() -> None:
    op.drop_index(
        "uq_core_watchlist_company_active",
        table_name="core_watchlist",
        if_exists=True,
    )
    op.drop_table("core_watchlist", if_exists=True)
