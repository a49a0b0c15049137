"""add job_runs table for rollover audit

Revision ID: 002
Revises: 001
Create Date: 2025-02-14

One row per monthly rollover run (cron, internal endpoint or admin action):
status, target period, counts and the first failure messages.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "job_runs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("job_type", sa.String(length=64), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("finished_at", sa.DateTime(), nullable=True),
        sa.Column("period", sa.String(length=16), nullable=True),
        sa.Column("entries_processed", sa.Integer(), nullable=True),
        sa.Column("entries_failed", sa.Integer(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_job_runs_job_type_started_at", "job_runs", ["job_type", "started_at"])


def downgrade() -> None:
    op.drop_index("ix_job_runs_job_type_started_at", table_name="job_runs", if_exists=True)
    op.drop_table("job_runs", if_exists=True)
