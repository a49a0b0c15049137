"""JobRun model."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from excelsior_admin.db.session import Base


class JobRun(Base):
    """Records for scheduled/internal jobs (monthly watchlist rollover)."""

    __tablename__ = "job_runs"

    __table_args__ = (Index("ix_job_runs_job_type_started_at", "job_type", "started_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_type: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), nullable=False
    )
    finished_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    # Rollover period label the job targeted, e.g. "Mar 2025"
    period: Mapped[str | None] = mapped_column(String(16), nullable=True)
    entries_processed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    entries_failed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
