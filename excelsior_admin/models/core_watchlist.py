"""CoreWatchlist model: companies tracked on the admin core watchlist (soft-deletable)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Index, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from excelsior_admin.db.session import Base


class CoreWatchlist(Base):
    """One tracked company with its rolling 24-month trend window."""

    __tablename__ = "core_watchlist"

    __table_args__ = (
        Index(
            "uq_core_watchlist_company_active",
            "company",
            unique=True,
            postgresql_where=text("is_deleted = false"),
            sqlite_where=text("is_deleted = 0"),
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    analysis_link: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    sector: Mapped[str | None] = mapped_column(String(255), nullable=True)
    market_cap: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # [{"month_year": "Mar 2025", "trend": ""}, ...], most recent first
    market_trends: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=list
    )
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
