"""Core watchlist schemas for request/response validation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CoreWatchlistCreate(BaseModel):
    """Schema for adding a company to the core watchlist."""

    company: str = Field(..., min_length=1, max_length=255)
    analysis_link: str | None = Field(None, max_length=2048)
    sector: str | None = Field(None, max_length=255)
    market_cap: str | None = Field(None, max_length=64)  # e.g. "2.3B", "500M"


class CoreWatchlistUpdate(BaseModel):
    """Schema for a partial update. Omitted, null or empty fields are left unchanged."""

    company: str | None = Field(None, max_length=255)
    analysis_link: str | None = Field(None, max_length=2048)
    sector: str | None = Field(None, max_length=255)
    market_cap: str | None = Field(None, max_length=64)


class TrendUpdateRequest(BaseModel):
    """Set the current month's trend for a company (STRONG/MEDIUM/WEAK or empty, any case)."""

    company: str = Field(..., min_length=1, max_length=255)
    trend: str | None = Field(None, max_length=16)


class MonthlyTrendRead(BaseModel):
    """One month of the trend window."""

    month_year: str
    trend: str


class CoreWatchlistRead(BaseModel):
    """Schema for reading a core watchlist entry (response)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    company: str
    analysis_link: str | None = None
    sector: str | None = None
    market_cap: str | None = None
    market_trends: list[MonthlyTrendRead]
    created: datetime
    last_modified: datetime


class RolloverSummary(BaseModel):
    """Result of a monthly rollover run."""

    status: str
    job_run_id: int | None = None
    period: str | None = None
    rollover_status: str | None = None  # updated | already_up_to_date | partial
    entries_scanned: int = 0
    entries_rolled: int = 0
    entries_failed: int = 0
    message: str | None = None
    error: str | None = None
