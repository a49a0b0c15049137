"""Pydantic schemas for request/response validation."""

from excelsior_admin.schemas.common import PagedResponse, ResponseEnvelope
from excelsior_admin.schemas.watchlist import (
    CoreWatchlistCreate,
    CoreWatchlistRead,
    CoreWatchlistUpdate,
    MonthlyTrendRead,
    RolloverSummary,
    TrendUpdateRequest,
)

__all__ = [
    "CoreWatchlistCreate",
    "CoreWatchlistRead",
    "CoreWatchlistUpdate",
    "MonthlyTrendRead",
    "PagedResponse",
    "ResponseEnvelope",
    "RolloverSummary",
    "TrendUpdateRequest",
]
