"""Core watchlist: rolling monthly trend ledger, market-cap parsing, queries, rollover job."""

from excelsior_admin.services.watchlist.ledger import RolloverResult, WatchlistLedger
from excelsior_admin.services.watchlist.market_cap import parse_market_cap
from excelsior_admin.services.watchlist.query_service import WatchlistQueryService
from excelsior_admin.services.watchlist.rollover_job import run_monthly_rollover
from excelsior_admin.services.watchlist.trend_window import (
    ALLOWED_TRENDS,
    TREND_WINDOW_MONTHS,
    TrendWindow,
    normalize_trend,
    period_label,
)

__all__ = [
    "ALLOWED_TRENDS",
    "RolloverResult",
    "TREND_WINDOW_MONTHS",
    "TrendWindow",
    "WatchlistLedger",
    "WatchlistQueryService",
    "normalize_trend",
    "parse_market_cap",
    "period_label",
    "run_monthly_rollover",
]
