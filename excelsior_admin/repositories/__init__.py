"""Persistence adapters."""

from excelsior_admin.repositories.core_watchlist import (
    CoreWatchlistStore,
    SortSpec,
    SqlCoreWatchlistStore,
)

__all__ = ["CoreWatchlistStore", "SortSpec", "SqlCoreWatchlistStore"]
