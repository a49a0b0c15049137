"""SQLAlchemy models."""

from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.models.job_run import JobRun

__all__ = [
    "CoreWatchlist",
    "JobRun",
]
