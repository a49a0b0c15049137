"""Service error taxonomy (core watchlist and shared paging).

Each error carries a stable machine-readable ``kind``; the API layer maps
kinds to HTTP status codes and the error envelope.
"""

from __future__ import annotations


class WatchlistError(Exception):
    """Base class for core watchlist errors."""

    kind = "WATCHLIST_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class WatchlistNotFoundError(WatchlistError):
    """Raised when an entry is absent or soft-deleted."""

    kind = "NOT_FOUND"


class WatchlistAlreadyExistsError(WatchlistError):
    """Raised when a company name collides with another active entry."""

    kind = "ALREADY_EXISTS"


class InvalidTrendError(WatchlistError, ValueError):
    """Raised for a trend token outside "", STRONG, MEDIUM, WEAK."""

    kind = "INVALID_TREND"


class PeriodNotFoundError(WatchlistError):
    """Raised when the current month is not in the window (rollover has not run yet)."""

    kind = "PERIOD_NOT_FOUND"


class InvalidArgumentError(WatchlistError, ValueError):
    """Raised for bad paging/sorting input (negative page, size < 1, unknown sort field)."""

    kind = "INVALID_ARGUMENT"


class StorageFailureError(WatchlistError):
    """Raised when the persistence store fails. Not retried here."""

    kind = "STORAGE_FAILURE"
