"""Time source used by the watchlist ledger.

Monthly rollover is keyed off the calendar month of "now". Services take a
Clock so jobs and tests can pin the reference date instead of reading the
process-wide wall clock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, date, datetime


class Clock(ABC):
    """Abstract time source."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current timezone-aware datetime."""
        ...

    def today(self) -> date:
        """Return the current calendar date."""
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(Clock):
    """Clock pinned to a given instant. Used by scripts (--as-of) and tests."""

    def __init__(self, instant: datetime | date) -> None:
        self.set(instant)

    def set(self, instant: datetime | date) -> None:
        if not isinstance(instant, datetime):
            instant = datetime(instant.year, instant.month, instant.day, tzinfo=UTC)
        elif instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant
