"""Rolling monthly trend window for one watchlist entry.

The window is a fixed-length list of ``(month_year, trend)`` slots, most
recent month first. It is created with 24 empty slots ending at the
reference month, advanced by one month per rollover (evict oldest, prepend
new empty slot), and only the current month's slot is writable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from excelsior_admin.services.errors import InvalidTrendError, PeriodNotFoundError

TREND_WINDOW_MONTHS = 24

TREND_EMPTY = ""
TREND_STRONG = "STRONG"
TREND_MEDIUM = "MEDIUM"
TREND_WEAK = "WEAK"
ALLOWED_TRENDS = (TREND_EMPTY, TREND_STRONG, TREND_MEDIUM, TREND_WEAK)

# Alternative ordering for list sorting; default sort is alphabetical on the token.
TREND_SEVERITY = {TREND_EMPTY: 0, TREND_WEAK: 1, TREND_MEDIUM: 2, TREND_STRONG: 3}

# Locale-independent English month abbreviations ("%b" depends on LC_TIME).
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def period_label(d: date) -> str:
    """Return the month-year label for a date, e.g. ``"Mar 2025"``."""
    return f"{_MONTH_ABBR[d.month - 1]} {d.year:04d}"


def shift_months(d: date, months: int) -> date:
    """Return the first day of the month ``months`` away from ``d`` (negative = earlier)."""
    index = d.year * 12 + (d.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def _month_index(d: date) -> int:
    return d.year * 12 + (d.month - 1)


def parse_period_label(label: str | None) -> date | None:
    """First day of the labelled month (``"Mar 2025"`` -> 2025-03-01), or None if malformed."""
    parts = (label or "").split()
    if len(parts) != 2 or parts[0] not in _MONTH_ABBR or not parts[1].isdigit():
        return None
    return date(int(parts[1]), _MONTH_ABBR.index(parts[0]) + 1, 1)


def normalize_trend(value: str | None) -> str:
    """Upper-case and validate a trend token. None is treated as empty."""
    token = (value or "").strip().upper()
    if token not in ALLOWED_TRENDS:
        raise InvalidTrendError(
            "Invalid trend. Allowed values are 'STRONG', 'MEDIUM', or 'WEAK' "
            "in upper or lower case."
        )
    return token


@dataclass
class MonthlyTrend:
    """One slot of the window."""

    month_year: str
    trend: str = TREND_EMPTY

    def to_dict(self) -> dict:
        return {"month_year": self.month_year, "trend": self.trend}


class TrendWindow:
    """Most-recent-first list of monthly trend slots with a fixed capacity."""

    def __init__(self, entries: list[MonthlyTrend] | None = None, capacity: int = TREND_WINDOW_MONTHS) -> None:
        self.entries: list[MonthlyTrend] = list(entries or [])
        self.capacity = capacity

    @classmethod
    def initialize(cls, reference_date: date, capacity: int = TREND_WINDOW_MONTHS) -> TrendWindow:
        """Build a window of ``capacity`` empty slots: reference month, then each earlier month."""
        entries = [
            MonthlyTrend(period_label(shift_months(reference_date, -i)))
            for i in range(capacity)
        ]
        return cls(entries, capacity)

    @classmethod
    def from_list(cls, raw: list[dict] | None, capacity: int = TREND_WINDOW_MONTHS) -> TrendWindow:
        """Load from the JSON column shape."""
        entries = [
            MonthlyTrend(item.get("month_year", ""), item.get("trend") or TREND_EMPTY)
            for item in (raw or [])
        ]
        return cls(entries, capacity)

    def to_list(self) -> list[dict]:
        """Serialize to the JSON column shape (a new list every call)."""
        return [e.to_dict() for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def labels(self) -> list[str]:
        return [e.month_year for e in self.entries]

    def is_current(self, reference_date: date) -> bool:
        """True if slot 0 is the reference month."""
        return bool(self.entries) and self.entries[0].month_year == period_label(reference_date)

    def set_current_period_trend(self, reference_date: date, trend: str | None) -> MonthlyTrend:
        """Overwrite the trend of the reference month's slot.

        Raises PeriodNotFoundError when the window has not been rolled forward to
        the reference month; the caller must run rollover first.
        """
        token = normalize_trend(trend)
        label = period_label(reference_date)
        for entry in self.entries:
            if entry.month_year == label:
                entry.trend = token
                return entry
        raise PeriodNotFoundError(
            f"Current month entry {label!r} not found in the watchlist; run the monthly rollover first."
        )

    def is_ahead_of(self, reference_date: date) -> bool:
        """True if slot 0 is a month after the reference month."""
        newest = parse_period_label(self.entries[0].month_year) if self.entries else None
        return newest is not None and _month_index(newest) > _month_index(reference_date)

    def roll_forward(self, reference_date: date) -> bool:
        """Advance the window by one period.

        Returns False when slot 0 is already the reference month or a later one;
        a window never moves backwards.
        """
        if self.is_current(reference_date) or self.is_ahead_of(reference_date):
            return False
        if len(self.entries) >= self.capacity:
            self.entries.pop()
        self.entries.insert(0, MonthlyTrend(period_label(reference_date)))
        return True

    def most_recent_trend(self) -> str:
        return self.entries[0].trend if self.entries else TREND_EMPTY

    def trend_for_period(self, label: str) -> str:
        """Trend for a month-year label (case-insensitive); empty string if not in the window."""
        wanted = label.strip().lower()
        for entry in self.entries:
            if entry.month_year.lower() == wanted:
                return entry.trend
        return TREND_EMPTY
