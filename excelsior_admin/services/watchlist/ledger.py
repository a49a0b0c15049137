"""Core watchlist ledger: entry lifecycle and the monthly rollover sweep.

Write path for the admin core watchlist:
- create/get/update/delete entries (soft delete via is_deleted)
- set the current month's trend for a company
- roll every active entry's trend window forward to the current month

Updates are read-modify-write with last-write-wins semantics; there is no
version check between the read and the save.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from excelsior_admin.clock import Clock, SystemClock
from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.repositories.core_watchlist import CoreWatchlistStore
from excelsior_admin.services.errors import (
    StorageFailureError,
    WatchlistAlreadyExistsError,
    WatchlistNotFoundError,
)
from excelsior_admin.services.watchlist.trend_window import (
    TrendWindow,
    normalize_trend,
    period_label,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("company", "analysis_link", "sector", "market_cap")

ROLLOVER_UPDATED = "updated"
ROLLOVER_ALREADY_CURRENT = "already_up_to_date"
ROLLOVER_PARTIAL = "partial"


@dataclass
class RolloverResult:
    """Summary of one rollover sweep."""

    period: str
    status: str = ROLLOVER_ALREADY_CURRENT
    entries_scanned: int = 0
    entries_rolled: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)  # (entry_id, message)

    @property
    def entries_failed(self) -> int:
        return len(self.failures)

    @property
    def message(self) -> str:
        if self.status == ROLLOVER_UPDATED:
            return "Watchlist added with new month's trend (default as empty)."
        if self.status == ROLLOVER_PARTIAL:
            return (
                f"Rolled {self.entries_rolled} of {self.entries_scanned} entries to {self.period}; "
                f"{self.entries_failed} failed."
            )
        return "Watchlist already updated with the new month's trend (default as empty)."


class WatchlistLedger:
    """Lifecycle operations on core watchlist entries."""

    def __init__(self, store: CoreWatchlistStore, clock: Clock | None = None) -> None:
        self.store = store
        self.clock = clock or SystemClock()

    def _require(self, entry_id: str) -> CoreWatchlist:
        entry = self.store.get_by_id(entry_id)
        if entry is None:
            logger.error("Core watchlist not found for ID: %s", entry_id)
            raise WatchlistNotFoundError(f"Core watchlist not found for ID: {entry_id}")
        return entry

    def create(
        self,
        company: str,
        analysis_link: str | None = None,
        sector: str | None = None,
        market_cap: str | None = None,
    ) -> CoreWatchlist:
        """Add a company with a fresh 24-month empty trend window.

        Raises WatchlistAlreadyExistsError if an active entry has the same company name.
        """
        if self.store.get_by_company_name(company) is not None:
            raise WatchlistAlreadyExistsError("A watchlist entry for this company already exists.")

        now = self.clock.now()
        entry = CoreWatchlist(
            company=company,
            analysis_link=analysis_link,
            sector=sector,
            market_cap=market_cap,
            market_trends=TrendWindow.initialize(now.date()).to_list(),
            is_deleted=False,
            created=now,
            last_modified=now,
        )
        self.store.insert(entry)
        logger.info("New core watchlist added successfully: %s", entry.company)
        return entry

    def get(self, entry_id: str) -> CoreWatchlist:
        return self._require(entry_id)

    def update_partial(self, entry_id: str, fields: dict[str, Any]) -> CoreWatchlist:
        """Apply only the provided fields. None or empty string leaves a field unchanged."""
        entry = self._require(entry_id)
        changes = {
            k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None and v != ""
        }

        new_company = changes.get("company")
        if new_company is not None and new_company != entry.company:
            clash = self.store.get_by_company_name(new_company)
            if clash is not None and clash.id != entry.id:
                raise WatchlistAlreadyExistsError("A watchlist entry for this company already exists.")

        for key, value in changes.items():
            setattr(entry, key, value)
        entry.last_modified = self.clock.now()
        self.store.save(entry)
        logger.info("Core watchlist updated successfully with ID: %s", entry_id)
        return entry

    def update_current_trend(self, company: str, trend: str | None) -> CoreWatchlist:
        """Set this month's trend for a company.

        Raises WatchlistNotFoundError, InvalidTrendError, or PeriodNotFoundError
        (window not yet rolled to the current month; not auto-healed).
        """
        entry = self.store.get_by_company_name(company)
        if entry is None:
            raise WatchlistNotFoundError(f"Watchlist for company {company} not found")
        token = normalize_trend(trend)

        now = self.clock.now()
        window = TrendWindow.from_list(entry.market_trends)
        window.set_current_period_trend(now.date(), token)
        # Reassign so the JSON column is flagged dirty
        entry.market_trends = window.to_list()
        entry.last_modified = now
        self.store.save(entry)
        logger.info(
            "Current month trend updated company=%s period=%s trend=%s",
            company,
            period_label(now.date()),
            token or "(empty)",
        )
        return entry

    def rollover_all(self, reference_date: date | None = None) -> RolloverResult:
        """Roll every stale active entry forward one period to reference_date's month.

        Idempotent within a period. Entries already at a later month are left
        untouched. A storage failure on one entry is recorded and the sweep
        continues.
        """
        if reference_date is None:
            reference_date = self.clock.today()
        result = RolloverResult(period=period_label(reference_date))
        now = self.clock.now()

        entries = self.store.find_active_all()
        result.entries_scanned = len(entries)
        for entry in entries:
            window = TrendWindow.from_list(entry.market_trends)
            if not window.roll_forward(reference_date):
                if window.is_ahead_of(reference_date):
                    logger.warning(
                        "Core watchlist %s already at %s; not rolling back to %s",
                        entry.id,
                        window.labels[0],
                        result.period,
                    )
                continue
            entry.market_trends = window.to_list()
            entry.last_modified = now
            try:
                self.store.save(entry)
            except StorageFailureError as exc:
                logger.exception("Rollover failed for core watchlist %s", entry.id)
                result.failures.append((entry.id, str(exc)))
                continue
            result.entries_rolled += 1

        if result.failures:
            result.status = ROLLOVER_PARTIAL
        elif result.entries_rolled:
            result.status = ROLLOVER_UPDATED
        logger.info(
            "Rollover to %s: scanned=%d rolled=%d failed=%d",
            result.period,
            result.entries_scanned,
            result.entries_rolled,
            result.entries_failed,
        )
        return result

    def delete(self, entry_id: str) -> CoreWatchlist:
        """Soft delete: flip is_deleted. The row is kept."""
        entry = self._require(entry_id)
        logger.info("Deleting core watchlist with ID: %s", entry_id)
        entry.is_deleted = True
        entry.last_modified = self.clock.now()
        self.store.save(entry)
        return entry
