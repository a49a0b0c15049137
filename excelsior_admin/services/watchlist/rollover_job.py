"""Monthly core watchlist rollover job.

Triggered by cron (scripts/run_monthly_rollover.py), the internal job
endpoint, or the admin "update-all" action. Adds the new month's empty trend
slot to every active entry and evicts the oldest. Safe to run repeatedly:
a second run in the same month changes nothing.
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime

from sqlalchemy.orm import Session

from excelsior_admin.clock import Clock, SystemClock
from excelsior_admin.models import JobRun
from excelsior_admin.repositories.core_watchlist import SqlCoreWatchlistStore
from excelsior_admin.services.watchlist.ledger import ROLLOVER_PARTIAL, WatchlistLedger

logger = logging.getLogger(__name__)

JOB_TYPE_WATCHLIST_ROLLOVER = "watchlist_rollover"


def run_monthly_rollover(
    db: Session,
    clock: Clock | None = None,
    as_of: date | None = None,
) -> dict:
    """Roll all active core watchlist entries forward to the month of as_of.

    One entry failure does not stop the run. Creates JobRun record for audit.

    Args:
        db: Database session.
        clock: Time source (default: system UTC clock).
        as_of: Reference date (default: clock's today).

    Returns:
        dict with status, job_run_id, period, entries_scanned, entries_rolled,
        entries_failed, message, error
    """
    clock = clock or SystemClock()
    if as_of is None:
        as_of = clock.today()

    job = JobRun(job_type=JOB_TYPE_WATCHLIST_ROLLOVER, status="running")
    db.add(job)
    db.commit()
    db.refresh(job)

    try:
        logger.info("Starting watchlist rollover job, as_of=%s", as_of)
        ledger = WatchlistLedger(SqlCoreWatchlistStore(db), clock=clock)
        result = ledger.rollover_all(as_of)

        errors = [f"Entry {entry_id}: {msg}" for entry_id, msg in result.failures]
        job.finished_at = datetime.now(UTC)
        job.status = "completed"
        job.period = result.period
        job.entries_processed = result.entries_rolled
        job.entries_failed = result.entries_failed
        job.error_message = "; ".join(errors[:10]) if errors else None
        db.commit()

        logger.info(
            "Watchlist rollover completed: job_run_id=%s status=%s rolled=%d failed=%d",
            job.id,
            result.status,
            result.entries_rolled,
            result.entries_failed,
        )
        return {
            "status": "completed",
            "job_run_id": job.id,
            "period": result.period,
            "rollover_status": result.status,
            "entries_scanned": result.entries_scanned,
            "entries_rolled": result.entries_rolled,
            "entries_failed": result.entries_failed,
            "message": result.message,
            "error": job.error_message if result.status == ROLLOVER_PARTIAL else None,
        }
    except Exception as exc:
        logger.exception("Watchlist rollover job failed")
        db.rollback()
        job.finished_at = datetime.now(UTC)
        job.status = "failed"
        job.error_message = str(exc)
        db.commit()
        return {
            "status": "failed",
            "job_run_id": job.id,
            "period": None,
            "rollover_status": None,
            "entries_scanned": 0,
            "entries_rolled": 0,
            "entries_failed": 0,
            "message": "Watchlist rollover failed.",
            "error": str(exc),
        }
