"""Internal job endpoints for cron/scripts.

These endpoints are secured with a static token (X-Internal-Token header),
NOT the admin bearer token.  They are meant for automated triggers only.
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from excelsior_admin.api.deps import get_clock, get_db, require_internal_token
from excelsior_admin.clock import Clock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", include_in_schema=False)


@router.post("/run_watchlist_rollover")
async def run_watchlist_rollover(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    _token: None = Depends(require_internal_token),
    as_of: date | None = Query(None, description="Reference date (YYYY-MM-DD). Default: today (UTC)."),
):
    """Trigger the monthly core watchlist rollover.

    Idempotent within a month: a second call reports already_up_to_date.
    Returns the job summary with entries_rolled and entries_failed.
    """
    from excelsior_admin.services.watchlist.rollover_job import run_monthly_rollover

    try:
        return run_monthly_rollover(db, clock=clock, as_of=as_of)
    except Exception as exc:
        logger.exception("Internal watchlist rollover failed")
        return {"status": "failed", "error": str(exc)}
