#!/usr/bin/env python3
"""Run the monthly core watchlist rollover locally or from cron.

Usage:
    python scripts/run_monthly_rollover.py
    python scripts/run_monthly_rollover.py --as-of 2025-03-01

Cron (1st of every month, 00:05 UTC):
    5 0 1 * * cd /srv/excelsior && python scripts/run_monthly_rollover.py

Adds the new month's empty trend slot to every active entry. Safe to re-run
within the same month. Exits 0 on success (including already up to date and
partial failures), 1 when the job itself fails.
"""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from excelsior_admin.clock import FixedClock, SystemClock
from excelsior_admin.db.session import SessionLocal
from excelsior_admin.services.watchlist.rollover_job import run_monthly_rollover


def main() -> int:
    parser = argparse.ArgumentParser(description="Roll core watchlist trend windows to the current month")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=None,
        help="Reference date YYYY-MM-DD (default: today, UTC)",
    )
    args = parser.parse_args()

    clock = FixedClock(args.as_of) if args.as_of else SystemClock()
    db = SessionLocal()
    try:
        result = run_monthly_rollover(db, clock=clock)
        print(
            f"status={result['status']} "
            f"job_run_id={result['job_run_id']} "
            f"period={result['period']} "
            f"rollover_status={result['rollover_status']} "
            f"entries_rolled={result['entries_rolled']} "
            f"entries_failed={result['entries_failed']}"
        )
        if result.get("error"):
            print(f"error={result['error']}", file=sys.stderr)
        return 0 if result["status"] == "completed" else 1
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
