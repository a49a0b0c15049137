"""Shared FastAPI dependencies for API routes."""

from __future__ import annotations

import logging
import secrets

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from excelsior_admin.clock import Clock, SystemClock
from excelsior_admin.config import get_settings
from excelsior_admin.db.session import get_db  # re-export
from excelsior_admin.repositories.core_watchlist import SqlCoreWatchlistStore
from excelsior_admin.services.watchlist.ledger import WatchlistLedger
from excelsior_admin.services.watchlist.query_service import WatchlistQueryService

__all__ = [
    "get_db",
    "get_clock",
    "get_ledger",
    "get_query_service",
    "require_admin",
    "require_internal_token",
]

logger = logging.getLogger(__name__)

_system_clock = SystemClock()


def get_clock() -> Clock:
    """Time source for request handlers. Overridden in tests."""
    return _system_clock


def get_ledger(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> WatchlistLedger:
    return WatchlistLedger(SqlCoreWatchlistStore(db), clock=clock)


def get_query_service(db: Session = Depends(get_db)) -> WatchlistQueryService:
    settings = get_settings()
    return WatchlistQueryService(
        SqlCoreWatchlistStore(db),
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )


def require_admin(authorization: str | None = Header(None)) -> None:
    """Dependency that requires the admin bearer token.

    Returns 401 when the header is missing or the token does not match
    ADMIN_API_TOKEN. An unset ADMIN_API_TOKEN rejects every request.
    """
    expected = get_settings().admin_api_token
    token = ""
    if authorization and authorization.startswith("Bearer "):
        token = authorization[len("Bearer ") :]
    if not expected or not token or not secrets.compare_digest(token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )


def require_internal_token(x_internal_token: str = Header(...)) -> None:
    """Validate the internal job token from the request header.

    Uses constant-time comparison to prevent timing attacks.
    Raises 403 if the token is empty or does not match the configured value.
    """
    expected = get_settings().internal_job_token
    if not expected or not secrets.compare_digest(x_internal_token, expected):
        logger.warning("Internal endpoint auth failed: invalid or missing token")
        raise HTTPException(status_code=403, detail="Invalid internal token")
