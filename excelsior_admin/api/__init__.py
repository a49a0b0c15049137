"""API routes."""

from excelsior_admin.api.internal import router as internal_router
from excelsior_admin.api.watchlist import router as watchlist_router

__all__ = ["internal_router", "watchlist_router"]
