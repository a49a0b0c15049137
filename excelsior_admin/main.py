"""
Excelsior admin FastAPI application entry point.

Core watchlist: create/edit companies → set monthly trend → monthly rollover → paged listing
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from excelsior_admin import __version__
from excelsior_admin.api.errors import register_error_handlers
from excelsior_admin.config import get_settings
from excelsior_admin.db.session import check_db_connection, engine

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("Excelsior admin starting")
    try:
        try:
            check_db_connection()
            logger.info("Database connection verified")
        except Exception as e:
            logger.critical("Database unreachable: %s", e)
            raise
        yield
    finally:
        logger.info("Excelsior admin shutting down")
        engine.dispose()
        logger.info("Database connection pool closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    register_error_handlers(app)

    # Mount API routes
    from excelsior_admin.api.internal import router as internal_router
    from excelsior_admin.api.watchlist import router as watchlist_router

    app.include_router(
        watchlist_router, prefix="/api/v1/core-watchlist", tags=["core-watchlist"]
    )

    # Internal job endpoints (cron/scripts, token-authenticated)
    app.include_router(internal_router, tags=["internal"])

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint. Confirms DB connectivity."""
        from sqlalchemy import text

        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
            }
        except Exception:
            from fastapi.responses import JSONResponse

            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
