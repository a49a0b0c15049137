"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from tests.test_constants import TEST_ADMIN_TOKEN, TEST_INTERNAL_JOB_TOKEN

# Force an in-memory SQLite DB when pytest runs; don't inherit from .env
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ADMIN_API_TOKEN"] = TEST_ADMIN_TOKEN
os.environ["INTERNAL_JOB_TOKEN"] = TEST_INTERNAL_JOB_TOKEN

# Mid-month so shifting the clock by days never crosses a month boundary by accident
MARCH_2025 = datetime(2025, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def clock():
    """Clock pinned to 15 Mar 2025. Tests call clock.set(...) to cross month boundaries."""
    from excelsior_admin.clock import FixedClock

    return FixedClock(MARCH_2025)


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite schema per test, built from the ORM metadata."""
    import excelsior_admin.models  # noqa: F401
    from excelsior_admin.db.session import Base

    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db(db_engine) -> Session:
    """Database session bound to the per-test SQLite engine."""
    session = Session(bind=db_engine, expire_on_commit=False)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db: Session):
    from excelsior_admin.repositories.core_watchlist import SqlCoreWatchlistStore

    return SqlCoreWatchlistStore(db)


@pytest.fixture
def ledger(store, clock):
    from excelsior_admin.services.watchlist.ledger import WatchlistLedger

    return WatchlistLedger(store, clock=clock)


@pytest.fixture
def queries(store):
    from excelsior_admin.services.watchlist.query_service import WatchlistQueryService

    return WatchlistQueryService(store)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    from excelsior_admin.main import app

    return TestClient(app)


@pytest.fixture
def api_client(db: Session, clock):
    """TestClient with the test db session and pinned clock."""
    from excelsior_admin.api.deps import get_clock
    from excelsior_admin.db.session import get_db
    from excelsior_admin.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    c = TestClient(app)
    yield c
    app.dependency_overrides.clear()
