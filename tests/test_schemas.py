"""Tests for request/response schemas."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.schemas import CoreWatchlistCreate, CoreWatchlistRead, CoreWatchlistUpdate
from excelsior_admin.schemas.common import error, success


def test_create_requires_company() -> None:
    with pytest.raises(ValidationError):
        CoreWatchlistCreate(company="")


def test_update_tracks_only_sent_fields() -> None:
    update = CoreWatchlistUpdate.model_validate({"sector": "Tech"})
    assert update.model_dump(exclude_unset=True) == {"sector": "Tech"}


def test_read_from_orm_object() -> None:
    now = datetime(2025, 3, 1, tzinfo=UTC)
    entry = CoreWatchlist(
        id="abc",
        company="Acme",
        market_cap="1B",
        market_trends=[{"month_year": "Mar 2025", "trend": "WEAK"}],
        created=now,
        last_modified=now,
    )

    read = CoreWatchlistRead.model_validate(entry)

    assert read.id == "abc"
    assert read.market_trends[0].trend == "WEAK"


def test_envelopes() -> None:
    ok = success(200, {"x": 1}, "done")
    assert ok.status == "success"
    assert ok.errors is None

    bad = error(404, {"kind": "NOT_FOUND", "message": "gone"}, "Not found!")
    dumped = bad.model_dump(mode="json")
    assert dumped["status"] == "error"
    assert dumped["data"] is None
    assert dumped["errors"]["kind"] == "NOT_FOUND"
