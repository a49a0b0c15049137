"""Tests for internal job endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi.testclient import TestClient

from tests.test_constants import INTERNAL_HEADERS


def test_rollover_without_token_rejected(api_client: TestClient) -> None:
    response = api_client.post("/internal/run_watchlist_rollover")
    assert response.status_code == 422
    assert response.json()["errors"]["kind"] == "INVALID_ARGUMENT"


def test_rollover_with_wrong_token_returns_403(api_client: TestClient) -> None:
    response = api_client.post(
        "/internal/run_watchlist_rollover", headers={"X-Internal-Token": "wrong"}
    )
    assert response.status_code == 403
    body = response.json()
    assert body["status"] == "error"
    assert body["errors"]["kind"] == "FORBIDDEN"


def test_rollover_runs_with_valid_token(api_client: TestClient, ledger, clock) -> None:
    clock.set(datetime(2025, 2, 10, tzinfo=UTC))
    ledger.create("Acme")
    clock.set(datetime(2025, 3, 1, tzinfo=UTC))

    response = api_client.post("/internal/run_watchlist_rollover", headers=INTERNAL_HEADERS)

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "completed"
    assert body["period"] == "Mar 2025"
    assert body["entries_rolled"] == 1


def test_rollover_as_of_param(api_client: TestClient, ledger) -> None:
    ledger.create("Acme")

    response = api_client.post(
        "/internal/run_watchlist_rollover",
        params={"as_of": "2025-05-01"},
        headers=INTERNAL_HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["period"] == "May 2025"
