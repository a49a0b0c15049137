"""Tests for market-cap label parsing."""

import pytest

from excelsior_admin.services.watchlist.market_cap import parse_market_cap


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("1.2B", 1_200_000_000),
        ("500M", 500_000_000),
        ("3B", 3_000_000_000),
        ("0.5M", 500_000),
        (".5B", 500_000_000),
        ("1.B", 1_000_000_000),
    ],
)
def test_parses_billions_and_millions(label: str, expected: int) -> None:
    assert parse_market_cap(label) == expected


@pytest.mark.parametrize("label", ["", None, "N/A", "1.2b", "1.2 B", "1.2T", "$2B", "2B+"])
def test_unparseable_labels_are_zero(label) -> None:
    assert parse_market_cap(label) == 0


def test_decimal_scaling_has_no_float_drift() -> None:
    assert parse_market_cap("0.29B") == 290_000_000
    assert parse_market_cap("1.005M") == 1_005_000
