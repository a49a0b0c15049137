"""Tests for listing, sorting and searching core watchlist entries."""

from __future__ import annotations

import pytest

from excelsior_admin.services.errors import InvalidArgumentError
from excelsior_admin.services.watchlist.query_service import (
    TREND_ORDER_NONE,
    TREND_ORDER_SEVERITY,
)


def _companies(page) -> list[str]:
    return [e.company for e in page.items]


@pytest.fixture
def seeded(ledger):
    """Four entries with distinct market caps and current-month trends."""
    rows = [
        ("Acme", "1.2B", "STRONG"),
        ("Bravo", "500M", "WEAK"),
        ("Charlie", "N/A", "MEDIUM"),
        ("Delta", "3B", ""),
    ]
    for company, cap, trend in rows:
        ledger.create(company, market_cap=cap)
        if trend:
            ledger.update_current_trend(company, trend)
    return ledger


class TestListSorting:
    def test_market_cap_ascending_puts_unparseable_first(self, seeded, queries) -> None:
        page = queries.list(sort_by="marketCap", sort_direction="asc")
        assert _companies(page) == ["Charlie", "Bravo", "Acme", "Delta"]

    def test_market_cap_descending(self, seeded, queries) -> None:
        page = queries.list(sort_by="marketCap", sort_direction="DESC")
        assert _companies(page) == ["Delta", "Acme", "Bravo", "Charlie"]

    def test_market_cap_sort_spans_pages(self, seeded, queries) -> None:
        first = queries.list(page=0, size=2, sort_by="marketCap", sort_direction="desc")
        second = queries.list(page=1, size=2, sort_by="marketCap", sort_direction="desc")

        assert _companies(first) == ["Delta", "Acme"]
        assert _companies(second) == ["Bravo", "Charlie"]
        assert first.total_pages == 2

    def test_default_trend_order_is_alphabetical(self, seeded, queries) -> None:
        page = queries.list()
        assert _companies(page) == ["Delta", "Charlie", "Acme", "Bravo"]

    def test_severity_trend_order(self, seeded, queries) -> None:
        page = queries.list(trend_order=TREND_ORDER_SEVERITY)
        assert _companies(page) == ["Delta", "Bravo", "Charlie", "Acme"]

    def test_trend_ties_keep_scalar_order(self, ledger, queries) -> None:
        for company in ("Zeta", "Alpha", "Mike"):
            ledger.create(company)

        asc = queries.list(sort_direction="asc")
        desc = queries.list(sort_direction="desc")

        assert _companies(asc) == ["Alpha", "Mike", "Zeta"]
        assert _companies(desc) == ["Zeta", "Mike", "Alpha"]

    def test_sort_by_named_period(self, seeded, queries, db) -> None:
        bravo = seeded.store.get_by_company_name("Bravo")
        trends = [dict(t) for t in bravo.market_trends]
        trends[1]["trend"] = "MEDIUM"  # Feb 2025
        bravo.market_trends = trends
        db.commit()

        page = queries.list(period_label="feb 2025")

        # Everyone else is empty for Feb 2025 and keeps company order
        assert _companies(page) == ["Acme", "Charlie", "Delta", "Bravo"]

    def test_no_trend_order_pages_in_store(self, seeded, queries) -> None:
        page = queries.list(page=1, size=3, sort_direction="desc", trend_order=TREND_ORDER_NONE)

        assert _companies(page) == ["Acme"]
        assert page.total_items == 4
        assert page.total_pages == 2

    def test_deleted_entries_excluded(self, seeded, queries) -> None:
        seeded.delete(seeded.store.get_by_company_name("Acme").id)

        page = queries.list()

        assert "Acme" not in _companies(page)
        assert page.total_items == 3


class TestListPaging:
    def test_out_of_range_page_is_empty(self, seeded, queries) -> None:
        page = queries.list(page=5, size=2)

        assert page.items == []
        assert page.total_items == 4
        assert page.total_pages == 2
        assert page.page == 5

    def test_empty_watchlist(self, queries) -> None:
        page = queries.list(page=3)

        assert page.items == []
        assert page.total_items == 0
        assert page.total_pages == 0
        assert page.page == 0

    def test_size_is_clamped(self, seeded, queries) -> None:
        assert queries.list(size=0).size == 10
        assert queries.list(size=1000).size == 100

    def test_negative_page_rejected(self, queries) -> None:
        with pytest.raises(InvalidArgumentError):
            queries.list(page=-1)

    @pytest.mark.parametrize(
        "kwargs",
        [{"sort_by": "marketTrends"}, {"sort_direction": "up"}, {"trend_order": "random"}],
    )
    def test_bad_sort_arguments_rejected(self, queries, kwargs) -> None:
        with pytest.raises(InvalidArgumentError):
            queries.list(**kwargs)


class TestSearch:
    def test_partial_case_insensitive_match(self, ledger, queries) -> None:
        for company in ("Acme Corp", "ACME Labs", "Globex"):
            ledger.create(company)

        page = queries.search("acme")

        assert sorted(_companies(page)) == ["ACME Labs", "Acme Corp"]
        assert page.total_items == 2

    def test_wildcards_are_literal(self, ledger, queries) -> None:
        ledger.create("100% Growth")
        ledger.create("1000 Growth")
        ledger.create("snake_case Inc")
        ledger.create("snakeXcase Inc")

        assert _companies(queries.search("0%")) == ["100% Growth"]
        assert _companies(queries.search("e_c")) == ["snake_case Inc"]

    def test_blank_query_matches_all_active(self, ledger, queries) -> None:
        ledger.create("Acme")
        gone = ledger.create("Globex")
        ledger.delete(gone.id)

        page = queries.search(None)

        assert _companies(page) == ["Acme"]

    def test_out_of_range_page_is_empty(self, ledger, queries) -> None:
        ledger.create("Acme")

        page = queries.search("acme", page=4, size=5)

        assert page.items == []
        assert page.total_items == 1
        assert page.total_pages == 1

    def test_size_below_one_rejected(self, queries) -> None:
        with pytest.raises(InvalidArgumentError):
            queries.search("acme", size=0)

    def test_large_size_not_clamped(self, ledger, queries) -> None:
        ledger.create("Acme")
        assert queries.search("acme", size=500).size == 500
