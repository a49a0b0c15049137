"""Core watchlist query service: filtered, sorted, paginated reads over active entries.

Sorting by market cap or by a trend token is not something the store can do
(the magnitude is parsed from free text, the trend lives inside a JSON list),
so those sorts run in memory over the full active set before slicing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.repositories.core_watchlist import (
    SORTABLE_FIELDS,
    CoreWatchlistStore,
    SortSpec,
)
from excelsior_admin.services.errors import InvalidArgumentError
from excelsior_admin.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page, PageQuery
from excelsior_admin.services.watchlist.market_cap import parse_market_cap
from excelsior_admin.services.watchlist.trend_window import TREND_SEVERITY, TrendWindow

logger = logging.getLogger(__name__)

SORT_BY_MARKET_CAP = "marketCap"

# How the trend key orders rows: literal token order, severity rank, or not at all
TREND_ORDER_ALPHABETICAL = "alphabetical"
TREND_ORDER_SEVERITY = "severity"
TREND_ORDER_NONE = "none"
TREND_ORDERS = (TREND_ORDER_ALPHABETICAL, TREND_ORDER_SEVERITY, TREND_ORDER_NONE)


def _parse_direction(sort_direction: str | None) -> bool:
    """Return True for ascending. Accepts asc/desc in any case; default asc."""
    direction = (sort_direction or "asc").strip().lower()
    if direction not in ("asc", "desc"):
        raise InvalidArgumentError(f"sort_direction must be 'asc' or 'desc', got {sort_direction!r}")
    return direction == "asc"


def trend_sort_key(period_label: str | None, trend_order: str) -> Callable[[CoreWatchlist], object]:
    """Key on the trend for period_label (or the most recent month when not given)."""

    def _trend(entry: CoreWatchlist) -> str:
        window = TrendWindow.from_list(entry.market_trends)
        if period_label:
            return window.trend_for_period(period_label)
        return window.most_recent_trend()

    if trend_order == TREND_ORDER_SEVERITY:
        return lambda entry: TREND_SEVERITY.get(_trend(entry), 0)
    return _trend


class WatchlistQueryService:
    """Read side of the core watchlist."""

    def __init__(
        self,
        store: CoreWatchlistStore,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.default_size = default_size
        self.max_size = max_size

    def list(
        self,
        page: int = 0,
        size: int = DEFAULT_PAGE_SIZE,
        period_label: str | None = None,
        sort_direction: str = "asc",
        sort_by: str = "company",
        trend_order: str = TREND_ORDER_ALPHABETICAL,
    ) -> Page[CoreWatchlist]:
        """List active entries.

        - sort_by="marketCap": full active set sorted by parsed magnitude in sort_direction.
        - any scalar sort_by: full active set in store order on that field, then a stable
          ascending sort on the trend token (for period_label, else the most recent month).
          Alphabetical trend order puts "MEDIUM" before "STRONG" before "WEAK".
        - trend_order="none": store-side page window on the scalar field only.
        """
        ascending = _parse_direction(sort_direction)
        if trend_order not in TREND_ORDERS:
            raise InvalidArgumentError(f"trend_order must be one of {list(TREND_ORDERS)}, got {trend_order!r}")
        if sort_by != SORT_BY_MARKET_CAP and sort_by not in SORTABLE_FIELDS:
            raise InvalidArgumentError(
                f"Unsupported sort field {sort_by!r}; expected one of "
                f"{sorted([*SORTABLE_FIELDS, SORT_BY_MARKET_CAP])}"
            )
        query = PageQuery(page, size, default_size=self.default_size, max_size=self.max_size)

        total = self.store.count_active()
        bounds = query.bounds(total)
        if bounds.out_of_range:
            logger.warning(
                "Requested page %d exceeds available pages (%d). Returning empty response.",
                page,
                bounds.total_pages,
            )
            return Page.empty(bounds)
        if bounds.is_empty:
            return Page.empty(bounds)

        if sort_by == SORT_BY_MARKET_CAP:
            result = query.paginate(
                self.store.find_active_all(),
                key=lambda entry: parse_market_cap(entry.market_cap),
                reverse=not ascending,
                total_items=total,
            )
        elif trend_order == TREND_ORDER_NONE:
            rows = self.store.find_active_page(bounds.offset, bounds.size, SortSpec(sort_by, ascending))
            result = Page(rows, bounds.total_items, bounds.total_pages, bounds.page, bounds.size)
        else:
            result = query.paginate(
                self.store.find_active_all(SortSpec(sort_by, ascending)),
                key=trend_sort_key(period_label, trend_order),
                total_items=total,
            )

        logger.info(
            "Fetched %d core watchlists, page %d of %d.",
            len(result.items),
            result.page,
            result.total_pages,
        )
        return result

    def search(self, company: str | None = None, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> Page[CoreWatchlist]:
        """Case-insensitive partial match on company among active entries.

        Size is taken as given (no clamp); size < 1 is rejected.
        """
        query = PageQuery(page, size, clamp=False)
        rows, total = self.store.find_by_company_substring(company, query.page * query.size, query.size)
        bounds = query.bounds(total)
        if bounds.out_of_range:
            logger.warning(
                "Requested page %d exceeds available pages (%d). Returning empty response.",
                page,
                bounds.total_pages,
            )
        if bounds.is_empty:
            return Page.empty(bounds)
        logger.info(
            "Fetched %d core watchlists for company %r on page %d of %d.",
            len(rows),
            company,
            bounds.page,
            bounds.total_pages,
        )
        return Page(rows, bounds.total_items, bounds.total_pages, bounds.page, bounds.size)
