"""Core watchlist admin API routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from excelsior_admin.api.deps import (
    get_clock,
    get_db,
    get_ledger,
    get_query_service,
    require_admin,
)
from excelsior_admin.api.errors import GENERIC_FAILURE_MESSAGE, KIND_INTERNAL, error_response
from excelsior_admin.clock import Clock
from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.schemas.common import PagedResponse, ResponseEnvelope, success
from excelsior_admin.schemas.watchlist import (
    CoreWatchlistCreate,
    CoreWatchlistRead,
    CoreWatchlistUpdate,
    RolloverSummary,
    TrendUpdateRequest,
)
from excelsior_admin.services.pagination import Page
from excelsior_admin.services.watchlist.ledger import WatchlistLedger
from excelsior_admin.services.watchlist.query_service import WatchlistQueryService
from excelsior_admin.services.watchlist.rollover_job import run_monthly_rollover

router = APIRouter(dependencies=[Depends(require_admin)])


def _to_read(entry: CoreWatchlist) -> CoreWatchlistRead:
    return CoreWatchlistRead.model_validate(entry)


def _to_paged(page: Page[CoreWatchlist]) -> PagedResponse[CoreWatchlistRead]:
    return PagedResponse[CoreWatchlistRead](
        items=[_to_read(e) for e in page.items],
        total_items=page.total_items,
        total_pages=page.total_pages,
        page=page.page,
        size=page.size,
    )


@router.post("", response_model=ResponseEnvelope[CoreWatchlistRead], status_code=201)
def api_create_core_watchlist(
    data: CoreWatchlistCreate,
    ledger: WatchlistLedger = Depends(get_ledger),
) -> ResponseEnvelope:
    """Create a core watchlist entry with an empty 24-month trend window."""
    entry = ledger.create(data.company, data.analysis_link, data.sector, data.market_cap)
    return success(201, _to_read(entry), "New core watchlist added successfully.")


@router.get("/search", response_model=ResponseEnvelope[PagedResponse[CoreWatchlistRead]])
def api_search_core_watchlists(
    company: str | None = Query(None, description="Case-insensitive partial company name."),
    page: int = Query(0),
    size: int = Query(10),
    queries: WatchlistQueryService = Depends(get_query_service),
) -> ResponseEnvelope:
    """Search active entries by company name. Out-of-range pages return items=[]."""
    result = queries.search(company, page, size)
    return success(200, _to_paged(result), "Search result of core watchlist.")


@router.put("/update-trend", response_model=ResponseEnvelope[CoreWatchlistRead])
def api_update_current_month_trend(
    data: TrendUpdateRequest,
    ledger: WatchlistLedger = Depends(get_ledger),
) -> ResponseEnvelope:
    """Set the current month's trend for a company."""
    entry = ledger.update_current_trend(data.company, data.trend)
    return success(200, _to_read(entry), "Current month trend updated successfully.")


@router.put("/update-all", response_model=ResponseEnvelope[RolloverSummary])
def api_rollover_core_watchlists(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ResponseEnvelope:
    """Roll every active entry forward to the current month (no-op if already current)."""
    result = run_monthly_rollover(db, clock=clock)
    if result["status"] != "completed":
        # The job records the failure; only its message reaches the caller
        return error_response(
            500,
            KIND_INTERNAL,
            result["error"] or "Watchlist rollover failed.",
            GENERIC_FAILURE_MESSAGE,
        )
    summary = RolloverSummary(**result)
    return success(200, summary, summary.message or "")


@router.get("", response_model=ResponseEnvelope[PagedResponse[CoreWatchlistRead]])
def api_list_core_watchlists(
    page: int = Query(0),
    size: int = Query(10),
    month_year: str | None = Query(None, description="Sort by the trend of this month, e.g. 'Mar 2025'."),
    sort_direction: str = Query("asc"),
    sort_by: str = Query("company"),
    trend_order: str = Query("alphabetical", description="alphabetical | severity | none"),
    queries: WatchlistQueryService = Depends(get_query_service),
) -> ResponseEnvelope:
    """List active entries with paging and sorting."""
    result = queries.list(page, size, month_year, sort_direction, sort_by, trend_order)
    return success(200, _to_paged(result), "List of core watchlist.")


@router.get("/{entry_id}", response_model=ResponseEnvelope[CoreWatchlistRead])
def api_get_core_watchlist(
    entry_id: str,
    ledger: WatchlistLedger = Depends(get_ledger),
) -> ResponseEnvelope:
    """Get a single active entry by id."""
    entry = ledger.get(entry_id)
    return success(200, _to_read(entry), "Core watchlist fetched successfully.")


@router.put("/{entry_id}", response_model=ResponseEnvelope[CoreWatchlistRead])
def api_update_core_watchlist(
    entry_id: str,
    data: CoreWatchlistUpdate,
    ledger: WatchlistLedger = Depends(get_ledger),
) -> ResponseEnvelope:
    """Partially update an entry; omitted fields are unchanged."""
    entry = ledger.update_partial(entry_id, data.model_dump(exclude_unset=True))
    return success(200, _to_read(entry), "Core watchlist updated successfully.")


@router.delete("/{entry_id}", response_model=ResponseEnvelope[str])
def api_delete_core_watchlist(
    entry_id: str,
    ledger: WatchlistLedger = Depends(get_ledger),
) -> ResponseEnvelope:
    """Soft delete an entry."""
    ledger.delete(entry_id)
    return success(200, f"Core watchlist Id: {entry_id}", "Deleted successfully.")
