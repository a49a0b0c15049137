"""Core watchlist persistence port and its SQLAlchemy adapter.

The ledger and query service only talk to ``CoreWatchlistStore``. All reads
of "active" rows filter ``is_deleted = false``. Store errors surface as
StorageFailureError after the session is rolled back, except a write rejected
by the active-company unique index, which surfaces as WatchlistAlreadyExistsError.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from excelsior_admin.models.core_watchlist import CoreWatchlist
from excelsior_admin.services.errors import (
    InvalidArgumentError,
    StorageFailureError,
    WatchlistAlreadyExistsError,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")

ACTIVE_COMPANY_INDEX = "uq_core_watchlist_company_active"

# API sort field -> model column attribute name
SORTABLE_FIELDS = {
    "company": "company",
    "sector": "sector",
    "analysisLink": "analysis_link",
    "created": "created",
    "lastModified": "last_modified",
}


@dataclass(frozen=True)
class SortSpec:
    """Store-side ordering on a scalar column."""

    field: str = "company"
    ascending: bool = True

    def __post_init__(self) -> None:
        if self.field not in SORTABLE_FIELDS:
            raise InvalidArgumentError(
                f"Unsupported sort field {self.field!r}; expected one of {sorted(SORTABLE_FIELDS)}"
            )


class CoreWatchlistStore(ABC):
    """Persistence port for core watchlist entries."""

    @abstractmethod
    def insert(self, entry: CoreWatchlist) -> str:
        """Persist a new entry and return its id.

        Raises WatchlistAlreadyExistsError if another active entry holds the company name.
        """
        ...

    @abstractmethod
    def get_by_id(self, entry_id: str) -> CoreWatchlist | None:
        """Return the active entry with this id, or None."""
        ...

    @abstractmethod
    def get_by_company_name(self, company: str) -> CoreWatchlist | None:
        """Return the active entry for an exact company name, or None."""
        ...

    @abstractmethod
    def save(self, entry: CoreWatchlist) -> CoreWatchlist:
        """Upsert an entry by id. Same company-name clash rule as insert."""
        ...

    @abstractmethod
    def count_active(self) -> int:
        ...

    @abstractmethod
    def find_active_page(self, offset: int, limit: int, sort: SortSpec | None = None) -> list[CoreWatchlist]:
        ...

    @abstractmethod
    def find_active_all(self, sort: SortSpec | None = None) -> list[CoreWatchlist]:
        ...

    @abstractmethod
    def find_by_company_substring(
        self, text: str | None, offset: int, limit: int
    ) -> tuple[list[CoreWatchlist], int]:
        """Case-insensitive partial match on company among active entries.

        Returns (page of entries ordered by company, total matches).
        """
        ...


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _is_company_conflict(exc: IntegrityError) -> bool:
    """True when the active-company unique index rejected the write (PostgreSQL or SQLite wording)."""
    detail = str(exc.orig)
    return ACTIVE_COMPANY_INDEX in detail or "UNIQUE constraint failed: core_watchlist.company" in detail


class SqlCoreWatchlistStore(CoreWatchlistStore):
    """CoreWatchlistStore backed by a SQLAlchemy session. Writes commit immediately."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _run(self, action: str, fn: Callable[[], R]) -> R:
        try:
            return fn()
        except IntegrityError as exc:
            self.db.rollback()
            if _is_company_conflict(exc):
                logger.warning("Core watchlist store %s hit an active company name clash: %s", action, exc.orig)
                raise WatchlistAlreadyExistsError(
                    "A watchlist entry for this company already exists."
                ) from exc
            logger.error("Core watchlist store %s failed: %s", action, exc)
            raise StorageFailureError(f"Storage failure during {action}: {exc}") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Core watchlist store %s failed: %s", action, exc)
            raise StorageFailureError(f"Storage failure during {action}: {exc}") from exc

    def _active(self) -> Query:
        return self.db.query(CoreWatchlist).filter(CoreWatchlist.is_deleted == False)  # noqa: E712

    def _ordered(self, query: Query, sort: SortSpec | None) -> Query:
        sort = sort or SortSpec()
        column = getattr(CoreWatchlist, SORTABLE_FIELDS[sort.field])
        order = column.asc() if sort.ascending else column.desc()
        return query.order_by(order, CoreWatchlist.id.asc())

    def _commit(self, entry: CoreWatchlist) -> CoreWatchlist:
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def insert(self, entry: CoreWatchlist) -> str:
        return self._run("insert", lambda: self._commit(entry).id)

    def get_by_id(self, entry_id: str) -> CoreWatchlist | None:
        return self._run(
            "get_by_id",
            lambda: self._active().filter(CoreWatchlist.id == entry_id).first(),
        )

    def get_by_company_name(self, company: str) -> CoreWatchlist | None:
        return self._run(
            "get_by_company_name",
            lambda: self._active().filter(CoreWatchlist.company == company).first(),
        )

    def save(self, entry: CoreWatchlist) -> CoreWatchlist:
        return self._run("save", lambda: self._commit(entry))

    def count_active(self) -> int:
        return self._run("count_active", lambda: self._active().count())

    def find_active_page(self, offset: int, limit: int, sort: SortSpec | None = None) -> list[CoreWatchlist]:
        return self._run(
            "find_active_page",
            lambda: self._ordered(self._active(), sort).offset(offset).limit(limit).all(),
        )

    def find_active_all(self, sort: SortSpec | None = None) -> list[CoreWatchlist]:
        return self._run("find_active_all", lambda: self._ordered(self._active(), sort).all())

    def find_by_company_substring(
        self, text: str | None, offset: int, limit: int
    ) -> tuple[list[CoreWatchlist], int]:
        def _query() -> tuple[list[CoreWatchlist], int]:
            query = self._active()
            if text and text.strip():
                pattern = f"%{_escape_like(text.strip())}%"
                query = query.filter(CoreWatchlist.company.ilike(pattern, escape="\\"))
            total = query.count()
            rows = self._ordered(query, None).offset(offset).limit(limit).all()
            return rows, total

        return self._run("find_by_company_substring", _query)
