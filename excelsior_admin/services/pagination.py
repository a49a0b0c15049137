"""Generic page bounds and in-memory paging shared by list endpoints.

Pages are 0-indexed. A page past the end is an empty page that still carries
total_items/total_pages metadata; it is never an error.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from excelsior_admin.services.errors import InvalidArgumentError

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageBounds:
    """Resolved page window for a known total."""

    total_items: int
    total_pages: int
    page: int
    size: int

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def out_of_range(self) -> bool:
        return self.total_pages > 0 and self.page >= self.total_pages

    @property
    def is_empty(self) -> bool:
        return self.total_pages == 0 or self.out_of_range


@dataclass
class Page(Generic[T]):
    """One page of results plus paging metadata."""

    items: list[T] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def empty(cls, bounds: PageBounds) -> Page[T]:
        return cls([], bounds.total_items, bounds.total_pages, bounds.page, bounds.size)

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        return Page([fn(item) for item in self.items], self.total_items, self.total_pages, self.page, self.size)


class PageQuery:
    """Requested page/size, validated and optionally clamped.

    With ``clamp=True`` a size below 1 falls back to ``default_size`` and a size
    above ``max_size`` is capped. Callers without a clamp contract pass
    ``clamp=False``; a size below 1 is then rejected.
    """

    def __init__(
        self,
        page: int,
        size: int,
        *,
        clamp: bool = True,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int = MAX_PAGE_SIZE,
    ) -> None:
        if page < 0:
            raise InvalidArgumentError(f"page must be >= 0, got {page}")
        if clamp:
            if size < 1:
                size = default_size
            elif size > max_size:
                size = max_size
        elif size < 1:
            raise InvalidArgumentError(f"size must be >= 1, got {size}")
        self.page = page
        self.size = size

    def bounds(self, total_items: int) -> PageBounds:
        total_pages = math.ceil(total_items / self.size) if total_items > 0 else 0
        page = self.page if total_pages > 0 else 0
        return PageBounds(total_items, total_pages, page, self.size)

    def paginate(
        self,
        candidates: Iterable[T],
        key: Callable[[T], Any] | None = None,
        reverse: bool = False,
        total_items: int | None = None,
    ) -> Page[T]:
        """Sort the full candidate set in memory (stable), then slice the page window.

        ``total_items`` defaults to the number of candidates.
        """
        items = list(candidates)
        bounds = self.bounds(len(items) if total_items is None else total_items)
        if bounds.is_empty:
            return Page.empty(bounds)
        if key is not None:
            items.sort(key=key, reverse=reverse)
        window = items[bounds.offset : bounds.offset + bounds.size]
        return Page(window, bounds.total_items, bounds.total_pages, bounds.page, bounds.size)
