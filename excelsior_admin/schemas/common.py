"""Response envelope and paging schemas shared by admin API routes."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PagedResponse(BaseModel, Generic[T]):
    """One page of results. An out-of-range page has items=[] and full metadata."""

    items: list[T]
    total_items: int
    total_pages: int
    page: int
    size: int


class ResponseEnvelope(BaseModel, Generic[T]):
    """Envelope returned by every admin endpoint (success or error)."""

    status: str  # "success" | "error"
    code: int
    message: str
    data: T | None = None
    errors: dict[str, str] | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


def success(code: int, data: T, message: str) -> ResponseEnvelope:
    """Build a success envelope."""
    return ResponseEnvelope(status="success", code=code, message=message, data=data)


def error(code: int, errors: dict[str, str], message: str) -> ResponseEnvelope:
    """Build an error envelope."""
    return ResponseEnvelope(status="error", code=code, message=message, errors=errors)
