"""Map service, request and unexpected errors to the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from excelsior_admin.schemas.common import error
from excelsior_admin.services.errors import (
    InvalidArgumentError,
    InvalidTrendError,
    PeriodNotFoundError,
    StorageFailureError,
    WatchlistAlreadyExistsError,
    WatchlistError,
    WatchlistNotFoundError,
)

logger = logging.getLogger(__name__)

KIND_INVALID_ARGUMENT = InvalidArgumentError.kind
KIND_INTERNAL = "INTERNAL"

GENERIC_FAILURE_MESSAGE = "Something went wrong!"

# (HTTP status, envelope message) per error class; first match wins
_ERROR_RESPONSES: list[tuple[type[WatchlistError], int, str]] = [
    (WatchlistNotFoundError, 404, "Not found!"),
    (WatchlistAlreadyExistsError, 409, "Invalid data!"),
    (InvalidTrendError, 400, "Invalid data!"),
    (InvalidArgumentError, 400, "Invalid data!"),
    (PeriodNotFoundError, 409, "Rollover required!"),
    (StorageFailureError, 503, GENERIC_FAILURE_MESSAGE),
]

# (kind, envelope message) for framework HTTP errors (auth, unknown route, ...)
_HTTP_ERRORS: dict[int, tuple[str, str]] = {
    401: ("UNAUTHORIZED", "Unauthorized!"),
    403: ("FORBIDDEN", "Access denied!"),
    404: ("NOT_FOUND", "Not found!"),
    405: ("METHOD_NOT_ALLOWED", "Method not allowed!"),
}


def status_for(exc: WatchlistError) -> tuple[int, str]:
    for cls, code, message in _ERROR_RESPONSES:
        if isinstance(exc, cls):
            return code, message
    return 500, GENERIC_FAILURE_MESSAGE


def error_response(code: int, kind: str, detail: str, message: str, headers: dict | None = None) -> JSONResponse:
    """Build a JSONResponse carrying the error envelope."""
    body = error(code, {"kind": kind, "message": detail}, message)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"), headers=headers)


async def watchlist_error_handler(request: Request, exc: WatchlistError) -> JSONResponse:
    code, message = status_for(exc)
    if code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return error_response(code, exc.kind, exc.message, message)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}" if location else str(err.get("msg", "invalid")))
    return "; ".join(parts) or "Invalid request."


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(422, KIND_INVALID_ARGUMENT, _describe_validation_errors(exc), "Invalid data!")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind, message = _HTTP_ERRORS.get(exc.status_code, ("HTTP_ERROR", GENERIC_FAILURE_MESSAGE))
    return error_response(
        exc.status_code,
        kind,
        str(exc.detail),
        message,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, KIND_INTERNAL, "Internal server error.", GENERIC_FAILURE_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WatchlistError, watchlist_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
