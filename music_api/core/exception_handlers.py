"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to the error body {timestamp, status, error, message, path};
request validation failures also carry fieldErrors and errors.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_api.domain.exceptions import MusicCatalogException
from music_api.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "BUSINESS_RULE_VIOLATION": 400,
    "VALIDATION_ERROR": 400,
}

VALIDATION_FAILED = "Validation Failed"
VALIDATION_MESSAGE = "One or more fields have validation errors"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _error_body(status: int, message: str, path: str, error: str | None = None) -> dict[str, Any]:
    """Build the common error body; error defaults to the HTTP reason phrase."""
    return {
        "timestamp": utc_now().isoformat(),
        "status": status,
        "error": error or HTTPStatus(status).phrase,
        "message": message,
        "path": path,
    }


def _field_name(loc: tuple[Any, ...]) -> str:
    """Return the field path of a pydantic error location without the 'body'/'query' prefix."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts) or "request"


def _music_catalog_exception_handler(
    request: Request, exc: MusicCatalogException
) -> JSONResponse:
    """Return the error body for domain exceptions with the mapped status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status == 404:
        logger.warning("Resource not found: %s", exc.message)
    else:
        logger.warning("Business rule violation: %s", exc.message)
    return JSONResponse(
        status_code=status,
        content=_error_body(status, exc.message, request.url.path),
    )


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with per-field messages and formatted error strings."""
    field_errors: dict[str, str] = {}
    errors: list[str] = []
    for err in exc.errors():
        field = _field_name(tuple(err.get("loc", ())))
        message = err.get("msg", "Invalid value")
        field_errors.setdefault(field, message)
        errors.append(f"{field}: {message}")
    logger.warning("Validation error on %s: %s", request.url.path, errors)
    body = _error_body(400, VALIDATION_MESSAGE, request.url.path, error=VALIDATION_FAILED)
    body["fieldErrors"] = field_errors
    body["errors"] = errors
    return JSONResponse(status_code=400, content=body)


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return the error body for Starlette HTTP exceptions (unknown route, wrong method)."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, str(exc.detail), request.url.path),
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with the error body; limit headers are added when the limiter emits them."""
    logger.warning("Rate limit exceeded on %s: %s", request.url.path, exc.detail)
    response = JSONResponse(
        status_code=429,
        content=_error_body(429, f"Rate limit exceeded: {exc.detail}", request.url.path),
    )
    return request.app.state.limiter._inject_headers(
        response, request.state.view_rate_limit
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500 with a generic message; full detail is logged server-side only."""
    logger.exception("Unexpected error occurred: %s", exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(500, INTERNAL_ERROR_MESSAGE, request.url.path),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: MusicCatalogException (and
    subclasses), RequestValidationError, StarletteHTTPException, RateLimitExceeded,
    generic Exception.
    """
    app.add_exception_handler(MusicCatalogException, _music_catalog_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
