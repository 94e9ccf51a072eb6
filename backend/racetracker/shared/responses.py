"""
Response envelope and exception handlers.

Every endpoint answers with:

    {"success": bool, "message"?: str, "data"?: ..., "errors"?: [{field, message}]}

Keys that carry no value are omitted.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import RaceTrackerError, ValidationError

logger = logging.getLogger(__name__)


def envelope(
    data: Any = None,
    message: str | None = None,
    success: bool = True,
    errors: list[dict] | None = None,
    **extra: Any,
) -> dict:
    """Build the response body."""
    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    body.update(extra)
    return body


def error_response(status_code: int, message: str, errors: list[dict] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(message=message, success=False, errors=errors),
    )


def _location_to_field(loc: tuple) -> str:
    """('body', 'price') -> 'price', ('query', 'startDate') -> 'startDate'."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "unknown"


async def _app_error_handler(request: Request, exc: RaceTrackerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    errors = None
    if isinstance(exc, ValidationError):
        errors = [e.to_dict() for e in exc.errors]
    return error_response(exc.status_code, exc.message, errors)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for err in exc.errors():
        message = err.get("msg", "Invalid value")
        # pydantic prefixes custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": _location_to_field(tuple(err.get("loc", ()))), "message": message})
    return error_response(400, "Invalid data", errors)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(message=message, success=False),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope-producing handlers to the app."""
    app.add_exception_handler(RaceTrackerError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
