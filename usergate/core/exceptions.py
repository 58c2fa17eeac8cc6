"""
Domain errors and global exception handlers.

Every failure leaves the API as ``{"status": "error", "message": ...}``;
internal details are logged, never returned to the client.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# ── Domain errors ───────────────────────────────────────────────────
class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409


class ServerError(AppError):
    status_code = 500


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
        headers=headers,
    )


# ── Handlers ────────────────────────────────────────────────────────
async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, ServerError):
        logger.error("Server error: %s", exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return _error(exc.status_code, exc.message, headers)


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    # Non-numeric path ids and malformed bodies are both plain 400s.
    for err in exc.errors():
        loc = err.get("loc") or ()
        if loc and loc[0] == "path":
            return _error(400, "Invalid user ID")
    return _error(400, "Invalid request body")


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded for %s on %s", request.client, request.url.path)
    return _error(429, "Too many requests")


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
