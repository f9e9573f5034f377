"""Exceptions raised by the routes, and the handlers that turn them into JSON."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class GameTrackerError(Exception):
    """Base exception for all API errors.

    ``status_code`` picks the HTTP status, ``details`` is merged into the body.
    """

    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(GameTrackerError):
    """Raised when a request carries malformed or missing fields."""

    status_code = 400

    def __init__(self, errors: list[dict], message: str = "Validation failed"):
        super().__init__(message, {"errors": errors})
        self.errors = errors


class NotFoundError(GameTrackerError):
    status_code = 404


class ConflictError(GameTrackerError):
    """Raised when a user would collide with an existing email or nickname."""

    status_code = 409


class UpstreamError(GameTrackerError):
    """Raised when an upstream service cannot be reached.

    The message sent to the client stays generic; the cause is only logged.
    """

    status_code = 502


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err["loc"] if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc), "message": err["msg"]})
    return errors


async def game_tracker_error_handler(request: Request, exc: GameTrackerError):
    body = {"success": False, "message": exc.message}
    body.update(exc.details)
    return JSONResponse(status_code=exc.status_code, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = _field_errors(exc)
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        logger.warning(f"404 - Route not found: {request.method} {request.url.path}")
        return JSONResponse(status_code=404, content={"success": False, "message": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": str(exc.detail)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Server error: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "message": "Internal server error"})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GameTrackerError, game_tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
