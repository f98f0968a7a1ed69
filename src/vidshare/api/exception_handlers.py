"""Centralized exception handlers for FastAPI.

Converts domain exceptions into the failure envelope
``{"success": false, "error": str, "errors": [...]}`` with the matching
HTTP status. 5xx responses never expose internal details; the cause is
logged together with the request id instead.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidshare.api.middleware.request_id import REQUEST_ID_HEADER, get_request_id
from vidshare.api.schemas.responses import ErrorEnvelope, FieldError
from vidshare.exceptions import APIError, RepositoryError

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

MAX_ERROR_LENGTH = 4096
"""Maximum length of the ``error`` message before truncation."""

TRUNCATION_SUFFIX = "... (truncated)"

GENERIC_SERVER_ERROR = "Something went wrong"
GENERIC_DATABASE_ERROR = "A database error occurred"


# =============================================================================
# Helper Functions
# =============================================================================


def _truncate(message: str) -> str:
    if len(message) <= MAX_ERROR_LENGTH:
        return message
    return message[: MAX_ERROR_LENGTH - len(TRUNCATION_SUFFIX)] + TRUNCATION_SUFFIX


def _headers() -> dict[str, str] | None:
    request_id = get_request_id()
    return {REQUEST_ID_HEADER: request_id} if request_id else None


def _safe_envelope_response(
    status: int, error: str, errors: list[Any] | None = None
) -> JSONResponse:
    """Serialize a failure envelope, falling back to a fixed body.

    Parameters
    ----------
    status : int
        HTTP status code for the response.
    error : str
        Human-readable error message.
    errors : list | None
        Field errors or additional details.

    Returns
    -------
    JSONResponse
        The envelope response; a minimal 500 if serialization failed.
    """
    try:
        envelope = ErrorEnvelope(error=_truncate(error), errors=errors or [])
        return JSONResponse(
            content=envelope.model_dump(mode="json"),
            status_code=status,
            headers=_headers(),
        )
    except Exception as e:
        logger.error("Error serializing error response: %s", e, exc_info=True)
        return JSONResponse(
            content={"success": False, "error": GENERIC_SERVER_ERROR, "errors": []},
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError subclasses.

    4xx errors carry their own message and details. For 5xx errors
    (media failures, timeouts) the message is kept, since it names the
    failed operation, but the underlying cause is only logged.
    """
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s (details=%s)",
            exc.error_code.value,
            request.method,
            request.url.path,
            exc.message,
            exc.details,
            exc_info=getattr(exc, "original_error", None) or exc,
        )
    envelope = exc.to_envelope()
    return _safe_envelope_response(exc.status_code, envelope.error, envelope.errors)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as a 400 listing each field error."""
    try:
        errors = [
            FieldError(
                loc=list(error.get("loc", [])),
                msg=str(error.get("msg", "")),
                type=str(error.get("type", "")),
            ).model_dump()
            for error in exc.errors()
        ]
    except Exception as e:
        logger.error("Error collecting validation errors: %s", e, exc_info=True)
        errors = []

    first = errors[0]["msg"] if errors else "Invalid request"
    return _safe_envelope_response(400, f"Validation failed: {first}", errors)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    return _safe_envelope_response(exc.status_code, str(exc.detail))


async def repository_error_handler(
    request: Request, exc: RepositoryError
) -> JSONResponse:
    """Handle RepositoryError with a generic message; the cause is logged."""
    logger.error(
        "Repository error: %s (operation=%s, entity=%s)",
        exc.message,
        exc.operation,
        exc.entity_type,
        exc_info=exc.original_error or exc,
    )
    return _safe_envelope_response(500, GENERIC_DATABASE_ERROR)


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """Handle driver/ORM errors that escaped the repositories."""
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _safe_envelope_response(500, GENERIC_DATABASE_ERROR)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the stack trace, return an opaque 500."""
    logger.exception("Unhandled exception: %s", exc)
    return _safe_envelope_response(500, GENERIC_SERVER_ERROR)


# =============================================================================
# Handler Registration
# =============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Examples
    --------
    >>> from fastapi import FastAPI
    >>> app = FastAPI()
    >>> register_exception_handlers(app)
    """
    app.add_exception_handler(APIError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RepositoryError, repository_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_error_handler)
