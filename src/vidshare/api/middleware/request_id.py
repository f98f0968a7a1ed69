"""Request ID middleware.

Every response carries an ``X-Request-ID`` header so that a client can
quote it when reporting a failure envelope. A well-formed incoming value
is reused; otherwise a new id is generated. The id is kept in a context
variable for the duration of the request so log records and exception
handlers can include it.
"""

from __future__ import annotations

import contextvars
import logging
import re
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from vidshare.db.models import new_id

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

MAX_REQUEST_ID_LENGTH = 128

# Printable ASCII without spaces
_VALID_REQUEST_ID = re.compile(r"^[\x21-\x7e]+$")

request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default=""
)


def get_request_id() -> str:
    """Request id of the current context, or "" outside a request."""
    return request_id_var.get()


def resolve_request_id(header_value: str | None) -> str:
    """
    Reuse a client-supplied request id when it is safe to echo back.

    Values with control or non-ASCII characters are replaced; overlong
    values are truncated.

    Examples
    --------
    >>> resolve_request_id("abc-123")
    'abc-123'
    >>> len(resolve_request_id(None))
    32
    """
    if not header_value:
        return new_id()
    if not _VALID_REQUEST_ID.match(header_value):
        logger.warning("Discarding malformed %s header", REQUEST_ID_HEADER)
        return new_id()
    return header_value[:MAX_REQUEST_ID_LENGTH]


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate a request id through context, request state and response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)
        try:
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)


class RequestIdFilter(logging.Filter):
    """Logging filter that adds ``request_id`` ("-" outside requests) to records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
