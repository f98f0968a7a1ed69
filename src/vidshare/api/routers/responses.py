"""Shared OpenAPI error response definitions.

Every error is returned as the failure envelope; these mappings document
which statuses each kind of endpoint can produce.
"""

from __future__ import annotations

from typing import Any

from vidshare.api.schemas.responses import ErrorEnvelope

# Type alias for FastAPI responses parameter
ResponsesType = dict[int | str, dict[str, Any]]


def _error(description: str) -> dict[str, Any]:
    return {"model": ErrorEnvelope, "description": description}


BAD_REQUEST_RESPONSE: ResponsesType = {400: _error("Invalid reference or parameters")}
UNAUTHORIZED_RESPONSE: ResponsesType = {
    401: _error("Missing identity, or the actor does not own the resource")
}
NOT_FOUND_RESPONSE: ResponsesType = {404: _error("Resource not found")}
CONFLICT_RESPONSE: ResponsesType = {409: _error("Resource conflict")}
INTERNAL_ERROR_RESPONSE: ResponsesType = {500: _error("Internal server error")}
TIMEOUT_RESPONSE: ResponsesType = {504: _error("Storage deadline exceeded")}

STANDARD_ERRORS: ResponsesType = {
    **BAD_REQUEST_RESPONSE,
    **UNAUTHORIZED_RESPONSE,
    **INTERNAL_ERROR_RESPONSE,
    **TIMEOUT_RESPONSE,
}
"""Errors any authenticated endpoint can return."""

LIST_ERRORS: ResponsesType = {**STANDARD_ERRORS, **NOT_FOUND_RESPONSE}
"""Errors for feeds scoped to a parent resource."""

GET_ITEM_ERRORS: ResponsesType = {**STANDARD_ERRORS, **NOT_FOUND_RESPONSE}
"""Errors for single-resource reads."""

MUTATION_ERRORS: ResponsesType = {
    **STANDARD_ERRORS,
    **NOT_FOUND_RESPONSE,
    **CONFLICT_RESPONSE,
}
"""Errors for create/update/delete/toggle endpoints."""
