"""API response envelope schemas.

Every successful response is wrapped as
``{"statusCode", "success": true, "message", "data"}`` and every failure as
``{"success": false, "error", "errors": [...]}``. The HTTP status code is
always set on the response itself as well.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ErrorCode(str, Enum):
    """Standardized error codes for API responses.

    4xx Client Errors:
        INVALID_REFERENCE: Malformed entity identifier (400)
        BAD_REQUEST: Invalid request parameters (400)
        VALIDATION_ERROR: Request body or query failed validation (400)
        NOT_AUTHENTICATED: No verified actor on the request (401)
        NOT_AUTHORIZED: Actor does not own the resource (401)
        NOT_FOUND: Resource does not exist (404)
        CONFLICT: Uniqueness or state invariant violated (409)

    5xx Server Errors:
        UPLOAD_FAILED: Media store rejected an upload (500)
        DELETE_FAILED: Media store could not delete an object (500)
        DATABASE_ERROR: Database operation failed (500)
        INTERNAL_ERROR: Unexpected server error (500)
        TIMEOUT: Storage operation exceeded its deadline (504)
    """

    # 4xx Client Errors
    INVALID_REFERENCE = "INVALID_REFERENCE"
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx Server Errors
    UPLOAD_FAILED = "UPLOAD_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TIMEOUT = "TIMEOUT"


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for response payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard success envelope."""

    status_code: int = Field(200, description="HTTP status code of the response")
    success: bool = Field(True, description="Always true for success envelopes")
    message: str = Field(..., description="Human-readable outcome")
    data: T


class FieldError(BaseModel):
    """Individual field validation error carried in ``errors``."""

    loc: list[str | int] = Field(
        ...,
        description="Location of the error (field path)",
        examples=[["query", "limit"]],
    )
    msg: str = Field(..., description="Error message")
    type: str = Field(..., description="Error type identifier")


class ErrorEnvelope(BaseModel):
    """Standard failure envelope."""

    success: bool = Field(False, description="Always false for failures")
    error: str = Field(..., description="Human-readable error message")
    errors: list[Any] = Field(
        default_factory=list,
        description="Field-level errors or additional error details",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Video '01890a5d2c2f7c2b9f0e1d2c3b4a5968' not found",
                "errors": [],
            }
        }
    )


def ok(data: Any, message: str, status_code: int = 200) -> ApiResponse[Any]:
    """Build a success envelope.

    Examples
    --------
    >>> ok({"videoLikes": 3}, "video likes count fetched successfully").success
    True
    """
    return ApiResponse[Any](status_code=status_code, message=message, data=data)
