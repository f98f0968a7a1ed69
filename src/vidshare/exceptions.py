"""
Custom exceptions for the vidshare application.

This module defines domain-specific exceptions for error handling
throughout the application: storage failures, media collaborator
failures, deadlines, and the API-facing error kinds that map onto HTTP
status codes.
"""

from __future__ import annotations

from typing import Any

from vidshare.api.schemas.responses import ErrorCode, ErrorEnvelope


class VidshareError(Exception):
    """Base exception for all vidshare errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize VidshareError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        """
        self.message = message
        super().__init__(message)


class RepositoryError(VidshareError):
    """
    Exception raised for repository/database operation failures.

    Attributes
    ----------
    message : str
        Human-readable error message.
    operation : str | None
        The database operation that failed (e.g., "insert", "delete").
    entity_type : str | None
        The type of entity involved (e.g., "Video", "Like").
    original_error : Exception | None
        The original database exception that caused this error.
    """

    def __init__(
        self,
        message: str = "Repository operation failed",
        operation: str | None = None,
        entity_type: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.operation: str | None = operation
        self.entity_type: str | None = entity_type
        self.original_error: Exception | None = original_error
        super().__init__(message)


class EdgeExistsError(RepositoryError):
    """
    Raised by an edge store when an insert hits the unique constraint.

    The edge toggle treats this as a lost race and re-reads; it never
    reaches the HTTP layer on its own.
    """

    def __init__(
        self,
        entity_type: str,
        actor_id: str,
        target_id: str,
        original_error: Exception | None = None,
    ) -> None:
        self.actor_id = actor_id
        self.target_id = target_id
        super().__init__(
            message=f"{entity_type} edge ({actor_id}, {target_id}) already exists",
            operation="insert",
            entity_type=entity_type,
            original_error=original_error,
        )


# =============================================================================
# API Layer Exceptions
# =============================================================================


class APIError(VidshareError):
    """Base exception for API layer errors.

    Attributes
    ----------
    status_code : int
        HTTP status code for the error response (default: 500).
    error_code : ErrorCode
        Machine-readable error code.
    message : str
        Human-readable error message.
    details : dict[str, Any] | None
        Additional error context (e.g., resource_type, identifier).

    Examples
    --------
    >>> raise APIError(message="Something went wrong", details={"context": "example"})
    Traceback (most recent call last):
    ...
    vidshare.exceptions.APIError: Something went wrong
    """

    status_code: int = 500
    _error_code_value: str = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def error_code(self) -> ErrorCode:
        """Get the error code as an ErrorCode enum."""
        return ErrorCode(self._error_code_value)

    def to_envelope(self) -> ErrorEnvelope:
        """Convert to the failure envelope.

        Returns
        -------
        ErrorEnvelope
            Pydantic model suitable for JSON serialization.
        """
        errors: list[Any] = [self.details] if self.details else []
        return ErrorEnvelope(error=self.message, errors=errors)


class InvalidReferenceError(APIError):
    """Malformed entity identifier (400).

    Raised by the predicate builder before any storage access.

    Examples
    --------
    >>> InvalidReferenceError(kind="video id", value="xyz").message
    "invalid video id: 'xyz'"
    """

    status_code: int = 400
    _error_code_value: str = "INVALID_REFERENCE"

    def __init__(self, kind: str, value: object) -> None:
        self.kind = kind
        self.value = value
        if value is None or (isinstance(value, str) and not value.strip()):
            message = f"{kind} is missing"
        else:
            message = f"invalid {kind}: {value!r}"
        super().__init__(message=message, details={"field": kind})


class BadRequestError(APIError):
    """Invalid request parameters (400)."""

    status_code: int = 400
    _error_code_value: str = "BAD_REQUEST"


class AuthenticationError(APIError):
    """No verified actor on the request (401).

    The identity collaborator upstream verifies tokens; this error only
    signals that its result is absent.
    """

    status_code: int = 401
    _error_code_value: str = "NOT_AUTHENTICATED"


class UnauthorizedError(APIError):
    """Actor is not permitted to act on the resource (401).

    Examples
    --------
    >>> UnauthorizedError(resource_type="Playlist", identifier="abc").status_code
    401
    """

    status_code: int = 401
    _error_code_value: str = "NOT_AUTHORIZED"

    def __init__(self, resource_type: str, identifier: str) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(
            message=(
                f"You do not have permission to modify {resource_type} "
                f"'{identifier}'"
            ),
            details={"resource_type": resource_type, "identifier": identifier},
        )


class NotFoundError(APIError):
    """Resource not found (404).

    Examples
    --------
    >>> NotFoundError(resource_type="Video", identifier="abc").message
    "Video 'abc' not found"
    """

    status_code: int = 404
    _error_code_value: str = "NOT_FOUND"

    def __init__(
        self,
        resource_type: str,
        identifier: str,
        hint: str | None = None,
    ) -> None:
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} '{identifier}' not found"
        if hint:
            message += f". {hint}"
        super().__init__(
            message=message,
            details={"resource_type": resource_type, "identifier": identifier},
        )


class ConflictError(APIError):
    """Uniqueness or state invariant violated (409).

    Examples
    --------
    >>> raise ConflictError(
    ...     message="Video already exists in the playlist",
    ...     details={"playlist_id": "abc", "video_id": "def"},
    ... )
    Traceback (most recent call last):
    ...
    vidshare.exceptions.ConflictError: Video already exists in the playlist
    """

    status_code: int = 409
    _error_code_value: str = "CONFLICT"


class MediaUploadError(APIError):
    """Media store failed to persist an upload (500)."""

    status_code: int = 500
    _error_code_value: str = "UPLOAD_FAILED"

    def __init__(
        self,
        message: str = "Something went wrong while uploading media",
        details: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.original_error = original_error
        super().__init__(message=message, details=details)


class MediaDeleteError(APIError):
    """Media store failed to delete a stored object (500).

    Services treat this as best-effort during cleanup: it is logged as a
    warning there and only reaches the client when deletion is the
    primary operation.
    """

    status_code: int = 500
    _error_code_value: str = "DELETE_FAILED"

    def __init__(
        self,
        public_id: str,
        original_error: Exception | None = None,
    ) -> None:
        self.public_id = public_id
        self.original_error = original_error
        super().__init__(
            message=f"Failed to delete media object '{public_id}'",
            details={"public_id": public_id},
        )


class StorageTimeoutError(APIError):
    """Storage operation exceeded its deadline (504)."""

    status_code: int = 504
    _error_code_value: str = "TIMEOUT"

    def __init__(self, operation: str, timeout: float) -> None:
        self.operation = operation
        self.timeout = timeout
        super().__init__(
            message=f"Operation '{operation}' exceeded its {timeout:g}s deadline",
            details={"operation": operation, "timeout_seconds": timeout},
        )
