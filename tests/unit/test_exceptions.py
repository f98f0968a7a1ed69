"""
Tests for custom exceptions module.

Covers the error hierarchy, the HTTP status and error code carried by each
API error, and conversion to the failure envelope.
"""

from __future__ import annotations

import pytest

from vidshare.api.schemas.responses import ErrorCode
from vidshare.exceptions import (
    APIError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    EdgeExistsError,
    InvalidReferenceError,
    MediaDeleteError,
    MediaUploadError,
    NotFoundError,
    RepositoryError,
    StorageTimeoutError,
    UnauthorizedError,
    VidshareError,
)


class TestVidshareError:
    """Tests for the base exception."""

    def test_stores_message(self) -> None:
        error = VidshareError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_can_be_raised(self) -> None:
        with pytest.raises(VidshareError, match="boom"):
            raise VidshareError("boom")


class TestRepositoryErrors:
    """Tests for storage-layer errors."""

    def test_repository_error_defaults(self) -> None:
        error = RepositoryError()
        assert error.message == "Repository operation failed"
        assert error.operation is None
        assert error.original_error is None

    def test_edge_exists_error(self) -> None:
        cause = RuntimeError("unique violation")
        error = EdgeExistsError("Like", "a" * 32, "b" * 32, original_error=cause)

        assert isinstance(error, RepositoryError)
        assert error.operation == "insert"
        assert error.entity_type == "Like"
        assert error.original_error is cause
        assert "already exists" in error.message


class TestAPIErrors:
    """Tests for the API-facing error kinds."""

    @pytest.mark.parametrize(
        ("error", "status", "code"),
        [
            (InvalidReferenceError(kind="video id", value="x"), 400, ErrorCode.INVALID_REFERENCE),
            (BadRequestError(message="bad"), 400, ErrorCode.BAD_REQUEST),
            (AuthenticationError(message="who?"), 401, ErrorCode.NOT_AUTHENTICATED),
            (UnauthorizedError(resource_type="Video", identifier="v"), 401, ErrorCode.NOT_AUTHORIZED),
            (NotFoundError(resource_type="Video", identifier="v"), 404, ErrorCode.NOT_FOUND),
            (ConflictError(message="dup"), 409, ErrorCode.CONFLICT),
            (MediaUploadError(), 500, ErrorCode.UPLOAD_FAILED),
            (MediaDeleteError("videos/a.mp4"), 500, ErrorCode.DELETE_FAILED),
            (StorageTimeoutError("video.publish", 2.5), 504, ErrorCode.TIMEOUT),
        ],
    )
    def test_status_and_code(self, error: APIError, status: int, code: ErrorCode) -> None:
        assert error.status_code == status
        assert error.error_code is code
        assert isinstance(error, VidshareError)

    def test_invalid_reference_messages(self) -> None:
        assert InvalidReferenceError(kind="video id", value="  ").message == (
            "video id is missing"
        )
        assert InvalidReferenceError(kind="video id", value="xyz").message == (
            "invalid video id: 'xyz'"
        )

    def test_not_found_with_hint(self) -> None:
        error = NotFoundError(resource_type="Video", identifier="abc", hint="Check it")
        assert error.message == "Video 'abc' not found. Check it"
        assert error.details == {"resource_type": "Video", "identifier": "abc"}

    def test_timeout_message(self) -> None:
        error = StorageTimeoutError("video.get", 10.0)
        assert error.message == "Operation 'video.get' exceeded its 10s deadline"

    def test_envelope_with_details(self) -> None:
        envelope = ConflictError(message="dup", details={"k": "v"}).to_envelope()
        assert envelope.model_dump() == {
            "success": False,
            "error": "dup",
            "errors": [{"k": "v"}],
        }

    def test_envelope_without_details(self) -> None:
        envelope = BadRequestError(message="bad").to_envelope()
        assert envelope.errors == []
