"""API schema exports.

Only the envelope and shared schemas are re-exported here; resource
schemas are imported from their own modules.
"""

from vidshare.api.schemas.common import OwnerSummary, VideoSummary
from vidshare.api.schemas.responses import (
    ApiResponse,
    CamelModel,
    ErrorCode,
    ErrorEnvelope,
    FieldError,
    ok,
)

__all__ = [
    "ApiResponse",
    "CamelModel",
    "ErrorCode",
    "ErrorEnvelope",
    "FieldError",
    "OwnerSummary",
    "VideoSummary",
    "ok",
]
