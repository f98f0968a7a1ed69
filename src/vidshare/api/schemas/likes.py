"""Like API response schemas."""

from __future__ import annotations

import datetime

from pydantic import Field

from vidshare.api.schemas.common import VideoSummary
from vidshare.api.schemas.responses import CamelModel


class LikeToggle(CamelModel):
    """Like state of a target after a toggle."""

    target_kind: str = Field(..., description="video, comment or tweet")
    target_id: str
    liked: bool


class VideoLikeCount(CamelModel):
    """Number of likes on a video."""

    video_likes: int = Field(..., ge=0)


class LikedVideo(VideoSummary):
    """Video in the actor's liked feed."""

    liked_at: datetime.datetime | None = None
