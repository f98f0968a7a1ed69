"""Playlist API response schemas."""

from __future__ import annotations

import datetime

from pydantic import Field

from vidshare.api.schemas.common import OwnerSummary, VideoSummary
from vidshare.api.schemas.responses import CamelModel


class PlaylistItem(CamelModel):
    """Playlist in list responses."""

    id: str
    name: str
    description: str
    owner_id: str
    video_count: int = Field(0, ge=0)
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None


class PlaylistDetail(PlaylistItem):
    """Playlist with its owner and videos in playlist order."""

    owner: OwnerSummary | None = None
    videos: list[VideoSummary] = Field(default_factory=list)
