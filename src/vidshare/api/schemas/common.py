"""Schemas shared by several resources."""

from __future__ import annotations

import datetime

from pydantic import Field

from vidshare.api.schemas.responses import CamelModel


class OwnerSummary(CamelModel):
    """Public projection of a user embedded in other resources."""

    id: str = Field(..., description="User identifier")
    username: str = Field(..., description="Unique handle")
    full_name: str = Field(..., description="Display name")
    avatar_url: str | None = Field(None, description="Avatar image URL")


class VideoSummary(CamelModel):
    """Compact video card used in playlists, history and liked feeds."""

    id: str
    title: str
    thumbnail_url: str
    duration: float
    views: int
    created_at: datetime.datetime | None = None
    owner: OwnerSummary | None = None
