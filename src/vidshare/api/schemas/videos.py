"""Video API response schemas."""

from __future__ import annotations

import datetime

from pydantic import Field

from vidshare.api.schemas.common import OwnerSummary, VideoSummary
from vidshare.api.schemas.responses import CamelModel
from vidshare.feed.pagination import Page


class VideoListItem(CamelModel):
    """Video as shown in feeds and search results."""

    id: str
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime.datetime | None = None
    owner: OwnerSummary | None = Field(
        None, description="Null when the owner no longer exists"
    )


class VideoDetail(VideoListItem):
    """Single video with engagement counts and the actor's relation to it."""

    like_count: int = 0
    comment_count: int = 0
    subscriber_count: int = Field(0, description="Subscribers of the owner's channel")
    is_liked: bool = False
    is_subscribed: bool = False


class DashboardVideo(CamelModel):
    """Video row of the owner's dashboard, drafts included."""

    id: str
    title: str
    description: str | None = None
    video_url: str
    thumbnail_url: str
    duration: float
    views: int
    is_published: bool
    created_at: datetime.datetime | None = None
    like_count: int = 0
    comment_count: int = 0
    playlist_ids: list[str] = Field(
        default_factory=list,
        description="The owner's playlists that contain this video",
    )


class ChannelMatch(OwnerSummary):
    """Channel that best matches a search query."""

    subscriber_count: int = 0
    is_subscribed: bool = False
    latest_videos: list[VideoSummary] = Field(default_factory=list)


class SearchResult(CamelModel):
    """Combined channel + video search response."""

    channel: ChannelMatch | None = None
    videos: Page[VideoListItem]


class PublishState(CamelModel):
    """Publish flag after a toggle."""

    id: str
    is_published: bool
