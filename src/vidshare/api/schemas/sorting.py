"""Sort enums for API endpoints.

Each list endpoint accepts only the fields enumerated here; repositories
map them onto columns.
"""

from __future__ import annotations

from enum import Enum

from vidshare.feed.pagination import SortOrder

__all__ = ["ChannelVideoSort", "SortOrder", "VideoSortField"]


class VideoSortField(str, Enum):
    """Sortable fields of the public video feed."""

    CREATED_AT = "created_at"
    VIEWS = "views"
    DURATION = "duration"
    TITLE = "title"


class ChannelVideoSort(str, Enum):
    """Orderings offered on a channel's video page."""

    LATEST = "latest"
    OLDEST = "oldest"
    POPULAR = "popular"
