"""Watch history API response schemas."""

from __future__ import annotations

import datetime

from vidshare.api.schemas.common import VideoSummary


class HistoryItem(VideoSummary):
    """Video in the actor's watch history."""

    watched_at: datetime.datetime | None = None
