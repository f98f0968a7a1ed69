"""Comment API response schemas."""

from __future__ import annotations

import datetime

from vidshare.api.schemas.common import OwnerSummary
from vidshare.api.schemas.responses import CamelModel


class CommentItem(CamelModel):
    """Comment with its author and like count."""

    id: str
    video_id: str
    content: str
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
    owner: OwnerSummary | None = None
    like_count: int = 0
