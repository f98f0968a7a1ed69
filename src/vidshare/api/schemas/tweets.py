"""Tweet API response schemas."""

from __future__ import annotations

import datetime

from vidshare.api.schemas.common import OwnerSummary
from vidshare.api.schemas.responses import CamelModel


class TweetItem(CamelModel):
    """Tweet with its author and like count."""

    id: str
    content: str
    created_at: datetime.datetime | None = None
    updated_at: datetime.datetime | None = None
    owner: OwnerSummary | None = None
    like_count: int = 0
