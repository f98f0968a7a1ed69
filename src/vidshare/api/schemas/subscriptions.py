"""Subscription API response schemas."""

from __future__ import annotations

import datetime

from pydantic import Field

from vidshare.api.schemas.common import OwnerSummary
from vidshare.api.schemas.responses import CamelModel


class SubscriberItem(CamelModel):
    """A user subscribed to a channel."""

    subscriber: OwnerSummary | None = None
    subscribed_at: datetime.datetime | None = None


class SubscribedChannelItem(CamelModel):
    """A channel a user is subscribed to."""

    channel: OwnerSummary | None = None
    subscribed_at: datetime.datetime | None = None


class SubscriptionToggle(CamelModel):
    """Subscription state after a toggle plus the actor's channel list."""

    channel_id: str
    subscribed: bool
    channels: list[OwnerSummary] = Field(
        default_factory=list, description="Every channel the actor now follows"
    )
