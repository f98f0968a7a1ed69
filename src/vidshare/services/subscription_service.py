"""
Subscription service.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.subscriptions import (
    SubscribedChannelItem,
    SubscriberItem,
    SubscriptionToggle,
)
from vidshare.api.schemas.videos import VideoListItem
from vidshare.exceptions import BadRequestError, NotFoundError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.feed.predicates import validate_reference
from vidshare.feed.toggle import EdgeToggle
from vidshare.repositories.subscription_repository import SubscriptionRepository
from vidshare.repositories.user_repository import UserRepository
from vidshare.services.deadline import with_deadline

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Subscribe to channels and read subscription feeds."""

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        user_repo: UserRepository,
        toggle: EdgeToggle,
    ) -> None:
        self._subscription_repo = subscription_repo
        self._user_repo = user_repo
        self._toggle = toggle

    async def _require_user(
        self, session: AsyncSession, raw_user_id: str, kind: str
    ) -> str:
        user_id = validate_reference(raw_user_id, f"{kind} id")
        if not await self._user_repo.exists(session, user_id):
            raise NotFoundError(resource_type=kind.capitalize(), identifier=user_id)
        return user_id

    @with_deadline("subscription.toggle")
    async def toggle_subscription(
        self, session: AsyncSession, actor_id: str, raw_channel_id: str
    ) -> SubscriptionToggle:
        """
        Subscribe to or unsubscribe from a channel.

        Returns the new state together with every channel the actor now
        follows.
        """
        channel_id = await self._require_user(session, raw_channel_id, "channel")
        if channel_id == actor_id:
            raise BadRequestError(
                message="You cannot subscribe to your own channel",
                details={"channel_id": channel_id},
            )

        result = await self._toggle.toggle(
            session, self._subscription_repo, actor_id, channel_id
        )
        logger.info(
            "User %s %s subscription to %s", actor_id, result.action.value, channel_id
        )
        channels = await self._subscription_repo.all_subscribed_channels(
            session, actor_id
        )
        return SubscriptionToggle(
            channel_id=channel_id, subscribed=result.added, channels=channels
        )

    @with_deadline("subscription.subscribers")
    async def channel_subscribers(
        self,
        session: AsyncSession,
        raw_channel_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[SubscriberItem]:
        channel_id = await self._require_user(session, raw_channel_id, "channel")
        return await self._subscription_repo.subscribers(
            session, channel_id, PageRequest.of(page, limit)
        )

    @with_deadline("subscription.channels")
    async def subscribed_channels(
        self,
        session: AsyncSession,
        raw_subscriber_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[SubscribedChannelItem]:
        subscriber_id = await self._require_user(session, raw_subscriber_id, "subscriber")
        return await self._subscription_repo.subscribed_channels(
            session, subscriber_id, PageRequest.of(page, limit)
        )

    @with_deadline("subscription.latest_videos")
    async def latest_videos(
        self, session: AsyncSession, raw_subscriber_id: str
    ) -> list[VideoListItem]:
        """Newest published video of each followed channel, newest first."""
        subscriber_id = await self._require_user(session, raw_subscriber_id, "subscriber")
        return await self._subscription_repo.latest_videos(session, subscriber_id)
