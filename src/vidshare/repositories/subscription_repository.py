"""
Subscription repository implementation.

Subscriptions are edges from a subscriber to a channel (both users).
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.common import OwnerSummary
from vidshare.api.schemas.subscriptions import SubscribedChannelItem, SubscriberItem
from vidshare.api.schemas.videos import VideoListItem
from vidshare.db.models import Subscription, User, Video
from vidshare.exceptions import EdgeExistsError
from vidshare.feed.expand import owner_columns, owner_summary
from vidshare.feed.pagination import Page, PageRequest, SortOrder, SortSpec, paginate
from vidshare.repositories.base import BaseSQLAlchemyRepository
from vidshare.repositories.video_repository import listing_statement, to_list_item


class SubscriptionRepository(
    BaseSQLAlchemyRepository[Subscription, dict[str, Any], dict[str, Any]]
):
    """Repository for subscriptions; also the edge store used to toggle them."""

    kind = "subscription"

    def __init__(self) -> None:
        super().__init__(Subscription)

    # Edge store

    async def find_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Optional[Subscription]:
        return await self.find_one(
            session, subscriber_id=actor_id, channel_id=target_id
        )

    async def insert_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Subscription:
        subscription = Subscription(subscriber_id=actor_id, channel_id=target_id)
        try:
            async with session.begin_nested():
                session.add(subscription)
                await session.flush()
        except IntegrityError as e:
            raise EdgeExistsError(
                "Subscription", actor_id, target_id, original_error=e
            ) from e
        return subscription

    async def delete_edge(self, session: AsyncSession, edge: Subscription) -> None:
        await session.delete(edge)
        await session.flush()

    # Feeds

    async def subscribers(
        self, session: AsyncSession, channel_id: str, request: PageRequest
    ) -> Page[SubscriberItem]:
        """Users subscribed to ``channel_id``, newest subscription first."""
        subscriber = aliased(User, name="subscriber")
        stmt = (
            select(
                Subscription.created_at.label("subscribed_at"),
                *owner_columns(subscriber, prefix="subscriber"),
            )
            .select_from(Subscription)
            .outerjoin(subscriber, subscriber.id == Subscription.subscriber_id)
            .where(Subscription.channel_id == channel_id)
        )
        sort = SortSpec(Subscription.created_at, SortOrder.DESC)
        return await paginate(
            session,
            stmt,
            request,
            sort.order_by(Subscription.id),
            transform=lambda row: SubscriberItem(
                subscriber=owner_summary(row, prefix="subscriber"),
                subscribed_at=row._mapping["subscribed_at"],
            ),
        )

    async def subscribed_channels(
        self, session: AsyncSession, subscriber_id: str, request: PageRequest
    ) -> Page[SubscribedChannelItem]:
        """Channels ``subscriber_id`` follows, newest subscription first."""
        channel = aliased(User, name="channel")
        stmt = (
            select(
                Subscription.created_at.label("subscribed_at"),
                *owner_columns(channel, prefix="channel"),
            )
            .select_from(Subscription)
            .outerjoin(channel, channel.id == Subscription.channel_id)
            .where(Subscription.subscriber_id == subscriber_id)
        )
        sort = SortSpec(Subscription.created_at, SortOrder.DESC)
        return await paginate(
            session,
            stmt,
            request,
            sort.order_by(Subscription.id),
            transform=lambda row: SubscribedChannelItem(
                channel=owner_summary(row, prefix="channel"),
                subscribed_at=row._mapping["subscribed_at"],
            ),
        )

    async def all_subscribed_channels(
        self, session: AsyncSession, subscriber_id: str
    ) -> list[OwnerSummary]:
        """Every channel ``subscriber_id`` follows that still exists."""
        stmt = (
            select(*owner_columns(User, prefix="channel"))
            .select_from(Subscription)
            .join(User, User.id == Subscription.channel_id)
            .where(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        result = await session.execute(stmt)
        channels = [owner_summary(row, prefix="channel") for row in result.all()]
        return [channel for channel in channels if channel is not None]

    async def latest_videos(
        self, session: AsyncSession, subscriber_id: str
    ) -> list[VideoListItem]:
        """
        The newest published video of each channel ``subscriber_id`` follows.

        Channels without a published video are skipped. Results are ordered
        newest first.
        """
        followed = select(Subscription.channel_id).where(
            Subscription.subscriber_id == subscriber_id
        )
        ranked = (
            select(
                Video.id.label("video_id"),
                func.row_number()
                .over(
                    partition_by=Video.owner_id,
                    order_by=(Video.created_at.desc(), Video.id.desc()),
                )
                .label("rank"),
            )
            .where(Video.owner_id.in_(followed), Video.is_published.is_(True))
            .subquery("ranked")
        )
        stmt = (
            listing_statement()
            .join(ranked, ranked.c.video_id == Video.id)
            .where(ranked.c.rank == 1)
            .order_by(Video.created_at.desc(), Video.id.desc())
        )
        result = await session.execute(stmt)
        return [to_list_item(row) for row in result.all()]
