"""
Tests for SubscriptionRepository feeds and edge store.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import (
    SubscriptionFactory,
    UserFactory,
    VideoFactory,
    create,
    minutes_after_base,
    persist,
)
from vidshare.exceptions import EdgeExistsError
from vidshare.feed.pagination import PageRequest
from vidshare.repositories.subscription_repository import SubscriptionRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repo() -> SubscriptionRepository:
    return SubscriptionRepository()


class TestEdgeStore:
    async def test_duplicate_insert(
        self, db_session: AsyncSession, repo: SubscriptionRepository
    ) -> None:
        fan = await create(db_session, UserFactory)
        channel = await create(db_session, UserFactory)

        await repo.insert_edge(db_session, fan.id, channel.id)
        with pytest.raises(EdgeExistsError):
            await repo.insert_edge(db_session, fan.id, channel.id)

        edge = await repo.find_edge(db_session, fan.id, channel.id)
        assert edge is not None
        await repo.delete_edge(db_session, edge)
        assert await repo.find_edge(db_session, fan.id, channel.id) is None


class TestFeeds:
    async def test_subscribers_and_channels(
        self, db_session: AsyncSession, repo: SubscriptionRepository
    ) -> None:
        fan, other_fan, channel, other_channel = (UserFactory.build() for _ in range(4))
        await persist(db_session, fan, other_fan, channel, other_channel)
        await persist(
            db_session,
            SubscriptionFactory.build(subscriber_id=fan.id, channel_id=channel.id),
            SubscriptionFactory.build(subscriber_id=other_fan.id, channel_id=channel.id),
            SubscriptionFactory.build(subscriber_id=fan.id, channel_id=other_channel.id),
        )

        subscribers = await repo.subscribers(db_session, channel.id, PageRequest(1, 10))
        channels = await repo.subscribed_channels(db_session, fan.id, PageRequest(1, 10))
        everything = await repo.all_subscribed_channels(db_session, fan.id)

        assert subscribers.total_count == 2
        assert [item.subscriber.id for item in subscribers.items] == [
            other_fan.id,
            fan.id,
        ]
        assert [item.channel.id for item in channels.items] == [
            other_channel.id,
            channel.id,
        ]
        assert [summary.id for summary in everything] == [other_channel.id, channel.id]

    async def test_latest_video_per_channel(
        self, db_session: AsyncSession, repo: SubscriptionRepository
    ) -> None:
        fan, busy, quiet, silent, ignored = (UserFactory.build() for _ in range(5))
        await persist(db_session, fan, busy, quiet, silent, ignored)
        busy_old = VideoFactory.build(owner_id=busy.id, created_at=minutes_after_base(1))
        quiet_only = VideoFactory.build(owner_id=quiet.id, created_at=minutes_after_base(2))
        busy_new = VideoFactory.build(owner_id=busy.id, created_at=minutes_after_base(3))
        busy_draft = VideoFactory.build(
            owner_id=busy.id, created_at=minutes_after_base(4), is_published=False
        )
        ignored_video = VideoFactory.build(
            owner_id=ignored.id, created_at=minutes_after_base(5)
        )
        await persist(db_session, busy_old, quiet_only, busy_new, busy_draft, ignored_video)
        await persist(
            db_session,
            *(
                SubscriptionFactory.build(subscriber_id=fan.id, channel_id=channel.id)
                for channel in (busy, quiet, silent)
            ),
        )

        latest = await repo.latest_videos(db_session, fan.id)

        assert [video.id for video in latest] == [busy_new.id, quiet_only.id]
        assert latest[0].owner.id == busy.id
