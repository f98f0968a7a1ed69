"""
Tests for SubscriptionService.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import UserFactory, VideoFactory, create
from vidshare.container import Container
from vidshare.exceptions import BadRequestError, NotFoundError
from vidshare.services.subscription_service import SubscriptionService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(test_container: Container) -> SubscriptionService:
    return test_container.subscription_service


async def test_cannot_subscribe_to_self(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    user = await create(db_session, UserFactory)

    with pytest.raises(BadRequestError):
        await service.toggle_subscription(db_session, user.id, user.id)


async def test_unknown_channel(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    user = await create(db_session, UserFactory)

    with pytest.raises(NotFoundError) as exc_info:
        await service.toggle_subscription(db_session, user.id, "b" * 32)

    assert exc_info.value.resource_type == "Channel"


async def test_toggle_returns_followed_channels(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    fan = await create(db_session, UserFactory)
    first = await create(db_session, UserFactory)
    second = await create(db_session, UserFactory)

    await service.toggle_subscription(db_session, fan.id, first.id)
    both = await service.toggle_subscription(db_session, fan.id, second.id)
    dropped = await service.toggle_subscription(db_session, fan.id, first.id)

    assert both.subscribed is True
    assert {channel.id for channel in both.channels} == {first.id, second.id}
    assert dropped.subscribed is False
    assert [channel.id for channel in dropped.channels] == [second.id]


async def test_subscriber_and_channel_pages(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    fan = await create(db_session, UserFactory)
    channel = await create(db_session, UserFactory)
    await service.toggle_subscription(db_session, fan.id, channel.id)

    subscribers = await service.channel_subscribers(db_session, channel.id)
    channels = await service.subscribed_channels(db_session, fan.id)

    assert [item.subscriber.id for item in subscribers.items] == [fan.id]
    assert [item.channel.id for item in channels.items] == [channel.id]


async def test_latest_videos_one_per_channel(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    fan = await create(db_session, UserFactory)
    channel = await create(db_session, UserFactory)
    await create(db_session, VideoFactory, owner_id=channel.id)
    newest = await create(db_session, VideoFactory, owner_id=channel.id)
    await service.toggle_subscription(db_session, fan.id, channel.id)

    videos = await service.latest_videos(db_session, fan.id)

    assert [video.id for video in videos] == [newest.id]


async def test_latest_videos_unknown_subscriber(
    db_session: AsyncSession, service: SubscriptionService
) -> None:
    with pytest.raises(NotFoundError):
        await service.latest_videos(db_session, "c" * 32)
