"""
Tests for LikeService.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import (
    CommentFactory,
    TweetFactory,
    UserFactory,
    VideoFactory,
    create,
)
from vidshare.container import Container
from vidshare.exceptions import BadRequestError, InvalidReferenceError, NotFoundError
from vidshare.services.like_service import LikeService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(test_container: Container) -> LikeService:
    return test_container.like_service


async def test_video_like_count_follows_toggles(
    db_session: AsyncSession, service: LikeService
) -> None:
    owner = await create(db_session, UserFactory)
    fan = await create(db_session, UserFactory)
    video = await create(db_session, VideoFactory, owner_id=owner.id)

    assert (await service.video_like_count(db_session, video.id)).video_likes == 0

    liked = await service.toggle_like(db_session, fan.id, "video", video.id)
    assert liked.liked is True
    assert (await service.video_like_count(db_session, video.id)).video_likes == 1

    unliked = await service.toggle_like(db_session, fan.id, "video", video.id)
    assert unliked.liked is False
    assert (await service.video_like_count(db_session, video.id)).video_likes == 0


async def test_comment_and_tweet_likes(
    db_session: AsyncSession, service: LikeService
) -> None:
    owner = await create(db_session, UserFactory)
    video = await create(db_session, VideoFactory, owner_id=owner.id)
    comment = await create(
        db_session, CommentFactory, video_id=video.id, owner_id=owner.id
    )
    tweet = await create(db_session, TweetFactory, owner_id=owner.id)

    on_comment = await service.toggle_like(db_session, owner.id, "comment", comment.id)
    on_tweet = await service.toggle_like(db_session, owner.id, "tweet", tweet.id)

    assert (on_comment.target_kind, on_comment.liked) == ("comment", True)
    assert (on_tweet.target_kind, on_tweet.liked) == ("tweet", True)


async def test_missing_target_is_not_found(
    db_session: AsyncSession, service: LikeService
) -> None:
    fan = await create(db_session, UserFactory)

    with pytest.raises(NotFoundError) as exc_info:
        await service.toggle_like(db_session, fan.id, "tweet", "f" * 32)

    assert exc_info.value.details == {"resource_type": "Tweet", "identifier": "f" * 32}


async def test_malformed_target_id(
    db_session: AsyncSession, service: LikeService
) -> None:
    with pytest.raises(InvalidReferenceError):
        await service.toggle_like(db_session, "a" * 32, "video", "xyz")
    with pytest.raises(InvalidReferenceError):
        await service.video_like_count(db_session, "")


async def test_unknown_target_kind(
    db_session: AsyncSession, service: LikeService
) -> None:
    with pytest.raises(BadRequestError):
        await service.toggle_like(db_session, "a" * 32, "playlist", "b" * 32)


async def test_liked_videos_feed(
    db_session: AsyncSession, service: LikeService
) -> None:
    owner = await create(db_session, UserFactory)
    fan = await create(db_session, UserFactory)
    first = await create(db_session, VideoFactory, owner_id=owner.id)
    second = await create(db_session, VideoFactory, owner_id=owner.id)

    await service.toggle_like(db_session, fan.id, "video", first.id)
    await service.toggle_like(db_session, fan.id, "video", second.id)

    page = await service.liked_videos(db_session, fan.id)

    assert page.total_count == 2
    assert {item.id for item in page.items} == {first.id, second.id}
    assert all(item.owner is not None for item in page.items)
