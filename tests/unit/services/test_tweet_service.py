"""
Tests for TweetService.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import UserFactory, create
from vidshare.container import Container
from vidshare.exceptions import NotFoundError, UnauthorizedError
from vidshare.models.tweet import TweetCreate, TweetUpdate
from vidshare.services.tweet_service import TweetService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(test_container: Container) -> TweetService:
    return test_container.tweet_service


async def test_create_and_list(db_session: AsyncSession, service: TweetService) -> None:
    author = await create(db_session, UserFactory)

    first = await service.create_tweet(db_session, author.id, TweetCreate(content="one"))
    second = await service.create_tweet(db_session, author.id, TweetCreate(content="two"))
    page = await service.list_for_user(db_session, author.id)

    assert page.total_count == 2
    assert {item.id for item in page.items} == {first.id, second.id}
    assert first.like_count == 0


async def test_blank_tweet_rejected() -> None:
    with pytest.raises(ValidationError):
        TweetCreate(content="   ")


async def test_list_for_unknown_user(
    db_session: AsyncSession, service: TweetService
) -> None:
    with pytest.raises(NotFoundError):
        await service.list_for_user(db_session, "a" * 32)


async def test_update_and_delete_by_author(
    db_session: AsyncSession, service: TweetService
) -> None:
    author = await create(db_session, UserFactory)
    other = await create(db_session, UserFactory)
    tweet = await service.create_tweet(db_session, author.id, TweetCreate(content="v1"))

    with pytest.raises(UnauthorizedError):
        await service.update_tweet(
            db_session, other.id, tweet.id, TweetUpdate(content="nope")
        )

    updated = await service.update_tweet(
        db_session, author.id, tweet.id, TweetUpdate(content="v2")
    )
    deleted = await service.delete_tweet(db_session, author.id, tweet.id)

    assert updated.content == "v2"
    assert deleted == tweet.id
    with pytest.raises(NotFoundError):
        await service.delete_tweet(db_session, author.id, tweet.id)
