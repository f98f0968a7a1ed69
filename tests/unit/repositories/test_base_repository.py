"""
Tests for the generic repository operations.

Uses the tweet repository as a concrete subclass; every filter goes
through the allow-listed predicate builder.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import TweetFactory, UserFactory, create, persist
from vidshare.exceptions import BadRequestError
from vidshare.models.user import UserCreate, UserUpdate
from vidshare.repositories.tweet_repository import TweetRepository
from vidshare.repositories.user_repository import UserRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def tweet_repo() -> TweetRepository:
    return TweetRepository()


@pytest.fixture
def user_repo() -> UserRepository:
    return UserRepository()


class TestCrud:
    async def test_create_from_model_and_get(
        self, db_session: AsyncSession, user_repo: UserRepository
    ) -> None:
        user = await user_repo.create(
            db_session, obj_in=UserCreate(username="Carol", full_name="Carol")
        )

        fetched = await user_repo.get(db_session, user.id)

        assert fetched is not None
        assert fetched.username == "carol"
        assert await user_repo.exists(db_session, user.id) is True
        assert await user_repo.exists(db_session, "0" * 32) is False

    async def test_update_only_set_fields(
        self, db_session: AsyncSession, user_repo: UserRepository
    ) -> None:
        user = await create(db_session, UserFactory, avatar_url="http://a/1.png")

        updated = await user_repo.update(
            db_session, db_obj=user, obj_in=UserUpdate(full_name="New Name")
        )

        assert updated.full_name == "New Name"
        assert updated.avatar_url == "http://a/1.png"

    async def test_delete(
        self, db_session: AsyncSession, tweet_repo: TweetRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        tweet = await create(db_session, TweetFactory, owner_id=owner.id)

        deleted = await tweet_repo.delete(db_session, id=tweet.id)

        assert deleted is tweet
        assert await tweet_repo.get(db_session, tweet.id) is None
        assert await tweet_repo.delete(db_session, id=tweet.id) is None


class TestFilters:
    async def test_find_count_and_delete_where(
        self, db_session: AsyncSession, tweet_repo: TweetRepository
    ) -> None:
        alice = await create(db_session, UserFactory)
        bob = await create(db_session, UserFactory)
        await persist(
            db_session,
            TweetFactory.build(owner_id=alice.id),
            TweetFactory.build(owner_id=alice.id),
            TweetFactory.build(owner_id=bob.id),
        )

        assert len(await tweet_repo.find(db_session, owner_id=alice.id)) == 2
        assert await tweet_repo.count(db_session, owner_id=bob.id) == 1
        assert await tweet_repo.count(db_session) == 3
        assert (await tweet_repo.find_one(db_session, owner_id=bob.id)) is not None

        removed = await tweet_repo.delete_where(db_session, owner_id=alice.id)

        assert removed == 2
        assert await tweet_repo.count(db_session) == 1

    async def test_none_filters_are_ignored(
        self, db_session: AsyncSession, tweet_repo: TweetRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        await create(db_session, TweetFactory, owner_id=owner.id)

        assert await tweet_repo.count(db_session, owner_id=None) == 1

    async def test_unlisted_field_rejected(
        self, db_session: AsyncSession, tweet_repo: TweetRepository
    ) -> None:
        with pytest.raises(BadRequestError):
            await tweet_repo.find(db_session, content="anything")

    async def test_get_multi_paging(
        self, db_session: AsyncSession, user_repo: UserRepository
    ) -> None:
        await persist(db_session, *UserFactory.build_batch(5))

        assert len(await user_repo.get_multi(db_session, skip=3, limit=10)) == 2
