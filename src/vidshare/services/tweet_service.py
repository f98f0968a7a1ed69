"""
Tweet service.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.tweets import TweetItem
from vidshare.db.models import Tweet
from vidshare.exceptions import NotFoundError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.feed.predicates import validate_reference
from vidshare.models.tweet import TweetCreate, TweetUpdate
from vidshare.repositories.tweet_repository import TweetRepository
from vidshare.repositories.user_repository import UserRepository
from vidshare.services.deadline import with_deadline
from vidshare.services.guards import ensure_found, ensure_owner

logger = logging.getLogger(__name__)


class TweetService:
    """Short text posts."""

    def __init__(self, tweet_repo: TweetRepository, user_repo: UserRepository) -> None:
        self._tweet_repo = tweet_repo
        self._user_repo = user_repo

    async def _owned_tweet(
        self, session: AsyncSession, actor_id: str, raw_tweet_id: str
    ) -> Tweet:
        tweet_id = validate_reference(raw_tweet_id, "tweet id")
        tweet = ensure_found(await self._tweet_repo.get(session, tweet_id), "Tweet", tweet_id)
        ensure_owner(tweet.owner_id, actor_id, "Tweet", tweet_id)
        return tweet

    @with_deadline("tweet.create")
    async def create_tweet(
        self, session: AsyncSession, actor_id: str, data: TweetCreate
    ) -> TweetItem:
        tweet = await self._tweet_repo.create(
            session, obj_in={"owner_id": actor_id, "content": data.content}
        )
        logger.info("User %s posted tweet %s", actor_id, tweet.id)
        return ensure_found(await self._tweet_repo.get_item(session, tweet.id), "Tweet", tweet.id)

    @with_deadline("tweet.list")
    async def list_for_user(
        self,
        session: AsyncSession,
        raw_user_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[TweetItem]:
        """A user's tweets, newest first."""
        user_id = validate_reference(raw_user_id, "user id")
        if not await self._user_repo.exists(session, user_id):
            raise NotFoundError(resource_type="User", identifier=user_id)
        return await self._tweet_repo.list_for_user(
            session, user_id, PageRequest.of(page, limit)
        )

    @with_deadline("tweet.update")
    async def update_tweet(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_tweet_id: str,
        data: TweetUpdate,
    ) -> TweetItem:
        tweet = await self._owned_tweet(session, actor_id, raw_tweet_id)
        tweet = await self._tweet_repo.update(
            session, db_obj=tweet, obj_in={"content": data.content}
        )
        return ensure_found(await self._tweet_repo.get_item(session, tweet.id), "Tweet", tweet.id)

    @with_deadline("tweet.delete")
    async def delete_tweet(
        self, session: AsyncSession, actor_id: str, raw_tweet_id: str
    ) -> str:
        tweet = await self._owned_tweet(session, actor_id, raw_tweet_id)
        tweet_id = tweet.id
        await self._tweet_repo.delete_cascade(session, tweet)
        logger.info("User %s deleted tweet %s", actor_id, tweet_id)
        return tweet_id
