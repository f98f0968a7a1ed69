"""
Tweet repository implementation.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.tweets import TweetItem
from vidshare.db.models import Like, Tweet, User
from vidshare.feed.expand import like_count, owner_columns, owner_summary
from vidshare.feed.pagination import Page, PageRequest, SortOrder, SortSpec, paginate
from vidshare.models.tweet import TweetCreate, TweetUpdate
from vidshare.repositories.base import BaseSQLAlchemyRepository

TWEET_COLUMNS = (Tweet.id, Tweet.content, Tweet.created_at, Tweet.updated_at)


def _statement() -> Any:
    owner = aliased(User, name="owner")
    return (
        select(*TWEET_COLUMNS, *owner_columns(owner), like_count("tweet", Tweet.id))
        .select_from(Tweet)
        .outerjoin(owner, owner.id == Tweet.owner_id)
    )


def to_tweet_item(row: Any) -> TweetItem:
    mapping = row._mapping
    return TweetItem(
        **{column.key: mapping[column.key] for column in TWEET_COLUMNS},
        owner=owner_summary(row),
        like_count=mapping["like_count"],
    )


class TweetRepository(BaseSQLAlchemyRepository[Tweet, TweetCreate, TweetUpdate]):
    """Repository for tweets."""

    def __init__(self) -> None:
        super().__init__(Tweet)

    async def list_for_user(
        self, session: AsyncSession, owner_id: str, request: PageRequest
    ) -> Page[TweetItem]:
        """Tweets by ``owner_id``, newest first."""
        stmt = _statement().where(Tweet.owner_id == owner_id)
        sort = SortSpec(Tweet.created_at, SortOrder.DESC)
        return await paginate(
            session, stmt, request, sort.order_by(Tweet.id), transform=to_tweet_item
        )

    async def get_item(self, session: AsyncSession, tweet_id: str) -> TweetItem | None:
        """One tweet shaped like the list items."""
        row = (await session.execute(_statement().where(Tweet.id == tweet_id))).first()
        return to_tweet_item(row) if row is not None else None

    async def delete_cascade(self, session: AsyncSession, tweet: Tweet) -> None:
        """Delete ``tweet`` together with the likes on it."""
        await session.execute(
            delete(Like).where(Like.target_kind == "tweet", Like.target_id == tweet.id)
        )
        await session.delete(tweet)
        await session.flush()
