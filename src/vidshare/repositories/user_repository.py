"""
User repository implementation.

Users double as channels: besides plain lookups this repository finds the
best matching channel for a search query.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.db.models import User
from vidshare.feed.expand import subscribed_by, subscriber_count
from vidshare.models.user import UserCreate, UserUpdate
from vidshare.repositories.base import BaseSQLAlchemyRepository


class UserRepository(BaseSQLAlchemyRepository[User, UserCreate, UserUpdate]):
    """Repository for users and channels."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(
        self, session: AsyncSession, username: str
    ) -> Optional[User]:
        """Get a user by unique username (case-insensitive)."""
        result = await session.execute(
            select(User).where(User.username == username.lower())
        )
        return result.scalar_one_or_none()

    async def best_channel_match(
        self, session: AsyncSession, query: str, actor_id: str | None
    ) -> Optional[Any]:
        """
        Find the channel that best matches ``query``.

        Matches on username or full name (case-insensitive substring). An
        exact username match wins, then the most subscribed channel.

        Returns
        -------
        Row | None
            Row with the user columns, ``subscriber_count`` and
            ``is_subscribed``; None when nothing matches.
        """
        pattern = f"%{query}%"
        subscribers = subscriber_count(User.id)
        stmt = (
            select(
                User.id,
                User.username,
                User.full_name,
                User.avatar_url,
                subscribers,
                subscribed_by(actor_id, User.id),
            )
            .where(or_(User.username.ilike(pattern), User.full_name.ilike(pattern)))
            .order_by(
                (User.username == query.lower()).desc(),
                subscribers.desc(),
                User.id.asc(),
            )
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.first()
