"""
Like repository implementation.

Likes are edges from a user to a video, comment or tweet. Each target
kind gets its own :class:`LikeEdgeStore` so the edge toggle can be
applied without knowing about the polymorphic target columns.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.likes import LikedVideo
from vidshare.db.models import LIKE_TARGET_KINDS, Like, User, Video
from vidshare.exceptions import EdgeExistsError
from vidshare.feed.expand import owner_columns, owner_summary
from vidshare.feed.pagination import Page, PageRequest, SortOrder, SortSpec, paginate
from vidshare.repositories.base import BaseSQLAlchemyRepository
from vidshare.repositories.video_repository import SUMMARY_COLUMNS


class LikeEdgeStore:
    """Edge store for likes on one target kind."""

    def __init__(self, target_kind: str) -> None:
        if target_kind not in LIKE_TARGET_KINDS:
            raise ValueError(f"Unknown like target kind: {target_kind}")
        self.target_kind = target_kind
        self.kind = f"{target_kind}-like"

    async def find_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Optional[Like]:
        result = await session.execute(
            select(Like).where(
                Like.liked_by == actor_id,
                Like.target_kind == self.target_kind,
                Like.target_id == target_id,
            )
        )
        return result.scalar_one_or_none()

    async def insert_edge(
        self, session: AsyncSession, actor_id: str, target_id: str
    ) -> Like:
        like = Like(liked_by=actor_id, target_kind=self.target_kind, target_id=target_id)
        try:
            async with session.begin_nested():
                session.add(like)
                await session.flush()
        except IntegrityError as e:
            raise EdgeExistsError("Like", actor_id, target_id, original_error=e) from e
        return like

    async def delete_edge(self, session: AsyncSession, edge: Like) -> None:
        await session.delete(edge)
        await session.flush()


class LikeRepository(BaseSQLAlchemyRepository[Like, dict[str, Any], dict[str, Any]]):
    """Repository for likes."""

    def __init__(self) -> None:
        super().__init__(Like)
        self._stores = {kind: LikeEdgeStore(kind) for kind in LIKE_TARGET_KINDS}

    def store(self, target_kind: str) -> LikeEdgeStore:
        """Edge store for ``target_kind`` (video, comment or tweet)."""
        return self._stores[target_kind]

    async def count_for(
        self, session: AsyncSession, target_kind: str, target_id: str
    ) -> int:
        """Number of likes on one target."""
        return await self.count(session, target_kind=target_kind, target_id=target_id)

    async def delete_for(
        self, session: AsyncSession, target_kind: str, target_id: str
    ) -> int:
        """Remove every like on one target."""
        return await self.delete_where(
            session, target_kind=target_kind, target_id=target_id
        )

    async def liked_videos(
        self, session: AsyncSession, actor_id: str, request: PageRequest
    ) -> Page[LikedVideo]:
        """
        Videos ``actor_id`` likes, most recently liked first.

        The video owner is outer joined, so a liked video whose owner is
        gone is returned with a null owner.
        """
        owner = aliased(User, name="owner")
        stmt = (
            select(
                *SUMMARY_COLUMNS,
                Like.created_at.label("liked_at"),
                *owner_columns(owner),
            )
            .select_from(Like)
            .join(Video, Video.id == Like.target_id)
            .outerjoin(owner, owner.id == Video.owner_id)
            .where(Like.liked_by == actor_id, Like.target_kind == "video")
        )
        sort = SortSpec(Like.created_at, SortOrder.DESC)

        def to_item(row: Any) -> LikedVideo:
            mapping = row._mapping
            return LikedVideo(
                **{column.key: mapping[column.key] for column in SUMMARY_COLUMNS},
                liked_at=mapping["liked_at"],
                owner=owner_summary(row),
            )

        return await paginate(
            session, stmt, request, sort.order_by(Like.id), transform=to_item
        )
