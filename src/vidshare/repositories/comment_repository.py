"""
Comment repository implementation.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.comments import CommentItem
from vidshare.db.models import Comment, Like, User
from vidshare.feed.expand import like_count, owner_columns, owner_summary
from vidshare.feed.pagination import Page, PageRequest, SortOrder, SortSpec, paginate
from vidshare.models.comment import CommentCreate, CommentUpdate
from vidshare.repositories.base import BaseSQLAlchemyRepository

COMMENT_COLUMNS = (
    Comment.id,
    Comment.video_id,
    Comment.content,
    Comment.created_at,
    Comment.updated_at,
)


def to_comment_item(row: Any) -> CommentItem:
    mapping = row._mapping
    return CommentItem(
        **{column.key: mapping[column.key] for column in COMMENT_COLUMNS},
        owner=owner_summary(row),
        like_count=mapping["like_count"],
    )


class CommentRepository(
    BaseSQLAlchemyRepository[Comment, CommentCreate, CommentUpdate]
):
    """Repository for comments on videos."""

    def __init__(self) -> None:
        super().__init__(Comment)

    async def list_for_video(
        self, session: AsyncSession, video_id: str, request: PageRequest
    ) -> Page[CommentItem]:
        """Comments on ``video_id`` with author and like count, newest first."""
        owner = aliased(User, name="owner")
        stmt = (
            select(
                *COMMENT_COLUMNS,
                *owner_columns(owner),
                like_count("comment", Comment.id),
            )
            .select_from(Comment)
            .outerjoin(owner, owner.id == Comment.owner_id)
            .where(Comment.video_id == video_id)
        )
        sort = SortSpec(Comment.created_at, SortOrder.DESC)
        return await paginate(
            session, stmt, request, sort.order_by(Comment.id), transform=to_comment_item
        )

    async def get_item(self, session: AsyncSession, comment_id: str) -> CommentItem | None:
        """One comment shaped like the list items."""
        owner = aliased(User, name="owner")
        stmt = (
            select(
                *COMMENT_COLUMNS,
                *owner_columns(owner),
                like_count("comment", Comment.id),
            )
            .select_from(Comment)
            .outerjoin(owner, owner.id == Comment.owner_id)
            .where(Comment.id == comment_id)
        )
        row = (await session.execute(stmt)).first()
        return to_comment_item(row) if row is not None else None

    async def delete_cascade(self, session: AsyncSession, comment: Comment) -> None:
        """Delete ``comment`` together with the likes on it."""
        await session.execute(
            delete(Like).where(
                Like.target_kind == "comment", Like.target_id == comment.id
            )
        )
        await session.delete(comment)
        await session.flush()
