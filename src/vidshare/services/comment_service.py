"""
Comment service.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.comments import CommentItem
from vidshare.db.models import Comment
from vidshare.exceptions import NotFoundError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.feed.predicates import validate_reference
from vidshare.models.comment import CommentCreate, CommentUpdate
from vidshare.repositories.comment_repository import CommentRepository
from vidshare.repositories.video_repository import VideoRepository
from vidshare.services.deadline import with_deadline
from vidshare.services.guards import ensure_found, ensure_owner

logger = logging.getLogger(__name__)


class CommentService:
    """Comments on videos."""

    def __init__(
        self, comment_repo: CommentRepository, video_repo: VideoRepository
    ) -> None:
        self._comment_repo = comment_repo
        self._video_repo = video_repo

    async def _require_video(self, session: AsyncSession, raw_video_id: str) -> str:
        video_id = validate_reference(raw_video_id, "video id")
        if not await self._video_repo.exists(session, video_id):
            raise NotFoundError(resource_type="Video", identifier=video_id)
        return video_id

    async def _owned_comment(
        self, session: AsyncSession, actor_id: str, raw_comment_id: str
    ) -> Comment:
        comment_id = validate_reference(raw_comment_id, "comment id")
        comment = ensure_found(
            await self._comment_repo.get(session, comment_id), "Comment", comment_id
        )
        ensure_owner(comment.owner_id, actor_id, "Comment", comment_id)
        return comment

    @with_deadline("comment.list")
    async def list_for_video(
        self,
        session: AsyncSession,
        raw_video_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[CommentItem]:
        """Comments on a video, newest first."""
        video_id = await self._require_video(session, raw_video_id)
        return await self._comment_repo.list_for_video(
            session, video_id, PageRequest.of(page, limit)
        )

    @with_deadline("comment.add")
    async def add_comment(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_video_id: str,
        data: CommentCreate,
    ) -> CommentItem:
        """Comment on a video as the actor."""
        video_id = await self._require_video(session, raw_video_id)
        comment = await self._comment_repo.create(
            session,
            obj_in={"video_id": video_id, "owner_id": actor_id, "content": data.content},
        )
        logger.info("User %s commented %s on video %s", actor_id, comment.id, video_id)
        item = await self._comment_repo.get_item(session, comment.id)
        return ensure_found(item, "Comment", comment.id)

    @with_deadline("comment.update")
    async def update_comment(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_comment_id: str,
        data: CommentUpdate,
    ) -> CommentItem:
        """Replace the text of one of the actor's comments."""
        comment = await self._owned_comment(session, actor_id, raw_comment_id)
        comment = await self._comment_repo.update(
            session, db_obj=comment, obj_in={"content": data.content}
        )
        item = await self._comment_repo.get_item(session, comment.id)
        return ensure_found(item, "Comment", comment.id)

    @with_deadline("comment.delete")
    async def delete_comment(
        self, session: AsyncSession, actor_id: str, raw_comment_id: str
    ) -> str:
        """Delete one of the actor's comments and the likes on it."""
        comment = await self._owned_comment(session, actor_id, raw_comment_id)
        comment_id = comment.id
        await self._comment_repo.delete_cascade(session, comment)
        logger.info("User %s deleted comment %s", actor_id, comment_id)
        return comment_id
