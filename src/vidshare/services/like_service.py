"""
Like service.

Likes on videos, comments and tweets are toggled through the shared
:class:`~vidshare.feed.toggle.EdgeToggle`.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.likes import LikedVideo, LikeToggle, VideoLikeCount
from vidshare.exceptions import BadRequestError, NotFoundError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.feed.predicates import validate_reference
from vidshare.feed.toggle import EdgeToggle
from vidshare.repositories.base import BaseSQLAlchemyRepository
from vidshare.repositories.comment_repository import CommentRepository
from vidshare.repositories.like_repository import LikeRepository
from vidshare.repositories.tweet_repository import TweetRepository
from vidshare.repositories.video_repository import VideoRepository
from vidshare.services.deadline import with_deadline

logger = logging.getLogger(__name__)


class LikeService:
    """Toggle likes and read like feeds and counts."""

    def __init__(
        self,
        like_repo: LikeRepository,
        video_repo: VideoRepository,
        comment_repo: CommentRepository,
        tweet_repo: TweetRepository,
        toggle: EdgeToggle,
    ) -> None:
        self._like_repo = like_repo
        self._video_repo = video_repo
        self._toggle = toggle
        self._targets: dict[str, tuple[str, BaseSQLAlchemyRepository[Any, Any, Any]]] = {
            "video": ("Video", video_repo),
            "comment": ("Comment", comment_repo),
            "tweet": ("Tweet", tweet_repo),
        }

    @with_deadline("like.toggle")
    async def toggle_like(
        self,
        session: AsyncSession,
        actor_id: str,
        target_kind: str,
        raw_target_id: str,
    ) -> LikeToggle:
        """
        Like the target if the actor does not like it yet, otherwise unlike it.

        Raises
        ------
        InvalidReferenceError
            If the target id is malformed.
        NotFoundError
            If the target does not exist.
        ConflictError
            If concurrent toggles kept racing.
        """
        if target_kind not in self._targets:
            raise BadRequestError(
                message=f"Cannot like a {target_kind}",
                details={"target_kind": target_kind},
            )
        resource_type, repo = self._targets[target_kind]
        target_id = validate_reference(raw_target_id, f"{target_kind} id")
        if not await repo.exists(session, target_id):
            raise NotFoundError(resource_type=resource_type, identifier=target_id)

        result = await self._toggle.toggle(
            session, self._like_repo.store(target_kind), actor_id, target_id
        )
        logger.info(
            "User %s %s like on %s %s",
            actor_id,
            result.action.value,
            target_kind,
            target_id,
        )
        return LikeToggle(target_kind=target_kind, target_id=target_id, liked=result.added)

    @with_deadline("like.liked_videos")
    async def liked_videos(
        self,
        session: AsyncSession,
        actor_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[LikedVideo]:
        """Videos the actor likes, most recently liked first."""
        return await self._like_repo.liked_videos(
            session, actor_id, PageRequest.of(page, limit)
        )

    @with_deadline("like.video_count")
    async def video_like_count(
        self, session: AsyncSession, raw_video_id: str
    ) -> VideoLikeCount:
        video_id = validate_reference(raw_video_id, "video id")
        if not await self._video_repo.exists(session, video_id):
            raise NotFoundError(resource_type="Video", identifier=video_id)
        count = await self._like_repo.count_for(session, "video", video_id)
        return VideoLikeCount(video_likes=count)
