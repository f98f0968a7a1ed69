"""
Video repository implementation.

Holds the video feeds: the public feed, a channel's published videos,
search, the owner's dashboard and the single-video detail aggregation.
All of them outer join the owner, so a video whose owner row is gone is
still listed with a null owner.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.common import VideoSummary
from vidshare.api.schemas.videos import DashboardVideo, VideoDetail, VideoListItem
from vidshare.db.models import (
    Comment,
    Like,
    PlaylistEntry,
    User,
    Video,
    WatchHistoryEntry,
)
from vidshare.feed.expand import (
    comment_count,
    like_count,
    liked_by,
    owner_columns,
    owner_summary,
    subscribed_by,
    subscriber_count,
)
from vidshare.feed.pagination import Page, PageRequest, SortSpec, paginate
from vidshare.models.video import VideoCreate, VideoUpdate
from vidshare.repositories.base import BaseSQLAlchemyRepository

logger = logging.getLogger(__name__)

# Columns shared by every video listing, in the order the row mappers expect.
LIST_COLUMNS = (
    Video.id,
    Video.title,
    Video.description,
    Video.video_url,
    Video.thumbnail_url,
    Video.duration,
    Video.views,
    Video.is_published,
    Video.created_at,
)

SUMMARY_COLUMNS = (
    Video.id,
    Video.title,
    Video.thumbnail_url,
    Video.duration,
    Video.views,
    Video.created_at,
)


def _fields(row: Any, columns: Sequence[Any]) -> dict[str, Any]:
    mapping = row._mapping
    return {column.key: mapping[column.key] for column in columns}


def to_list_item(row: Any) -> VideoListItem:
    """Map a row selected with LIST_COLUMNS + owner columns."""
    return VideoListItem(**_fields(row, LIST_COLUMNS), owner=owner_summary(row))


def to_summary(row: Any) -> VideoSummary:
    """Map a row selected with SUMMARY_COLUMNS + owner columns."""
    return VideoSummary(**_fields(row, SUMMARY_COLUMNS), owner=owner_summary(row))


def listing_statement(*extra: Any) -> Any:
    """Videos with their owner summary outer joined."""
    owner = aliased(User, name="owner")
    return (
        select(*LIST_COLUMNS, *owner_columns(owner), *extra)
        .select_from(Video)
        .outerjoin(owner, owner.id == Video.owner_id)
    )


def summary_statement(*extra: Any) -> Any:
    """Compact video cards with their owner summary outer joined."""
    owner = aliased(User, name="owner")
    return (
        select(*SUMMARY_COLUMNS, *owner_columns(owner), *extra)
        .select_from(Video)
        .outerjoin(owner, owner.id == Video.owner_id)
    )


class VideoRepository(BaseSQLAlchemyRepository[Video, VideoCreate, VideoUpdate]):
    """Repository for videos and the feeds built from them."""

    def __init__(self) -> None:
        super().__init__(Video)

    async def list_published(
        self,
        session: AsyncSession,
        request: PageRequest,
        sort: SortSpec,
        owner_id: str | None = None,
    ) -> Page[VideoListItem]:
        """
        Published videos, optionally restricted to one channel.

        Parameters
        ----------
        session : AsyncSession
            Database session.
        request : PageRequest
            Page and limit.
        sort : SortSpec
            Sort column and direction; the video id breaks ties.
        owner_id : str | None
            Channel to restrict to.

        Returns
        -------
        Page[VideoListItem]
            The requested page.
        """
        stmt = listing_statement().where(Video.is_published.is_(True))
        if owner_id is not None:
            stmt = stmt.where(Video.owner_id == owner_id)
        return await paginate(
            session, stmt, request, sort.order_by(Video.id), transform=to_list_item
        )

    async def search(
        self, session: AsyncSession, query: str, request: PageRequest
    ) -> Page[VideoListItem]:
        """Published videos whose title or description contains ``query``."""
        pattern = f"%{query}%"
        stmt = listing_statement().where(
            Video.is_published.is_(True),
            or_(Video.title.ilike(pattern), Video.description.ilike(pattern)),
        )
        order_by = [Video.views.desc(), Video.created_at.desc(), Video.id.desc()]
        return await paginate(session, stmt, request, order_by, transform=to_list_item)

    async def latest_for_channel(
        self, session: AsyncSession, owner_id: str, limit: int = 10
    ) -> list[VideoSummary]:
        """The channel's most recent published videos."""
        stmt = (
            summary_statement()
            .where(Video.owner_id == owner_id, Video.is_published.is_(True))
            .order_by(Video.created_at.desc(), Video.id.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [to_summary(row) for row in result.all()]

    async def get_detail(
        self, session: AsyncSession, video_id: str, actor_id: str | None
    ) -> Optional[VideoDetail]:
        """
        Single video with counts and the actor's like/subscription flags.

        Returns None when the video does not exist.
        """
        stmt = listing_statement(
            like_count("video", Video.id),
            comment_count(Video.id),
            subscriber_count(Video.owner_id),
            liked_by(actor_id, "video", Video.id),
            subscribed_by(actor_id, Video.owner_id),
        ).where(Video.id == video_id)
        row = (await session.execute(stmt)).first()
        if row is None:
            return None

        mapping = row._mapping
        return VideoDetail(
            **_fields(row, LIST_COLUMNS),
            owner=owner_summary(row),
            like_count=mapping["like_count"],
            comment_count=mapping["comment_count"],
            subscriber_count=mapping["subscriber_count"],
            is_liked=bool(mapping["is_liked"]),
            is_subscribed=bool(mapping["is_subscribed"]),
        )

    async def increment_views(self, session: AsyncSession, video_id: str) -> None:
        """Atomically add one view."""
        await session.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )

    async def dashboard(
        self, session: AsyncSession, owner_id: str
    ) -> list[DashboardVideo]:
        """
        Every video of ``owner_id`` with like and comment counts.

        Drafts come first, then newest first. Playlist membership is filled
        in by the caller.
        """
        stmt = (
            select(
                *LIST_COLUMNS,
                like_count("video", Video.id),
                comment_count(Video.id),
            )
            .where(Video.owner_id == owner_id)
            .order_by(
                Video.is_published.asc(), Video.created_at.desc(), Video.id.desc()
            )
        )
        result = await session.execute(stmt)
        return [
            DashboardVideo(
                **_fields(row, LIST_COLUMNS),
                like_count=row._mapping["like_count"],
                comment_count=row._mapping["comment_count"],
            )
            for row in result.all()
        ]

    async def delete_cascade(self, session: AsyncSession, video: Video) -> None:
        """
        Delete ``video`` and everything that references it.

        Removes, in order: likes on its comments, its comments, likes on
        the video, playlist entries and watch-history rows.
        """
        comment_ids = select(Comment.id).where(Comment.video_id == video.id)
        await session.execute(
            delete(Like).where(
                Like.target_kind == "comment", Like.target_id.in_(comment_ids)
            ).execution_options(synchronize_session=False)
        )
        await session.execute(delete(Comment).where(Comment.video_id == video.id))
        await session.execute(
            delete(Like).where(Like.target_kind == "video", Like.target_id == video.id)
        )
        await session.execute(
            delete(PlaylistEntry).where(PlaylistEntry.video_id == video.id)
        )
        await session.execute(
            delete(WatchHistoryEntry).where(WatchHistoryEntry.video_id == video.id)
        )
        await session.execute(delete(Video).where(Video.id == video.id))
        logger.debug("Deleted video %s and its dependents", video.id)
