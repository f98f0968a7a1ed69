"""
Watch history repository implementation.

A user's history is a move-to-front list stored one row per video. The
autoincrement ``sequence`` orders it: the newest row is the most recent
view, so moving a video to the front is a delete plus an insert.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.history import HistoryItem
from vidshare.config.settings import settings
from vidshare.db.models import Video, WatchHistoryEntry
from vidshare.exceptions import ConflictError
from vidshare.feed.expand import owner_summary
from vidshare.feed.pagination import Page, PageRequest, paginate
from vidshare.feed.recency import move_to_front
from vidshare.repositories.base import BaseSQLAlchemyRepository
from vidshare.repositories.video_repository import SUMMARY_COLUMNS, summary_statement

logger = logging.getLogger(__name__)


class WatchHistoryRepository(
    BaseSQLAlchemyRepository[WatchHistoryEntry, dict[str, Any], dict[str, Any]]
):
    """Repository for per-user watch history."""

    def __init__(self) -> None:
        super().__init__(WatchHistoryEntry)

    async def video_ids(self, session: AsyncSession, user_id: str) -> list[str]:
        """Video ids in ``user_id``'s history, most recent first."""
        result = await session.execute(
            select(WatchHistoryEntry.video_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.sequence.desc())
        )
        return list(result.scalars().all())

    async def record_view(
        self,
        session: AsyncSession,
        user_id: str,
        video_id: str,
        max_length: int | None = None,
        retry_attempts: int | None = None,
    ) -> list[str]:
        """
        Move ``video_id`` to the front of ``user_id``'s history.

        Rows displaced by the move (the previous occurrence and anything
        pushed past ``max_length``) are deleted and a new head row is
        inserted, inside a savepoint. A concurrent view of the same video
        makes the insert fail the unique constraint; the whole step is then
        re-read and retried.

        Parameters
        ----------
        session : AsyncSession
            Session in the request transaction.
        user_id : str
            Viewer.
        video_id : str
            Video just viewed.
        max_length : int | None
            History cap; defaults to ``settings.watch_history_limit``.
        retry_attempts : int | None
            Attempts before giving up; defaults to
            ``settings.toggle_retry_attempts``.

        Returns
        -------
        list[str]
            The updated history, most recent first.

        Raises
        ------
        ConflictError
            If every attempt lost a race.
        ValueError
            If ``max_length`` or ``retry_attempts`` is below 1.
        """
        limit = settings.watch_history_limit if max_length is None else max_length
        attempts = (
            settings.toggle_retry_attempts if retry_attempts is None else retry_attempts
        )
        if attempts < 1:
            raise ValueError(f"retry_attempts must be at least 1, got {attempts}")

        for attempt in range(1, attempts + 1):
            current = await self.video_ids(session, user_id)
            updated = move_to_front(current, video_id, limit)
            kept = set(updated[1:])
            displaced = [vid for vid in current if vid not in kept]

            try:
                async with session.begin_nested():
                    if displaced:
                        await session.execute(
                            delete(WatchHistoryEntry).where(
                                WatchHistoryEntry.user_id == user_id,
                                WatchHistoryEntry.video_id.in_(displaced),
                            )
                        )
                    session.add(WatchHistoryEntry(user_id=user_id, video_id=video_id))
                    await session.flush()
            except IntegrityError:
                logger.debug(
                    "Concurrent history update for user %s (attempt %d/%d)",
                    user_id,
                    attempt,
                    attempts,
                )
                continue
            return updated

        raise ConflictError(
            message="Could not update watch history: concurrent update, try again",
            details={"user_id": user_id, "video_id": video_id},
        )

    async def history(
        self, session: AsyncSession, user_id: str, request: PageRequest
    ) -> Page[HistoryItem]:
        """``user_id``'s watched videos, most recent first."""
        stmt = (
            summary_statement(WatchHistoryEntry.watched_at)
            .join(WatchHistoryEntry, WatchHistoryEntry.video_id == Video.id)
            .where(WatchHistoryEntry.user_id == user_id)
        )

        def to_item(row: Any) -> HistoryItem:
            mapping = row._mapping
            return HistoryItem(
                **{column.key: mapping[column.key] for column in SUMMARY_COLUMNS},
                watched_at=mapping["watched_at"],
                owner=owner_summary(row),
            )

        return await paginate(
            session,
            stmt,
            request,
            [WatchHistoryEntry.sequence.desc()],
            transform=to_item,
        )
