"""
Playlist repository implementation.

Playlists are ordered sets of videos: entries carry an explicit position
and the (playlist, video) primary key rules out duplicates.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from vidshare.api.schemas.playlists import PlaylistDetail, PlaylistItem
from vidshare.db.models import Playlist, PlaylistEntry, User, Video
from vidshare.exceptions import EdgeExistsError
from vidshare.feed.expand import edge_count, owner_columns, owner_summary
from vidshare.feed.pagination import Page, PageRequest, SortOrder, SortSpec, paginate
from vidshare.feed.predicates import build_filter, where_clauses
from vidshare.models.playlist import PlaylistCreate, PlaylistUpdate
from vidshare.repositories.base import BaseSQLAlchemyRepository
from vidshare.repositories.video_repository import summary_statement, to_summary

PLAYLIST_COLUMNS = (
    Playlist.id,
    Playlist.name,
    Playlist.description,
    Playlist.owner_id,
    Playlist.created_at,
    Playlist.updated_at,
)


def _video_count() -> Any:
    return edge_count(
        PlaylistEntry, PlaylistEntry.playlist_id == Playlist.id, label="video_count"
    )


def _fields(row: Any) -> dict[str, Any]:
    mapping = row._mapping
    fields = {column.key: mapping[column.key] for column in PLAYLIST_COLUMNS}
    fields["video_count"] = mapping["video_count"]
    return fields


class PlaylistRepository(
    BaseSQLAlchemyRepository[Playlist, PlaylistCreate, PlaylistUpdate]
):
    """Repository for playlists and their entries."""

    def __init__(self) -> None:
        super().__init__(Playlist)

    async def list_for_user(
        self, session: AsyncSession, owner_id: str, request: PageRequest
    ) -> Page[PlaylistItem]:
        """Playlists owned by ``owner_id``, most recently created first."""
        stmt = select(*PLAYLIST_COLUMNS, _video_count()).where(
            Playlist.owner_id == owner_id
        )
        sort = SortSpec(Playlist.created_at, SortOrder.DESC)
        return await paginate(
            session,
            stmt,
            request,
            sort.order_by(Playlist.id),
            transform=lambda row: PlaylistItem(**_fields(row)),
        )

    async def get_detail(
        self, session: AsyncSession, playlist_id: str
    ) -> Optional[PlaylistDetail]:
        """
        Playlist with its owner and its videos in playlist order.

        Returns None when the playlist does not exist.
        """
        owner = aliased(User, name="owner")
        stmt = (
            select(*PLAYLIST_COLUMNS, _video_count(), *owner_columns(owner))
            .select_from(Playlist)
            .outerjoin(owner, owner.id == Playlist.owner_id)
            .where(Playlist.id == playlist_id)
        )
        row = (await session.execute(stmt)).first()
        if row is None:
            return None

        videos_stmt = (
            summary_statement()
            .join(PlaylistEntry, PlaylistEntry.video_id == Video.id)
            .where(PlaylistEntry.playlist_id == playlist_id)
            .order_by(PlaylistEntry.position.asc(), Video.id.asc())
        )
        videos = [to_summary(r) for r in (await session.execute(videos_stmt)).all()]

        return PlaylistDetail(**_fields(row), owner=owner_summary(row), videos=videos)

    async def has_video(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> bool:
        """Whether ``video_id`` is already in the playlist."""
        return (
            await self.count_entries(session, playlist_id=playlist_id, video_id=video_id)
            > 0
        )

    async def count_entries(self, session: AsyncSession, **filters: Any) -> int:
        """Count playlist entries matching the filter."""
        descriptor = build_filter("playlist_entries", **filters)
        result = await session.execute(
            select(func.count())
            .select_from(PlaylistEntry)
            .where(*where_clauses(PlaylistEntry, descriptor))
        )
        return int(result.scalar_one())

    async def add_video(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> PlaylistEntry:
        """
        Append ``video_id`` at the end of the playlist.

        Raises
        ------
        EdgeExistsError
            If the video is already in the playlist.
        """
        next_position = (
            select(func.coalesce(func.max(PlaylistEntry.position), -1) + 1)
            .where(PlaylistEntry.playlist_id == playlist_id)
            .scalar_subquery()
        )
        position = int((await session.execute(select(next_position))).scalar_one())

        entry = PlaylistEntry(
            playlist_id=playlist_id, video_id=video_id, position=position
        )
        try:
            async with session.begin_nested():
                session.add(entry)
                await session.flush()
        except IntegrityError as e:
            raise EdgeExistsError(
                "PlaylistEntry", playlist_id, video_id, original_error=e
            ) from e
        return entry

    async def remove_video(
        self, session: AsyncSession, playlist_id: str, video_id: str
    ) -> bool:
        """Remove ``video_id`` from the playlist; False if it was not there."""
        result = await session.execute(
            delete(PlaylistEntry).where(
                PlaylistEntry.playlist_id == playlist_id,
                PlaylistEntry.video_id == video_id,
            )
        )
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def find_owned(
        self, session: AsyncSession, owner_id: str, playlist_ids: Sequence[str]
    ) -> list[Playlist]:
        """The subset of ``playlist_ids`` that ``owner_id`` owns."""
        if not playlist_ids:
            return []
        result = await session.execute(
            select(Playlist).where(
                Playlist.owner_id == owner_id, Playlist.id.in_(playlist_ids)
            )
        )
        return list(result.scalars().all())

    async def membership(
        self, session: AsyncSession, owner_id: str, video_ids: Sequence[str]
    ) -> dict[str, list[str]]:
        """Map each of ``video_ids`` to the ``owner_id`` playlists holding it."""
        if not video_ids:
            return {}
        result = await session.execute(
            select(PlaylistEntry.video_id, PlaylistEntry.playlist_id)
            .join(Playlist, Playlist.id == PlaylistEntry.playlist_id)
            .where(
                Playlist.owner_id == owner_id,
                PlaylistEntry.video_id.in_(video_ids),
            )
            .order_by(PlaylistEntry.playlist_id)
        )
        membership: dict[str, list[str]] = {}
        for video_id, playlist_id in result.all():
            membership.setdefault(video_id, []).append(playlist_id)
        return membership

    async def delete_cascade(self, session: AsyncSession, playlist: Playlist) -> None:
        """Delete ``playlist`` and its entries."""
        await session.execute(
            delete(PlaylistEntry).where(PlaylistEntry.playlist_id == playlist.id)
        )
        await session.execute(delete(Playlist).where(Playlist.id == playlist.id))
