"""
Playlist service.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.playlists import PlaylistDetail, PlaylistItem
from vidshare.db.models import Playlist
from vidshare.exceptions import ConflictError, EdgeExistsError, NotFoundError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.feed.predicates import validate_reference
from vidshare.models.playlist import PlaylistCreate, PlaylistUpdate
from vidshare.repositories.playlist_repository import PlaylistRepository
from vidshare.repositories.user_repository import UserRepository
from vidshare.repositories.video_repository import VideoRepository
from vidshare.services.deadline import with_deadline
from vidshare.services.guards import ensure_found, ensure_owner

logger = logging.getLogger(__name__)


class PlaylistService:
    """User-curated playlists."""

    def __init__(
        self,
        playlist_repo: PlaylistRepository,
        video_repo: VideoRepository,
        user_repo: UserRepository,
    ) -> None:
        self._playlist_repo = playlist_repo
        self._video_repo = video_repo
        self._user_repo = user_repo

    async def _owned_playlist(
        self, session: AsyncSession, actor_id: str, raw_playlist_id: str
    ) -> Playlist:
        playlist_id = validate_reference(raw_playlist_id, "playlist id")
        playlist = ensure_found(
            await self._playlist_repo.get(session, playlist_id), "Playlist", playlist_id
        )
        ensure_owner(playlist.owner_id, actor_id, "Playlist", playlist_id)
        return playlist

    async def _detail(self, session: AsyncSession, playlist_id: str) -> PlaylistDetail:
        detail = await self._playlist_repo.get_detail(session, playlist_id)
        return ensure_found(detail, "Playlist", playlist_id)

    @with_deadline("playlist.create")
    async def create_playlist(
        self, session: AsyncSession, actor_id: str, data: PlaylistCreate
    ) -> PlaylistDetail:
        playlist = await self._playlist_repo.create(
            session,
            obj_in={"owner_id": actor_id, "name": data.name, "description": data.description},
        )
        logger.info("User %s created playlist %s", actor_id, playlist.id)
        return await self._detail(session, playlist.id)

    @with_deadline("playlist.list")
    async def list_for_user(
        self,
        session: AsyncSession,
        raw_user_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[PlaylistItem]:
        user_id = validate_reference(raw_user_id, "user id")
        if not await self._user_repo.exists(session, user_id):
            raise NotFoundError(resource_type="User", identifier=user_id)
        return await self._playlist_repo.list_for_user(
            session, user_id, PageRequest.of(page, limit)
        )

    @with_deadline("playlist.get")
    async def get_playlist(
        self, session: AsyncSession, raw_playlist_id: str
    ) -> PlaylistDetail:
        """Playlist with its owner and videos in playlist order."""
        playlist_id = validate_reference(raw_playlist_id, "playlist id")
        return await self._detail(session, playlist_id)

    @with_deadline("playlist.update")
    async def update_playlist(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_playlist_id: str,
        data: PlaylistUpdate,
    ) -> PlaylistDetail:
        playlist = await self._owned_playlist(session, actor_id, raw_playlist_id)
        playlist = await self._playlist_repo.update(session, db_obj=playlist, obj_in=data)
        return await self._detail(session, playlist.id)

    @with_deadline("playlist.delete")
    async def delete_playlist(
        self, session: AsyncSession, actor_id: str, raw_playlist_id: str
    ) -> str:
        """
        Delete one of the actor's playlists.

        Raises
        ------
        NotFoundError
            If the playlist does not exist.
        UnauthorizedError
            If the actor does not own it.
        """
        playlist = await self._owned_playlist(session, actor_id, raw_playlist_id)
        playlist_id = playlist.id
        await self._playlist_repo.delete_cascade(session, playlist)
        logger.info("User %s deleted playlist %s", actor_id, playlist_id)
        return playlist_id

    @with_deadline("playlist.add_video")
    async def add_video(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_video_id: str,
        raw_playlist_id: str,
    ) -> PlaylistDetail:
        """
        Append a video to one of the actor's playlists.

        Raises
        ------
        ConflictError
            If the video is already in the playlist.
        """
        video_id = validate_reference(raw_video_id, "video id")
        playlist = await self._owned_playlist(session, actor_id, raw_playlist_id)
        if not await self._video_repo.exists(session, video_id):
            raise NotFoundError(resource_type="Video", identifier=video_id)

        conflict = ConflictError(
            message="Video already exists in the playlist",
            details={"playlist_id": playlist.id, "video_id": video_id},
        )
        if await self._playlist_repo.has_video(session, playlist.id, video_id):
            raise conflict
        try:
            await self._playlist_repo.add_video(session, playlist.id, video_id)
        except EdgeExistsError as e:
            raise conflict from e

        logger.info("User %s added video %s to playlist %s", actor_id, video_id, playlist.id)
        return await self._detail(session, playlist.id)

    @with_deadline("playlist.remove_video")
    async def remove_video(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_video_id: str,
        raw_playlist_id: str,
    ) -> PlaylistDetail:
        """Remove a video from one of the actor's playlists."""
        video_id = validate_reference(raw_video_id, "video id")
        playlist = await self._owned_playlist(session, actor_id, raw_playlist_id)
        if not await self._playlist_repo.remove_video(session, playlist.id, video_id):
            raise NotFoundError(
                resource_type="Video",
                identifier=video_id,
                hint="It is not in this playlist",
            )
        logger.info(
            "User %s removed video %s from playlist %s", actor_id, video_id, playlist.id
        )
        return await self._detail(session, playlist.id)
