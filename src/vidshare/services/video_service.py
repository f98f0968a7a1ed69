"""
Video service.

Publishing, browsing, searching and editing videos. Media uploads go
through the injected :class:`~vidshare.services.media_store.MediaStore`.
Uploads are removed again if a later step fails, is cancelled by the
deadline, or the request transaction rolls back. Media a row stops
pointing at is only deleted once the transaction has committed.
"""

from __future__ import annotations

import functools
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.sorting import ChannelVideoSort, SortOrder, VideoSortField
from vidshare.api.schemas.videos import (
    ChannelMatch,
    DashboardVideo,
    PublishState,
    SearchResult,
    VideoDetail,
    VideoListItem,
)
from vidshare.config.database import on_commit, on_rollback
from vidshare.config.settings import settings
from vidshare.db.models import Video
from vidshare.exceptions import BadRequestError, NotFoundError
from vidshare.feed.pagination import Page, PageRequest, SortSpec
from vidshare.feed.predicates import validate_reference
from vidshare.models.video import VideoCreate, VideoUpdate
from vidshare.repositories.playlist_repository import PlaylistRepository
from vidshare.repositories.user_repository import UserRepository
from vidshare.repositories.video_repository import VideoRepository
from vidshare.repositories.watch_history_repository import WatchHistoryRepository
from vidshare.services.deadline import with_deadline
from vidshare.services.guards import ensure_found, ensure_owner
from vidshare.services.media_store import MediaReference, MediaStore, UploadedFile

logger = logging.getLogger(__name__)

VIDEO_FOLDER = "videos"
THUMBNAIL_FOLDER = "thumbnails"

# Default page size of the public feed
FEED_PAGE_LIMIT = 100

SEARCH_CHANNEL_VIDEOS = 10

_FEED_SORT_COLUMNS = {
    VideoSortField.CREATED_AT: Video.created_at,
    VideoSortField.VIEWS: Video.views,
    VideoSortField.DURATION: Video.duration,
    VideoSortField.TITLE: Video.title,
}

_CHANNEL_SORTS = {
    ChannelVideoSort.LATEST: SortSpec(Video.created_at, SortOrder.DESC),
    ChannelVideoSort.OLDEST: SortSpec(Video.created_at, SortOrder.ASC),
    ChannelVideoSort.POPULAR: SortSpec(Video.views, SortOrder.DESC),
}


class VideoService:
    """Operations on videos; every method takes the acting user explicitly."""

    def __init__(
        self,
        video_repo: VideoRepository,
        user_repo: UserRepository,
        playlist_repo: PlaylistRepository,
        history_repo: WatchHistoryRepository,
        media_store: MediaStore,
    ) -> None:
        self._video_repo = video_repo
        self._user_repo = user_repo
        self._playlist_repo = playlist_repo
        self._history_repo = history_repo
        self._media_store = media_store

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------

    @staticmethod
    def _check_upload(upload: UploadedFile | None, label: str) -> UploadedFile:
        if upload is None or not upload.data:
            raise BadRequestError(message=f"{label} is required", details={"field": label})
        if upload.size > settings.max_upload_bytes:
            raise BadRequestError(
                message=f"{label} exceeds the {settings.max_upload_bytes} byte limit",
                details={"field": label, "size": upload.size},
            )
        return upload

    async def _owned_video(
        self, session: AsyncSession, actor_id: str, raw_video_id: str
    ) -> Video:
        video_id = validate_reference(raw_video_id, "video id")
        video = ensure_found(await self._video_repo.get(session, video_id), "Video", video_id)
        ensure_owner(video.owner_id, actor_id, "Video", video_id)
        return video

    async def _cleanup(self, *references: MediaReference | str | None) -> None:
        for reference in references:
            if reference is None:
                continue
            public_id = (
                reference.public_id if isinstance(reference, MediaReference) else reference
            )
            await self._media_store.delete_quietly(public_id)

    # -------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------

    @with_deadline("video.publish")
    async def publish(
        self,
        session: AsyncSession,
        actor_id: str,
        data: VideoCreate,
        video_file: UploadedFile | None,
        thumbnail: UploadedFile | None,
    ) -> VideoDetail:
        """
        Upload a video and its thumbnail, then store the video.

        Raises
        ------
        BadRequestError
            If a file is missing or too large.
        MediaUploadError
            If the media store rejects an upload.
        """
        video_file = self._check_upload(video_file, "videoFile")
        thumbnail = self._check_upload(thumbnail, "thumbnail")

        video_ref = await self._media_store.upload(
            video_file.data, video_file.filename, VIDEO_FOLDER
        )
        thumbnail_ref: MediaReference | None = None
        stored = False
        try:
            thumbnail_ref = await self._media_store.upload(
                thumbnail.data, thumbnail.filename, THUMBNAIL_FOLDER
            )
            video = await self._video_repo.create(
                session,
                obj_in={
                    "owner_id": actor_id,
                    "title": data.title,
                    "description": data.description,
                    "is_published": data.visibility.is_published,
                    "duration": video_ref.duration,
                    "video_url": video_ref.url,
                    "video_public_id": video_ref.public_id,
                    "thumbnail_url": thumbnail_ref.url,
                    "thumbnail_public_id": thumbnail_ref.public_id,
                },
            )
            stored = True
        finally:
            # Also reached when the deadline cancels the upload or insert
            if not stored:
                await self._cleanup(video_ref, thumbnail_ref)
        on_rollback(session, functools.partial(self._cleanup, video_ref, thumbnail_ref))

        logger.info("User %s published video %s", actor_id, video.id)
        detail = await self._video_repo.get_detail(session, video.id, actor_id)
        return ensure_found(detail, "Video", video.id)

    @with_deadline("video.list")
    async def list_published(
        self,
        session: AsyncSession,
        page: int | None = None,
        limit: int | None = None,
        sort_by: VideoSortField = VideoSortField.CREATED_AT,
        sort_type: SortOrder = SortOrder.DESC,
    ) -> Page[VideoListItem]:
        """Every published video, sorted by an allow-listed field."""
        request = PageRequest.of(page, limit, default_limit=FEED_PAGE_LIMIT)
        sort = SortSpec(_FEED_SORT_COLUMNS[sort_by], sort_type)
        return await self._video_repo.list_published(session, request, sort)

    @with_deadline("video.channel")
    async def channel_videos(
        self,
        session: AsyncSession,
        raw_user_id: str,
        sort_by: ChannelVideoSort = ChannelVideoSort.LATEST,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[VideoListItem]:
        """A channel's published videos."""
        user_id = validate_reference(raw_user_id, "user id")
        if not await self._user_repo.exists(session, user_id):
            raise NotFoundError(resource_type="User", identifier=user_id)

        request = PageRequest.of(page, limit)
        return await self._video_repo.list_published(
            session, request, _CHANNEL_SORTS[sort_by], owner_id=user_id
        )

    @with_deadline("video.dashboard")
    async def dashboard(
        self, session: AsyncSession, actor_id: str, raw_user_id: str
    ) -> list[DashboardVideo]:
        """Every video of the actor's own channel, drafts included."""
        user_id = validate_reference(raw_user_id, "user id")
        ensure_owner(user_id, actor_id, "Channel", user_id)

        videos = await self._video_repo.dashboard(session, user_id)
        membership = await self._playlist_repo.membership(
            session, user_id, [video.id for video in videos]
        )
        return [
            video.model_copy(update={"playlist_ids": membership.get(video.id, [])})
            for video in videos
        ]

    @with_deadline("video.search")
    async def search(
        self,
        session: AsyncSession,
        actor_id: str | None,
        query: str | None,
        page: int | None = None,
        limit: int | None = None,
    ) -> SearchResult:
        """
        Search channels and videos.

        The best matching channel (by username or full name) is returned
        with its latest videos; video matches are paginated.
        """
        term = (query or "").strip()
        if not term:
            raise BadRequestError(
                message="Search query is required", details={"field": "query"}
            )

        channel: ChannelMatch | None = None
        row = await self._user_repo.best_channel_match(session, term, actor_id)
        if row is not None:
            mapping = row._mapping
            channel = ChannelMatch(
                id=mapping["id"],
                username=mapping["username"],
                full_name=mapping["full_name"],
                avatar_url=mapping["avatar_url"],
                subscriber_count=mapping["subscriber_count"],
                is_subscribed=bool(mapping["is_subscribed"]),
                latest_videos=await self._video_repo.latest_for_channel(
                    session, mapping["id"], SEARCH_CHANNEL_VIDEOS
                ),
            )

        videos = await self._video_repo.search(
            session, term, PageRequest.of(page, limit)
        )
        return SearchResult(channel=channel, videos=videos)

    @with_deadline("video.get")
    async def get_video(
        self, session: AsyncSession, actor_id: str, raw_video_id: str
    ) -> VideoDetail:
        """
        Fetch a video for viewing.

        Counts the view and moves the video to the front of the actor's
        watch history. Unpublished videos are only visible to their owner.
        """
        video_id = validate_reference(raw_video_id, "video id")
        video = ensure_found(await self._video_repo.get(session, video_id), "Video", video_id)
        if not video.is_published and video.owner_id != actor_id:
            raise NotFoundError(resource_type="Video", identifier=video_id)

        await self._video_repo.increment_views(session, video_id)
        await self._history_repo.record_view(session, actor_id, video_id)

        detail = await self._video_repo.get_detail(session, video_id, actor_id)
        return ensure_found(detail, "Video", video_id)

    @with_deadline("video.update")
    async def update_video(
        self,
        session: AsyncSession,
        actor_id: str,
        raw_video_id: str,
        data: VideoUpdate,
        thumbnail: UploadedFile | None = None,
    ) -> VideoDetail:
        """
        Edit a video's metadata, thumbnail and playlist membership.

        Playlists listed in ``data.playlist_ids`` must belong to the actor;
        the video is appended to those that do not already contain it.
        """
        video = await self._owned_video(session, actor_id, raw_video_id)

        playlist_ids = list(dict.fromkeys(data.playlist_ids))
        owned = await self._playlist_repo.find_owned(session, actor_id, playlist_ids)
        missing = set(playlist_ids) - {playlist.id for playlist in owned}
        if missing:
            raise NotFoundError(resource_type="Playlist", identifier=sorted(missing)[0])
        if thumbnail is not None:
            thumbnail = self._check_upload(thumbnail, "thumbnail")

        changes: dict[str, object] = {}
        if data.title is not None:
            changes["title"] = data.title
        if data.description is not None:
            changes["description"] = data.description
        if data.visibility is not None:
            changes["is_published"] = data.visibility.is_published

        old_thumbnail_id: str | None = None
        new_thumbnail: MediaReference | None = None
        if thumbnail is not None:
            new_thumbnail = await self._media_store.upload(
                thumbnail.data, thumbnail.filename, THUMBNAIL_FOLDER
            )
            old_thumbnail_id = video.thumbnail_public_id
            changes["thumbnail_url"] = new_thumbnail.url
            changes["thumbnail_public_id"] = new_thumbnail.public_id

        stored = False
        try:
            if changes:
                video = await self._video_repo.update(session, db_obj=video, obj_in=changes)
            for playlist_id in playlist_ids:
                if not await self._playlist_repo.has_video(session, playlist_id, video.id):
                    await self._playlist_repo.add_video(session, playlist_id, video.id)
            stored = True
        finally:
            if not stored:
                await self._cleanup(new_thumbnail)
        if new_thumbnail is not None:
            on_rollback(session, functools.partial(self._cleanup, new_thumbnail))
            on_commit(session, functools.partial(self._cleanup, old_thumbnail_id))

        logger.info("User %s updated video %s", actor_id, video.id)
        detail = await self._video_repo.get_detail(session, video.id, actor_id)
        return ensure_found(detail, "Video", video.id)

    @with_deadline("video.delete")
    async def delete_video(
        self, session: AsyncSession, actor_id: str, raw_video_id: str
    ) -> str:
        """
        Delete a video and everything referencing it.

        The media objects are deleted after the transaction commits.
        """
        video = await self._owned_video(session, actor_id, raw_video_id)
        video_id = video.id
        media = (video.video_public_id, video.thumbnail_public_id)

        await self._video_repo.delete_cascade(session, video)
        on_commit(session, functools.partial(self._cleanup, *media))

        logger.info("User %s deleted video %s", actor_id, video_id)
        return video_id

    @with_deadline("video.toggle_publish")
    async def toggle_publish(
        self, session: AsyncSession, actor_id: str, raw_video_id: str
    ) -> PublishState:
        """Flip the publish flag of one of the actor's videos."""
        video = await self._owned_video(session, actor_id, raw_video_id)
        video = await self._video_repo.update(
            session, db_obj=video, obj_in={"is_published": not video.is_published}
        )
        logger.info(
            "User %s set video %s published=%s", actor_id, video.id, video.is_published
        )
        return PublishState(id=video.id, is_published=video.is_published)
