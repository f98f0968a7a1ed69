"""Video endpoints.

Publishing and editing take multipart forms (metadata fields plus the
``videoFile`` / ``thumbnail`` uploads); everything else is JSON.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from vidshare.api.deps import ActorId, DbSession, get_video_service
from vidshare.api.routers._forms import parse_form, parse_id_list, read_upload
from vidshare.api.routers.responses import GET_ITEM_ERRORS, LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.responses import ApiResponse
from vidshare.api.schemas.sorting import ChannelVideoSort, SortOrder, VideoSortField
from vidshare.api.schemas.videos import (
    DashboardVideo,
    PublishState,
    SearchResult,
    VideoDetail,
    VideoListItem,
)
from vidshare.feed.pagination import Page
from vidshare.models.video import VideoCreate, VideoUpdate
from vidshare.services import VideoService

router = APIRouter(prefix="/videos")


@router.post(
    "",
    response_model=ApiResponse[VideoDetail],
    status_code=status.HTTP_201_CREATED,
    responses=MUTATION_ERRORS,
)
async def publish_video(
    actor_id: ActorId,
    session: DbSession,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    visibility: Optional[str] = Form(None, description="public or private"),
    video_file: Optional[UploadFile] = File(None, alias="videoFile"),
    thumbnail: Optional[UploadFile] = File(None),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[VideoDetail]:
    """Upload a video with its thumbnail and publish it."""
    data = parse_form(
        VideoCreate, title=title, description=description, visibility=visibility
    )
    video = await service.publish(
        session,
        actor_id,
        data,
        await read_upload(video_file),
        await read_upload(thumbnail),
    )
    return ApiResponse[VideoDetail](
        status_code=status.HTTP_201_CREATED,
        message="Video published successfully",
        data=video,
    )


@router.get("", response_model=ApiResponse[Page[VideoListItem]], responses=LIST_ERRORS)
async def list_videos(
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Items per page (default 100)"),
    sort_by: VideoSortField = Query(VideoSortField.CREATED_AT, alias="sortBy"),
    sort_type: SortOrder = Query(SortOrder.DESC, alias="sortType"),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[Page[VideoListItem]]:
    """Published videos from every channel."""
    videos = await service.list_published(session, page, limit, sort_by, sort_type)
    return ApiResponse[Page[VideoListItem]](
        message="Videos fetched successfully", data=videos
    )


@router.get("/search", response_model=ApiResponse[SearchResult], responses=LIST_ERRORS)
async def search_videos(
    actor_id: ActorId,
    session: DbSession,
    query: Optional[str] = Query(None, description="Search text"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[SearchResult]:
    """Best matching channel plus paginated matching videos."""
    result = await service.search(session, actor_id, query, page, limit)
    return ApiResponse[SearchResult](
        message="Search results fetched successfully", data=result
    )


@router.get(
    "/u/{user_id}/published",
    response_model=ApiResponse[Page[VideoListItem]],
    responses=LIST_ERRORS,
)
async def channel_videos(
    user_id: str,
    actor_id: ActorId,
    session: DbSession,
    sort_by: ChannelVideoSort = Query(ChannelVideoSort.LATEST, alias="sortBy"),
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[Page[VideoListItem]]:
    """A channel's published videos."""
    videos = await service.channel_videos(session, user_id, sort_by, page, limit)
    return ApiResponse[Page[VideoListItem]](
        message="Channel videos fetched successfully", data=videos
    )


@router.get(
    "/u/{user_id}/all",
    response_model=ApiResponse[list[DashboardVideo]],
    responses=LIST_ERRORS,
)
async def channel_dashboard(
    user_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[list[DashboardVideo]]:
    """Every video of the actor's own channel with counts and playlists."""
    videos = await service.dashboard(session, actor_id, user_id)
    return ApiResponse[list[DashboardVideo]](
        message="Channel videos fetched successfully", data=videos
    )


@router.patch(
    "/toggle/publish/{video_id}",
    response_model=ApiResponse[PublishState],
    responses=MUTATION_ERRORS,
)
async def toggle_publish(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[PublishState]:
    state = await service.toggle_publish(session, actor_id, video_id)
    return ApiResponse[PublishState](
        message="Publish status toggled successfully", data=state
    )


@router.get("/{video_id}", response_model=ApiResponse[VideoDetail], responses=GET_ITEM_ERRORS)
async def get_video(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[VideoDetail]:
    """Watch a video: counts the view and records it in the actor's history."""
    video = await service.get_video(session, actor_id, video_id)
    return ApiResponse[VideoDetail](message="Video fetched successfully", data=video)


@router.patch("/{video_id}", response_model=ApiResponse[VideoDetail], responses=MUTATION_ERRORS)
async def update_video(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    visibility: Optional[str] = Form(None),
    playlist_ids: Optional[str] = Form(
        None, alias="playlistIds", description="JSON array of playlist ids"
    ),
    thumbnail: Optional[UploadFile] = File(None),
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[VideoDetail]:
    """Edit title, description, visibility, thumbnail and playlist membership."""
    data = parse_form(
        VideoUpdate,
        title=title,
        description=description,
        visibility=visibility,
        playlist_ids=parse_id_list(playlist_ids, "playlistIds"),
    )
    video = await service.update_video(
        session, actor_id, video_id, data, await read_upload(thumbnail)
    )
    return ApiResponse[VideoDetail](message="Video updated successfully", data=video)


@router.delete("/{video_id}", response_model=ApiResponse[dict[str, str]], responses=MUTATION_ERRORS)
async def delete_video(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: VideoService = Depends(get_video_service),
) -> ApiResponse[dict[str, str]]:
    deleted_id = await service.delete_video(session, actor_id, video_id)
    return ApiResponse[dict[str, str]](
        message="Video deleted successfully", data={"videoId": deleted_id}
    )
