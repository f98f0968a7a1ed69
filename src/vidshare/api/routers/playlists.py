"""Playlist endpoints.

Membership changes use ``/add/{video_id}/{playlist_id}`` and
``/remove/{video_id}/{playlist_id}``; both are registered before the
``/{playlist_id}`` routes so the literal segments win.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from vidshare.api.deps import ActorId, DbSession, get_playlist_service
from vidshare.api.routers.responses import GET_ITEM_ERRORS, LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.playlists import PlaylistDetail, PlaylistItem
from vidshare.api.schemas.responses import ApiResponse
from vidshare.feed.pagination import Page
from vidshare.models.playlist import PlaylistCreate, PlaylistUpdate
from vidshare.services import PlaylistService

router = APIRouter(prefix="/playlists")


@router.post(
    "",
    response_model=ApiResponse[PlaylistDetail],
    status_code=status.HTTP_201_CREATED,
    responses=MUTATION_ERRORS,
)
async def create_playlist(
    body: PlaylistCreate,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[PlaylistDetail]:
    playlist = await service.create_playlist(session, actor_id, body)
    return ApiResponse[PlaylistDetail](
        status_code=status.HTTP_201_CREATED,
        message="Playlist created successfully",
        data=playlist,
    )


@router.get(
    "/user/{user_id}",
    response_model=ApiResponse[Page[PlaylistItem]],
    responses=LIST_ERRORS,
)
async def user_playlists(
    user_id: str,
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[Page[PlaylistItem]]:
    playlists = await service.list_for_user(session, user_id, page, limit)
    return ApiResponse[Page[PlaylistItem]](
        message="Playlists fetched successfully", data=playlists
    )


@router.patch(
    "/add/{video_id}/{playlist_id}",
    response_model=ApiResponse[PlaylistDetail],
    responses=MUTATION_ERRORS,
)
async def add_video(
    video_id: str,
    playlist_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[PlaylistDetail]:
    """Append a video to the end of a playlist."""
    playlist = await service.add_video(session, actor_id, video_id, playlist_id)
    return ApiResponse[PlaylistDetail](
        message="Video added to playlist successfully", data=playlist
    )


@router.patch(
    "/remove/{video_id}/{playlist_id}",
    response_model=ApiResponse[PlaylistDetail],
    responses=MUTATION_ERRORS,
)
async def remove_video(
    video_id: str,
    playlist_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[PlaylistDetail]:
    playlist = await service.remove_video(session, actor_id, video_id, playlist_id)
    return ApiResponse[PlaylistDetail](
        message="Video removed from playlist successfully", data=playlist
    )


@router.get(
    "/{playlist_id}", response_model=ApiResponse[PlaylistDetail], responses=GET_ITEM_ERRORS
)
async def get_playlist(
    playlist_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[PlaylistDetail]:
    """Playlist with its owner and videos in playlist order."""
    playlist = await service.get_playlist(session, playlist_id)
    return ApiResponse[PlaylistDetail](
        message="Playlist fetched successfully", data=playlist
    )


@router.patch(
    "/{playlist_id}", response_model=ApiResponse[PlaylistDetail], responses=MUTATION_ERRORS
)
async def update_playlist(
    playlist_id: str,
    body: PlaylistUpdate,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[PlaylistDetail]:
    playlist = await service.update_playlist(session, actor_id, playlist_id, body)
    return ApiResponse[PlaylistDetail](
        message="Playlist updated successfully", data=playlist
    )


@router.delete(
    "/{playlist_id}",
    response_model=ApiResponse[dict[str, str]],
    responses=MUTATION_ERRORS,
)
async def delete_playlist(
    playlist_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: PlaylistService = Depends(get_playlist_service),
) -> ApiResponse[dict[str, str]]:
    deleted_id = await service.delete_playlist(session, actor_id, playlist_id)
    return ApiResponse[dict[str, str]](
        message="Playlist deleted successfully", data={"playlistId": deleted_id}
    )
