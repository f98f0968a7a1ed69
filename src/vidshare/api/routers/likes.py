"""Like endpoints.

One toggle route per target kind; each flips the actor's like on the
target and reports whether it is now liked.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import ActorId, DbSession, get_like_service
from vidshare.api.routers.responses import GET_ITEM_ERRORS, LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.likes import LikedVideo, LikeToggle, VideoLikeCount
from vidshare.api.schemas.responses import ApiResponse
from vidshare.feed.pagination import Page
from vidshare.services import LikeService

router = APIRouter(prefix="/likes")


async def _toggle(
    service: LikeService, session: DbSession, actor_id: str, kind: str, target_id: str
) -> ApiResponse[LikeToggle]:
    result = await service.toggle_like(session, actor_id, kind, target_id)
    verb = "liked" if result.liked else "unliked"
    return ApiResponse[LikeToggle](
        message=f"{kind.capitalize()} {verb} successfully", data=result
    )


@router.post(
    "/toggle/v/{video_id}", response_model=ApiResponse[LikeToggle], responses=MUTATION_ERRORS
)
async def toggle_video_like(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[LikeToggle]:
    return await _toggle(service, session, actor_id, "video", video_id)


@router.post(
    "/toggle/c/{comment_id}",
    response_model=ApiResponse[LikeToggle],
    responses=MUTATION_ERRORS,
)
async def toggle_comment_like(
    comment_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[LikeToggle]:
    return await _toggle(service, session, actor_id, "comment", comment_id)


@router.post(
    "/toggle/t/{tweet_id}", response_model=ApiResponse[LikeToggle], responses=MUTATION_ERRORS
)
async def toggle_tweet_like(
    tweet_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[LikeToggle]:
    return await _toggle(service, session, actor_id, "tweet", tweet_id)


@router.get("/videos", response_model=ApiResponse[Page[LikedVideo]], responses=LIST_ERRORS)
async def liked_videos(
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[Page[LikedVideo]]:
    """Videos the actor liked, most recent like first."""
    videos = await service.liked_videos(session, actor_id, page, limit)
    return ApiResponse[Page[LikedVideo]](
        message="Liked videos fetched successfully", data=videos
    )


@router.get(
    "/v/{video_id}", response_model=ApiResponse[VideoLikeCount], responses=GET_ITEM_ERRORS
)
async def video_like_count(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: LikeService = Depends(get_like_service),
) -> ApiResponse[VideoLikeCount]:
    count = await service.video_like_count(session, video_id)
    return ApiResponse[VideoLikeCount](
        message="video likes count fetched successfully", data=count
    )
