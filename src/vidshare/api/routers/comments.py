"""Comment endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from vidshare.api.deps import ActorId, DbSession, get_comment_service
from vidshare.api.routers.responses import LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.comments import CommentItem
from vidshare.api.schemas.responses import ApiResponse
from vidshare.feed.pagination import Page
from vidshare.models.comment import CommentCreate, CommentUpdate
from vidshare.services import CommentService

router = APIRouter(prefix="/comments")


@router.get(
    "/{video_id}", response_model=ApiResponse[Page[CommentItem]], responses=LIST_ERRORS
)
async def list_comments(
    video_id: str,
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None, description="Page number (1-based)"),
    limit: Optional[int] = Query(None, description="Items per page"),
    service: CommentService = Depends(get_comment_service),
) -> ApiResponse[Page[CommentItem]]:
    """Comments on a video, newest first, with owner and like count."""
    comments = await service.list_for_video(session, video_id, page, limit)
    return ApiResponse[Page[CommentItem]](
        message="Comments fetched successfully", data=comments
    )


@router.post(
    "/{video_id}",
    response_model=ApiResponse[CommentItem],
    status_code=status.HTTP_201_CREATED,
    responses=MUTATION_ERRORS,
)
async def add_comment(
    video_id: str,
    body: CommentCreate,
    actor_id: ActorId,
    session: DbSession,
    service: CommentService = Depends(get_comment_service),
) -> ApiResponse[CommentItem]:
    comment = await service.add_comment(session, actor_id, video_id, body)
    return ApiResponse[CommentItem](
        status_code=status.HTTP_201_CREATED,
        message="Comment added successfully",
        data=comment,
    )


@router.patch(
    "/c/{comment_id}", response_model=ApiResponse[CommentItem], responses=MUTATION_ERRORS
)
async def update_comment(
    comment_id: str,
    body: CommentUpdate,
    actor_id: ActorId,
    session: DbSession,
    service: CommentService = Depends(get_comment_service),
) -> ApiResponse[CommentItem]:
    comment = await service.update_comment(session, actor_id, comment_id, body)
    return ApiResponse[CommentItem](
        message="Comment updated successfully", data=comment
    )


@router.delete(
    "/c/{comment_id}",
    response_model=ApiResponse[dict[str, str]],
    responses=MUTATION_ERRORS,
)
async def delete_comment(
    comment_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: CommentService = Depends(get_comment_service),
) -> ApiResponse[dict[str, str]]:
    """Delete a comment together with its likes."""
    deleted_id = await service.delete_comment(session, actor_id, comment_id)
    return ApiResponse[dict[str, str]](
        message="Comment deleted successfully", data={"commentId": deleted_id}
    )
