"""Endpoints scoped to the acting user."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import ActorId, DbSession, get_user_service
from vidshare.api.routers.responses import LIST_ERRORS
from vidshare.api.schemas.history import HistoryItem
from vidshare.api.schemas.responses import ApiResponse
from vidshare.feed.pagination import Page
from vidshare.services import UserService

router = APIRouter(prefix="/users")


@router.get(
    "/me/history", response_model=ApiResponse[Page[HistoryItem]], responses=LIST_ERRORS
)
async def watch_history(
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: UserService = Depends(get_user_service),
) -> ApiResponse[Page[HistoryItem]]:
    """The actor's watch history, most recently watched first."""
    history = await service.watch_history(session, actor_id, page, limit)
    return ApiResponse[Page[HistoryItem]](
        message="Watch history fetched successfully", data=history
    )
