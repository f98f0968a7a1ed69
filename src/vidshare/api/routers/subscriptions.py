"""Subscription endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from vidshare.api.deps import ActorId, DbSession, get_subscription_service
from vidshare.api.routers.responses import LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.responses import ApiResponse
from vidshare.api.schemas.subscriptions import (
    SubscribedChannelItem,
    SubscriberItem,
    SubscriptionToggle,
)
from vidshare.api.schemas.videos import VideoListItem
from vidshare.feed.pagination import Page
from vidshare.services import SubscriptionService

router = APIRouter(prefix="/subscriptions")


@router.post(
    "/c/{channel_id}",
    response_model=ApiResponse[SubscriptionToggle],
    responses=MUTATION_ERRORS,
)
async def toggle_subscription(
    channel_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiResponse[SubscriptionToggle]:
    """Subscribe to or unsubscribe from a channel.

    The response lists every channel the actor follows afterwards.
    """
    result = await service.toggle_subscription(session, actor_id, channel_id)
    message = "Subscribed successfully" if result.subscribed else "Unsubscribed successfully"
    return ApiResponse[SubscriptionToggle](message=message, data=result)


@router.get(
    "/c/{channel_id}",
    response_model=ApiResponse[Page[SubscriberItem]],
    responses=LIST_ERRORS,
)
async def channel_subscribers(
    channel_id: str,
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiResponse[Page[SubscriberItem]]:
    subscribers = await service.channel_subscribers(session, channel_id, page, limit)
    return ApiResponse[Page[SubscriberItem]](
        message="Subscribers fetched successfully", data=subscribers
    )


@router.get(
    "/u/{subscriber_id}",
    response_model=ApiResponse[Page[SubscribedChannelItem]],
    responses=LIST_ERRORS,
)
async def subscribed_channels(
    subscriber_id: str,
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiResponse[Page[SubscribedChannelItem]]:
    channels = await service.subscribed_channels(session, subscriber_id, page, limit)
    return ApiResponse[Page[SubscribedChannelItem]](
        message="Subscribed channels fetched successfully", data=channels
    )


@router.get(
    "/u/{subscriber_id}/latest",
    response_model=ApiResponse[list[VideoListItem]],
    responses=LIST_ERRORS,
)
async def latest_videos(
    subscriber_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiResponse[list[VideoListItem]]:
    """The newest published video of each followed channel."""
    videos = await service.latest_videos(session, subscriber_id)
    return ApiResponse[list[VideoListItem]](
        message="Latest videos fetched successfully", data=videos
    )
