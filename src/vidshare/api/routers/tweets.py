"""Tweet endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from vidshare.api.deps import ActorId, DbSession, get_tweet_service
from vidshare.api.routers.responses import LIST_ERRORS, MUTATION_ERRORS
from vidshare.api.schemas.responses import ApiResponse
from vidshare.api.schemas.tweets import TweetItem
from vidshare.feed.pagination import Page
from vidshare.models.tweet import TweetCreate, TweetUpdate
from vidshare.services import TweetService

router = APIRouter(prefix="/tweets")


@router.post(
    "",
    response_model=ApiResponse[TweetItem],
    status_code=status.HTTP_201_CREATED,
    responses=MUTATION_ERRORS,
)
async def create_tweet(
    body: TweetCreate,
    actor_id: ActorId,
    session: DbSession,
    service: TweetService = Depends(get_tweet_service),
) -> ApiResponse[TweetItem]:
    tweet = await service.create_tweet(session, actor_id, body)
    return ApiResponse[TweetItem](
        status_code=status.HTTP_201_CREATED,
        message="Tweet created successfully",
        data=tweet,
    )


@router.get(
    "/user/{user_id}", response_model=ApiResponse[Page[TweetItem]], responses=LIST_ERRORS
)
async def user_tweets(
    user_id: str,
    actor_id: ActorId,
    session: DbSession,
    page: Optional[int] = Query(None),
    limit: Optional[int] = Query(None),
    service: TweetService = Depends(get_tweet_service),
) -> ApiResponse[Page[TweetItem]]:
    """A user's tweets, newest first, with owner and like count."""
    tweets = await service.list_for_user(session, user_id, page, limit)
    return ApiResponse[Page[TweetItem]](message="Tweets fetched successfully", data=tweets)


@router.patch("/{tweet_id}", response_model=ApiResponse[TweetItem], responses=MUTATION_ERRORS)
async def update_tweet(
    tweet_id: str,
    body: TweetUpdate,
    actor_id: ActorId,
    session: DbSession,
    service: TweetService = Depends(get_tweet_service),
) -> ApiResponse[TweetItem]:
    tweet = await service.update_tweet(session, actor_id, tweet_id, body)
    return ApiResponse[TweetItem](message="Tweet updated successfully", data=tweet)


@router.delete(
    "/{tweet_id}", response_model=ApiResponse[dict[str, str]], responses=MUTATION_ERRORS
)
async def delete_tweet(
    tweet_id: str,
    actor_id: ActorId,
    session: DbSession,
    service: TweetService = Depends(get_tweet_service),
) -> ApiResponse[dict[str, str]]:
    deleted_id = await service.delete_tweet(session, actor_id, tweet_id)
    return ApiResponse[dict[str, str]](
        message="Tweet deleted successfully", data={"tweetId": deleted_id}
    )
