"""FastAPI application for vidshare."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from vidshare import __version__
from vidshare.api.exception_handlers import register_exception_handlers
from vidshare.api.middleware.request_id import REQUEST_ID_HEADER, RequestIdMiddleware
from vidshare.api.routers import (
    comments,
    health,
    likes,
    playlists,
    subscriptions,
    tweets,
    users,
    videos,
)
from vidshare.config.database import db_manager
from vidshare.config.logging import configure_logging
from vidshare.config.settings import settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Startup
    configure_logging(settings.log_level)
    settings.create_directories()
    logger.info("vidshare %s starting", __version__)
    yield
    # Shutdown
    await db_manager.close()


app = FastAPI(
    title="vidshare API",
    description="Video sharing backend: videos, comments, likes, playlists, "
    "subscriptions, tweets and watch history",
    version=__version__,
    lifespan=lifespan,
)


def _get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxied requests."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # First entry is the original client
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host
    return "unknown"


@app.middleware("http")
async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Log each request and its response status and timing.

    The response is logged at INFO for 2xx/3xx, WARNING for 4xx and ERROR
    for 5xx.
    """
    start_time = time.perf_counter()
    method = request.method
    path = request.url.path

    logger.info("Request: %s %s from %s", method, path, _get_client_ip(request))

    response = await call_next(request)

    duration = time.perf_counter() - start_time
    status_code = response.status_code
    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    logger.log(
        log_level,
        "Response: %s %s - %d (%.3fs)",
        method,
        path,
        status_code,
        duration,
    )
    return response


# Added after log_requests so the request id is bound before it logs
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

register_exception_handlers(app)

app.include_router(health.router, prefix=API_PREFIX, tags=["health"])
app.include_router(videos.router, prefix=API_PREFIX, tags=["videos"])
app.include_router(comments.router, prefix=API_PREFIX, tags=["comments"])
app.include_router(likes.router, prefix=API_PREFIX, tags=["likes"])
app.include_router(subscriptions.router, prefix=API_PREFIX, tags=["subscriptions"])
app.include_router(tweets.router, prefix=API_PREFIX, tags=["tweets"])
app.include_router(playlists.router, prefix=API_PREFIX, tags=["playlists"])
app.include_router(users.router, prefix=API_PREFIX, tags=["users"])

# Files written by the local media store
app.mount(
    "/media",
    StaticFiles(directory=settings.media_dir, check_dir=False),
    name="media",
)
