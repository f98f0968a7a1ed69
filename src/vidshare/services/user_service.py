"""
User service: account creation and the actor's own watch history.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.common import OwnerSummary
from vidshare.api.schemas.history import HistoryItem
from vidshare.exceptions import ConflictError
from vidshare.feed.pagination import Page, PageRequest
from vidshare.models.user import UserCreate
from vidshare.repositories.user_repository import UserRepository
from vidshare.repositories.watch_history_repository import WatchHistoryRepository
from vidshare.services.deadline import with_deadline

logger = logging.getLogger(__name__)


class UserService:
    """Users and per-user history."""

    def __init__(
        self, user_repo: UserRepository, history_repo: WatchHistoryRepository
    ) -> None:
        self._user_repo = user_repo
        self._history_repo = history_repo

    async def create_user(self, session: AsyncSession, data: UserCreate) -> OwnerSummary:
        """
        Create a user.

        Raises
        ------
        ConflictError
            If the username is taken.
        """
        if await self._user_repo.get_by_username(session, data.username) is not None:
            raise ConflictError(
                message=f"Username '{data.username}' is already taken",
                details={"username": data.username},
            )
        user = await self._user_repo.create(session, obj_in=data)
        logger.info("Created user %s (%s)", user.username, user.id)
        return OwnerSummary.model_validate(user)

    @with_deadline("user.history")
    async def watch_history(
        self,
        session: AsyncSession,
        actor_id: str,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[HistoryItem]:
        """The actor's watched videos, most recent first."""
        return await self._history_repo.history(
            session, actor_id, PageRequest.of(page, limit)
        )
