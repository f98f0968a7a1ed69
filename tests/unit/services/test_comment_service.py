"""
Tests for CommentService.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import UserFactory, VideoFactory, create
from vidshare.container import Container
from vidshare.exceptions import NotFoundError, UnauthorizedError
from vidshare.models.comment import CommentCreate, CommentUpdate
from vidshare.services.comment_service import CommentService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(test_container: Container) -> CommentService:
    return test_container.comment_service


async def test_add_and_list(db_session: AsyncSession, service: CommentService) -> None:
    owner = await create(db_session, UserFactory)
    video = await create(db_session, VideoFactory, owner_id=owner.id)

    item = await service.add_comment(
        db_session, owner.id, video.id, CommentCreate(content="  Nice one  ")
    )
    page = await service.list_for_video(db_session, video.id)

    assert item.content == "Nice one"
    assert item.owner is not None and item.owner.id == owner.id
    assert [comment.id for comment in page.items] == [item.id]


async def test_comment_on_missing_video(
    db_session: AsyncSession, service: CommentService
) -> None:
    owner = await create(db_session, UserFactory)

    with pytest.raises(NotFoundError):
        await service.add_comment(
            db_session, owner.id, "a" * 32, CommentCreate(content="hello")
        )


async def test_only_author_edits(
    db_session: AsyncSession, service: CommentService
) -> None:
    author = await create(db_session, UserFactory)
    other = await create(db_session, UserFactory)
    video = await create(db_session, VideoFactory, owner_id=author.id)
    item = await service.add_comment(
        db_session, author.id, video.id, CommentCreate(content="first")
    )

    with pytest.raises(UnauthorizedError):
        await service.update_comment(
            db_session, other.id, item.id, CommentUpdate(content="hijack")
        )
    with pytest.raises(UnauthorizedError):
        await service.delete_comment(db_session, other.id, item.id)

    updated = await service.update_comment(
        db_session, author.id, item.id, CommentUpdate(content="edited")
    )
    assert updated.content == "edited"


async def test_delete_removes_comment_and_likes(
    db_session: AsyncSession, service: CommentService, test_container: Container
) -> None:
    author = await create(db_session, UserFactory)
    video = await create(db_session, VideoFactory, owner_id=author.id)
    item = await service.add_comment(
        db_session, author.id, video.id, CommentCreate(content="bye")
    )
    await test_container.like_service.toggle_like(
        db_session, author.id, "comment", item.id
    )

    deleted = await service.delete_comment(db_session, author.id, item.id)

    assert deleted == item.id
    assert (await service.list_for_video(db_session, video.id)).total_count == 0
    with pytest.raises(NotFoundError):
        await test_container.like_service.toggle_like(
            db_session, author.id, "comment", item.id
        )
