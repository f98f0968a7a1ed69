"""
Tests for PlaylistRepository.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import (
    PlaylistFactory,
    UserFactory,
    VideoFactory,
    create,
    persist,
)
from vidshare.exceptions import BadRequestError, EdgeExistsError
from vidshare.feed.pagination import PageRequest
from vidshare.repositories.playlist_repository import PlaylistRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repo() -> PlaylistRepository:
    return PlaylistRepository()


class TestEntries:
    """Adding, removing and counting entries."""

    async def test_add_appends_in_order(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        playlist = await create(db_session, PlaylistFactory, owner_id=owner.id)
        videos = [VideoFactory.build(owner_id=owner.id) for _ in range(3)]
        await persist(db_session, *videos)

        entries = [
            await repo.add_video(db_session, playlist.id, video.id) for video in videos
        ]

        assert [entry.position for entry in entries] == [0, 1, 2]
        detail = await repo.get_detail(db_session, playlist.id)
        assert [video.id for video in detail.videos] == [video.id for video in videos]
        assert detail.video_count == 3

    async def test_duplicate_add_raises(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        playlist = await create(db_session, PlaylistFactory, owner_id=owner.id)
        video = await create(db_session, VideoFactory, owner_id=owner.id)

        await repo.add_video(db_session, playlist.id, video.id)
        with pytest.raises(EdgeExistsError):
            await repo.add_video(db_session, playlist.id, video.id)

        assert await repo.count_entries(db_session, playlist_id=playlist.id) == 1

    async def test_remove(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        playlist = await create(db_session, PlaylistFactory, owner_id=owner.id)
        video = await create(db_session, VideoFactory, owner_id=owner.id)
        await repo.add_video(db_session, playlist.id, video.id)

        assert await repo.remove_video(db_session, playlist.id, video.id) is True
        assert await repo.remove_video(db_session, playlist.id, video.id) is False
        assert await repo.has_video(db_session, playlist.id, video.id) is False

    async def test_count_entries_rejects_unknown_filter(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        with pytest.raises(BadRequestError):
            await repo.count_entries(db_session, position=1)


class TestQueries:
    """Listing, ownership and membership lookups."""

    async def test_list_for_user(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        other = await create(db_session, UserFactory)
        older = PlaylistFactory.build(owner_id=owner.id)
        newer = PlaylistFactory.build(owner_id=owner.id)
        await persist(db_session, older, newer, PlaylistFactory.build(owner_id=other.id))

        page = await repo.list_for_user(db_session, owner.id, PageRequest(1, 10))

        assert [item.id for item in page.items] == [newer.id, older.id]
        assert all(item.video_count == 0 for item in page.items)

    async def test_find_owned_filters_foreign_playlists(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        other = await create(db_session, UserFactory)
        mine = PlaylistFactory.build(owner_id=owner.id)
        theirs = PlaylistFactory.build(owner_id=other.id)
        await persist(db_session, mine, theirs)

        owned = await repo.find_owned(db_session, owner.id, [mine.id, theirs.id])

        assert [playlist.id for playlist in owned] == [mine.id]
        assert await repo.find_owned(db_session, owner.id, []) == []

    async def test_membership(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        first, second = (
            PlaylistFactory.build(owner_id=owner.id),
            PlaylistFactory.build(owner_id=owner.id),
        )
        video, lonely = (
            VideoFactory.build(owner_id=owner.id),
            VideoFactory.build(owner_id=owner.id),
        )
        await persist(db_session, first, second, video, lonely)
        await repo.add_video(db_session, first.id, video.id)
        await repo.add_video(db_session, second.id, video.id)

        membership = await repo.membership(db_session, owner.id, [video.id, lonely.id])

        assert sorted(membership[video.id]) == sorted([first.id, second.id])
        assert lonely.id not in membership

    async def test_delete_cascade(
        self, db_session: AsyncSession, repo: PlaylistRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        playlist = await create(db_session, PlaylistFactory, owner_id=owner.id)
        video = await create(db_session, VideoFactory, owner_id=owner.id)
        await repo.add_video(db_session, playlist.id, video.id)

        await repo.delete_cascade(db_session, playlist)

        assert await repo.get_detail(db_session, playlist.id) is None
        assert await repo.count_entries(db_session, video_id=video.id) == 0
