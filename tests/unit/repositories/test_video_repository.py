"""
Tests for VideoRepository feeds and the video cascade.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import (
    CommentFactory,
    LikeFactory,
    PlaylistEntryFactory,
    PlaylistFactory,
    SubscriptionFactory,
    UserFactory,
    VideoFactory,
    create,
    persist,
)
from vidshare.db.models import Comment, Like, PlaylistEntry, Video, WatchHistoryEntry
from vidshare.feed.pagination import PageRequest, SortOrder, SortSpec
from vidshare.repositories.video_repository import VideoRepository

pytestmark = pytest.mark.asyncio


@pytest.fixture
def repo() -> VideoRepository:
    return VideoRepository()


async def _count(session: AsyncSession, model: type, *where: object) -> int:
    result = await session.execute(select(func.count()).select_from(model).where(*where))
    return int(result.scalar_one())


class TestListPublished:
    """Tests for list_published."""

    async def test_excludes_drafts_and_sorts(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        low = VideoFactory.build(owner_id=owner.id, views=1)
        high = VideoFactory.build(owner_id=owner.id, views=50)
        draft = VideoFactory.build(owner_id=owner.id, views=99, is_published=False)
        await persist(db_session, low, high, draft)

        page = await repo.list_published(
            db_session, PageRequest(1, 10), SortSpec(Video.views, SortOrder.DESC)
        )

        assert [item.id for item in page.items] == [high.id, low.id]
        assert page.items[0].owner.username == owner.username

    async def test_restricts_to_owner(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        alice = await create(db_session, UserFactory)
        bob = await create(db_session, UserFactory)
        mine = VideoFactory.build(owner_id=alice.id)
        await persist(db_session, mine, VideoFactory.build(owner_id=bob.id))

        page = await repo.list_published(
            db_session,
            PageRequest(1, 10),
            SortSpec(Video.created_at),
            owner_id=alice.id,
        )

        assert [item.id for item in page.items] == [mine.id]


class TestSearch:
    """Tests for search."""

    async def test_matches_title_or_description(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        by_title = VideoFactory.build(owner_id=owner.id, title="Python Tips", views=3)
        by_description = VideoFactory.build(
            owner_id=owner.id, description="all about PYTHON", views=10
        )
        unrelated = VideoFactory.build(owner_id=owner.id, title="Cooking")
        draft = VideoFactory.build(owner_id=owner.id, title="python", is_published=False)
        await persist(db_session, by_title, by_description, unrelated, draft)

        page = await repo.search(db_session, "python", PageRequest(1, 10))

        assert [item.id for item in page.items] == [by_description.id, by_title.id]


class TestDetail:
    """Tests for get_detail and increment_views."""

    async def test_detail_counts_and_flags(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        viewer = await create(db_session, UserFactory)
        video = await create(db_session, VideoFactory, owner_id=owner.id)
        await persist(
            db_session,
            LikeFactory.build(liked_by=viewer.id, target_id=video.id),
            CommentFactory.build(video_id=video.id, owner_id=owner.id),
            CommentFactory.build(video_id=video.id, owner_id=viewer.id),
            SubscriptionFactory.build(subscriber_id=viewer.id, channel_id=owner.id),
        )

        detail = await repo.get_detail(db_session, video.id, viewer.id)

        assert detail.like_count == 1
        assert detail.comment_count == 2
        assert detail.subscriber_count == 1
        assert detail.is_liked is True
        assert detail.is_subscribed is True
        assert detail.owner.id == owner.id

    async def test_missing_video(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        assert await repo.get_detail(db_session, "0" * 32, None) is None

    async def test_increment_views(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        video = await create(db_session, VideoFactory, owner_id=owner.id, views=4)

        await repo.increment_views(db_session, video.id)
        await repo.increment_views(db_session, video.id)

        detail = await repo.get_detail(db_session, video.id, None)
        assert detail.views == 6


class TestDashboard:
    """Tests for dashboard and latest_for_channel."""

    async def test_drafts_first(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        published = VideoFactory.build(owner_id=owner.id)
        draft = VideoFactory.build(owner_id=owner.id, is_published=False)
        await persist(db_session, published, draft)

        videos = await repo.dashboard(db_session, owner.id)

        assert [video.id for video in videos] == [draft.id, published.id]
        assert videos[0].like_count == 0
        assert videos[0].playlist_ids == []

    async def test_latest_for_channel_limit(
        self, db_session: AsyncSession, repo: VideoRepository
    ) -> None:
        owner = await create(db_session, UserFactory)
        videos = [VideoFactory.build(owner_id=owner.id) for _ in range(5)]
        await persist(db_session, *videos)

        latest = await repo.latest_for_channel(db_session, owner.id, limit=2)

        assert [video.id for video in latest] == [videos[4].id, videos[3].id]


class TestDeleteCascade:
    """Deleting a video removes everything that references it."""

    async def test_cascade(self, db_session: AsyncSession, repo: VideoRepository) -> None:
        owner = await create(db_session, UserFactory)
        viewer = await create(db_session, UserFactory)
        video = await create(db_session, VideoFactory, owner_id=owner.id)
        keep = await create(db_session, VideoFactory, owner_id=owner.id)
        comment = CommentFactory.build(video_id=video.id, owner_id=viewer.id)
        playlist = PlaylistFactory.build(owner_id=owner.id)
        await persist(db_session, comment, playlist)
        await persist(
            db_session,
            LikeFactory.build(liked_by=viewer.id, target_id=video.id),
            LikeFactory.build(liked_by=viewer.id, target_id=keep.id),
            LikeFactory.build(
                liked_by=owner.id, target_kind="comment", target_id=comment.id
            ),
            PlaylistEntryFactory.build(playlist_id=playlist.id, video_id=video.id),
            WatchHistoryEntry(user_id=viewer.id, video_id=video.id),
        )
        video_id = video.id

        await repo.delete_cascade(db_session, video)

        assert await _count(db_session, Video, Video.id == video_id) == 0
        assert await _count(db_session, Comment, Comment.video_id == video_id) == 0
        assert await _count(db_session, Like) == 1
        assert await _count(db_session, PlaylistEntry) == 0
        assert await _count(db_session, WatchHistoryEntry) == 0
        assert await repo.exists(db_session, keep.id)
