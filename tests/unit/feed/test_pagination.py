"""
Tests for page requests, page arithmetic and the paginate stage.
"""

from __future__ import annotations

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.model_factory import UserFactory, VideoFactory, create, persist
from vidshare.db.models import Video
from vidshare.feed.pagination import (
    PageRequest,
    SortOrder,
    SortSpec,
    build_page,
    count_rows,
    paginate,
)


class TestPageRequest:
    """Tests for PageRequest.of."""

    def test_defaults(self) -> None:
        request = PageRequest.of(default_limit=10, max_limit=100)
        assert request == PageRequest(page=1, limit=10)
        assert request.offset == 0

    @pytest.mark.parametrize(
        ("page", "limit", "expected"),
        [
            (0, 10, PageRequest(page=1, limit=10)),
            (-3, 10, PageRequest(page=1, limit=10)),
            (2, 0, PageRequest(page=2, limit=1)),
            (2, -5, PageRequest(page=2, limit=1)),
            (1, 1000, PageRequest(page=1, limit=100)),
        ],
    )
    def test_clamps(self, page: int, limit: int, expected: PageRequest) -> None:
        assert PageRequest.of(page, limit, default_limit=10, max_limit=100) == expected

    def test_offset(self) -> None:
        assert PageRequest(page=3, limit=25).offset == 50


class TestBuildPage:
    """Tests for page arithmetic."""

    def test_middle_page(self) -> None:
        page = build_page(list(range(10)), 25, PageRequest(page=2, limit=10))

        assert page.total_pages == 3
        assert page.current_page == 2
        assert page.has_next_page is True
        assert page.has_prev_page is True

    def test_empty_collection(self) -> None:
        page = build_page([], 0, PageRequest(page=1, limit=10))

        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.has_prev_page is False

    def test_serializes_camel_case(self) -> None:
        page = build_page([1], 1, PageRequest(page=1, limit=10))

        assert page.model_dump(by_alias=True) == {
            "items": [1],
            "totalCount": 1,
            "totalPages": 1,
            "currentPage": 1,
            "limit": 10,
            "hasNextPage": False,
            "hasPrevPage": False,
        }

    @given(
        total=st.integers(min_value=0, max_value=10_000),
        page=st.integers(min_value=1, max_value=500),
        limit=st.integers(min_value=1, max_value=100),
    )
    def test_arithmetic_properties(self, total: int, page: int, limit: int) -> None:
        result = build_page([], total, PageRequest(page=page, limit=limit))

        assert result.total_pages == math.ceil(total / limit)
        assert result.has_next_page == (page * limit < total)
        assert result.has_prev_page == (page > 1)


class TestPaginate:
    """paginate against a real database."""

    async def _seed(self, session: AsyncSession, count: int) -> list[Video]:
        owner = await create(session, UserFactory)
        videos = [VideoFactory.build(owner_id=owner.id) for _ in range(count)]
        await persist(session, *videos)
        return videos

    async def test_second_page_of_twenty_five(self, db_session: AsyncSession) -> None:
        videos = await self._seed(db_session, 25)
        stmt = select(Video.id)
        order = SortSpec(Video.created_at, SortOrder.ASC).order_by(Video.id)

        page = await paginate(
            db_session,
            stmt,
            PageRequest(page=2, limit=10),
            order,
            transform=lambda row: row.id,
        )

        assert page.items == [video.id for video in videos[10:20]]
        assert page.total_count == 25
        assert page.total_pages == 3
        assert page.has_next_page is True
        assert page.has_prev_page is True

    async def test_page_past_the_end_is_empty(self, db_session: AsyncSession) -> None:
        await self._seed(db_session, 25)

        page = await paginate(
            db_session,
            select(Video.id),
            PageRequest(page=4, limit=10),
            [Video.id.asc()],
        )

        assert page.items == []
        assert page.total_count == 25
        assert page.has_next_page is False
        assert page.has_prev_page is True

    async def test_ties_are_broken_by_id(self, db_session: AsyncSession) -> None:
        owner = await create(db_session, UserFactory)
        videos = [
            VideoFactory.build(owner_id=owner.id, views=7) for _ in range(6)
        ]
        await persist(db_session, *videos)
        order = SortSpec(Video.views, SortOrder.DESC).order_by(Video.id)

        first = await paginate(
            db_session, select(Video.id), PageRequest(1, 3), order, lambda r: r.id
        )
        second = await paginate(
            db_session, select(Video.id), PageRequest(2, 3), order, lambda r: r.id
        )

        assert first.items + second.items == sorted(
            (video.id for video in videos), reverse=True
        )

    async def test_count_ignores_ordering(self, db_session: AsyncSession) -> None:
        await self._seed(db_session, 4)

        total = await count_rows(db_session, select(Video.id).order_by(Video.title))

        assert total == 4
