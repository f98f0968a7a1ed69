"""
Pagination and shape stage.

Every paginated feed runs one COUNT over its filtered statement and then
the same statement with ORDER BY / OFFSET / LIMIT. The ordering always
ends with the entity id so that pages are stable when the primary sort
key has ties.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import Field
from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.api.schemas.responses import CamelModel
from vidshare.config.settings import settings

T = TypeVar("T")


class SortOrder(str, Enum):
    """Sort order direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class PageRequest:
    """
    Normalized page/limit pair.

    Use :meth:`of` to build one from raw query values: page and limit are
    clamped to at least 1 and limit to ``settings.max_page_limit``.
    """

    page: int
    limit: int

    @classmethod
    def of(
        cls,
        page: int | None = None,
        limit: int | None = None,
        default_limit: int | None = None,
        max_limit: int | None = None,
    ) -> PageRequest:
        """
        Clamp raw values into a valid request.

        Parameters
        ----------
        page : int | None
            Requested page (1-based); defaults to 1.
        limit : int | None
            Requested page size; defaults to ``default_limit``.
        default_limit : int | None
            Page size when none was requested; defaults to
            ``settings.default_page_limit``.
        max_limit : int | None
            Upper bound for the page size; defaults to
            ``settings.max_page_limit``.

        Examples
        --------
        >>> PageRequest.of(page=0, limit=-5, max_limit=100)
        PageRequest(page=1, limit=1)
        """
        if default_limit is None:
            default_limit = settings.default_page_limit
        if max_limit is None:
            max_limit = settings.max_page_limit

        page = 1 if page is None else max(1, page)
        limit = default_limit if limit is None else limit
        limit = min(max(1, limit), max(1, max_limit))
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        """Number of rows skipped before this page."""
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class SortSpec:
    """Sort column and direction, resolved from an allow-listed enum."""

    column: ColumnElement[Any]
    direction: SortOrder = SortOrder.DESC

    def order_by(self, tiebreak: ColumnElement[Any]) -> list[ColumnElement[Any]]:
        """Ordering clauses: the sort column, then ``tiebreak`` the same way."""
        if self.direction == SortOrder.ASC:
            return [self.column.asc(), tiebreak.asc()]
        return [self.column.desc(), tiebreak.desc()]


class Page(CamelModel, Generic[T]):
    """One page of a feed plus the arithmetic clients need to navigate it."""

    items: list[T] = Field(default_factory=list)
    total_count: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    current_page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    has_next_page: bool
    has_prev_page: bool


def build_page(
    items: Sequence[T], total_count: int, request: PageRequest
) -> Page[T]:
    """
    Assemble a :class:`Page` from already-fetched items.

    Examples
    --------
    >>> p = build_page(list(range(10)), 25, PageRequest(page=2, limit=10))
    >>> (p.total_pages, p.has_next_page, p.has_prev_page)
    (3, True, True)
    """
    return Page(
        items=list(items),
        total_count=total_count,
        total_pages=math.ceil(total_count / request.limit),
        current_page=request.page,
        limit=request.limit,
        has_next_page=request.page * request.limit < total_count,
        has_prev_page=request.page > 1,
    )


async def count_rows(session: AsyncSession, stmt: Select[Any]) -> int:
    """Count the rows ``stmt`` would return."""
    count_query = select(func.count()).select_from(
        stmt.order_by(None).subquery()
    )
    result = await session.execute(count_query)
    return int(result.scalar_one())


async def paginate(
    session: AsyncSession,
    stmt: Select[Any],
    request: PageRequest,
    order_by: Sequence[ColumnElement[Any]],
    transform: Callable[[Any], T] | None = None,
) -> Page[T]:
    """
    Run ``stmt`` as a paginated query.

    A page past the end yields an empty ``items`` list rather than an
    error; the totals still describe the whole result set.

    Parameters
    ----------
    session : AsyncSession
        Session in the request transaction.
    stmt : Select
        Filtered (and joined) statement, without ordering or limits.
    request : PageRequest
        Normalized page and limit.
    order_by : Sequence[ColumnElement]
        Total ordering, usually from :meth:`SortSpec.order_by`.
    transform : Callable | None
        Maps each result row to an item; rows are returned unchanged
        when omitted.

    Returns
    -------
    Page
        The requested page.
    """
    total_count = await count_rows(session, stmt)

    items: list[Any] = []
    if request.offset < total_count:
        result = await session.execute(
            stmt.order_by(*order_by).offset(request.offset).limit(request.limit)
        )
        rows = result.all()
        items = [transform(row) for row in rows] if transform else list(rows)

    return build_page(items, total_count, request)
