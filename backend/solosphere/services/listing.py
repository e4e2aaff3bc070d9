from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InvalidListingQueryError
from ..models import Job


DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
SORT_DIRECTIONS = ("asc", "desc")
# largest OFFSET a 64-bit store integer can hold
MAX_OFFSET = 2 ** 63 - 1

_LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class JobListingQuery:
    filters: Tuple[Any, ...]
    order_by: Optional[Any]
    offset: int
    limit: int

    def statement(self) -> Select:
        stmt = select(Job).where(*self.filters)
        if self.order_by is not None:
            stmt = stmt.order_by(self.order_by)
        return stmt.offset(self.offset).limit(self.limit)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _escape_like(value: str) -> str:
    return (
        value.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidListingQueryError(f"{name} must be an integer")
    if value < 1:
        raise InvalidListingQueryError(f"{name} must be at least 1")
    return value


def build_job_filters(search: Optional[str] = None, category: Optional[str] = None) -> Tuple[Any, ...]:
    """
    Title search plus optional exact category match.

    The title pattern is always applied: an empty search becomes ``%%``
    and therefore matches every job.
    """
    pattern = f"%{_escape_like(search or '')}%"
    filters: List[Any] = [Job.job_title.ilike(pattern, escape=_LIKE_ESCAPE)]

    category = _blank_to_none(category)
    if category is not None:
        filters.append(Job.category == category)

    return tuple(filters)


def build_listing_query(
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    size: int = DEFAULT_PAGE_SIZE,
) -> JobListingQuery:
    """
    Build the paginated job listing query.

    ``page`` is 1-indexed; the returned offset is ``(page - 1) * size``.
    Without ``sort`` the store's natural order is used.
    """
    page = _positive_int("page", page)
    size = _positive_int("size", size)
    if size > MAX_PAGE_SIZE:
        raise InvalidListingQueryError(f"size must be at most {MAX_PAGE_SIZE}")

    offset = (page - 1) * size
    if offset > MAX_OFFSET:
        raise InvalidListingQueryError("page is out of range")

    order_by = None
    sort = _blank_to_none(sort)
    if sort is not None:
        direction = sort.lower()
        if direction not in SORT_DIRECTIONS:
            raise InvalidListingQueryError("sort must be 'asc' or 'desc'")
        order_by = Job.deadline.asc() if direction == "asc" else Job.deadline.desc()

    return JobListingQuery(
        filters=build_job_filters(search, category),
        order_by=order_by,
        offset=offset,
        limit=size,
    )


def build_count_query(search: Optional[str] = None, category: Optional[str] = None) -> Select:
    return select(func.count()).select_from(Job).where(*build_job_filters(search, category))


async def list_jobs_page(db: AsyncSession, query: JobListingQuery) -> List[Job]:
    result = await db.execute(query.statement())
    return list(result.scalars().all())


async def count_jobs(db: AsyncSession, search: Optional[str] = None, category: Optional[str] = None) -> int:
    result = await db.execute(build_count_query(search, category))
    return int(result.scalar_one())
