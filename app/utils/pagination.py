"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides a generic paginate function, sort resolution, and a typed Page
response model shared by every list endpoint.
"""

import math
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from app.config import settings
from app.utils.exceptions import BadRequestError

T = TypeVar("T")

SORT_DIRECTIONS: tuple[str, ...] = ("asc", "desc")


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[T]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def build(cls, items: list[T], total: int, page: int, per_page: int) -> "Page[T]":
        """항목과 전체 개수로 페이지 객체를 구성합니다."""
        pages: int = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(items=items, total=total, page=page, per_page=per_page, pages=pages)


def resolve_order_by(
    columns: dict[str, InstrumentedAttribute[Any]],
    sort_by: str,
    sort_direction: str = "asc",
    entity: str = "",
) -> Any:
    """정렬 필드와 방향을 ORDER BY 절로 변환합니다.

    Translate a sort field name and direction into an ORDER BY clause.

    Args:
        columns: 허용된 정렬 필드 -> 컬럼 매핑 (Whitelisted sort fields)
        sort_by: 요청된 정렬 필드 (Requested sort field)
        sort_direction: "asc" 또는 "desc", 대소문자 무시 (Case-insensitive direction)
        entity: 오류 코드 접두어 (Entity name for the error code)

    Raises:
        BadRequestError: 알 수 없는 필드나 방향일 때 (Unknown field or direction)
    """
    column = columns.get(sort_by)
    if column is None:
        raise BadRequestError(f"Invalid sort field: {sort_by}", entity=entity)

    direction: str = (sort_direction or "").strip().lower()
    if direction not in SORT_DIRECTIONS:
        raise BadRequestError(f"Invalid sort direction: {sort_direction}", entity=entity)

    return column.asc() if direction == "asc" else column.desc()


def check_page_bounds(page: int, per_page: int, entity: str = "") -> None:
    """페이지 번호와 크기를 검증합니다 (1 이상, 크기는 MAX_PAGE_SIZE 이하).

    Raises:
        BadRequestError: 범위를 벗어난 페이지 번호나 크기 (Out-of-range page or size)
    """
    if page < 1:
        raise BadRequestError(f"Invalid page: {page}", entity=entity)
    if not 1 <= per_page <= settings.MAX_PAGE_SIZE:
        raise BadRequestError(
            f"Invalid page size: {per_page} (1..{settings.MAX_PAGE_SIZE})", entity=entity
        )


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 페이지네이션을 수행합니다.

    Execute a paginated query, returning the page items and the total count.
    Runs one COUNT over the unpaginated query (as a subquery) and one
    OFFSET/LIMIT query for the requested page.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수)
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    offset: int = (page - 1) * per_page
    result = await db.execute(query.offset(offset).limit(per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total
