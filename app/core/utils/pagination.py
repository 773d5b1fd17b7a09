"""페이지네이션 / 정렬 유틸리티

SQL 쿼리와 메모리 시퀀스에 동일한 정책을 적용합니다.

- 전체 개수는 페이지를 자르기 전에 계산합니다.
- 정렬 키는 허용된 키 매핑으로만 해석하며, 알 수 없는 키는 거부합니다.
- ``page``와 ``page_size``가 모두 0이 아닐 때만 페이지를 자릅니다.
  (예: page=1, page_size=0 이면 전체 반환)
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
)

from fastapi import Query
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidSortFieldException

T = TypeVar("T")


class PageParams:
    """페이지네이션/정렬 파라미터 의존성

    page, page_size 기본값 0은 "페이지네이션 없음"을 의미합니다.

    Example::

        @router.get("/List")
        async def get_users(page_params: PageParams = Depends()):
            ...
    """

    def __init__(
        self,
        page: int = Query(0, ge=0, description="페이지 번호 (1부터, 0=전체)"),
        page_size: int = Query(0, ge=0, description="페이지 크기 (0=전체)"),
        sort_by: Optional[str] = Query(None, description="정렬 필드"),
        is_desc: bool = Query(False, description="내림차순 여부"),
    ):
        self.page = page
        self.page_size = page_size
        self.sort_by = sort_by
        self.is_desc = is_desc


@dataclass
class PagedResult(Generic[T]):
    """한 페이지 분량의 아이템과 전체 개수

    다음/이전 페이지 여부는 페이지네이션 여부와 관계없이
    ``page * page_size < total_count``, ``page > 1`` 로 계산합니다.
    """

    items: list[T] = field(default_factory=list)
    page: int = 0
    page_size: int = 0
    total_count: int = 0

    @property
    def is_paginated(self) -> bool:
        return is_paginated(self.page, self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.page * self.page_size < self.total_count

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def total_pages(self) -> int:
        if not self.is_paginated:
            return 1 if self.total_count else 0
        return -(-self.total_count // self.page_size)


def is_paginated(page: int, page_size: int) -> bool:
    """page와 page_size가 모두 0이 아닐 때만 페이지를 자름"""
    return page != 0 and page_size != 0


def _normalize_key(key: str) -> str:
    return key.replace("_", "").lower()


def resolve_sort_key(
    sort_by: Optional[str], allowed: Mapping[str, Any]
) -> Optional[Any]:
    """정렬 키를 허용 매핑에서 찾음

    대소문자와 밑줄은 무시합니다 (``UserName``, ``user_name`` 모두 허용).

    Raises:
        InvalidSortFieldException: 허용되지 않은 키인 경우
    """
    if not sort_by:
        return None

    lookup = {_normalize_key(name): value for name, value in allowed.items()}
    try:
        return lookup[_normalize_key(sort_by)]
    except KeyError:
        raise InvalidSortFieldException(sort_by) from None


async def paginate_query(
    session: AsyncSession,
    query: Select,
    *,
    page: int = 0,
    page_size: int = 0,
    sort_by: Optional[str] = None,
    is_desc: bool = False,
    sort_columns: Optional[Mapping[str, Any]] = None,
    default_order: Optional[Any] = None,
    options: Iterable[Any] = (),
) -> PagedResult:
    """SQLAlchemy Select 페이지네이션

    Args:
        session: 비동기 세션
        query: 필터가 적용된 Select
        page: 페이지 번호 (1부터)
        page_size: 페이지 크기
        sort_by: 정렬 키
        is_desc: 내림차순 여부
        sort_columns: 허용 정렬 키 → 컬럼/표현식
        default_order: 기본 정렬 (정렬 키가 있으면 동순위 기준)
        options: 아이템 조회에만 적용할 로더 옵션 (selectinload 등)

    Returns:
        PagedResult
    """
    order_column = resolve_sort_key(sort_by, sort_columns or {})

    count_query = select(func.count()).select_from(
        query.order_by(None).subquery()
    )
    total_count = int((await session.execute(count_query)).scalar_one())

    if order_column is not None:
        query = query.order_by(
            order_column.desc() if is_desc else order_column.asc()
        )
    # 동순위는 기본 정렬로 고정
    if default_order is not None:
        query = query.order_by(default_order)

    if is_paginated(page, page_size):
        query = query.offset((page - 1) * page_size).limit(page_size)

    query = query.options(*options)
    result = await session.execute(query)
    items = list(result.scalars().all())

    return PagedResult(
        items=items, page=page, page_size=page_size, total_count=total_count
    )


def paginate_sequence(
    items: Sequence[T],
    *,
    page: int = 0,
    page_size: int = 0,
    sort_by: Optional[str] = None,
    is_desc: bool = False,
    sort_keys: Optional[Mapping[str, Callable[[T], Any]]] = None,
) -> PagedResult[T]:
    """메모리 시퀀스 페이지네이션 (paginate_query와 동일 정책)

    None 값은 오름차순에서 마지막에 위치합니다.
    """
    accessor = resolve_sort_key(sort_by, sort_keys or {})
    total_count = len(items)

    ordered = list(items)
    if accessor is not None:
        ordered.sort(
            key=lambda item: _none_last(accessor(item)), reverse=is_desc
        )

    if is_paginated(page, page_size):
        start = (page - 1) * page_size
        ordered = ordered[start : start + page_size]

    return PagedResult(
        items=ordered, page=page, page_size=page_size, total_count=total_count
    )


def _none_last(value: Any) -> tuple[bool, Any]:
    return (value is None, value)
