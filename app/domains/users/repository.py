"""Users 도메인 리포지토리

직원 조회(필터/페이지네이션) 및 CRUD를 위한 데이터 접근 계층입니다.
커밋은 요청 단위(get_db)에서 한 번 수행하며, 여기서는 flush만 합니다.
"""

from dataclasses import dataclass
from typing import Optional, cast

from sqlalchemy import Select, exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.utils.pagination import PagedResult, paginate_query
from app.domains.users.exceptions import UserNotFoundException
from app.domains.users.models import Role, User, role_rank

# 허용 정렬 키 → 컬럼
USER_SORT_COLUMNS = {
    "id": User.id,
    "username": User.username,
    "email": User.email,
    "first_name": User.first_name,
    "last_name": User.last_name,
    "document_number": User.document_number,
    "date_of_birth": User.date_of_birth,
    "manager_id": User.manager_id,
    "role": role_rank,
    "created_at": User.created_at,
}


@dataclass
class UserFilter:
    """직원 목록 조회 필터

    모든 필터는 선택적이며, 제공된 필터만 AND로 적용됩니다.
    page, page_size가 0이면 페이지네이션 없이 전체를 반환합니다.
    """

    username: Optional[str] = None
    email: Optional[str] = None
    document_number: Optional[str] = None
    manager_id: Optional[int] = None
    role: Optional[Role] = None
    page: int = 0
    page_size: int = 0
    sort_by: Optional[str] = None
    is_desc: bool = False


class UserRepository:
    """직원 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _apply_filters(self, query: Select, filters: UserFilter) -> Select:
        if filters.username is not None:
            query = query.where(User.username == filters.username)

        if filters.email is not None:
            query = query.where(User.email == filters.email)

        if filters.document_number is not None:
            query = query.where(
                User.document_number == filters.document_number
            )

        if filters.manager_id is not None:
            query = query.where(User.manager_id == filters.manager_id)

        if filters.role is not None:
            query = query.where(User.role == filters.role.value)

        return query

    async def get_list(self, filters: UserFilter) -> PagedResult[User]:
        """직원 목록 조회 (전화번호 포함)

        Args:
            filters: 필터 및 페이지네이션 옵션

        Returns:
            PagedResult[User]

        Raises:
            InvalidSortFieldException: 허용되지 않은 정렬 키
        """
        query = self._apply_filters(select(User), filters)

        return await paginate_query(
            self.session,
            query,
            page=filters.page,
            page_size=filters.page_size,
            sort_by=filters.sort_by,
            is_desc=filters.is_desc,
            sort_columns=USER_SORT_COLUMNS,
            default_order=User.id,
            options=(selectinload(User.phone_numbers),),
        )

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """ID로 직원 조회 (전화번호 포함)

        Args:
            user_id: 사용자 ID

        Returns:
            사용자 객체 또는 None
        """
        query = (
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.phone_numbers))
            .execution_options(populate_existing=True)
        )

        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_username(self, username: str) -> Optional[User]:
        """사용자명으로 직원 조회"""
        query = select(User).where(User.username == username)

        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def get_by_document_number(
        self, document_number: str
    ) -> Optional[User]:
        """신분증 번호로 직원 조회"""
        query = select(User).where(User.document_number == document_number)

        result = await self.session.execute(query)
        return cast(Optional[User], result.scalar_one_or_none())

    async def has_subordinates(self, user_id: int) -> bool:
        """다른 직원의 매니저로 참조 중인지 여부"""
        query = select(exists().where(User.manager_id == user_id))

        result = await self.session.execute(query)
        return bool(result.scalar())

    async def create(self, user: User) -> User:
        """직원 생성

        Args:
            user: 생성할 사용자 객체 (전화번호 포함)

        Returns:
            ID가 할당된 사용자 객체
        """
        self.session.add(user)
        await self.session.flush()
        return await self._reload(user)

    async def save_changes(self, user: User) -> User:
        """보류 중인 변경사항 flush 후 최신 상태로 반환"""
        await self.session.flush()
        return await self._reload(user)

    async def remove(self, user_id: int) -> User:
        """직원 삭제 (전화번호는 cascade 삭제)

        Args:
            user_id: 삭제할 사용자 ID

        Returns:
            삭제된 사용자 객체

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
        """
        user = await self.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id=user_id)

        await self.session.delete(user)
        await self.session.flush()
        return user

    async def _reload(self, user: User) -> User:
        reloaded = await self.get_by_id(user.id)
        if reloaded is None:
            raise UserNotFoundException(user_id=user.id)
        return reloaded
