"""Users 도메인 서비스

직원 등록/인증/수정/삭제 비즈니스 로직 계층입니다.
역할 부여 권한과 username/document_number 유일성을 검사합니다.
"""

from typing import Any, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.core.security import (
    TokenIssuer,
    get_token_issuer,
    hash_password,
    verify_password,
)
from app.core.utils.pagination import PagedResult
from app.domains.users.exceptions import (
    AuthenticationFailedException,
    DocumentNumberAlreadyExistsException,
    InvalidRoleClaimException,
    ManagerNotFoundException,
    RoleNotAllowedException,
    UserHasSubordinatesException,
    UsernameAlreadyExistsException,
    UserNotFoundException,
)
from app.domains.users.models import PhoneNumber, Role, User
from app.domains.users.repository import UserFilter, UserRepository
from app.domains.users.schemas import CreateUserRequest, UpdateUserRequest

logger = get_logger(__name__)

Claims = Mapping[str, Any]


class UserService:
    """직원 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        token_issuer: Optional[TokenIssuer] = None,
    ):
        self.repository = UserRepository(session)
        self.token_issuer = token_issuer

    @staticmethod
    def authorize_role_assignment(
        caller_claims: Optional[Claims], requested_role: Role
    ) -> Role:
        """호출자가 requested_role을 부여할 수 있는지 검사

        Args:
            caller_claims: 호출자 토큰 claims
            requested_role: 부여하려는 역할

        Returns:
            호출자 역할

        Raises:
            InvalidRoleClaimException: claims 또는 역할 claim이 없거나 해석 불가
            RoleNotAllowedException: 호출자 역할보다 높은 역할 요청
        """
        if not caller_claims:
            raise InvalidRoleClaimException("Caller claims are missing")

        raw_role = caller_claims.get("role")
        if raw_role is None:
            raise InvalidRoleClaimException("Caller role claim is missing")

        caller_role = Role.parse(raw_role)
        if caller_role is None:
            raise InvalidRoleClaimException(
                f"Caller role claim is invalid: {raw_role}"
            )

        if not caller_role.can_grant(requested_role):
            raise RoleNotAllowedException(
                caller_role=caller_role.value,
                requested_role=requested_role.value,
            )

        return caller_role

    async def create(
        self, request: CreateUserRequest, caller_claims: Optional[Claims]
    ) -> User:
        """직원 등록

        Args:
            request: 검증을 통과한 생성 요청
            caller_claims: 호출자 토큰 claims

        Returns:
            ID가 할당된 사용자 객체

        Raises:
            InvalidRoleClaimException, RoleNotAllowedException: 권한 부족
            ManagerNotFoundException: 매니저가 존재하지 않는 경우
            DocumentNumberAlreadyExistsException: 신분증 번호 중복
            UsernameAlreadyExistsException: 사용자명 중복
        """
        role = request.role or Role.EMPLOYEE
        self.authorize_role_assignment(caller_claims, role)

        await self._ensure_manager_exists(request.manager_id)
        await self._ensure_unique(request.username, request.document_number)

        user = User(
            username=request.username,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            document_number=request.document_number,
            date_of_birth=request.date_of_birth,
            role=role,
            manager_id=request.manager_id,
            password_hash=hash_password(request.password),
            phone_numbers=[
                PhoneNumber(number=phone.number)
                for phone in request.phone_numbers
            ],
        )
        created_user = await self.repository.create(user)

        logger.info(
            "User created",
            extra={
                "user_id": created_user.id,
                "role": role.value,
                "action": "created",
            },
        )
        return created_user

    async def login(self, username: str, password: str) -> str:
        """로그인 후 서명된 토큰 반환

        Raises:
            UserNotFoundException: 사용자명이 존재하지 않는 경우
            AuthenticationFailedException: 비밀번호 불일치
        """
        user = await self.repository.get_by_username(username)
        if user is None:
            raise UserNotFoundException()

        if not verify_password(password, user.password_hash):
            logger.warning(
                "Login failed",
                extra={"user_id": user.id},
            )
            raise AuthenticationFailedException()

        token = self._get_token_issuer().generate(user)

        logger.info(
            "User logged in",
            extra={"user_id": user.id},
        )
        return token

    async def update(self, user_id: int, request: UpdateUserRequest) -> User:
        """직원 수정 (변경 가능한 필드 전체 덮어쓰기, 비밀번호 재해싱)

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            ManagerNotFoundException: 매니저가 존재하지 않는 경우
            DocumentNumberAlreadyExistsException: 다른 사용자와 신분증 번호 중복
            UsernameAlreadyExistsException: 다른 사용자와 사용자명 중복
        """
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id=user_id)

        await self._ensure_manager_exists(request.manager_id)
        await self._ensure_unique(
            request.username, request.document_number, exclude_id=user_id
        )

        user.username = request.username
        user.email = request.email
        user.first_name = request.first_name
        user.last_name = request.last_name
        user.document_number = request.document_number
        user.date_of_birth = request.date_of_birth
        user.manager_id = request.manager_id
        if request.role:
            user.role = request.role
        user.password_hash = hash_password(request.password)

        # id가 일치하는 기존 전화번호는 갱신, 나머지는 교체 (고아 레코드는 삭제)
        existing_phones = {phone.id: phone for phone in user.phone_numbers}
        phones: list[PhoneNumber] = []
        for phone_request in request.phone_numbers:
            phone = existing_phones.pop(phone_request.id, None)
            if phone is None:
                phone = PhoneNumber(number=phone_request.number)
            else:
                phone.number = phone_request.number
            phones.append(phone)
        user.phone_numbers = phones

        updated_user = await self.repository.save_changes(user)

        logger.info(
            "User updated",
            extra={
                "user_id": user_id,
                "action": "updated",
            },
        )
        return updated_user

    async def remove(self, user_id: int) -> User:
        """직원 삭제 (전화번호 포함)

        Raises:
            UserNotFoundException: 사용자를 찾을 수 없는 경우
            UserHasSubordinatesException: 다른 직원의 매니저로 참조 중인 경우
        """
        if await self.repository.has_subordinates(user_id):
            raise UserHasSubordinatesException(user_id=user_id)

        user = await self.repository.remove(user_id)

        logger.info(
            "User removed",
            extra={
                "user_id": user_id,
                "action": "removed",
            },
        )
        return user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """ID로 직원 조회 (없으면 None)"""
        return await self.repository.get_by_id(user_id)

    async def get_list(self, filters: UserFilter) -> PagedResult[User]:
        """직원 목록 조회"""
        return await self.repository.get_list(filters)

    async def _ensure_manager_exists(self, manager_id: Optional[int]) -> None:
        if manager_id is None:
            return
        if await self.repository.get_by_id(manager_id) is None:
            raise ManagerNotFoundException(manager_id=manager_id)

    async def _ensure_unique(
        self,
        username: str,
        document_number: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        by_document = await self.repository.get_by_document_number(
            document_number
        )
        if by_document is not None and by_document.id != exclude_id:
            raise DocumentNumberAlreadyExistsException(document_number)

        by_username = await self.repository.get_by_username(username)
        if by_username is not None and by_username.id != exclude_id:
            raise UsernameAlreadyExistsException(username)

    def _get_token_issuer(self) -> TokenIssuer:
        if self.token_issuer is None:
            self.token_issuer = get_token_issuer()
        return self.token_issuer
