"""Users 도메인 모듈

직원 디렉터리(등록, 인증, 조회, 수정, 삭제) 도메인입니다.

구조:
    - models.py: SQLAlchemy 모델 정의 (User, PhoneNumber, Role)
    - schemas.py: Pydantic 스키마 (CreateUserRequest, UserResponse, etc.)
    - validators.py: 요청 필드 검증 규칙
    - repository.py: 데이터 접근 계층 (필터, 페이지네이션)
    - service.py: 비즈니스 로직 (역할 부여 권한, 유일성, 로그인)
    - router.py: API 엔드포인트 (Bearer 토큰 인증 포함)
    - exceptions.py: 도메인 예외
"""

from app.domains.users.exceptions import (
    AuthenticationFailedException,
    DocumentNumberAlreadyExistsException,
    UserErrorCode,
    UsernameAlreadyExistsException,
    UserNotFoundException,
)
from app.domains.users.models import PhoneNumber, Role, User
from app.domains.users.router import router
from app.domains.users.schemas import (
    CreateUserRequest,
    LoginUserRequest,
    UpdateUserRequest,
    UserResponse,
)
from app.domains.users.service import UserService

__all__ = [
    "User",
    "PhoneNumber",
    "Role",
    "UserService",
    "CreateUserRequest",
    "UpdateUserRequest",
    "LoginUserRequest",
    "UserResponse",
    "router",
    "UserErrorCode",
    "UserNotFoundException",
    "UsernameAlreadyExistsException",
    "DocumentNumberAlreadyExistsException",
    "AuthenticationFailedException",
]
