"""Users 도메인 예외 정의

서비스 계층 실패는 모두 400으로 응답합니다 (사용자 없음 포함).
"""

from enum import Enum

from app.core.exceptions import BadRequestException


class UserErrorCode(str, Enum):
    """사용자 도메인 에러 코드"""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    USERNAME_ALREADY_EXISTS = "USERNAME_ALREADY_EXISTS"
    DOCUMENT_NUMBER_ALREADY_EXISTS = "DOCUMENT_NUMBER_ALREADY_EXISTS"
    MANAGER_NOT_FOUND = "MANAGER_NOT_FOUND"
    USER_HAS_SUBORDINATES = "USER_HAS_SUBORDINATES"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    INVALID_ROLE_CLAIM = "INVALID_ROLE_CLAIM"
    ROLE_NOT_ALLOWED = "ROLE_NOT_ALLOWED"


class UserNotFoundException(BadRequestException):
    """사용자를 찾을 수 없는 경우"""

    def __init__(self, user_id: int | None = None):
        detail = {"user_id": user_id} if user_id else {}
        super().__init__(
            message="User not found",
            error_code=UserErrorCode.USER_NOT_FOUND,
            detail=detail,
        )


class UsernameAlreadyExistsException(BadRequestException):
    """이미 사용 중인 사용자명"""

    def __init__(self, username: str):
        super().__init__(
            message="Username already registered",
            error_code=UserErrorCode.USERNAME_ALREADY_EXISTS,
            detail={"username": username},
        )


class DocumentNumberAlreadyExistsException(BadRequestException):
    """이미 등록된 신분증 번호"""

    def __init__(self, document_number: str):
        super().__init__(
            message="Document number already registered",
            error_code=UserErrorCode.DOCUMENT_NUMBER_ALREADY_EXISTS,
            detail={"document_number": document_number},
        )


class ManagerNotFoundException(BadRequestException):
    """manager_id가 존재하지 않는 사용자를 가리키는 경우"""

    def __init__(self, manager_id: int):
        super().__init__(
            message="Manager not found",
            error_code=UserErrorCode.MANAGER_NOT_FOUND,
            detail={"manager_id": manager_id},
        )


class UserHasSubordinatesException(BadRequestException):
    """다른 사용자의 매니저로 참조 중이라 삭제할 수 없는 경우"""

    def __init__(self, user_id: int):
        super().__init__(
            message="User is referenced as a manager and cannot be removed",
            error_code=UserErrorCode.USER_HAS_SUBORDINATES,
            detail={"user_id": user_id},
        )


class AuthenticationFailedException(BadRequestException):
    """비밀번호 불일치 (원인은 노출하지 않음)"""

    def __init__(self):
        super().__init__(
            message="Authentication failed",
            error_code=UserErrorCode.AUTHENTICATION_FAILED,
        )


class InvalidRoleClaimException(BadRequestException):
    """호출자 claims에 역할이 없거나 해석할 수 없는 경우"""

    def __init__(self, message: str = "Caller role claim is missing or invalid"):
        super().__init__(
            message=message,
            error_code=UserErrorCode.INVALID_ROLE_CLAIM,
        )


class RoleNotAllowedException(BadRequestException):
    """호출자 역할보다 높은 역할을 부여하려는 경우"""

    def __init__(self, caller_role: str, requested_role: str):
        super().__init__(
            message="Caller is not allowed to assign the requested role",
            error_code=UserErrorCode.ROLE_NOT_ALLOWED,
            detail={
                "caller_role": caller_role,
                "requested_role": requested_role,
            },
        )
