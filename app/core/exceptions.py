from enum import Enum
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ErrorCode(str, Enum):
    """전역 에러 코드"""

    # 공통 에러
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"

    # 인증 관련
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_CONFIGURATION_ERROR = "TOKEN_CONFIGURATION_ERROR"

    # 조회 관련
    INVALID_SORT_FIELD = "INVALID_SORT_FIELD"


class BaseAPIException(HTTPException):
    """기본 API 예외 클래스"""

    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        detail: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.detail_info = detail or {}
        super().__init__(status_code=status_code, detail=message)


class BadRequestException(BaseAPIException):
    """400 Bad Request"""

    def __init__(
        self,
        message: str = "Bad request.",
        error_code: str = ErrorCode.BAD_REQUEST,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class UnauthorizedException(BaseAPIException):
    """401 Unauthorized"""

    def __init__(
        self,
        message: str = "Authentication required.",
        error_code: str = ErrorCode.UNAUTHORIZED,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class InternalServerException(BaseAPIException):
    """500 Internal Server Error"""

    def __init__(
        self,
        message: str = "Internal server error.",
        error_code: str = ErrorCode.INTERNAL_ERROR,
        detail: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class RequestValidationException(BadRequestException):
    """요청 필드 검증 실패 (모든 실패 항목을 detail.errors에 담음)"""

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__(
            message="One or more validation errors occurred.",
            error_code=ErrorCode.VALIDATION_ERROR,
            detail={"errors": errors},
        )


class InvalidSortFieldException(BadRequestException):
    """허용되지 않은 정렬 필드"""

    def __init__(self, sort_by: str):
        super().__init__(
            message=f"Unknown sort field: {sort_by}",
            error_code=ErrorCode.INVALID_SORT_FIELD,
            detail={"sort_by": sort_by},
        )


class TokenConfigurationError(InternalServerException):
    """JWT 서명 키 미설정 (복구 불가)"""

    def __init__(self, message: str = "SECRET_KEY not found."):
        super().__init__(
            message=message,
            error_code=ErrorCode.TOKEN_CONFIGURATION_ERROR,
        )


async def base_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """BaseAPIException 핸들러"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.message,
            "error": {
                "code": exc.error_code,
                "message": exc.message,
                "detail": exc.detail_info,
            },
        },
    )


async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """요청 파싱 실패를 400 검증 오류 형식으로 변환"""
    errors = [
        {
            "field": ".".join(
                str(part) for part in error.get("loc", ())[1:]
            ),
            "message": error.get("msg", ""),
        }
        for error in exc.errors()
    ]
    return await base_exception_handler(
        request, RequestValidationException(errors)
    )


_HTTP_STATUS_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: ErrorCode.BAD_REQUEST,
    status.HTTP_401_UNAUTHORIZED: ErrorCode.UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: ErrorCode.FORBIDDEN,
    status.HTTP_404_NOT_FOUND: ErrorCode.NOT_FOUND,
    status.HTTP_409_CONFLICT: ErrorCode.CONFLICT,
}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """HTTPException 핸들러 (라우팅 실패 404/405 포함)"""
    return JSONResponse(
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
        content={
            "success": False,
            "message": str(exc.detail),
            "error": {
                "code": _HTTP_STATUS_ERROR_CODES.get(
                    exc.status_code, ErrorCode.INTERNAL_ERROR
                ),
                "message": str(exc.detail),
                "detail": None,
            },
        },
    )


async def generic_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """일반 예외 핸들러"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": "Internal server error.",
            "error": {
                "code": ErrorCode.INTERNAL_ERROR,
                "message": "Internal server error.",
                "detail": None,
            },
        },
    )
