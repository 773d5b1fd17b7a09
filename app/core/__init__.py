"""Core 모듈

설정, 데이터베이스 세션, 공통 예외, 로깅 등 도메인에 독립적인 기반 계층입니다.
"""

from app.core.config import settings
from app.core.database import Base, get_db, session_scope
from app.core.exceptions import (
    BadRequestException,
    BaseAPIException,
    ErrorCode,
    InternalServerException,
    InvalidSortFieldException,
    RequestValidationException,
    TokenConfigurationError,
    UnauthorizedException,
)
from app.core.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "Base",
    "get_db",
    "session_scope",
    "ErrorCode",
    "BaseAPIException",
    "BadRequestException",
    "UnauthorizedException",
    "InternalServerException",
    "RequestValidationException",
    "InvalidSortFieldException",
    "TokenConfigurationError",
    "get_logger",
    "setup_logging",
]
