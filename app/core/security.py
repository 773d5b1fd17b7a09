"""보안 유틸리티 (비밀번호 해싱, JWT 발급/검증)"""

from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Optional, Protocol

import bcrypt
import jwt

from app.core.config import settings
from app.core.exceptions import (
    ErrorCode,
    TokenConfigurationError,
    UnauthorizedException,
)
from app.core.utils.datetime import now_utc


def hash_password(password: str) -> str:
    """비밀번호를 bcrypt(salt 포함)로 해싱"""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """비밀번호와 저장된 해시 비교"""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8")
        )
    except ValueError:
        # 저장된 값이 bcrypt 해시 형식이 아님
        return False


class TokenSubject(Protocol):
    """토큰에 담을 사용자 정보"""

    id: int
    username: str
    role: Any


class TokenIssuer:
    """JWT 발급기

    Claims:
        username: 사용자명
        id: 사용자 ID
        role: 역할 이름
        iat: 발급 시각
        exp: 만료 시각 (iat + expire_minutes)
    """

    def __init__(
        self,
        secret_key: Optional[str],
        expire_minutes: int = 480,
        algorithm: str = "HS256",
    ):
        if not secret_key:
            raise TokenConfigurationError()
        self.secret_key = secret_key
        self.expire_minutes = expire_minutes
        self.algorithm = algorithm

    def generate(
        self, user: TokenSubject, issued_at: Optional[datetime] = None
    ) -> str:
        """사용자 토큰 발급"""
        issued_at = issued_at or now_utc()
        role = getattr(user.role, "value", user.role)
        payload = {
            "username": user.username,
            "id": user.id,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """토큰 서명/만료 검증 후 claims 반환

        Raises:
            UnauthorizedException: 만료되었거나 유효하지 않은 토큰
        """
        try:
            return dict(
                jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            )
        except jwt.ExpiredSignatureError:
            raise UnauthorizedException(
                message="Token has expired.",
                error_code=ErrorCode.TOKEN_EXPIRED,
            ) from None
        except jwt.InvalidTokenError:
            raise UnauthorizedException(
                message="Invalid token.",
                error_code=ErrorCode.INVALID_TOKEN,
            ) from None


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """설정 기반 TokenIssuer (캐싱됨)

    Raises:
        TokenConfigurationError: SECRET_KEY가 설정되지 않은 경우
    """
    return TokenIssuer(
        secret_key=settings.secret_key,
        expire_minutes=settings.access_token_expire_minutes,
        algorithm=settings.jwt_algorithm,
    )
