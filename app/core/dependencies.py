"""공통 의존성 함수 정의

이 모듈은 FastAPI 엔드포인트에서 사용되는 공통 의존성 함수들을 정의합니다.
"""

from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import UnauthorizedException
from app.core.security import TokenIssuer, get_token_issuer

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        bearer_scheme
    ),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> dict[str, Any]:
    """Bearer 토큰 검증 후 호출자 claims 반환

    Raises:
        UnauthorizedException: 토큰이 없거나 유효하지 않은 경우

    Example:
        @router.get("/List")
        async def get_users(claims: dict = Depends(get_current_claims)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException(message="Bearer token is required.")

    return token_issuer.decode(credentials.credentials)
