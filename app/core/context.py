"""요청 ID 컨텍스트 관리

로그 필터와 서비스 로그가 같은 요청 ID를 공유하도록 contextvar에 보관합니다.
"""

import contextvars
import uuid
from typing import Optional

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


def get_request_id() -> Optional[str]:
    """현재 요청 ID 반환 (요청 밖이면 None)"""
    return request_id_ctx.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """요청 ID 설정

    헤더로 받은 값이 없거나 너무 길면 새 UUID를 발급합니다.
    """
    if not request_id or len(request_id) > 128:
        request_id = str(uuid.uuid4())
    request_id_ctx.set(request_id)
    return request_id
