"""요청/응답 로깅 미들웨어"""

from typing import Callable, cast

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.context import set_request_id
from app.core.logging import get_logger
from app.core.utils.time import measure_time

logger = get_logger(__name__)

# 로깅 제외 경로
EXCLUDE_PATHS = {"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"}

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 로깅 및 처리 시간 측정 미들웨어

    요청 ID는 contextvar에 저장되어 같은 요청에서 남기는 모든 로그에 붙습니다.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        if request.url.path in EXCLUDE_PATHS:
            return cast(Response, await call_next(request))

        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))

        logger.info(
            f"→ {request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        with measure_time() as timer:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    f"✗ {request.method} {request.url.path} "
                    f"| Time: {timer.elapsed_ms:.2f}ms",
                    extra={"method": request.method, "path": request.url.path},
                )
                raise

        elapsed_ms = timer.elapsed_ms
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}ms"

        # 4xx/5xx는 warning
        log_method = (
            logger.info if response.status_code < 400 else logger.warning
        )
        log_method(
            f"{request.method} {request.url.path} "
            f"| Status: {response.status_code} | Time: {elapsed_ms:.2f}ms",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
            },
        )

        return cast(Response, response)
