"""공통 API 응답 스키마

이 모듈은 API 응답의 일관된 구조를 정의합니다.

Usage::

    # 단일 데이터 응답
    from app.core.schemas import APIResponse, create_response
    return create_response(data=user, message="User retrieved.")

    # 목록 데이터 응답 (페이지네이션)
    from app.core.schemas import ListAPIResponse, create_list_response
    return create_list_response(data=users, result=paged_result)

Note:
    Generic 타입의 classmethod는 Pydantic에서 제한이 있으므로,
    팩토리 함수(create_response, create_list_response)를 사용하거나
    직접 생성자를 호출하세요.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from app.core.utils.pagination import PagedResult

DataT = TypeVar("DataT")


class APIResponse(BaseModel, Generic[DataT]):
    """단일 데이터 API 응답"""

    success: bool = True
    message: str = "Request processed successfully."
    data: Optional[DataT] = None


class PageMeta(BaseModel):
    """페이지네이션 메타 정보

    page, size가 0이면 페이지네이션 없이 전체를 반환한 결과입니다.
    """

    total: int = Field(..., description="전체 아이템 수")
    page: int = Field(..., description="현재 페이지 (0=전체)")
    size: int = Field(..., description="페이지 크기 (0=전체)")
    total_pages: int = Field(..., description="전체 페이지 수")
    has_next: bool = Field(..., description="다음 페이지 존재 여부")
    has_prev: bool = Field(..., description="이전 페이지 존재 여부")


class ListAPIResponse(BaseModel, Generic[DataT]):
    """목록 데이터 API 응답 (페이지네이션 포함)"""

    success: bool = True
    message: str = "Request processed successfully."
    data: list[DataT] = Field(default_factory=list)
    meta: PageMeta


def create_response(
    data: Optional[DataT] = None,
    message: str = "Request processed successfully.",
    success: bool = True,
) -> APIResponse[DataT]:
    """API 응답 생성 팩토리 함수"""
    return APIResponse(success=success, message=message, data=data)


def create_list_response(
    data: list[DataT],
    result: PagedResult,
    message: str = "Request processed successfully.",
) -> ListAPIResponse[DataT]:
    """목록 API 응답 생성 팩토리 함수

    Args:
        data: 응답용으로 변환된 아이템 목록
        result: 페이지 정보를 담은 PagedResult
        message: 응답 메시지

    Returns:
        ListAPIResponse 인스턴스
    """
    return ListAPIResponse(
        success=True,
        message=message,
        data=data,
        meta=PageMeta(
            total=result.total_count,
            page=result.page,
            size=result.page_size,
            total_pages=result.total_pages,
            has_next=result.has_next_page,
            has_prev=result.has_previous_page,
        ),
    )


class ErrorDetail(BaseModel):
    """에러 상세 정보"""

    code: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    detail: Optional[dict[str, Any]] = Field(default=None, description="추가 정보")


class ErrorResponse(BaseModel):
    """에러 API 응답

    Example::

        {
            "success": false,
            "message": "User not found",
            "error": {
                "code": "USER_NOT_FOUND",
                "message": "User not found",
                "detail": {"user_id": 123}
            }
        }
    """

    success: bool = False
    message: str
    error: ErrorDetail
