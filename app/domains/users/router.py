"""Users 도메인 라우터

직원 등록/로그인/조회/수정/삭제 API 엔드포인트입니다.
로그인을 제외한 모든 엔드포인트는 Bearer 토큰이 필요합니다.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_current_claims
from app.core.schemas import (
    APIResponse,
    ErrorResponse,
    ListAPIResponse,
    create_list_response,
    create_response,
)
from app.core.security import TokenIssuer, get_token_issuer
from app.core.utils.pagination import PageParams
from app.domains.users.exceptions import UserNotFoundException
from app.domains.users.models import Role
from app.domains.users.repository import UserFilter
from app.domains.users.schemas import (
    CreateUserRequest,
    LoginUserRequest,
    TokenResponse,
    UpdateUserRequest,
    UserResponse,
)
from app.domains.users.service import UserService
from app.domains.users.validators import (
    CreateUserRequestValidator,
    UpdateUserRequestValidator,
)

router = APIRouter(responses={400: {"model": ErrorResponse}})

create_validator = CreateUserRequestValidator()
update_validator = UpdateUserRequestValidator()


def get_user_service(
    session: AsyncSession = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> UserService:
    """UserService 의존성"""
    return UserService(session, token_issuer=token_issuer)


@router.post(
    "",
    response_model=APIResponse[UserResponse],
    status_code=201,
)
async def create_user(
    request: CreateUserRequest,
    claims: dict[str, Any] = Depends(get_current_claims),
    service: UserService = Depends(get_user_service),
):
    """직원 등록 (호출자 역할 이하의 역할만 부여 가능)"""
    create_validator.ensure_valid(request)
    user = await service.create(request, claims)
    return create_response(
        data=UserResponse.model_validate(user),
        message="User created.",
    )


@router.post("/Login", response_model=APIResponse[TokenResponse])
async def login(
    request: LoginUserRequest,
    service: UserService = Depends(get_user_service),
):
    """로그인 (인증 불필요)"""
    token = await service.login(request.username, request.password)
    return create_response(
        data=TokenResponse(access_token=token),
        message="Login succeeded.",
    )


@router.get(
    "/List",
    response_model=ListAPIResponse[UserResponse],
    dependencies=[Depends(get_current_claims)],
)
async def get_users(
    page_params: PageParams = Depends(),
    username: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    document_number: Optional[str] = Query(None),
    manager_id: Optional[int] = Query(None),
    role: Optional[Role] = Query(None),
    service: UserService = Depends(get_user_service),
):
    """직원 목록 조회 (필터/정렬/페이지네이션)"""
    result = await service.get_list(
        UserFilter(
            username=username,
            email=email,
            document_number=document_number,
            manager_id=manager_id,
            role=role,
            page=page_params.page,
            page_size=page_params.page_size,
            sort_by=page_params.sort_by,
            is_desc=page_params.is_desc,
        )
    )
    return create_list_response(
        data=[UserResponse.model_validate(user) for user in result.items],
        result=result,
        message="Users retrieved.",
    )


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    dependencies=[Depends(get_current_claims)],
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    """직원 상세 조회"""
    user = await service.get_by_id(user_id)
    if user is None:
        raise UserNotFoundException(user_id=user_id)
    return create_response(
        data=UserResponse.model_validate(user),
        message="User retrieved.",
    )


@router.put(
    "/{user_id}",
    response_model=APIResponse[UserResponse],
    dependencies=[Depends(get_current_claims)],
)
async def update_user(
    user_id: int,
    request: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
):
    """직원 수정 (전체 덮어쓰기)

    유효한 토큰만 요구합니다. 역할 상한은 생성 시에만 검사하므로
    어떤 호출자든 role 을 포함한 모든 필드를 덮어쓸 수 있습니다.
    """
    update_validator.ensure_valid(request)
    user = await service.update(user_id, request)
    return create_response(
        data=UserResponse.model_validate(user),
        message="User updated.",
    )


@router.delete(
    "/{user_id}",
    status_code=204,
    dependencies=[Depends(get_current_claims)],
)
async def delete_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    """직원 삭제 (전화번호 포함, 하드 삭제)"""
    await service.remove(user_id)
    return Response(status_code=204)
