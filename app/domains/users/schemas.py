"""Users 도메인 스키마 정의

요청 스키마는 형식(타입)만 검사합니다. 필드 규칙은 validators.py에서
모든 실패를 모아 검사하므로, 문자열 필드는 빈 값을 허용합니다.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.domains.users.models import Role


class PhoneNumberRequest(BaseModel):
    """전화번호 요청 스키마"""

    number: str = Field("", description="전화번호 (예: +123456789)")


class UpdatePhoneNumberRequest(PhoneNumberRequest):
    """전화번호 수정 요청 스키마

    id가 기존 전화번호와 일치하면 해당 레코드를 갱신하고,
    없거나 일치하지 않으면 새로 추가합니다.
    """

    id: Optional[int] = Field(None, description="기존 전화번호 ID")


class UserRequestBase(BaseModel):
    """생성/수정 공통 필드"""

    username: str = Field("", description="로그인 사용자명 (유일)")
    password: str = Field("", description="비밀번호")
    re_password: str = Field("", description="비밀번호 확인")
    first_name: str = Field("", description="이름")
    last_name: str = Field("", description="성")
    email: str = Field("", description="이메일")
    document_number: str = Field("", description="신분증 번호 (유일, 최대 20자)")
    manager_id: Optional[int] = Field(None, description="매니저 사용자 ID")
    date_of_birth: Optional[date] = Field(None, description="생년월일 (만 18세 이상)")
    role: Optional[Role] = Field(None, description="역할")


class CreateUserRequest(UserRequestBase):
    """사용자 생성 요청 스키마"""

    phone_numbers: list[PhoneNumberRequest] = Field(default_factory=list)


class UpdateUserRequest(UserRequestBase):
    """사용자 수정 요청 스키마 (변경 가능한 필드 전체 덮어쓰기)"""

    phone_numbers: list[UpdatePhoneNumberRequest] = Field(default_factory=list)


class LoginUserRequest(BaseModel):
    """로그인 요청 스키마"""

    username: str
    password: str


class PhoneNumberResponse(BaseModel):
    """전화번호 응답 스키마"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    number: str


class UserResponse(BaseModel):
    """사용자 응답 스키마 (비밀번호 해시는 포함하지 않음)"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    document_number: str
    manager_id: Optional[int] = None
    date_of_birth: date
    role: Role
    phone_numbers: list[PhoneNumberResponse] = Field(default_factory=list)


class TokenResponse(BaseModel):
    """로그인 응답 스키마"""

    access_token: str
    token_type: str = "bearer"
