"""Users 도메인 모델 정의

직원(User)과 전화번호(PhoneNumber) 모델입니다.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    case,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Role(str, Enum):
    """직원 역할

    Employee < Leader < Director 순서를 가집니다.
    Admin은 순서 밖의 예약 역할로, API로 부여할 수 없습니다.
    """

    EMPLOYEE = "Employee"
    LEADER = "Leader"
    DIRECTOR = "Director"
    ADMIN = "Admin"

    @property
    def rank(self) -> Optional[int]:
        """정렬 순위 (Admin은 None)"""
        return ROLE_RANKS.get(self)

    @property
    def is_assignable(self) -> bool:
        return self in ROLE_RANKS

    def can_grant(self, requested: "Role") -> bool:
        """이 역할의 호출자가 requested 역할을 부여할 수 있는지 여부"""
        if not requested.is_assignable:
            return False
        if self is Role.ADMIN:
            return True
        return ROLE_RANKS[requested] <= ROLE_RANKS[self]

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """문자열(대소문자 무시)을 Role로 변환, 실패 시 None"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for role in cls:
            if role.value.lower() == value.strip().lower():
                return role
        return None


ROLE_RANKS: dict[Role, int] = {
    Role.EMPLOYEE: 1,
    Role.LEADER: 2,
    Role.DIRECTOR: 3,
}

ASSIGNABLE_ROLES: tuple[Role, ...] = tuple(ROLE_RANKS)


class User(Base):
    """직원 모델

    username, document_number는 전역 유일합니다.
    manager_id는 다른 직원을 참조하며, 참조 중인 직원은 삭제할 수 없습니다.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="사용자 ID",
    )
    username: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        unique=True,
        comment="로그인 사용자명",
    )
    email: Mapped[str] = mapped_column(
        String(256),
        nullable=False,
        comment="이메일",
    )
    first_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="이름",
    )
    last_name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="성",
    )
    document_number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        unique=True,
        comment="신분증 번호",
    )
    date_of_birth: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="생년월일",
    )
    role: Mapped[Role] = mapped_column(
        String(20),
        nullable=False,
        comment="역할 (Employee/Leader/Director/Admin)",
    )
    password_hash: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="bcrypt 비밀번호 해시",
    )
    manager_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="매니저 사용자 ID",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
        comment="수정 일시",
    )

    phone_numbers: Mapped[list["PhoneNumber"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="PhoneNumber.id",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<User(id={self.id}, username={self.username}, "
            f"role={self.role})>"
        )


class PhoneNumber(Base):
    """전화번호 모델 (User 1:N)"""

    __tablename__ = "phone_numbers"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="전화번호 ID",
    )
    number: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="전화번호",
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="소유 사용자 ID",
    )

    user: Mapped["User"] = relationship(back_populates="phone_numbers")

    def __repr__(self) -> str:
        return f"<PhoneNumber(id={self.id}, number={self.number})>"


# 역할 정렬용 SQL 표현식 (이름이 아닌 순위로 정렬, Admin은 마지막)
role_rank = case(
    {role.value: rank for role, rank in ROLE_RANKS.items()},
    value=User.role,
    else_=len(ROLE_RANKS) + 1,
)
