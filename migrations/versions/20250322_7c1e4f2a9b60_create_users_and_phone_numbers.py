"""create_users_and_phone_numbers

Revision ID: 7c1e4f2a9b60
Revises:
Create Date: 2025-03-22 14:10:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "7c1e4f2a9b60"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """업그레이드 마이그레이션: users, phone_numbers 테이블 생성"""
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="사용자 ID",
        ),
        sa.Column(
            "username",
            sa.String(length=256),
            nullable=False,
            comment="로그인 사용자명",
        ),
        sa.Column(
            "email", sa.String(length=256), nullable=False, comment="이메일"
        ),
        sa.Column(
            "first_name", sa.String(length=50), nullable=False, comment="이름"
        ),
        sa.Column(
            "last_name", sa.String(length=50), nullable=False, comment="성"
        ),
        sa.Column(
            "document_number",
            sa.String(length=20),
            nullable=False,
            comment="신분증 번호",
        ),
        sa.Column(
            "date_of_birth", sa.Date(), nullable=False, comment="생년월일"
        ),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="역할 (Employee/Leader/Director/Admin)",
        ),
        sa.Column(
            "password_hash",
            sa.String(length=100),
            nullable=False,
            comment="bcrypt 비밀번호 해시",
        ),
        sa.Column(
            "manager_id",
            sa.Integer(),
            nullable=True,
            comment="매니저 사용자 ID",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
            comment="생성 일시",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="수정 일시",
        ),
        sa.ForeignKeyConstraint(
            ["manager_id"], ["users.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("document_number"),
    )
    op.create_index(
        op.f("ix_users_manager_id"), "users", ["manager_id"], unique=False
    )

    op.create_table(
        "phone_numbers",
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="전화번호 ID",
        ),
        sa.Column(
            "number", sa.String(length=20), nullable=False, comment="전화번호"
        ),
        sa.Column(
            "user_id", sa.Integer(), nullable=False, comment="소유 사용자 ID"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_phone_numbers_user_id"),
        "phone_numbers",
        ["user_id"],
        unique=False,
    )


def downgrade() -> None:
    """다운그레이드 마이그레이션: phone_numbers, users 테이블 삭제"""
    op.drop_index(op.f("ix_phone_numbers_user_id"), table_name="phone_numbers")
    op.drop_table("phone_numbers")
    op.drop_index(op.f("ix_users_manager_id"), table_name="users")
    op.drop_table("users")
