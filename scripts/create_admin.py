#!/usr/bin/env python3
"""관리자(Admin) 계정 생성 스크립트

Admin 역할은 API로 부여할 수 없으므로 최초 관리자는 이 스크립트로 생성합니다.

Usage:
    python scripts/create_admin.py --username admin --password 'S3cure!pass' \
        --email admin@example.com --document-number ADM-0001
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path

# 프로젝트 루트 경로 추가
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.core.database import close_db, session_scope  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.domains.users.models import Role, User  # noqa: E402
from app.domains.users.repository import UserRepository  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="관리자 계정 생성")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--document-number", required=True)
    parser.add_argument("--first-name", default="System")
    parser.add_argument("--last-name", default="Administrator")
    parser.add_argument(
        "--date-of-birth",
        type=date.fromisoformat,
        default=date(1970, 1, 1),
        help="YYYY-MM-DD",
    )
    return parser.parse_args(argv)


async def create_admin(args: argparse.Namespace) -> int:
    """관리자 생성 후 ID 반환 (이미 존재하면 기존 ID)"""
    async with session_scope() as session:
        repository = UserRepository(session)

        existing = await repository.get_by_username(args.username)
        if existing is not None:
            print(f"⚠️ 이미 존재하는 사용자입니다: {args.username} (id={existing.id})")
            return existing.id

        user = await repository.create(
            User(
                username=args.username,
                email=args.email,
                first_name=args.first_name,
                last_name=args.last_name,
                document_number=args.document_number,
                date_of_birth=args.date_of_birth,
                role=Role.ADMIN,
                password_hash=hash_password(args.password),
                phone_numbers=[],
            )
        )
        print(f"✅ 관리자 생성 완료: {user.username} (id={user.id})")
        return user.id


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    try:
        await create_admin(args)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
