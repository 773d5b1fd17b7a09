"""데이터베이스 엔진 / 세션 관리

요청 하나가 하나의 작업 단위(Unit of Work)입니다.
리포지토리는 flush만 하고, 커밋은 get_db / session_scope에서 한 번 수행합니다.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    pool_size=settings.database_pool_size,
    max_overflow=settings.database_max_overflow,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 모델 베이스 클래스"""


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """작업 단위 세션 (정상 종료 시 커밋, 예외 시 롤백)

    Example::

        async with session_scope() as session:
            await UserRepository(session).create(user)
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 의존성"""
    async with session_scope() as session:
        yield session


async def close_db() -> None:
    """데이터베이스 연결 종료"""
    await engine.dispose()
