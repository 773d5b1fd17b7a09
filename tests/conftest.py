"""테스트 설정"""

import os

# 앱 모듈 임포트 전에 서명 키 설정 (settings는 임포트 시점에 로드됨)
os.environ.setdefault(
    "SECRET_KEY", "test-secret-key-for-employee-directory-0123456789"
)

from datetime import date  # noqa: E402
from typing import Generator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from docker import from_env  # noqa: E402
from docker.errors import DockerException  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer  # noqa: E402

from app.core.database import Base, get_db  # noqa: E402
from app.core.security import get_token_issuer, hash_password  # noqa: E402
from app.domains.users.models import PhoneNumber, Role, User  # noqa: E402
from app.domains.users.repository import UserRepository  # noqa: E402
from app.main import app  # noqa: E402

DEFAULT_PASSWORD = "Str0ng!Pass"


def _is_docker_available() -> bool:
    """로컬 환경에서 Docker 접근 가능 여부 확인"""
    if os.getenv("FORCE_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return True
    if os.getenv("SKIP_DOCKER_TESTS", "").lower() in {"1", "true"}:
        return False

    try:
        client = from_env()
        client.ping()
        return True
    except DockerException:
        return False
    except Exception:
        return False


DOCKER_AVAILABLE = _is_docker_available()


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """PostgreSQL 테스트 컨테이너"""
    if not DOCKER_AVAILABLE:
        pytest.skip("Docker is not available; skipping container-based tests.")

    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def test_database_url(postgres_container: PostgresContainer) -> str:
    """테스트 데이터베이스 URL (asyncpg)"""
    return str(
        postgres_container.get_connection_url().replace(
            "postgresql+psycopg2://", "postgresql+asyncpg://"
        )
    )


# NOTE:
# pytest-asyncio는 테스트마다 독립적인 event loop를 생성하므로
# async fixture는 모두 function 스코프로 유지
@pytest_asyncio.fixture
async def db_session(test_database_url: str):
    """테스트 데이터베이스 세션 (테스트마다 깨끗한 스키마)"""
    engine = create_async_engine(test_database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def user_factory():
    """저장되지 않은 User 객체 팩토리"""
    password_hash = hash_password(DEFAULT_PASSWORD)

    def _factory(index: int = 1, **overrides) -> User:
        values = {
            "username": f"user{index}",
            "email": f"user{index}@example.com",
            "first_name": f"First{index}",
            "last_name": f"Last{index}",
            "document_number": f"DOC-{index:04d}",
            "date_of_birth": date(1990, 1, 1),
            "role": Role.EMPLOYEE,
            "password_hash": password_hash,
            "phone_numbers": [PhoneNumber(number=f"+1555000{index:04d}")],
        }
        values.update(overrides)
        return User(**values)

    return _factory


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession, user_factory) -> User:
    """Admin 역할 사용자 (API로는 생성 불가)"""
    return await UserRepository(db_session).create(
        user_factory(
            0,
            username="admin",
            document_number="ADM-0001",
            role=Role.ADMIN,
        )
    )


@pytest.fixture
def make_auth_header():
    """사용자에 대한 Bearer 헤더 생성"""

    def _make(user: User) -> dict[str, str]:
        token = get_token_issuer().generate(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def admin_headers(admin_user: User, make_auth_header) -> dict[str, str]:
    """Admin Bearer 헤더"""
    return make_auth_header(admin_user)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """비동기 테스트 클라이언트 (테스트 DB 사용)"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend():
    """anyio 백엔드 설정"""
    return "asyncio"
