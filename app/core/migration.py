"""마이그레이션 자동 실행 유틸리티

서버 시작 시 Alembic 마이그레이션을 확인하고 업데이트합니다.
데이터베이스가 아직 준비되지 않았을 수 있으므로 정해진 횟수만큼 재시도합니다.
"""

import time
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def get_sync_database_url() -> str:
    """async URL을 sync URL로 변환 (alembic은 sync 연결 사용)"""
    return settings.database_url.replace("+asyncpg", "+psycopg2")


def get_alembic_config() -> Config:
    """Alembic 설정 객체 반환"""
    project_root = Path(__file__).resolve().parents[2]
    alembic_ini_path = project_root / "alembic.ini"

    config = Config(str(alembic_ini_path))
    config.set_main_option("script_location", str(project_root / "migrations"))
    config.set_main_option("sqlalchemy.url", get_sync_database_url())
    # 앱 로깅 설정을 alembic.ini 로깅 설정으로 덮어쓰지 않음
    config.attributes["configure_logger"] = False

    return config


def get_current_revision() -> str | None:
    """현재 데이터베이스의 마이그레이션 버전 조회

    Raises:
        sqlalchemy.exc.OperationalError: 데이터베이스 연결 실패
    """
    engine = create_engine(get_sync_database_url())
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn)
            rev = context.get_current_revision()
            return str(rev) if rev else None
    finally:
        engine.dispose()


def get_head_revision() -> str | None:
    """최신 마이그레이션 버전 조회"""
    config = get_alembic_config()
    script = ScriptDirectory.from_config(config)
    head = script.get_current_head()
    return str(head) if head else None


def check_migration_status() -> dict:
    """마이그레이션 상태 확인

    Returns:
        dict: current (현재 버전), head (최신 버전), is_up_to_date (최신 여부)
    """
    current = get_current_revision()
    head = get_head_revision()

    return {
        "current": current,
        "head": head,
        "is_up_to_date": current == head,
    }


def migrate_with_retries(
    auto_migrate: bool,
    max_retries: int,
    retry_delay_seconds: float,
) -> dict:
    """마이그레이션 상태 확인 및 적용 (실패 시 재시도)

    Args:
        auto_migrate: True면 최신이 아닐 때 업그레이드
        max_retries: 최대 시도 횟수
        retry_delay_seconds: 시도 간 대기 시간

    Returns:
        dict: 마지막으로 확인한 마이그레이션 상태

    Raises:
        Exception: 모든 시도가 실패한 경우 마지막 예외
    """
    attempts = max(1, max_retries)
    attempt = 0
    while True:
        attempt += 1
        try:
            status = check_migration_status()
            if status["is_up_to_date"]:
                logger.info(
                    f"✅ 마이그레이션 상태: 최신 (revision: {status['current']})"
                )
                return status

            logger.warning(
                f"⚠️ 마이그레이션이 최신 상태가 아닙니다. "
                f"(현재: {status['current']}, 최신: {status['head']})"
            )
            if auto_migrate:
                command.upgrade(get_alembic_config(), "head")
                logger.info(f"✅ 마이그레이션 완료 (revision: {status['head']})")
            return status
        except Exception as e:
            if attempt >= attempts:
                raise
            logger.warning(
                f"🔄 마이그레이션 시도 {attempt}/{attempts} 실패: {e} "
                f"({retry_delay_seconds}s 후 재시도)"
            )
            time.sleep(retry_delay_seconds)


def run_migrations_on_startup(auto_migrate: bool = True) -> None:
    """서버 시작 시 마이그레이션 확인 및 실행

    Args:
        auto_migrate: True면 자동 마이그레이션, False면 상태만 확인
    """
    try:
        migrate_with_retries(
            auto_migrate=auto_migrate,
            max_retries=settings.migration_max_retries,
            retry_delay_seconds=settings.migration_retry_delay_seconds,
        )
    except Exception as e:
        logger.error(f"❌ 마이그레이션 실행 실패: {e}")
        # 마이그레이션 실패해도 서버는 시작 (개발 환경 등을 위해)
        if not settings.is_production:
            logger.warning("⚠️ 개발 환경이므로 서버를 계속 시작합니다.")
        else:
            raise RuntimeError("프로덕션 환경에서 마이그레이션 실패") from e
