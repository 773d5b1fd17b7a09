"""날짜/시간 유틸리티"""

from datetime import date, datetime, timezone
from typing import Optional

UTC = timezone.utc


def now_utc() -> datetime:
    """현재 UTC 시간 반환"""
    return datetime.now(UTC)


def today() -> date:
    """오늘 날짜 반환 (서버 로컬 기준)"""
    return date.today()


def add_years(d: date, years: int) -> date:
    """날짜에 연 단위를 더함

    2월 29일이 윤년이 아닌 해로 이동하면 2월 28일로 맞춥니다.
    """
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)


def calculate_age(birth_date: date, on: Optional[date] = None) -> int:
    """만 나이 계산

    Args:
        birth_date: 생년월일
        on: 기준일 (기본: 오늘)

    Returns:
        기준일 시점의 만 나이
    """
    reference = on or today()
    age = reference.year - birth_date.year
    if birth_date > add_years(reference, -age):
        age -= 1
    return age
