"""유틸리티 모듈"""

from app.core.utils.datetime import (
    UTC,
    add_years,
    calculate_age,
    now_utc,
    today,
)
from app.core.utils.pagination import (
    PagedResult,
    PageParams,
    paginate_query,
    paginate_sequence,
)
from app.core.utils.time import Timer, measure_time

__all__ = [
    # datetime
    "UTC",
    "now_utc",
    "today",
    "add_years",
    "calculate_age",
    # pagination
    "PageParams",
    "PagedResult",
    "paginate_query",
    "paginate_sequence",
    # time measurement
    "Timer",
    "measure_time",
]
