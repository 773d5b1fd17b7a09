"""처리 시간 측정 유틸리티"""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class Timer:
    """경과 시간 측정기 (블록 안에서는 현재까지, 종료 후에는 최종 값)"""

    started_at: float
    finished_at: Optional[float] = None

    @property
    def elapsed_ms(self) -> float:
        end = (
            self.finished_at
            if self.finished_at is not None
            else time.perf_counter()
        )
        return (end - self.started_at) * 1000


@contextmanager
def measure_time() -> Iterator[Timer]:
    """블록 실행 시간 측정

    Usage:
        with measure_time() as timer:
            ...
        logger.info(f"took {timer.elapsed_ms:.2f}ms")
    """
    timer = Timer(started_at=time.perf_counter())
    try:
        yield timer
    finally:
        timer.finished_at = time.perf_counter()
