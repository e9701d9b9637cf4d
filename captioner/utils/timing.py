import time
from contextlib import asynccontextmanager
from ..core.log_config import logger


@asynccontextmanager
async def log_duration(label: str, **extra):
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        logger.info(f"{label} completed", extra={**extra, "duration": round(duration, 3), "step": label})


def elapsed_ms(start: float) -> int:
    """Milliseconds since a time.perf_counter() reading, floored, never negative."""
    return max(0, int((time.perf_counter() - start) * 1000))
