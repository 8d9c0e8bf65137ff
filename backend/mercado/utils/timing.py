"""Timing spans for remote round trips."""

import time
from contextlib import contextmanager
from typing import Iterator

from mercado.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they stand out and are easy to grep
_TIMING_PREFIX = "[TIMING]"


def format_duration(ms: int) -> str:
    """Return human-readable duration: e.g. 12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[None]:
    """Log elapsed time for a block, whether it returns or raises."""
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except BaseException:
        outcome = "error"
        raise
    finally:
        elapsed = int((time.perf_counter() - start) * 1000)
        parts = [f"elapsed_ms={elapsed}", f"({format_duration(elapsed)})", f"outcome={outcome}"] + [
            f"{k}={v}" for k, v in extra.items()
        ]
        logger.info("%s %s %s", _TIMING_PREFIX, name, " ".join(parts))
