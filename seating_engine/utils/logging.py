# seating_engine/utils/logging.py

"""
Logging utilities for the seating engine: phase timing and operation timing.
"""

import logging
import time
import functools
import threading
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..config import SolverPhase


class PhaseTimings:
    """Accumulates wall-clock durations per solver phase for one run."""

    def __init__(self):
        self._durations: Dict[SolverPhase, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def record(self, phase: SolverPhase, seconds: float) -> None:
        with self._lock:
            self._durations[phase].append(seconds)

    def summary(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                phase.value: {
                    "count": len(values),
                    "total_seconds": sum(values),
                    "max_seconds": max(values),
                }
                for phase, values in self._durations.items()
            }


@contextmanager
def phase_timer(
    logger: logging.Logger,
    phase: SolverPhase,
    timings: Optional[PhaseTimings] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Iterator[None]:
    """Context manager for automatic phase timing"""
    start_time = time.perf_counter()
    extra = {"operation": phase.value}
    logger.debug(f"Starting {phase.value} phase {context or ''}".rstrip(), extra=extra)
    try:
        yield
    finally:
        duration = time.perf_counter() - start_time
        if timings is not None:
            timings.record(phase, duration)
        logger.debug(
            f"Completed {phase.value} phase in {duration * 1000:.2f}ms", extra=extra
        )


# Decorator for automatic operation timing
def log_operation(operation_name: str, logger: Optional[logging.Logger] = None):
    """Decorator to automatically log and time function operations"""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            start_time = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                duration = time.perf_counter() - start_time
                log.info(
                    f"Operation {operation_name} completed in {duration:.3f}s",
                    extra={"operation": operation_name},
                )

        return wrapper

    return decorator
