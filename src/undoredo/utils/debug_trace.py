"""Debug tracing utilities for undo/redo replay analysis.

Nothing is printed unless the host calls setup_debug_logging(); the
undoredo-demo entry point does so at startup.
The DEBUG_PERF flag controls whether replay timing is logged.

Usage:
    from ..utils.debug_trace import logger, perf_timer

    # Simple logging
    logger.debug("Adding to undo stack")

    # Performance timing (only logs if DEBUG_PERF is True)
    with perf_timer("undo"):
        entry.execute()

    # Or use the decorator
    @log_perf
    def expensive_function():
        pass
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from contextlib import contextmanager
from functools import wraps
from typing import Any

# Global flag to enable/disable performance tracing
DEBUG_PERF = False

# Create package logger
logger = logging.getLogger("undoredo")


def setup_debug_logging(level: int = logging.DEBUG) -> None:
    """Configure logging for debug mode (console output).

    Call this once at startup when running in debug mode.
    """
    # Only configure if not already configured
    if logger.handlers:
        return

    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    formatter = logging.Formatter(
        "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def set_debug_perf(enabled: bool) -> None:
    """Turn replay timing on or off."""
    global DEBUG_PERF
    DEBUG_PERF = enabled


@contextmanager
def perf_timer(operation: str, entry_count: int | None = None, enabled: bool | None = None):
    """Context manager for timing operations.

    Args:
        operation: Name of the operation being timed
        entry_count: Optional number of stack entries for context
        enabled: Per-call override. None follows DEBUG_PERF.

    Example:
        with perf_timer("redo", entry_count=3):
            entry.execute()
    """
    if enabled is None:
        enabled = DEBUG_PERF
    if not enabled:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        if entry_count is not None:
            logger.debug(f"PERF: {operation} ({entry_count} entries) took {elapsed_ms:.2f}ms")
        else:
            logger.debug(f"PERF: {operation} took {elapsed_ms:.2f}ms")


def log_perf(func: Callable) -> Callable:
    """Decorator to log function performance.

    Example:
        @log_perf
        def _redraw(self):
            ...
    """

    @wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        if not DEBUG_PERF:
            return func(*args, **kwargs)

        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"PERF: {func.__qualname__} took {elapsed_ms:.2f}ms")

    return wrapper
