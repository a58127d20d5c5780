"""Timing helper that logs entry and exit of an operation."""

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class TimedResult:
    """Result object for timed_operation context manager."""

    elapsed_seconds: float | None = None


@contextmanager
def timed_operation(
    logger: logging.Logger,
    message: str,
    level: int = logging.DEBUG,
    **attributes: str | int | float | bool,
) -> Iterator[TimedResult]:
    """Context manager that logs entry and exit with elapsed time.

    Args:
        logger: Logger the two records are written to.
        message: The base log message.
        level: Logging level (default DEBUG).
        **attributes: Additional structured fields passed as ``extra``.

    Yields:
        TimedResult whose elapsed_seconds is filled in on exit.
    """
    result = TimedResult()
    start = time.perf_counter()
    logger.log(level, "%s [entry]", message, extra={"phase": "entry", **attributes})
    yield result
    result.elapsed_seconds = time.perf_counter() - start
    logger.log(
        level,
        "%s [exit]",
        message,
        extra={
            "phase": "exit",
            "elapsed_seconds": result.elapsed_seconds,
            **attributes,
        },
    )
