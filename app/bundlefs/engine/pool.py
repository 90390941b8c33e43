"""Bounded worker pool for file-level I/O.

Runs one task per item on a thread pool capped at ``limit`` workers, so
at most ``limit`` files are open at once. On the first failure, queued
tasks are cancelled, in-flight ones drain, and that first error is
raised. Completed work is not rolled back.
"""

import concurrent.futures
import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_bounded(func: Callable[[T], None], items: Iterable[T], limit: int) -> None:
    """Apply ``func`` to every item with at most ``limit`` calls in flight.

    Args:
        func: Task to run for each item.
        items: Work items. Their relative completion order is unspecified.
        limit: Maximum number of concurrent calls (at least 1).

    Raises:
        Exception: The first exception raised by any task.
    """
    if limit < 1:
        msg = f"Concurrency limit must be at least 1, got {limit}"
        raise ValueError(msg)

    work = list(items)
    if not work:
        return

    first_error: BaseException | None = None

    with concurrent.futures.ThreadPoolExecutor(max_workers=limit) as pool:
        futures = [pool.submit(func, item) for item in work]
        for future in concurrent.futures.as_completed(futures):
            if future.cancelled():
                continue
            error = future.exception()
            if error is None or first_error is not None:
                continue
            first_error = error
            cancelled = sum(1 for f in futures if f.cancel())
            logger.debug("Task failed, cancelled %d queued tasks: %s", cancelled, error)

    if first_error is not None:
        raise first_error
