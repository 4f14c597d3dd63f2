"""Reusable decorators for simulator utilities."""

import time
import functools
import logging
from typing import Callable

log = logging.getLogger(__name__)


def measure_time(func: Callable) -> Callable:
    """
    Log execution time for the wrapped callable.

    When the result is a trajectory, the merge count and step-0 sequence length
    are logged alongside the time.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = None
        try:
            result = func(*args, **kwargs)
            return result
        # log execution time even if the decorated function throws error
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            n_merges = getattr(result, "n_merges", None)
            if n_merges is None:
                log.info(f"{func.__name__} finished in {elapsed_ms:.2f} ms")
            else:
                log.info(
                    f"{func.__name__} learned {n_merges} merges over "
                    f"{len(result[0].sequence)} symbols in {elapsed_ms:.2f} ms"
                )

    return wrapper
