from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, TypeVar


T = TypeVar("T")
R = TypeVar("R")

log = logging.getLogger(__name__)


def resolve_n_jobs(n_jobs: int | None = None) -> int:
    """``n_jobs <= 0`` (or None) means "use the machine", capped at 8."""
    n = int(n_jobs or 0)
    if n <= 0:
        n = max(1, min(8, os.cpu_count() or 1))
    return n


def map_fallible(func: Callable[[T], R], items: Iterable[T], *, n_jobs: int | None = 0) -> list[R]:
    """Apply ``func`` to every item; return all results or raise.

    Results keep input order. If any call raises, the exception of the
    earliest failing item (in input order) propagates and no partial result
    is returned. Calls already running are not cancelled.
    """
    items = list(items)
    n = resolve_n_jobs(n_jobs)
    if n == 1 or len(items) <= 1:
        return [func(x) for x in items]

    log.debug("map_fallible: %d items on %d threads", len(items), n)
    with ThreadPoolExecutor(max_workers=min(n, len(items))) as ex:
        # Executor.map re-raises the first exception in input order.
        return list(ex.map(func, items))
