from __future__ import annotations

import threading
import time

import pytest

from enconv.parallel import map_fallible, resolve_n_jobs


def test_results_keep_input_order():
    def slow_square(x: int) -> int:
        time.sleep(0.01 * (5 - x))
        return x * x

    assert map_fallible(slow_square, range(5), n_jobs=4) == [0, 1, 4, 9, 16]


def test_runs_on_worker_threads():
    seen: set[str] = set()

    def record(x: int) -> int:
        seen.add(threading.current_thread().name)
        time.sleep(0.02)
        return x

    map_fallible(record, range(4), n_jobs=4)
    assert threading.main_thread().name not in seen


def test_serial_when_single_job():
    names: list[str] = []

    def record(x: int) -> int:
        names.append(threading.current_thread().name)
        return x

    assert map_fallible(record, [1, 2, 3], n_jobs=1) == [1, 2, 3]
    assert set(names) == {threading.main_thread().name}


def test_first_error_propagates():
    def boom(x: int) -> int:
        if x in (2, 3):
            raise ValueError(f"bad {x}")
        return x

    with pytest.raises(ValueError, match="bad 2"):
        map_fallible(boom, range(5), n_jobs=3)


def test_empty_input():
    assert map_fallible(lambda x: x, [], n_jobs=4) == []


def test_resolve_n_jobs():
    assert resolve_n_jobs(3) == 3
    assert 1 <= resolve_n_jobs(0) <= 8
    assert 1 <= resolve_n_jobs(None) <= 8
    assert 1 <= resolve_n_jobs(-1) <= 8
