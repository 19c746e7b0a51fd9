# profkit.py — ultra-light profiling helpers for index builds and queries
# `from profkit import timeit, tick, report`.
# Toggle via env var: set PROFKIT=1 to enable; otherwise it's no-op with near-zero overhead.

import os
import time
from collections import defaultdict
from contextlib import contextmanager

ENABLED = os.getenv("PROFKIT", "0") == "1"
COUNTERS = defaultdict(float)  # str -> float (counts / milliseconds)


def tick(name: str, n: float = 1.0):
    if ENABLED:
        COUNTERS[name] += n


@contextmanager
def timeit(name: str):
    if not ENABLED:
        yield
        return
    t0 = time.perf_counter()
    try:
        yield
    finally:
        COUNTERS[name] += (time.perf_counter() - t0) * 1000.0  # ms


def report() -> dict:
    """Snapshot of the counters, sorted by name."""
    return {k: COUNTERS[k] for k in sorted(COUNTERS)}


def reset():
    COUNTERS.clear()
