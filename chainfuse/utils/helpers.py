"""Timing helpers for comparing fused and eager pipelines."""

import statistics
import time
from typing import Any, Callable, Dict

_UNITS = ((1_000_000_000, 's', 3), (1_000_000, 'ms', 2), (1_000, 'µs', 1))


def measure(func: Callable[[], Any], *, iterations: int = 50, warmup: int = 5) -> Dict[str, Any]:
    """
    Time ``func()`` over ``iterations`` runs after ``warmup`` runs.

    Returns the median run in nanoseconds together with the result of
    the last run, so callers can check correctness.
    """
    for _ in range(warmup):
        func()

    samples = []
    result = None
    for _ in range(iterations):
        started = time.perf_counter_ns()
        result = func()
        samples.append(time.perf_counter_ns() - started)

    return {'median_ns': statistics.median(samples), 'result': result}


def format_ns(ns: float) -> str:
    """Render a nanosecond duration in the largest unit that keeps it >= 1."""
    for scale, unit, digits in _UNITS:
        if ns >= scale:
            return f"{ns / scale:.{digits}f} {unit}"
    return f"{ns:.0f} ns"


def format_speedup(eager_ns: float, fused_ns: float) -> str:
    """Describe how the fused time compares with the eager one."""
    if fused_ns <= 0:
        return "n/a"
    ratio = eager_ns / fused_ns
    return f"{ratio:.2f}x faster" if ratio >= 1 else f"{1 / ratio:.2f}x slower"
