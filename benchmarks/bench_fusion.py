"""
chainfuse Fusion Benchmarks
===========================

Times fused chains against the same steps run eagerly
(``ChainWrapper.USE_LAZY = False``) and checks both give the same result.

Usage:
    python -m benchmarks.bench_fusion
"""

import math
import os
import statistics
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np

from chainfuse import ChainWrapper, flow, laziable, wrap
from chainfuse.utils.helpers import format_ns, format_speedup, measure

ITERATIONS = 30
WARMUP = 5

LARGE = list(range(100_000))
RECORDS = [{'id': i, 'active': i % 3 == 0, 'score': i % 97} for i in range(50_000)]
ARRAY = np.arange(100_000)


def is_even(x):
    return x % 2 == 0


def square(x):
    return x * x


CASES = [
    ('filter-map-take', LARGE,
     lambda w: w.filter(is_even).map(square).take(10)),
    ('map-take_while', LARGE,
     lambda w: w.map(square).take_while(lambda x: x < 10_000)),
    ('reverse-filter-take', LARGE,
     lambda w: w.reverse().filter(is_even).take(5)),
    ('where-pluck-first', RECORDS,
     lambda w: w.where({'active': True, 'score': 42}).pluck('id').take(1)),
    ('slice-map', LARGE,
     lambda w: w.slice(1_000, 2_000).map(square)),
    ('ndarray-filter-take', ARRAY,
     lambda w: w.filter(lambda x: x % 7 == 0).take(20)),
    ('full-scan-map', LARGE,
     lambda w: w.map(square)),
]


def run_case(source, build):
    fused = measure(lambda: build(wrap(source)).value(), iterations=ITERATIONS, warmup=WARMUP)
    ChainWrapper.USE_LAZY = False
    try:
        eager = measure(lambda: build(wrap(source)).value(), iterations=ITERATIONS, warmup=WARMUP)
    finally:
        ChainWrapper.USE_LAZY = True
    correct = [int(v) for v in fused['result']] == [int(v) for v in eager['result']]
    return eager, fused, correct


def run_flow_case():
    steps = (laziable('filter', is_even), laziable('map', square), laziable('take', 10))
    planted = flow(*steps)
    sequential = flow(*steps, lazy_threshold=math.inf)
    fused = measure(lambda: planted(LARGE), iterations=ITERATIONS, warmup=WARMUP)
    eager = measure(lambda: sequential(LARGE), iterations=ITERATIONS, warmup=WARMUP)
    return eager, fused, fused['result'] == eager['result']


def main():
    print("chainfuse Fusion Benchmarks")
    print(f"Python {sys.version.split()[0]} | {sys.platform}")
    print(f"\n  {'Benchmark':<24} {'Eager':>12} {'Fused':>12} {'Speedup':>16} {'Status':>8}")
    print(f"  {'-'*76}")

    speedups = []
    results = [(name, *run_case(source, build)) for name, source, build in CASES]
    results.append(('flow-planted', *run_flow_case()))
    for name, eager, fused, correct in results:
        status = "OK" if correct else "MISMATCH"
        speedups.append(eager['median_ns'] / max(fused['median_ns'], 1))
        print(
            f"  {name:<24} {format_ns(eager['median_ns']):>12} {format_ns(fused['median_ns']):>12} "
            f"{format_speedup(eager['median_ns'], fused['median_ns']):>16} {status:>8}"
        )

    geomean = math.exp(statistics.mean(math.log(s) for s in speedups))
    print(f"\n  Geometric mean speedup: {geomean:.2f}x")


if __name__ == '__main__':
    main()
