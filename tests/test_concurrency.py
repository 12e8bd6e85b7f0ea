"""
Thread-safety tests for the caches and the engine.

Run:
    pytest tests/test_concurrency.py -v
"""

import sys
import os
import threading
from concurrent.futures import ThreadPoolExecutor

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np

from radixfft.core import (
    BitReversalCache,
    TransformEngine,
    TrigFactorCache,
    build_factor_table,
    build_permutation,
)

N_THREADS = 8


class TestConcurrency:
    """Concurrent first-time builds converge; concurrent transforms do not interact."""

    def test_concurrent_first_builds_converge(self):
        trig = TrigFactorCache(hot_sizes=())
        bitrev = BitReversalCache(hot_sizes=())
        sizes = [1 << e for e in range(1, 14)]
        barrier = threading.Barrier(N_THREADS)

        def worker(_):
            barrier.wait()
            return [(trig.factors(n), bitrev.get_table(n)) for n in sizes]

        with ThreadPoolExecutor(max_workers=N_THREADS) as pool:
            results = list(pool.map(worker, range(N_THREADS)))

        for i, n in enumerate(sizes):
            cos_ref, sin_ref = build_factor_table(n)
            perm_ref = build_permutation(n)
            for per_thread in results:
                (cos_table, sin_table), perm = per_thread[i]
                assert np.array_equal(cos_table, cos_ref)
                assert np.array_equal(sin_table, sin_ref)
                assert np.array_equal(perm, perm_ref)

            # Everyone now sees the one published table
            assert trig.factors(n) is trig.factors(n)
            assert bitrev.get_table(n) is bitrev.get_table(n)

        assert trig.cached_sizes() == sizes[-trig.lazy_capacity:]

    def test_concurrent_transforms_match_sequential(self):
        engine = TransformEngine(TrigFactorCache(), BitReversalCache())
        rng = np.random.default_rng(21)
        inputs = []
        for i in range(64):
            n = 1 << (1 + i % 13)
            inputs.append((rng.standard_normal(n), rng.standard_normal(n), i % 2 == 0))
        expected = [engine.transform(re, im, fwd) for re, im, fwd in inputs]

        with ThreadPoolExecutor(max_workers=N_THREADS) as pool:
            actual = list(pool.map(lambda args: engine.transform(*args), inputs))

        for exp, act in zip(expected, actual):
            assert np.array_equal(exp, act)

        print(f"\n[Concurrency] {len(inputs)} transforms on {N_THREADS} threads ✓")

    def test_clear_during_use(self):
        """Clearing the caches mid-flight never yields a partial table."""
        trig = TrigFactorCache()
        bitrev = BitReversalCache()
        engine = TransformEngine(trig, bitrev)
        x = np.random.default_rng(22).standard_normal(1024)
        expected = engine.transform(x, np.zeros(1024))
        stop = threading.Event()

        def clearer():
            while not stop.is_set():
                trig.clear()
                bitrev.clear()
                trig.init()
                bitrev.init()

        t = threading.Thread(target=clearer)
        t.start()
        try:
            for _ in range(200):
                assert np.array_equal(engine.transform(x, np.zeros(1024)), expected)
        finally:
            stop.set()
            t.join()
