"""
Unit tests for the generic transform engine.

The reference DFT is scipy.fft with norm="ortho", which uses the same
1/sqrt(N) scaling in both directions.

Run:
    pytest tests/test_engine.py -v
"""

import sys
import os
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest
from scipy.fft import fft as scipy_fft, ifft as scipy_ifft

from radixfft.core import BitReversalCache, TransformEngine, TrigFactorCache
from radixfft.errors import ComplexInput, InvalidSize, ShapeMismatch, validate_signal

SIZES = [1, 2, 4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048, 4096]


def _complex(out: np.ndarray) -> np.ndarray:
    return out[0::2] + 1j * out[1::2]


@pytest.fixture
def engine():
    return TransformEngine(TrigFactorCache(), BitReversalCache())


class TestTransformEngine:
    """Test suite for TransformEngine."""

    def test_forward_matches_scipy(self, engine):
        rng = np.random.default_rng(0)
        for n in SIZES + [8192, 16384]:
            x = rng.standard_normal(n) + 1j * rng.standard_normal(n)
            ours = _complex(engine.transform(x.real, x.imag, True))
            error = np.abs(ours - scipy_fft(x, norm="ortho"))
            assert error.max() < 1e-10, f"Forward FFT failed for N={n}: {error.max()}"

        print(f"\n[Engine Forward] All sizes passed ✓")

    def test_inverse_matches_scipy(self, engine):
        rng = np.random.default_rng(1)
        for n in SIZES:
            x = rng.standard_normal(n) + 1j * rng.standard_normal(n)
            ours = _complex(engine.transform(x.real, x.imag, False))
            error = np.abs(ours - scipy_ifft(x, norm="ortho"))
            assert error.max() < 1e-10, f"Inverse FFT failed for N={n}"

    def test_round_trip(self, engine):
        rng = np.random.default_rng(2)
        worst = 0.0
        for exp in range(0, 15):
            n = 1 << exp
            real = rng.standard_normal(n) * 10
            imag = rng.standard_normal(n) * 10
            spectrum = engine.transform(real, imag, True)
            back = engine.transform(spectrum[0::2], spectrum[1::2], False)
            worst = max(worst, np.abs(back[0::2] - real).max(), np.abs(back[1::2] - imag).max())

        print(f"\n[Round Trip] Max error: {worst:.2e}")
        assert worst < 1e-9

    def test_parseval(self, engine):
        rng = np.random.default_rng(3)
        for n in (8, 256, 4096):
            real = rng.standard_normal(n)
            imag = rng.standard_normal(n)
            result = engine.analyze(real, imag)
            energy_in = np.sum(real ** 2 + imag ** 2)
            energy_out = np.sum(result.power_spectrum())
            assert abs(energy_in - energy_out) < 1e-9 * energy_in

    def test_dc_signal(self, engine):
        v, n = 2.5, 64
        result = engine.analyze(np.full(n, v), np.zeros(n))
        mags = result.magnitudes()
        assert abs(mags[0] - v * np.sqrt(n)) < 1e-9
        assert np.abs(mags[1:]).max() < 1e-9

    def test_impulse_signal(self, engine):
        for n in SIZES:
            real = np.zeros(n)
            real[0] = 1.0
            mags = engine.analyze(real).magnitudes()
            assert np.all(mags == 1.0 / np.sqrt(n)), f"Impulse failed for N={n}"

    def test_single_tone_lands_in_its_bin(self, engine):
        """Forward uses exp(-2*pi*i*k*n/N): exp(+2*pi*i*3n/N) peaks at bin 3."""
        n = 32
        t = np.arange(n)
        x = np.exp(2j * np.pi * 3 * t / n)
        mags = engine.analyze(x.real, x.imag, True).magnitudes()
        assert np.argmax(mags) == 3
        assert abs(mags[3] - np.sqrt(n)) < 1e-10

    def test_scenario_eight_point_round_trip(self, engine):
        real = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]
        imag = [0.0] * 8
        spectrum = engine.transform(real, imag, True)
        assert spectrum.shape == (16,)
        assert abs(spectrum[0] - 36.0 / np.sqrt(8)) < 1e-12

        back = engine.transform(spectrum[0::2], spectrum[1::2], False)
        assert np.abs(back[0::2] - np.array(real)).max() < 1e-10
        assert np.abs(back[1::2]).max() < 1e-10

    def test_invalid_size_has_no_side_effects(self):
        trig = TrigFactorCache()
        bitrev = BitReversalCache()
        engine = TransformEngine(trig, bitrev)
        trig_before, bitrev_before = trig.stats(), bitrev.stats()

        with pytest.raises(InvalidSize):
            engine.transform(np.zeros(100000), np.zeros(100000), True)
        with pytest.raises(InvalidSize):
            engine.transform_real(np.zeros(100000))

        assert trig.stats() == trig_before
        assert bitrev.stats() == bitrev_before

    def test_empty_input(self, engine):
        with pytest.raises(InvalidSize):
            engine.transform([], [], True)

    def test_shape_mismatch(self, engine):
        with pytest.raises(ShapeMismatch):
            engine.transform(np.zeros(8), np.zeros(4), True)
        # Reported before the size check
        with pytest.raises(ShapeMismatch):
            engine.transform(np.zeros(3), np.zeros(5), True)

    def test_rejects_multidimensional_input(self, engine):
        with pytest.raises(ShapeMismatch):
            engine.transform(np.zeros((4, 2)), np.zeros((4, 2)), True)

    def test_dimensionality_checked_before_length(self, engine):
        # len() of a (8, 1) array is a valid size; the 1-D check must still win
        with pytest.raises(ShapeMismatch):
            validate_signal(np.zeros((8, 1)), np.zeros(8))
        with pytest.raises(ShapeMismatch):
            engine.transform(np.zeros(8), np.zeros((8, 1)), True)
        with pytest.raises(ShapeMismatch):
            engine.analyze(np.zeros((4, 2)))
        with pytest.raises(ShapeMismatch):
            validate_signal(3.0)

    def test_complex_signal_alone_is_split(self, engine):
        """A complex signal keeps its imaginary part (0j, 1j, 0j, 0j -> all bins 0.5)."""
        result = engine.analyze(np.array([0j, 1j, 0j, 0j]))
        assert np.allclose(result.magnitudes(), 0.5, atol=1e-15)

        rng = np.random.default_rng(8)
        for n in (1, 16, 512):
            x = rng.standard_normal(n) + 1j * rng.standard_normal(n)
            for forward, ref in ((True, scipy_fft), (False, scipy_ifft)):
                ours = engine.analyze(x, None, forward).to_complex()
                assert np.abs(ours - ref(x, norm="ortho")).max() < 1e-10
            # Python lists of complex numbers too
            ours = engine.analyze(list(x)).to_complex()
            assert np.abs(ours - scipy_fft(x, norm="ortho")).max() < 1e-10

    def test_complex_parts_rejected(self, engine):
        x = np.array([1 + 1j, 0, 0, 0])
        with pytest.raises(ComplexInput):
            engine.transform(x, np.zeros(4), True)
        with pytest.raises(ComplexInput):
            engine.transform(np.zeros(4), x, True)
        # Also catchable as a plain TypeError
        with pytest.raises(TypeError):
            engine.analyze(x, np.zeros(4))

    def test_inputs_not_mutated(self, engine):
        rng = np.random.default_rng(4)
        real = rng.standard_normal(64)
        imag = rng.standard_normal(64)
        real_copy, imag_copy = real.copy(), imag.copy()
        engine.transform(real, imag, True)
        assert np.array_equal(real, real_copy)
        assert np.array_equal(imag, imag_copy)

    def test_deterministic(self, engine):
        rng = np.random.default_rng(5)
        real = rng.standard_normal(1024)
        imag = rng.standard_normal(1024)
        first = engine.transform(real, imag, True)
        second = engine.transform(real, imag, True)
        assert np.array_equal(first, second)

    def test_cache_policy_does_not_change_results(self):
        """Cached, lazily cached and stateless tables give identical output."""
        rng = np.random.default_rng(6)
        cached = TransformEngine(TrigFactorCache(), BitReversalCache())
        stateless = TransformEngine(
            TrigFactorCache(hot_sizes=(), lazy_capacity=0),
            BitReversalCache(hot_sizes=(), lazy_capacity=0),
        )
        for n in (8, 1024, 8192):
            real = rng.standard_normal(n)
            imag = rng.standard_normal(n)
            assert np.array_equal(cached.transform(real, imag), stateless.transform(real, imag))
        assert stateless.trig_cache.cached_sizes() == []

    def test_uncommon_size_is_cached_lazily(self):
        trig = TrigFactorCache()
        bitrev = BitReversalCache()
        engine = TransformEngine(trig, bitrev)
        engine.transform_real(np.ones(8192))
        assert trig.is_precomputed(8192)
        assert bitrev.is_precomputed(8192)

    def test_accepts_lists(self, engine):
        result = engine.analyze([1, 0, 0, 0], [0, 0, 0, 0])
        assert np.allclose(result.magnitudes(), 0.5)

    def test_transform_real(self, engine):
        real = np.arange(16, dtype=float)
        assert engine.transform_real(real) == engine.analyze(real, np.zeros(16))

    def test_trace(self, engine):
        rng = np.random.default_rng(7)
        real = rng.standard_normal(16)
        imag = rng.standard_normal(16)
        snapshots = engine.trace(real, imag, True)
        assert len(snapshots) == 5
        assert all(s.shape == (32,) for s in snapshots)
        assert np.array_equal(snapshots[-1], engine.transform(real, imag, True))

        assert len(engine.trace([3.0], [1.0])) == 1

    def test_description(self, engine):
        assert engine.supported_size == -1
        assert engine.supports_size(4096)
        assert not engine.supports_size(100)

    def test_engine_performance(self, engine):
        """Benchmark the engine against scipy (informational)."""
        print(f"\n[Engine Performance]")
        print(f"{'Size':>6s} | {'Ours (us)':>10s} | {'Scipy (us)':>11s}")
        print("-" * 36)
        for n in (64, 1024, 4096):
            x = np.random.randn(n) + 1j * np.random.randn(n)
            engine.transform(x.real, x.imag)

            n_iter = 50
            start = time.perf_counter()
            for _ in range(n_iter):
                engine.transform(x.real, x.imag)
            ours = (time.perf_counter() - start) / n_iter * 1e6

            start = time.perf_counter()
            for _ in range(n_iter):
                scipy_fft(x, norm="ortho")
            ref = (time.perf_counter() - start) / n_iter * 1e6
            print(f"{n:6d} | {ours:10.2f} | {ref:11.2f}")
