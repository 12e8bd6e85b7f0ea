"""
Generic iterative Cooley-Tukey FFT (radix-2) using Numba JIT.

Structure of one call:
1. Copy the inputs into fresh working buffers (inputs are never mutated)
2. log2(N) butterfly stages, coarsest span first; the twiddle of each pair
   is W_N^p with p the bit-reversed group index, read from TrigFactorCache
3. Unscramble the bit-reversed output with the BitReversalCache table
4. Scale by 1/sqrt(N) in both directions, so inverse(forward(x)) == x

The kernels are sequential and branch-free in their arithmetic, so identical
inputs always give bit-identical outputs.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np
from numba import jit

from ..errors import validate_signal
from .base import Transform
from .bitrev_cache import BitReversalCache, default_bitrev_cache
from .trig_cache import TrigFactorCache, default_trig_cache


@jit(nopython=True, cache=True)
def _butterfly_stage(x_re, x_im, cos_table, sin_table, perm, sign, n2, nu1):
    """
    One radix-2 stage with half-span n2.

    For each pair (low=k, high=k+n2): t = high * W; high = low - t; low += t.
    """
    n = x_re.shape[0]
    k = 0
    while k < n:
        for _ in range(n2):
            p = perm[k >> nu1]
            c = cos_table[p]
            s = sign * sin_table[p]
            h_re = x_re[k + n2]
            h_im = x_im[k + n2]
            t_re = h_re * c - h_im * s
            t_im = h_re * s + h_im * c
            x_re[k + n2] = x_re[k] - t_re
            x_im[k + n2] = x_im[k] - t_im
            x_re[k] += t_re
            x_im[k] += t_im
            k += 1
        k += n2


@jit(nopython=True, cache=True)
def _unscramble(x_re, x_im, perm):
    """Bit-reversal reordering; each pair is swapped once (perm[k] > k)."""
    for k in range(x_re.shape[0]):
        r = perm[k]
        if r > k:
            t = x_re[k]
            x_re[k] = x_re[r]
            x_re[r] = t
            t = x_im[k]
            x_im[k] = x_im[r]
            x_im[r] = t


@jit(nopython=True, cache=True)
def _interleave(x_re, x_im, scale):
    n = x_re.shape[0]
    out = np.empty(2 * n, dtype=np.float64)
    for i in range(n):
        out[2 * i] = x_re[i] * scale
        out[2 * i + 1] = x_im[i] * scale
    return out


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x_re, x_im, cos_table, sin_table, perm, sign):
    """Full transform over the working buffers; returns interleaved output."""
    n = x_re.shape[0]
    nu = 0
    tmp = n
    while tmp > 1:
        tmp >>= 1
        nu += 1

    n2 = n // 2
    nu1 = nu - 1
    for _ in range(nu):
        _butterfly_stage(x_re, x_im, cos_table, sin_table, perm, sign, n2, nu1)
        nu1 -= 1
        n2 //= 2

    _unscramble(x_re, x_im, perm)
    return _interleave(x_re, x_im, 1.0 / np.sqrt(n))


class TransformEngine(Transform):
    """
    Generic O(N log N) transform for any power-of-two size.

    This is the correctness baseline: the registry falls back to it for
    every size and the validation harness compares other implementations
    against it.

    Args:
        trig_cache: Twiddle-factor cache (shared default if None)
        bitrev_cache: Bit-reversal cache (shared default if None)
    """

    supported_size = -1
    description = "Generic FFT implementation (Cooley-Tukey algorithm)"

    def __init__(
        self,
        trig_cache: Optional[TrigFactorCache] = None,
        bitrev_cache: Optional[BitReversalCache] = None
    ):
        self.trig_cache = trig_cache if trig_cache is not None else default_trig_cache()
        self.bitrev_cache = bitrev_cache if bitrev_cache is not None else default_bitrev_cache()

    def _prepare(
        self,
        real: Sequence[float],
        imaginary: Sequence[float]
    ) -> Tuple[int, np.ndarray, np.ndarray]:
        n = validate_signal(real, imaginary)
        x_re = np.array(real, dtype=np.float64)
        x_im = np.array(imaginary, dtype=np.float64)
        return n, x_re, x_im

    def transform(
        self,
        real: Sequence[float],
        imaginary: Sequence[float],
        forward: bool = True
    ) -> np.ndarray:
        n, x_re, x_im = self._prepare(real, imaginary)
        cos_table, sin_table = self.trig_cache.factors(n)
        perm = self.bitrev_cache.get_table(n)
        sign = 1.0 if forward else -1.0
        return _fft_radix2_iter(x_re, x_im, cos_table, sin_table, perm, sign)

    def trace(
        self,
        real: Sequence[float],
        imaginary: Sequence[float],
        forward: bool = True
    ) -> List[np.ndarray]:
        """
        Run the transform and record intermediate state.

        Returns
        -------
        list of np.ndarray
            One interleaved snapshot after each butterfly stage (unscaled,
            bit-reversed order), followed by the final output exactly as
            ``transform`` returns it.
        """
        n, x_re, x_im = self._prepare(real, imaginary)
        cos_table, sin_table = self.trig_cache.factors(n)
        perm = self.bitrev_cache.get_table(n)
        sign = 1.0 if forward else -1.0

        snapshots = []
        nu = n.bit_length() - 1
        n2 = n // 2
        nu1 = nu - 1
        for _ in range(nu):
            _butterfly_stage(x_re, x_im, cos_table, sin_table, perm, sign, n2, nu1)
            snapshots.append(_interleave(x_re, x_im, 1.0))
            nu1 -= 1
            n2 //= 2

        _unscramble(x_re, x_im, perm)
        snapshots.append(_interleave(x_re, x_im, 1.0 / np.sqrt(n)))
        return snapshots
