"""
Precomputed twiddle factors.

Evaluating cos/sin inside the butterfly loop dominates the cost of a naive
radix-2 FFT, so each size gets one table of cos(-2*pi*k/N) and
sin(-2*pi*k/N) for k in [0, N). The inverse direction reuses the same table
with the sine negated.

Tables are built from the first half-period and mirrored, so the values at
k = 0, N/4, N/2, 3N/4 are exact and factor[N - k] is the exact complex
conjugate of factor[k].
"""

import math
import threading
from typing import Optional, Tuple

import numpy as np

from .table_cache import TableCache

_default_cache: Optional["TrigFactorCache"] = None
_default_lock = threading.Lock()


def build_factor_table(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the forward twiddle table for size n.

    Returns
    -------
    cos_table, sin_table : np.ndarray
        Read-only float64 arrays of length n.
    """
    cos_table = np.empty(n, dtype=np.float64)
    sin_table = np.empty(n, dtype=np.float64)
    if n == 1:
        cos_table[0] = 1.0
        sin_table[0] = 0.0
    else:
        half = n // 2
        k = np.arange(half + 1)
        angle = -2.0 * np.pi * k / n
        cos_half = np.cos(angle)
        sin_half = np.sin(angle)

        cos_half[0], sin_half[0] = 1.0, 0.0
        cos_half[half], sin_half[half] = -1.0, 0.0
        if n % 4 == 0:
            cos_half[n // 4], sin_half[n // 4] = 0.0, -1.0

        cos_table[:half + 1] = cos_half
        sin_table[:half + 1] = sin_half
        # Conjugate symmetry: W[N - k] = conj(W[k])
        cos_table[half + 1:] = cos_half[1:half][::-1]
        sin_table[half + 1:] = -sin_half[1:half][::-1]

    cos_table.flags.writeable = False
    sin_table.flags.writeable = False
    return cos_table, sin_table


def direct_factor(n: int, k: int) -> Tuple[float, float]:
    """Forward twiddle (cos, sin) of -2*pi*k/n without any table."""
    k %= n
    mirrored = k > n // 2
    if mirrored:
        k = n - k

    if k == 0:
        c, s = 1.0, 0.0
    elif 2 * k == n:
        c, s = -1.0, 0.0
    elif 4 * k == n:
        c, s = 0.0, -1.0
    else:
        angle = -2.0 * math.pi * k / n
        c, s = math.cos(angle), math.sin(angle)

    if mirrored:
        s = -s
    return c, s


class TrigFactorCache(TableCache):
    """
    Cache of twiddle-factor tables keyed by transform size.

    ``get_cos``/``get_sin`` are total: they read a standing table when one
    exists and otherwise compute the value directly, without populating the
    cache. ``factors`` is the engine's entry point and does populate it
    according to the lazy policy.
    """

    name = "TrigFactorCache"

    def _build(self, n: int):
        return build_factor_table(n)

    def _table_nbytes(self, table) -> int:
        cos_table, sin_table = table
        return cos_table.nbytes + sin_table.nbytes

    def factors(self, n: int) -> Tuple[np.ndarray, np.ndarray]:
        """Forward (cos, sin) tables for size n, building them if needed."""
        return self._get_or_build(n)

    def get_cos(self, n: int, k: int, forward: bool = True) -> float:
        """cos(-+2*pi*k/n); identical for both directions."""
        table = self._peek(n)
        if table is not None:
            return float(table[0][k % n])
        return direct_factor(n, k)[0]

    def get_sin(self, n: int, k: int, forward: bool = True) -> float:
        """sin(-2*pi*k/n) when forward, sin(+2*pi*k/n) otherwise."""
        table = self._peek(n)
        if table is not None:
            s = float(table[1][k % n])
        else:
            s = direct_factor(n, k)[1]
        return s if forward else -s

    def get_twiddle(self, n: int, k: int, forward: bool = True) -> Tuple[float, float]:
        return self.get_cos(n, k, forward), self.get_sin(n, k, forward)


def default_trig_cache() -> TrigFactorCache:
    """
    Shared cache for callers that do not manage their own.

    Created on first call, not at import; every hot size is built in that
    call, so the first engine constructed without explicit caches pays the
    whole eager cost and no transform ever builds a hot table.
    """
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = TrigFactorCache()
    return _default_cache
