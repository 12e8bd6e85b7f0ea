"""
Cached bit-reversal permutation tables.

The iterative butterflies leave the spectrum in bit-reversed order; perm[k]
is k with its log2(N) bits reversed. The permutation is an involution, so
unscrambling swaps k with perm[k] only when perm[k] > k.
"""

import threading
from typing import Optional

import numpy as np
from numba import jit

from ..errors import check_size
from .table_cache import TableCache

_default_cache: Optional["BitReversalCache"] = None
_default_lock = threading.Lock()


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fill_table(table: np.ndarray, n_bits: int):
    for i in range(table.shape[0]):
        table[i] = _bit_reverse(i, n_bits)


def build_permutation(n: int) -> np.ndarray:
    """Bit-reversal permutation of length n as a read-only int64 array."""
    n_bits = int(n).bit_length() - 1
    table = np.empty(n, dtype=np.int64)
    _fill_table(table, n_bits)
    table.flags.writeable = False
    return table


class BitReversalCache(TableCache):
    """Cache of bit-reversal permutations keyed by transform size."""

    name = "BitReversalCache"

    def _build(self, n: int) -> np.ndarray:
        return build_permutation(n)

    def _table_nbytes(self, table: np.ndarray) -> int:
        return table.nbytes

    def get_table(self, n: int) -> np.ndarray:
        """
        Permutation table for size n.

        Raises
        ------
        InvalidSize
            If n is not a positive power of two.
        """
        check_size(n)
        return self._get_or_build(n)


def default_bitrev_cache() -> BitReversalCache:
    """
    Shared cache for callers that do not manage their own.

    Created with all hot sizes built on first call rather than at import,
    which keeps the numba compile out of ``import radixfft``.
    """
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = BitReversalCache()
    return _default_cache
