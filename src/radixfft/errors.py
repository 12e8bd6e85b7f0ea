"""
Exception taxonomy and input validation shared by every transform.

All checks run before any buffer is allocated or any cache is touched, so a
rejected call leaves no trace behind.
"""

from typing import Optional, Sequence, Tuple

import numpy as np


class FFTError(Exception):
    """Base class for all radixfft errors."""


class InvalidSize(FFTError, ValueError):
    """Transform length is zero, negative, or not a power of two."""


class ShapeMismatch(FFTError, ValueError):
    """Real and imaginary sequences have different lengths."""


class ComplexInput(FFTError, TypeError):
    """Complex values passed where separate real and imaginary parts are expected."""


class IndexOutOfRange(FFTError, IndexError):
    """Result accessor called with an index outside [0, size)."""


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def check_size(n: int) -> int:
    """Raise InvalidSize unless n is a positive power of two."""
    if not is_power_of_two(n):
        raise InvalidSize(f"Array length must be a power of 2, got: {n}")
    return n


def validate_signal(real: Sequence[float], imaginary: Optional[Sequence[float]] = None) -> int:
    """
    Validate a complex signal given as two sequences. Without ``imaginary``
    only the real part is checked.

    Returns
    -------
    int
        The signal length N.
    """
    parts = (real,) if imaginary is None else (real, imaginary)
    if any(np.ndim(p) != 1 for p in parts):
        raise ShapeMismatch(
            f"Input must be 1D, got shapes {[np.shape(p) for p in parts]}"
        )
    if any(np.iscomplexobj(p) for p in parts):
        raise ComplexInput(
            "Real and imaginary parts must be real-valued; pass a complex signal "
            "alone as the first argument to split it"
        )
    n_real = len(real)
    n_imag = n_real if imaginary is None else len(imaginary)
    if n_real != n_imag:
        raise ShapeMismatch(
            f"Real and imaginary arrays must have same length, got {n_real} and {n_imag}"
        )
    return check_size(n_real)


def split_complex(
    real: Sequence,
    imaginary: Optional[Sequence[float]] = None
) -> Tuple[Sequence[float], Optional[Sequence[float]]]:
    """
    Split a complex signal passed alone into (real, imaginary) views.

    Anything else is returned unchanged for validate_signal to judge.
    """
    if imaginary is None and np.iscomplexobj(real):
        x = np.asarray(real)
        return x.real, x.imag
    return real, imaginary
