"""
Convenience entry points backed by a module-level registry.

Examples
--------
>>> from radixfft import fft, ifft
>>> spectrum = fft([1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0])
>>> signal = ifft(spectrum.real_parts(), spectrum.imaginary_parts())
>>> signal.real_parts()  # ~ [1, 2, ..., 8]
"""

import threading
from typing import Optional, Sequence

from .core.result import TransformResult
from .errors import split_complex, validate_signal
from .registry import TransformRegistry

_registry: Optional[TransformRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> TransformRegistry:
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = TransformRegistry()
    return _registry


def transform(
    real: Sequence[float],
    imaginary: Optional[Sequence[float]] = None,
    forward: bool = True
) -> TransformResult:
    """
    Forward or inverse transform with the best implementation for its size.

    Parameters
    ----------
    real : sequence of float or complex
        Real part, length a power of two. A complex sequence passed without
        ``imaginary`` is taken as the whole signal.
    imaginary : sequence of float, optional
        Imaginary part; all zeros if omitted
    forward : bool
        True for the forward DFT, False for the inverse

    Returns
    -------
    TransformResult
    """
    real, imaginary = split_complex(real, imaginary)
    n = validate_signal(real, imaginary)
    return get_registry().create(n).analyze(real, imaginary, forward)


def fft(real: Sequence[float], imaginary: Optional[Sequence[float]] = None) -> TransformResult:
    """Forward DFT scaled by 1/sqrt(N)."""
    return transform(real, imaginary, forward=True)


def ifft(real: Sequence[float], imaginary: Optional[Sequence[float]] = None) -> TransformResult:
    """Inverse DFT scaled by 1/sqrt(N); ifft(fft(x)) recovers x."""
    return transform(real, imaginary, forward=False)
