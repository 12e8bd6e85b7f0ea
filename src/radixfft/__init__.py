"""
radixfft - Power-of-two Discrete Fourier Transform

Iterative radix-2 Cooley-Tukey FFT with cached twiddle factors and
bit-reversal tables, symmetric 1/sqrt(N) scaling in both directions, and an
immutable result container exposing magnitude, phase and power views.

Modules:
    - core: engine, caches, unrolled small-size kernels, TransformResult
    - registry: per-size implementation selection
    - fft: fft / ifft / transform convenience functions
    - validation: comparator for alternate implementations
    - config: YAML configuration
"""

from .core import (
    BitReversalCache,
    Transform,
    TransformEngine,
    TransformResult,
    TrigFactorCache,
)
from .errors import ComplexInput, FFTError, IndexOutOfRange, InvalidSize, ShapeMismatch
from .fft import fft, ifft, transform
from .registry import TransformRegistry
from .validation import ComparisonReport, ValidationHarness

__all__ = [
    # Transforms
    'fft',
    'ifft',
    'transform',
    'Transform',
    'TransformEngine',
    'TransformResult',
    'TransformRegistry',
    # Caches
    'TrigFactorCache',
    'BitReversalCache',
    # Validation
    'ValidationHarness',
    'ComparisonReport',
    # Errors
    'FFTError',
    'InvalidSize',
    'ShapeMismatch',
    'IndexOutOfRange',
    'ComplexInput',
]

__version__ = '1.0.0'
