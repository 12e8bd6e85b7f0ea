"""
Immutable container for one transform's output.
"""

from typing import Sequence

import numpy as np

from ..errors import ComplexInput, IndexOutOfRange, ShapeMismatch


class TransformResult:
    """
    N complex frequency-domain samples stored interleaved
    (re0, im0, re1, im1, ...).

    The internal buffer is a private read-only copy. Every array accessor
    returns a fresh array and derived views (magnitude, phase, power) are
    recomputed on each call.

    Parameters
    ----------
    interleaved : sequence of float
        Interleaved samples; length must be even.

    Examples
    --------
    >>> r = TransformResult([3.0, 4.0, 1.0, 0.0])
    >>> r.size, r.magnitude_at(0)
    (2, 5.0)
    """

    __slots__ = ('_data',)

    def __init__(self, interleaved: Sequence[float]):
        if np.iscomplexobj(interleaved):
            raise ComplexInput("Interleaved result data must be real-valued")
        data = np.array(interleaved, dtype=np.float64)
        if data.ndim != 1 or data.shape[0] % 2 != 0:
            raise ShapeMismatch(
                f"Interleaved result array length must be even, got shape {data.shape}"
            )
        data.flags.writeable = False
        object.__setattr__(self, '_data', data)

    @classmethod
    def from_parts(cls, real: Sequence[float], imaginary: Sequence[float]) -> "TransformResult":
        """Build from separate real and imaginary sequences."""
        if np.iscomplexobj(real) or np.iscomplexobj(imaginary):
            raise ComplexInput("Real and imaginary parts must be real-valued")
        re = np.asarray(real, dtype=np.float64)
        im = np.asarray(imaginary, dtype=np.float64)
        if re.ndim != 1 or re.shape != im.shape:
            raise ShapeMismatch(
                f"Real and imaginary arrays must have same length, got {re.shape} and {im.shape}"
            )
        data = np.empty(2 * re.shape[0], dtype=np.float64)
        data[0::2] = re
        data[1::2] = im
        return cls(data)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def size(self) -> int:
        return self._data.shape[0] // 2

    def __len__(self) -> int:
        return self.size

    def _check_index(self, index: int):
        if index < 0 or index >= self.size:
            raise IndexOutOfRange(f"Index {index} out of bounds for size {self.size}")

    # ---- array views ----

    def interleaved(self) -> np.ndarray:
        return self._data.copy()

    def real_parts(self) -> np.ndarray:
        return self._data[0::2].copy()

    def imaginary_parts(self) -> np.ndarray:
        return self._data[1::2].copy()

    def to_complex(self) -> np.ndarray:
        return self._data[0::2] + 1j * self._data[1::2]

    def magnitudes(self) -> np.ndarray:
        """sqrt(re^2 + im^2) per bin."""
        re = self._data[0::2]
        im = self._data[1::2]
        return np.sqrt(re * re + im * im)

    def phases(self) -> np.ndarray:
        """atan2(im, re) per bin, in radians."""
        return np.arctan2(self._data[1::2], self._data[0::2])

    def power_spectrum(self) -> np.ndarray:
        """re^2 + im^2 per bin."""
        re = self._data[0::2]
        im = self._data[1::2]
        return re * re + im * im

    # ---- indexed access ----

    def real_at(self, index: int) -> float:
        self._check_index(index)
        return float(self._data[2 * index])

    def imaginary_at(self, index: int) -> float:
        self._check_index(index)
        return float(self._data[2 * index + 1])

    def magnitude_at(self, index: int) -> float:
        self._check_index(index)
        re = float(self._data[2 * index])
        im = float(self._data[2 * index + 1])
        return float(np.sqrt(re * re + im * im))

    def phase_at(self, index: int) -> float:
        self._check_index(index)
        return float(np.arctan2(self._data[2 * index + 1], self._data[2 * index]))

    # ---- value semantics ----

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransformResult):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        # + 0.0 folds -0.0 into 0.0 so equal results hash equally
        return hash((self._data + 0.0).tobytes())

    def __repr__(self) -> str:
        first = self.magnitude_at(0) if self.size > 0 else 0.0
        return f"TransformResult(size={self.size}, first_magnitude={first:.3f})"
