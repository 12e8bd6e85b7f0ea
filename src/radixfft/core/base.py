"""
Uniform contract shared by every transform implementation.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ..errors import is_power_of_two, split_complex, validate_signal
from .result import TransformResult


class Transform(ABC):
    """
    Base class for transform implementations.

    Subclasses implement ``transform`` returning the interleaved spectrum
    (length 2N). ``analyze`` and ``transform_real`` wrap it in a
    TransformResult.
    """

    #: Size handled by this implementation, -1 for any power of two.
    supported_size: int = -1
    description: str = "Transform"

    @abstractmethod
    def transform(
        self,
        real: Sequence[float],
        imaginary: Sequence[float],
        forward: bool = True
    ) -> np.ndarray:
        """
        Compute the DFT (forward) or inverse DFT of a complex signal.

        Both directions are scaled by 1/sqrt(N).

        Returns
        -------
        np.ndarray
            Interleaved output (re0, im0, re1, im1, ...) of length 2N.
        """
        pass

    def analyze(
        self,
        real: Sequence[float],
        imaginary: Optional[Sequence[float]] = None,
        forward: bool = True
    ) -> TransformResult:
        """Transform into a TransformResult; a complex ``real`` with no ``imaginary`` is split."""
        real, imaginary = split_complex(real, imaginary)
        if imaginary is None:
            imaginary = np.zeros(validate_signal(real))
        return TransformResult(self.transform(real, imaginary, forward))

    def transform_real(self, real: Sequence[float], forward: bool = True) -> TransformResult:
        """Transform a real-only signal (imaginary part all zero)."""
        return self.analyze(real, None, forward)

    def supports_size(self, n: int) -> bool:
        if self.supported_size == -1:
            return is_power_of_two(n)
        return n == self.supported_size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description!r})"
