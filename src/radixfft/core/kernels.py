"""
Fully unrolled transforms for N = 2, 4, 8.

At these sizes the stage/group loop bookkeeping and the table lookups cost
more than the arithmetic, so each butterfly is written out with hardcoded
twiddles and the bit-reversal is folded into the output order. The
arithmetic is the same as TransformEngine's, term for term, with the
W8 constants taken from the same factor table.

Larger sizes are deliberately not unrolled; see DESIGN.md for the
measurements behind that decision.
"""

from typing import Sequence

import numpy as np
from numba import jit

from ..errors import InvalidSize, validate_signal
from .base import Transform
from .trig_cache import build_factor_table

_W8_COS, _W8_SIN = build_factor_table(8)
W8_1_COS = float(_W8_COS[1])
W8_1_SIN = float(_W8_SIN[1])
W8_3_COS = float(_W8_COS[3])
W8_3_SIN = float(_W8_SIN[3])


@jit(nopython=True, cache=True)
def _fft2(x_re, x_im, sign):
    scale = 1.0 / np.sqrt(2.0)
    out = np.empty(4, dtype=np.float64)
    out[0] = (x_re[0] + x_re[1]) * scale
    out[1] = (x_im[0] + x_im[1]) * scale
    out[2] = (x_re[0] - x_re[1]) * scale
    out[3] = (x_im[0] - x_im[1]) * scale
    return out


@jit(nopython=True, cache=True)
def _fft4(x_re, x_im, sign):
    # Stage 1: span 2, W = 1
    a0r = x_re[0] + x_re[2]
    a0i = x_im[0] + x_im[2]
    a2r = x_re[0] - x_re[2]
    a2i = x_im[0] - x_im[2]
    a1r = x_re[1] + x_re[3]
    a1i = x_im[1] + x_im[3]
    a3r = x_re[1] - x_re[3]
    a3i = x_im[1] - x_im[3]

    # Stage 2: span 1, W = 1 and W4^1 = -i (forward)
    tr = sign * a3i
    ti = -sign * a3r

    scale = 1.0 / np.sqrt(4.0)
    out = np.empty(8, dtype=np.float64)
    # Natural order: bins 1 and 2 swapped
    out[0] = (a0r + a1r) * scale
    out[1] = (a0i + a1i) * scale
    out[2] = (a2r + tr) * scale
    out[3] = (a2i + ti) * scale
    out[4] = (a0r - a1r) * scale
    out[5] = (a0i - a1i) * scale
    out[6] = (a2r - tr) * scale
    out[7] = (a2i - ti) * scale
    return out


@jit(nopython=True, cache=True)
def _fft8(x_re, x_im, sign):
    # Stage 1: span 4, W = 1
    a0r = x_re[0] + x_re[4]
    a0i = x_im[0] + x_im[4]
    a4r = x_re[0] - x_re[4]
    a4i = x_im[0] - x_im[4]
    a1r = x_re[1] + x_re[5]
    a1i = x_im[1] + x_im[5]
    a5r = x_re[1] - x_re[5]
    a5i = x_im[1] - x_im[5]
    a2r = x_re[2] + x_re[6]
    a2i = x_im[2] + x_im[6]
    a6r = x_re[2] - x_re[6]
    a6i = x_im[2] - x_im[6]
    a3r = x_re[3] + x_re[7]
    a3i = x_im[3] + x_im[7]
    a7r = x_re[3] - x_re[7]
    a7i = x_im[3] - x_im[7]

    # Stage 2: span 2, W = 1 for (0,2),(1,3); W = -i for (4,6),(5,7)
    b0r = a0r + a2r
    b0i = a0i + a2i
    b2r = a0r - a2r
    b2i = a0i - a2i
    b1r = a1r + a3r
    b1i = a1i + a3i
    b3r = a1r - a3r
    b3i = a1i - a3i

    tr = sign * a6i
    ti = -sign * a6r
    b4r = a4r + tr
    b4i = a4i + ti
    b6r = a4r - tr
    b6i = a4i - ti

    tr = sign * a7i
    ti = -sign * a7r
    b5r = a5r + tr
    b5i = a5i + ti
    b7r = a5r - tr
    b7i = a5i - ti

    # Stage 3: span 1, W = 1, -i, W8^1, W8^3
    c0r = b0r + b1r
    c0i = b0i + b1i
    c1r = b0r - b1r
    c1i = b0i - b1i

    tr = sign * b3i
    ti = -sign * b3r
    c2r = b2r + tr
    c2i = b2i + ti
    c3r = b2r - tr
    c3i = b2i - ti

    s = sign * W8_1_SIN
    tr = b5r * W8_1_COS - b5i * s
    ti = b5r * s + b5i * W8_1_COS
    c4r = b4r + tr
    c4i = b4i + ti
    c5r = b4r - tr
    c5i = b4i - ti

    s = sign * W8_3_SIN
    tr = b7r * W8_3_COS - b7i * s
    ti = b7r * s + b7i * W8_3_COS
    c6r = b6r + tr
    c6i = b6i + ti
    c7r = b6r - tr
    c7i = b6i - ti

    # Bit-reversal folded in: natural bin i holds c[perm[i]], perm = 0 4 2 6 1 5 3 7
    scale = 1.0 / np.sqrt(8.0)
    out = np.empty(16, dtype=np.float64)
    out[0] = c0r * scale
    out[1] = c0i * scale
    out[2] = c4r * scale
    out[3] = c4i * scale
    out[4] = c2r * scale
    out[5] = c2i * scale
    out[6] = c6r * scale
    out[7] = c6i * scale
    out[8] = c1r * scale
    out[9] = c1i * scale
    out[10] = c5r * scale
    out[11] = c5i * scale
    out[12] = c3r * scale
    out[13] = c3i * scale
    out[14] = c7r * scale
    out[15] = c7i * scale
    return out


class _UnrolledTransform(Transform):
    """Common validation for the fixed-size kernels."""

    _kernel = None

    def transform(
        self,
        real: Sequence[float],
        imaginary: Sequence[float],
        forward: bool = True
    ) -> np.ndarray:
        n = validate_signal(real, imaginary)
        if n != self.supported_size:
            raise InvalidSize(
                f"{type(self).__name__} requires length {self.supported_size}, got: {n}"
            )
        x_re = np.array(real, dtype=np.float64)
        x_im = np.array(imaginary, dtype=np.float64)
        return type(self)._kernel(x_re, x_im, 1.0 if forward else -1.0)


class UnrolledFFT2(_UnrolledTransform):
    supported_size = 2
    description = "Unrolled FFT (size 2)"
    _kernel = staticmethod(_fft2)


class UnrolledFFT4(_UnrolledTransform):
    supported_size = 4
    description = "Unrolled FFT (size 4)"
    _kernel = staticmethod(_fft4)


class UnrolledFFT8(_UnrolledTransform):
    supported_size = 8
    description = "Unrolled FFT (size 8, hardcoded twiddles)"
    _kernel = staticmethod(_fft8)
