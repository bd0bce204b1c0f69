"""Binary64 backend on numpy scalars.

numpy evaluates its ufuncs with its own loops (SIMD kernels for the
transcendental functions on many platforms), independent of the ``math``
module used as reference, which makes it a useful second implementation to
diff against. Floating-point warnings are suppressed: overflow, division by
zero and invalid operations produce their IEEE-754 results silently.
"""

from __future__ import annotations

import numpy as np


class NumpyBackend:
    """IEEE-754 double precision via ``numpy.float64``."""

    name = "numpy"

    # -- conversions ---------------------------------------------------------

    def from_double(self, x: float) -> np.float64:
        return np.float64(x)

    def to_double(self, value: np.float64) -> float:
        return float(value)

    def from_single(self, x: float) -> np.float64:
        with np.errstate(over="ignore"):
            return np.float64(np.float32(x))

    def to_single(self, value: np.float64) -> float:
        with np.errstate(over="ignore"):
            return float(np.float32(value))

    # -- arithmetic ----------------------------------------------------------

    def add(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.add(a, b)

    def sub(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.subtract(a, b)

    def mul(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.multiply(a, b)

    def div(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.divide(a, b)

    def mod(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.fmod(a, b)

    def pow(self, a: np.float64, b: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.power(a, b)

    def atan2(self, y: np.float64, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.arctan2(y, x)

    def equals(self, a: np.float64, b: np.float64) -> bool:
        if np.isnan(a):
            return bool(np.isnan(b))
        return bool(a == b)

    # -- named functions -----------------------------------------------------

    def round(self, x: np.float64) -> np.float64:
        return np.rint(x)

    def floor(self, x: np.float64) -> np.float64:
        return np.floor(x)

    def ceil(self, x: np.float64) -> np.float64:
        return np.ceil(x)

    def sin(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.sin(x)

    def cos(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.cos(x)

    def tan(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.tan(x)

    def sqrt(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.sqrt(x)

    def exp(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.exp(x)

    def log(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.log(x)

    def log2(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.log2(x)

    def asin(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.arcsin(x)

    def acos(self, x: np.float64) -> np.float64:
        with np.errstate(all="ignore"):
            return np.arccos(x)

    def atan(self, x: np.float64) -> np.float64:
        return np.arctan(x)

    # -- predicates ----------------------------------------------------------

    def is_nan(self, value: np.float64) -> bool:
        return bool(np.isnan(value))

    def is_infinity(self, value: np.float64) -> bool:
        return bool(np.isinf(value))

    def sign(self, value: np.float64) -> int:
        if np.isnan(value):
            return 0
        return int(np.sign(value))

    def is_negative(self, value: np.float64) -> bool:
        return bool(np.signbit(value))

    def __repr__(self) -> str:
        return f"NumpyBackend(numpy={np.__version__})"
