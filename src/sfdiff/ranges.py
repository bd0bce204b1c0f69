"""Range mapping on top of the PCG bit generator.

Pure functions that turn raw generator output into integers, singles and
doubles inside inclusive or exclusive bounds. The integer reductions are
plain modulo reductions and therefore slightly biased for ranges that do not
divide 2**32; that bias is part of the reproducible sequence and is kept.

Floating-point draws use 24 bits of resolution: the raw value is reduced to
[0, 2**24) and divided by ``2**24 - 1`` (inclusive, can land exactly on the
upper bound) or ``2**24`` (exclusive, never reaches it).
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np

from .error_codes import ErrorCode
from .exceptions import ValidationError
from .pcg import MASK32, PCG

RESOLUTION = 16777216
"""2**24, the number of distinct fractions a float draw can produce."""

INCLUSIVE_DIVISOR = 16777215.0
EXCLUSIVE_DIVISOR = 16777216.0

INT32_MAX = 2147483647


def _check_uint32(name: str, value: int) -> None:
    if not 0 <= value <= MASK32:
        raise ValidationError(
            f"{name} must be in [0, {MASK32}], got {value}",
            field=name,
            error_code=ErrorCode.OUT_OF_BOUNDS,
        )


def _check_bounds(lo: float, hi: float) -> None:
    if lo > hi:
        raise ValidationError(
            f"Lower bound {lo!r} exceeds upper bound {hi!r}",
            field="lo",
            error_code=ErrorCode.INVALID_ARGUMENT,
        )
    if not math.isfinite(hi - lo):
        raise ValidationError(
            f"Span of [{lo!r}, {hi!r}] is not a finite double",
            field="hi",
            error_code=ErrorCode.OUT_OF_BOUNDS,
        )


# =============================================================================
# Integer draws
# =============================================================================


def uint32_inclusive(rng: PCG, lo: int, hi: int) -> int:
    """Draw from [lo, hi] as ``next_uint32() % (hi + 1 - lo) + lo``.

    The span is computed in 32-bit arithmetic; the full range [0, 2**32 - 1]
    wraps to a span of zero and returns the raw draw.
    """
    _check_uint32("lo", lo)
    _check_uint32("hi", hi)
    if lo > hi:
        raise ValidationError(
            f"Empty range [{lo}, {hi}]",
            field="hi",
            error_code=ErrorCode.EMPTY_RANGE,
        )
    span = (hi + 1 - lo) & MASK32
    if span == 0:
        return rng.next_uint32()
    return (rng.next_uint32() % span + lo) & MASK32


def uint32_below(rng: PCG, hi: int) -> int:
    """Draw from [0, hi)."""
    _check_uint32("hi", hi)
    if hi == 0:
        raise ValidationError(
            "Empty range [0, 0)", field="hi", error_code=ErrorCode.EMPTY_RANGE
        )
    return rng.next_uint32() % hi


def uint32_range(rng: PCG, lo: int, hi: int) -> int:
    """Draw from [lo, hi)."""
    _check_uint32("lo", lo)
    _check_uint32("hi", hi)
    if hi <= lo:
        raise ValidationError(
            f"Empty range [{lo}, {hi})",
            field="hi",
            error_code=ErrorCode.EMPTY_RANGE,
        )
    return rng.next_uint32() % (hi - lo) + lo


def uint64_below(rng: PCG, hi: int) -> int:
    """Draw from [0, hi)."""
    if not 0 < hi <= 1 << 64:
        raise ValidationError(
            f"Upper bound must be in (0, 2**64], got {hi}",
            field="hi",
            error_code=ErrorCode.EMPTY_RANGE,
        )
    return rng.next_uint64() % hi


def int32(rng: PCG) -> int:
    """Draw a signed 32-bit value as ``next_uint32() - 2**31 + 1``, wrapped."""
    value = rng.next_uint32() - INT32_MAX
    if value > INT32_MAX:
        value -= 1 << 32
    return value


# =============================================================================
# Double precision draws
# =============================================================================


def double_inclusive(rng: PCG, lo: float, hi: float) -> float:
    """Draw a double from [lo, hi]; ``hi`` itself is reachable."""
    _check_bounds(lo, hi)
    diff = hi - lo
    rand = (rng.next_uint64() % RESOLUTION) / INCLUSIVE_DIVISOR
    return diff * rand + lo


def double_exclusive(rng: PCG, lo: float, hi: float) -> float:
    """Draw a double from [lo, hi)."""
    _check_bounds(lo, hi)
    diff = hi - lo
    rand = (rng.next_uint64() % RESOLUTION) / EXCLUSIVE_DIVISOR
    return diff * rand + lo


# =============================================================================
# Single precision draws
# =============================================================================


def _float_draw(rng: PCG, lo: float, hi: float, divisor: float) -> float:
    _check_bounds(lo, hi)
    lo32 = np.float32(lo)
    with np.errstate(over="ignore", invalid="ignore"):
        diff = np.float32(hi) - lo32
        rand = np.float32(rng.next_uint32() % RESOLUTION) / np.float32(divisor)
        result = diff * rand + lo32
    return float(result)


def float_inclusive(rng: PCG, lo: float, hi: float) -> float:
    """Draw a binary32 value from [lo, hi], every step rounded to single."""
    return _float_draw(rng, lo, hi, INCLUSIVE_DIVISOR)


def float_exclusive(rng: PCG, lo: float, hi: float) -> float:
    """Draw a binary32 value from [lo, hi), every step rounded to single."""
    return _float_draw(rng, lo, hi, EXCLUSIVE_DIVISOR)


# =============================================================================
# Backend-typed draws
# =============================================================================


def _backend_draw(
    rng: PCG, backend: Any, lo: float, hi: float, divisor: float
) -> Any:
    _check_bounds(lo, hi)
    lo_b = backend.from_double(lo)
    diff = backend.sub(backend.from_double(hi), lo_b)
    raw = backend.from_double(float(rng.next_uint64() % RESOLUTION))
    rand = backend.div(raw, backend.from_double(divisor))
    return backend.add(backend.mul(diff, rand), lo_b)


def backend_double_inclusive(rng: PCG, backend: Any, lo: float, hi: float) -> Any:
    """Draw from [lo, hi] using the backend's own arithmetic.

    Returns:
        A backend value, not a native float.
    """
    return _backend_draw(rng, backend, lo, hi, INCLUSIVE_DIVISOR)


def backend_double_exclusive(rng: PCG, backend: Any, lo: float, hi: float) -> Any:
    """Draw from [lo, hi) using the backend's own arithmetic."""
    return _backend_draw(rng, backend, lo, hi, EXCLUSIVE_DIVISOR)


__all__ = [
    "RESOLUTION",
    "uint32_inclusive",
    "uint32_below",
    "uint32_range",
    "uint64_below",
    "int32",
    "double_inclusive",
    "double_exclusive",
    "float_inclusive",
    "float_exclusive",
    "backend_double_inclusive",
    "backend_double_exclusive",
]
