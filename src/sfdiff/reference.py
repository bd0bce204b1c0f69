"""Native double-precision reference functions with IEEE-754 results.

Python's ``math`` module and float operators raise ``ValueError``,
``OverflowError`` or ``ZeroDivisionError`` where IEEE-754 (and the C
math library) returns NaN or a signed infinity. The reference must never
raise, so each function here maps those exceptions back onto the IEEE result.
"""

from __future__ import annotations

import math

NAN = math.nan
INF = math.inf


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and math.fmod(value, 2.0) != 0.0


# =============================================================================
# Binary operations
# =============================================================================


def add(a: float, b: float) -> float:
    return a + b


def sub(a: float, b: float) -> float:
    return a - b


def mul(a: float, b: float) -> float:
    return a * b


def div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0.0 or math.isnan(a):
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)


def mod(a: float, b: float) -> float:
    """Truncated remainder, sign of the dividend (C ``fmod``)."""
    try:
        return math.fmod(a, b)
    except ValueError:
        return NAN


def pow(x: float, y: float) -> float:  # noqa: A001
    try:
        return math.pow(x, y)
    except OverflowError:
        if x < 0.0 and _is_odd_integer(y):
            return -INF
        return INF
    except ValueError:
        # pole: 0 ** negative
        if x == 0.0:
            if _is_odd_integer(y):
                return math.copysign(INF, x)
            return INF
        return NAN


def atan2(y: float, x: float) -> float:
    return math.atan2(y, x)


# =============================================================================
# Unary operations
# =============================================================================


def _integral(value: float, rounded: float) -> float:
    # zero results keep the operand's sign: ceil(-0.5) == -0.0
    return math.copysign(float(rounded), value)


def round_half_even(x: float) -> float:
    """Round to the nearest integer, ties to even (IEEE-754 roundTiesToEven)."""
    if not math.isfinite(x):
        return x
    return _integral(x, round(x))


def floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return _integral(x, math.floor(x))


def ceil(x: float) -> float:
    if not math.isfinite(x):
        return x
    return _integral(x, math.ceil(x))


def _domain(func):
    """Wrap a ``math`` function so domain errors become NaN."""

    def wrapper(x: float) -> float:
        try:
            return func(x)
        except ValueError:
            return NAN

    wrapper.__name__ = func.__name__
    wrapper.__doc__ = f"IEEE-754 {func.__name__}: NaN outside the domain."
    return wrapper


sin = _domain(math.sin)
cos = _domain(math.cos)
tan = _domain(math.tan)
sqrt = _domain(math.sqrt)
asin = _domain(math.asin)
acos = _domain(math.acos)
atan = math.atan


def exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return INF


def log(x: float) -> float:
    if x == 0.0:
        return -INF
    try:
        return math.log(x)
    except ValueError:
        return NAN


def log2(x: float) -> float:
    if x == 0.0:
        return -INF
    try:
        return math.log2(x)
    except ValueError:
        return NAN
