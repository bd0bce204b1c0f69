"""Tolerance model for approximate comparisons.

Backend results are not expected to match the native double reference bit for
bit, only within an absolute bound that grows linearly with the magnitude of
the expected value and never falls below ``1e-12``.

Two models exist:

- ``STANDARD``: ``max(1e-12 * m * 2**log2(|e| + 1), 1e-12)`` with a per-operation
  multiplier ``m`` (1.0 unless the catalog says otherwise).
- ``PERIODIC``: ``max(0.005 * 2**log2(|e| + 1), 1e-12)`` for sine, cosine and
  tangent, whose backend approximations are allowed to drift further.

The ``2**log2(x)`` form equals ``x`` up to rounding; it is kept literally so
bounds, and therefore pass/fail traces, match other implementations of the
harness bit for bit.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

ABSOLUTE_FLOOR = 1e-12
STANDARD_SCALE = 1e-12
PERIODIC_SCALE = 0.005


class ToleranceModel(str, Enum):
    """Bound formula applied to an operation's approximate checks."""

    STANDARD = "standard"
    PERIODIC = "periodic"


@dataclass(frozen=True)
class ToleranceDecision:
    """Outcome of the exact-vs-approximate decision for one comparison.

    Attributes:
        is_exact: Bit-for-bit equality required, ``bound`` unused
        bound: Largest admissible absolute difference
        inclusive: Compare with ``<=`` instead of strict ``<``
    """

    is_exact: bool
    bound: float = 0.0
    inclusive: bool = True

    @classmethod
    def exact(cls) -> ToleranceDecision:
        return cls(is_exact=True, bound=0.0, inclusive=True)

    def admits(self, difference: float) -> bool:
        """Return whether ``difference`` lies within the bound.

        NaN differences are never admitted.
        """
        if self.is_exact:
            return difference == 0.0
        if self.inclusive:
            return difference <= self.bound
        return difference < self.bound


def _magnitude(expected: float) -> float:
    """Return ``2**log2(|expected| + 1)``, saturating to ``inf``."""
    try:
        return 2.0 ** math.log2(abs(expected) + 1.0)
    except OverflowError:
        return math.inf


def allowed_error(expected: float, multiplier: float = 1.0) -> float:
    """Return the standard bound for an expected value.

    Args:
        expected: Reference result in double precision
        multiplier: Operation-specific widening factor (>= 0)

    Returns:
        ``max(1e-12 * multiplier * 2**log2(|expected| + 1), 1e-12)``
    """
    magnitude = _magnitude(expected)
    if math.isinf(magnitude):
        # 0 * inf is NaN; a zero multiplier keeps the floor
        return math.inf if multiplier > 0 else ABSOLUTE_FLOOR
    return max(STANDARD_SCALE * multiplier * magnitude, ABSOLUTE_FLOOR)


def periodic_allowed_error(expected: float) -> float:
    """Return the periodic (trigonometric) bound for an expected value."""
    return max(PERIODIC_SCALE * _magnitude(expected), ABSOLUTE_FLOOR)


def decide(
    expected: float,
    model: ToleranceModel = ToleranceModel.STANDARD,
    multiplier: float = 1.0,
    *,
    inclusive: bool = True,
) -> ToleranceDecision:
    """Build the approximate-mode decision for one comparison.

    Args:
        expected: Reference result
        model: Bound formula
        multiplier: Widening factor, ignored by the periodic model
        inclusive: ``<=`` comparison (unary operations) or ``<`` (binary)

    Returns:
        ToleranceDecision with ``is_exact=False``
    """
    if model is ToleranceModel.PERIODIC:
        bound = periodic_allowed_error(expected)
    else:
        bound = allowed_error(expected, multiplier)
    return ToleranceDecision(is_exact=False, bound=bound, inclusive=inclusive)


__all__ = [
    "ABSOLUTE_FLOOR",
    "ToleranceModel",
    "ToleranceDecision",
    "allowed_error",
    "periodic_allowed_error",
    "decide",
]
