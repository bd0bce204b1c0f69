"""Literal edge-case vectors.

Hand-curated boundary inputs per operation: zeros, negative zero, units,
sign combinations, infinities and NaNs. Exact vectors use the backend's own
equality (NaN equals NaN, ``+0`` equals ``-0``); signed vectors additionally
compare sign bits; approximate vectors go through the tolerance model, with
the expected value taken from the reference when omitted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping

from .catalog import CATALOG, Arity, OperationId
from .oracle import CheckMode

NAN = math.nan
INF = math.inf


@dataclass(frozen=True)
class EdgeVector:
    inputs: tuple[float, ...]
    expected: float | None
    mode: CheckMode = CheckMode.EXACT
    note: str = ""


def _exact(inputs: tuple[float, ...], expected: float, note: str = "") -> EdgeVector:
    return EdgeVector(inputs, expected, CheckMode.EXACT, note)


def _signed(inputs: tuple[float, ...], expected: float, note: str = "") -> EdgeVector:
    return EdgeVector(inputs, expected, CheckMode.SIGNED, note)


def _approx(
    inputs: tuple[float, ...], expected: float | None = None, note: str = ""
) -> EdgeVector:
    return EdgeVector(inputs, expected, CheckMode.APPROXIMATE, note)


# Every binary operation must propagate NaN from either operand.
NAN_PROPAGATION: tuple[EdgeVector, ...] = (
    _exact((NAN, NAN), NAN),
    _exact((0.0, NAN), NAN),
    _exact((-999999.0, NAN), NAN),
    _exact((NAN, 2.5), NAN),
)


_ADDITION = (
    _exact((0.0, 0.0), 0.0),
    _exact((1.0, 0.0), 1.0),
    _exact((0.0, 1.0), 1.0),
    # equality ignores the sign of zero
    _exact((-0.0, 0.0), 0.0),
    _exact((-0.0, 0.0), -0.0),
    _exact((0.0, 0.0), -0.0),
    _exact((1.0, -1.0), 0.0),
    _exact((-1.0, -1.0), -2.0),
    _approx((123.456, 456.789), 580.245, "decimal operands"),
    _approx((3.4630664266983525e-11, 5.5345556458565979e-11), 8.9976220725549504e-11),
    _exact((INF, INF), INF),
    _exact((INF, -INF), NAN),
    _exact((-INF, -INF), -INF),
    _exact((INF, 1.0), INF),
    _signed((-0.0, 0.0), 0.0),
    _signed((0.0, -0.0), 0.0),
    _signed((-0.0, -0.0), -0.0),
    _signed((1.0, -1.0), 0.0),
)

_SUBTRACTION = (
    _exact((0.0, 0.0), 0.0),
    _exact((1.0, 0.0), 1.0),
    _exact((0.0, 1.0), -1.0),
    _exact((-0.0, 0.0), 0.0),
    _exact((-0.0, 0.0), -0.0),
    _exact((0.0, 0.0), -0.0),
    _exact((1.0, -1.0), 2.0),
    _exact((-1.0, -1.0), 0.0),
    _approx((123.456, 456.789), -333.333),
    _exact((INF, INF), NAN),
    _exact((INF, -INF), INF),
    _exact((-INF, INF), -INF),
    _signed((0.0, 0.0), 0.0),
    _signed((-0.0, 0.0), -0.0),
    _signed((0.0, -0.0), 0.0),
    _signed((-0.0, -0.0), 0.0),
)

_MULTIPLICATION = (
    _exact((0.0, 0.0), 0.0),
    _exact((1.0, 0.0), 0.0),
    _exact((0.0, 1.0), 0.0),
    _exact((-0.0, 0.0), 0.0),
    _exact((-0.0, 0.0), -0.0),
    _exact((0.0, 0.0), -0.0),
    _exact((1.0, -1.0), -1.0),
    _exact((-1.0, -1.0), 1.0),
    _approx((123.456, 456.789), 56393.342784),
    _approx((1e-40, 1e-42), note="product below the smallest single"),
    _exact((INF, INF), INF),
    _exact((INF, -INF), -INF),
    _exact((-INF, -INF), INF),
    _exact((NAN, INF), NAN),
    _exact((0.0, INF), NAN),
    _signed((0.0, -0.0), -0.0),
    _signed((-0.0, -0.0), 0.0),
    _signed((-1.0, 0.0), -0.0),
    _signed((1.0, -0.0), -0.0),
)

_DIVISION = (
    _exact((0.0, 0.0), NAN),
    _exact((1.0, 0.0), INF),
    _exact((0.0, 1.0), 0.0),
    _exact((-0.0, 0.0), NAN),
    _exact((1.0, -1.0), -1.0),
    _exact((-1.0, -1.0), 1.0),
    _approx((123.456, 456.789), 0.27026920525669401),
    _exact((INF, INF), NAN),
    _exact((INF, -INF), NAN),
    _exact((-INF, -INF), NAN),
    _exact((NAN, INF), NAN),
    _exact((0.0, INF), 0.0),
    _exact((INF, 0.0), INF),
    _exact((-1.0, 0.0), -INF),
    _signed((1.0, -0.0), -INF),
    _signed((-0.0, 1.0), -0.0),
    _signed((0.0, -1.0), -0.0),
    _signed((-1.0, INF), -0.0),
)

_MODULUS = (
    _exact((5.5, 2.0), 1.5),
    _exact((-5.5, 2.0), -1.5),
    _exact((5.5, -2.0), 1.5),
    _exact((1.0, 0.0), NAN),
    _exact((INF, 1.0), NAN),
    _exact((1.0, INF), 1.0),
    _exact((0.0, 1.0), 0.0),
    _signed((-0.0, 1.0), -0.0),
    _signed((-4.0, 2.0), -0.0),
    _approx((10.1, 3.0)),
)

_POWER = (
    _exact((2.0, 10.0), 1024.0),
    _exact((-2.0, 3.0), -8.0),
    _exact((2.0, -1.0), 0.5),
    _exact((4.0, 0.5), 2.0),
    _exact((0.0, -1.0), INF),
    _exact((-8.0, 1.0 / 3.0), NAN),
    _signed((-0.0, 3.0), -0.0),
    _signed((-0.0, 2.0), 0.0),
    _signed((-0.0, -1.0), -INF),
    _approx((2.0, 0.5)),
    _approx((10.0, -3.5)),
)

_ARCTANGENT2 = (
    _signed((0.0, 1.0), 0.0),
    _signed((-0.0, 1.0), -0.0),
    _approx((0.0, -1.0), math.pi),
    _approx((1.0, 0.0), math.pi / 2),
    _approx((1.0, 1.0), math.pi / 4),
    _approx((-1.0, -1.0)),
    _approx((INF, INF)),
)

_ROUND = (
    _exact((0.5,), 0.0),
    _exact((1.5,), 2.0),
    _exact((2.5,), 2.0),
    _exact((-1.5,), -2.0),
    _exact((0.49999999999999994,), 0.0, "largest double below one half"),
    _exact((1e300,), 1e300),
    _exact((INF,), INF),
    _exact((-INF,), -INF),
    _exact((NAN,), NAN),
    _signed((-0.5,), -0.0),
    _signed((-0.0,), -0.0),
)

_FLOOR = (
    _exact((1.5,), 1.0),
    _exact((-1.5,), -2.0),
    _exact((-0.5,), -1.0),
    _exact((0.0,), 0.0),
    _exact((INF,), INF),
    _exact((NAN,), NAN),
    _signed((-0.0,), -0.0),
)

_CEILING = (
    _exact((1.5,), 2.0),
    _exact((-1.5,), -1.0),
    _exact((0.0,), 0.0),
    _exact((-INF,), -INF),
    _exact((NAN,), NAN),
    _signed((-0.5,), -0.0),
)

_SINE = (
    _signed((0.0,), 0.0),
    _exact((INF,), NAN),
    _exact((NAN,), NAN),
    _approx((1.0,)),
    _approx((math.pi / 2,), 1.0),
)

_COSINE = (
    _approx((0.0,), 1.0),
    _exact((INF,), NAN),
    _exact((NAN,), NAN),
    _approx((1.0,)),
    _approx((math.pi,), -1.0),
)

_TANGENT = (
    _signed((0.0,), 0.0),
    _exact((-INF,), NAN),
    _exact((NAN,), NAN),
    _approx((0.5,)),
    _approx((math.pi / 4,), 1.0),
)

_SQUARE_ROOT = (
    _exact((4.0,), 2.0),
    _exact((0.0,), 0.0),
    _exact((-1.0,), NAN),
    _exact((INF,), INF),
    _exact((-INF,), NAN),
    _exact((NAN,), NAN),
    _signed((-0.0,), -0.0),
    _approx((2.0,)),
)

_EXPONENTIAL = (
    _exact((0.0,), 1.0),
    _exact((-INF,), 0.0),
    _exact((INF,), INF),
    _exact((1000.0,), INF),
    _exact((NAN,), NAN),
    _approx((1.0,), math.e),
    _approx((-1.0,)),
)

_LOGARITHM_NATURAL = (
    _exact((1.0,), 0.0),
    _exact((0.0,), -INF),
    _exact((-0.0,), -INF),
    _exact((-1.0,), NAN),
    _exact((INF,), INF),
    _exact((NAN,), NAN),
    _approx((math.e,), 1.0),
    _approx((10.0,)),
)

_LOGARITHM_BASE2 = (
    _exact((1.0,), 0.0),
    _exact((0.0,), -INF),
    _exact((-1.0,), NAN),
    _exact((INF,), INF),
    _exact((NAN,), NAN),
    _approx((8.0,), 3.0),
    _approx((10.0,)),
)

_ARCSINE = (
    _signed((0.0,), 0.0),
    _signed((-0.0,), -0.0),
    _exact((2.0,), NAN),
    _exact((NAN,), NAN),
    _approx((1.0,), math.pi / 2),
    _approx((0.5,)),
)

_ARCCOSINE = (
    _exact((2.0,), NAN),
    _exact((NAN,), NAN),
    _approx((1.0,), 0.0),
    _approx((-1.0,), math.pi),
    _approx((0.5,)),
)

_ARCTANGENT = (
    _signed((0.0,), 0.0),
    _signed((-0.0,), -0.0),
    _exact((NAN,), NAN),
    _approx((INF,), math.pi / 2),
    _approx((-INF,), -math.pi / 2),
    _approx((1.0,), math.pi / 4),
)


_SPECIFIC: dict[OperationId, tuple[EdgeVector, ...]] = {
    OperationId.ADDITION: _ADDITION,
    OperationId.SUBTRACTION: _SUBTRACTION,
    OperationId.MULTIPLICATION: _MULTIPLICATION,
    OperationId.DIVISION: _DIVISION,
    OperationId.MODULUS: _MODULUS,
    OperationId.POWER: _POWER,
    OperationId.ARCTANGENT2: _ARCTANGENT2,
    OperationId.ROUND: _ROUND,
    OperationId.FLOOR: _FLOOR,
    OperationId.CEILING: _CEILING,
    OperationId.SINE: _SINE,
    OperationId.COSINE: _COSINE,
    OperationId.TANGENT: _TANGENT,
    OperationId.SQUARE_ROOT: _SQUARE_ROOT,
    OperationId.EXPONENTIAL: _EXPONENTIAL,
    OperationId.LOGARITHM_NATURAL: _LOGARITHM_NATURAL,
    OperationId.LOGARITHM_BASE2: _LOGARITHM_BASE2,
    OperationId.ARCSINE: _ARCSINE,
    OperationId.ARCCOSINE: _ARCCOSINE,
    OperationId.ARCTANGENT: _ARCTANGENT,
}


def _build() -> Mapping[OperationId, tuple[EdgeVector, ...]]:
    table: dict[OperationId, tuple[EdgeVector, ...]] = {}
    for op_id, spec in CATALOG.items():
        vectors = _SPECIFIC.get(op_id, ())
        if spec.arity is Arity.BINARY:
            vectors = vectors + NAN_PROPAGATION
        table[op_id] = vectors
    return table


EDGE_VECTORS: Mapping[OperationId, tuple[EdgeVector, ...]] = _build()


def vectors_for(op_id: OperationId) -> tuple[EdgeVector, ...]:
    """Return the literal vectors of an operation (empty if none are curated)."""
    return EDGE_VECTORS.get(op_id, ())


__all__ = [
    "EdgeVector",
    "NAN_PROPAGATION",
    "EDGE_VECTORS",
    "vectors_for",
]
