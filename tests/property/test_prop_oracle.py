"""Property tests for the differential oracle on the numpy backend.

Correctly rounded IEEE-754 arithmetic is identical in ``math`` and numpy, so
basic arithmetic and the rounding functions must match exactly for any
operands, special values included.
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from sfdiff.backends.numpy_backend import NumpyBackend
from sfdiff.catalog import OperationId
from sfdiff.oracle import DifferentialOracle

any_double = st.floats(allow_nan=True, allow_infinity=True)

EXACT_BINARY = [
    OperationId.ADDITION,
    OperationId.SUBTRACTION,
    OperationId.MULTIPLICATION,
    OperationId.DIVISION,
]
EXACT_UNARY = [
    OperationId.ROUND,
    OperationId.FLOOR,
    OperationId.CEILING,
    OperationId.SQUARE_ROOT,
]


@given(op=st.sampled_from(EXACT_BINARY), a=any_double, b=any_double)
def test_arithmetic_matches_exactly(op: OperationId, a: float, b: float) -> None:
    oracle = DifferentialOracle(NumpyBackend())
    assert oracle.check_exact(op, (a, b), signed_zero=True)


@given(op=st.sampled_from(EXACT_UNARY), x=any_double)
def test_rounding_matches_exactly(op: OperationId, x: float) -> None:
    oracle = DifferentialOracle(NumpyBackend())
    assert oracle.check_exact(op, (x,), signed_zero=True)


@given(op=st.sampled_from(EXACT_BINARY), a=any_double, b=any_double)
def test_exact_implies_approximate(op: OperationId, a: float, b: float) -> None:
    oracle = DifferentialOracle(NumpyBackend())
    assert oracle.check_approximate(op, (a, b))


@given(
    a=st.floats(allow_nan=False, allow_infinity=False),
    b=st.floats(allow_nan=False, allow_infinity=False),
)
def test_trace_depends_on_inputs_only(a: float, b: float) -> None:
    first = DifferentialOracle(NumpyBackend())
    second = DifferentialOracle(NumpyBackend())
    first.check_exact(OperationId.ADDITION, (a, b))
    second.check_exact(OperationId.ADDITION, (a, b))
    assert first.trace_digest() == second.trace_digest()
