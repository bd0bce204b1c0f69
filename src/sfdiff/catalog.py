"""Operation catalog.

Maps each operation identifier to its native reference function and to the
backend method under test. The oracle and the driver only ever see
``OperationSpec`` records, so adding an operation means adding an enum member
and a catalog entry here, nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Mapping

from . import reference
from .bands import BINARY_BANDS, PERIODIC_BANDS, UNARY_BANDS, MagnitudeBand
from .exceptions import UnknownOperationError
from .tolerance import ToleranceModel

if TYPE_CHECKING:
    from .backends import FloatBackend


class Arity(str, Enum):
    UNARY = "unary"
    BINARY = "binary"


class OperationId(str, Enum):
    """Identifiers of the operations under test."""

    # binary
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    MODULUS = "modulus"
    POWER = "power"
    ARCTANGENT2 = "arctangent2"

    # unary
    ROUND = "round"
    FLOOR = "floor"
    CEILING = "ceiling"
    SINE = "sine"
    COSINE = "cosine"
    TANGENT = "tangent"
    SQUARE_ROOT = "square_root"
    EXPONENTIAL = "exponential"
    LOGARITHM_NATURAL = "logarithm_natural"
    LOGARITHM_BASE2 = "logarithm_base2"
    ARCSINE = "arcsine"
    ARCCOSINE = "arccosine"
    ARCTANGENT = "arctangent"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationSpec:
    """Immutable description of one operation under test.

    Attributes:
        op_id: Catalog identifier
        arity: Number of operands
        reference: Native double function, never raises
        method: Name of the backend method under test
        tolerance_model: Bound formula for approximate checks
        bands: Ordered magnitude bands for random sweeps
        error_multiplier: Widening factor for the standard bound
    """

    op_id: OperationId
    arity: Arity
    reference: Callable[..., float]
    method: str
    tolerance_model: ToleranceModel = ToleranceModel.STANDARD
    bands: tuple[MagnitudeBand, ...] = ()
    error_multiplier: float = 1.0

    @property
    def is_binary(self) -> bool:
        return self.arity is Arity.BINARY

    @property
    def operand_count(self) -> int:
        return 2 if self.is_binary else 1

    @property
    def inclusive_bound(self) -> bool:
        """Unary checks admit the bound itself, binary checks stay strictly below."""
        return not self.is_binary

    def bind(self, backend: FloatBackend) -> Callable[..., Any]:
        """Return the backend callable implementing this operation."""
        return getattr(backend, self.method)


def _binary(
    op_id: OperationId, ref: Callable[[float, float], float], method: str
) -> OperationSpec:
    return OperationSpec(op_id, Arity.BINARY, ref, method, bands=BINARY_BANDS)


def _unary(
    op_id: OperationId,
    ref: Callable[[float], float],
    method: str,
    *,
    multiplier: float = 1.0,
) -> OperationSpec:
    return OperationSpec(
        op_id, Arity.UNARY, ref, method, bands=UNARY_BANDS, error_multiplier=multiplier
    )


def _periodic(
    op_id: OperationId, ref: Callable[[float], float], method: str
) -> OperationSpec:
    return OperationSpec(
        op_id,
        Arity.UNARY,
        ref,
        method,
        tolerance_model=ToleranceModel.PERIODIC,
        bands=PERIODIC_BANDS,
    )


_SPECS: tuple[OperationSpec, ...] = (
    _binary(OperationId.ADDITION, reference.add, "add"),
    _binary(OperationId.SUBTRACTION, reference.sub, "sub"),
    _binary(OperationId.MULTIPLICATION, reference.mul, "mul"),
    _binary(OperationId.DIVISION, reference.div, "div"),
    _binary(OperationId.MODULUS, reference.mod, "mod"),
    _binary(OperationId.POWER, reference.pow, "pow"),
    _binary(OperationId.ARCTANGENT2, reference.atan2, "atan2"),
    _unary(OperationId.ROUND, reference.round_half_even, "round"),
    _unary(OperationId.FLOOR, reference.floor, "floor"),
    _unary(OperationId.CEILING, reference.ceil, "ceil"),
    _periodic(OperationId.SINE, reference.sin, "sin"),
    _periodic(OperationId.COSINE, reference.cos, "cos"),
    _periodic(OperationId.TANGENT, reference.tan, "tan"),
    _unary(OperationId.SQUARE_ROOT, reference.sqrt, "sqrt"),
    _unary(OperationId.EXPONENTIAL, reference.exp, "exp", multiplier=100.0),
    _unary(OperationId.LOGARITHM_NATURAL, reference.log, "log"),
    _unary(OperationId.LOGARITHM_BASE2, reference.log2, "log2"),
    _unary(OperationId.ARCSINE, reference.asin, "asin"),
    _unary(OperationId.ARCCOSINE, reference.acos, "acos"),
    _unary(OperationId.ARCTANGENT, reference.atan, "atan"),
)

CATALOG: Mapping[OperationId, OperationSpec] = MappingProxyType(
    {spec.op_id: spec for spec in _SPECS}
)


def get_operation(op_id: OperationId | str) -> OperationSpec:
    """Look up an operation by identifier.

    Args:
        op_id: ``OperationId`` member or its string value

    Raises:
        UnknownOperationError: If the identifier is not in the catalog
    """
    try:
        key = OperationId(op_id)
    except ValueError:
        raise UnknownOperationError(op_id) from None
    spec = CATALOG.get(key)
    if spec is None:
        raise UnknownOperationError(op_id)
    return spec


def operations(arity: Arity | None = None) -> list[OperationSpec]:
    """Return catalog entries in declaration order, optionally by arity."""
    return [spec for spec in _SPECS if arity is None or spec.arity is arity]


__all__ = [
    "Arity",
    "OperationId",
    "OperationSpec",
    "CATALOG",
    "get_operation",
    "operations",
]
