"""Differential oracle.

Given an operation, concrete inputs and the reference result, the oracle runs
the backend implementation and decides pass/fail:

- exact mode: the backend's own equality must hold (optionally sign bits too)
- approximate mode: IEEE special values first (NaN iff NaN, infinity iff
  infinity of the same sign), then the magnitude-scaled bound

By default the first mismatch raises ``ComparisonFailure``. With
``fail_fast=False`` mismatches are collected on ``mismatches`` instead and the
run continues, so a single pass can report every failing input.
"""

from __future__ import annotations

import hashlib
import logging
import math
import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence

from .catalog import OperationId, OperationSpec, get_operation
from .error_codes import ErrorCode
from .exceptions import ComparisonFailure, ValidationError
from .tolerance import ToleranceDecision, decide

logger = logging.getLogger(__name__)


class CheckMode(str, Enum):
    EXACT = "exact"
    SIGNED = "signed"
    APPROXIMATE = "approximate"


def _fmt(value: float) -> str:
    return repr(float(value))


@dataclass(frozen=True)
class Mismatch:
    """Diagnostic payload of one failed comparison."""

    op_id: OperationId
    inputs: tuple[float, ...]
    expected: float
    actual: float
    mode: CheckMode
    bound: float | None = None
    error_code: int = ErrorCode.COMPARISON_FAILED

    @property
    def difference(self) -> float:
        return abs(self.actual - self.expected)

    def describe(self) -> str:
        args = ", ".join(_fmt(x) for x in self.inputs)
        text = (
            f"{self.op_id.value}({args}): expected {_fmt(self.expected)}, "
            f"got {_fmt(self.actual)} [{self.mode.value}"
        )
        if self.bound is not None:
            text += f", |diff|={_fmt(self.difference)}, bound={_fmt(self.bound)}"
        return text + "]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.op_id.value,
            "inputs": [_fmt(x) for x in self.inputs],
            "expected": _fmt(self.expected),
            "actual": _fmt(self.actual),
            "mode": self.mode.value,
            "bound": None if self.bound is None else _fmt(self.bound),
            "error_code": int(self.error_code),
        }


class DifferentialOracle:
    """Compares a backend against the native reference, one input at a time.

    Every check, passing or failing, is folded into a SHA-256 trace of
    (operation, input bit patterns, verdict). Two runs with the same backend,
    seeds and sample counts must end with the same ``trace_digest()``.
    """

    def __init__(self, backend: Any, *, fail_fast: bool = True) -> None:
        self.backend = backend
        self.fail_fast = fail_fast
        self.mismatches: list[Mismatch] = []
        self.checks = 0
        self._trace = hashlib.sha256()

    # ------------------------------------------------------------------ checks

    def check_exact(
        self,
        op: OperationId | str | OperationSpec,
        inputs: Sequence[float],
        expected: float | None = None,
        *,
        signed_zero: bool = False,
    ) -> bool:
        """Require the backend result to equal ``expected`` exactly.

        Args:
            op: Operation identifier or spec
            inputs: Operands as native doubles
            expected: Expected result; ``None`` takes the reference result
            signed_zero: Also require matching sign bits (``-0.0`` vs ``0.0``)

        Returns:
            True if the check held (only False in batch mode)

        Raises:
            ComparisonFailure: On mismatch in fail-fast mode
        """
        spec, operands = self._prepare(op, inputs)
        if expected is None:
            expected = spec.reference(*operands)
        actual = self._invoke(spec, operands)

        backend = self.backend
        wanted = backend.from_double(expected)
        ok = backend.equals(actual, wanted)
        code = ErrorCode.EXACT_MISMATCH
        # the sign bit of a NaN carries no meaning
        if (
            ok
            and signed_zero
            and not backend.is_nan(wanted)
            and backend.is_negative(actual) != backend.is_negative(wanted)
        ):
            ok = False
            code = ErrorCode.SIGNED_ZERO_MISMATCH

        mode = CheckMode.SIGNED if signed_zero else CheckMode.EXACT
        return self._record(spec, operands, expected, actual, ok, mode, None, code)

    def check_approximate(
        self,
        op: OperationId | str | OperationSpec,
        inputs: Sequence[float],
        expected: float | None = None,
        *,
        multiplier: float | None = None,
    ) -> bool:
        """Require the backend result to lie within the tolerance bound.

        Args:
            op: Operation identifier or spec
            inputs: Operands as native doubles
            expected: Expected result; ``None`` takes the reference result
            multiplier: Overrides the operation's error multiplier

        Returns:
            True if the check held (only False in batch mode)

        Raises:
            ComparisonFailure: On mismatch in fail-fast mode
        """
        spec, operands = self._prepare(op, inputs)
        if expected is None:
            expected = spec.reference(*operands)
        actual = self._invoke(spec, operands)
        backend = self.backend

        bound: float | None = None
        if math.isnan(expected):
            ok = backend.is_nan(actual)
            code = ErrorCode.SPECIAL_VALUE_MISMATCH
        elif math.isinf(expected):
            ok = backend.is_infinity(actual) and backend.sign(actual) == (
                1 if expected > 0 else -1
            )
            code = ErrorCode.SPECIAL_VALUE_MISMATCH
        else:
            decision = self.decision_for(spec, expected, multiplier)
            bound = decision.bound
            ok = decision.admits(abs(backend.to_double(actual) - expected))
            code = ErrorCode.TOLERANCE_EXCEEDED

        return self._record(
            spec, operands, expected, actual, ok, CheckMode.APPROXIMATE, bound, code
        )

    @staticmethod
    def decision_for(
        spec: OperationSpec, expected: float, multiplier: float | None = None
    ) -> ToleranceDecision:
        """Return the approximate-mode decision the oracle applies to ``spec``."""
        return decide(
            expected,
            spec.tolerance_model,
            spec.error_multiplier if multiplier is None else multiplier,
            inclusive=spec.inclusive_bound,
        )

    def trace_digest(self) -> str:
        """Hex digest of every check recorded so far."""
        return self._trace.copy().hexdigest()

    # ----------------------------------------------------------------- helpers

    def _prepare(
        self, op: OperationId | str | OperationSpec, inputs: Sequence[float]
    ) -> tuple[OperationSpec, tuple[float, ...]]:
        spec = op if isinstance(op, OperationSpec) else get_operation(op)
        operands = tuple(float(x) for x in inputs)
        if len(operands) != spec.operand_count:
            raise ValidationError(
                f"{spec.op_id.value} takes {spec.operand_count} operand(s), "
                f"got {len(operands)}",
                field="inputs",
                error_code=ErrorCode.INVALID_ARGUMENT,
            )
        return spec, operands

    def _invoke(self, spec: OperationSpec, operands: tuple[float, ...]) -> Any:
        backend = self.backend
        return spec.bind(backend)(*(backend.from_double(x) for x in operands))

    def _record(
        self,
        spec: OperationSpec,
        operands: tuple[float, ...],
        expected: float,
        actual: Any,
        ok: bool,
        mode: CheckMode,
        bound: float | None,
        code: ErrorCode,
    ) -> bool:
        self.checks += 1
        self._trace.update(spec.op_id.value.encode())
        self._trace.update(struct.pack(f"<{len(operands)}d", *operands))
        self._trace.update(b"\x01" if ok else b"\x00")
        if ok:
            return True

        mismatch = Mismatch(
            op_id=spec.op_id,
            inputs=operands,
            expected=expected,
            actual=self.backend.to_double(actual),
            mode=mode,
            bound=bound,
            error_code=int(code),
        )
        logger.error("Mismatch: %s", mismatch.describe())
        if self.fail_fast:
            raise ComparisonFailure(mismatch, error_code=code)
        self.mismatches.append(mismatch)
        return False


__all__ = [
    "CheckMode",
    "Mismatch",
    "DifferentialOracle",
]
