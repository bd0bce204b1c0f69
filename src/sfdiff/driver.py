"""Scenario driver.

Runs, per operation, the literal edge-case vectors and then the
magnitude-banded random sweep through one ``DifferentialOracle``.

Each random sweep owns a fresh ``PCG`` built from the configured seed pair;
the generator continues across the operation's bands, and binary operands
are drawn first operand then second. Two runs with the same backend, seed
pair and sample count therefore visit the same inputs in the same order and
end with the same trace digest.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

from .backends import FloatBackend, load_backend
from .catalog import OperationId, OperationSpec, get_operation, operations
from .config import HarnessConfig
from .oracle import CheckMode, DifferentialOracle, Mismatch
from .pcg import PCG
from .ranges import double_inclusive
from .vectors import EdgeVector, vectors_for

logger = logging.getLogger(__name__)


@dataclass
class OperationReport:
    """Outcome of one operation's scenarios."""

    op_id: OperationId
    edge_checks: int = 0
    random_checks: int = 0
    bands: list[str] = field(default_factory=list)
    mismatches: list[Mismatch] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def checks(self) -> int:
        return self.edge_checks + self.random_checks

    @property
    def ok(self) -> bool:
        return not self.mismatches

    def to_dict(self) -> dict[str, Any]:
        return {
            "operation": self.op_id.value,
            "ok": self.ok,
            "edge_checks": self.edge_checks,
            "random_checks": self.random_checks,
            "bands": list(self.bands),
            "mismatches": [m.to_dict() for m in self.mismatches],
            "elapsed_sec": round(self.elapsed, 6),
        }


@dataclass
class RunReport:
    """Outcome of a full harness run."""

    backend: str
    seed: tuple[int, int]
    sample_count: int
    fail_fast: bool
    operations: list[OperationReport] = field(default_factory=list)
    trace_digest: str = ""
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return all(report.ok for report in self.operations)

    @property
    def checks(self) -> int:
        return sum(report.checks for report in self.operations)

    @property
    def mismatches(self) -> list[Mismatch]:
        return [m for report in self.operations for m in report.mismatches]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "meta": {
                "backend": self.backend,
                "seed": list(self.seed),
                "sample_count": self.sample_count,
                "fail_fast": self.fail_fast,
                "trace_digest": self.trace_digest,
                "elapsed_sec": round(self.elapsed, 6),
            },
            "checks": self.checks,
            "mismatch_count": len(self.mismatches),
            "operations": [report.to_dict() for report in self.operations],
        }


class ScenarioDriver:
    """Runs edge-case vectors and random sweeps against one backend.

    Args:
        backend: Backend under test (already loaded)
        config: Run settings; defaults to ``HarnessConfig()``
    """

    def __init__(
        self, backend: FloatBackend, config: HarnessConfig | None = None
    ) -> None:
        self.backend = backend
        self.config = config or HarnessConfig()
        self.oracle = DifferentialOracle(backend, fail_fast=self.config.fail_fast)

    # ------------------------------------------------------------- scenarios

    def run_edge_cases(self, op: OperationId | str | OperationSpec) -> int:
        """Check every literal vector of ``op``; return the number of checks."""
        spec = _resolve(op)
        vectors = vectors_for(spec.op_id)
        for vector in vectors:
            self._check_vector(spec, vector)
        logger.debug("%s: %d edge vectors", spec.op_id.value, len(vectors))
        return len(vectors)

    def run_random_sweep(
        self,
        op: OperationId | str | OperationSpec,
        sample_count: int | None = None,
        seed: tuple[int, int] | None = None,
        bands_seen: list[str] | None = None,
    ) -> int:
        """Check ``sample_count`` random inputs per magnitude band of ``op``.

        Args:
            op: Operation to sweep
            sample_count: Samples per band (default: config value)
            seed: ``(state, stream)`` pair (default: config value)
            bands_seen: Receives the names of the swept bands, in order

        Returns:
            Number of checks performed
        """
        spec = _resolve(op)
        count = self.config.sample_count if sample_count is None else sample_count
        state, stream = self.config.seed if seed is None else seed
        rng = PCG(state, stream)
        arity = spec.operand_count
        check = self.oracle.check_approximate

        total = 0
        for band in spec.bands:
            lo, hi = band.minimum, band.maximum
            logger.debug(
                "%s: band %s [%r, %r] x %d", spec.op_id.value, band.name, lo, hi, count
            )
            for _ in range(count):
                inputs = tuple(double_inclusive(rng, lo, hi) for _ in range(arity))
                check(spec, inputs)
            total += count
            if bands_seen is not None:
                bands_seen.append(band.name)
        return total

    def run_operation(self, op: OperationId | str | OperationSpec) -> OperationReport:
        """Run the enabled scenarios of one operation."""
        spec = _resolve(op)
        report = OperationReport(spec.op_id)
        already = len(self.oracle.mismatches)
        started = time.perf_counter()

        logger.info("Checking %s", spec.op_id.value)
        if self.config.include_edge_cases:
            report.edge_checks = self.run_edge_cases(spec)
        if self.config.include_random:
            report.random_checks = self.run_random_sweep(spec, bands_seen=report.bands)

        report.elapsed = time.perf_counter() - started
        report.mismatches = self.oracle.mismatches[already:]
        if report.mismatches:
            logger.warning(
                "%s: %d mismatch(es) in %d checks",
                spec.op_id.value,
                len(report.mismatches),
                report.checks,
            )
        return report

    def run_all(
        self, ops: Iterable[OperationId | str | OperationSpec] | None = None
    ) -> RunReport:
        """Run every selected operation in catalog order and build the report."""
        if ops is None:
            ops = self.config.operations or [spec.op_id for spec in operations()]
        selected = [_resolve(op) for op in ops]

        report = RunReport(
            backend=getattr(self.backend, "name", type(self.backend).__name__),
            seed=self.config.seed,
            sample_count=self.config.sample_count,
            fail_fast=self.config.fail_fast,
        )
        started = time.perf_counter()
        for spec in selected:
            report.operations.append(self.run_operation(spec))
        report.elapsed = time.perf_counter() - started
        report.trace_digest = self.oracle.trace_digest()

        logger.info(
            "Finished %d operation(s), %d checks, %d mismatch(es) in %.2fs",
            len(report.operations),
            report.checks,
            len(report.mismatches),
            report.elapsed,
        )
        return report

    # --------------------------------------------------------------- helpers

    def _check_vector(self, spec: OperationSpec, vector: EdgeVector) -> bool:
        if vector.mode is CheckMode.APPROXIMATE:
            return self.oracle.check_approximate(spec, vector.inputs, vector.expected)
        return self.oracle.check_exact(
            spec,
            vector.inputs,
            vector.expected,
            signed_zero=vector.mode is CheckMode.SIGNED,
        )


def _resolve(op: OperationId | str | OperationSpec) -> OperationSpec:
    return op if isinstance(op, OperationSpec) else get_operation(op)


def run_suite(
    config: HarnessConfig | None = None,
    backend: FloatBackend | str | None = None,
) -> RunReport:
    """Run the whole harness.

    Args:
        config: Run settings (default: ``HarnessConfig()``)
        backend: Backend object or name; defaults to ``config.backend``

    Returns:
        The run report. In fail-fast mode it is only returned when every
        check held.

    Raises:
        ComparisonFailure: On the first mismatch in fail-fast mode
        BackendUnavailableError: If the backend cannot be loaded
    """
    config = config or HarnessConfig()
    resolved = load_backend(config.backend if backend is None else backend)
    logger.info(
        "Running suite against %s (seed=%s, samples/band=%d, fail_fast=%s)",
        getattr(resolved, "name", type(resolved).__name__),
        config.seed,
        config.sample_count,
        config.fail_fast,
    )
    return ScenarioDriver(resolved, config).run_all()


__all__ = [
    "OperationReport",
    "RunReport",
    "ScenarioDriver",
    "run_suite",
]
