"""Reporting helpers for harness runs."""

from __future__ import annotations

from typing import Any, Iterable

from .driver import OperationReport, RunReport
from .oracle import Mismatch

# Columns of the per-operation table, in display order
REPORT_COLUMNS: list[str] = [
    "operation",
    "edge_checks",
    "random_checks",
    "mismatches",
    "elapsed_sec",
]


def summarize_report(report: RunReport) -> dict[str, Any]:
    """Condense a run report into headline figures.

    Args:
        report: Finished run report.

    Returns:
        Dictionary with totals, failing operations and the trace digest.
    """
    failing = [r.op_id.value for r in report.operations if not r.ok]
    return {
        "ok": report.ok,
        "backend": report.backend,
        "seed": list(report.seed),
        "operations": len(report.operations),
        "checks": report.checks,
        "mismatches": len(report.mismatches),
        "failing_operations": failing,
        "trace_digest": report.trace_digest,
        "elapsed_sec": round(report.elapsed, 3),
    }


def operation_rows(reports: Iterable[OperationReport]) -> list[dict[str, Any]]:
    """Return one row per operation keyed by REPORT_COLUMNS."""
    return [
        {
            "operation": r.op_id.value,
            "edge_checks": r.edge_checks,
            "random_checks": r.random_checks,
            "mismatches": len(r.mismatches),
            "elapsed_sec": round(r.elapsed, 3),
        }
        for r in reports
    ]


def format_mismatch(mismatch: Mismatch, index: int | None = None) -> str:
    """Format a single mismatch for display.

    Args:
        mismatch: Failed check.
        index: Optional 1-based position shown as a prefix.

    Returns:
        One line naming operation, inputs, expected, actual and bound.
    """
    prefix = f"#{index} " if index is not None else ""
    return f"{prefix}{mismatch.describe()}"


def format_report(report: RunReport, *, max_mismatches: int = 20) -> str:
    """Render a human-readable run summary."""
    summary = summarize_report(report)
    status = "PASS" if summary["ok"] else "FAIL"
    seed_state, seed_stream = report.seed
    lines = [
        "",
        "Soft-float differential run",
        "=" * 60,
        "",
        f"  Backend:     {summary['backend']}",
        f"  Seed:        ({seed_state}, {seed_stream})",
        f"  Samples:     {report.sample_count} per band",
        f"  Checks:      {summary['checks']}",
        f"  Mismatches:  {summary['mismatches']}",
        f"  Trace:       {summary['trace_digest']}",
        f"  Elapsed:     {summary['elapsed_sec']:.3f}s",
        f"  Result:      {status}",
        "",
        "Operations:",
    ]
    for row in operation_rows(report.operations):
        lines.append(
            "    {operation:<18} edge={edge_checks:<4} random={random_checks:<8} "
            "mismatches={mismatches}".format(**row)
        )

    mismatches = report.mismatches
    if mismatches:
        lines.append("")
        lines.append("Mismatches:")
        for i, mismatch in enumerate(mismatches[:max_mismatches], start=1):
            lines.append(f"    {format_mismatch(mismatch, i)}")
        hidden = len(mismatches) - max_mismatches
        if hidden > 0:
            lines.append(f"    ... {hidden} more")
    lines.append("")
    return "\n".join(lines)


__all__ = [
    "REPORT_COLUMNS",
    "summarize_report",
    "operation_rows",
    "format_mismatch",
    "format_report",
]
