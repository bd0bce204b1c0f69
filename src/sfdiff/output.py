"""Report artifact writer."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from . import __version__
from .driver import RunReport
from .error_codes import ErrorCode
from .exceptions import OutputError


def write_report(
    report: RunReport,
    path: str | Path,
    *,
    config: dict[str, Any] | None = None,
) -> Path:
    """Write a run report as JSON.

    Args:
        report: Finished run report.
        path: Target file; parent directories are created.
        config: Settings used for the run, stored under ``meta.config``.

    Returns:
        The written path.

    Raises:
        OutputError: If the file cannot be written.
    """
    output_path = Path(path)
    data = report.to_dict()
    meta = data["meta"]
    meta["generated_at"] = datetime.now(timezone.utc).isoformat()
    meta["harness"] = {"name": "sfdiff", "version": __version__}
    if config is not None:
        meta["config"] = config

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        write_json(output_path, data)
    except OSError as exc:
        raise OutputError(
            f"Cannot write report: {exc}",
            path=str(output_path),
            error_code=ErrorCode.IO_ERROR,
        ) from exc
    return output_path


def write_json(path: Path, data: Any) -> None:
    """Write JSON with stable formatting."""
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
        handle.write("\n")


__all__ = ["write_report", "write_json"]
