"""Golden-file configuration and utilities.

This module provides:
1. Fixtures for golden-file tests
2. Helpers to store reference outputs and compare against them
3. Stable hashing of nested result dicts
"""

from __future__ import annotations

import hashlib
import json
import math
import sys
import warnings
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pytest

GOLDEN_REFERENCE_DIR = Path(__file__).parent / "reference"


# ==============================================================================
# GOLDEN FILE STRUCTURE
# ==============================================================================


@dataclass
class GoldenFileMetadata:
    """Metadata of a golden reference."""

    created_at: str
    python_version: str
    numpy_version: str
    seed: list[int]
    description: str
    file_hash: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GoldenFileMetadata:
        return cls(**data)


@dataclass
class GoldenRunResult:
    """Golden reference of a harness run or a generator sequence.

    Only scalar outputs and digests are stored, never raw samples.
    """

    metadata: GoldenFileMetadata
    outputs: Dict[str, Any]
    outputs_hash: str = ""

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["metadata"] = self.metadata.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GoldenRunResult:
        return cls(
            metadata=GoldenFileMetadata.from_dict(data["metadata"]),
            outputs=data["outputs"],
            outputs_hash=data["outputs_hash"],
        )


# ==============================================================================
# UTILITY FUNCTIONS
# ==============================================================================


def compute_dict_hash(data: Dict[str, Any]) -> str:
    """Return a SHA-256 over a normalized JSON rendering of ``data``.

    Floats are rendered with ``repr`` so the hash is exact; NaN and
    infinities become strings.
    """

    def _normalize(obj: Any) -> Any:
        if isinstance(obj, (float, np.floating)):
            val = float(obj)
            if math.isnan(val) or math.isinf(val):
                return str(val)
            return repr(val)
        if isinstance(obj, np.integer):
            return int(obj)
        if isinstance(obj, dict):
            return {str(k): _normalize(v) for k, v in sorted(obj.items())}
        if isinstance(obj, (list, tuple)):
            return [_normalize(x) for x in obj]
        return obj

    json_str = json.dumps(_normalize(data), sort_keys=True)
    return hashlib.sha256(json_str.encode()).hexdigest()


def create_metadata(seed: tuple[int, int], description: str) -> GoldenFileMetadata:
    return GoldenFileMetadata(
        created_at=datetime.now(timezone.utc).isoformat(),
        python_version=sys.version.split()[0],
        numpy_version=np.__version__,
        seed=list(seed),
        description=description,
    )


class GoldenFileComparisonError(AssertionError):
    """Raised when outputs drift from their golden reference."""

    def __init__(self, message: str, details: Dict[str, Any]):
        super().__init__(f"{message}: {json.dumps(details, indent=2, sort_keys=True)}")
        self.details = details


# ==============================================================================
# GOLDEN FILE MANAGER
# ==============================================================================


class GoldenFileManager:
    """Stores, loads and compares golden references by name and category."""

    def __init__(self, reference_dir: Path = GOLDEN_REFERENCE_DIR):
        self.reference_dir = reference_dir
        self.reference_dir.mkdir(parents=True, exist_ok=True)

    def _get_reference_path(self, name: str, category: str) -> Path:
        category_dir = self.reference_dir / category
        category_dir.mkdir(parents=True, exist_ok=True)
        return category_dir / f"{name}.json"

    def save_reference(self, name: str, result: GoldenRunResult, category: str) -> Path:
        path = self._get_reference_path(name, category)

        # hash over outputs only, metadata carries a timestamp
        result.outputs_hash = compute_dict_hash(result.outputs)
        result.metadata.file_hash = compute_dict_hash(result.to_dict())

        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, indent=2, sort_keys=True)
            f.write("\n")
        return path

    def load_reference(self, name: str, category: str) -> Optional[GoldenRunResult]:
        path = self._get_reference_path(name, category)
        if not path.exists():
            return None
        with open(path, encoding="utf-8") as f:
            return GoldenRunResult.from_dict(json.load(f))

    def compare(
        self, name: str, current: GoldenRunResult, category: str
    ) -> Dict[str, Any]:
        """Compare ``current`` with the stored reference.

        Returns:
            ``{"status": "match"}`` or ``{"status": "no_reference"}``

        Raises:
            GoldenFileComparisonError: On any difference in the outputs.
        """
        reference = self.load_reference(name, category)
        if reference is None:
            return {"status": "no_reference", "message": f"No reference found for '{name}'"}

        current.outputs_hash = compute_dict_hash(current.outputs)
        if current.outputs_hash == reference.outputs_hash:
            return {"status": "match", "reference_name": name}

        per_key: Dict[str, Any] = {}
        keys = sorted(set(reference.outputs) | set(current.outputs))
        for key in keys:
            expected = reference.outputs.get(key, "<missing>")
            actual = current.outputs.get(key, "<missing>")
            if expected != actual:
                per_key[key] = {"expected": expected, "actual": actual}

        raise GoldenFileComparisonError(
            f"Golden file comparison failed for '{name}'",
            {
                "outputs_hash": {
                    "expected": reference.outputs_hash,
                    "actual": current.outputs_hash,
                },
                "outputs": per_key,
            },
        )


# ==============================================================================
# PYTEST FIXTURES
# ==============================================================================


@pytest.fixture
def golden_manager() -> GoldenFileManager:
    return GoldenFileManager()


@pytest.fixture
def regenerate_golden_files(request) -> bool:
    """Use: pytest --regenerate-golden-files"""
    return bool(request.config.getoption("--regenerate-golden-files", default=False))


def assert_golden_match(
    manager: GoldenFileManager,
    name: str,
    current: GoldenRunResult,
    *,
    category: str,
    regenerate: bool = False,
) -> None:
    """Assert that ``current`` matches its golden file.

    A missing reference is created with a warning; ``regenerate`` rewrites
    the reference and skips the test.
    """
    if regenerate:
        manager.save_reference(name, current, category)
        pytest.skip(f"Regenerated golden file: {name}")

    result = manager.compare(name, current, category)
    if result["status"] == "no_reference":
        manager.save_reference(name, current, category)
        warnings.warn(f"Created new golden file: {name}")
