from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import numpy as np
import pytest

# Ensure src/ is on sys.path so `import sfdiff` works without an install.
_SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from sfdiff.backends.numpy_backend import NumpyBackend
from sfdiff.config import HarnessConfig


def pytest_addoption(parser):
    """Register ``--regenerate-golden-files`` for tests/golden."""
    parser.addoption(
        "--regenerate-golden-files",
        action="store_true",
        default=False,
        help="Regenerate golden reference files instead of comparing",
    )


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SFDIFF_* variables from the developer shell out of the tests."""
    for name in (
        "SFDIFF_BACKEND",
        "SFDIFF_SAMPLE_COUNT",
        "SFDIFF_FAIL_FAST",
        "SFDIFF_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def backend() -> NumpyBackend:
    return NumpyBackend()


@pytest.fixture
def small_config() -> HarnessConfig:
    """A quick run: a handful of samples per band."""
    return HarnessConfig(sample_count=25)


class SkewedAdditionBackend(NumpyBackend):
    """Numpy backend whose sums above 1.0 in magnitude are off by 1e-9 relative.

    Exact edge vectors with results at or below 1.0 still hold; random sweeps
    and approximate vectors with larger sums catch the error.
    """

    name = "skewed-add"

    def add(self, a: Any, b: Any) -> Any:
        result = super().add(a, b)
        if np.isfinite(result) and abs(result) > 1.0:
            return np.float64(result * (1.0 + 1e-9))
        return result


class NegativeZeroLosingBackend(NumpyBackend):
    """Numpy backend that flushes every zero result to ``+0``."""

    name = "no-negative-zero"

    def mul(self, a: Any, b: Any) -> Any:
        result = super().mul(a, b)
        return np.float64(0.0) if result == 0 else result


@pytest.fixture
def faulty_addition_backend() -> SkewedAdditionBackend:
    return SkewedAdditionBackend()


@pytest.fixture
def zero_flushing_backend() -> NegativeZeroLosingBackend:
    return NegativeZeroLosingBackend()
