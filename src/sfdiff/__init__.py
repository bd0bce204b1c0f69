"""Deterministic differential tester for soft-float backends."""

__version__ = "0.1.0"

from .backends import FloatBackend, load_backend
from .catalog import CATALOG, OperationId, get_operation
from .config import HarnessConfig, load_config, validate_config
from .driver import RunReport, ScenarioDriver, run_suite
from .exceptions import ComparisonFailure, SfdiffError
from .oracle import DifferentialOracle
from .pcg import PCG

__all__ = [
    "__version__",
    "PCG",
    "FloatBackend",
    "load_backend",
    "CATALOG",
    "OperationId",
    "get_operation",
    "DifferentialOracle",
    "ScenarioDriver",
    "RunReport",
    "run_suite",
    "HarnessConfig",
    "load_config",
    "validate_config",
    "ComparisonFailure",
    "SfdiffError",
]
