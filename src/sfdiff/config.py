"""Harness configuration: JSON file, environment overrides, validation.

Precedence, lowest first: model defaults, config file, environment
(``SFDIFF_*`` variables, optionally from a ``.env`` file), command line.

Relevant environment variables:
  SFDIFF_BACKEND=numpy|package.module:attribute   (Default: numpy)
  SFDIFF_SAMPLE_COUNT=<int>                       (Default: 100000)
  SFDIFF_FAIL_FAST=true|false                     (Default: true)
  SFDIFF_LOG_LEVEL=CRITICAL|ERROR|WARNING|INFO|DEBUG (Default: INFO)
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Literal, Mapping

import pydantic
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import OperationId, get_operation
from .error_codes import ErrorCode
from .exceptions import OutputError, ValidationError

DEFAULT_BACKEND = "numpy"
DEFAULT_SAMPLE_COUNT = 100_000
DEFAULT_LOG_LEVEL = "INFO"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

_ENV_PREFIX = "SFDIFF_"


class HarnessConfig(BaseModel):
    """Settings of one harness run.

    ``sample_count`` is per magnitude band. ``operations=None`` selects the
    whole catalog in declaration order.
    """

    model_config = ConfigDict(extra="forbid")

    backend: str = DEFAULT_BACKEND
    sample_count: int = Field(default=DEFAULT_SAMPLE_COUNT, ge=0)
    seed_state: int = Field(default=0, ge=0)
    seed_stream: int = Field(default=0, ge=0)
    fail_fast: bool = True
    operations: list[OperationId] | None = None
    include_edge_cases: bool = True
    include_random: bool = True
    log_level: LogLevel = DEFAULT_LOG_LEVEL

    @field_validator("operations", mode="before")
    @classmethod
    def _resolve_operations(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        # Unknown identifiers propagate as UnknownOperationError.
        resolved: list[OperationId] = []
        for item in value:
            op_id = get_operation(item).op_id
            if op_id not in resolved:
                resolved.append(op_id)
        return resolved

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def seed(self) -> tuple[int, int]:
        return self.seed_state, self.seed_stream


# =============================================================================
# Environment
# =============================================================================


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def env_overrides(*, dotenv: bool = True) -> dict[str, Any]:
    """Collect ``SFDIFF_*`` overrides from the environment.

    Args:
        dotenv: Load the nearest ``.env`` file above the working directory
            first (existing variables win).

    Raises:
        ValidationError: If SFDIFF_SAMPLE_COUNT is not an integer
    """
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    overrides: dict[str, Any] = {}
    backend = os.getenv(f"{_ENV_PREFIX}BACKEND")
    if backend:
        overrides["backend"] = backend.strip()

    samples = os.getenv(f"{_ENV_PREFIX}SAMPLE_COUNT")
    if samples:
        try:
            overrides["sample_count"] = int(samples.strip())
        except ValueError as exc:
            raise ValidationError(
                f"{_ENV_PREFIX}SAMPLE_COUNT must be an integer, got {samples!r}",
                field="sample_count",
                error_code=ErrorCode.INVALID_CONFIG,
            ) from exc

    if os.getenv(f"{_ENV_PREFIX}FAIL_FAST") is not None:
        overrides["fail_fast"] = _get_bool(f"{_ENV_PREFIX}FAIL_FAST", True)

    level = os.getenv(f"{_ENV_PREFIX}LOG_LEVEL")
    if level:
        overrides["log_level"] = level
    return overrides


# =============================================================================
# Loading and validation
# =============================================================================


def load_config(path: str | Path, *, apply_env: bool = True) -> HarnessConfig:
    """Load config from a JSON file.

    Args:
        path: Path to config JSON.
        apply_env: Layer ``SFDIFF_*`` environment overrides on top.

    Returns:
        Validated config.

    Raises:
        FileNotFoundError: If the file does not exist
        OutputError: If the file is not valid JSON
        ValidationError: If the settings are invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise OutputError(
            f"Config file is not valid JSON: {exc}",
            path=str(config_path),
            error_code=ErrorCode.SERIALIZATION_ERROR,
        ) from exc

    if not isinstance(raw, Mapping):
        raise ValidationError(
            f"Config root must be a JSON object, got {type(raw).__name__}",
            error_code=ErrorCode.INVALID_CONFIG,
            path=str(config_path),
        )

    config = _normalize_config(raw)
    if apply_env:
        config.update(env_overrides())
    return validate_config(config)


def build_config(
    data: Mapping[str, Any] | None = None, *, apply_env: bool = True
) -> HarnessConfig:
    """Build a config from a dict (or defaults) plus environment overrides."""
    config = _normalize_config(data or {})
    if apply_env:
        config.update(env_overrides())
    return validate_config(config)


def validate_config(config: Mapping[str, Any] | HarnessConfig) -> HarnessConfig:
    """Validate settings and return the typed config.

    Raises:
        ValidationError: On unknown keys, out-of-range values or a run that
            would check nothing.
        UnknownOperationError: On an operation identifier not in the catalog.
    """
    if isinstance(config, HarnessConfig):
        data: Mapping[str, Any] = config.model_dump()
    else:
        data = config

    try:
        model = HarnessConfig.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(
            f"Invalid config: {first.get('msg', exc)}",
            field=field,
            error_code=ErrorCode.INVALID_CONFIG,
            errors=exc.error_count(),
        ) from exc

    if not (model.include_edge_cases or model.include_random):
        raise ValidationError(
            "At least one of include_edge_cases / include_random must be enabled",
            field="include_random",
            error_code=ErrorCode.INVALID_CONFIG,
        )
    if model.operations == []:
        raise ValidationError(
            "operations must name at least one operation (or be null for all)",
            field="operations",
            error_code=ErrorCode.INVALID_CONFIG,
        )
    return model


def _normalize_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Apply compatibility shims to a config dict."""
    normalized = copy.deepcopy(dict(config))

    # "seed": [state, stream] shorthand
    seed = normalized.pop("seed", None)
    if isinstance(seed, (list, tuple)) and len(seed) == 2:
        normalized.setdefault("seed_state", seed[0])
        normalized.setdefault("seed_stream", seed[1])
    elif seed is not None:
        raise ValidationError(
            f"seed must be a [state, stream] pair, got {seed!r}",
            field="seed",
            error_code=ErrorCode.INVALID_CONFIG,
        )

    if "samples" in normalized and "sample_count" not in normalized:
        normalized["sample_count"] = normalized.pop("samples")

    operations = normalized.get("operations")
    if isinstance(operations, str) and operations.strip().lower() == "all":
        normalized["operations"] = None

    return normalized


__all__ = [
    "HarnessConfig",
    "DEFAULT_BACKEND",
    "DEFAULT_SAMPLE_COUNT",
    "env_overrides",
    "load_config",
    "build_config",
    "validate_config",
]
