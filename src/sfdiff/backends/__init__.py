"""Backends under test.

A backend adapts a floating-point implementation (typically a software float
library) to the surface the harness drives: conversions to and from native
doubles and singles, arithmetic, equality, the named math functions and the
NaN/infinity/sign predicates.

Backends are selected by name:

- ``"numpy"``: bundled binary64 backend on numpy scalars
- ``"package.module:attribute"``: any importable adapter object or class
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Protocol, runtime_checkable

from ..error_codes import ErrorCode
from ..exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class FloatBackend(Protocol):
    """Operation surface of a floating-point implementation under test.

    Values are opaque to the harness; only the backend creates, combines and
    converts them. ``equals`` is the number type's own equality: NaN equals
    NaN and ``+0`` equals ``-0``. ``is_negative`` reads the sign bit and is
    what distinguishes the two zeros.
    """

    name: str

    def from_double(self, x: float) -> Any: ...

    def to_double(self, value: Any) -> float: ...

    def from_single(self, x: float) -> Any: ...

    def to_single(self, value: Any) -> float: ...

    def add(self, a: Any, b: Any) -> Any: ...

    def sub(self, a: Any, b: Any) -> Any: ...

    def mul(self, a: Any, b: Any) -> Any: ...

    def div(self, a: Any, b: Any) -> Any: ...

    def mod(self, a: Any, b: Any) -> Any: ...

    def pow(self, a: Any, b: Any) -> Any: ...

    def atan2(self, y: Any, x: Any) -> Any: ...

    def equals(self, a: Any, b: Any) -> bool: ...

    def round(self, x: Any) -> Any: ...

    def floor(self, x: Any) -> Any: ...

    def ceil(self, x: Any) -> Any: ...

    def sin(self, x: Any) -> Any: ...

    def cos(self, x: Any) -> Any: ...

    def tan(self, x: Any) -> Any: ...

    def sqrt(self, x: Any) -> Any: ...

    def exp(self, x: Any) -> Any: ...

    def log(self, x: Any) -> Any: ...

    def log2(self, x: Any) -> Any: ...

    def asin(self, x: Any) -> Any: ...

    def acos(self, x: Any) -> Any: ...

    def atan(self, x: Any) -> Any: ...

    def is_nan(self, value: Any) -> bool: ...

    def is_infinity(self, value: Any) -> bool: ...

    def sign(self, value: Any) -> int: ...

    def is_negative(self, value: Any) -> bool: ...


REQUIRED_METHODS: tuple[str, ...] = (
    "from_double",
    "to_double",
    "from_single",
    "to_single",
    "add",
    "sub",
    "mul",
    "div",
    "mod",
    "pow",
    "atan2",
    "equals",
    "round",
    "floor",
    "ceil",
    "sin",
    "cos",
    "tan",
    "sqrt",
    "exp",
    "log",
    "log2",
    "asin",
    "acos",
    "atan",
    "is_nan",
    "is_infinity",
    "sign",
    "is_negative",
)

BUILTIN_BACKENDS: dict[str, str] = {
    "numpy": "sfdiff.backends.numpy_backend:NumpyBackend",
}


def missing_methods(backend: Any) -> list[str]:
    """Return the required operations ``backend`` does not provide."""
    return [
        name for name in REQUIRED_METHODS if not callable(getattr(backend, name, None))
    ]


def load_backend(spec: str | FloatBackend) -> FloatBackend:
    """Resolve a backend name, import path or instance.

    Args:
        spec: ``"numpy"``, ``"package.module:attribute"`` or a backend object.
            Classes are instantiated without arguments.

    Returns:
        A backend providing every operation in REQUIRED_METHODS.

    Raises:
        BackendUnavailableError: If the module cannot be imported, the
            attribute does not exist or operations are missing.
    """
    if not isinstance(spec, str):
        return _verified(spec, getattr(spec, "name", type(spec).__name__))

    target = BUILTIN_BACKENDS.get(spec.strip().lower(), spec.strip())
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise BackendUnavailableError(
            f"Backend must be a builtin name ({', '.join(sorted(BUILTIN_BACKENDS))}) "
            f"or 'module:attribute', got {spec!r}",
            backend=spec,
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise BackendUnavailableError(
            f"Backend module {module_name!r} not importable: {exc}",
            backend=spec,
        ) from exc

    obj = getattr(module, attribute, None)
    if obj is None:
        raise BackendUnavailableError(
            f"Backend module {module_name!r} has no attribute {attribute!r}",
            backend=spec,
        )

    backend = obj() if isinstance(obj, type) else obj
    return _verified(backend, spec)


def _verified(backend: Any, label: str) -> FloatBackend:
    missing = missing_methods(backend)
    if missing:
        raise BackendUnavailableError(
            f"Backend {label!r} lacks required operations: {', '.join(missing)}",
            backend=label,
            error_code=ErrorCode.BACKEND_INCOMPLETE,
            missing=missing,
        )
    logger.debug("Loaded backend %s (%s)", label, type(backend).__name__)
    return backend


__all__ = [
    "FloatBackend",
    "REQUIRED_METHODS",
    "BUILTIN_BACKENDS",
    "missing_methods",
    "load_backend",
]
