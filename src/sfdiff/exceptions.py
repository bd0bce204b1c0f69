"""Exception hierarchy for structured harness failures.

Every harness exception carries an ``ErrorCode`` and a context dict so that a
runner can log or serialize it without parsing the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .error_codes import ErrorCode, error_category

if TYPE_CHECKING:
    from .oracle import Mismatch


class SfdiffError(Exception):
    """Base exception for all harness errors.

    Attributes:
        message: Human-readable message
        error_code: Numeric error code (see ErrorCode)
        context: Extra diagnostic context

    Example:
        >>> try:
        ...     raise SfdiffError("Something went wrong", error_code=4000)
        ... except SfdiffError as e:
        ...     log.error(f"[{e.error_code}] {e.message}", extra=e.context)
    """

    def __init__(
        self,
        message: str,
        error_code: int | ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = int(error_code)
        self.context = context or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code}, "
            f"context={self.context!r})"
        )

    @property
    def category(self) -> str:
        """Error category derived from error_code."""
        return error_category(self.error_code)

    def to_dict(self) -> dict[str, Any]:
        """Convert the exception into a JSON-friendly dict.

        Returns:
            Dict with keys: ok, error_code, message, context, category
        """
        return {
            "ok": False,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "category": self.category,
        }


class ValidationError(SfdiffError):
    """Invalid input: bad arguments, empty ranges, malformed config.

    Attributes:
        field: Name of the offending field (optional)
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        error_code: int | ErrorCode = ErrorCode.VALIDATION_FAILED,
        **context: Any,
    ) -> None:
        if field:
            context["field"] = field
        super().__init__(message, error_code=error_code, context=context)
        self.field = field


class ComparisonFailure(SfdiffError, AssertionError):
    """The backend result did not match the reference.

    Raised by the oracle on the first mismatch in fail-fast mode. Carries the
    full diagnostic payload: operation, inputs, expected and actual values and
    the applied bound.

    Attributes:
        mismatch: The ``Mismatch`` record describing the failed check
    """

    def __init__(
        self,
        mismatch: Mismatch,
        error_code: int | ErrorCode = ErrorCode.COMPARISON_FAILED,
    ) -> None:
        super().__init__(
            mismatch.describe(),
            error_code=error_code,
            context=mismatch.to_dict(),
        )
        self.mismatch = mismatch


class UnknownOperationError(SfdiffError):
    """An operation identifier that is not in the catalog was dispatched.

    This is a wiring bug, not a data-dependent test failure.

    Attributes:
        operation: The identifier that failed to resolve
    """

    def __init__(
        self,
        operation: Any,
        error_code: int | ErrorCode = ErrorCode.UNKNOWN_OPERATION,
        **context: Any,
    ) -> None:
        context["operation"] = str(operation)
        super().__init__(
            f"Unknown operation identifier: {operation!r}",
            error_code=error_code,
            context=context,
        )
        self.operation = operation


class BackendUnavailableError(SfdiffError):
    """The backend under test could not be loaded.

    Attributes:
        backend: Backend name or import path (optional)
    """

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        error_code: int | ErrorCode = ErrorCode.BACKEND_UNAVAILABLE,
        **context: Any,
    ) -> None:
        if backend:
            context["backend"] = backend
        super().__init__(message, error_code=error_code, context=context)
        self.backend = backend


class OutputError(SfdiffError):
    """Config or report file could not be read or written.

    Attributes:
        path: Affected path (optional)
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        error_code: int | ErrorCode = ErrorCode.IO_ERROR,
        **context: Any,
    ) -> None:
        if path:
            context["path"] = path
        super().__init__(message, error_code=error_code, context=context)
        self.path = path


__all__ = [
    "SfdiffError",
    "ValidationError",
    "ComparisonFailure",
    "UnknownOperationError",
    "BackendUnavailableError",
    "OutputError",
]
