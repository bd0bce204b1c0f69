"""Error codes for structured harness failures.

The numeric ranges group failures by category so that a surrounding runner
can map them to exit codes or report sections without string matching.
"""

from __future__ import annotations

from enum import IntEnum


class ErrorCode(IntEnum):
    """Harness error codes.

    Code ranges:
        0:          Success
        1000-1999:  Validation errors (bad arguments, bad config)
        2000-2999:  Comparison errors (the backend disagreed with the reference)
        3000-3999:  I/O errors (config and report files)
        4000-4999:  Internal and wiring errors (bugs)
        5000-5999:  Backend errors (system under test not loadable)
    """

    # =========================================================================
    # Success (0)
    # =========================================================================
    OK = 0

    # =========================================================================
    # Validation Errors (1000-1999)
    # =========================================================================
    VALIDATION_FAILED = 1000
    """Generic validation failure."""

    INVALID_ARGUMENT = 1001
    """Invalid argument passed to a function."""

    OUT_OF_BOUNDS = 1003
    """Value outside the permitted range."""

    INVALID_CONFIG = 1004
    """Config file or override could not be validated."""

    EMPTY_RANGE = 1005
    """Draw requested from an empty integer range."""

    # =========================================================================
    # Comparison Errors (2000-2999)
    # =========================================================================
    COMPARISON_FAILED = 2000
    """Generic comparison failure."""

    EXACT_MISMATCH = 2001
    """Exact-mode result differs from the expected value."""

    TOLERANCE_EXCEEDED = 2002
    """Approximate-mode difference exceeds the allowed bound."""

    SPECIAL_VALUE_MISMATCH = 2003
    """NaN or infinity expected but the backend returned something else."""

    SIGNED_ZERO_MISMATCH = 2004
    """Numerically equal zeros with different sign bits."""

    # =========================================================================
    # I/O Errors (3000-3999)
    # =========================================================================
    IO_ERROR = 3000
    """Generic I/O failure."""

    SERIALIZATION_ERROR = 3002
    """Report or config could not be (de)serialized."""

    # =========================================================================
    # Internal Errors (4000-4999)
    # =========================================================================
    INTERNAL_ERROR = 4000
    """Generic internal error."""

    UNKNOWN_OPERATION = 4001
    """Operation identifier not present in the catalog."""

    # =========================================================================
    # Backend Errors (5000-5999)
    # =========================================================================
    BACKEND_UNAVAILABLE = 5001
    """Backend module could not be imported."""

    BACKEND_INCOMPLETE = 5002
    """Backend object lacks required operations."""


def is_recoverable(code: ErrorCode | int) -> bool:
    """Return whether a caller can fix the failure and try again.

    Comparison failures are deterministic: re-running reproduces them, so they
    are never recoverable.

    Args:
        code: Error code

    Returns:
        True if correcting the input makes a retry meaningful
    """
    code_int = int(code)

    if code_int == 0:
        return True
    if 1000 <= code_int < 2000:
        return True
    if 3000 <= code_int < 4000:
        return True
    if 5000 <= code_int < 6000:
        return code_int == ErrorCode.BACKEND_UNAVAILABLE

    return False


def error_category(code: ErrorCode | int) -> str:
    """Return the category name of an error code.

    Args:
        code: Error code

    Returns:
        Category name
    """
    code_int = int(code)

    if code_int == 0:
        return "OK"
    elif 1000 <= code_int < 2000:
        return "VALIDATION"
    elif 2000 <= code_int < 3000:
        return "COMPARISON"
    elif 3000 <= code_int < 4000:
        return "IO"
    elif 4000 <= code_int < 5000:
        return "INTERNAL"
    elif 5000 <= code_int < 6000:
        return "BACKEND"
    else:
        return "UNKNOWN"


__all__ = [
    "ErrorCode",
    "is_recoverable",
    "error_category",
]
