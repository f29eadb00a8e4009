"""
Core exception types for numstr.core.

These are dependency-free and may be imported by all core modules.
Every error carries the name of the failing operation and a short snippet
of the offending input for diagnostics.
"""

from __future__ import annotations

from typing import Any, Optional

__all__ = [
    "NumStrError",
    "ValidationError",
    "MalformedNumber",
    "EmptyInput",
    "PrecisionLossError",
]

#: Longest input excerpt quoted in an error message.
_SNIPPET_MAX = 40


def _clip(snippet: Any) -> Optional[str]:
    if snippet is None:
        return None
    s = str(snippet)
    if len(s) > _SNIPPET_MAX:
        s = s[:_SNIPPET_MAX] + "..."
    return s


class NumStrError(Exception):
    """Base class for all numstr errors.

    Attributes
    ----------
    operation : str | None
        Name of the operation that detected the problem, e.g. ``"DigitRun.truncate_right"``.
    snippet : str | None
        The relevant input (clipped), for context.
    """

    def __init__(self, message: str, *, operation: Optional[str] = None, snippet: Any = None):
        self.operation = operation
        self.snippet = _clip(snippet)
        prefix = f"{operation}: " if operation else ""
        suffix = f" (input={self.snippet!r})" if self.snippet is not None else ""
        super().__init__(f"{prefix}{message}{suffix}")


class ValidationError(NumStrError, ValueError):
    """Raised when a spec or argument is invalid at construction/call time."""
    pass


class MalformedNumber(NumStrError, ValueError):
    """Raised when digits do not form an integer-then-optional-fraction pattern."""
    pass


class EmptyInput(NumStrError, ValueError):
    """Raised when a pure number string contains no digits at all."""
    pass


class PrecisionLossError(NumStrError, ArithmeticError):
    """Raised when an operation promised losslessness and cannot deliver it."""
    pass
