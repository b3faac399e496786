"""
ecuacoord — Custom Exception Hierarchy
=======================================
Every ecuacoord component raises exceptions from this module so callers can
catch them at the right level of granularity.

Hierarchy::

    EcuaCoordError                       ← catch-all base
    ├── InputValidationError             ← bad records, files, columns
    │   ├── InputFormatError             ← record shape not recognised
    │   ├── ParseError                   ← non-numeric coordinate text
    │   ├── ValidationError              ← out-of-range / implausible point
    │   └── ColumnNotFoundError          ← CSV column missing
    ├── CRSError                         ← CRS problems
    │   └── UnknownSystemError           ← code not in the registry
    ├── TransformError                   ← projection engine rejected a pair
    ├── ExportPreconditionError          ← nothing exportable
    └── OutputWriteError                 ← cannot write to output sink

Usage::

    from ecuacoord.exceptions import UnknownSystemError

    raise UnknownSystemError("UTM-19S", registry.codes())
"""

from __future__ import annotations

from typing import Sequence


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class EcuaCoordError(Exception):
    """Base exception for all ecuacoord errors.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class InputValidationError(EcuaCoordError):
    """Raised when an input record or file fails pre-processing checks.

    This is the parent class for more specific input problems.
    """


class InputFormatError(InputValidationError):
    """Raised when a raw record carries neither a geographic nor a projected pair."""


class ParseError(InputValidationError):
    """Raised when coordinate text cannot be parsed into numbers."""


class ValidationError(InputValidationError):
    """Raised when a coordinate is out of range or outside its plausibility window.

    Args:
        messages: Ordered violation messages, as produced by the validators.

    Example::

        raise ValidationError(["Latitude must be between -90 and 90 degrees"])
    """

    def __init__(self, messages: Sequence[str]) -> None:
        super().__init__("; ".join(messages) or "Invalid coordinate")
        self.messages: list[str] = list(messages)


class ColumnNotFoundError(InputValidationError):
    """Raised when an expected column is absent from a tabular dataset.

    Args:
        column: The name of the missing column.
        available: Column names that ARE present.
    """

    def __init__(self, column: str, available: list[str]) -> None:
        available_str = ", ".join(f"'{c}'" for c in available)
        super().__init__(
            f"Column '{column}' not found. Available columns: {available_str}"
        )
        self.column: str = column
        self.available: list[str] = available


# ---------------------------------------------------------------------------
# CRS
# ---------------------------------------------------------------------------


class CRSError(EcuaCoordError):
    """Raised for coordinate reference system problems."""


class UnknownSystemError(CRSError):
    """Raised when a CRS code is not part of the registry.

    This always indicates a configuration bug rather than bad data, so the
    batch orchestrator never converts it into an error record.

    Args:
        code: The unknown code (e.g. ``"UTM-19S"``).
        available: Codes the registry does know, used in the message.
    """

    def __init__(self, code: str, available: Sequence[str] = ()) -> None:
        hint = f" Known systems: {', '.join(available)}." if available else ""
        super().__init__(f"Unknown coordinate system: '{code}'.{hint}")
        self.code: str = code
        self.available: list[str] = list(available)


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------


class TransformError(EcuaCoordError):
    """Raised when the projection engine rejects or cannot compute a pair."""


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class ExportPreconditionError(EcuaCoordError):
    """Raised when a result collection has nothing to export in a format.

    Args:
        export_format: The requested format (e.g. ``"kml"``).
        reason: Why nothing can be written.
    """

    def __init__(self, export_format: str, reason: str) -> None:
        super().__init__(f"Cannot export {export_format}: {reason}")
        self.export_format: str = export_format
        self.reason: str = reason


class OutputWriteError(EcuaCoordError):
    """Raised when an export cannot be written to its sink.

    Args:
        output_path: String representation of the sink that failed.
        reason: Underlying OS error message.
    """

    def __init__(self, output_path: str, reason: str) -> None:
        super().__init__(f"Failed to write output to '{output_path}': {reason}")
        self.output_path: str = output_path
        self.reason: str = reason
