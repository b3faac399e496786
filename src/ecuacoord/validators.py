"""
ecuacoord — Coordinate & Input Validators
==========================================
Two families of checks live here:

* :func:`validate_geographic` / :func:`validate_projected` inspect a single
  coordinate pair and *report* problems as an ordered list of messages
  inside a :class:`ValidationResult` — they never raise for bad data, so a
  form or a batch can show every problem at once.
* :class:`Validators` holds assertion-style preconditions for the file tool.
  They raise an exception from :mod:`ecuacoord.exceptions` so that
  ``validate_inputs`` implementations stay short::

    class MyTool(BatchFileTool):
        def validate_inputs(self) -> None:
            Validators.assert_file_exists(self.input_path)
            Validators.assert_supported_extension(self.input_path, [".csv"])
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ecuacoord.exceptions import (
    ColumnNotFoundError,
    InputValidationError,
    OutputWriteError,
    ValidationError,
)
from ecuacoord.numbers import parse_number
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry


# ---------------------------------------------------------------------------
# Coordinate validation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one coordinate pair.

    Regional plausibility violations count against :attr:`is_valid` exactly
    like hard range violations; they are additionally listed in
    :attr:`warnings` so callers can choose to treat them as soft.

    Attributes:
        messages: Every violation, in check order.
        warnings: The subset of :attr:`messages` that are regional-window
            violations.
        parsed_x: Parsed longitude / easting (``NaN`` if not numeric).
        parsed_y: Parsed latitude / northing (``NaN`` if not numeric).
    """

    messages: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    parsed_x: float = math.nan
    parsed_y: float = math.nan

    @property
    def is_valid(self) -> bool:
        return not self.messages

    @property
    def hard_errors(self) -> list[str]:
        """Violations that are not regional warnings."""
        return [m for m in self.messages if m not in self.warnings]

    @property
    def has_hard_errors(self) -> bool:
        return bool(self.hard_errors)

    def raise_for_errors(self) -> None:
        """Raise :class:`ValidationError` carrying every message, if any."""
        if self.messages:
            raise ValidationError(self.messages)


def validate_geographic(
    lat: float | str,
    lng: float | str,
    registry: CRSRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Validate a WGS84 latitude / longitude pair.

    Checks, in order: numeric type, absolute range (±90 / ±180), then the
    geographic system's regional window when both values are numeric.

    Args:
        lat: Latitude in decimal degrees (text is parsed).
        lng: Longitude in decimal degrees (text is parsed).
        registry: Registry providing the geographic plausibility window.

    Returns:
        A :class:`ValidationResult`.
    """
    parsed_lat = parse_number(lat)
    parsed_lng = parse_number(lng)
    messages: list[str] = []
    warnings: list[str] = []

    if math.isnan(parsed_lat):
        messages.append("Latitude must be a valid number")
    elif not -90 <= parsed_lat <= 90:
        messages.append("Latitude must be between -90 and 90 degrees")

    if math.isnan(parsed_lng):
        messages.append("Longitude must be a valid number")
    elif not -180 <= parsed_lng <= 180:
        messages.append("Longitude must be between -180 and 180 degrees")

    window = registry.geographic.validity
    if window is not None and not (math.isnan(parsed_lat) or math.isnan(parsed_lng)):
        if not window.contains_y(parsed_lat):
            warnings.append(
                f"Latitude outside the typical range of {window.label} "
                f"({window.y_min:g}° to {window.y_max:g}°)"
            )
        if not window.contains_x(parsed_lng):
            warnings.append(
                f"Longitude outside the typical range of {window.label} "
                f"({window.x_min:g}° to {window.x_max:g}°)"
            )
        messages.extend(warnings)

    return ValidationResult(messages, warnings, parsed_lng, parsed_lat)


def validate_projected(
    easting: float | str,
    northing: float | str,
    system_code: str,
    registry: CRSRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Validate an easting / northing pair for *system_code*.

    Bounds are only checked when the system defines a validity window
    (currently ``SIRES-DMQ``); other systems pass through after the numeric
    checks.

    Raises:
        UnknownSystemError: If *system_code* is not registered.
    """
    system = registry.get(system_code)
    parsed_e = parse_number(easting)
    parsed_n = parse_number(northing)
    messages: list[str] = []
    warnings: list[str] = []

    if math.isnan(parsed_e):
        messages.append("Easting must be a valid number")
    if math.isnan(parsed_n):
        messages.append("Northing must be a valid number")

    window = system.validity
    if window is not None and not messages:
        if not window.contains_x(parsed_e):
            warnings.append(
                f"Easting outside the typical range of {window.label} "
                f"({window.x_min:.0f}-{window.x_max:.0f})"
            )
        if not window.contains_y(parsed_n):
            warnings.append(
                f"Northing outside the typical range of {window.label} "
                f"({window.y_min:.0f}-{window.y_max:.0f})"
            )
        messages.extend(warnings)

    return ValidationResult(messages, warnings, parsed_e, parsed_n)


# ---------------------------------------------------------------------------
# Assertion-style preconditions (file tool)
# ---------------------------------------------------------------------------


class Validators:
    """Static precondition checks used by :class:`~ecuacoord.tool.CoordinateFileTransformer`.

    All methods are ``@staticmethod`` — this class is never instantiated.
    It exists purely as a logical namespace.
    """

    @staticmethod
    def assert_file_exists(path: Path) -> None:
        """Assert that *path* points to an existing regular file.

        Raises:
            InputValidationError: If *path* does not exist or is a directory.
        """
        path = Path(path)
        if not path.exists():
            raise InputValidationError(
                f"Input file not found: '{path}'. "
                "Check that the path is correct and the file exists."
            )
        if path.is_dir():
            raise InputValidationError(
                f"Expected a file but got a directory: '{path}'."
            )

    @staticmethod
    def assert_supported_extension(path: Path, extensions: Sequence[str]) -> None:
        """Assert that *path* has one of the allowed file extensions.

        Raises:
            InputValidationError: If the suffix is not in *extensions*.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        allowed = [ext.lower() for ext in extensions]
        if suffix not in allowed:
            raise InputValidationError(
                f"Unsupported file extension '{suffix}' for '{path.name}'. "
                f"Accepted extensions: {', '.join(allowed)}"
            )

    @staticmethod
    def assert_output_dir_writable(output_path: Path) -> None:
        """Create the parent directory of *output_path* if it is missing.

        Raises:
            OutputWriteError: If the directory cannot be created.
        """
        parent = Path(output_path).parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputWriteError(str(output_path), str(exc)) from exc

    @staticmethod
    def assert_columns_exist(
        df: object,  # pandas DataFrame — typed loosely to avoid hard dep
        required_columns: Sequence[str],
    ) -> None:
        """Assert that all *required_columns* are present in *df*.

        Raises:
            ColumnNotFoundError: On the first missing column found.
        """
        available = list(df.columns)  # type: ignore[union-attr]
        for col in required_columns:
            if col not in available:
                raise ColumnNotFoundError(col, available)

    @staticmethod
    def assert_system_known(code: str, registry: CRSRegistry = DEFAULT_REGISTRY) -> None:
        """Assert that *code* is a registered system.

        Raises:
            UnknownSystemError: If it is not.
        """
        registry.get(code)
