"""
Tests — Coordinate & Input Validators
======================================
Unit tests for :mod:`ecuacoord.validators`.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from ecuacoord.exceptions import (
    ColumnNotFoundError,
    InputValidationError,
    UnknownSystemError,
    ValidationError,
)
from ecuacoord.validators import Validators, validate_geographic, validate_projected


class TestValidateGeographic:
    """Absolute ranges, numeric checks and the Ecuador window."""

    def test_quito_is_valid(self) -> None:
        result = validate_geographic("-0,2201", "-78,5123")
        assert result.is_valid
        assert result.messages == []
        assert result.parsed_y == pytest.approx(-0.2201)
        assert result.parsed_x == pytest.approx(-78.5123)

    def test_non_numeric_values(self) -> None:
        result = validate_geographic("abc", "")
        assert result.messages == [
            "Latitude must be a valid number",
            "Longitude must be a valid number",
        ]
        assert result.warnings == []

    def test_absolute_range(self) -> None:
        result = validate_geographic(95, -200)
        assert "Latitude must be between -90 and 90 degrees" in result.messages
        assert "Longitude must be between -180 and 180 degrees" in result.messages
        assert result.has_hard_errors

    def test_regional_window_is_reported_as_warning(self) -> None:
        result = validate_geographic(10.0, -74.0)
        assert not result.is_valid
        assert result.warnings == [
            "Latitude outside the typical range of Ecuador (-5° to 2°)",
            "Longitude outside the typical range of Ecuador (-92° to -75°)",
        ]
        assert result.messages == result.warnings
        assert not result.has_hard_errors

    def test_window_edges_are_inclusive(self) -> None:
        assert validate_geographic(-5.0, -92.0).is_valid
        assert validate_geographic(2.0, -75.0).is_valid

    def test_raise_for_errors(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_geographic("x", -78.5).raise_for_errors()
        assert exc_info.value.messages == ["Latitude must be a valid number"]
        validate_geographic(-0.2, -78.5).raise_for_errors()


class TestValidateProjected:
    """Numeric checks and the SIRES-DMQ window."""

    def test_sires_inside_window(self) -> None:
        result = validate_projected("499.450,00", "9.975.663,00", "SIRES-DMQ")
        assert result.is_valid
        assert result.parsed_x == pytest.approx(499_450.0)

    def test_sires_outside_window(self) -> None:
        result = validate_projected(400_000, 10_100_000, "SIRES-DMQ")
        assert result.warnings == [
            "Easting outside the typical range of SIRES-DMQ (450000-550000)",
            "Northing outside the typical range of SIRES-DMQ (9950000-10050000)",
        ]

    def test_non_numeric(self) -> None:
        result = validate_projected("abc", 1, "UTM-17S")
        assert result.messages == ["Easting must be a valid number"]

    def test_utm_has_no_window(self) -> None:
        assert validate_projected(1, 1, "UTM-17S").is_valid

    def test_unknown_system_raises(self) -> None:
        with pytest.raises(UnknownSystemError):
            validate_projected(1, 1, "UTM-19S")


class TestValidatorsNamespace:
    """Assertion-style preconditions used by the file tool."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputValidationError, match="not found"):
            Validators.assert_file_exists(tmp_path / "missing.csv")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputValidationError, match="directory"):
            Validators.assert_file_exists(tmp_path)

    def test_extension(self, tmp_path: Path) -> None:
        Validators.assert_supported_extension(tmp_path / "a.CSV", [".csv"])
        with pytest.raises(InputValidationError, match="Unsupported file extension"):
            Validators.assert_supported_extension(tmp_path / "a.shp", [".csv"])

    def test_output_dir_created(self, tmp_path: Path) -> None:
        target = tmp_path / "nested" / "deeper" / "out.csv"
        Validators.assert_output_dir_writable(target)
        assert target.parent.is_dir()

    def test_columns(self) -> None:
        df = pd.DataFrame({"latitude": [], "longitude": []})
        Validators.assert_columns_exist(df, ["latitude", "longitude"])
        with pytest.raises(ColumnNotFoundError) as exc_info:
            Validators.assert_columns_exist(df, ["latitude", "este"])
        assert exc_info.value.column == "este"
        assert exc_info.value.available == ["latitude", "longitude"]

    def test_system_known(self) -> None:
        Validators.assert_system_known("SIRES-DMQ")
        with pytest.raises(UnknownSystemError):
            Validators.assert_system_known("EPSG:32717")
