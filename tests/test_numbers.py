"""
Tests — Locale-Tolerant Number Parsing
=======================================
Unit tests for :func:`ecuacoord.numbers.parse_number`.
"""

from __future__ import annotations

import math

import pytest

from ecuacoord.numbers import is_nan, parse_number


class TestParseNumberSeparators:
    """Decimal comma, decimal point and thousands separators."""

    @pytest.mark.parametrize("text", ["1.234,56", "1,234.56", "1234,56", "1234.56"])
    def test_both_notations_agree(self, text: str) -> None:
        assert parse_number(text) == pytest.approx(1234.56)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("-0,2201", -0.2201),
            ("-78,512345", -78.512345),
            ("9.975.663,12", 9_975_663.12),
            ("9,975,663.12", 9_975_663.12),
            ("1,234,567", 1_234_567.0),
            ("1,2345678", 12_345_678.0),
            ("1.234.567", 1_234.567),
            ("1.234.5678", 12_345_678.0),
            ("  -78.5  ", -78.5),
            ("500000", 500_000.0),
        ],
    )
    def test_separator_rules(self, text: str, expected: float) -> None:
        assert parse_number(text) == pytest.approx(expected)

    def test_single_comma_with_three_digits_is_decimal(self) -> None:
        """One comma followed by 1-6 digits is always a decimal comma."""
        assert parse_number("1,234") == pytest.approx(1.234)


class TestParseNumberPassThroughAndNaN:
    """Non-text inputs and unparseable text."""

    def test_numbers_pass_through(self) -> None:
        assert parse_number(5) == 5.0
        assert parse_number(-0.5) == -0.5
        assert isinstance(parse_number(5), float)

    @pytest.mark.parametrize("value", ["", "   ", "abc", "12a", None, True, [1.0], {"x": 1}])
    def test_not_a_number(self, value: object) -> None:
        assert math.isnan(parse_number(value))

    def test_is_nan_helper(self) -> None:
        assert is_nan(parse_number("nope"))
        assert not is_nan(parse_number("1,5"))
