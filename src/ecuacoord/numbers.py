"""
ecuacoord — Locale-Tolerant Number Parsing
===========================================
Normalises coordinate text written with either decimal mark into a float.

Field surveys in the region mix Spanish-style (``1.234,56``) and
English-style (``1,234.56``) notation, sometimes within the same sheet.
:func:`parse_number` is applied wherever coordinate text enters the package
(manual entry, batch records, CSV files) so both resolve identically::

    >>> parse_number("1.234,56") == parse_number("1,234.56") == 1234.56
    True
"""

from __future__ import annotations

import math
import re

_DIGITS = re.compile(r"^\d+$")

NaN = float("nan")


def parse_number(value: object) -> float:
    """Parse *value* into a float, returning ``NaN`` when it is not a number.

    Rules, applied in order:

    1. Both ``.`` and ``,`` present — the later separator is the decimal
       mark, the earlier one is a thousands separator and is stripped.
    2. Only ``,`` present — a single comma followed by 1–6 digits is a
       decimal comma; otherwise every comma is a thousands separator.
    3. Only ``.`` present more than once — the last dot is the decimal mark
       when followed by at most three digits, otherwise all dots are
       thousands separators.
    4. Whitespace is trimmed and empty text yields ``NaN``.

    Args:
        value: A ``str``, ``int`` or ``float``.  Anything else is ``NaN``.

    Returns:
        The parsed float, or ``NaN``.
    """
    if isinstance(value, bool):
        return NaN
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return NaN

    cleaned = value.strip()
    if not cleaned:
        return NaN

    has_dot = "." in cleaned
    has_comma = "," in cleaned

    if has_dot and has_comma:
        if cleaned.rfind(".") > cleaned.rfind(","):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(".", "").replace(",", ".")
    elif has_comma:
        head, _, tail = cleaned.partition(",")
        if cleaned.count(",") == 1 and 1 <= len(tail) <= 6 and _DIGITS.match(tail):
            cleaned = f"{head}.{tail}"
        else:
            cleaned = cleaned.replace(",", "")
    elif cleaned.count(".") > 1:
        head, _, tail = cleaned.rpartition(".")
        if len(tail) <= 3 and _DIGITS.match(tail):
            cleaned = f"{head.replace('.', '')}.{tail}"
        else:
            cleaned = cleaned.replace(".", "")

    try:
        return float(cleaned)
    except ValueError:
        return NaN


def is_nan(value: float) -> bool:
    """Return ``True`` when *value* is the parser's "not a number" result."""
    return math.isnan(value)
