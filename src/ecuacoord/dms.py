"""
ecuacoord — Degrees / Minutes / Seconds
========================================
Conversions between decimal degrees and DMS notation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

Axis = Literal["lat", "lng"]


@dataclass(frozen=True)
class DMS:
    """Degrees-minutes-seconds breakdown of one decimal-degree value.

    Attributes:
        degrees: Whole degrees (absolute value).
        minutes: Whole minutes of the remainder.
        seconds: Seconds of the remainder, rounded to three decimals.
        direction: Hemisphere letter (``N``/``S`` or ``E``/``W``).
        decimal: The original signed decimal value.
    """

    degrees: int
    minutes: int
    seconds: float
    direction: str
    decimal: float

    @property
    def formatted(self) -> str:
        return f"{self.degrees}° {self.minutes}' {self.seconds:.3f}\" {self.direction}"

    def to_dict(self) -> dict[str, object]:
        return {
            "degrees": self.degrees,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "direction": self.direction,
            "formatted": self.formatted,
            "decimal": self.decimal,
        }


@dataclass(frozen=True)
class DMSPair:
    """DMS breakdown of a geographic point."""

    lat: DMS
    lng: DMS


def decimal_to_dms(value: float, axis: Axis = "lat") -> DMS:
    """Break *value* into floor-degrees, floor-minutes and seconds.

    Args:
        value: Signed decimal degrees.
        axis: ``"lat"`` for N/S hemisphere letters, ``"lng"`` for E/W.

    Example::

        >>> decimal_to_dms(-0.22, "lat").formatted
        '0° 13\\' 12.000" S'
    """
    magnitude = abs(value)
    degrees = math.floor(magnitude)
    minutes_total = (magnitude - degrees) * 60
    minutes = math.floor(minutes_total)
    seconds = (minutes_total - minutes) * 60

    if axis == "lat":
        direction = "N" if value >= 0 else "S"
    else:
        direction = "E" if value >= 0 else "W"

    return DMS(
        degrees=int(degrees),
        minutes=int(minutes),
        seconds=round(seconds, 3),
        direction=direction,
        decimal=value,
    )


def dms_to_decimal(
    degrees: float, minutes: float, seconds: float, direction: str
) -> float:
    """Combine DMS parts into signed decimal degrees (``S``/``W`` negative)."""
    decimal = abs(degrees) + abs(minutes) / 60 + abs(seconds) / 3600
    if direction.upper() in ("S", "W"):
        decimal = -decimal
    return decimal


def point_to_dms(lng: float, lat: float) -> DMSPair:
    """DMS breakdown of a geographic ``(lng, lat)`` pair."""
    return DMSPair(lat=decimal_to_dms(lat, "lat"), lng=decimal_to_dms(lng, "lng"))
