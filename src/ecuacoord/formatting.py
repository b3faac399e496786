"""
ecuacoord — Display Formatting
===============================
Plain-text renderings of coordinates and results for terminals and clipboards.
"""

from __future__ import annotations

import math
from typing import Literal

from ecuacoord.models import ResultRecord
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry

CoordinateKind = Literal["decimal", "lat", "lng", "projected"]


def format_coordinate(
    value: float | None, kind: CoordinateKind = "decimal", precision: int = 6
) -> str:
    """Format one coordinate value; missing or NaN values render as ``-``.

    ``lat``/``lng`` get a degree sign, ``projected`` values are shown in
    meters with two decimals.
    """
    if value is None or math.isnan(value):
        return "-"
    if kind in ("lat", "lng"):
        return f"{value:.{precision}f}°"
    if kind == "projected":
        return f"{value:.2f} m"
    return f"{value:.{precision}f}"


def _describe(x: float, y: float, code: str, registry: CRSRegistry) -> list[str]:
    if code in registry and registry.get(code).is_geographic:
        return [
            f"  Latitude: {format_coordinate(y, 'lat')}",
            f"  Longitude: {format_coordinate(x, 'lng')}",
        ]
    return [
        f"  Easting (X): {format_coordinate(x, 'projected')}",
        f"  Northing (Y): {format_coordinate(y, 'projected')}",
    ]


def format_for_copy(result: ResultRecord, registry: CRSRegistry = DEFAULT_REGISTRY) -> str:
    """Multi-line summary of a result's source and target coordinates.

    Returns an empty string for results without a transformation.
    """
    leg = result.transformation
    if leg is None:
        return ""

    lines = [result.name or "Point", f"Source coordinates ({leg.source.crs}):"]
    lines += _describe(leg.source.x, leg.source.y, leg.source.crs, registry)
    lines += ["", f"Transformed coordinates ({leg.target.crs}):"]
    lines += _describe(leg.target.x, leg.target.y, leg.target.crs, registry)
    return "\n".join(lines)
