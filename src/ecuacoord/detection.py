"""
ecuacoord — Target System Auto-Detection
=========================================
Suggests the most appropriate projected system for a WGS84 point.

This is a convenience heuristic for pre-filling a target system; callers may
always override its choice.
"""

from __future__ import annotations

import math

from ecuacoord.exceptions import ParseError
from ecuacoord.numbers import parse_number
from ecuacoord.registry import MUNICIPAL_CODE

# Quito metropolitan bounding box, degrees.
METRO_LAT_RANGE = (-0.5, 0.5)
METRO_LNG_RANGE = (-79.0, -78.0)

# UTM zone 17 spans -84°..-78°, zone 18 spans -78°..-72°.
ZONE_SPLIT_MERIDIAN = -78.0


def detect_best_system(lat: float | str, lng: float | str) -> str:
    """Return the registry code best suited to the point ``(lat, lng)``.

    Points inside the Quito metropolitan box map to ``SIRES-DMQ``.  Anything
    else picks UTM zone 17 west of the -78° meridian (zone 18 otherwise) and
    the northern variant for ``lat >= 0`` (southern otherwise).

    Args:
        lat: Latitude in decimal degrees (text is parsed).
        lng: Longitude in decimal degrees (text is parsed).

    Raises:
        ParseError: If either value is not a number.

    Example::

        >>> detect_best_system(-0.22, -78.51)
        'SIRES-DMQ'
        >>> detect_best_system(-2.19, -79.89)
        'UTM-17S'
    """
    lat_value = parse_number(lat)
    lng_value = parse_number(lng)
    if math.isnan(lat_value) or math.isnan(lng_value):
        raise ParseError(f"Cannot detect a system for non-numeric point ({lat!r}, {lng!r})")

    in_metro = (
        METRO_LAT_RANGE[0] <= lat_value <= METRO_LAT_RANGE[1]
        and METRO_LNG_RANGE[0] <= lng_value <= METRO_LNG_RANGE[1]
    )
    if in_metro:
        return MUNICIPAL_CODE

    zone = 17 if lng_value < ZONE_SPLIT_MERIDIAN else 18
    hemisphere = "N" if lat_value >= 0 else "S"
    return f"UTM-{zone}{hemisphere}"
