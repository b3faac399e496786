"""
ecuacoord — CRS Registry
=========================
Static catalogue of the coordinate reference systems supported for Ecuador.

The registry is an immutable value built once at import time
(:data:`DEFAULT_REGISTRY`) and passed by reference to every component that
needs it.  There is no mutation API, so concurrent readers need no locking.

Registered systems (in this order):

==============  ==========  ===========================================
Code            Kind        Notes
==============  ==========  ===========================================
``EPSG:4326``   geographic  WGS84 latitude / longitude
``SIRES-DMQ``   projected   Quito Metropolitan District local TM
``UTM-17N``     projected   WGS84 UTM zone 17, northern hemisphere
``UTM-17S``     projected   WGS84 UTM zone 17, southern hemisphere
``UTM-18N``     projected   WGS84 UTM zone 18, northern hemisphere
``UTM-18S``     projected   WGS84 UTM zone 18, southern hemisphere
==============  ==========  ===========================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from ecuacoord.exceptions import CRSError, UnknownSystemError

GEOGRAPHIC_CODE = "EPSG:4326"
MUNICIPAL_CODE = "SIRES-DMQ"


# ---------------------------------------------------------------------------
# Enums & data classes
# ---------------------------------------------------------------------------


class Unit(str, Enum):
    """Linear or angular unit of a system's coordinates."""

    DEGREES = "degrees"
    METERS = "meters"


class CRSKind(str, Enum):
    """Whether a system is geographic (lat/lng) or projected (easting/northing)."""

    GEOGRAPHIC = "geographic"
    PROJECTED = "projected"


@dataclass(frozen=True)
class ValidityWindow:
    """Axis-aligned plausibility region, expressed in the system's own units.

    Attributes:
        x_min: Minimum longitude / easting.
        x_max: Maximum longitude / easting.
        y_min: Minimum latitude / northing.
        y_max: Maximum latitude / northing.
        label: Region name used in validation messages.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    label: str

    def contains_x(self, x: float) -> bool:
        return self.x_min <= x <= self.x_max

    def contains_y(self, y: float) -> bool:
        return self.y_min <= y <= self.y_max

    def contains(self, x: float, y: float) -> bool:
        """``True`` if the point ``(x, y)`` falls inside the window."""
        return self.contains_x(x) and self.contains_y(y)


@dataclass(frozen=True)
class CRSDefinition:
    """Immutable description of one supported coordinate reference system.

    Attributes:
        code: Registry identifier (e.g. ``"UTM-17S"``).
        name: Human-readable name.
        short_name: Compact label for tables and map legends.
        unit: :class:`Unit` of the coordinates.
        kind: :class:`CRSKind`.
        description: One-line description of where the system is used.
        region: Region the system is intended for.
        proj_definition: PROJ parameter string handed to the projection engine.
        validity: Optional :class:`ValidityWindow` used for plausibility checks.
        example: A representative ``(x, y)`` point in this system.
    """

    code: str
    name: str
    short_name: str
    unit: Unit
    kind: CRSKind
    description: str
    region: str
    proj_definition: str
    validity: ValidityWindow | None = None
    example: tuple[float, float] | None = None

    @property
    def is_geographic(self) -> bool:
        return self.kind is CRSKind.GEOGRAPHIC


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class CRSRegistry:
    """Read-only, ordered collection of :class:`CRSDefinition` objects.

    Args:
        definitions: Systems in registration order.  Codes must be unique and
            exactly one system must be geographic.

    Raises:
        CRSError: On duplicate codes or a missing/ambiguous geographic system.

    Example::

        registry = CRSRegistry.ecuador()
        utm = registry.get("UTM-17S")
        [crs.code for crs in registry.list_systems()]
    """

    def __init__(self, definitions: Iterable[CRSDefinition]) -> None:
        ordered = tuple(definitions)
        by_code: dict[str, CRSDefinition] = {}
        for definition in ordered:
            if definition.code in by_code:
                raise CRSError(f"Duplicate CRS code in registry: '{definition.code}'")
            by_code[definition.code] = definition

        geographic = [d for d in ordered if d.is_geographic]
        if len(geographic) != 1:
            raise CRSError(
                f"Registry needs exactly one geographic system, got {len(geographic)}"
            )

        self._ordered: tuple[CRSDefinition, ...] = ordered
        self._by_code: Mapping[str, CRSDefinition] = MappingProxyType(by_code)
        self._geographic: CRSDefinition = geographic[0]

    @classmethod
    def ecuador(cls) -> CRSRegistry:
        """Build the fixed six-system catalogue used throughout the package."""
        return cls(_ECUADOR_SYSTEMS)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def list_systems(self) -> list[CRSDefinition]:
        """All systems in registration order."""
        return list(self._ordered)

    def get(self, code: str) -> CRSDefinition:
        """Return the definition for *code*.

        Raises:
            UnknownSystemError: If *code* is not registered.
        """
        try:
            return self._by_code[code]
        except KeyError:
            raise UnknownSystemError(code, self.codes()) from None

    def codes(self) -> list[str]:
        return [d.code for d in self._ordered]

    @property
    def geographic(self) -> CRSDefinition:
        """The registry's single geographic system."""
        return self._geographic

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __iter__(self) -> Iterator[CRSDefinition]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __repr__(self) -> str:
        return f"CRSRegistry({self.codes()!r})"


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

_ECUADOR_SYSTEMS: tuple[CRSDefinition, ...] = (
    CRSDefinition(
        code=GEOGRAPHIC_CODE,
        name="Geographic (WGS84)",
        short_name="Geographic",
        unit=Unit.DEGREES,
        kind=CRSKind.GEOGRAPHIC,
        description="Latitude and longitude in decimal degrees",
        region="Worldwide",
        proj_definition="+proj=longlat +datum=WGS84 +no_defs",
        # Typical extent of mainland Ecuador plus Galapagos.
        validity=ValidityWindow(-92.0, -75.0, -5.0, 2.0, "Ecuador"),
        example=(-78.5123, -0.2201),
    ),
    CRSDefinition(
        code=MUNICIPAL_CODE,
        name="SIRES-DMQ (Quito)",
        short_name="SIRES-DMQ",
        unit=Unit.METERS,
        kind=CRSKind.PROJECTED,
        description="Spatial reference system of the Quito Metropolitan District",
        region="Quito Metropolitan District",
        proj_definition=(
            "+proj=tmerc +lat_0=0 +lon_0=-78.5 +k=1.0004584 +x_0=500000 "
            "+y_0=10000000 +ellps=WGS84 +datum=WGS84 +units=m +no_defs"
        ),
        validity=ValidityWindow(450_000.0, 550_000.0, 9_950_000.0, 10_050_000.0, "SIRES-DMQ"),
        example=(499_450.0, 9_975_663.0),
    ),
    CRSDefinition(
        code="UTM-17N",
        name="UTM Zone 17 North",
        short_name="UTM 17N",
        unit=Unit.METERS,
        kind=CRSKind.PROJECTED,
        description="UTM 17N - northern Ecuador",
        region="Northern Ecuador",
        proj_definition="+proj=utm +zone=17 +north +datum=WGS84 +units=m +no_defs",
        example=(194_617.0, 24_367.0),
    ),
    CRSDefinition(
        code="UTM-17S",
        name="UTM Zone 17 South",
        short_name="UTM 17S",
        unit=Unit.METERS,
        kind=CRSKind.PROJECTED,
        description="UTM 17S - western Ecuador (Quito, Guayaquil)",
        region="Western Ecuador",
        proj_definition="+proj=utm +zone=17 +south +datum=WGS84 +units=m +no_defs",
        example=(694_617.0, 9_975_663.0),
    ),
    CRSDefinition(
        code="UTM-18N",
        name="UTM Zone 18 North",
        short_name="UTM 18N",
        unit=Unit.METERS,
        kind=CRSKind.PROJECTED,
        description="UTM 18N - north-eastern Ecuador",
        region="North-eastern Ecuador",
        proj_definition="+proj=utm +zone=18 +north +datum=WGS84 +units=m +no_defs",
        example=(294_617.0, 24_367.0),
    ),
    CRSDefinition(
        code="UTM-18S",
        name="UTM Zone 18 South",
        short_name="UTM 18S",
        unit=Unit.METERS,
        kind=CRSKind.PROJECTED,
        description="UTM 18S - eastern Ecuador (Amazon region)",
        region="Eastern Ecuador",
        proj_definition="+proj=utm +zone=18 +south +datum=WGS84 +units=m +no_defs",
        example=(794_617.0, 9_975_663.0),
    ),
)

DEFAULT_REGISTRY: CRSRegistry = CRSRegistry.ecuador()
