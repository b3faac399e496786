"""
ecuacoord — Projection Adapter
===============================
Thin layer between the rest of the package and the cartographic projection
engine (pyproj / PROJ).

Architecture:
    ``ProjectionEngine`` is the strategy interface — anything that turns a
    coordinate pair from one PROJ definition into another.  ``PyprojEngine``
    is the production implementation.  ``ProjectionAdapter`` resolves registry
    codes, parses text input and turns every engine failure into a
    :class:`TransformOutcome` instead of letting it escape.

Usage::

    from ecuacoord.projection import ProjectionAdapter

    outcome = ProjectionAdapter().transform(-78.51, -0.22, "EPSG:4326", "UTM-17S")
    if outcome.success:
        print(outcome.x, outcome.y)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from pyproj import CRS, Transformer

from ecuacoord.exceptions import TransformError
from ecuacoord.numbers import parse_number
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry

logger = logging.getLogger("ecuacoord.projection")


# ---------------------------------------------------------------------------
# Engine strategy
# ---------------------------------------------------------------------------


class ProjectionEngine(Protocol):
    """Anything able to move a 2-D point between two PROJ definitions."""

    def transform(
        self, from_def: str, to_def: str, x: float, y: float
    ) -> tuple[float, float]:
        """Return the transformed ``(x, y)`` or raise on failure."""
        ...


class PyprojEngine:
    """Projection engine backed by :mod:`pyproj`.

    ``always_xy=True`` keeps every pair in (longitude/easting,
    latitude/northing) order regardless of the axis order a CRS declares.
    ``errcheck=True`` makes PROJ raise instead of silently returning ``inf``.

    Built transformers are kept per definition pair; they hold no results.
    """

    def __init__(self) -> None:
        self._transformers: dict[tuple[str, str], Transformer] = {}

    def transform(
        self, from_def: str, to_def: str, x: float, y: float
    ) -> tuple[float, float]:
        transformer = self._transformer(from_def, to_def)
        new_x, new_y = transformer.transform(x, y, errcheck=True)
        if not (math.isfinite(new_x) and math.isfinite(new_y)):
            raise TransformError(f"non-finite result ({new_x}, {new_y})")
        return float(new_x), float(new_y)

    def _transformer(self, from_def: str, to_def: str) -> Transformer:
        key = (from_def, to_def)
        transformer = self._transformers.get(key)
        if transformer is None:
            logger.debug("Building transformer %s → %s", from_def, to_def)
            transformer = Transformer.from_crs(
                CRS.from_user_input(from_def),
                CRS.from_user_input(to_def),
                always_xy=True,
            )
            self._transformers[key] = transformer
        return transformer


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TransformOutcome:
    """Result of one point transformation.

    Attributes:
        success: ``True`` if the engine produced a coordinate pair.
        x: Transformed longitude / easting, or ``None`` on failure.
        y: Transformed latitude / northing, or ``None`` on failure.
        error: Human-readable failure reason, or ``None`` on success.
    """

    success: bool
    x: float | None = None
    y: float | None = None
    error: str | None = None

    @classmethod
    def ok(cls, x: float, y: float) -> TransformOutcome:
        return cls(success=True, x=x, y=y)

    @classmethod
    def failed(cls, reason: str) -> TransformOutcome:
        return cls(success=False, error=f"Transformation error: {reason}")

    def unwrap(self) -> tuple[float, float]:
        """Return ``(x, y)`` or raise :class:`TransformError` with :attr:`error`."""
        if not self.success or self.x is None or self.y is None:
            raise TransformError(self.error or "Transformation error")
        return self.x, self.y


# ---------------------------------------------------------------------------
# Adapter
# ---------------------------------------------------------------------------


class ProjectionAdapter:
    """Transform single points between registry systems.

    Args:
        registry: The :class:`CRSRegistry` used to resolve codes.
        engine: A :class:`ProjectionEngine`.  Defaults to :class:`PyprojEngine`.
    """

    def __init__(
        self,
        registry: CRSRegistry = DEFAULT_REGISTRY,
        engine: ProjectionEngine | None = None,
    ) -> None:
        self.registry = registry
        self.engine: ProjectionEngine = engine or PyprojEngine()

    def transform(
        self,
        x: float | str,
        y: float | str,
        from_code: str,
        to_code: str,
    ) -> TransformOutcome:
        """Transform ``(x, y)`` from *from_code* to *to_code*.

        Text values go through :func:`~ecuacoord.numbers.parse_number` first.

        Args:
            x: Longitude / easting.
            y: Latitude / northing.
            from_code: Registry code of the source system.
            to_code: Registry code of the target system.

        Returns:
            A :class:`TransformOutcome`.  Engine exceptions never propagate.

        Raises:
            UnknownSystemError: If either code is not registered.
        """
        source = self.registry.get(from_code)
        target = self.registry.get(to_code)

        parsed_x = parse_number(x)
        parsed_y = parse_number(y)
        if math.isnan(parsed_x) or math.isnan(parsed_y):
            return TransformOutcome.failed("invalid coordinates, could not convert to numbers")

        try:
            new_x, new_y = self.engine.transform(
                source.proj_definition, target.proj_definition, parsed_x, parsed_y
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Engine rejected %s → %s for (%s, %s): %s",
                         from_code, to_code, parsed_x, parsed_y, exc)
            return TransformOutcome.failed(str(exc) or exc.__class__.__name__)

        return TransformOutcome.ok(new_x, new_y)
