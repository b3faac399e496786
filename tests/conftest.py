"""Shared fixtures for the ecuacoord test suite."""

from __future__ import annotations

import logging

import pytest

from ecuacoord.models import GeographicPoint, ProjectedPoint, RawCoordinateRecord
from ecuacoord.projection import ProjectionAdapter
from ecuacoord.registry import CRSRegistry


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop console handlers a tool run attached to the package logger."""
    yield
    package_logger = logging.getLogger("ecuacoord")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


class RecordingEngine:
    """Projection engine double that records calls.

    Returns ``result`` for every call, or raises ``RuntimeError`` when the target
    definition contains one of the ``fail_on`` substrings.
    """

    def __init__(
        self,
        result: tuple[float, float] = (500_000.0, 9_975_000.0),
        fail_on: tuple[str, ...] = (),
    ) -> None:
        self.result = result
        self.fail_on = fail_on
        self.calls: list[tuple[str, str, float, float]] = []

    def transform(self, from_def: str, to_def: str, x: float, y: float) -> tuple[float, float]:
        self.calls.append((from_def, to_def, x, y))
        if any(token in to_def for token in self.fail_on):
            raise RuntimeError(f"engine refused {to_def}")
        return self.result


@pytest.fixture()
def registry() -> CRSRegistry:
    return CRSRegistry.ecuador()


@pytest.fixture()
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture()
def fake_adapter(registry: CRSRegistry, engine: RecordingEngine) -> ProjectionAdapter:
    """Adapter wired to :class:`RecordingEngine` (no pyproj involved)."""
    return ProjectionAdapter(registry, engine)


@pytest.fixture()
def quito_record() -> RawCoordinateRecord:
    """Plaza Grande, Quito, written with Spanish decimal commas."""
    return RawCoordinateRecord(
        GeographicPoint(latitude="-0,2201", longitude="-78,5123"),
        id="Q1",
        name="Plaza Grande",
        description="Centro histórico",
    )


@pytest.fixture()
def guayaquil_record() -> RawCoordinateRecord:
    return RawCoordinateRecord(
        GeographicPoint(latitude=-2.1894, longitude=-79.8891), id="G1", name="Guayaquil"
    )


@pytest.fixture()
def sires_record() -> RawCoordinateRecord:
    return RawCoordinateRecord(
        ProjectedPoint(easting="499.450,00", northing="9.975.663,00", system="SIRES-DMQ"),
        name="Survey mark",
    )
