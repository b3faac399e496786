"""
Tests — Projection Adapter
===========================
Unit tests for :class:`ecuacoord.projection.ProjectionAdapter`.

Numeric assertions use the real pyproj engine; call-count and failure
mapping checks use a recording engine double.
"""

from __future__ import annotations

import itertools

import pytest

from conftest import RecordingEngine
from ecuacoord.exceptions import TransformError, UnknownSystemError
from ecuacoord.projection import ProjectionAdapter, PyprojEngine, TransformOutcome
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry

QUITO = (-78.5123, -0.2201)  # (lng, lat)
GUAYAQUIL = (-79.8891, -2.1894)


@pytest.fixture(scope="module")
def adapter() -> ProjectionAdapter:
    return ProjectionAdapter(CRSRegistry.ecuador(), PyprojEngine())


class TestPyprojTransforms:
    """Real transformations between registry systems."""

    def test_quito_lands_inside_sires_window(self, adapter: ProjectionAdapter) -> None:
        outcome = adapter.transform(*QUITO, "EPSG:4326", "SIRES-DMQ")
        assert outcome.success
        assert outcome.error is None
        # Quito sits just west of the -78.5 central meridian, south of the equator.
        assert 490_000 < outcome.x < 500_000
        assert 9_970_000 < outcome.y < 9_980_000

    def test_guayaquil_utm_17s(self, adapter: ProjectionAdapter) -> None:
        outcome = adapter.transform(*GUAYAQUIL, "EPSG:4326", "UTM-17S")
        assert outcome.success
        assert 600_000 < outcome.x < 650_000
        assert 9_740_000 < outcome.y < 9_770_000

    def test_round_trip_through_sires(self, adapter: ProjectionAdapter) -> None:
        forward = adapter.transform(*QUITO, "EPSG:4326", "SIRES-DMQ")
        back = adapter.transform(forward.x, forward.y, "SIRES-DMQ", "EPSG:4326")
        assert back.x == pytest.approx(QUITO[0], abs=1e-8)
        assert back.y == pytest.approx(QUITO[1], abs=1e-8)

    @pytest.mark.parametrize(
        ("first", "second"), list(itertools.permutations(DEFAULT_REGISTRY.codes(), 2))
    )
    def test_round_trip_between_any_two_systems(
        self, adapter: ProjectionAdapter, first: str, second: str
    ) -> None:
        start = adapter.transform(*QUITO, "EPSG:4326", first).unwrap()
        there = adapter.transform(*start, first, second).unwrap()
        back = adapter.transform(*there, second, first).unwrap()
        assert back[0] == pytest.approx(start[0], abs=1e-6)
        assert back[1] == pytest.approx(start[1], abs=1e-6)

    def test_text_input_is_parsed(self, adapter: ProjectionAdapter) -> None:
        from_text = adapter.transform("-78,5123", "-0,2201", "EPSG:4326", "UTM-17S")
        from_float = adapter.transform(*QUITO, "EPSG:4326", "UTM-17S")
        assert from_text.x == pytest.approx(from_float.x)
        assert from_text.y == pytest.approx(from_float.y)

    def test_impossible_latitude_is_a_failed_outcome(self, adapter: ProjectionAdapter) -> None:
        outcome = adapter.transform(-78.5, 95.0, "EPSG:4326", "UTM-17S")
        assert not outcome.success
        assert outcome.x is None and outcome.y is None
        assert outcome.error.startswith("Transformation error: ")


class TestAdapterFailureMapping:
    """Failures become outcomes; unknown codes raise."""

    def test_non_numeric_input_skips_engine(self, registry: CRSRegistry) -> None:
        engine = RecordingEngine()
        outcome = ProjectionAdapter(registry, engine).transform(
            "abc", "-0.22", "EPSG:4326", "UTM-17S"
        )
        assert outcome == TransformOutcome(
            success=False,
            error="Transformation error: invalid coordinates, could not convert to numbers",
        )
        assert engine.calls == []

    def test_engine_exception_is_captured(self, registry: CRSRegistry) -> None:
        engine = RecordingEngine(fail_on=("+zone=17",))
        outcome = ProjectionAdapter(registry, engine).transform(
            -78.5, -0.2, "EPSG:4326", "UTM-17S"
        )
        assert not outcome.success
        assert outcome.error == f"Transformation error: engine refused {registry.get('UTM-17S').proj_definition}"

    def test_engine_receives_proj_definitions(self, registry: CRSRegistry) -> None:
        engine = RecordingEngine(result=(1.0, 2.0))
        outcome = ProjectionAdapter(registry, engine).transform(
            "499.450,00", 9_975_663, "SIRES-DMQ", "EPSG:4326"
        )
        assert outcome == TransformOutcome.ok(1.0, 2.0)
        assert engine.calls == [
            (
                registry.get("SIRES-DMQ").proj_definition,
                registry.get("EPSG:4326").proj_definition,
                499_450.0,
                9_975_663.0,
            )
        ]

    @pytest.mark.parametrize(("source", "target"), [("UTM-19S", "EPSG:4326"), ("EPSG:4326", "X")])
    def test_unknown_code_raises(self, registry: CRSRegistry, source: str, target: str) -> None:
        engine = RecordingEngine()
        with pytest.raises(UnknownSystemError):
            ProjectionAdapter(registry, engine).transform(1.0, 2.0, source, target)
        assert engine.calls == []


class TestTransformOutcome:
    def test_unwrap_success(self) -> None:
        assert TransformOutcome.ok(1.5, 2.5).unwrap() == (1.5, 2.5)

    def test_unwrap_failure_raises_with_message(self) -> None:
        with pytest.raises(TransformError, match="Transformation error: boom"):
            TransformOutcome.failed("boom").unwrap()
