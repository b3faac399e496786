"""
Tests — Result Statistics & Display Formatting
===============================================
"""

from __future__ import annotations

import math

import pytest

from ecuacoord.batch import BatchConfig, transform_batch
from ecuacoord.formatting import format_coordinate, format_for_copy
from ecuacoord.models import GeographicPoint, RawCoordinateRecord, RecordStatus, ResultRecord
from ecuacoord.precision import PrecisionClassifier, PrecisionThresholds, QualityBand
from ecuacoord.projection import ProjectionAdapter
from ecuacoord.stats import Distance, haversine_distance, summarize_results


class TestSummarizeResults:
    def test_counts(self, fake_adapter: ProjectionAdapter) -> None:
        records = [
            RawCoordinateRecord(GeographicPoint(-0.2, -78.5)),
            RawCoordinateRecord(GeographicPoint(-0.3, -78.6)),
            RawCoordinateRecord(GeographicPoint("x", -78.6)),
        ]
        config = BatchConfig(
            precision_estimator=lambda leg: 0.0,
            precision_classifier=PrecisionClassifier(PrecisionThresholds(0.01, 0.05, 0.25)),
        )
        stats = summarize_results(transform_batch(records, config, adapter=fake_adapter).results)

        assert (stats.total, stats.successful, stats.failed) == (3, 2, 1)
        assert stats.success_rate == pytest.approx(200 / 3)
        assert stats.quality_counts[QualityBand.EXCELLENT] == 2
        assert stats.quality_counts[QualityBand.POOR] == 0
        assert stats.excellent_rate == pytest.approx(200 / 3)

    def test_empty(self) -> None:
        stats = summarize_results([])
        assert stats.total == 0
        assert stats.success_rate == 0.0
        assert stats.excellent_rate == 0.0


class TestHaversine:
    def test_quito_guayaquil(self) -> None:
        distance = haversine_distance(-0.2201, -78.5123, -2.1894, -79.8891)
        assert 260_000 < distance.meters < 280_000
        assert distance.formatted.endswith(" km")

    def test_same_point(self) -> None:
        assert haversine_distance(-0.2, -78.5, -0.2, -78.5).meters == 0.0

    def test_short_distance_in_meters(self) -> None:
        assert Distance(512.345).formatted == "512.35 m"
        assert Distance(1500.0).kilometers == 1.5


class TestFormatCoordinate:
    @pytest.mark.parametrize(
        ("value", "kind", "expected"),
        [
            (-0.2201, "lat", "-0.220100°"),
            (-78.5123, "lng", "-78.512300°"),
            (498_630.1234, "projected", "498630.12 m"),
            (1.5, "decimal", "1.500000"),
            (None, "lat", "-"),
            (math.nan, "projected", "-"),
        ],
    )
    def test_formats(self, value: float | None, kind: str, expected: str) -> None:
        assert format_coordinate(value, kind) == expected  # type: ignore[arg-type]


class TestFormatForCopy:
    def test_geographic_to_projected(self, fake_adapter: ProjectionAdapter) -> None:
        record = RawCoordinateRecord(GeographicPoint(-0.2201, -78.5123), name="Plaza")
        result = transform_batch([record], BatchConfig(target_crs="SIRES-DMQ"),
                                 adapter=fake_adapter).results[0]
        assert format_for_copy(result).split("\n") == [
            "Plaza",
            "Source coordinates (EPSG:4326):",
            "  Latitude: -0.220100°",
            "  Longitude: -78.512300°",
            "",
            "Transformed coordinates (SIRES-DMQ):",
            "  Easting (X): 500000.00 m",
            "  Northing (Y): 9975000.00 m",
        ]

    def test_error_result_is_empty(self) -> None:
        result = ResultRecord(id="x", name="x", status=RecordStatus.ERROR, error="boom")
        assert format_for_copy(result) == ""
