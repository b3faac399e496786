"""
Tests — Precision Classifier
=============================
"""

from __future__ import annotations

import math

import pytest

from ecuacoord.precision import (
    PrecisionAssessment,
    PrecisionClassifier,
    PrecisionThresholds,
    QualityBand,
)


@pytest.fixture()
def classifier() -> PrecisionClassifier:
    return PrecisionClassifier(PrecisionThresholds(excellent=0.01, very_good=0.05, good=0.25))


class TestPrecisionClassifier:
    @pytest.mark.parametrize(
        ("metric", "band"),
        [
            (0.0, QualityBand.EXCELLENT),
            (0.01, QualityBand.EXCELLENT),
            (0.03, QualityBand.VERY_GOOD),
            (0.05, QualityBand.VERY_GOOD),
            (0.2, QualityBand.GOOD),
            (0.25, QualityBand.GOOD),
            (1.0, QualityBand.POOR),
        ],
    )
    def test_bands(self, classifier: PrecisionClassifier, metric: float, band: QualityBand) -> None:
        assert classifier.classify(metric) is band

    def test_assess(self, classifier: PrecisionClassifier) -> None:
        assert classifier.assess(0.03) == PrecisionAssessment(0.03, QualityBand.VERY_GOOD)

    @pytest.mark.parametrize("metric", [-0.1, math.nan])
    def test_invalid_metric(self, classifier: PrecisionClassifier, metric: float) -> None:
        with pytest.raises(ValueError):
            classifier.classify(metric)

    def test_band_labels(self) -> None:
        assert [b.value for b in QualityBand] == ["Excellent", "Very good", "Good", "Poor"]


class TestPrecisionThresholds:
    def test_decreasing_limits_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-decreasing"):
            PrecisionThresholds(0.5, 0.1, 1.0)

    def test_negative_limits_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            PrecisionThresholds(-1.0, 0.1, 1.0)
