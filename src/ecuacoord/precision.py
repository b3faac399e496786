"""
ecuacoord — Precision Classifier
=================================
Maps a numeric deviation metric onto a qualitative quality band.

The package does not define how the deviation itself is computed, nor the
band limits: both are supplied by the integrator.  Lower deviations are
better::

    classifier = PrecisionClassifier(PrecisionThresholds(0.01, 0.05, 0.25))
    classifier.classify(0.03)   # QualityBand.VERY_GOOD
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from ecuacoord.models import TransformationLeg


class QualityBand(str, Enum):
    """Qualitative label attached to a result's precision."""

    EXCELLENT = "Excellent"
    VERY_GOOD = "Very good"
    GOOD = "Good"
    POOR = "Poor"


@dataclass(frozen=True)
class PrecisionThresholds:
    """Upper deviation limits (inclusive) of each band.

    Raises:
        ValueError: If a limit is negative / NaN or the limits decrease.
    """

    excellent: float
    very_good: float
    good: float

    def __post_init__(self) -> None:
        limits = (self.excellent, self.very_good, self.good)
        if any(math.isnan(v) or v < 0 for v in limits):
            raise ValueError(f"Precision thresholds must be non-negative numbers: {limits}")
        if not self.excellent <= self.very_good <= self.good:
            raise ValueError(
                f"Precision thresholds must be non-decreasing "
                f"(excellent <= very_good <= good): {limits}"
            )


@dataclass(frozen=True)
class PrecisionAssessment:
    """Deviation value and the band it falls into."""

    value: float
    quality: QualityBand


class PrecisionClassifier:
    """Classify deviation metrics with caller-supplied thresholds."""

    def __init__(self, thresholds: PrecisionThresholds) -> None:
        self.thresholds = thresholds

    def classify(self, metric: float) -> QualityBand:
        """Return the :class:`QualityBand` for *metric*.

        Raises:
            ValueError: If *metric* is NaN or negative.
        """
        if math.isnan(metric) or metric < 0:
            raise ValueError(f"Deviation metric must be a non-negative number, got {metric}")
        t = self.thresholds
        if metric <= t.excellent:
            return QualityBand.EXCELLENT
        if metric <= t.very_good:
            return QualityBand.VERY_GOOD
        if metric <= t.good:
            return QualityBand.GOOD
        return QualityBand.POOR

    def assess(self, metric: float) -> PrecisionAssessment:
        return PrecisionAssessment(value=metric, quality=self.classify(metric))


# Computes the deviation metric for a finished leg; provided by the integrator.
DeviationEstimator = Callable[["TransformationLeg"], float]
