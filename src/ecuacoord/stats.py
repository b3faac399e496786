"""
ecuacoord — Result Statistics
==============================
Summary counts over a result collection and great-circle distances between
geographic points.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from ecuacoord.models import RecordStatus, ResultRecord
from ecuacoord.precision import QualityBand

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class TransformationStats:
    """Counts over a result collection.

    Attributes:
        total: Number of results.
        successful: Results with ``success`` status.
        failed: Results with ``error`` status.
        success_rate: ``successful / total`` as a percentage (0 when empty).
        quality_counts: Number of results per :class:`QualityBand`.
    """

    total: int
    successful: int
    failed: int
    success_rate: float
    quality_counts: dict[QualityBand, int]

    @property
    def excellent_rate(self) -> float:
        if not self.total:
            return 0.0
        return self.quality_counts[QualityBand.EXCELLENT] / self.total * 100


def summarize_results(results: Sequence[ResultRecord]) -> TransformationStats:
    """Count successes, failures and quality bands across *results*."""
    total = len(results)
    successful = sum(1 for r in results if r.status is RecordStatus.SUCCESS)
    failed = sum(1 for r in results if r.status is RecordStatus.ERROR)

    quality_counts = {band: 0 for band in QualityBand}
    for result in results:
        if result.precision is not None:
            quality_counts[result.precision.quality] += 1

    return TransformationStats(
        total=total,
        successful=successful,
        failed=failed,
        success_rate=(successful / total * 100) if total else 0.0,
        quality_counts=quality_counts,
    )


@dataclass(frozen=True)
class Distance:
    """Distance between two points."""

    meters: float

    @property
    def kilometers(self) -> float:
        return self.meters / 1000

    @property
    def formatted(self) -> str:
        if self.meters > 1000:
            return f"{self.kilometers:.2f} km"
        return f"{self.meters:.2f} m"


def haversine_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> Distance:
    """Great-circle distance on a spherical earth of radius 6 371 km."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return Distance(EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a)))
