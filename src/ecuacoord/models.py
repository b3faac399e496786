"""
ecuacoord — Data Model
=======================
Input records, transformation legs, per-record results and the batch report.

Classes:
    GeographicPoint     WGS84 latitude / longitude input (implicitly EPSG:4326).
    ProjectedPoint      Easting / northing input with an explicit source system.
    RawCoordinateRecord One caller-owned input record.
    CoordinatePoint     A point tagged with its CRS code.
    TransformationLeg   One source → target transformation.
    RecordStatus        ``success`` / ``error``.
    ResultRecord        Immutable per-record outcome.
    BatchError          One per-record failure entry of a batch report.
    BatchReport         Counters and timings for one batch invocation.

Input points are a tagged union with exactly two cases; the orchestrator
dispatches on the type rather than on which fields happen to be present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

from ecuacoord.dms import DMSPair
from ecuacoord.precision import PrecisionAssessment

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeographicPoint:
    """Latitude / longitude pair in WGS84.  Values may still be raw text."""

    latitude: float | str
    longitude: float | str


@dataclass(frozen=True)
class ProjectedPoint:
    """Easting / northing pair.

    Attributes:
        easting: Easting in meters (may be raw text).
        northing: Northing in meters (may be raw text).
        system: Source CRS code; ``None`` falls back to the batch's
            configured source system.
    """

    easting: float | str
    northing: float | str
    system: str | None = None


InputPoint = Union[GeographicPoint, ProjectedPoint]


def _present(value: Any) -> bool:
    return value is not None and value != ""


@dataclass(frozen=True)
class RawCoordinateRecord:
    """One input record, owned by the caller and only read by the package.

    Attributes:
        point: A :class:`GeographicPoint` or :class:`ProjectedPoint`.  Any
            other value (including ``None``) is reported as an unrecognised
            coordinate format when the record is processed.
        id: Optional external identifier.  Need not be unique.
        name: Display name; defaults to ``"Point <n>"`` in results.
        description: Free text carried through to exports.
        target_crs: Requested target system; ``None`` uses the batch default.
        fan_out: Transform this record into every registered system.
    """

    point: InputPoint | None
    id: str | None = None
    name: str | None = None
    description: str = ""
    target_crs: str | None = None
    fan_out: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawCoordinateRecord:
        """Build a record from the loose dict shape produced by file ingestion.

        Recognised keys: ``coordinates`` (a mapping with ``latitude`` /
        ``longitude``) or top-level ``latitude`` / ``longitude``;
        ``easting`` / ``northing`` / ``system``; ``id``, ``name``,
        ``description`` and ``targetSystem`` (or ``target_system``), where
        the value ``"all"`` requests fan-out mode.

        Example::

            RawCoordinateRecord.from_mapping(
                {"name": "P1", "easting": "499.450,00", "northing": 9975663,
                 "system": "SIRES-DMQ"}
            )
        """
        point: InputPoint | None = None
        coords = data.get("coordinates")
        if isinstance(coords, Mapping):
            point = GeographicPoint(coords.get("latitude"), coords.get("longitude"))
        elif _present(data.get("latitude")) and _present(data.get("longitude")):
            point = GeographicPoint(data["latitude"], data["longitude"])
        elif _present(data.get("easting")) and _present(data.get("northing")):
            point = ProjectedPoint(data["easting"], data["northing"], data.get("system") or None)

        target = data.get("targetSystem", data.get("target_system"))
        fan_out = target == "all"
        raw_id = data.get("id")

        return cls(
            point=point,
            id=str(raw_id) if _present(raw_id) else None,
            name=str(data["name"]) if _present(data.get("name")) else None,
            description=str(data.get("description") or ""),
            target_crs=None if fan_out or not target else str(target),
            fan_out=fan_out,
        )


# ---------------------------------------------------------------------------
# Transformation legs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CoordinatePoint:
    """A 2-D point tagged with the CRS code its values are expressed in."""

    x: float
    y: float
    crs: str

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "crs": self.crs}


@dataclass(frozen=True)
class TransformationLeg:
    """One source → target transformation.

    Attributes:
        source: Parsed input point.
        target: Transformed point, rounded to the batch precision.
        is_original: ``True`` for an identity leg (source CRS equals target
            CRS); no projection engine call was made.
        dms: DMS breakdown of :attr:`target` when the target is geographic.
    """

    source: CoordinatePoint
    target: CoordinatePoint
    is_original: bool = False
    dms: DMSPair | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source": self.source.to_dict(),
            "target": self.target.to_dict(),
        }
        if self.is_original:
            data["isOriginal"] = True
        if self.dms is not None:
            data["dms"] = {"lat": self.dms.lat.to_dict(), "lng": self.dms.lng.to_dict()}
        return data


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class RecordStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


def _empty_legs() -> Mapping[str, TransformationLeg]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ResultRecord:
    """Immutable outcome for one input record.

    Attributes:
        id: Generated identifier, unique within its batch.
        name: Display name.
        status: :class:`RecordStatus`.
        description: Carried over from the input record.
        transformation: The single leg (single-target mode) or the first
            successful leg in registry order (fan-out mode).
        transformations: CRS code → leg, fan-out mode only, registry order.
        precision: Optional :class:`~ecuacoord.precision.PrecisionAssessment`.
        error: Failure message for ``error`` records.
        original: The input record, when the batch keeps originals.
    """

    id: str
    name: str
    status: RecordStatus
    description: str = ""
    transformation: TransformationLeg | None = None
    transformations: Mapping[str, TransformationLeg] = field(default_factory=_empty_legs)
    precision: PrecisionAssessment | None = None
    error: str | None = None
    original: RawCoordinateRecord | None = None

    @property
    def is_success(self) -> bool:
        return self.status is RecordStatus.SUCCESS

    @property
    def is_fan_out(self) -> bool:
        return bool(self.transformations)

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view, suitable for JSON serialisation."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "description": self.description,
        }
        if self.transformation is not None:
            data["transformation"] = self.transformation.to_dict()
        if self.transformations:
            data["transformations"] = {
                code: leg.to_dict() for code, leg in self.transformations.items()
            }
        if self.precision is not None:
            data["precision"] = {
                "value": self.precision.value,
                "quality": self.precision.quality.value,
            }
        if self.error is not None:
            data["error"] = self.error
        return data


# ---------------------------------------------------------------------------
# Batch report
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchError:
    """One failed record: 1-based input index, display name and message."""

    index: int
    name: str
    message: str


@dataclass
class BatchReport:
    """Counters and timings for one batch invocation.

    Attributes:
        processed: Number of input records.
        successful: Records that ended in ``success``.
        failed: Records that ended in ``error``.
        skipped: Fan-out legs dropped because one target system failed
            while the record as a whole succeeded.
        errors: Per-record failures, in input order.
        started_at: UTC start time.
        finished_at: UTC end time (``None`` while running).
        elapsed: Seconds between start and end.
    """

    started_at: datetime
    processed: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0
    errors: list[BatchError] = field(default_factory=list)
    finished_at: datetime | None = None
    elapsed: float = 0.0

    def summary(self) -> str:
        """Return a human-readable summary string for logging or display."""
        return (
            f"Processed {self.processed} record(s): "
            f"{self.successful} succeeded, {self.failed} failed, "
            f"{self.skipped} leg(s) skipped | {self.elapsed:.3f}s"
        )
