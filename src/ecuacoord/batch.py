"""
ecuacoord — Batch Orchestrator
===============================
Transforms a list of raw coordinate records, either into one target system
or into every registered system ("fan-out"), and aggregates a
:class:`~ecuacoord.models.BatchReport`.

Per record the orchestrator resolves the source point and CRS, parses the
values, optionally validates them, calls the projection adapter (skipping the
call for identity legs), rounds the targets, attaches a DMS breakdown for
geographic targets and, when configured, a precision assessment.

Failure policy:
    With ``skip_invalid=True`` (default, file ingestion) a failing record
    becomes an ``error`` result and an entry in ``report.errors``; the batch
    carries on.  With ``skip_invalid=False`` (manual entry) the first failure
    propagates.  :class:`~ecuacoord.exceptions.UnknownSystemError` is a
    configuration bug and always propagates.

Scheduling:
    Records are processed one at a time.  Every ``yield_every`` records the
    step generator reaches a checkpoint; :func:`transform_batch_async`
    awaits ``asyncio.sleep(0)`` there so a host event loop stays responsive
    and a cancelled task stops at the next checkpoint.  :func:`transform_batch`
    drives the same generator without suspending.

Usage::

    from ecuacoord.batch import BatchConfig, transform_batch
    from ecuacoord.models import GeographicPoint, RawCoordinateRecord

    records = [RawCoordinateRecord(GeographicPoint("-0,2201", "-78,5123"), name="Plaza")]
    outcome = transform_batch(records, BatchConfig(target_crs="SIRES-DMQ"))
    print(outcome.report.summary())
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Callable, Generator, Iterable, Mapping

from ecuacoord.dms import point_to_dms
from ecuacoord.exceptions import (
    EcuaCoordError,
    InputFormatError,
    ParseError,
    TransformError,
    UnknownSystemError,
    ValidationError,
)
from ecuacoord.models import (
    BatchError,
    BatchReport,
    CoordinatePoint,
    GeographicPoint,
    ProjectedPoint,
    RawCoordinateRecord,
    RecordStatus,
    ResultRecord,
    TransformationLeg,
)
from ecuacoord.numbers import parse_number
from ecuacoord.precision import DeviationEstimator, PrecisionAssessment, PrecisionClassifier
from ecuacoord.projection import ProjectionAdapter
from ecuacoord.registry import DEFAULT_REGISTRY, GEOGRAPHIC_CODE, CRSRegistry
from ecuacoord.validators import validate_geographic, validate_projected

logger = logging.getLogger("ecuacoord.batch")

ProgressCallback = Callable[[int, str], None]


# ---------------------------------------------------------------------------
# Configuration & outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BatchConfig:
    """Configuration bundle for one batch invocation.

    Attributes:
        source_crs: Source system for projected records that do not name one.
        target_crs: Target system in single-target mode (records may override).
        precision: Decimal places kept on every target coordinate.
        skip_invalid: Convert per-record failures into ``error`` results
            instead of aborting the batch.
        generate_all_systems: Fan every record out to all registered systems.
        include_original: Attach the raw input record to each result.
        validate_input: Run range / plausibility validation before transforming.
        precision_estimator: Computes a deviation metric for a finished leg.
        precision_classifier: Bands the metric; both or neither must be set.
        progress_every: Progress callback cadence, in records.
        yield_every: Cooperative checkpoint cadence, in records.
    """

    source_crs: str = GEOGRAPHIC_CODE
    target_crs: str = "UTM-17S"
    precision: int = 6
    skip_invalid: bool = True
    generate_all_systems: bool = False
    include_original: bool = True
    validate_input: bool = False
    precision_estimator: DeviationEstimator | None = None
    precision_classifier: PrecisionClassifier | None = None
    progress_every: int = 10
    yield_every: int = 100

    def __post_init__(self) -> None:
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")
        if self.progress_every < 1 or self.yield_every < 1:
            raise ValueError("progress_every and yield_every must be >= 1")
        if (self.precision_estimator is None) != (self.precision_classifier is None):
            raise ValueError(
                "precision_estimator and precision_classifier must be supplied together"
            )

    @classmethod
    def manual_entry(cls, **overrides: Any) -> BatchConfig:
        """Config for single manual submissions: the first failure propagates."""
        return cls(**{"skip_invalid": False, **overrides})


@dataclass(frozen=True)
class BatchOutcome:
    """Results (input order) and the report of one batch invocation."""

    results: list[ResultRecord]
    report: BatchReport


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class BatchOrchestrator:
    """Run batches of :class:`~ecuacoord.models.RawCoordinateRecord` objects.

    Args:
        config: A :class:`BatchConfig`.  Defaults to ``BatchConfig()``.
        registry: Registry used for code lookups and fan-out order.
        adapter: Projection adapter; defaults to a pyproj-backed one.

    Raises:
        UnknownSystemError: If the configured source or target is unknown.
    """

    def __init__(
        self,
        config: BatchConfig | None = None,
        registry: CRSRegistry = DEFAULT_REGISTRY,
        adapter: ProjectionAdapter | None = None,
    ) -> None:
        self.config: BatchConfig = config or BatchConfig()
        self.registry = registry
        self.adapter = adapter or ProjectionAdapter(registry)

        registry.get(self.config.source_crs)
        registry.get(self.config.target_crs)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        records: Iterable[RawCoordinateRecord | Mapping[str, Any]],
        on_progress: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Process every record synchronously and return the outcome."""
        steps = self._steps(records, on_progress)
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value

    async def run_async(
        self,
        records: Iterable[RawCoordinateRecord | Mapping[str, Any]],
        on_progress: ProgressCallback | None = None,
    ) -> BatchOutcome:
        """Process every record, yielding to the event loop at each checkpoint."""
        steps = self._steps(records, on_progress)
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value
            await asyncio.sleep(0)

    # ------------------------------------------------------------------
    # Batch loop
    # ------------------------------------------------------------------

    def _steps(
        self,
        records: Iterable[RawCoordinateRecord | Mapping[str, Any]],
        on_progress: ProgressCallback | None,
    ) -> Generator[int, None, BatchOutcome]:
        cfg = self.config
        items = [_coerce_record(r) for r in records]
        total = len(items)

        report = BatchReport(started_at=datetime.now(timezone.utc))
        start = time.perf_counter()
        results: list[ResultRecord] = []
        logger.info("Transforming %d record(s)%s", total,
                    " into all systems" if cfg.generate_all_systems else f" → {cfg.target_crs}")

        for index, record in enumerate(items):
            try:
                result, skipped_legs = self._process(index, record)
            except UnknownSystemError:
                raise
            except EcuaCoordError as exc:
                name = _display_name(index, record)
                report.failed += 1
                report.errors.append(BatchError(index=index + 1, name=name, message=exc.message))
                if not cfg.skip_invalid:
                    raise
                logger.warning("  ✗ Record %d (%s): %s", index + 1, name, exc.message)
                result = ResultRecord(
                    id=_make_id(index, record, failed=True),
                    name=name,
                    status=RecordStatus.ERROR,
                    description=record.description,
                    error=exc.message,
                    original=record if cfg.include_original else None,
                )
            else:
                report.successful += 1
                report.skipped += skipped_legs
            results.append(result)

            if on_progress is not None and index % cfg.progress_every == 0 and index < total - 1:
                on_progress(
                    round((index + 1) / total * 100),
                    f"Processing coordinate {index + 1} of {total}...",
                )
            if index % cfg.yield_every == 0:
                yield index

        report.processed = total
        report.finished_at = datetime.now(timezone.utc)
        report.elapsed = time.perf_counter() - start

        if on_progress is not None:
            on_progress(100, "Transformation complete")
        logger.info(report.summary())
        return BatchOutcome(results=results, report=report)

    # ------------------------------------------------------------------
    # Per-record processing
    # ------------------------------------------------------------------

    def _process(self, index: int, record: RawCoordinateRecord) -> tuple[ResultRecord, int]:
        cfg = self.config
        x, y, source_code = self._resolve_source(record)

        if cfg.validate_input:
            if self.registry.get(source_code).is_geographic:
                validation = validate_geographic(y, x, self.registry)
            else:
                validation = validate_projected(x, y, source_code, self.registry)
            validation.raise_for_errors()

        skipped = 0
        legs: dict[str, TransformationLeg] = {}
        if cfg.generate_all_systems or record.fan_out:
            legs, skipped = self._transform_all_systems(x, y, source_code)
            primary = next(iter(legs.values()))
        else:
            target_code = record.target_crs or cfg.target_crs
            self.registry.get(target_code)
            primary = self._build_leg(x, y, source_code, target_code)

        result = ResultRecord(
            id=_make_id(index, record),
            name=_display_name(index, record),
            status=RecordStatus.SUCCESS,
            description=record.description,
            transformation=primary,
            transformations=MappingProxyType(legs),
            precision=self._assess(primary),
            original=record if cfg.include_original else None,
        )
        logger.debug("  ✓ Record %d → %s", index + 1, primary.target)
        return result, skipped

    def _resolve_source(self, record: RawCoordinateRecord) -> tuple[float, float, str]:
        """Return parsed ``(x, y, crs_code)`` for the record's input point."""
        point = record.point
        if isinstance(point, GeographicPoint):
            raw_x, raw_y = point.longitude, point.latitude
            source_code = self.registry.geographic.code
        elif isinstance(point, ProjectedPoint):
            raw_x, raw_y = point.easting, point.northing
            source_code = point.system or self.config.source_crs
        else:
            raise InputFormatError("Unrecognized coordinate format")

        self.registry.get(source_code)

        x = parse_number(raw_x)
        y = parse_number(raw_y)
        if math.isnan(x) or math.isnan(y):
            raise ParseError("Coordinates contain non-numeric values")
        return x, y, source_code

    def _transform_all_systems(
        self, x: float, y: float, source_code: str
    ) -> tuple[dict[str, TransformationLeg], int]:
        legs: dict[str, TransformationLeg] = {}
        failed = 0
        for system in self.registry:
            try:
                legs[system.code] = self._build_leg(x, y, source_code, system.code)
            except TransformError as exc:
                failed += 1
                logger.debug("    leg %s → %s dropped: %s", source_code, system.code, exc.message)

        if not legs:
            raise TransformError("Could not transform to any system")
        return legs, failed

    def _build_leg(
        self, x: float, y: float, source_code: str, target_code: str
    ) -> TransformationLeg:
        """Transform one point; identity legs never reach the projection engine.

        Raises:
            TransformError: With the adapter's message, verbatim.
        """
        if source_code == target_code:
            new_x, new_y = x, y
            is_original = True
        else:
            new_x, new_y = self.adapter.transform(x, y, source_code, target_code).unwrap()
            is_original = False

        digits = self.config.precision
        target_system = self.registry.get(target_code)
        return TransformationLeg(
            source=CoordinatePoint(x, y, source_code),
            target=CoordinatePoint(round(new_x, digits), round(new_y, digits), target_code),
            is_original=is_original,
            dms=point_to_dms(new_x, new_y) if target_system.is_geographic else None,
        )

    def _assess(self, leg: TransformationLeg) -> PrecisionAssessment | None:
        cfg = self.config
        if cfg.precision_estimator is None or cfg.precision_classifier is None:
            return None
        try:
            return cfg.precision_classifier.assess(cfg.precision_estimator(leg))
        except ValueError as exc:
            raise ValidationError([f"Precision assessment failed: {exc}"]) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_record(record: RawCoordinateRecord | Mapping[str, Any]) -> RawCoordinateRecord:
    if isinstance(record, RawCoordinateRecord):
        return record
    if isinstance(record, Mapping):
        return RawCoordinateRecord.from_mapping(record)
    return RawCoordinateRecord(point=None)


def _display_name(index: int, record: RawCoordinateRecord) -> str:
    return record.name or f"Point {index + 1}"


def _make_id(index: int, record: RawCoordinateRecord, *, failed: bool = False) -> str:
    """Batch-unique id: external id, 1-based index, epoch millis, random suffix."""
    prefix = record.id or "pt"
    marker = "_error" if failed else ""
    stamp = int(time.time() * 1000)
    return f"{prefix}_{index + 1}{marker}_{stamp}_{uuid.uuid4().hex[:9]}"


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------


def transform_batch(
    records: Iterable[RawCoordinateRecord | Mapping[str, Any]],
    config: BatchConfig | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    registry: CRSRegistry = DEFAULT_REGISTRY,
    adapter: ProjectionAdapter | None = None,
) -> BatchOutcome:
    """Transform *records* synchronously.  See :class:`BatchOrchestrator`."""
    return BatchOrchestrator(config, registry, adapter).run(records, on_progress)


async def transform_batch_async(
    records: Iterable[RawCoordinateRecord | Mapping[str, Any]],
    config: BatchConfig | None = None,
    on_progress: ProgressCallback | None = None,
    *,
    registry: CRSRegistry = DEFAULT_REGISTRY,
    adapter: ProjectionAdapter | None = None,
) -> BatchOutcome:
    """Transform *records* cooperatively inside a running event loop."""
    return await BatchOrchestrator(config, registry, adapter).run_async(records, on_progress)


def transform_single(
    record: RawCoordinateRecord | Mapping[str, Any],
    config: BatchConfig | None = None,
    *,
    registry: CRSRegistry = DEFAULT_REGISTRY,
    adapter: ProjectionAdapter | None = None,
) -> ResultRecord:
    """Transform one manually entered record; any failure is raised.

    Raises:
        EcuaCoordError: The first (and only) record's failure.
    """
    cfg = replace(config, skip_invalid=False) if config else BatchConfig.manual_entry()
    outcome = BatchOrchestrator(cfg, registry, adapter).run([record])
    return outcome.results[0]
