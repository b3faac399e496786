"""
ecuacoord — CSV File Transformer
=================================
Provides :class:`CoordinateFileTransformer`, which reads a CSV of coordinate
rows, runs them through the batch orchestrator and exports the results.

Column names are given explicitly; no header sniffing is attempted.  Every
cell is read as text so the locale-tolerant number parser sees exactly what
the surveyor typed (``"9.975.663,12"`` and ``"9975663.12"`` both work).

Typical usage::

    from pathlib import Path
    from ecuacoord.batch import BatchConfig
    from ecuacoord.tool import CoordinateFileTransformer, FileTransformConfig

    cfg = FileTransformConfig(
        x_col="este",
        y_col="norte",
        input_kind="projected",
        batch=BatchConfig(source_crs="SIRES-DMQ", target_crs="EPSG:4326"),
    )
    tool = CoordinateFileTransformer(Path("data/levantamiento.csv"),
                                     Path("output/levantamiento.kml"), cfg)
    tool.run()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal

import pandas as pd

from ecuacoord.base_tool import BatchFileTool
from ecuacoord.batch import BatchConfig, BatchOutcome
from ecuacoord.detection import detect_best_system
from ecuacoord.export import ExportFormat, export_results
from ecuacoord.models import GeographicPoint, ProjectedPoint, RawCoordinateRecord
from ecuacoord.numbers import parse_number
from ecuacoord.validators import Validators

logger = logging.getLogger("ecuacoord.tool")


@dataclass
class FileTransformConfig:
    """Configuration bundle for :class:`CoordinateFileTransformer`.

    Attributes:
        batch: :class:`~ecuacoord.batch.BatchConfig` for the transformation.
        x_col: Column holding longitude / easting values.
        y_col: Column holding latitude / northing values.
        input_kind: ``"geographic"`` (lat/lng) or ``"projected"`` rows.
        system_col: Optional per-row source system column (projected rows).
        id_col: Optional external identifier column.
        name_col: Optional display name column.
        description_col: Optional description column.
        output_format: :class:`~ecuacoord.export.ExportFormat` of the output.
        delimiter: Field separator of the input file.
        auto_detect_target: Pick the target system from the first geographic
            row with :func:`~ecuacoord.detection.detect_best_system`.
    """

    batch: BatchConfig = field(default_factory=BatchConfig)
    x_col: str = "longitude"
    y_col: str = "latitude"
    input_kind: Literal["geographic", "projected"] = "geographic"
    system_col: str | None = None
    id_col: str | None = None
    name_col: str | None = None
    description_col: str | None = None
    output_format: ExportFormat = ExportFormat.CSV
    auto_detect_target: bool = False
    delimiter: str = ","

    @property
    def optional_columns(self) -> list[str]:
        cols = (self.system_col, self.id_col, self.name_col, self.description_col)
        return [c for c in cols if c]


class CoordinateFileTransformer(BatchFileTool):
    """Transform every coordinate row of a CSV file and export the results.

    Fills in the :class:`~ecuacoord.base_tool.BatchFileTool` pipeline:
    ``validate_inputs`` → ``read_records`` → ``resolve_batch_config`` →
    batch → ``write_results``.

    Args:
        input_path: Path to the input CSV file.
        output_path: Path (or directory) for the exported artifact.
        config: A :class:`FileTransformConfig`.
        verbose: Enable DEBUG-level logging.  Defaults to ``False``.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        config: FileTransformConfig,
        *,
        verbose: bool = False,
    ) -> None:
        super().__init__(input_path, output_path, config.batch, verbose=verbose)
        self.config: FileTransformConfig = config

    # ------------------------------------------------------------------
    # BatchFileTool steps
    # ------------------------------------------------------------------

    def validate_inputs(self) -> None:
        """Validate the input file and configuration before processing.

        Raises:
            InputValidationError: On a missing file or wrong extension.
            ColumnNotFoundError: If a configured column is absent.
            UnknownSystemError: If a configured CRS code is unknown.
            OutputWriteError: If the output directory cannot be created.
        """
        Validators.assert_file_exists(self.input_path)
        Validators.assert_supported_extension(self.input_path, [".csv", ".txt"])
        Validators.assert_system_known(self.batch_config.source_crs)
        Validators.assert_system_known(self.batch_config.target_crs)
        Validators.assert_output_dir_writable(self.output_path)

        # Peek at the header row to confirm the configured columns exist
        df_peek = pd.read_csv(self.input_path, nrows=0, sep=self.config.delimiter)
        Validators.assert_columns_exist(
            df_peek,
            [self.config.x_col, self.config.y_col, *self.config.optional_columns],
        )
        logger.debug("Inputs validated successfully.")

    def read_records(self) -> list[RawCoordinateRecord]:
        df = pd.read_csv(
            self.input_path, dtype=str, keep_default_na=False, sep=self.config.delimiter
        )
        return [self._to_record(row) for row in df.to_dict(orient="records")]

    def resolve_batch_config(self, records: list[RawCoordinateRecord]) -> BatchConfig:
        """Swap in the auto-detected target system when that is enabled."""
        if not (self.config.auto_detect_target and self.config.input_kind == "geographic"):
            return self.batch_config
        detected = self._detect_target(records)
        if detected is None:
            return self.batch_config
        logger.info("Auto-detected target system: %s", detected)
        return replace(self.batch_config, target_crs=detected)

    def write_results(self, outcome: BatchOutcome) -> Path | None:
        return export_results(outcome.results, self.config.output_format, self.output_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _to_record(self, row: dict[str, Any]) -> RawCoordinateRecord:
        cfg = self.config
        x, y = row[cfg.x_col], row[cfg.y_col]
        if cfg.input_kind == "geographic":
            point: GeographicPoint | ProjectedPoint = GeographicPoint(latitude=y, longitude=x)
        else:
            system = row.get(cfg.system_col, "") if cfg.system_col else ""
            point = ProjectedPoint(easting=x, northing=y, system=system.strip() or None)

        def cell(col: str | None) -> str:
            return str(row.get(col, "")).strip() if col else ""

        return RawCoordinateRecord(
            point=point,
            id=cell(cfg.id_col) or None,
            name=cell(cfg.name_col) or None,
            description=cell(cfg.description_col),
        )

    @staticmethod
    def _detect_target(records: list[RawCoordinateRecord]) -> str | None:
        """Best system for the first record with a numeric geographic point."""
        for record in records:
            point = record.point
            if not isinstance(point, GeographicPoint):
                continue
            lat, lng = parse_number(point.latitude), parse_number(point.longitude)
            if not (math.isnan(lat) or math.isnan(lng)):
                return detect_best_system(lat, lng)
        return None
