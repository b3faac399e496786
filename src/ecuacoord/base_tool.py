"""
ecuacoord — Batch File Tool
============================
Abstract base class for tools that turn one input file into one exported
artifact by way of the batch orchestrator.

Design Pattern:
    Template Method — :meth:`BatchFileTool.run` fixes the pipeline
    (validate → read records → pick config → transform → export → report);
    subclasses supply the file-specific steps.

Usage::

    from ecuacoord.base_tool import BatchFileTool

    class MyReader(BatchFileTool):
        def validate_inputs(self) -> None: ...
        def read_records(self) -> list[RawCoordinateRecord]: ...
        def write_results(self, outcome: BatchOutcome) -> Path | None: ...
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path

from ecuacoord.batch import BatchConfig, BatchOutcome, transform_batch
from ecuacoord.models import RawCoordinateRecord

# Package root logger; modules log to children named "ecuacoord.<module>".
logger = logging.getLogger("ecuacoord")

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"


class BatchFileTool(ABC):
    """Read coordinate records from a file, transform them, export the results.

    Attributes:
        input_path: File the records are read from.
        output_path: File or directory the artifact is written to.
        batch_config: :class:`~ecuacoord.batch.BatchConfig` used unless
            :meth:`resolve_batch_config` picks another one.
        verbose: Log DEBUG messages (per-record progress) as well.
    """

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        batch_config: BatchConfig,
        *,
        verbose: bool = False,
    ) -> None:
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.batch_config = batch_config
        self.verbose = verbose

        self._outcome: BatchOutcome | None = None
        self._written: Path | None = None
        _attach_console_handler(logging.DEBUG if verbose else logging.INFO)

    # ------------------------------------------------------------------
    # Steps subclasses provide
    # ------------------------------------------------------------------

    @abstractmethod
    def validate_inputs(self) -> None:
        """Check the input file and configuration before anything is read.

        Raises:
            InputValidationError: On a missing file, wrong type or absent column.
            UnknownSystemError: If a configured system code is not registered.
        """

    @abstractmethod
    def read_records(self) -> list[RawCoordinateRecord]:
        """Return the input file's rows as raw records, in file order."""

    @abstractmethod
    def write_results(self, outcome: BatchOutcome) -> Path | None:
        """Export *outcome* and return the written path.

        Raises:
            ExportPreconditionError: If nothing in *outcome* can be exported.
            OutputWriteError: If the artifact cannot be written.
        """

    def resolve_batch_config(self, records: list[RawCoordinateRecord]) -> BatchConfig:
        """Hook for choosing the config once the records are known."""
        return self.batch_config

    # ------------------------------------------------------------------
    # Template method
    # ------------------------------------------------------------------

    def run(self) -> BatchOutcome:
        """Execute the pipeline and return the batch outcome.

        The outcome is kept on :attr:`outcome` before exporting, so it is
        available even when the export step raises.

        Raises:
            EcuaCoordError: Whatever a step raises, unchanged.
        """
        logger.info("Starting %s on %s", self.__class__.__name__, self.input_path)
        start = time.perf_counter()
        self._written = None

        self.validate_inputs()
        records = self.read_records()
        config = self.resolve_batch_config(records)
        self._outcome = transform_batch(records, config, self._log_progress)
        self._written = self.write_results(self._outcome)

        self._report_success(self._outcome, time.perf_counter() - start)
        return self._outcome

    @property
    def outcome(self) -> BatchOutcome | None:
        """Outcome of the last :meth:`run`; ``None`` before the first one."""
        return self._outcome

    @property
    def written_path(self) -> Path | None:
        """Artifact written by the last successful :meth:`run`."""
        return self._written

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _report_success(self, outcome: BatchOutcome, elapsed: float) -> None:
        report = outcome.report
        logger.info(
            "%s transformed %d of %d record(s) in %.2fs → %s",
            self.__class__.__name__,
            report.successful,
            report.processed,
            elapsed,
            self._written or self.output_path,
        )

    @staticmethod
    def _log_progress(percent: int, message: str) -> None:
        logger.debug("[%3d%%] %s", percent, message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.input_path!r} → {self.output_path!r}, "
            f"target={self.batch_config.target_crs!r})"
        )


def _attach_console_handler(level: int) -> None:
    """Give the package logger one stderr handler and set its level."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(level)
