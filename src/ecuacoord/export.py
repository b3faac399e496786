"""
ecuacoord — Result Exporters
=============================
Serialises a collection of :class:`~ecuacoord.models.ResultRecord` objects
into CSV, a spreadsheet sheet (``.xlsx``), GeoJSON or KML.

Every renderer is pure: it builds the complete artifact in memory and only
:func:`export_results` touches the sink, so a failed export never leaves a
partial file behind.  An empty collection (or one with nothing the chosen
format can represent) raises :class:`~ecuacoord.exceptions.ExportPreconditionError`
and writes nothing.

Usage::

    from ecuacoord.export import ExportFormat, export_results

    export_results(outcome.results, ExportFormat.GEOJSON, Path("out/points.geojson"))
"""

from __future__ import annotations

import csv
import io
import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import IO, Any, Sequence, Union
from xml.sax.saxutils import escape

import pandas as pd
from openpyxl.utils import get_column_letter

from ecuacoord.exceptions import ExportPreconditionError, OutputWriteError
from ecuacoord.models import ResultRecord, TransformationLeg
from ecuacoord.registry import DEFAULT_REGISTRY, CRSRegistry

logger = logging.getLogger("ecuacoord.export")

Sink = Union[str, "os.PathLike[str]", IO[Any]]

TABLE_COLUMNS: tuple[str, ...] = (
    "ID",
    "Name",
    "Description",
    "Source_Lat_Y",
    "Source_Lng_X",
    "Source_CRS",
    "Target_X",
    "Target_Y",
    "Target_CRS",
    "Precision",
    "Precision_Quality",
    "Status",
)

SHEET_NAME = "Transformed Coordinates"
SHEET_COLUMN_WIDTHS: tuple[int, ...] = (10, 20, 30, 15, 15, 15, 18, 18, 15, 12, 18, 10, 22)

DOCUMENT_TITLE = "Transformed Coordinates"
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
KML_ICON = "http://maps.google.com/mapfiles/kml/pushpin/red-pushpin.png"

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    TABULAR = "tabular"
    GEOJSON = "geojson"
    KML = "kml"

    @property
    def default_filename(self) -> str:
        suffix = {"csv": "csv", "tabular": "xlsx", "geojson": "geojson", "kml": "kml"}
        return f"transformed_coordinates.{suffix[self.value]}"


@dataclass
class SheetModel:
    """Spreadsheet-ready view of a result collection.

    Attributes:
        name: Worksheet name.
        frame: One row per result, :data:`TABLE_COLUMNS` plus ``Processed_At``.
        column_widths: Character widths, one per column of :attr:`frame`.
    """

    name: str
    frame: pd.DataFrame
    column_widths: list[int] = field(default_factory=list)

    def to_xlsx_bytes(self) -> bytes:
        """Render the sheet as an ``.xlsx`` workbook via pandas / openpyxl."""
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            self.frame.to_excel(writer, sheet_name=self.name, index=False)
            worksheet = writer.sheets[self.name]
            for position, width in enumerate(self.column_widths, start=1):
                worksheet.column_dimensions[get_column_letter(position)].width = width
        return buffer.getvalue()


# ---------------------------------------------------------------------------
# Tabular
# ---------------------------------------------------------------------------


def _fixed(value: float | None, digits: int) -> str:
    return "" if value is None else f"{value:.{digits}f}"


def _row(result: ResultRecord) -> list[str]:
    leg = result.transformation
    source = leg.source if leg else None
    target = leg.target if leg else None
    precision = result.precision
    return [
        result.id,
        result.name,
        result.description,
        _fixed(source.y if source else None, 6),
        _fixed(source.x if source else None, 6),
        source.crs if source else "",
        _fixed(target.x if target else None, 2),
        _fixed(target.y if target else None, 2),
        target.crs if target else "",
        _fixed(precision.value if precision else None, 3),
        precision.quality.value if precision else "",
        result.status.value,
    ]


def to_rows(results: Sequence[ResultRecord]) -> pd.DataFrame:
    """One string-typed row per result, in :data:`TABLE_COLUMNS` order."""
    return pd.DataFrame([_row(r) for r in results], columns=list(TABLE_COLUMNS), dtype=str)


def to_csv(results: Sequence[ResultRecord]) -> str:
    """Render *results* as quote-wrapped CSV text with a UTF-8 byte-order mark.

    The header plus one line per result; lines end with ``\\n``.
    """
    buffer = io.StringIO()
    to_rows(results).to_csv(buffer, index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return "\ufeff" + buffer.getvalue()


def to_sheet(
    results: Sequence[ResultRecord], processed_at: datetime | None = None
) -> SheetModel:
    """Build the :class:`SheetModel` for *results*."""
    stamp = (processed_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M:%S")
    frame = to_rows(results)
    frame["Processed_At"] = stamp
    return SheetModel(name=SHEET_NAME, frame=frame, column_widths=list(SHEET_COLUMN_WIDTHS))


# ---------------------------------------------------------------------------
# GeoJSON
# ---------------------------------------------------------------------------


def _has_target(result: ResultRecord) -> bool:
    return result.is_success and result.transformation is not None


def to_geojson(
    results: Sequence[ResultRecord], generated_at: datetime | None = None
) -> dict[str, Any]:
    """Build a GeoJSON FeatureCollection in the *target* systems' coordinates.

    Points are not reprojected to WGS84: each geometry holds the target
    leg's raw ``[x, y]`` and the ``crs`` block names the first feature's
    target system.  Only successful results with a target leg are included.
    """
    generated = (generated_at or datetime.now(timezone.utc)).isoformat()
    features: list[dict[str, Any]] = []

    for result in results:
        leg = result.transformation
        if not result.is_success or leg is None:
            continue
        features.append(
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [leg.target.x, leg.target.y]},
                "properties": {
                    "id": result.id,
                    "name": result.name,
                    "description": result.description,
                    "source_crs": leg.source.crs,
                    "source_x": leg.source.x,
                    "source_y": leg.source.y,
                    "target_crs": leg.target.crs,
                    "target_x": leg.target.x,
                    "target_y": leg.target.y,
                    "precision": result.precision.value if result.precision else None,
                    "precision_quality": (
                        result.precision.quality.value if result.precision else ""
                    ),
                    "status": result.status.value,
                    "processed_at": generated,
                },
            }
        )

    crs_name = features[0]["properties"]["target_crs"] if features else ""
    return {
        "type": "FeatureCollection",
        "crs": {"type": "name", "properties": {"name": crs_name}},
        "features": features,
        "metadata": {
            "title": DOCUMENT_TITLE,
            "description": f"Coordinates in system {crs_name}",
            "generated": generated,
            "total_points": len(features),
            "coordinate_system": crs_name,
            "warning": "Coordinates are expressed in the target system, not WGS84",
        },
    }


# ---------------------------------------------------------------------------
# KML
# ---------------------------------------------------------------------------


def escape_xml(text: str | None) -> str:
    """Escape ``& < > " '`` for XML text and attribute content."""
    return escape(text or "", _XML_ENTITIES)


def _has_geographic_source(result: ResultRecord, registry: CRSRegistry) -> bool:
    leg = result.transformation
    if not result.is_success or leg is None:
        return False
    return leg.source.crs in registry and registry.get(leg.source.crs).is_geographic


def _placemark(result: ResultRecord, leg: TransformationLeg) -> str:
    lng, lat = leg.source.x, leg.source.y
    name = escape_xml(result.name)

    rows = [
        '<tr><th colspan="2">Source coordinates</th></tr>',
        f"<tr><td>Latitude</td><td>{lat:.6f}°</td></tr>",
        f"<tr><td>Longitude</td><td>{lng:.6f}°</td></tr>",
        f"<tr><td>System</td><td>{escape_xml(leg.source.crs)}</td></tr>",
        '<tr><th colspan="2">Transformed coordinates</th></tr>',
        f"<tr><td>System</td><td>{escape_xml(leg.target.crs)}</td></tr>",
        f"<tr><td>Easting (X)</td><td>{leg.target.x:.2f}</td></tr>",
        f"<tr><td>Northing (Y)</td><td>{leg.target.y:.2f}</td></tr>",
    ]
    if result.precision is not None:
        rows.append('<tr><th colspan="2">Precision</th></tr>')
        rows.append(f"<tr><td>Quality</td><td>{escape_xml(result.precision.quality.value)}</td></tr>")
    table = "\n".join(f"          {row}" for row in rows)

    return (
        "    <Placemark>\n"
        f"      <name>{name}</name>\n"
        "      <description><![CDATA[\n"
        f"        <h3>{name}</h3>\n"
        '        <table border="1" cellpadding="5">\n'
        f"{table}\n"
        "        </table>\n"
        "      ]]></description>\n"
        "      <styleUrl>#defaultStyle</styleUrl>\n"
        "      <Point>\n"
        f"        <coordinates>{lng!r},{lat!r},0</coordinates>\n"
        "      </Point>\n"
        "    </Placemark>"
    )


def to_kml(
    results: Sequence[ResultRecord],
    registry: CRSRegistry = DEFAULT_REGISTRY,
    generated_at: datetime | None = None,
) -> str:
    """Render a KML 2.2 document with one Placemark per geographic-source result.

    KML requires WGS84, so results whose source leg is not geographic are
    omitted.
    """
    generated = (generated_at or datetime.now(timezone.utc)).strftime("%Y-%m-%d %H:%M:%S UTC")
    placemarks = "\n".join(
        _placemark(r, r.transformation)
        for r in results
        if r.transformation is not None and _has_geographic_source(r, registry)
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<kml xmlns="{KML_NAMESPACE}">\n'
        "  <Document>\n"
        f"    <name>{escape_xml(DOCUMENT_TITLE)}</name>\n"
        f"    <description>Exported by ecuacoord - {generated}</description>\n"
        '    <Style id="defaultStyle">\n'
        "      <IconStyle>\n"
        "        <color>ff0000ff</color>\n"
        "        <scale>1.0</scale>\n"
        f"        <Icon><href>{KML_ICON}</href></Icon>\n"
        "      </IconStyle>\n"
        "      <LabelStyle><scale>0.8</scale></LabelStyle>\n"
        "    </Style>\n"
        f"{placemarks}\n"
        "  </Document>\n"
        "</kml>\n"
    )


# ---------------------------------------------------------------------------
# Export entry point
# ---------------------------------------------------------------------------


def is_directory_sink(sink: str | os.PathLike[str]) -> bool:
    """Whether a path sink names a directory rather than a file.

    Existing directories, paths written with a trailing separator and
    paths without a file suffix (``out/``, ``out``) are directories.
    """
    text = os.fspath(sink)
    path = Path(text)
    return path.is_dir() or text.endswith(("/", os.sep)) or not path.suffix


def _resolve_output_path(sink: str | os.PathLike[str], fmt: ExportFormat) -> Path:
    """Return the file to write; directory sinks are created and get the default name.

    Raises:
        OutputWriteError: If the directory cannot be created.
    """
    path = Path(sink)
    if not is_directory_sink(sink):
        return path
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(str(path), str(exc)) from exc
    return path / fmt.default_filename


def render(
    results: Sequence[ResultRecord],
    export_format: ExportFormat | str,
    registry: CRSRegistry = DEFAULT_REGISTRY,
) -> str | bytes:
    """Render *results* in *export_format* without touching any sink.

    Raises:
        ExportPreconditionError: If there is nothing to export.
        ValueError: If *export_format* is not supported.
    """
    fmt = ExportFormat(export_format)
    if not results:
        raise ExportPreconditionError(fmt.value, "there are no results to export")

    if fmt is ExportFormat.CSV:
        return to_csv(results)
    if fmt is ExportFormat.TABULAR:
        return to_sheet(results).to_xlsx_bytes()
    if fmt is ExportFormat.GEOJSON:
        if not any(_has_target(r) for r in results):
            raise ExportPreconditionError(fmt.value, "no successful results with a target leg")
        return json.dumps(to_geojson(results), indent=2, ensure_ascii=False)

    if not any(_has_geographic_source(r, registry) for r in results):
        raise ExportPreconditionError(fmt.value, "no successful results with geographic source coordinates")
    return to_kml(results, registry)


def export_results(
    results: Sequence[ResultRecord],
    export_format: ExportFormat | str,
    sink: Sink,
    registry: CRSRegistry = DEFAULT_REGISTRY,
) -> Path | None:
    """Render *results* and write the artifact to *sink*.

    Args:
        results: Results to export.
        export_format: An :class:`ExportFormat` or its string value.
        sink: A file path, a directory (the format's default file name is
            used; see :func:`is_directory_sink`), or an open file object.
            Text streams accept every format except ``tabular``.
        registry: Registry used to recognise geographic sources (KML).

    Returns:
        The written path when *sink* is a path, otherwise ``None``.

    Raises:
        ExportPreconditionError: If there is nothing to export; nothing is
            written.
        OutputWriteError: If the sink cannot be written.
    """
    fmt = ExportFormat(export_format)
    try:
        payload = render(results, fmt, registry)
    except ExportPreconditionError as exc:
        logger.warning("Export skipped: %s", exc.message)
        raise

    if isinstance(sink, (str, os.PathLike)):
        path = _resolve_output_path(sink, fmt)
        data = payload.encode("utf-8") if isinstance(payload, str) else payload
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise OutputWriteError(str(path), str(exc)) from exc
        logger.info("Exported %d result(s) as %s → %s", len(results), fmt.value, path)
        return path

    try:
        if isinstance(sink, io.TextIOBase):
            if isinstance(payload, bytes):
                raise ExportPreconditionError(fmt.value, "binary output needs a binary sink")
            sink.write(payload)
        else:
            sink.write(payload.encode("utf-8") if isinstance(payload, str) else payload)
    except OSError as exc:
        raise OutputWriteError(getattr(sink, "name", repr(sink)), str(exc)) from exc
    logger.info("Exported %d result(s) as %s", len(results), fmt.value)
    return None
