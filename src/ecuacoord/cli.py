"""
ecuacoord — CLI Entry Point
============================
Command-line interface built with Click.  Installed as the ``geo-ec-transform``
command via ``pyproject.toml``.

Usage:
    geo-ec-transform transform -i data/puntos.csv -o out/puntos.csv \\
                     --to-crs SIRES-DMQ

    geo-ec-transform transform -i data/levantamiento.csv -o out/ \\
                     --kind projected --x-col este --y-col norte \\
                     --from-crs SIRES-DMQ --to-crs EPSG:4326 --format kml

    geo-ec-transform point --to-crs UTM-17S -- -0.2201 -78.5123
    geo-ec-transform detect -- -2.19 -79.89
    geo-ec-transform systems

Negative coordinates go after ``--`` so Click does not read them as options.
Run ``geo-ec-transform <command> --help`` for a full list of options.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from ecuacoord.batch import BatchConfig, transform_single
from ecuacoord.detection import detect_best_system
from ecuacoord.exceptions import EcuaCoordError, ExportPreconditionError
from ecuacoord.export import ExportFormat
from ecuacoord.formatting import format_for_copy
from ecuacoord.models import GeographicPoint, ProjectedPoint, RawCoordinateRecord
from ecuacoord.registry import DEFAULT_REGISTRY
from ecuacoord.stats import summarize_results
from ecuacoord.tool import CoordinateFileTransformer, FileTransformConfig

SYSTEM_CODES = DEFAULT_REGISTRY.codes()


@click.group(
    name="geo-ec-transform",
    help="Transform coordinates between the reference systems used in Ecuador.",
)
@click.version_option(package_name="ecuacoord")
def main() -> None:
    """Command group; see the individual commands."""


# ---------------------------------------------------------------------------
# transform — CSV file in, exported artifact out
# ---------------------------------------------------------------------------


@main.command(
    name="transform",
    help=(
        "Transform every coordinate row of a CSV file.\n\n"
        "Reads INPUT, transforms each row into TO_CRS (or into every "
        "registered system with --all-systems) and writes the chosen export "
        "format to OUTPUT.  OUTPUT may be a directory."
    ),
)
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="Path to the input CSV file.",
)
@click.option(
    "--output", "-o",
    "output_path",
    required=True,
    type=click.Path(path_type=Path),
    help="Output file, or a directory (existing, ending in / or without a suffix) "
         "that receives transformed_coordinates.<ext>. Missing directories are created.",
)
@click.option(
    "--kind",
    "input_kind",
    type=click.Choice(["geographic", "projected"], case_sensitive=False),
    default="geographic",
    show_default=True,
    help="Whether rows hold latitude/longitude or easting/northing values.",
)
@click.option(
    "--from-crs",
    type=click.Choice(SYSTEM_CODES),
    default="EPSG:4326",
    show_default=True,
    help="Source system for projected rows without a system column.",
)
@click.option(
    "--to-crs",
    type=click.Choice(SYSTEM_CODES),
    default="UTM-17S",
    show_default=True,
    help="Target system.",
)
@click.option("--x-col", default="longitude", show_default=True,
              help="Column with longitude / easting values.")
@click.option("--y-col", default="latitude", show_default=True,
              help="Column with latitude / northing values.")
@click.option("--system-col", default=None, help="Optional per-row source system column.")
@click.option("--id-col", default=None, help="Optional identifier column.")
@click.option("--name-col", default=None, help="Optional point name column.")
@click.option("--description-col", default=None, help="Optional description column.")
@click.option("--delimiter", default=",", show_default=True, help="Field separator.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in ExportFormat], case_sensitive=False),
    default=ExportFormat.CSV.value,
    show_default=True,
    help="Export format ('tabular' writes an .xlsx workbook).",
)
@click.option("--precision", default=6, show_default=True, type=click.IntRange(min=0),
              help="Decimal places kept on target coordinates.")
@click.option("--all-systems", is_flag=True, default=False,
              help="Transform every row into all registered systems.")
@click.option("--auto-target", is_flag=True, default=False,
              help="Pick the target system from the first geographic row.")
@click.option("--validate", "validate_input", is_flag=True, default=False,
              help="Reject rows outside the absolute or regional ranges.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Enable debug-level logging output.")
def transform(
    input_path: Path,
    output_path: Path,
    input_kind: str,
    from_crs: str,
    to_crs: str,
    x_col: str,
    y_col: str,
    system_col: str | None,
    id_col: str | None,
    name_col: str | None,
    description_col: str | None,
    delimiter: str,
    output_format: str,
    precision: int,
    all_systems: bool,
    auto_target: bool,
    validate_input: bool,
    verbose: bool,
) -> None:
    """Wire Click options into :class:`CoordinateFileTransformer`."""
    config = FileTransformConfig(
        batch=BatchConfig(
            source_crs=from_crs,
            target_crs=to_crs,
            precision=precision,
            generate_all_systems=all_systems,
            validate_input=validate_input,
        ),
        x_col=x_col,
        y_col=y_col,
        input_kind=input_kind.lower(),  # type: ignore[arg-type]
        system_col=system_col,
        id_col=id_col,
        name_col=name_col,
        description_col=description_col,
        output_format=ExportFormat(output_format.lower()),
        auto_detect_target=auto_target,
        delimiter=delimiter,
    )
    tool = CoordinateFileTransformer(input_path, output_path, config, verbose=verbose)

    try:
        outcome = tool.run()
    except ExportPreconditionError as exc:
        click.echo(f"Nothing exported: {exc.message}", err=True)
        sys.exit(1)
    except EcuaCoordError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    stats = summarize_results(outcome.results)
    click.echo(outcome.report.summary())
    click.echo(f"Success rate: {stats.success_rate:.1f}% → {tool.written_path}")


# ---------------------------------------------------------------------------
# point — one manually entered coordinate
# ---------------------------------------------------------------------------


@main.command(name="point", help="Transform a single coordinate pair (Y then X).")
@click.argument("y")
@click.argument("x")
@click.option("--from-crs", type=click.Choice(SYSTEM_CODES), default="EPSG:4326",
              show_default=True, help="System the pair is expressed in.")
@click.option("--to-crs", type=click.Choice(SYSTEM_CODES), default=None,
              help="Target system; auto-detected for geographic input when omitted.")
@click.option("--name", default=None, help="Optional point name.")
@click.option("--validate", "validate_input", is_flag=True, default=False,
              help="Reject values outside the absolute or regional ranges.")
def point(
    y: str,
    x: str,
    from_crs: str,
    to_crs: str | None,
    name: str | None,
    validate_input: bool,
) -> None:
    """Transform one point, printing a clipboard-style summary."""
    try:
        if DEFAULT_REGISTRY.get(from_crs).is_geographic:
            record_point: GeographicPoint | ProjectedPoint = GeographicPoint(y, x)
            target = to_crs or detect_best_system(y, x)
        else:
            record_point = ProjectedPoint(x, y, from_crs)
            target = to_crs or DEFAULT_REGISTRY.geographic.code

        config = BatchConfig.manual_entry(
            source_crs=from_crs, target_crs=target, validate_input=validate_input
        )
        result = transform_single(RawCoordinateRecord(record_point, name=name), config)
    except EcuaCoordError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    click.echo(format_for_copy(result))


# ---------------------------------------------------------------------------
# detect / systems — read-only helpers
# ---------------------------------------------------------------------------


@main.command(name="detect", help="Suggest the best target system for a WGS84 point.")
@click.argument("lat")
@click.argument("lng")
def detect(lat: str, lng: str) -> None:
    try:
        code = detect_best_system(lat, lng)
    except EcuaCoordError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    click.echo(f"{code}  {DEFAULT_REGISTRY.get(code).name}")


@main.command(name="systems", help="List the supported coordinate reference systems.")
def systems() -> None:
    for crs in DEFAULT_REGISTRY.list_systems():
        click.echo(f"{crs.code:<10} {crs.unit.value:<8} {crs.name} - {crs.description}")


if __name__ == "__main__":
    main()
