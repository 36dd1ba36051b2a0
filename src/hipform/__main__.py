"""
Command‑line interface for the hip measurement form.
Builds a MeasurementRecord from an optional workbook plus --set overrides,
shows per-field classification, and exports the table as HTML or
tab-separated text (optionally straight to the clipboard).
"""

import logging
import pathlib
import sys
import typing

import click
import pandas as pd
from stairval.notepad import Notepad, create_notepad

from .classification import STATUS_CLI_COLORS, classify_record
from .clipboard import copy_payload
from .export import display_cell, serialize
from .loader import load_sheets_as_tables
from .mapper import RecordMapper, to_bool, to_number_text
from .measurement import MeasurementRecord
from .parameters import PARAMETERS, SIDES, Side, find_parameter, get_parameter

LOGGER = logging.getLogger(__name__)

SetOverride = tuple[str, str, str]

workbook_argument = click.argument(
    "workbook",
    required=False,
    type=click.Path(exists=True, dir_okay=False),
)
set_option = click.option(
    "-s",
    "--set",
    "overrides",
    multiple=True,
    nargs=3,
    metavar="PARAM SIDE VALUE",
    help="set one value, e.g. --set femoralTorsion right 30 (repeatable)",
)


@click.group()
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def main(verbose_logging: bool, log_file_path: typing.Optional[str]):
    """hipform: bilateral hip radiographic parameters, classified and exported."""
    _configure_logging(verbose_logging, log_file_path)


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]) -> None:
    # configure logging
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
            force=True,
        )


@main.command(name="parameters")
def parameters():
    """
    List every parameter with its kind and reference range.
    """
    for definition in PARAMETERS:
        click.echo(
            f"{definition.id:20} {definition.label:40} {definition.kind.value:16} "
            f"{definition.range_label or '-'}"
        )


@main.command(name="classify")
@workbook_argument
@set_option
def classify_command(workbook: typing.Optional[str], overrides: tuple[SetOverride, ...]):
    """
    Show the display value and status of every field, coloured by status.
    """
    record = _build_record(workbook, overrides)
    for parameter_id, statuses in classify_record(record).items():
        definition = get_parameter(parameter_id)
        cells = []
        for side in SIDES:
            status = statuses[side]
            text = f"{display_cell(definition, record.get(parameter_id, side))} ({status.value})"
            cells.append(click.style(f"{text:18}", fg=STATUS_CLI_COLORS[status]))
        click.echo(f"{definition.label:40} {cells[0]} {cells[1]} [{definition.export_reference}]")


@main.command(name="export")
@workbook_argument
@set_option
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["plain", "html"]),
    default="plain",
    show_default=True,
    help="which payload to print or write",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="write the payload to this file instead of stdout",
)
@click.option("--copy", "copy_to_clipboard", is_flag=True, help="copy HTML + plain text to the clipboard")
def export_command(
    workbook: typing.Optional[str],
    overrides: tuple[SetOverride, ...],
    output_format: str,
    output_path: typing.Optional[str],
    copy_to_clipboard: bool,
):
    """
    Export the table as HTML or tab-separated text.
    """
    record = _build_record(workbook, overrides)
    payload = serialize(record)

    if copy_to_clipboard:
        if not copy_payload(payload):
            click.echo("Error: could not copy the export to the clipboard", err=True)
            sys.exit(1)
        click.echo("Copied export to clipboard")
        if not output_path:
            return

    content = payload.markup if output_format == "html" else payload.plain
    if output_path:
        with open(output_path, "w", encoding="utf-8") as out_f:
            out_f.write(content)
        click.echo(f"Wrote {output_format} export to {output_path}")
    else:
        click.echo(content)


@main.command(name="template")
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="path of the .xlsx or .csv input sheet to create",
)
def template(output_path: str):
    """
    Write an empty input sheet with one row per parameter.
    """
    out = pathlib.Path(output_path)
    df = pd.DataFrame(
        {
            "parameter": [p.id for p in PARAMETERS],
            "right": ["" for _ in PARAMETERS],
            "left": ["" for _ in PARAMETERS],
            "reference": [p.range_label for p in PARAMETERS],
        }
    )
    suffix = out.suffix.lower()
    if suffix == ".csv":
        df.to_csv(out, index=False)
    elif suffix in {".xlsx", ".xlsm"}:
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="measurements", index=False)
    else:
        click.echo(f"Error: unsupported template type {out.suffix!r}; use .xlsx or .csv", err=True)
        sys.exit(1)
    click.echo(f"Wrote template to {out}")


def _build_record(workbook: typing.Optional[str], overrides: tuple[SetOverride, ...]) -> MeasurementRecord:
    if workbook:
        record = _load_record(workbook)
    else:
        record = MeasurementRecord()
    for parameter, side, value in overrides:
        _apply_override(record, parameter, side, value)
    return record


def _load_record(workbook: str) -> MeasurementRecord:
    LOGGER.info(f"Beginning parse of '{workbook}'")
    try:
        tables = load_sheets_as_tables(workbook)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    LOGGER.debug(f"Loaded sheets: {list(tables.keys())}")

    notepad = create_notepad("measurements")
    record = RecordMapper().apply_mapping(tables, notepad)
    _report_issues(notepad)
    if notepad.has_errors(include_subsections=True):
        sys.exit(1)
    return record


def _apply_override(record: MeasurementRecord, parameter: str, side: str, value: str) -> None:
    definition = find_parameter(parameter)
    if definition is None:
        raise click.BadParameter(f"unknown parameter {parameter!r}", param_hint="--set")
    try:
        resolved_side = Side.from_label(side)
    except KeyError:
        raise click.BadParameter(f"unknown side {side!r}; use right or left", param_hint="--set")
    if definition.is_boolean:
        try:
            parsed = to_bool(value)
        except ValueError as e:
            raise click.BadParameter(f"{definition.id}: {e}", param_hint="--set")
        record.set(definition.id, resolved_side, parsed)
    else:
        record.set(definition.id, resolved_side, to_number_text(value))


def _report_issues(notepad: Notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in workbook:", err=True)
        for err in notepad.errors():
            LOGGER.error(err.message)
            click.echo(f"- {err.message}", err=True)
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in workbook:", err=True)
        for w in notepad.warnings():
            LOGGER.warning(w.message)
            click.echo(f"- {w.message}", err=True)


if __name__ == "__main__":
    main()
