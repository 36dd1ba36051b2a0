import logging
import re
import typing

import pandas as pd
from stairval.notepad import Notepad

from .measurement import MeasurementRecord
from .parameters import PARAMETERS, SIDES, ParameterDefinition, find_parameter

LOGGER = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"parameter", "right", "left"}

# Sheet names that are taken to hold the hip measurements
KNOWN_SHEET_ALIASES = {"measurements", "measurement", "hip", "hip_measurements", "values"}

# Placeholders written by the export, read back as "no value"
EMPTY_MARKERS = {"-", "n/a", "na", "nan"}

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "ja", "j", "x"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "nein", ""}

_UNIT_SUFFIX = re.compile(r"\s*(°|%|mm)$")


def cell_text(value: typing.Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def to_bool(value: typing.Any) -> bool:
    """
    Strict boolean parsing:
    - True for: 1, '1', 'true', 't', 'yes', 'y', 'ja', 'j', 'x' (case-insensitive)
    - False for: 0, '0', 'false', 'f', 'no', 'n', 'nein', '', None
    - Anything else raises ValueError
    """
    if isinstance(value, bool):
        return value
    s = cell_text(value).lower()
    if s in _TRUE_VALUES:
        return True
    if s in _FALSE_VALUES:
        return False
    raise ValueError(f"cannot read {value!r} as yes/no")


def to_number_text(value: typing.Any) -> str:
    """
    Numeric cells come back as entered, minus a trailing unit glyph.
    Export placeholders ('-', 'N/A') read as empty.
    """
    s = cell_text(value)
    if s.lower() in EMPTY_MARKERS:
        return ""
    return _UNIT_SUFFIX.sub("", s)


def _looks_numeric(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


class RecordMapper:
    """
    Map a measurement sheet onto a MeasurementRecord.

    Expected layout: one row per parameter with the columns 'parameter',
    'right' and 'left'. The parameter cell may hold the id, the German label
    or the English title. Parameters that are not in the sheet keep their
    default value. Problems go to the notepad; the record is returned either way.
    """

    def apply_mapping(self, tables: dict[str, pd.DataFrame], notepad: Notepad) -> MeasurementRecord:
        record = MeasurementRecord()
        df = self._choose_table(tables, notepad)
        if df is None:
            return record

        duplicated = sorted(set(df.columns[df.columns.duplicated()]))
        if duplicated:
            notepad.add_error(f"Measurement sheet: duplicate columns after renaming: {duplicated}")
            return record

        missing = sorted(REQUIRED_COLUMNS - set(df.columns))
        if missing:
            notepad.add_error(f"Measurement sheet: missing required columns: {missing}")
            return record

        seen: set[str] = set()
        for index, row in df.iterrows():
            name = cell_text(row["parameter"])
            if not name:
                continue
            definition = find_parameter(name)
            if definition is None:
                notepad.add_warning(f"Row {index}: unknown parameter {name!r}, skipped")
                continue
            if definition.id in seen:
                notepad.add_warning(f"Row {index}: duplicate row for {definition.id!r}, keeping the first")
                continue
            seen.add(definition.id)
            self._map_row(record, notepad, definition, row, index)

        LOGGER.debug(f"Mapped {len(seen)} of {len(PARAMETERS)} parameters from sheet")
        return record

    def _choose_table(self, tables: dict[str, pd.DataFrame], notepad: Notepad) -> typing.Optional[pd.DataFrame]:
        """
        Prefer explicit sheet names (plus common aliases), else the only sheet.
        """
        for sheet_name, df in tables.items():
            if sheet_name.strip().casefold() in KNOWN_SHEET_ALIASES:
                return df
        if len(tables) == 1:
            return next(iter(tables.values()))
        if not tables:
            notepad.add_error("Workbook contains no sheets.")
        else:
            notepad.add_error(
                f"Cannot pick a measurement sheet from {sorted(tables)}; "
                f"name it one of {sorted(KNOWN_SHEET_ALIASES)}."
            )
        return None

    @staticmethod
    def _map_row(
        record: MeasurementRecord,
        notepad: Notepad,
        definition: ParameterDefinition,
        row: pd.Series,
        index: typing.Any,
    ) -> None:
        for side in SIDES:
            cell = row[side.value]
            if definition.is_boolean:
                try:
                    record.set(definition.id, side, to_bool(cell))
                except ValueError as e:
                    notepad.add_error(f"Row {index}, {definition.id} {side.value}: {e}")
            else:
                value = to_number_text(cell)
                if value and not _looks_numeric(value):
                    notepad.add_warning(f"Row {index}, {definition.id} {side.value}: {value!r} is not a number")
                record.set(definition.id, side, value)
