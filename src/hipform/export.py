"""
Export of a MeasurementRecord as a clipboard payload.

One pass over the record builds an ExportTable of typed cells; two renderers
turn that table into an HTML table (for word processors) and tab-separated
plain text (for everything else). Both carry the same cell text in the same
order.
"""

import html
from dataclasses import dataclass
from enum import Enum, auto

from .measurement import MeasurementRecord, RawValue
from .parameters import EXPORT_ORDER, SIDES, ParameterDefinition, ParameterKind, get_parameter

HEADER = ("Parameter", "Rechts", "Links", "Referenzbereich")

YES_LABEL = "Ja"
NO_LABEL = "Nein"
EMPTY_PLACEHOLDER = "-"
NOT_APPLICABLE_PLACEHOLDER = "N/A"

TABLE_OPEN = '<table border="1" cellpadding="5" cellspacing="0" style="border-collapse: collapse;">'
HEADER_CELL_STYLE = "background-color: #f2f2f2; font-weight: bold; padding: 8px; border: 1px solid #ddd;"
PARAMETER_CELL_STYLE = "font-weight: bold; padding: 8px; border: 1px solid #ddd;"
VALUE_CELL_STYLE = "padding: 8px; border: 1px solid #ddd;"


class CellRole(Enum):
    HEADER = auto()
    PARAMETER = auto()
    VALUE = auto()


@dataclass(frozen=True)
class Cell:
    text: str
    role: CellRole = CellRole.VALUE


Row = tuple[Cell, ...]


@dataclass(frozen=True)
class ExportTable:
    """Header row followed by one row per parameter, in export order."""
    rows: tuple[Row, ...]

    def texts(self) -> list[list[str]]:
        return [[cell.text for cell in row] for row in self.rows]


@dataclass(frozen=True)
class Payload:
    """The two clipboard representations of one export."""
    markup: str
    plain: str


def display_cell(definition: ParameterDefinition, raw: RawValue) -> str:
    """
    Text shown for one raw value in the export.

    Booleans become Ja/Nein. Numeric values get the unit glyph, or '-' when
    empty. The free-text leg length is copied verbatim, or 'N/A' when empty.
    """
    if definition.kind is ParameterKind.BOOLEAN:
        return YES_LABEL if raw else NO_LABEL
    text = raw if isinstance(raw, str) else str(raw)
    if definition.kind is ParameterKind.TEXT_LENGTH:
        return text if text else NOT_APPLICABLE_PLACEHOLDER
    return f"{text}{definition.unit}" if text.strip() else EMPTY_PLACEHOLDER


def build_rows(record: MeasurementRecord) -> ExportTable:
    rows: list[Row] = [tuple(Cell(title, CellRole.HEADER) for title in HEADER)]
    for parameter_id in EXPORT_ORDER:
        definition = get_parameter(parameter_id)
        values = [display_cell(definition, record.get(parameter_id, side)) for side in SIDES]
        rows.append(
            (
                Cell(definition.label, CellRole.PARAMETER),
                *(Cell(value) for value in values),
                Cell(definition.export_reference),
            )
        )
    return ExportTable(rows=tuple(rows))


def _render_cell(cell: Cell) -> str:
    text = html.escape(cell.text, quote=False)
    if cell.role is CellRole.HEADER:
        return f'<th style="{HEADER_CELL_STYLE}">{text}</th>'
    if cell.role is CellRole.PARAMETER:
        return f'<td style="{PARAMETER_CELL_STYLE}">{text}</td>'
    return f'<td style="{VALUE_CELL_STYLE}">{text}</td>'


def render_markup(table: ExportTable) -> str:
    parts = [TABLE_OPEN]
    for row in table.rows:
        parts.append("<tr>")
        parts.extend(_render_cell(cell) for cell in row)
        parts.append("</tr>")
    parts.append("</table>")
    return "".join(parts)


def render_plain(table: ExportTable) -> str:
    return "\n".join("\t".join(cell.text for cell in row) for row in table.rows)


def serialize(record: MeasurementRecord) -> Payload:
    """Build both payload strings from one pass over the record."""
    table = build_rows(record)
    return Payload(markup=render_markup(table), plain=render_plain(table))
