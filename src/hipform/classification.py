"""
Classification of raw values against reference ranges and boolean norms.
"""

import math
import typing
from enum import Enum

from .measurement import MeasurementRecord, RawValue
from .parameters import EXPORT_ORDER, SIDES, ParameterDefinition, Side, get_parameter


class Status(Enum):
    """Outcome of classifying one value."""
    LOW = "low"
    HIGH = "high"
    NORMAL = "normal"
    ABNORMAL = "abnormal"
    NEUTRAL = "neutral"

    @classmethod
    def from_label(cls, label: "str | Status") -> "Status":
        """
        Convert a status label into the enum.
        Unknown labels give NEUTRAL instead of raising.
        """
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        for status in cls:
            if status.value == key:
                return status
        return cls.NEUTRAL


# Display colour of each status on the entry form
STATUS_COLORS: dict[Status, str] = {
    Status.LOW: "amber",
    Status.HIGH: "red",
    Status.NORMAL: "green",
    Status.ABNORMAL: "red",
    Status.NEUTRAL: "gray",
}

# Same statuses as click.style colours for terminal output
STATUS_CLI_COLORS: dict[Status, str] = {
    Status.LOW: "yellow",
    Status.HIGH: "red",
    Status.NORMAL: "green",
    Status.ABNORMAL: "red",
    Status.NEUTRAL: "white",
}


def status_color(status: "Status | str") -> str:
    """Colour for a status; anything unrecognised gets the neutral colour."""
    return STATUS_COLORS[Status.from_label(status)]


def _parse_number(raw: typing.Any) -> typing.Optional[float]:
    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def classify_value(definition: ParameterDefinition, raw: typing.Optional[RawValue]) -> Status:
    """
    Classify a raw value of the given parameter.

    - boolean parameters: True -> ABNORMAL, False -> NORMAL, None -> NEUTRAL
    - numeric parameters with a reference range: LOW / NORMAL / HIGH
    - empty, unparsable, or no declared range -> NEUTRAL
    """
    if definition.is_boolean:
        if raw is True:
            return Status.ABNORMAL
        if raw is False:
            return Status.NORMAL
        return Status.NEUTRAL

    if definition.reference_range is None:
        return Status.NEUTRAL
    number = _parse_number(raw)
    if number is None:
        return Status.NEUTRAL
    if number < definition.reference_range.low:
        return Status.LOW
    if number > definition.reference_range.high:
        return Status.HIGH
    return Status.NORMAL


def classify(record: MeasurementRecord, parameter_id: str, side: "Side | str") -> Status:
    return classify_value(get_parameter(parameter_id), record.get(parameter_id, side))


def classify_record(record: MeasurementRecord) -> dict[str, dict[Side, Status]]:
    """Status of every slot, in export order."""
    return {
        parameter_id: {side: classify(record, parameter_id, side) for side in SIDES}
        for parameter_id in EXPORT_ORDER
    }
