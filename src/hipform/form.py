"""
Editing session behind the hip measurement entry form.

MeasurementForm owns the single MeasurementRecord of a session. Input events
replace one (parameter, side) slot at a time; the presentation layer asks for
each field's status and colour, and the copy action exports the record and
hands it to the clipboard sinks.
"""

import typing
from dataclasses import dataclass

from .classification import Status, classify, status_color
from .clipboard import ClipboardSink, copy_payload, default_sinks
from .export import Payload, serialize
from .measurement import MeasurementRecord, RawValue
from .parameters import EXPORT_ORDER, SIDES, ParameterDefinition, Side, get_parameter


@dataclass(frozen=True)
class FieldView:
    """Everything needed to draw one input field."""
    definition: ParameterDefinition
    side: Side
    value: RawValue
    status: Status
    color: str


class MeasurementForm:
    def __init__(
        self,
        record: typing.Optional[MeasurementRecord] = None,
        sinks: typing.Optional[typing.Sequence[ClipboardSink]] = None,
        tk_root: typing.Any = None,
    ):
        self.record = record if record is not None else MeasurementRecord()
        # a host that keeps a Tk root alive gets the rich and hidden-widget strategies too
        self._sinks = list(sinks) if sinks is not None else default_sinks(tk_root)
        # transient "Copied!" acknowledgment; the presentation layer clears it
        self.copied = False

    def handle_input_change(self, parameter_id: str, side: "Side | str", value: RawValue) -> None:
        self.record.set(parameter_id, side, value)

    def status(self, parameter_id: str, side: "Side | str") -> Status:
        return classify(self.record, parameter_id, side)

    def color(self, parameter_id: str, side: "Side | str") -> str:
        return status_color(self.status(parameter_id, side))

    def fields(self) -> typing.Iterator[FieldView]:
        for parameter_id in EXPORT_ORDER:
            definition = get_parameter(parameter_id)
            for side in SIDES:
                status = self.status(parameter_id, side)
                yield FieldView(
                    definition=definition,
                    side=side,
                    value=self.record.get(parameter_id, side),
                    status=status,
                    color=status_color(status),
                )

    def export(self) -> Payload:
        return serialize(self.record)

    def copy_to_clipboard(self) -> bool:
        """Export the record and copy it; sets and returns the copied flag."""
        self.copied = copy_payload(self.export(), self._sinks)
        return self.copied

    def acknowledge(self) -> None:
        self.copied = False

    def reset(self) -> None:
        self.record.reset()
        self.copied = False
