"""
Measurement domain model.

Defines the MeasurementRecord holding one right/left pair of raw values per
catalogue parameter for the active editing session.
"""

import typing
from dataclasses import dataclass, field

from .parameters import PARAMETERS, SIDES, Side, get_parameter

RawValue = typing.Union[bool, str]


def _default_values() -> dict[str, dict[Side, RawValue]]:
    return {
        definition.id: {side: definition.default_value for side in SIDES}
        for definition in PARAMETERS
    }


@dataclass
class MeasurementRecord:
    """
    Raw values of every hip parameter, per side.

    Attributes:
        values: parameter id -> {Side.RIGHT: value, Side.LEFT: value}.
            Boolean parameters hold a bool (default False), all others a
            string holding a decimal number or nothing (default "").

    Every catalogue id has exactly one entry and no other keys are allowed;
    this is checked when the record is built.
    """

    values: dict[str, dict[Side, RawValue]] = field(default_factory=_default_values)

    def __post_init__(self):
        expected = {definition.id for definition in PARAMETERS}
        have = set(self.values)
        missing = sorted(expected - have)
        if missing:
            raise ValueError(f"Record is missing parameters: {missing}")
        extra = sorted(have - expected)
        if extra:
            raise ValueError(f"Record has unknown parameters: {extra}")

        normalized: dict[str, dict[Side, RawValue]] = {}
        for definition in PARAMETERS:
            pair = self.values[definition.id]
            sides = {Side.from_label(side): value for side, value in pair.items()}
            if set(sides) != set(SIDES):
                raise ValueError(
                    f"Parameter {definition.id!r} needs exactly a right and a left value, "
                    f"got {sorted(s.value for s in sides)}"
                )
            for value in sides.values():
                self._check_value(definition.id, value)
            normalized[definition.id] = {side: sides[side] for side in SIDES}
        self.values = normalized

    @staticmethod
    def _check_value(parameter_id: str, value: typing.Any) -> None:
        definition = get_parameter(parameter_id)
        if definition.is_boolean:
            if not isinstance(value, bool):
                raise ValueError(
                    f"{parameter_id} expects a boolean, got {type(value).__name__}"
                )
        elif not isinstance(value, str):
            raise ValueError(
                f"{parameter_id} expects a string, got {type(value).__name__}"
            )

    def get(self, parameter_id: str, side: "Side | str") -> RawValue:
        get_parameter(parameter_id)
        return self.values[parameter_id][Side.from_label(side)]

    def set(self, parameter_id: str, side: "Side | str", value: RawValue) -> None:
        """Replace the value of a single (parameter, side) slot."""
        get_parameter(parameter_id)
        resolved_side = Side.from_label(side)
        self._check_value(parameter_id, value)
        self.values[parameter_id][resolved_side] = value

    def pair(self, parameter_id: str) -> tuple[RawValue, RawValue]:
        """(right, left) values of one parameter."""
        get_parameter(parameter_id)
        values = self.values[parameter_id]
        return values[Side.RIGHT], values[Side.LEFT]

    def reset(self) -> None:
        self.values = _default_values()

    def as_dict(self) -> dict[str, dict[str, RawValue]]:
        """Plain copy keyed by parameter id and 'right'/'left'."""
        return {
            parameter_id: {side.value: value for side, value in pair.items()}
            for parameter_id, pair in self.values.items()
        }
