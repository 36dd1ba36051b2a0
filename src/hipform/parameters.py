"""
Parameter catalogue.

Defines the static definitions of the 14 bilateral hip radiographic
parameters: identifier, labels, kind, reference range and unit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Side(Enum):
    """Body side a value was measured on."""
    RIGHT = "right"
    LEFT = "left"

    @classmethod
    def from_label(cls, label: "str | Side") -> "Side":
        """
        Accept a Side or its string value ('right'/'left', any case).
        German 'rechts'/'links' and the single letters 'r'/'l' are accepted too.
        """
        if isinstance(label, cls):
            return label
        key = str(label).strip().lower()
        mapping = {
            "right": cls.RIGHT,
            "r": cls.RIGHT,
            "rechts": cls.RIGHT,
            "left": cls.LEFT,
            "l": cls.LEFT,
            "links": cls.LEFT,
        }
        try:
            return mapping[key]
        except KeyError:
            raise KeyError(f"Unknown side: {label!r}")


# Sides in column order of the export table
SIDES = (Side.RIGHT, Side.LEFT)


class ParameterKind(Enum):
    """How a parameter is entered, classified and displayed."""
    BOOLEAN = "boolean"
    NUMERIC_ANGLE = "numeric-angle"
    NUMERIC_PERCENT = "numeric-percent"
    NUMERIC_LENGTH = "numeric-length"
    TEXT_LENGTH = "text-length"

    @property
    def is_boolean(self) -> bool:
        return self is ParameterKind.BOOLEAN


@dataclass(frozen=True)
class ReferenceRange:
    """Closed interval [low, high] considered clinically normal."""
    low: float
    high: float

    def __post_init__(self):
        if self.low > self.high:
            raise ValueError(f"Reference range low {self.low} exceeds high {self.high}")


@dataclass(frozen=True)
class ParameterDefinition:
    """
    Static definition of one clinical measurement.

    Attributes:
        id: Identifier used as record key (e.g. 'femoralTorsion').
        label: German label used in the exported table.
        title: English label shown on the entry form.
        kind: ParameterKind of the raw value.
        reference_range: Normal interval for numeric kinds, or None.
        negative_is_normal: Boolean-norm flag (a negative sign is the normal finding).
        unit: Unit glyph appended to non-empty numeric values ('°', '%', 'mm').
        range_label: Range text shown beside the form field.
        export_reference: Text of the reference column in the export.
        description: Tooltip text explaining the measurement.
    """

    id: str
    label: str
    title: str
    kind: ParameterKind
    reference_range: Optional[ReferenceRange] = None
    negative_is_normal: bool = False
    unit: str = ""
    range_label: str = ""
    export_reference: str = "-"
    description: str = ""

    def __post_init__(self):
        if self.kind.is_boolean and self.reference_range is not None:
            raise ValueError(f"Boolean parameter {self.id!r} cannot carry a reference range")
        if not self.kind.is_boolean and self.negative_is_normal:
            raise ValueError(f"Numeric parameter {self.id!r} cannot carry a boolean norm")

    @property
    def is_boolean(self) -> bool:
        return self.kind.is_boolean

    @property
    def default_value(self) -> "bool | str":
        return False if self.kind.is_boolean else ""


PARAMETERS: tuple[ParameterDefinition, ...] = (
    ParameterDefinition(
        id="mri",
        label="MRI",
        title="MRI",
        kind=ParameterKind.BOOLEAN,
        description="For torsion measurements, labrum, cartilage, asphericity",
    ),
    ParameterDefinition(
        id="femoralTorsion",
        label="Femorale Torsion (nach Murphy)",
        title="Femoral Torsion",
        kind=ParameterKind.NUMERIC_ANGLE,
        reference_range=ReferenceRange(10, 25),
        unit="°",
        range_label="10-25°",
        export_reference="10–25°",
        description="Femoral Torsion (nach Murphy): Normal range 10-25°",
    ),
    ParameterDefinition(
        id="tibialTorsion",
        label="Tibiale Torsion (Bimalleolare Methode)",
        title="Tibial Torsion",
        kind=ParameterKind.NUMERIC_ANGLE,
        reference_range=ReferenceRange(15, 30),
        unit="°",
        range_label="15-30°",
        export_reference="15–30°",
        description="Tibial Torsion (Bimalleolare Method): Normal range 15-30°",
    ),
    ParameterDefinition(
        id="xrayEOS",
        label="Röntgen/EOS",
        title="Röntgen/EOS",
        kind=ParameterKind.BOOLEAN,
        description="Standard AP pelvis, 120cm film-tube distance",
    ),
    ParameterDefinition(
        id="legLength",
        label="Beinlänge",
        title="Leg Length",
        kind=ParameterKind.TEXT_LENGTH,
        unit="mm",
        range_label="mm",
        description="Leg Length: Measurement in millimeters",
    ),
    ParameterDefinition(
        id="ccd",
        label="CCD-Winkel",
        title="CCD Angle",
        kind=ParameterKind.NUMERIC_ANGLE,
        reference_range=ReferenceRange(120, 135),
        unit="°",
        range_label="120-135°",
        export_reference="120–135°",
        description=(
            "Caput-Collum-Diaphyseal angle: Measures neck-shaft angle. "
            "Normal: 120-135°, <120° = Coxa vara, >135° = Coxa valga"
        ),
    ),
    ParameterDefinition(
        id="alpha",
        label="Alpha-Winkel",
        title="Alpha Angle",
        kind=ParameterKind.NUMERIC_ANGLE,
        # label only states the upper bound; negative angles still classify as low
        reference_range=ReferenceRange(0, 60),
        unit="°",
        range_label="<60°",
        export_reference="<60°",
        description="Alpha angle: Measures femoral head-neck junction. Normal: <60°, Abnormal: >60°",
    ),
    ParameterDefinition(
        id="lce",
        label="LCE-Winkel",
        title="LCE Angle",
        kind=ParameterKind.NUMERIC_ANGLE,
        reference_range=ReferenceRange(23, 33),
        unit="°",
        range_label="23-33°",
        export_reference="23–33°",
        description=(
            "Lateral Center-Edge angle: Measures lateral coverage of femoral head. "
            "Dysplasia: <22°, Normal: 23-33°, Deep hip: 34-39°, Protrusion: >39°"
        ),
    ),
    ParameterDefinition(
        id="acetabularIndex",
        label="Azetabulärer Index",
        title="Acetabular Index",
        kind=ParameterKind.NUMERIC_ANGLE,
        reference_range=ReferenceRange(3, 13),
        unit="°",
        range_label="3-13°",
        export_reference="3–13°",
        description=(
            "Acetabular Index: Measures acetabular roof inclination. "
            "Dysplasia: >14°, Normal: 3-13°, Deep hip: -7-2°, Protrusion: <-8°"
        ),
    ),
    ParameterDefinition(
        id="crossingSign",
        label="Crossing Sign",
        title="Crossing Sign",
        kind=ParameterKind.BOOLEAN,
        negative_is_normal=True,
        range_label="Negative",
        export_reference="Nein",
        description="Crossing Sign: Indicator of acetabular retroversion. Normal: Negative",
    ),
    ParameterDefinition(
        id="ischialSpineSign",
        label="Ischial Spine Sign",
        title="Ischial Spine Sign",
        kind=ParameterKind.BOOLEAN,
        negative_is_normal=True,
        range_label="Negative",
        export_reference="Nein",
        description="Ischial Spine Sign: Indicator of acetabular retroversion. Normal: Negative",
    ),
    ParameterDefinition(
        id="posteriorWallSign",
        label="Posterior Wall Sign",
        title="Posterior Wall Sign",
        kind=ParameterKind.BOOLEAN,
        negative_is_normal=True,
        range_label="Negative",
        export_reference="Nein",
        description="Posterior Wall Sign: Indicator of acetabular coverage. Normal: Negative",
    ),
    ParameterDefinition(
        id="retroversionIndex",
        label="Retroversion-Index",
        title="Retroversion Index",
        kind=ParameterKind.NUMERIC_PERCENT,
        reference_range=ReferenceRange(0, 0),
        unit="%",
        range_label="0%",
        export_reference="0%",
        description="Retroversion Index: Percentage of acetabular opening with retroversion. Normal: 0%",
    ),
    ParameterDefinition(
        id="crossoverSign",
        label="Cross-over sign (figure of 8)",
        title="Cross-over Sign",
        kind=ParameterKind.BOOLEAN,
        negative_is_normal=True,
        range_label="Negative",
        export_reference="Nein",
        description="Cross-over sign (figure of 8): Indicator of acetabular retroversion. Normal: Negative",
    ),
)

PARAMETERS_BY_ID: dict[str, ParameterDefinition] = {p.id: p for p in PARAMETERS}

# Row order of the exported table
EXPORT_ORDER: tuple[str, ...] = (
    "mri",
    "femoralTorsion",
    "tibialTorsion",
    "xrayEOS",
    "legLength",
    "ccd",
    "alpha",
    "lce",
    "acetabularIndex",
    "crossingSign",
    "ischialSpineSign",
    "posteriorWallSign",
    "retroversionIndex",
    "crossoverSign",
)


def get_parameter(parameter_id: str) -> ParameterDefinition:
    """Look up a definition by id; unknown ids raise KeyError."""
    try:
        return PARAMETERS_BY_ID[parameter_id]
    except KeyError:
        raise KeyError(f"Unknown parameter: {parameter_id!r}")


def find_parameter(name: str) -> Optional[ParameterDefinition]:
    """
    Resolve a free-form name to a definition.
    Matches the id, the German label or the English title, ignoring case and
    surrounding whitespace. Returns None when nothing matches.
    """
    key = str(name).strip().casefold()
    if not key:
        return None
    for definition in PARAMETERS:
        if key in {
            definition.id.casefold(),
            definition.label.casefold(),
            definition.title.casefold(),
        }:
            return definition
    return None
