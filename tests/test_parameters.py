import pytest

from hipform.parameters import (
    EXPORT_ORDER,
    PARAMETERS,
    ParameterDefinition,
    ParameterKind,
    ReferenceRange,
    Side,
    find_parameter,
    get_parameter,
)


def test_catalogue_has_fourteen_unique_parameters():
    ids = [p.id for p in PARAMETERS]
    assert len(ids) == 14
    assert len(set(ids)) == 14


def test_export_order_covers_catalogue_exactly():
    assert len(EXPORT_ORDER) == 14
    assert set(EXPORT_ORDER) == {p.id for p in PARAMETERS}


def test_reference_ranges_match_form():
    assert get_parameter("femoralTorsion").reference_range == ReferenceRange(10, 25)
    assert get_parameter("tibialTorsion").reference_range == ReferenceRange(15, 30)
    assert get_parameter("ccd").reference_range == ReferenceRange(120, 135)
    assert get_parameter("alpha").reference_range == ReferenceRange(0, 60)
    assert get_parameter("lce").reference_range == ReferenceRange(23, 33)
    assert get_parameter("acetabularIndex").reference_range == ReferenceRange(3, 13)
    assert get_parameter("retroversionIndex").reference_range == ReferenceRange(0, 0)


def test_boolean_signs_are_negative_is_normal():
    signs = {"crossingSign", "ischialSpineSign", "posteriorWallSign", "crossoverSign"}
    for parameter_id in signs:
        definition = get_parameter(parameter_id)
        assert definition.kind is ParameterKind.BOOLEAN
        assert definition.negative_is_normal
        assert definition.export_reference == "Nein"
    # modalities are yes/no flags without a norm
    assert not get_parameter("mri").negative_is_normal
    assert get_parameter("xrayEOS").export_reference == "-"


def test_leg_length_is_free_text():
    definition = get_parameter("legLength")
    assert definition.kind is ParameterKind.TEXT_LENGTH
    assert definition.reference_range is None
    assert definition.default_value == ""


def test_get_parameter_unknown_raises():
    with pytest.raises(KeyError):
        get_parameter("kneeAngle")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("femoralTorsion", "femoralTorsion"),
        ("FEMORALTORSION", "femoralTorsion"),
        ("CCD-Winkel", "ccd"),
        ("  Alpha Angle ", "alpha"),
        ("Beinlänge", "legLength"),
        ("Cross-over sign (figure of 8)", "crossoverSign"),
    ],
)
def test_find_parameter_by_id_label_or_title(name, expected):
    assert find_parameter(name).id == expected


@pytest.mark.parametrize("name", ["", "   ", "Knee"])
def test_find_parameter_returns_none(name):
    assert find_parameter(name) is None


@pytest.mark.parametrize(
    "label, expected",
    [("right", Side.RIGHT), ("LEFT", Side.LEFT), ("rechts", Side.RIGHT), ("l", Side.LEFT), (Side.LEFT, Side.LEFT)],
)
def test_side_from_label(label, expected):
    assert Side.from_label(label) is expected


def test_side_from_label_unknown_raises():
    with pytest.raises(KeyError):
        Side.from_label("middle")


def test_definition_rejects_inconsistent_kind():
    with pytest.raises(ValueError):
        ParameterDefinition(
            id="x", label="x", title="x", kind=ParameterKind.BOOLEAN, reference_range=ReferenceRange(0, 1)
        )
    with pytest.raises(ValueError):
        ParameterDefinition(id="y", label="y", title="y", kind=ParameterKind.NUMERIC_ANGLE, negative_is_normal=True)


def test_reference_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        ReferenceRange(10, 5)
