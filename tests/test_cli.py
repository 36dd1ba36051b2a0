"""
CLI tests through click's CliRunner: listing, classifying and exporting,
workbook input, and the clipboard switch (with copy_payload patched).
"""

import pandas as pd
import pytest
from click.testing import CliRunner
from unittest.mock import patch

from hipform.__main__ import _report_issues, main
from stairval.notepad import create_notepad


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workbook(tmp_path):
    df = pd.DataFrame(
        {
            "parameter": ["femoralTorsion", "ccd", "crossingSign", "legLength"],
            "right": ["30", "", "ja", ""],
            "left": ["", "125", "nein", "12"],
        }
    )
    path = tmp_path / "hip.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as w:
        df.to_excel(w, sheet_name="measurements", index=False)
    return str(path)


def test_parameters_lists_catalogue(runner):
    result = runner.invoke(main, ["parameters"])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().split("\n")
    assert len(lines) == 14
    assert lines[1].startswith("femoralTorsion")
    assert "10-25°" in lines[1]


def test_export_plain_default_record(runner):
    result = runner.invoke(main, ["export"])
    assert result.exit_code == 0, result.output
    lines = result.output.rstrip("\n").split("\n")
    assert len(lines) == 15
    assert lines[0] == "Parameter\tRechts\tLinks\tReferenzbereich"


def test_export_with_overrides(runner):
    result = runner.invoke(
        main,
        ["export", "--set", "femoralTorsion", "right", "30", "-s", "Crossing Sign", "rechts", "ja"],
    )
    assert result.exit_code == 0, result.output
    assert "Femorale Torsion (nach Murphy)\t30°\t-\t10–25°" in result.output
    assert "Crossing Sign\tJa\tNein\tNein" in result.output


def test_export_html_to_file(runner, tmp_path):
    out = tmp_path / "export.html"
    result = runner.invoke(main, ["export", "-s", "ccd", "left", "125", "--format", "html", "-o", str(out)])
    assert result.exit_code == 0, result.output
    content = out.read_text(encoding="utf-8")
    assert content.startswith("<table")
    assert ">125°</td>" in content


def test_export_from_workbook(runner, workbook):
    result = runner.invoke(main, ["export", workbook])
    assert result.exit_code == 0, result.output
    assert "Femorale Torsion (nach Murphy)\t30°\t-\t10–25°" in result.output
    assert "CCD-Winkel\t-\t125°\t120–135°" in result.output
    assert "Beinlänge\tN/A\t12\t-" in result.output


def test_classify_shows_statuses(runner, workbook):
    result = runner.invoke(main, ["classify", workbook])
    assert result.exit_code == 0, result.output
    assert "30° (high)" in result.output
    assert "125° (normal)" in result.output
    assert "Ja (abnormal)" in result.output
    assert "- (neutral)" in result.output


def test_bad_override_is_a_usage_error(runner):
    result = runner.invoke(main, ["export", "--set", "kneeAngle", "right", "1"])
    assert result.exit_code == 2
    assert "unknown parameter" in result.output

    result = runner.invoke(main, ["export", "--set", "mri", "right", "maybe"])
    assert result.exit_code == 2

    result = runner.invoke(main, ["export", "--set", "ccd", "middle", "1"])
    assert result.exit_code == 2


def test_workbook_errors_exit_nonzero(runner, tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("parameter,right,left\nmri,maybe,\n", encoding="utf-8")
    result = runner.invoke(main, ["export", str(path)])
    assert result.exit_code == 1
    assert "Errors found in workbook" in result.output


def test_bilingual_side_headers_exit_nonzero(runner, tmp_path):
    path = tmp_path / "hip.csv"
    path.write_text("Parameter,Rechts,Right,Links\nccd,125,125,130\n", encoding="utf-8")
    result = runner.invoke(main, ["export", str(path)])
    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "duplicate columns" in result.output


def test_copy_success(runner):
    with patch("hipform.__main__.copy_payload", return_value=True) as copy:
        result = runner.invoke(main, ["export", "--copy"])
    assert result.exit_code == 0, result.output
    assert "Copied export to clipboard" in result.output
    payload = copy.call_args[0][0]
    assert payload.markup.startswith("<table")


def test_copy_failure_exits_nonzero(runner):
    with patch("hipform.__main__.copy_payload", return_value=False):
        result = runner.invoke(main, ["export", "--copy"])
    assert result.exit_code == 1
    assert "could not copy" in result.output


@pytest.mark.parametrize("name", ["template.xlsx", "template.csv"])
def test_template_round_trip(runner, tmp_path, name):
    out = tmp_path / name
    result = runner.invoke(main, ["template", "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()

    result = runner.invoke(main, ["export", str(out)])
    assert result.exit_code == 0, result.output
    assert "MRI\tNein\tNein\t-" in result.output


def test_template_rejects_unknown_suffix(runner, tmp_path):
    result = runner.invoke(main, ["template", "-o", str(tmp_path / "template.json")])
    assert result.exit_code == 1


def test_log_file_option_writes_log(runner, tmp_path, workbook):
    log_path = tmp_path / "hipform.log"
    result = runner.invoke(main, ["--log-file-path", str(log_path), "export", workbook])
    assert result.exit_code == 0, result.output
    assert "Beginning parse of" in log_path.read_text(encoding="utf-8")


def test_report_issues_outputs_both_blocks(capsys):
    """
    When the notepad holds both warnings and errors, both sections are printed.
    """
    n = create_notepad("report")
    n.add_warning("warn 1")
    n.add_error("err 1")

    _report_issues(n)
    err = capsys.readouterr().err
    assert "Warnings found in workbook" in err
    assert "warn 1" in err
    assert "Errors found in workbook" in err
    assert "err 1" in err
