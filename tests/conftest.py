import pytest

from hipform.measurement import MeasurementRecord


@pytest.fixture
def record() -> MeasurementRecord:
    """
    A fresh record with every field at its default (False / empty).
    """
    return MeasurementRecord()


@pytest.fixture(autouse=True)
def skip_tk(monkeypatch):
    # keep the test run from opening Tk windows or touching the real clipboard through Tk
    monkeypatch.setenv("HIPFORM_SKIP_TK", "1")
