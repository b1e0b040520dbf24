"""Tests for CSVFormatter."""

import pytest

from tests.formatters._results import make_result
from vizier_tap.core.models import ColumnMetadata
from vizier_tap.formatters.csv import CSVFormatter


@pytest.mark.unit
def test_csv_header_and_rows():
    lines = list(CSVFormatter().format(make_result()))
    assert lines == ["recno,Bmag", "1,11.5", "2,12.25"]


@pytest.mark.unit
def test_csv_no_header():
    lines = list(CSVFormatter(no_header=True).format(make_result()))
    assert lines == ["1,11.5", "2,12.25"]


@pytest.mark.unit
def test_csv_none_is_empty():
    lines = list(CSVFormatter().format(make_result(records=[{"recno": 1, "Bmag": None}])))
    assert lines[1] == "1,"


@pytest.mark.unit
def test_csv_quotes_special_characters():
    result = make_result(
        records=[{"name": 'HD 1, "bright"'}],
        columns=[ColumnMetadata(name="name", ucd="meta.id")],
    )
    lines = list(CSVFormatter().format(result))
    assert lines[1] == '"HD 1, ""bright"""'


@pytest.mark.unit
def test_csv_array_values_space_joined():
    result = make_result(
        records=[{"flux": [1.5, 2.5]}],
        columns=[ColumnMetadata(name="flux", arraysize="2", ucd="phot.flux")],
    )
    assert list(CSVFormatter(no_header=True).format(result)) == ["1.5 2.5"]
