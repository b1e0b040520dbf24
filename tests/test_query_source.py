"""Tests for query source resolution."""

import io
from pathlib import Path
from unittest.mock import patch

import pytest

from vizier_tap.core.exceptions import InputError
from vizier_tap.core.query_source import resolve_query_source

FIXTURE_ADQL = str(Path(__file__).parent / "fixtures" / "fonac_top10.adql")


@pytest.mark.unit
def test_inline_query():
    result = resolve_query_source(inline="SELECT TOP 1 * FROM t", file_path=None)
    assert result == "SELECT TOP 1 * FROM t"


@pytest.mark.unit
def test_inline_takes_precedence_over_file():
    result = resolve_query_source(inline="SELECT 1", file_path=FIXTURE_ADQL)
    assert result == "SELECT 1"


@pytest.mark.unit
def test_file_query():
    result = resolve_query_source(inline=None, file_path=FIXTURE_ADQL)
    assert result == 'SELECT TOP 10 * FROM "I/261/fonac"'


@pytest.mark.unit
def test_file_not_found_raises_input_error():
    with pytest.raises(InputError, match="Query file not found"):
        resolve_query_source(inline=None, file_path="/nonexistent/file.adql")


@pytest.mark.unit
def test_stdin_query():
    with (
        patch("sys.stdin", new=io.StringIO("SELECT 99")),
        patch("sys.stdin.isatty", return_value=False),
    ):
        result = resolve_query_source(inline=None, file_path=None)
    assert result == "SELECT 99"


@pytest.mark.unit
def test_no_query_source_raises_input_error():
    with (
        patch("sys.stdin.isatty", return_value=True),
        pytest.raises(InputError, match="No query provided"),
    ):
        resolve_query_source(inline=None, file_path=None)


@pytest.mark.unit
def test_surrounding_whitespace_stripped():
    result = resolve_query_source(inline="\n  SELECT 1 \t\n", file_path=None)
    assert result == "SELECT 1"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_blank_inline_query_rejected(text):
    with pytest.raises(InputError, match="Empty ADQL query from -e"):
        resolve_query_source(inline=text, file_path=None)


@pytest.mark.unit
def test_blank_query_file_rejected(temp_dir):
    path = temp_dir / "blank.adql"
    path.write_text("\n\n")
    with pytest.raises(InputError, match="Empty ADQL query from"):
        resolve_query_source(inline=None, file_path=str(path))


@pytest.mark.unit
def test_blank_stdin_rejected():
    with (
        patch("sys.stdin", new=io.StringIO("  \n")),
        patch("sys.stdin.isatty", return_value=False),
        pytest.raises(InputError, match="Empty ADQL query from stdin"),
    ):
        resolve_query_source(inline=None, file_path=None)


@pytest.mark.unit
def test_directory_is_input_error(temp_dir):
    with pytest.raises(InputError, match="Cannot read query file"):
        resolve_query_source(inline=None, file_path=str(temp_dir))
