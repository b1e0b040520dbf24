"""Tests for exception hierarchy and exit codes."""

import pytest

from vizier_tap.core.exceptions import (
    ConfigError,
    DeserializationError,
    InputError,
    NetworkError,
    NonSuccessStatusError,
    RowLengthMismatchError,
    TapError,
    TimeoutError,
    UnexpectedSchemaError,
)
from vizier_tap.core.exit_codes import ExitCode


@pytest.mark.unit
class TestExitCodes:
    def test_exit_code_values(self):
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.USAGE_ERROR == 2
        assert ExitCode.INPUT_ERROR == 3
        assert ExitCode.OUTPUT_ERROR == 4
        assert ExitCode.NETWORK_ERROR == 5
        assert ExitCode.TIMEOUT == 6
        assert ExitCode.CONFIG_ERROR == 7
        assert ExitCode.SERVICE_ERROR == 8
        assert ExitCode.SCHEMA_ERROR == 9
        assert ExitCode.DECODE_ERROR == 10

    def test_exit_code_is_int(self):
        for code in ExitCode:
            assert isinstance(code, int)


@pytest.mark.unit
class TestTapError:
    def test_base_exception(self):
        err = TapError("test error")
        assert str(err) == "test error"
        assert err.message == "test error"
        assert err.exit_code == ExitCode.GENERAL_ERROR


@pytest.mark.unit
class TestNetworkErrors:
    def test_network_exit_code(self):
        assert NetworkError("refused").exit_code == ExitCode.NETWORK_ERROR

    def test_timeout_exit_code(self):
        assert TimeoutError("slow").exit_code == ExitCode.TIMEOUT

    def test_timeout_inherits_from_network(self):
        err = TimeoutError("slow")
        assert isinstance(err, NetworkError)
        assert isinstance(err, TapError)


@pytest.mark.unit
class TestNonSuccessStatusError:
    def test_carries_status_code(self):
        err = NonSuccessStatusError(503, "http://tap.example.org/tap/sync")
        assert err.status_code == 503
        assert err.url == "http://tap.example.org/tap/sync"
        assert "503" in err.message
        assert err.exit_code == ExitCode.SERVICE_ERROR

    def test_message_without_url(self):
        assert NonSuccessStatusError(404).message == "Non-success status code: 404"


@pytest.mark.unit
class TestSchemaErrors:
    def test_exit_code(self):
        assert UnexpectedSchemaError("no metadata").exit_code == ExitCode.SCHEMA_ERROR

    def test_row_length_mismatch_is_schema_error(self):
        err = RowLengthMismatchError(row_index=4, row_length=3, column_count=2)
        assert isinstance(err, UnexpectedSchemaError)
        assert err.row_index == 4
        assert err.message == "Row 4 has 3 values but metadata describes 2 columns"


@pytest.mark.unit
class TestDeserializationError:
    def test_row_index(self):
        err = DeserializationError("bad row", row_index=7)
        assert err.row_index == 7
        assert err.exit_code == ExitCode.DECODE_ERROR

    def test_row_index_optional(self):
        assert DeserializationError("bad").row_index is None


@pytest.mark.unit
class TestExceptionCatching:
    def test_catch_all_by_base(self):
        """All specific exceptions are caught by TapError."""
        for exc_class in [
            NetworkError,
            TimeoutError,
            UnexpectedSchemaError,
            DeserializationError,
            InputError,
            ConfigError,
        ]:
            with pytest.raises(TapError):
                raise exc_class("test")

    def test_status_error_caught_by_base(self):
        with pytest.raises(TapError):
            raise NonSuccessStatusError(500)
