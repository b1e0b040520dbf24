"""Exception hierarchy for vizier-tap.

All exceptions carry an exit_code for CLI return value mapping.
Every failure of a query call surfaces as one of these; no partial
QueryResult is ever returned alongside an error.
"""

from __future__ import annotations

from vizier_tap.core.exit_codes import ExitCode


class TapError(Exception):
    """Base exception for all vizier-tap errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(TapError):
    """The HTTP exchange could not complete (DNS, refused connection, ...)."""

    exit_code: int = ExitCode.NETWORK_ERROR


class TimeoutError(NetworkError):
    """Connect or read timeout at the transport layer."""

    exit_code: int = ExitCode.TIMEOUT


class NonSuccessStatusError(TapError):
    """The service answered with a non-2xx status; the body is not parsed."""

    exit_code: int = ExitCode.SERVICE_ERROR

    def __init__(self, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        msg = f"Non-success status code: {status_code}"
        if url:
            msg = f"{msg} from {url}"
        super().__init__(msg)


class UnexpectedSchemaError(TapError):
    """Response body does not have the columnar metadata/data shape."""

    exit_code: int = ExitCode.SCHEMA_ERROR


class RowLengthMismatchError(UnexpectedSchemaError):
    """A data row does not line up with the metadata columns."""

    def __init__(self, row_index: int, row_length: int, column_count: int) -> None:
        self.row_index = row_index
        self.row_length = row_length
        self.column_count = column_count
        super().__init__(
            f"Row {row_index} has {row_length} values "
            f"but metadata describes {column_count} columns"
        )


class DeserializationError(TapError):
    """A reshaped record could not be decoded into the target type."""

    exit_code: int = ExitCode.DECODE_ERROR

    def __init__(self, message: str, row_index: int | None = None) -> None:
        self.row_index = row_index
        super().__init__(message)


class InputError(TapError):
    """Missing query text, unreadable file, incomplete builder dispatch."""

    exit_code: int = ExitCode.INPUT_ERROR


class ConfigError(TapError):
    """Malformed config, unknown profile, invalid value."""

    exit_code: int = ExitCode.CONFIG_ERROR
