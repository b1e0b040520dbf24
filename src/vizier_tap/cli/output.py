"""Rendering query results on stdout.

``--format`` wins when given. Otherwise a terminal gets the configured
``default_format`` and anything else (a pipe, a file) gets csv, so
``vizier-tap query -e ... | sort`` stays machine readable.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from vizier_tap.core.config import OutputFormat
from vizier_tap.core.models import describe_columns
from vizier_tap.formatters import registry

if TYPE_CHECKING:
    from vizier_tap.core.models import QueryResult
    from vizier_tap.formatters.base import Formatter

# The one CLI option each formatter understands.
_FORMAT_OPTION: dict[OutputFormat, str] = {
    OutputFormat.TABLE: "width",
    OutputFormat.JSON: "compact",
    OutputFormat.CSV: "no_header",
}


def stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def resolve_format(
    flag: OutputFormat | None, configured: OutputFormat = OutputFormat.TABLE
) -> OutputFormat:
    if flag is not None:
        return flag
    return configured if stdout_is_tty() else OutputFormat.CSV


def build_formatter(
    fmt: OutputFormat,
    *,
    compact: bool = False,
    width: int = 40,
    no_header: bool = False,
) -> Formatter:
    options: dict[str, object] = {
        "width": width,
        "compact": compact,
        "no_header": no_header,
    }
    option = _FORMAT_OPTION[fmt]
    return registry.get(fmt.value, **{option: options[option]})


def write_result(
    result: QueryResult[Any], formatter: Formatter, *, schema_only: bool = False
) -> None:
    """Write ``result`` through ``formatter``, one line at a time.

    With ``schema_only`` the column metadata is written instead of the rows.
    """
    if schema_only:
        result = describe_columns(result)
    for line in formatter.format(result):
        sys.stdout.write(line + "\n")
