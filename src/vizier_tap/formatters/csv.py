"""CSV formatter for QueryResult output (RFC 4180 compliant)."""

from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING, Any

from vizier_tap.formatters.base import iter_rows, registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from vizier_tap.core.models import QueryResult


def _write_row(values: list[str]) -> str:
    buf = StringIO()
    writer = csv.writer(buf)
    writer.writerow(values)
    return buf.getvalue().rstrip("\r\n")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return str(value)


class CSVFormatter:
    def __init__(self, no_header: bool = False) -> None:
        self.no_header = no_header

    def format(self, result: QueryResult[Any]) -> Iterator[str]:
        if not self.no_header:
            yield _write_row(result.column_names)

        for row in iter_rows(result):
            yield _write_row([_cell(v) for v in row])


registry.register("csv", CSVFormatter)
