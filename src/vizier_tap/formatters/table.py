"""Rich table formatter for QueryResult output."""

from __future__ import annotations

import shutil
from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vizier_tap.formatters.base import iter_rows, registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from vizier_tap.core.models import QueryResult

_NO_RESULTS = "No results"


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"


class TableFormatter:
    def __init__(self, width: int = 40) -> None:
        self.width = width

    def format(self, result: QueryResult[Any]) -> Iterator[str]:
        if result.is_empty():
            yield _NO_RESULTS
            return

        table = Table(show_edge=True, pad_edge=True)
        for col in result.columns:
            header = f"{col.name} [{col.unit}]" if col.unit else col.name
            table.add_column(escape(header), no_wrap=True)

        for row in iter_rows(result):
            table.add_row(
                *(
                    escape(_truncate(str(v) if v is not None else "", self.width))
                    for v in row
                )
            )

        buf = StringIO()
        term_width = shutil.get_terminal_size((120, 24)).columns
        console = Console(file=buf, force_terminal=True, width=term_width)
        console.print(table)
        yield buf.getvalue().rstrip("\n")


registry.register("table", TableFormatter)
