"""JSON formatter for QueryResult output."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from vizier_tap.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from vizier_tap.core.models import QueryResult


class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, result: QueryResult[Any]) -> Iterator[str]:
        names = result.column_names
        rows_as_dicts = [
            {name: record.get(name) for name in names} for record in result.as_dicts()
        ]

        if self.compact:
            yield json.dumps(rows_as_dicts, default=str)
        else:
            yield json.dumps(rows_as_dicts, indent=2, default=str)


registry.register("json", JSONFormatter)
