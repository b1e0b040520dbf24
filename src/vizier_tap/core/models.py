"""Query result models for vizier-tap.

Pydantic models for the column schema of a TAP response and the
decoded result returned by TapClient.query().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, StrictStr, TypeAdapter

T = TypeVar("T")


class ColumnMetadata(BaseModel):
    """Metadata for a single result column."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    description: StrictStr = ""
    arraysize: StrictStr | None = None
    unit: StrictStr | None = None
    ucd: StrictStr


class QueryResult(BaseModel, Generic[T]):
    """Column schema plus decoded records, in the service's row order."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    columns: list[ColumnMetadata]
    records: list[T]

    def __len__(self) -> int:
        return len(self.records)

    def is_empty(self) -> bool:
        return not self.records

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    def as_dicts(self) -> list[dict[str, Any]]:
        """Return every record as a plain mapping keyed by column name.

        Typed records are dumped by alias so keys match the service's
        column names (``B-V`` rather than ``BV``).
        """
        return [_record_as_dict(record) for record in self.records]


def _record_as_dict(record: Any) -> dict[str, Any]:
    if isinstance(record, Mapping):
        return dict(record)
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True)
    dumped = TypeAdapter(type(record)).dump_python(record, by_alias=True)
    if not isinstance(dumped, dict):
        msg = f"Cannot render {type(record).__name__} record as a mapping"
        raise TypeError(msg)
    return dumped


_COLUMN_FIELDS = ("name", "unit", "ucd", "arraysize", "description")


def describe_columns(result: QueryResult[Any]) -> QueryResult[dict[str, Any]]:
    """Tabulate a result's column schema as a result of its own.

    Lets the formatters print metadata the same way they print rows.
    """
    columns = [ColumnMetadata(name=name, ucd="meta.note") for name in _COLUMN_FIELDS]
    records = [
        {name: getattr(col, name) for name in _COLUMN_FIELDS} for col in result.columns
    ]
    return QueryResult(columns=columns, records=records)
