"""Response parser for TAP ``format=json`` results.

A TAP service answers with a columnar document::

    {"metadata": [{"name": ..., "ucd": ...}, ...], "data": [[...], ...]}

The envelope is validated first; only then is each row zipped with the
column names into a name-keyed record and decoded into the caller's
target type. Decoding is all-or-nothing.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import to_json

from vizier_tap.core.exceptions import (
    DeserializationError,
    RowLengthMismatchError,
    UnexpectedSchemaError,
)
from vizier_tap.core.models import ColumnMetadata, QueryResult

T = TypeVar("T")

# Untyped target: each record stays a plain JSON object.
Record = dict[str, Any]


class _ResponseEnvelope(BaseModel):
    metadata: list[ColumnMetadata]
    data: list[list[Any]]


def _describe(exc: ValidationError, limit: int = 3) -> str:
    parts = []
    for err in exc.errors()[:limit]:
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    extra = exc.error_count() - limit
    if extra > 0:
        parts.append(f"... and {extra} more")
    return "; ".join(parts)


def parse_envelope(payload: Any) -> tuple[list[ColumnMetadata], list[list[Any]]]:
    """Validate the metadata/data shape and return both sections.

    Raises UnexpectedSchemaError when ``metadata`` or ``data`` is missing,
    not an array, a row is not an array, or a column lacks name/ucd.
    """
    if not isinstance(payload, dict):
        msg = f"Expected a JSON object, got {type(payload).__name__}"
        raise UnexpectedSchemaError(msg)
    try:
        envelope = _ResponseEnvelope.model_validate(payload)
    except ValidationError as e:
        raise UnexpectedSchemaError(
            f"Unexpected response schema: {_describe(e)}"
        ) from e
    return envelope.metadata, envelope.data


def reshape_row(
    columns: Sequence[ColumnMetadata],
    row: Sequence[Any],
    *,
    row_index: int = 0,
    strict_columns: bool = False,
) -> Record:
    """Pair each positional value with the column name at the same index.

    A short row leaves trailing columns absent from the record; whether
    that is acceptable is up to the target type. Values past the last
    column have no name and are rejected.
    """
    if len(row) > len(columns) or (strict_columns and len(row) != len(columns)):
        raise RowLengthMismatchError(row_index, len(row), len(columns))
    return {col.name: value for col, value in zip(columns, row)}


def parse_query_result(
    payload: Any,
    target: Any = Record,
    *,
    strict_columns: bool = False,
) -> QueryResult[Any]:
    """Turn a decoded JSON body into a QueryResult of ``target`` records.

    ``target`` is anything pydantic can validate a mapping into: a
    BaseModel, a dataclass, a TypedDict, ``dict[str, Any]`` or ``Any``.
    Records are validated as JSON in strict mode: a string or bool is not
    an int, though an int is still accepted for a float field.
    """
    columns, rows = parse_envelope(payload)

    adapter: TypeAdapter[Any] = TypeAdapter(target)
    records: list[Any] = []
    for index, row in enumerate(rows):
        record = reshape_row(
            columns, row, row_index=index, strict_columns=strict_columns
        )
        try:
            records.append(adapter.validate_json(to_json(record), strict=True))
        except ValidationError as e:
            msg = f"Failed to deserialize row {index}: {_describe(e)}"
            raise DeserializationError(msg, row_index=index) from e

    return QueryResult(columns=columns, records=records)


def parse_query_result_json(
    body: str | bytes,
    target: Any = Record,
    *,
    strict_columns: bool = False,
) -> QueryResult[Any]:
    """Same as parse_query_result() but starting from the raw body text."""
    try:
        payload = json.loads(body)
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError (non UTF-8 bytes)
        raise UnexpectedSchemaError(f"Response body is not valid JSON: {e}") from e
    return parse_query_result(payload, target, strict_columns=strict_columns)
