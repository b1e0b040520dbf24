"""VizieR TAP client."""

from vizier_tap.__about__ import __version__
from vizier_tap.core.client import DEFAULT_VIZIER_TAP_URL, AsyncTapClient, TapClient
from vizier_tap.core.exceptions import (
    DeserializationError,
    NetworkError,
    NonSuccessStatusError,
    TapError,
    UnexpectedSchemaError,
)
from vizier_tap.core.models import ColumnMetadata, QueryResult
from vizier_tap.core.parser import parse_query_result
from vizier_tap.core.query import QueryBuilder

__all__ = [
    "DEFAULT_VIZIER_TAP_URL",
    "AsyncTapClient",
    "ColumnMetadata",
    "DeserializationError",
    "NetworkError",
    "NonSuccessStatusError",
    "QueryBuilder",
    "QueryResult",
    "TapClient",
    "TapError",
    "UnexpectedSchemaError",
    "__version__",
    "parse_query_result",
]
