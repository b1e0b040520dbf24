"""Staged ADQL query builder.

Each stage of the builder is its own immutable type, one per combination
of {has-select, has-from}::

    QueryBuilder --with_select--> SelectQuery --with_from--> CompleteQuery
         \\--with_from--> FromQuery --with_select----------/

Only CompleteQuery has build() and send(), so a type checker rejects an
attempt to send a query that lacks its SELECT or FROM fragment, and at
runtime the method simply does not exist on the other stages.
with_where() is optional and keeps the current stage. Constructing a
later stage directly requires its fragments as keyword arguments.

Fragments are used verbatim: the caller includes the ``SELECT``,
``FROM`` and ``WHERE`` keywords in the text.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Self, TypeVar

from vizier_tap.core.exceptions import InputError
from vizier_tap.core.parser import Record

if TYPE_CHECKING:
    from vizier_tap.core.client import AsyncTapClient, TapClient

_S = TypeVar("_S", bound="_QueryStage")


@dataclass(frozen=True, kw_only=True)
class _QueryStage:
    select: str = ""
    from_: str = ""
    where: str = ""
    client: TapClient | AsyncTapClient | None = field(
        default=None, repr=False, compare=False
    )

    def with_where(self, fragment: str) -> Self:
        return dataclasses.replace(self, where=fragment)

    def _advance(self, stage: type[_S], **changes: str) -> _S:
        values = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        values.update(changes)
        return stage(**values)


@dataclass(frozen=True, kw_only=True)
class QueryBuilder(_QueryStage):
    """Initial stage: nothing supplied yet."""

    def with_select(self, fragment: str) -> SelectQuery:
        return self._advance(SelectQuery, select=fragment)

    def with_from(self, fragment: str) -> FromQuery:
        return self._advance(FromQuery, from_=fragment)


@dataclass(frozen=True, kw_only=True)
class SelectQuery(_QueryStage):
    """SELECT supplied, FROM still missing."""

    select: str

    def with_select(self, fragment: str) -> SelectQuery:
        return dataclasses.replace(self, select=fragment)

    def with_from(self, fragment: str) -> CompleteQuery:
        return self._advance(CompleteQuery, from_=fragment)


@dataclass(frozen=True, kw_only=True)
class FromQuery(_QueryStage):
    """FROM supplied, SELECT still missing."""

    from_: str

    def with_select(self, fragment: str) -> CompleteQuery:
        return self._advance(CompleteQuery, select=fragment)

    def with_from(self, fragment: str) -> FromQuery:
        return dataclasses.replace(self, from_=fragment)


@dataclass(frozen=True, kw_only=True)
class CompleteQuery(_QueryStage):
    """SELECT and FROM supplied; the query can be built and sent."""

    select: str
    from_: str

    def with_select(self, fragment: str) -> CompleteQuery:
        return dataclasses.replace(self, select=fragment)

    def with_from(self, fragment: str) -> CompleteQuery:
        return dataclasses.replace(self, from_=fragment)

    def build(self) -> str:
        """Join select, from and where with single spaces, in that order."""
        return f"{self.select} {self.from_} {self.where}"

    def send(self, target: Any = Record, **kwargs: Any) -> Any:
        """Build the query and run it through the bound client.

        Returns a QueryResult, or an awaitable of one when the builder
        was started from an AsyncTapClient.
        """
        if self.client is None:
            msg = "Query builder has no client; start it with client.query_builder()"
            raise InputError(msg)
        return self.client.query(self.build(), target, **kwargs)
