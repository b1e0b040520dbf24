"""Formatter protocol and registry for output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from vizier_tap.core.models import QueryResult


@runtime_checkable
class Formatter(Protocol):
    """Protocol for output formatters.

    Each formatter transforms a QueryResult into lines of formatted text.
    """

    def format(self, result: QueryResult[Any]) -> Iterator[str]:
        """Transform a QueryResult into formatted output lines."""
        ...


def iter_rows(result: QueryResult[Any]) -> Iterator[list[Any]]:
    """Yield each record's values in column order; absent keys become None."""
    names = result.column_names
    for record in result.as_dicts():
        yield [record.get(name) for name in names]


class FormatterRegistry:
    """Registry for looking up formatters by name."""

    def __init__(self) -> None:
        self._formatters: dict[str, type[Formatter]] = {}

    def register(self, name: str, formatter_class: type[Formatter]) -> None:
        self._formatters[name] = formatter_class

    def get(self, name: str, **kwargs: object) -> Formatter:
        """Return a formatter instance by name.

        Raises KeyError if the format name is not registered.
        """
        if name not in self._formatters:
            available = ", ".join(sorted(self._formatters))
            msg = f"Unknown format {name!r}. Available: {available}"
            raise KeyError(msg)
        return self._formatters[name](**kwargs)

    @property
    def available(self) -> list[str]:
        return sorted(self._formatters)


# Global registry instance populated by formatter modules.
registry = FormatterRegistry()
