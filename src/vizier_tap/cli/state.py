"""Global options, parsed once by the app callback and read by commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING

from vizier_tap.cli.output import build_formatter, resolve_format
from vizier_tap.core.config import OutputFormat  # noqa: TC001

if TYPE_CHECKING:
    import typer

    from vizier_tap.formatters.base import Formatter


@dataclass(frozen=True)
class CliState:
    profile: str | None = None
    url: str | None = None
    config_file: Path | None = None
    format: OutputFormat | None = None
    compact: bool = False
    width: int = 40
    no_header: bool = False

    def formatter(self, configured: OutputFormat) -> Formatter:
        """Formatter for stdout; ``configured`` is the resolved default_format."""
        return build_formatter(
            resolve_format(self.format, configured),
            compact=self.compact,
            width=self.width,
            no_header=self.no_header,
        )


def cli_state(ctx: typer.Context) -> CliState:
    """State stored by the app callback, or defaults when run without it."""
    state = ctx.find_object(CliState)
    return state if state is not None else CliState()
