"""Config resolution, client creation and result output for commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vizier_tap.cli.output import write_result
from vizier_tap.cli.state import cli_state
from vizier_tap.core.client import TapClient
from vizier_tap.core.config import load_config, resolve_config

if TYPE_CHECKING:
    import typer

    from vizier_tap.core.config import OutputFormat, ResolvedConfig
    from vizier_tap.core.models import QueryResult


def get_resolved_config(
    ctx: typer.Context, timeout: float | None = None
) -> ResolvedConfig:
    state = cli_state(ctx)
    return resolve_config(
        load_config(state.config_file),
        profile_name=state.profile,
        url=state.url,
        timeout=timeout,
    )


def get_client(ctx: typer.Context, timeout: float | None = None) -> TapClient:
    return TapClient(get_resolved_config(ctx, timeout=timeout))


def emit_result(
    ctx: typer.Context,
    result: QueryResult[Any],
    configured: OutputFormat,
    *,
    schema_only: bool = False,
) -> None:
    formatter = cli_state(ctx).formatter(configured)
    write_result(result, formatter, schema_only=schema_only)
