from __future__ import annotations

import sys
from typing import Annotated

import typer

from vizier_tap.cli.commands._shared import emit_result, get_client
from vizier_tap.core.exceptions import InputError
from vizier_tap.core.exit_codes import ExitCode
from vizier_tap.core.query_source import resolve_query_source


def query_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="ADQL file to execute"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Execute inline ADQL query"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Request timeout in seconds"),
    ] = None,
    columns: Annotated[
        bool,
        typer.Option("--columns", help="Show column metadata instead of rows"),
    ] = False,
) -> None:
    """Execute an ADQL query from file, inline (-e), or stdin."""
    try:
        is_tty = sys.stdin.isatty()
    except (ValueError, AttributeError):
        is_tty = False
    if execute is None and file is None and is_tty:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        adql = resolve_query_source(inline=execute, file_path=file)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    with get_client(ctx, timeout=timeout) as client:
        result = client.query(adql)

    emit_result(ctx, result, client.config.default_format, schema_only=columns)
