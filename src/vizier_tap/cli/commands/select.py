from __future__ import annotations

from typing import Annotated

import typer

from vizier_tap.cli.commands._shared import emit_result, get_client
from vizier_tap.core.query import QueryBuilder


def select_command(
    ctx: typer.Context,
    select: Annotated[
        str,
        typer.Argument(help='SELECT fragment, e.g. "SELECT TOP 10 *"'),
    ],
    from_: Annotated[
        str,
        typer.Argument(
            metavar="FROM", help="FROM fragment, e.g. 'FROM \"I/261/fonac\"'"
        ),
    ],
    where: Annotated[
        str,
        typer.Option("--where", "-w", help="WHERE fragment, keyword included"),
    ] = "",
    show: Annotated[
        bool,
        typer.Option("--show", help="Print the assembled ADQL and exit"),
    ] = False,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Request timeout in seconds"),
    ] = None,
) -> None:
    """Assemble an ADQL query from SELECT/FROM/WHERE fragments and run it."""
    if show:
        query = QueryBuilder().with_select(select).with_from(from_).with_where(where)
        typer.echo(query.build())
        return

    with get_client(ctx, timeout=timeout) as client:
        query = (
            client.query_builder()
            .with_select(select)
            .with_from(from_)
            .with_where(where)
        )
        result = query.send()

    emit_result(ctx, result, client.config.default_format)
