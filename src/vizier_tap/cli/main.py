"""vizier-tap command line: global options, command wiring and exit codes."""

from __future__ import annotations

import atexit
from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from vizier_tap.__about__ import __version__
from vizier_tap.cli.commands.config import config_app
from vizier_tap.cli.commands.query import query_command
from vizier_tap.cli.commands.select import select_command
from vizier_tap.cli.state import CliState
from vizier_tap.core.config import OutputFormat  # noqa: TC001
from vizier_tap.core.exceptions import TapError
from vizier_tap.core.exit_codes import ExitCode
from vizier_tap.core.logging import setup_logging
from vizier_tap.core.monitoring import setup_sentry

app = typer.Typer(
    help="vizier-tap - ADQL queries against the VizieR TAP service",
    no_args_is_help=True,
)

app.add_typer(config_app, name="config")
app.command("query")(query_command)
app.command("select")(select_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vizier-tap {__version__}")
        raise typer.Exit()


def _trace_invocation(command: str) -> None:
    """Wrap the rest of the process in a Sentry transaction named after the command."""
    transaction = sentry_sdk.start_transaction(op="cli", name=command)
    transaction.__enter__()

    def finish() -> None:
        transaction.__exit__(None, None, None)
        sentry_sdk.flush(timeout=2)

    atexit.register(finish)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log every query and its timing"),
    ] = False,
    log_json: Annotated[
        bool,
        typer.Option("--log-json", help="Write log events to stderr as JSON lines"),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named endpoint profile"),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="TAP sync endpoint URL"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format", "-f", help="Output format (default: config on a TTY, else csv)"
        ),
    ] = None,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
    width: Annotated[
        int,
        typer.Option("--width", help="Maximum cell width for table format"),
    ] = 40,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Suppress header row in CSV output"),
    ] = False,
) -> None:
    """vizier-tap - ADQL queries against the VizieR TAP service."""
    setup_logging(verbose, json_logs=log_json)
    if setup_sentry():
        _trace_invocation(ctx.invoked_subcommand or "vizier-tap")

    ctx.obj = CliState(
        profile=profile,
        url=url,
        config_file=config_file,
        format=output_format,
        compact=compact,
        width=width,
        no_header=no_header,
    )


def _exit_code(exc: Exception) -> int:
    if isinstance(exc, TapError):
        return exc.exit_code
    return ExitCode.GENERAL_ERROR


def run() -> None:
    """Console script entry point: report errors on stderr and exit with their code."""
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        message = e.message if isinstance(e, TapError) else str(e)
        typer.echo(f"Error: {message}", err=True)
        raise SystemExit(_exit_code(e)) from None
