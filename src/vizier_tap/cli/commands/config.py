"""Configuration management CLI commands."""

from __future__ import annotations

import typer

from vizier_tap.cli.commands._shared import get_resolved_config
from vizier_tap.cli.state import cli_state
from vizier_tap.core.config import DEFAULT_CONFIG_PATH, load_config

config_app = typer.Typer(help="Configuration management commands")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Display resolved configuration with source attribution."""
    resolved = get_resolved_config(ctx)
    config_path = cli_state(ctx).config_file
    sources = resolved.sources

    typer.echo("Endpoint Settings (resolved):")
    typer.echo(f"  url: {resolved.tap_url} ({sources.get('tap_url', 'default')})")
    typer.echo(f"  timeout: {resolved.timeout}s ({sources.get('timeout', 'default')})")
    format_source = sources.get("default_format", "default")
    typer.echo(f"  format: {resolved.default_format} ({format_source})")

    typer.echo("")
    if resolved.active_profile:
        typer.echo(f"Active Profile: {resolved.active_profile}")
    else:
        typer.echo("Active Profile: none")

    display_path = config_path or DEFAULT_CONFIG_PATH
    typer.echo(f"Config File: {display_path}")


@config_app.command("profiles")
def config_profiles(ctx: typer.Context) -> None:
    """List configured TAP endpoint profiles."""
    state = cli_state(ctx)
    config_path = state.config_file
    app_config = load_config(config_path)
    active_profile = state.profile or app_config.default_profile

    if not app_config.profiles:
        typer.echo("No profiles configured.")
        display_path = config_path or DEFAULT_CONFIG_PATH
        typer.echo(f"Add profiles to: {display_path}")
        return

    typer.echo("Available Profiles:")
    typer.echo("")
    for name, profile in sorted(app_config.profiles.items()):
        is_active = name == active_profile
        marker = "* " if is_active else "  "
        label = " (active)" if is_active else ""
        typer.echo(f"{marker}{name}{label}")
        typer.echo(f"      url: {profile.url}")
        typer.echo(f"      timeout: {profile.timeout}s")
        if profile.description:
            typer.echo(f"      description: {profile.description}")
        typer.echo("")
