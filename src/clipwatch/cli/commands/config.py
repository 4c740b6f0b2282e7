"""Config management commands for clipwatch."""

from __future__ import annotations

import msgspec.toml
import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from clipwatch.cli.app import ExitCode
from clipwatch.cli.app import load_cli_config
from clipwatch.cli.atyper import ATyper
from clipwatch.cli.display import report_error
from clipwatch.config.paths import config_dir
from clipwatch.config.paths import config_file
from clipwatch.config.settings import redacted
from clipwatch.display.json import output_json_pretty
from clipwatch.errors.types import ConfigurationError

# Create config group
config_app = ATyper(help="Inspect configuration settings.")


@config_app.command("show")
def config_show_command(ctx: typer.Context) -> None:
    """Display current settings with the client secret masked."""
    console = Console()
    json_mode = ctx.meta.get("json", False)
    quiet = ctx.meta.get("quiet", False)
    config_path = ctx.meta.get("config_path") or config_file()

    try:
        config = load_cli_config(ctx)
    except ConfigurationError as e:
        report_error(console, e, json_mode)
        raise typer.Exit(ExitCode.CONFIG_ERROR) from None

    data = redacted(config)

    if json_mode:
        output_json_pretty({**data, "path": str(config_path)})
        return

    if quiet:
        console.print(str(config_path))
        return

    toml_data = msgspec.toml.encode(data)
    console.print(
        Panel(Syntax(toml_data.decode(), "toml"), title=f"Config: {config_path}")
    )

    if missing := config.missing_twitch_settings():
        console.print(f"[yellow]Missing Twitch settings: {', '.join(missing)}[/yellow]")


@config_app.command("path")
def config_path_command(ctx: typer.Context) -> None:
    """Show the directory and file clipwatch reads settings from."""
    console = Console()
    json_mode = ctx.meta.get("json", False)
    quiet = ctx.meta.get("quiet", False)
    config_path = ctx.meta.get("config_path") or config_file()

    if json_mode:
        output_json_pretty(
            {"config_dir": str(config_dir()), "config_file": str(config_path)}
        )
        return

    if quiet:
        console.print(str(config_path))
        return

    console.print(f"[bold]Config directory:[/bold] {config_dir()}")
    status = "exists" if config_path.exists() else "not created"
    console.print(f"[bold]Config file:[/bold] {config_path} [dim]({status})[/dim]")
