"""Connectivity check command for clipwatch."""

from __future__ import annotations

import typer
from rich.console import Console

from clipwatch.cli.app import ExitCode
from clipwatch.cli.app import app
from clipwatch.cli.app import exit_code_for
from clipwatch.cli.app import load_cli_config
from clipwatch.cli.display import report_error
from clipwatch.core.http import create_http_client
from clipwatch.core.watcher import build_watcher
from clipwatch.display.json import output_json_pretty
from clipwatch.errors.types import ClipwatchError


@app.command("check")
async def check_command(ctx: typer.Context) -> None:
    """Verify credentials and that the channel resolves on Twitch."""
    console = Console()
    json_mode = ctx.meta.get("json", False)

    try:
        config = load_cli_config(ctx)
        async with create_http_client(config.fetch) as client:
            watcher = build_watcher(config, client)
            connected = await watcher.aggregator.check_connection()
    except ClipwatchError as e:
        report_error(console, e, json_mode)
        raise typer.Exit(exit_code_for(e)) from None

    channel = config.twitch.channel
    if json_mode:
        output_json_pretty({"channel": channel, "connected": connected})
    elif connected:
        console.print(f"[green]✓[/green] Connected to Twitch as {channel}")
    else:
        console.print(f"[red]✗[/red] Could not reach Twitch for {channel}")
        console.print("[dim]Run with --verbose to see the underlying error.[/dim]")

    if not connected:
        raise typer.Exit(ExitCode.NETWORK_ERROR)
