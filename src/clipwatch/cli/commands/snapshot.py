"""Channel snapshot command for clipwatch."""

from __future__ import annotations

import typer
from rich.console import Console

from clipwatch.cli.app import ExitCode
from clipwatch.cli.app import app
from clipwatch.cli.app import exit_code_for
from clipwatch.cli.app import load_cli_config
from clipwatch.cli.display import display_snapshot
from clipwatch.cli.display import report_error
from clipwatch.core.http import create_http_client
from clipwatch.core.watcher import build_watcher
from clipwatch.display.json import output_json
from clipwatch.errors.types import ClipwatchError


@app.command("snapshot")
async def snapshot_command(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Output in JSON format",
    ),
) -> None:
    """Show the channel's current state."""
    console = Console()
    json_mode = json_output or ctx.meta.get("json", False)

    try:
        config = load_cli_config(ctx)
        async with create_http_client(config.fetch) as client:
            watcher = build_watcher(config, client)
            snapshot = await watcher.aggregator.fetch_snapshot()
    except ClipwatchError as e:
        report_error(console, e, json_mode)
        raise typer.Exit(exit_code_for(e)) from None
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        raise typer.Exit(ExitCode.GENERAL_ERROR) from None

    if json_mode:
        output_json(snapshot)
        return

    if ctx.meta.get("quiet", False):
        state = "live" if snapshot.is_live else "offline"
        console.print(
            f"{snapshot.login}: {state} {snapshot.viewer_count} {snapshot.follower_count}"
        )
        return

    display_snapshot(console, snapshot)
