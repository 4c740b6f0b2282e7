"""Watch command: poll the channel and auto-clip on spikes."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from clipwatch.cli.app import app
from clipwatch.cli.app import exit_code_for
from clipwatch.cli.app import load_cli_config
from clipwatch.cli.display import display_clip_history
from clipwatch.cli.display import display_tick
from clipwatch.cli.display import report_error
from clipwatch.core.http import create_http_client
from clipwatch.core.watcher import build_watcher
from clipwatch.errors.types import ClipwatchError


@app.command("watch")
async def watch_command(
    ctx: typer.Context,
    ticks: int | None = typer.Option(
        None,
        "--ticks",
        "-n",
        min=1,
        help="Stop after this many polling cycles",
    ),
    auto_clip: bool = typer.Option(
        True,
        "--auto-clip/--no-auto-clip",
        help="Create clips when follower or viewer triggers fire",
    ),
) -> None:
    """Poll the channel and clip follower surges and viewer spikes."""
    console = Console()
    json_mode = ctx.meta.get("json", False)
    quiet = ctx.meta.get("quiet", False)

    try:
        config = load_cli_config(ctx)
        async with create_http_client(config.fetch) as client:
            watcher = build_watcher(config, client)

            if auto_clip:
                enabled = await watcher.initialize()
                if not enabled and not quiet and not json_mode:
                    console.print(
                        "[yellow]Channel is offline; auto-clipping is disabled.[/yellow]"
                    )

            try:
                await watcher.run(
                    max_ticks=ticks,
                    on_tick=lambda result: display_tick(console, result, json_mode),
                )
            except (KeyboardInterrupt, asyncio.CancelledError):
                if not quiet and not json_mode:
                    console.print("\n[yellow]Stopped[/yellow]")
            finally:
                watcher.stop()
    except ClipwatchError as e:
        report_error(console, e, json_mode)
        raise typer.Exit(exit_code_for(e)) from None

    if not quiet and not json_mode:
        display_clip_history(console, watcher.clip_history(limit=5))
