"""Manual clip command for clipwatch."""

from __future__ import annotations

import typer
from rich.console import Console

from clipwatch.cli.app import app
from clipwatch.cli.app import exit_code_for
from clipwatch.cli.app import load_cli_config
from clipwatch.cli.display import display_clip
from clipwatch.cli.display import report_error
from clipwatch.core.http import create_http_client
from clipwatch.core.watcher import MANUAL_CLIP_TITLE
from clipwatch.core.watcher import build_watcher
from clipwatch.display.json import output_json
from clipwatch.errors.types import ClipwatchError


@app.command("clip")
async def clip_command(
    ctx: typer.Context,
    title: str = typer.Option(
        MANUAL_CLIP_TITLE,
        "--title",
        "-t",
        help="Title recorded for the clip",
    ),
) -> None:
    """Clip the channel right now."""
    console = Console()
    json_mode = ctx.meta.get("json", False)

    try:
        config = load_cli_config(ctx)
        async with create_http_client(config.fetch) as client:
            watcher = build_watcher(config, client)
            record = await watcher.create_manual_clip(title)
    except ClipwatchError as e:
        report_error(console, e, json_mode)
        raise typer.Exit(exit_code_for(e)) from None

    if json_mode:
        output_json(record)
    elif ctx.meta.get("quiet", False):
        console.print(record.edit_url)
    else:
        display_clip(console, record)
