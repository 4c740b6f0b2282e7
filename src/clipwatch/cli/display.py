"""Rich rendering of snapshots, ticks and clips."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.table import Table

from clipwatch.core.watcher import TickResult
from clipwatch.display.json import output_json
from clipwatch.display.json import output_json_error
from clipwatch.errors.messages import remediation_for
from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRecord
from clipwatch.models import format_time_ago
from clipwatch.models import format_uptime


def live_badge(snapshot: ChannelSnapshot) -> str:
    """Return a colored LIVE/OFFLINE marker."""
    if snapshot.is_live:
        return "[bold red]● LIVE[/bold red]"
    return "[dim]○ OFFLINE[/dim]"


def display_snapshot(console: Console, snapshot: ChannelSnapshot) -> None:
    """Display one snapshot as a two-column table."""
    table = Table(
        title=f"{snapshot.display_name} {live_badge(snapshot)}",
        show_header=False,
        box=None,
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Title", snapshot.title)
    if snapshot.game_name:
        table.add_row("Category", snapshot.game_name)
    table.add_row("Viewers", f"{snapshot.viewer_count:,}")
    table.add_row("Followers", f"{snapshot.follower_count:,}")
    if uptime := format_uptime(snapshot.uptime()):
        table.add_row("Uptime", uptime)

    console.print(table)

    if snapshot.is_simulated:
        console.print(
            "[yellow]Twitch could not be reached; showing simulated data.[/yellow]"
        )


def format_tick(result: TickResult, now: datetime | None = None) -> str:
    """Format one polling cycle as a single status line."""
    snapshot = result.snapshot
    stamp = (now or datetime.now()).strftime("%H:%M:%S")
    line = (
        f"[dim]{stamp}[/dim] {live_badge(snapshot)} "
        f"{snapshot.viewer_count:,} viewers · {snapshot.follower_count:,} followers"
    )
    if snapshot.is_simulated:
        line += " [yellow](simulated)[/yellow]"
    if result.clip is not None:
        line += f"\n  [green]✂ {result.clip.title}[/green] {result.clip.edit_url}"
    if result.error is not None:
        line += f"\n  [red]✗ Auto-clip failed:[/red] {result.error}"
    return line


def display_tick(console: Console, result: TickResult, json_mode: bool = False) -> None:
    """Display one polling cycle."""
    if json_mode:
        output_json(
            {
                "snapshot": result.snapshot,
                "clip": result.clip,
                "error": str(result.error) if result.error else None,
            }
        )
        return
    console.print(format_tick(result))


def display_clip(console: Console, record: ClipRecord) -> None:
    """Display a newly created clip."""
    console.print(f"[green]✓[/green] Clip created: [bold]{record.title}[/bold]")
    console.print(f"  Edit: [cyan]{record.edit_url}[/cyan]")


def display_clip_history(
    console: Console,
    records: list[ClipRecord],
    now: datetime | None = None,
) -> None:
    """Display recent clips, newest first."""
    if not records:
        console.print("[dim]No clips created.[/dim]")
        return

    table = Table(title="Recent Clips", show_header=True, header_style="bold")
    table.add_column("Title", style="green")
    table.add_column("When", style="dim")
    table.add_column("Edit URL", style="cyan")

    for record in records:
        table.add_row(
            record.title,
            format_time_ago(record.created_at, now),
            record.edit_url,
        )

    console.print(table)


def report_error(console: Console, error: Exception, json_mode: bool = False) -> None:
    """Display an error with its remediation hint."""
    if json_mode:
        output_json_error(error)
        return

    console.print(f"[red]Error:[/red] {error}")
    if remediation := remediation_for(error):
        console.print(f"[dim]{remediation}[/dim]")
