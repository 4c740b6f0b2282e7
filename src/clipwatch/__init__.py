"""clipwatch: Watch a Twitch channel and clip its big moments."""

from __future__ import annotations

__version__ = "0.1.0"

from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRecord
from clipwatch.models import ClipRequest
from clipwatch.models import SnapshotSource
from clipwatch.models import TriggerKind
from clipwatch.models import format_time_ago
from clipwatch.models import validate_snapshot

__all__ = [
    "__version__",
    "ChannelSnapshot",
    "ClipRecord",
    "ClipRequest",
    "SnapshotSource",
    "TriggerKind",
    "format_time_ago",
    "validate_snapshot",
]


def main() -> None:
    """Entry point for the clipwatch CLI."""
    from clipwatch.cli.app import run_app

    run_app()
