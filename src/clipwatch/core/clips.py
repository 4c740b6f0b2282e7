"""Clip creation and history."""

from __future__ import annotations

import logging
from datetime import datetime
from datetime import timezone

import msgspec

from clipwatch.core.pipeline import RequestPipeline
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import ClipError
from clipwatch.errors.types import ClipErrorKind
from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRecord
from clipwatch.models import validate_snapshot

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_LIMIT = 5


class ClipInfo(msgspec.Struct, frozen=True):
    """Subset of a Helix ``clips`` creation entry."""

    id: str
    edit_url: str = ""


class ClipService:
    """Creates clips for live snapshots and keeps a most-recent-first history."""

    def __init__(self, pipeline: RequestPipeline) -> None:
        self._pipeline = pipeline
        self._history: list[ClipRecord] = []

    @property
    def history(self) -> tuple[ClipRecord, ...]:
        return tuple(self._history)

    def recent(self, limit: int = DEFAULT_DISPLAY_LIMIT) -> list[ClipRecord]:
        """Return the newest ``limit`` clips."""
        return self._history[: max(0, limit)]

    async def create_clip(
        self,
        title: str,
        snapshot: ChannelSnapshot,
        *,
        has_delay: bool = False,
    ) -> ClipRecord:
        """Create a clip of the broadcaster in ``snapshot``.

        Raises:
            ClipError: NOT_LIVE when offline, INVALID_SNAPSHOT for simulated or
                malformed snapshots, UPSTREAM when Twitch rejects the request
        """
        if not snapshot.is_live:
            raise ClipError(
                ClipErrorKind.NOT_LIVE,
                f"{snapshot.display_name} is not live",
            )

        if snapshot.is_simulated:
            raise ClipError(
                ClipErrorKind.INVALID_SNAPSHOT,
                "Cannot clip simulated channel data",
            )

        if errors := validate_snapshot(snapshot):
            raise ClipError(
                ClipErrorKind.INVALID_SNAPSHOT,
                f"Invalid snapshot: {'; '.join(errors)}",
            )

        params = {"broadcaster_id": snapshot.id}
        if has_delay:
            params["has_delay"] = "true"

        try:
            data = await self._pipeline.call("clips", method="POST", params=params)
        except ApiError as e:
            raise ClipError(ClipErrorKind.UPSTREAM, cause=e) from e

        clips = data.get("data") or []
        if not clips:
            raise ClipError(ClipErrorKind.UPSTREAM, "Clip response contained no clip")

        try:
            info = msgspec.convert(clips[0], type=ClipInfo)
        except msgspec.ValidationError as e:
            raise ClipError(
                ClipErrorKind.UPSTREAM, f"Unexpected clip payload: {e}"
            ) from e
        if not info.id:
            raise ClipError(ClipErrorKind.UPSTREAM, "Clip response contained no clip id")

        record = ClipRecord(
            id=info.id,
            edit_url=info.edit_url,
            title=title,
            created_at=datetime.now(timezone.utc),
            broadcaster_name=snapshot.display_name,
        )
        self._history.insert(0, record)
        logger.info("Clip %s created: %s", record.id, title)
        return record
