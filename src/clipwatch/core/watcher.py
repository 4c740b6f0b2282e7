"""Polling loop and the contract exposed to the presentation layer."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Awaitable
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from clipwatch.auth.credentials import CredentialManager
from clipwatch.config.settings import Config
from clipwatch.config.settings import PollingConfig
from clipwatch.config.settings import TriggerConfig
from clipwatch.core.aggregate import ChannelDataAggregator
from clipwatch.core.clips import ClipService
from clipwatch.core.pipeline import RequestPipeline
from clipwatch.core.ratelimit import RateLimiter
from clipwatch.core.simulate import SnapshotSimulator
from clipwatch.core.triggers import TriggerEvaluator
from clipwatch.errors.types import ClipError
from clipwatch.errors.types import ConfigurationError
from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRecord

logger = logging.getLogger(__name__)

MANUAL_CLIP_TITLE = "Manual clip"


@dataclass(frozen=True)
class TickResult:
    """Outcome of one polling cycle."""

    snapshot: ChannelSnapshot
    clip: ClipRecord | None = None
    error: ClipError | None = None


class ClipWatcher:
    """Runs fetch, evaluate and clip as one non-overlapping cycle per tick."""

    def __init__(
        self,
        aggregator: ChannelDataAggregator,
        evaluator: TriggerEvaluator,
        clips: ClipService,
        polling: PollingConfig | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.aggregator = aggregator
        self.evaluator = evaluator
        self.clips = clips
        self.polling = polling or PollingConfig()
        self._sleep = sleep
        self._running = False

    @property
    def is_enabled(self) -> bool:
        return self.evaluator.enabled

    @property
    def triggers(self) -> TriggerConfig:
        return self.evaluator.config

    def update_triggers(self, **changes) -> TriggerConfig:
        return self.evaluator.update_config(**changes)

    def clip_history(self, limit: int | None = None) -> list[ClipRecord]:
        if limit is None:
            return list(self.clips.history)
        return self.clips.recent(limit)

    async def initialize(self) -> bool:
        """Enable auto-clipping if the channel is live.

        Baselines are taken from the current snapshot so only growth from
        now on can trigger a clip.
        """
        snapshot = await self.aggregator.fetch_snapshot()
        if not snapshot.is_live:
            logger.warning(
                "%s is not live; clips only work during streams", snapshot.display_name
            )
            return False

        self.evaluator.set_baseline(snapshot)
        self.evaluator.enable()
        logger.info(
            "Auto-clipping enabled for %s (%d viewers, %d followers)",
            snapshot.display_name,
            snapshot.viewer_count,
            snapshot.follower_count,
        )
        return True

    async def check_auto_clip_triggers(
        self, snapshot: ChannelSnapshot
    ) -> ClipRecord | None:
        """Create a clip if a trigger fires for this snapshot.

        Raises:
            ClipError: If a trigger fired but the clip could not be created
        """
        request = self.evaluator.evaluate(snapshot)
        if request is None:
            return None
        return await self.clips.create_clip(request.title, snapshot)

    async def create_manual_clip(self, title: str = MANUAL_CLIP_TITLE) -> ClipRecord:
        """Clip the channel now, regardless of triggers.

        Raises:
            ClipError: If the channel is offline or Twitch rejects the clip
        """
        snapshot = await self.aggregator.fetch_snapshot()
        record = await self.clips.create_clip(title, snapshot)
        self.evaluator.record_clip()
        return record

    async def tick(self) -> TickResult:
        """Run one polling cycle."""
        snapshot = await self.aggregator.fetch_snapshot()
        try:
            clip = await self.check_auto_clip_triggers(snapshot)
        except ClipError as e:
            logger.warning("Auto-clip failed: %s", e)
            return TickResult(snapshot=snapshot, error=e)
        return TickResult(snapshot=snapshot, clip=clip)

    async def run(
        self,
        max_ticks: int | None = None,
        on_tick: Callable[[TickResult], None] | None = None,
    ) -> None:
        """Poll until stop() is called or ``max_ticks`` cycles have run."""
        self._running = True
        ticks = 0
        try:
            while self._running:
                result = await self.tick()
                ticks += 1
                if on_tick:
                    on_tick(result)
                if max_ticks is not None and ticks >= max_ticks:
                    break
                if not self._running:
                    break
                await self._sleep(self.polling.viewers)
        finally:
            self._running = False

    def stop(self) -> None:
        """Disable auto-clipping and end run() after the current tick."""
        self.evaluator.disable()
        self._running = False
        logger.info("Clip watcher stopped")


def build_watcher(
    config: Config,
    client: httpx.AsyncClient,
    *,
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ClipWatcher:
    """Wire every component from configuration.

    Raises:
        ConfigurationError: If client id, client secret or channel is missing
    """
    if missing := config.missing_twitch_settings():
        raise ConfigurationError(f"Missing Twitch settings: {', '.join(missing)}")

    twitch = config.twitch
    credentials = CredentialManager(
        client,
        twitch.client_id,
        twitch.client_secret,
        token_url=twitch.oauth_url,
        clock=clock,
    )
    pipeline = RequestPipeline(
        client,
        credentials,
        RateLimiter(clock=clock),
        base_url=twitch.api_base_url,
    )
    aggregator = ChannelDataAggregator(
        pipeline,
        twitch.channel,
        simulator=SnapshotSimulator(rng),
        identity_ttl=config.polling.channel_info,
        followers_ttl=config.polling.followers,
        clock=clock,
    )
    return ClipWatcher(
        aggregator,
        TriggerEvaluator(config.triggers, clock=clock),
        ClipService(pipeline),
        config.polling,
        sleep=sleep,
    )
