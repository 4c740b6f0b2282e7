"""Core polling, request and trigger components for clipwatch."""

from clipwatch.core.aggregate import ChannelDataAggregator
from clipwatch.core.clips import ClipService
from clipwatch.core.http import create_http_client, get_timeout_config
from clipwatch.core.pipeline import MAX_AUTH_RETRIES, RequestPipeline
from clipwatch.core.ratelimit import DEFAULT_RATE_LIMIT, RateBudget, RateLimiter
from clipwatch.core.simulate import SnapshotSimulator
from clipwatch.core.triggers import TriggerEvaluator, TriggerState
from clipwatch.core.watcher import ClipWatcher, TickResult, build_watcher

__all__ = [
    # http
    "create_http_client",
    "get_timeout_config",
    # rate limiting
    "RateBudget",
    "RateLimiter",
    "DEFAULT_RATE_LIMIT",
    # requests
    "RequestPipeline",
    "MAX_AUTH_RETRIES",
    # snapshots
    "ChannelDataAggregator",
    "SnapshotSimulator",
    # triggers and clips
    "TriggerEvaluator",
    "TriggerState",
    "ClipService",
    # watcher
    "ClipWatcher",
    "TickResult",
    "build_watcher",
]
