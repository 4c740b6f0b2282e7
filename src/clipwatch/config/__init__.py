"""Configuration management for clipwatch."""

from clipwatch.config.paths import config_dir, config_file
from clipwatch.config.settings import (
    Config,
    FetchConfig,
    PollingConfig,
    TriggerConfig,
    TwitchConfig,
    load_config,
    redacted,
    save_config,
)

__all__ = [
    # paths
    "config_dir",
    "config_file",
    # settings
    "Config",
    "TwitchConfig",
    "PollingConfig",
    "TriggerConfig",
    "FetchConfig",
    "load_config",
    "save_config",
    "redacted",
]
