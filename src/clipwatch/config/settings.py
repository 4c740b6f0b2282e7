"""Configuration structures and loading for clipwatch."""

import os
import tomllib
from pathlib import Path

import msgspec

from clipwatch.errors.types import ConfigurationError


# Default values
DEFAULT_TIMEOUT = 30.0
DEFAULT_CHANNEL_INFO_INTERVAL = 30.0
DEFAULT_FOLLOWERS_INTERVAL = 60.0
DEFAULT_VIEWERS_INTERVAL = 10.0
DEFAULT_FOLLOWER_THRESHOLD = 5
DEFAULT_VIEWER_THRESHOLD = 50
DEFAULT_COOLDOWN_SECONDS = 120.0

TWITCH_API_BASE_URL = "https://api.twitch.tv/helix"
TWITCH_OAUTH_URL = "https://id.twitch.tv/oauth2/token"


# Twitch application and channel
class TwitchConfig(msgspec.Struct, omit_defaults=True):
    """Twitch application credentials and the watched channel."""

    client_id: str = ""
    client_secret: str = ""
    channel: str = ""
    api_base_url: str = TWITCH_API_BASE_URL
    oauth_url: str = TWITCH_OAUTH_URL


# Polling configuration
class PollingConfig(msgspec.Struct, omit_defaults=True):
    """Refresh intervals per data category, in seconds.

    ``viewers`` paces the watch loop; ``channel_info`` and ``followers``
    bound how long a resolved identity and follower total are reused.
    """

    channel_info: float = DEFAULT_CHANNEL_INFO_INTERVAL
    followers: float = DEFAULT_FOLLOWERS_INTERVAL
    viewers: float = DEFAULT_VIEWERS_INTERVAL


# Trigger configuration
class TriggerConfig(msgspec.Struct, omit_defaults=True, frozen=True):
    """Auto-clip trigger toggles and thresholds."""

    new_followers: bool = True
    viewer_spikes: bool = True
    follower_threshold: int = DEFAULT_FOLLOWER_THRESHOLD
    viewer_threshold: int = DEFAULT_VIEWER_THRESHOLD
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS


# Fetch configuration
class FetchConfig(msgspec.Struct, omit_defaults=True):
    """HTTP behavior settings."""

    timeout: float = DEFAULT_TIMEOUT


# Main configuration
class Config(msgspec.Struct, omit_defaults=True):
    """Main configuration structure."""

    twitch: TwitchConfig = msgspec.field(default_factory=TwitchConfig)
    polling: PollingConfig = msgspec.field(default_factory=PollingConfig)
    triggers: TriggerConfig = msgspec.field(default_factory=TriggerConfig)
    fetch: FetchConfig = msgspec.field(default_factory=FetchConfig)

    def missing_twitch_settings(self) -> list[str]:
        """Return the names of required Twitch settings that are empty."""
        return [
            name
            for name in ("client_id", "client_secret", "channel")
            if not getattr(self.twitch, name)
        ]


def _load_from_toml(path: Path) -> dict:
    """Load configuration from TOML file."""
    if not path.exists():
        return {}

    with path.open("rb") as f:
        return tomllib.load(f)


def _save_to_toml(data: dict, path: Path) -> None:
    """Save configuration to TOML file."""
    import tomli_w

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def convert_config(data: dict) -> Config:
    """Convert raw dict to Config struct."""
    return msgspec.convert(data, type=Config)


def _env(*names: str) -> str | None:
    for name in names:
        if value := os.environ.get(name):
            return value
    return None


def _apply_env_overrides(config: Config) -> Config:
    """Apply environment variable overrides to config.

    CLIPWATCH_CLIENT_ID / TWITCH_CLIENT_ID: Twitch application client id
    CLIPWATCH_CLIENT_SECRET / TWITCH_CLIENT_SECRET: Twitch application secret
    CLIPWATCH_CHANNEL: Channel login to watch
    """
    overrides = {}

    if client_id := _env("CLIPWATCH_CLIENT_ID", "TWITCH_CLIENT_ID"):
        overrides["client_id"] = client_id
    if client_secret := _env("CLIPWATCH_CLIENT_SECRET", "TWITCH_CLIENT_SECRET"):
        overrides["client_secret"] = client_secret
    if channel := _env("CLIPWATCH_CHANNEL"):
        overrides["channel"] = channel.strip().lower()

    if overrides:
        twitch = msgspec.structs.replace(config.twitch, **overrides)
        config = msgspec.structs.replace(config, twitch=twitch)

    return config


def load_config(path: Path | None = None) -> Config:
    """Load configuration from file with defaults.

    Raises:
        ConfigurationError: If the file is not valid TOML or has wrong types
    """
    from .paths import config_file

    config_path = path or config_file()

    try:
        raw_data = _load_from_toml(config_path)
        config = convert_config(raw_data) if raw_data else Config()
    except (tomllib.TOMLDecodeError, msgspec.ValidationError) as e:
        raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e

    return _apply_env_overrides(config)


def save_config(config: Config, path: Path | None = None) -> None:
    """Save configuration to file."""
    from .paths import config_file

    config_path = path or config_file()

    data = msgspec.to_builtins(config)
    _save_to_toml(data, config_path)


def redacted(config: Config) -> dict:
    """Return the config as builtins with the client secret masked."""
    data = msgspec.to_builtins(config)
    twitch = data.get("twitch", {})
    if twitch.get("client_secret"):
        twitch["client_secret"] = "********"
    return data
