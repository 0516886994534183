"""Configuration: loaded once at startup from config.toml, .env and environment."""

__version__ = "0.1.0"

import json
import os
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ytdlp_discord.domain.models import AuthorizationPolicy

DEFAULT_CONFIG_PATH = "config.toml"
DEFAULT_COOKIES_PATH = "config/cookies.txt"
DEFAULT_DOWNLOADER = "yt-dlp"


def _log(msg: str):
    print(msg, file=sys.stderr)


class ConfigError(ValueError):
    """Raised when settings are missing or malformed. Fatal at startup."""


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide settings, shared read-only by every handler."""

    discord_token: str
    output_dir: str
    guild_ids: Optional[List[int]] = None
    channel_id: Optional[int] = None
    cookies_path: Optional[str] = None
    downloader: str = DEFAULT_DOWNLOADER

    @property
    def policy(self) -> AuthorizationPolicy:
        guilds = frozenset(self.guild_ids) if self.guild_ids is not None else None
        return AuthorizationPolicy(guild_ids=guilds, channel_id=self.channel_id)


def parse_guild_ids(raw: str) -> List[int]:
    """Parse GUILD_IDS: a JSON array of ids or a single numeric id."""
    raw = raw.strip()
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = None
    if isinstance(value, list) and all(
        isinstance(v, int) and not isinstance(v, bool) for v in value
    ):
        return list(value)
    if raw.isdigit():
        return [int(raw)]
    raise ConfigError(
        "GUILD_IDS must be either a single numeric ID or a JSON array, "
        "e.g. [123456789,987654321]"
    )


def _parse_channel_id(raw: Any) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    text = str(raw).strip()
    if not text.isdigit():
        raise ConfigError(f"CHANNEL_ID must be a numeric ID, got {raw!r}")
    return int(text)


def _read_config_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e


def load_settings(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """Build Settings from an optional TOML file overlaid with environment variables.

    Environment wins over the file. The cookies file falls back to
    ``config/cookies.txt`` when neither source names one and that file exists.
    """
    load_dotenv()
    file_values = _read_config_file(Path(config_path))

    token = os.getenv("DISCORD_TOKEN") or file_values.get("discord_token") or ""
    if not str(token).strip():
        raise ConfigError("discord_token is required (set DISCORD_TOKEN or config.toml)")

    output_dir = os.getenv("OUTPUT_DIR") or file_values.get("output_dir") or ""
    if not str(output_dir).strip():
        raise ConfigError("output_dir is required (set OUTPUT_DIR or config.toml)")

    guild_ids: Optional[List[int]] = None
    env_guilds = os.getenv("GUILD_IDS")
    if env_guilds is not None:
        guild_ids = parse_guild_ids(env_guilds)
    elif "guild_ids" in file_values:
        raw_guilds = file_values["guild_ids"]
        if isinstance(raw_guilds, int):
            raw_guilds = [raw_guilds]
        if not isinstance(raw_guilds, list) or not all(isinstance(g, int) for g in raw_guilds):
            raise ConfigError("guild_ids in config file must be a list of integers")
        guild_ids = list(raw_guilds)

    channel_id: Optional[int] = None
    env_channel = os.getenv("CHANNEL_ID")
    if env_channel is not None:
        channel_id = _parse_channel_id(env_channel)
    elif "channel_id" in file_values:
        channel_id = _parse_channel_id(file_values["channel_id"])

    cookies_path = os.getenv("YTDLP_COOKIES_PATH") or file_values.get("cookies_path")
    if not cookies_path and Path(DEFAULT_COOKIES_PATH).exists():
        cookies_path = DEFAULT_COOKIES_PATH
        _log(f"[config] using default cookies file {DEFAULT_COOKIES_PATH}")

    downloader = (
        os.getenv("YTDLP_BINARY") or file_values.get("downloader") or DEFAULT_DOWNLOADER
    )

    return Settings(
        discord_token=str(token).strip(),
        output_dir=str(output_dir),
        guild_ids=guild_ids,
        channel_id=channel_id,
        cookies_path=cookies_path or None,
        downloader=str(downloader),
    )
