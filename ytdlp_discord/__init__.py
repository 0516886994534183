"""ytdlp-discord: Discord listener that hands posted URLs to yt-dlp."""

from ytdlp_discord.config import ConfigError, Settings, load_settings
from ytdlp_discord.domain.models import (
    AuthorizationPolicy,
    DownloadOutcome,
    DownloadRequest,
)
from ytdlp_discord.ports.inbound import IncomingMessage, JoinedGuild

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "AuthorizationPolicy",
    "DownloadOutcome",
    "DownloadRequest",
    "IncomingMessage",
    "JoinedGuild",
]
