"""Domain layer: pure Python, no framework dependencies."""

from ytdlp_discord.domain.models import (
    AuthorizationPolicy,
    DownloadOutcome,
    DownloadRequest,
    MatchStatus,
    UrlMatch,
)
from ytdlp_discord.domain.url_matcher import find_url, is_valid_url, match_url
from ytdlp_discord.domain.authorization import guilds_to_leave, is_allowed

__all__ = [
    "AuthorizationPolicy",
    "DownloadOutcome",
    "DownloadRequest",
    "MatchStatus",
    "UrlMatch",
    "find_url",
    "is_valid_url",
    "match_url",
    "guilds_to_leave",
    "is_allowed",
]
