"""Port interfaces (Hexagonal Architecture)."""

from ytdlp_discord.ports.inbound import EventHandler, IncomingMessage, JoinedGuild
from ytdlp_discord.ports.outbound import ChatPort, DownloaderPort

__all__ = [
    "EventHandler",
    "IncomingMessage",
    "JoinedGuild",
    "ChatPort",
    "DownloaderPort",
]
