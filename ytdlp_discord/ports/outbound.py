"""Outbound ports: interfaces for external system adapters."""

from typing import Protocol, runtime_checkable

from ytdlp_discord.domain.models import DownloadOutcome, DownloadRequest


@runtime_checkable
class ChatPort(Protocol):
    """Interface for replying into channels and managing guild membership."""

    async def send(self, channel_id: int, text: str) -> None: ...
    async def leave_guild(self, guild_id: int) -> None: ...


@runtime_checkable
class DownloaderPort(Protocol):
    """Interface for the external media downloader.

    Implementations report every failure through the returned outcome.
    """

    async def download(self, request: DownloadRequest) -> DownloadOutcome: ...
