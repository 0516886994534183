"""Download dispatch: acknowledge, run the downloader in the background, report back."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Optional, Set

from ytdlp_discord.domain.models import DownloadOutcome, DownloadRequest
from ytdlp_discord.domain.replies import ACK_TEXT, format_outcome

if TYPE_CHECKING:
    from ytdlp_discord.ports.outbound import ChatPort, DownloaderPort


def _log(msg: str):
    print(msg, file=sys.stderr)


def _ensure_dir(path: str) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


class DownloadDispatcher:
    """Spawns one fire-and-forget task per validated URL.

    Tasks are never joined or cancelled; the set below only keeps them
    referenced until they finish. There is no cap on in-flight downloads.
    """

    def __init__(
        self,
        chat: ChatPort,
        downloader: DownloaderPort,
        output_dir: str,
        cookies_path: Optional[str] = None,
    ):
        self.chat = chat
        self.downloader = downloader
        self.output_dir = output_dir
        self.cookies_path = cookies_path
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> FrozenSet[asyncio.Task]:
        return frozenset(self._tasks)

    async def dispatch(self, channel_id: int, url: str) -> asyncio.Task:
        """Acknowledge *url* in *channel_id* and schedule its download."""
        try:
            await self.chat.send(channel_id, ACK_TEXT)
        except Exception as e:
            _log(f"[dispatcher] failed to send acknowledgment: {e}")

        request = DownloadRequest(
            url=url, output_dir=self.output_dir, cookies_path=self.cookies_path,
        )
        task = asyncio.create_task(self._run(channel_id, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        _log(f"[dispatcher] queued {url} ({len(self._tasks)} in flight)")
        return task

    async def _download(self, request: DownloadRequest) -> DownloadOutcome:
        try:
            await asyncio.to_thread(_ensure_dir, request.output_dir)
        except OSError as e:
            return DownloadOutcome.failed(
                f"Failed to create output directory {request.output_dir}: {e}"
            )
        try:
            return await self.downloader.download(request)
        except Exception as e:
            return DownloadOutcome.failed(f"Unexpected error: {e}")

    async def _run(self, channel_id: int, request: DownloadRequest) -> None:
        outcome = await self._download(request)
        if outcome.success:
            _log(f"[dispatcher] downloaded {request.url}")
        else:
            _log(f"[dispatcher] failed {request.url}: {outcome.diagnostic}")

        try:
            await self.chat.send(channel_id, format_outcome(request.url, outcome))
        except Exception as e:
            _log(f"[dispatcher] failed to send result for {request.url}: {e}")
