"""yt-dlp CLI adapter: implements DownloaderPort."""

import asyncio
import sys
from datetime import datetime
from typing import List

from ytdlp_discord.config import DEFAULT_DOWNLOADER
from ytdlp_discord.domain.models import DownloadOutcome, DownloadRequest


def _log(msg: str):
    print(msg, file=sys.stderr)


async def _run_subprocess(cmd_args):
    """Run a subprocess with stdout discarded; return process and captured stderr."""
    proc = await asyncio.create_subprocess_exec(
        *cmd_args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.PIPE,
    )
    _, stderr = await proc.communicate()
    return proc, stderr


class YtDlpAdapter:
    """Runs yt-dlp for one URL. Every failure comes back as a DownloadOutcome."""

    def __init__(self, binary: str = DEFAULT_DOWNLOADER):
        self.binary = binary

    def build_args(self, request: DownloadRequest) -> List[str]:
        args = [self.binary, request.url, "-P", request.output_dir]
        if request.cookies_path:
            args.extend(["--cookies", request.cookies_path])
        return args

    async def download(self, request: DownloadRequest) -> DownloadOutcome:
        _log(f"[{datetime.now().isoformat()}] [yt-dlp] downloading {request.url}")
        if request.cookies_path:
            _log(f"[yt-dlp] using cookies file {request.cookies_path}")

        try:
            proc, stderr = await _run_subprocess(self.build_args(request))
        except OSError as e:
            return DownloadOutcome.failed(f"Failed to launch {self.binary}: {e}")

        if proc.returncode == 0:
            _log(f"[{datetime.now().isoformat()}] [yt-dlp] completed {request.url}")
            return DownloadOutcome.ok()

        err_text = stderr.decode("utf-8", errors="replace").strip()
        return DownloadOutcome.failed(
            f"{self.binary} failed with exit status {proc.returncode}\n"
            f"Error output: {err_text}"
        )
