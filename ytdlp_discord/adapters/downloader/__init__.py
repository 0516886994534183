"""Downloader adapters: external CLI tools behind DownloaderPort."""

from ytdlp_discord.adapters.downloader.ytdlp import YtDlpAdapter

__all__ = ["YtDlpAdapter"]
