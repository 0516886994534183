"""Launcher: load settings, wire the pipeline, run the Discord client."""

import sys

from ytdlp_discord.adapters.discord.bot import DiscordChatAdapter, DownloadBot
from ytdlp_discord.adapters.downloader.ytdlp import YtDlpAdapter
from ytdlp_discord.config import ConfigError, Settings, load_settings
from ytdlp_discord.domain.dispatcher import DownloadDispatcher
from ytdlp_discord.domain.router import EventRouter


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_bot(settings: Settings) -> DownloadBot:
    """Instantiate the bot with its router, dispatcher and downloader."""
    bot = DownloadBot()
    chat = DiscordChatAdapter(bot)
    dispatcher = DownloadDispatcher(
        chat=chat,
        downloader=YtDlpAdapter(binary=settings.downloader),
        output_dir=settings.output_dir,
        cookies_path=settings.cookies_path,
    )
    bot.handler = EventRouter(policy=settings.policy, chat=chat, dispatcher=dispatcher)
    return bot


def main() -> int:
    try:
        settings = load_settings()
    except ConfigError as e:
        _log(f"Failed to load configuration: {e}")
        return 1

    if settings.guild_ids is not None:
        _log(f"Allowed guilds: {settings.guild_ids}")
    if settings.channel_id is not None:
        _log(f"Allowed channel: {settings.channel_id}")
    _log(f"Saving downloads to {settings.output_dir}")

    bot = build_bot(settings)
    # discord.py owns the event loop, reconnects and gateway logging
    bot.run(settings.discord_token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
