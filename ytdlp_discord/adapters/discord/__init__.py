"""Discord adapters: gateway client and chat port."""

from ytdlp_discord.adapters.discord.bot import DiscordChatAdapter, DownloadBot

__all__ = ["DiscordChatAdapter", "DownloadBot"]
