"""Discord adapter: bridges discord.Client to the event router.

DownloadBot is a thin discord.Client subclass that converts gateway events to
platform-agnostic values and delegates them. DiscordChatAdapter implements
ChatPort on top of the same client.
"""

import sys
from typing import Optional

import discord

from ytdlp_discord.domain.replies import clip
from ytdlp_discord.ports.inbound import EventHandler, IncomingMessage, JoinedGuild


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordChatAdapter:
    """ChatPort implementation using discord.Client."""

    def __init__(self, client: discord.Client):
        self._client = client

    async def send(self, channel_id: int, text: str) -> None:
        # Partial messageables also reach DM and uncached channels
        channel = self._client.get_partial_messageable(channel_id)
        await channel.send(clip(text))

    async def leave_guild(self, guild_id: int) -> None:
        guild = self._client.get_guild(guild_id)
        if guild is None:
            raise LookupError(f"guild {guild_id} is not in the cache")
        await guild.leave()


def to_joined_guild(guild: discord.Guild) -> JoinedGuild:
    return JoinedGuild(id=guild.id, name=guild.name or "")


class DownloadBot(discord.Client):
    """Discord client that forwards messages and lifecycle events to an EventHandler."""

    def __init__(self, handler: Optional[EventHandler] = None, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self.handler = handler

    def _to_incoming(self, message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        return IncomingMessage(
            content=message.content,
            channel_id=message.channel.id,
            author_id=message.author.id,
            is_bot=message.author.bot,
            guild_id=message.guild.id if message.guild else None,
        )

    async def on_ready(self):
        if self.handler is None:
            return
        name = self.user.name if self.user else "<unknown>"
        await self.handler.on_ready(name, [to_joined_guild(g) for g in self.guilds])

    async def on_guild_join(self, guild: discord.Guild):
        if self.handler is None:
            return
        _log(f"[bot] joined guild {guild.id} ({guild.name})")
        await self.handler.on_guild_join(to_joined_guild(guild))

    async def on_message(self, message: discord.Message):
        if self.handler is None:
            return
        # Guard: self.user can be None before on_ready fires
        if self.user and message.author == self.user:
            return
        await self.handler.on_message(self._to_incoming(message))
