"""Event routing: per-message decision pipeline and guild reconciliation."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Sequence

from ytdlp_discord.domain.authorization import guilds_to_leave, is_allowed
from ytdlp_discord.domain.replies import INVALID_URL_TEXT
from ytdlp_discord.domain.url_matcher import match_url

if TYPE_CHECKING:
    from ytdlp_discord.domain.dispatcher import DownloadDispatcher
    from ytdlp_discord.domain.models import AuthorizationPolicy
    from ytdlp_discord.ports.inbound import IncomingMessage, JoinedGuild
    from ytdlp_discord.ports.outbound import ChatPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class EventRouter:
    """Implements EventHandler.

    Handles:
    - messages: authorization → URL matching → "Invalid URL." or dispatch
    - ready: leave every joined guild that is not on the allow-list
    - guild join: same rule for a single guild joined at runtime
    """

    def __init__(
        self,
        policy: AuthorizationPolicy,
        chat: ChatPort,
        dispatcher: DownloadDispatcher,
    ):
        self.policy = policy
        self.chat = chat
        self.dispatcher = dispatcher

    async def on_message(self, message: IncomingMessage) -> None:
        if not is_allowed(message, self.policy):
            return

        match = match_url(message.content)
        if not match.is_valid:
            try:
                await self.chat.send(message.channel_id, INVALID_URL_TEXT)
            except Exception as e:
                _log(f"[router] failed to send invalid-URL notice: {e}")
            return

        await self.dispatcher.dispatch(message.channel_id, match.url)

    async def on_ready(self, user_name: str, guilds: Sequence[JoinedGuild]) -> None:
        _log(f"[router] connected as {user_name}")
        await self._leave_unauthorized(guilds)

    async def on_guild_join(self, guild: JoinedGuild) -> None:
        await self._leave_unauthorized([guild])

    async def _leave_unauthorized(self, guilds: Sequence[JoinedGuild]) -> None:
        names = {g.id: g.name for g in guilds}
        for guild_id in guilds_to_leave([g.id for g in guilds], self.policy):
            _log(f"[router] leaving unauthorized guild {guild_id} ({names[guild_id]})")
            try:
                await self.chat.leave_guild(guild_id)
            except Exception as e:
                _log(f"[router] failed to leave guild {guild_id}: {e}")
