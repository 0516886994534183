"""Inbound port: platform-agnostic event representation."""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class IncomingMessage:
    """Discord-agnostic message representation."""

    content: str
    channel_id: int
    author_id: int
    is_bot: bool
    guild_id: Optional[int] = None  # None for direct messages


@dataclass(frozen=True)
class JoinedGuild:
    id: int
    name: str = ""


@runtime_checkable
class EventHandler(Protocol):
    """Capabilities a gateway adapter delegates to."""

    async def on_message(self, message: IncomingMessage) -> None: ...

    async def on_ready(self, user_name: str, guilds: Sequence[JoinedGuild]) -> None: ...

    async def on_guild_join(self, guild: JoinedGuild) -> None: ...
