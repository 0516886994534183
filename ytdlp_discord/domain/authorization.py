"""Origin authorization: which guilds and channels may trigger downloads."""

from typing import Iterable, List

from ytdlp_discord.domain.models import AuthorizationPolicy
from ytdlp_discord.ports.inbound import IncomingMessage


def is_allowed_guild(guild_id: int, policy: AuthorizationPolicy) -> bool:
    if policy.guild_ids is None:
        return True
    return guild_id in policy.guild_ids


def is_allowed(message: IncomingMessage, policy: AuthorizationPolicy) -> bool:
    """Decide whether *message* may trigger a download. No side effects."""
    if message.is_bot:
        return False
    # Direct messages carry no guild and skip the guild check
    if message.guild_id is not None and not is_allowed_guild(message.guild_id, policy):
        return False
    if policy.channel_id is not None and message.channel_id != policy.channel_id:
        return False
    return True


def guilds_to_leave(guild_ids: Iterable[int], policy: AuthorizationPolicy) -> List[int]:
    """Joined guilds that are not on the allow-list, in the given order."""
    if policy.guild_ids is None:
        return []
    return [gid for gid in guild_ids if not is_allowed_guild(gid, policy)]
