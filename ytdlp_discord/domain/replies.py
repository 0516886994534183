"""User-facing reply texts."""

from ytdlp_discord.domain.models import DownloadOutcome

ACK_TEXT = "OK! I will process that."
INVALID_URL_TEXT = "Invalid URL."

# Discord rejects messages longer than this
MAX_MESSAGE_LENGTH = 2000


def format_outcome(url: str, outcome: DownloadOutcome) -> str:
    """Terminal reply for a finished download."""
    if outcome.success:
        # Angle brackets suppress the link embed
        return f"Downloaded: <{url}>"
    return f"Failed to download {url}: {outcome.diagnostic}"


def clip(text: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"
