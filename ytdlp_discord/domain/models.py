"""Domain data models: pure Python dataclasses."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class AuthorizationPolicy:
    """Which origins may trigger downloads.

    ``guild_ids=None`` allows every guild, ``channel_id=None`` every channel.
    """

    guild_ids: Optional[FrozenSet[int]] = None
    channel_id: Optional[int] = None


@dataclass(frozen=True)
class DownloadRequest:
    url: str
    output_dir: str
    cookies_path: Optional[str] = None


@dataclass(frozen=True)
class DownloadOutcome:
    """Result of one downloader run. ``diagnostic`` is set only on failure."""

    success: bool
    diagnostic: str = ""

    @classmethod
    def ok(cls) -> "DownloadOutcome":
        return cls(success=True)

    @classmethod
    def failed(cls, diagnostic: str) -> "DownloadOutcome":
        return cls(success=False, diagnostic=diagnostic.strip())


class MatchStatus(Enum):
    VALID = "valid"
    INVALID = "invalid"
    ABSENT = "absent"


@dataclass(frozen=True)
class UrlMatch:
    """Outcome of scanning message text for a URL."""

    status: MatchStatus
    url: Optional[str] = None  # the candidate substring, None when ABSENT

    @property
    def is_valid(self) -> bool:
        return self.status is MatchStatus.VALID
