"""URL extraction and validation.

Pure Python, no framework dependencies.
"""

import re
from typing import Optional

from ytdlp_discord.domain.models import MatchStatus, UrlMatch

# Broad scan: first http(s):// run of non-whitespace
URL_RE = re.compile(r"https?://\S+")

# Strict shape: dotted host with an alphabetic TLD, optional path
VALID_URL_RE = re.compile(r"^https?://[\w\-\.]+\.[a-zA-Z]{2,}(/\S*)?$")


def find_url(text: str) -> Optional[str]:
    """Return the leftmost ``http(s)://`` candidate in *text*, or None."""
    match = URL_RE.search(text)
    return match.group(0) if match else None


def is_valid_url(url: str) -> bool:
    return VALID_URL_RE.match(url) is not None


def match_url(text: str) -> UrlMatch:
    """Scan *text* and classify the first candidate as VALID, INVALID or ABSENT."""
    candidate = find_url(text)
    if candidate is None:
        return UrlMatch(MatchStatus.ABSENT)
    if not is_valid_url(candidate):
        return UrlMatch(MatchStatus.INVALID, candidate)
    return UrlMatch(MatchStatus.VALID, candidate)
