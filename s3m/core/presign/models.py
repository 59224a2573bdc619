"""
Value types and key/expiry rules for presigned URLs.

Nothing here talks to storage; these are the pure rules the service applies
before asking the SDK to sign.
"""

import re
from dataclasses import dataclass
from typing import Optional


# SigV4 presigned URLs are valid for at most seven days.
MAX_EXPIRE_MINUTES = 7 * 24 * 60

_SLASH_RUN = re.compile(r"/{2,}")


@dataclass(frozen=True)
class PresignedUrlResult:
    """A signed URL together with the object key it was signed for."""
    url: str
    key: str


def clamp_expire_minutes(expire_minutes: int) -> int:
    """Raise anything below one minute to one minute. No upper bound here."""
    return max(1, int(expire_minutes))


def normalize_prefix(prefix: Optional[str]) -> str:
    """
    Make a prefix start and end with a single '/'.

    "direct", "/direct" and "/direct/" all become "/direct/". Blank or
    missing prefixes normalize to "". Applying this twice changes nothing.
    """
    if prefix is None or not prefix.strip():
        return ""
    return _SLASH_RUN.sub("/", f"/{prefix.strip()}/")


def apply_prefix(prefix: Optional[str], key: str) -> str:
    """
    Put a key under a prefix.

    One leading '/' is dropped from the key, the two are joined, and any
    run of slashes in the result collapses to one. An empty prefix leaves
    the key untouched.
    """
    normalized = normalize_prefix(prefix)
    if not normalized:
        return key

    if key.startswith("/"):
        key = key[1:]

    return _SLASH_RUN.sub("/", normalized + key)
