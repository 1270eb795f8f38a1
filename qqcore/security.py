"""URL safety levels reported by the server-side URL check."""

from __future__ import annotations

from enum import IntEnum


class UrlSecurityLevel(IntEnum):
    """Safety verdict for a URL."""

    SAFE = 1
    UNKNOWN = 2
    DANGER = 3


def classify_url_check(jump_url: str | None, umr_type: int) -> UrlSecurityLevel:
    """Turn the first URL check result into a safety level.

    A present jump URL means the link is dangerous; otherwise an
    ``umr_type`` of 2 marks it safe and anything else is unknown.
    """
    if jump_url is not None:
        return UrlSecurityLevel.DANGER
    if umr_type == 2:
        return UrlSecurityLevel.SAFE
    return UrlSecurityLevel.UNKNOWN