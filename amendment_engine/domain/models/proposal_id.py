"""Proposal ID generation.

IDs have the form ``amendment-<slug>-<timestamp>`` where slug is the
lower-cased title with every character outside [a-z0-9] replaced by a dash,
cut to 30 characters, and timestamp is the creation time in milliseconds
since the epoch, written in base 36.
"""

from __future__ import annotations

import re
from datetime import datetime

PROPOSAL_ID_PREFIX: str = "amendment"
MAX_SLUG_LENGTH: int = 30

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]")


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36 (lower case)."""
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def slugify_title(title: str) -> str:
    """Lower-case the title and replace non [a-z0-9] characters with dashes."""
    return _NON_SLUG_CHARS.sub("-", title.lower())[:MAX_SLUG_LENGTH]


def epoch_millis(moment: datetime) -> int:
    """Milliseconds since the Unix epoch for a timezone-aware datetime."""
    return int(moment.timestamp() * 1000)


def generate_proposal_id(title: str, timestamp_ms: int) -> str:
    """Build a proposal ID from a title and a millisecond timestamp.

    Examples:
        >>> generate_proposal_id("Add Voting Rules!", 0)
        'amendment-add-voting-rules--0'
    """
    return f"{PROPOSAL_ID_PREFIX}-{slugify_title(title)}-{to_base36(timestamp_ms)}"
