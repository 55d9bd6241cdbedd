"""
Wall-clock time helpers for ``HH:MM`` strings.

Values are kept as the strings the settings resource stores. Parsing is
lenient on purpose: a malformed value never raises, it turns into ``nan``
so that any comparison with it is false and the range reads as invalid.
"""

from __future__ import annotations

import math
import re
from typing import Optional, Union

_INTEGER = re.compile(r"[+-]?\d+")
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

Minutes = Union[int, float]


def _parse_part(part: str) -> Minutes:
    """Parse one side of ``HH:MM``; empty counts as zero, junk as nan."""
    text = part.strip()
    if not text:
        return 0
    if not _INTEGER.fullmatch(text):
        return math.nan
    return int(text, 10)


def to_minutes(value: Optional[str]) -> Minutes:
    """
    Convert ``HH:MM`` into minutes since midnight.

    No bounds checks are applied (``"25:99"`` is 1599). Returns ``nan``
    when the colon is missing or a part is not a number.

    Examples:
        >>> to_minutes("09:00")
        540
        >>> to_minutes("21:00")
        1260
    """
    if value is None:
        return math.nan

    parts = value.split(":")
    if len(parts) < 2:
        return math.nan

    hour = _parse_part(parts[0])
    minute = _parse_part(parts[1])
    return hour * 60 + minute


def is_number(minutes: Minutes) -> bool:
    """Check that a ``to_minutes`` result is usable."""
    return not (isinstance(minutes, float) and math.isnan(minutes))


def to_display(value: Optional[str]) -> str:
    """
    Render ``HH:MM`` on a 12-hour clock.

    Hours 0 and 12 both show as ``12``. The minute text is passed through
    untouched, so ``"0:05"`` becomes ``"12:05 AM"`` and ``"7:5"`` becomes
    ``"7:5 AM"``.
    """
    if not value:
        return ""

    parts = value.split(":")
    hour_text = parts[0]
    minute = parts[1] if len(parts) > 1 else ""

    match = _LEADING_INTEGER.match(hour_text)
    if match is None:
        # Unparsable hour: shown as 12 AM
        return f"12:{minute} AM"

    hour = int(match.group(1), 10)
    suffix = "PM" if hour >= 12 else "AM"
    # fmod keeps the sign of negative hours
    hour_12 = int(math.fmod(hour, 12)) or 12
    return f"{hour_12}:{minute} {suffix}"
