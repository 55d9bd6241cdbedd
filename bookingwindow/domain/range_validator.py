"""
Validation of an (opening, closing) pair.

A window is valid only when closing is strictly later than opening on the
same day. Overnight windows (closing numerically before opening) are
rejected; the ordering backend does not serve past midnight.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from .results import ValidationFailed
from .time_values import is_number, to_minutes

if TYPE_CHECKING:
    from .models import BookingWindow


def is_valid(opening: Optional[str], closing: Optional[str]) -> bool:
    """Return True when both values are set and closing is after opening."""
    if not opening or not closing:
        return False

    # nan on either side makes the comparison false
    return to_minutes(closing) > to_minutes(opening)


def active_duration(opening: Optional[str], closing: Optional[str]) -> Union[str, int]:
    """
    Length of the window as display text, or ``0`` when there is none.

    Examples:
        >>> active_duration("09:00", "21:00")
        '12 hours'
        >>> active_duration("09:30", "21:00")
        '11h 30m'
        >>> active_duration("21:00", "09:00")
        0
    """
    if not opening or not closing:
        return 0

    diff = to_minutes(closing) - to_minutes(opening)
    if not is_number(diff) or diff <= 0:
        return 0

    hours, minutes = divmod(int(diff), 60)
    if minutes > 0:
        return f"{hours}h {minutes}m"
    return f"{hours} hours"


def validate(window: "BookingWindow") -> Optional[ValidationFailed]:
    """Return a ``ValidationFailed`` for an unusable window, else None."""
    if is_valid(window.opening_time, window.closing_time):
        return None
    return ValidationFailed()
