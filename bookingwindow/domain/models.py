"""
Domain models for the booking window and its edit session.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Union

from .range_validator import active_duration, is_valid
from .time_values import to_display

DEFAULT_OPENING_TIME = "09:00"
DEFAULT_CLOSING_TIME = "21:00"


@dataclass(frozen=True)
class BookingWindow:
    """
    The daily opening/closing pair during which orders are accepted.

    Times are ``HH:MM`` strings exactly as the settings resource stores
    them. The ordering invariant (closing after opening) is checked at save
    time, not here, so a half-edited window can still be represented.
    """
    opening_time: str = DEFAULT_OPENING_TIME
    closing_time: str = DEFAULT_CLOSING_TIME

    @classmethod
    def from_payload(
        cls,
        data: Optional[Mapping[str, Any]],
        default: Optional["BookingWindow"] = None,
    ) -> "BookingWindow":
        """
        Build a window from a settings document.

        Absent or empty fields fall back to the default one by one.
        """
        fallback = default or cls()
        if not data:
            return fallback

        return cls(
            opening_time=data.get("openingTime") or fallback.opening_time,
            closing_time=data.get("closingTime") or fallback.closing_time,
        )

    def to_payload(self) -> Dict[str, str]:
        """Serialize to the body expected by the settings resource."""
        return {
            "openingTime": self.opening_time,
            "closingTime": self.closing_time,
        }

    def is_valid(self) -> bool:
        return is_valid(self.opening_time, self.closing_time)

    def active_duration(self) -> Union[str, int]:
        return active_duration(self.opening_time, self.closing_time)

    def format_display(self) -> str:
        """
        Format the window for display.
        Format: 9:00 AM – 9:00 PM
        """
        return f"{to_display(self.opening_time)} – {to_display(self.closing_time)}"

    def __str__(self) -> str:
        return f"{self.opening_time} - {self.closing_time}"


@dataclass
class EditSession:
    """
    In-progress edit of a booking window.

    ``original`` is the last value known to be persisted; ``current`` is
    what the operator is editing.
    """
    current: BookingWindow = field(default_factory=BookingWindow)
    original: BookingWindow = field(default_factory=BookingWindow)

    @classmethod
    def start(cls, window: BookingWindow) -> "EditSession":
        return cls(current=window, original=window)

    @property
    def dirty(self) -> bool:
        return self.current != self.original

    @property
    def valid(self) -> bool:
        return self.current.is_valid()

    def edit(self, **changes: str) -> None:
        self.current = replace(self.current, **changes)

    def commit(self) -> None:
        """Mark ``current`` as persisted."""
        self.original = self.current

    def revert(self) -> None:
        """Drop pending edits."""
        self.current = self.original
