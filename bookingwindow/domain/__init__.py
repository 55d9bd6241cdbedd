"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import BookingWindow, EditSession
from .range_validator import active_duration, is_valid, validate
from .results import FetchFailed, SaveFailed, Success, ValidationFailed
from .time_values import to_display, to_minutes

__all__ = [
    "BookingWindow",
    "EditSession",
    "FetchFailed",
    "SaveFailed",
    "Success",
    "ValidationFailed",
    "active_duration",
    "is_valid",
    "to_display",
    "to_minutes",
    "validate",
]
