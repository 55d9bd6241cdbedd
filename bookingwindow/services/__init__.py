"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_window_controller import (
    BookingWindowController,
    Notifier,
    Phase,
    SettingsStoreProtocol,
)

__all__ = ["BookingWindowController", "Notifier", "Phase", "SettingsStoreProtocol"]
