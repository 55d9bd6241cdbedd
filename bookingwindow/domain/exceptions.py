"""
Domain-specific exception hierarchy for the booking window manager.
"""

from __future__ import annotations

from typing import Optional


class BookingWindowError(Exception):
    """Base class for all application-level errors."""


class SettingsAPIError(BookingWindowError):
    """Raised when the settings resource cannot be read or written."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        server_message: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class AuthenticationError(BookingWindowError):
    """Raised when the API token is missing, rejected or lacks admin rights."""


class TokenStorageError(BookingWindowError):
    """Raised when the API token cannot be persisted anywhere."""
