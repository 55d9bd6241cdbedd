"""
Result values returned by the settings store and the controller.

Network operations do not raise to their callers. They return either a
``Success`` or one of the failure records below and callers match on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")

GENERIC_LOAD_MESSAGE = "Failed to load settings"
GENERIC_SAVE_MESSAGE = "Failed to update booking time"
VALIDATION_MESSAGE = "Closing time must be after opening time"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Operation completed; ``value`` holds its payload."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailed:
    """The settings resource could not be read."""
    message: str = GENERIC_LOAD_MESSAGE
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class SaveFailed:
    """The write was rejected or never reached the server."""
    message: str = GENERIC_SAVE_MESSAGE
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class ValidationFailed:
    """The window was rejected locally; nothing was sent."""
    message: str = VALIDATION_MESSAGE

    @property
    def ok(self) -> bool:
        return False


LoadResult = Union[Success, FetchFailed]
SaveResult = Union[Success, SaveFailed]
SaveOutcome = Union[Success, SaveFailed, ValidationFailed]
