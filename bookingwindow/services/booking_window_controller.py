"""
Controller for editing the booking window.

The controller owns the ``EditSession`` and drives it through
load -> edit -> validate -> save / reset. It talks to the settings store
through a small protocol so the real HTTP client, the in-memory mock and
test stubs are interchangeable, and it reports outcomes to the operator
through a ``Notifier`` (the toast equivalent of the admin panel).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Protocol, Union

from ..domain.models import BookingWindow, EditSession
from ..domain.range_validator import validate
from ..domain.results import (
    GENERIC_LOAD_MESSAGE,
    VALIDATION_MESSAGE,
    FetchFailed,
    LoadResult,
    SaveFailed,
    SaveOutcome,
    SaveResult,
    Success,
)
from ..domain.time_values import to_display

logger = logging.getLogger(__name__)

SAVE_SUCCESS_MESSAGE = "Booking time updated successfully!"
INVALID_RANGE_MESSAGE = f"Invalid time range - {VALIDATION_MESSAGE.lower()}"


class SettingsStoreProtocol(Protocol):
    """Protocol describing the settings store behaviour needed by the controller."""

    async def load(self) -> LoadResult:
        """Return the persisted window or ``FetchFailed``."""

    async def save(self, window: BookingWindow) -> SaveResult:
        """Persist ``window`` and return ``Success`` or ``SaveFailed``."""


class Notifier(Protocol):
    """User-visible notifications."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class Phase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"


class BookingWindowController:
    """
    Orchestrates the edit session of the booking window.

    States: ``LOADING`` until ``mount`` finishes, then ``READY``, with
    ``SAVING`` while a write is in flight. Whether the session is clean or
    dirty is derived from the session itself. At most one save runs at a
    time; a second request while ``SAVING`` is ignored.
    """

    def __init__(
        self,
        store: SettingsStoreProtocol,
        notifier: Notifier,
        default_window: Optional[BookingWindow] = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._default_window = default_window or BookingWindow()
        self._phase = Phase.LOADING
        self._closed = False
        self.session = EditSession.start(self._default_window)
        self.load_error: Optional[FetchFailed] = None

    # -------------------- state --------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def current(self) -> BookingWindow:
        return self.session.current

    @property
    def original(self) -> BookingWindow:
        return self.session.original

    @property
    def is_dirty(self) -> bool:
        return self.session.dirty

    @property
    def is_valid(self) -> bool:
        return self.session.valid

    @property
    def is_saving(self) -> bool:
        return self._phase is Phase.SAVING

    @property
    def can_save(self) -> bool:
        """Save is offered only when ready, changed and valid."""
        return self._phase is Phase.READY and self.is_dirty and self.is_valid

    @property
    def can_reset(self) -> bool:
        """Reset is offered only while there are pending edits."""
        return self.is_dirty and not self.is_saving

    @property
    def active_duration(self) -> Union[str, int]:
        return self.current.active_duration()

    @property
    def status_message(self) -> str:
        if self.is_valid:
            return f"Active booking window: {self.active_duration}"
        return INVALID_RANGE_MESSAGE

    @property
    def save_label(self) -> str:
        if self.is_saving:
            return "Saving..."
        return "Save Changes" if self.is_dirty else "No Changes"

    @property
    def opening_display(self) -> str:
        return to_display(self.current.opening_time)

    @property
    def closing_display(self) -> str:
        return to_display(self.current.closing_time)

    # -------------------- transitions --------------------

    async def mount(self) -> LoadResult:
        """
        Load the persisted window and enter ``READY``.

        On failure the defaults become the baseline and the operator is
        told; the screen stays usable.
        """
        self._phase = Phase.LOADING
        result = await self._store.load()

        if self._closed:
            logger.debug("Controller closed during load; discarding result")
            return result

        match result:
            case Success(value=window):
                self.session = EditSession.start(window)
                self.load_error = None
            case FetchFailed() as failure:
                logger.warning("Falling back to default window: %s", failure.message)
                self.session = EditSession.start(self._default_window)
                self.load_error = failure
                self._notifier.error(GENERIC_LOAD_MESSAGE)

        self._phase = Phase.READY
        return result

    def set_opening_time(self, value: str) -> None:
        self.session.edit(opening_time=value)

    def set_closing_time(self, value: str) -> None:
        self.session.edit(closing_time=value)

    async def save(self) -> Optional[SaveOutcome]:
        """
        Validate and persist the current window.

        Returns:
            ``None`` when there was nothing to do, ``ValidationFailed`` when
            the window was rejected locally, otherwise the store's result
        """
        if self._closed or self._phase is not Phase.READY:
            logger.debug("Save ignored in phase %s", self._phase.value)
            return None

        if not self.is_dirty:
            return None

        rejected = validate(self.current)
        if rejected is not None:
            self._notifier.error(rejected.message)
            return rejected

        window = self.current
        self._phase = Phase.SAVING
        try:
            result = await self._store.save(window)
        finally:
            if not self._closed:
                self._phase = Phase.READY

        if self._closed:
            logger.debug("Controller closed during save; discarding result")
            return result

        match result:
            case Success():
                self.session.original = window
                self._notifier.success(SAVE_SUCCESS_MESSAGE)
            case SaveFailed(message=message):
                self._notifier.error(message)

        return result

    def reset(self) -> None:
        """Drop pending edits; no-op when clean."""
        if not self.can_reset:
            return
        self.session.revert()

    def close(self) -> None:
        """Tear down; results of calls still in flight are discarded."""
        self._closed = True
