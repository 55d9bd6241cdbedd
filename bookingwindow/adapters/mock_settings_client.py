"""
In-memory settings store for testing without a running backend.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..domain.models import BookingWindow
from ..domain.results import (
    GENERIC_SAVE_MESSAGE,
    FetchFailed,
    LoadResult,
    SaveFailed,
    SaveResult,
    Success,
)


class MockSettingsClient:
    """
    Mock client that simulates the settings resource.

    The document lives in memory and can be seeded from
    ``mock_settings.json``. Failures can be injected to exercise the
    degraded paths without network access.
    """

    def __init__(
        self,
        document: Optional[Dict[str, Any]] = None,
        data_file: Optional[Path] = None,
        default_window: Optional[BookingWindow] = None,
        fail_load: bool = False,
        fail_save_message: Optional[str] = None,
    ):
        """
        Initialize the mock client.

        Args:
            document: Initial settings document (wins over ``data_file``)
            data_file: JSON file to seed the document from
            default_window: Values used for fields missing from the document
            fail_load: Make every ``load`` return ``FetchFailed``
            fail_save_message: Make every ``save`` fail with this message;
                an empty string fails with the generic message
        """
        self.default_window = default_window or BookingWindow()
        self.fail_load = fail_load
        self.fail_save_message = fail_save_message
        self.load_calls = 0
        self.save_calls = 0

        if document is not None:
            self.document = dict(document)
        else:
            self.document = self._load_document(data_file)

    @staticmethod
    def _load_document(data_file: Optional[Path]) -> Dict[str, Any]:
        """Load the mock document from JSON, or start empty."""
        data_file = data_file or Path(__file__).parent / "mock_settings.json"

        if data_file.exists():
            with open(data_file, "r", encoding="utf-8") as f:
                return json.load(f)

        # Fallback to empty if file doesn't exist
        return {}

    async def load(self) -> LoadResult:
        self.load_calls += 1
        if self.fail_load:
            return FetchFailed()
        return Success(BookingWindow.from_payload(self.document, default=self.default_window))

    async def save(self, window: BookingWindow) -> SaveResult:
        self.save_calls += 1
        if self.fail_save_message is not None:
            return SaveFailed(message=self.fail_save_message or GENERIC_SAVE_MESSAGE)

        self.document.update(window.to_payload())
        return Success(window)

    async def fetch_current_user(self) -> Dict[str, Any]:
        """Mock profile of the signed-in admin."""
        return {
            "name": "Mock Admin",
            "email": "mock.admin@example.com",
            "role": "admin",
        }

    async def verify_admin(self) -> Dict[str, Any]:
        return await self.fetch_current_user()
