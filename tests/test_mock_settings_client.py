"""
Tests for the in-memory settings store.
"""

import asyncio
import json

from bookingwindow.adapters.mock_settings_client import MockSettingsClient
from bookingwindow.domain.models import BookingWindow
from bookingwindow.domain.results import FetchFailed, SaveFailed, Success


def test_seeded_from_bundled_file():
    """Without arguments the bundled mock document is used."""
    client = MockSettingsClient()

    result = asyncio.run(client.load())

    assert result == Success(BookingWindow("10:00", "22:00"))


def test_seeded_from_custom_file(tmp_path):
    data_file = tmp_path / "settings.json"
    data_file.write_text(json.dumps({"openingTime": "06:00"}), encoding="utf-8")

    client = MockSettingsClient(data_file=data_file)

    assert asyncio.run(client.load()) == Success(BookingWindow("06:00", "21:00"))


def test_missing_file_starts_empty(tmp_path):
    client = MockSettingsClient(data_file=tmp_path / "missing.json")

    assert client.document == {}
    assert asyncio.run(client.load()) == Success(BookingWindow())


def test_save_then_load_round_trip():
    client = MockSettingsClient(document={})
    window = BookingWindow("11:30", "20:45")

    assert asyncio.run(client.save(window)) == Success(window)
    assert asyncio.run(client.load()) == Success(window)
    assert client.save_calls == 1
    assert client.load_calls == 1


def test_injected_failures():
    client = MockSettingsClient(document={}, fail_load=True, fail_save_message="")

    assert isinstance(asyncio.run(client.load()), FetchFailed)
    assert asyncio.run(client.save(BookingWindow())) == SaveFailed(message="Failed to update booking time")
    assert client.document == {}
