"""
Tests for the HTTP settings client.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from bookingwindow.adapters.settings_client import SettingsClient
from bookingwindow.domain.exceptions import AuthenticationError
from bookingwindow.domain.models import BookingWindow
from bookingwindow.domain.results import FetchFailed, SaveFailed, Success


class FakeResponse:
    """Just enough of ``requests.Response`` for the client."""

    def __init__(self, status_code: int = 200, body: Any = None, raw: Optional[bytes] = None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        return json.loads(self.content.decode("utf-8"))


class FakeSession:
    """Records requests and replays canned responses in order."""

    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def request(self, method, url, headers=None, json=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "json": json, "timeout": timeout}
        )
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _client(*responses, token: Optional[str] = "secret") -> SettingsClient:
    return SettingsClient(
        base_url="https://shop.example.com/",
        token=token,
        timeout=5,
        session=FakeSession(*responses),
    )


class TestLoad:
    """Tests for SettingsClient.load."""

    def test_load_success(self):
        client = _client(FakeResponse(body={"openingTime": "10:00", "closingTime": "22:00"}))

        result = asyncio.run(client.load())

        assert result == Success(BookingWindow("10:00", "22:00"))
        call = client.session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://shop.example.com/api/admin/settings"
        assert call["headers"]["Authorization"] == "Bearer secret"
        assert call["timeout"] == 5

    def test_load_missing_fields_default(self):
        client = _client(FakeResponse(body={"closingTime": "23:00"}))

        result = asyncio.run(client.load())

        assert result == Success(BookingWindow("09:00", "23:00"))

    def test_load_empty_body_defaults(self):
        client = _client(FakeResponse(status_code=200))

        result = asyncio.run(client.load())

        assert result == Success(BookingWindow())

    def test_load_server_error(self):
        client = _client(FakeResponse(status_code=500, body={"message": "boom"}))

        result = asyncio.run(client.load())

        assert isinstance(result, FetchFailed)
        assert result.status_code == 500
        assert result.message == "Failed to load settings"

    def test_load_transport_error(self):
        client = _client(requests.exceptions.ConnectionError("refused"))

        result = asyncio.run(client.load())

        assert isinstance(result, FetchFailed)
        assert result.status_code is None

    def test_load_invalid_json(self):
        client = _client(FakeResponse(raw=b"<html>"))

        result = asyncio.run(client.load())

        assert isinstance(result, FetchFailed)

    def test_no_token_no_header(self):
        client = _client(FakeResponse(body={}), token=None)

        asyncio.run(client.load())

        assert "Authorization" not in client.session.calls[0]["headers"]


class TestSave:
    """Tests for SettingsClient.save."""

    def test_save_success(self):
        client = _client(FakeResponse(body={"openingTime": "10:00", "closingTime": "23:00"}))
        window = BookingWindow("10:00", "23:00")

        result = asyncio.run(client.save(window))

        assert result == Success(window)
        call = client.session.calls[0]
        assert call["method"] == "PUT"
        assert call["json"] == {"openingTime": "10:00", "closingTime": "23:00"}

    def test_save_surfaces_server_message(self):
        client = _client(FakeResponse(status_code=409, body={"message": "conflict"}))

        result = asyncio.run(client.save(BookingWindow("10:00", "23:00")))

        assert result == SaveFailed(message="conflict", status_code=409)

    def test_save_generic_message_without_body(self):
        client = _client(FakeResponse(status_code=502, raw=b"Bad Gateway"))

        result = asyncio.run(client.save(BookingWindow("10:00", "23:00")))

        assert result == SaveFailed(message="Failed to update booking time", status_code=502)

    def test_save_transport_error(self):
        client = _client(requests.exceptions.Timeout("slow"))

        result = asyncio.run(client.save(BookingWindow("10:00", "23:00")))

        assert isinstance(result, SaveFailed)
        assert result.message == "Failed to update booking time"


class TestVerifyAdmin:
    """Tests for token verification."""

    def test_admin_accepted(self):
        client = _client(FakeResponse(body={"email": "a@example.com", "role": "admin"}))

        user = asyncio.run(client.verify_admin())

        assert user["role"] == "admin"
        assert client.session.calls[0]["url"] == "https://shop.example.com/api/auth/me"

    def test_non_admin_rejected(self):
        client = _client(FakeResponse(body={"email": "c@example.com", "role": "customer"}))

        with pytest.raises(AuthenticationError, match="not an admin"):
            asyncio.run(client.verify_admin())

    def test_rejected_token(self):
        client = _client(FakeResponse(status_code=401, body={"message": "Not authorized, token failed"}))

        with pytest.raises(AuthenticationError, match="token failed"):
            asyncio.run(client.verify_admin())

    def test_missing_token(self):
        client = _client(token=None)

        with pytest.raises(AuthenticationError, match="No API token"):
            asyncio.run(client.verify_admin())
        assert client.session.calls == []
