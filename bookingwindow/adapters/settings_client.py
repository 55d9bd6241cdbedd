"""
HTTP client for the admin settings resource.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from ..domain.exceptions import AuthenticationError, SettingsAPIError
from ..domain.models import BookingWindow
from ..domain.results import (
    GENERIC_LOAD_MESSAGE,
    GENERIC_SAVE_MESSAGE,
    FetchFailed,
    LoadResult,
    SaveFailed,
    SaveResult,
    Success,
)

logger = logging.getLogger(__name__)


class SettingsClient:
    """
    Client for the singleton settings document of the ordering backend.

    ``GET`` reads the booking window, ``PUT`` replaces it. Both public
    operations return result values; transport and HTTP errors are turned
    into ``FetchFailed`` / ``SaveFailed`` here and never raised further.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        settings_path: str = "/api/admin/settings",
        auth_path: str = "/api/auth/me",
        timeout: float = 30.0,
        default_window: Optional[BookingWindow] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the settings client.

        Args:
            base_url: Backend root URL, e.g. ``https://shop.example.com``
            token: Optional bearer token sent with every request
            settings_path: Path of the settings resource
            auth_path: Path returning the signed-in user
            timeout: Request timeout in seconds
            default_window: Values used for fields missing from the document
            session: Optional ``requests.Session`` (tests inject a fake)
        """
        self.base_url = base_url.rstrip("/")
        self.settings_url = f"{self.base_url}{settings_path}"
        self.auth_url = f"{self.base_url}{auth_path}"
        self.timeout = timeout
        self.default_window = default_window or BookingWindow()
        self.session = session or requests.Session()
        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_config(cls, config, token: Optional[str] = None) -> "SettingsClient":
        """Build a client from an ``AppConfig``; ``token`` overrides the configured one."""
        return cls(
            base_url=config.api.base_url,
            token=token or config.api.token,
            settings_path=config.api.settings_path,
            auth_path=config.api.auth_path,
            timeout=config.api.timeout_seconds,
            default_window=config.defaults.get_window(),
        )

    async def load(self) -> LoadResult:
        """
        Read the booking window.

        Returns:
            ``Success(BookingWindow)`` or ``FetchFailed``
        """
        try:
            data = await asyncio.to_thread(self._request, "GET", self.settings_url)
        except SettingsAPIError as exc:
            logger.warning("Loading settings failed: %s", exc)
            return FetchFailed(message=GENERIC_LOAD_MESSAGE, status_code=exc.status_code)

        if data is not None and not isinstance(data, dict):
            logger.warning("Unexpected settings document: %r", data)
            return FetchFailed(message=GENERIC_LOAD_MESSAGE)

        window = BookingWindow.from_payload(data, default=self.default_window)
        logger.debug("Loaded booking window %s", window)
        return Success(window)

    async def save(self, window: BookingWindow) -> SaveResult:
        """
        Replace the booking window with ``window``.

        Returns:
            ``Success(window)`` or ``SaveFailed`` carrying the server message
            when the backend sent one
        """
        try:
            await asyncio.to_thread(
                self._request, "PUT", self.settings_url, window.to_payload()
            )
        except SettingsAPIError as exc:
            logger.warning("Saving settings failed: %s", exc)
            return SaveFailed(
                message=exc.server_message or GENERIC_SAVE_MESSAGE,
                status_code=exc.status_code,
            )

        logger.info("Saved booking window %s", window)
        return Success(window)

    async def fetch_current_user(self) -> Dict[str, Any]:
        """
        Fetch the account the bearer token belongs to.

        Raises:
            AuthenticationError: If no token is set or the backend rejects it
        """
        if "Authorization" not in self.headers:
            raise AuthenticationError("No API token configured. Run 'bookingwindow login' first.")

        try:
            data = await asyncio.to_thread(self._request, "GET", self.auth_url)
        except SettingsAPIError as exc:
            raise AuthenticationError(
                f"Token verification failed: {exc.server_message or exc}"
            ) from exc

        if not isinstance(data, dict):
            raise AuthenticationError("Token verification returned no user profile.")
        return data

    async def verify_admin(self) -> Dict[str, Any]:
        """Check that the token belongs to an admin account and return the profile."""
        user = await self.fetch_current_user()
        if user.get("role") != "admin":
            raise AuthenticationError(
                f"Account '{user.get('email', 'unknown')}' is not an admin "
                f"(role: {user.get('role', 'none')})."
            )
        return user

    def _request(
        self,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Perform a blocking request and decode the JSON body.

        Raises:
            SettingsAPIError: On transport failure, non-2xx status or bad JSON
        """
        logger.debug("%s %s", method, url)

        try:
            response = self.session.request(
                method,
                url,
                headers=self.headers,
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise SettingsAPIError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise SettingsAPIError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                server_message=self._extract_message(response),
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise SettingsAPIError(
                f"{method} {url} returned invalid JSON: {e}",
                status_code=response.status_code,
            ) from e

    @staticmethod
    def _extract_message(response: requests.Response) -> Optional[str]:
        """Return the ``message`` field of an error body, if there is one."""
        try:
            body = response.json()
        except ValueError:
            return None

        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message:
                return message
        return None
