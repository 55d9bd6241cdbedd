"""
Storage for the admin API bearer token.

The token is issued by the backend's OAuth flow and pasted in once with
``bookingwindow login``. It is kept in the OS keyring and falls back to a
plaintext file when no keyring backend works.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..domain.exceptions import TokenStorageError

logger = logging.getLogger(__name__)


KEYRING_SERVICE_NAME = "bookingwindow"


class TokenStore:
    """
    Persists the API token for one backend.

    Entries are keyed by the backend base URL, so tokens for staging and
    production do not overwrite each other.
    """

    def __init__(self, base_url: str, token_file: Path | None = None):
        """
        Initialize the token store.

        Args:
            base_url: Backend the token belongs to
            token_file: Optional path of the plaintext fallback file
        """
        self.base_url = base_url.rstrip("/")
        self.token_file = token_file or Path.home() / ".bookingwindow_token"
        self._keyring_supported = True
        self._cache_backend = "keyring"
        self._insecure_storage_warning: Optional[str] = None

    @property
    def cache_backend(self) -> str:
        """Return the active backend (keyring or file)."""
        return self._cache_backend

    @property
    def insecure_storage_warning(self) -> Optional[str]:
        """Provide a warning message when the token falls back to plaintext storage."""
        return self._insecure_storage_warning

    def get_token(self) -> Optional[str]:
        """Return the stored token, or None when nothing was saved."""
        token = self._load_from_keyring()
        if token is None:
            token = self._load_from_file()
        return token or None

    def set_token(self, token: str) -> None:
        """
        Persist ``token`` in the keyring, or the fallback file.

        Raises:
            ValueError: If the token is empty
            TokenStorageError: If neither backend could store it
        """
        token = token.strip()
        if not token:
            raise ValueError("Token must not be empty.")

        if self._keyring_supported and self._save_to_keyring(token):
            return

        self._save_to_file(token)

    def clear(self) -> None:
        """Remove the token from every backend."""
        if self.token_file.exists():
            self.token_file.unlink()
        try:
            keyring.delete_password(KEYRING_SERVICE_NAME, self.base_url)
        except PasswordDeleteError:
            pass
        except KeyringError as exc:  # pragma: no cover - environment dependent
            logger.warning("Could not remove token from keyring: %s", exc)

    def _load_from_keyring(self) -> Optional[str]:
        if not self._keyring_supported:
            return None

        try:
            return keyring.get_password(KEYRING_SERVICE_NAME, self.base_url)
        except KeyringError as exc:  # pragma: no cover - environment dependent
            self._handle_keyring_failure(f"reading credentials failed: {exc}")
            return None

    def _load_from_file(self) -> Optional[str]:
        if self.token_file.exists():
            try:
                with open(self.token_file, "r", encoding="utf-8") as file_handle:
                    return file_handle.read().strip()
            except OSError as exc:
                logger.warning("Could not load token file %s: %s", self.token_file, exc)
        return None

    def _save_to_keyring(self, token: str) -> bool:
        try:
            keyring.set_password(KEYRING_SERVICE_NAME, self.base_url, token)
            self._cache_backend = "keyring"
            return True
        except KeyringError as exc:
            self._handle_keyring_failure(f"writing credentials failed: {exc}")
            return False

    def _save_to_file(self, token: str) -> None:
        try:
            self.token_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.token_file, "w", encoding="utf-8") as file_handle:
                file_handle.write(token)
            self.token_file.chmod(0o600)
        except OSError as exc:
            raise TokenStorageError(
                f"Could not save token to {self.token_file}: {exc}"
            ) from exc

    def _handle_keyring_failure(self, reason: str) -> None:
        if self._keyring_supported:
            logger.warning(
                "Secure credential storage unavailable (%s). Falling back to plaintext file.",
                reason,
            )
        self._keyring_supported = False
        self._cache_backend = "file"
        if not self._insecure_storage_warning:
            self._insecure_storage_warning = (
                f"Secure credential storage unavailable ({reason}). "
                f"Falling back to plaintext token file at {self.token_file}."
            )
