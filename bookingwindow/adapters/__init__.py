"""
Adapters layer - External integrations (settings API, credential storage).
"""

from .settings_client import SettingsClient
from .mock_settings_client import MockSettingsClient
from .token_store import TokenStore

__all__ = ["SettingsClient", "MockSettingsClient", "TokenStore"]
