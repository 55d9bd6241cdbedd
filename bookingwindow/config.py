"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import DEFAULT_CLOSING_TIME, DEFAULT_OPENING_TIME, BookingWindow
from .domain.time_values import to_minutes

HHMM_PATTERN = re.compile(r"^\d{2}:\d{2}$")

ENV_API_URL = "BOOKINGWINDOW_API_URL"
ENV_TOKEN = "BOOKINGWINDOW_TOKEN"


def validate_hhmm(value: str) -> str:
    """Validate a zero-padded 24-hour ``HH:MM`` value."""
    value = (value or "").strip()
    if not HHMM_PATTERN.match(value):
        raise ValueError(f"Time must use the HH:MM format, got '{value}'")
    hour, minute = value.split(":")
    if not (0 <= int(hour) <= 23 and 0 <= int(minute) <= 59):
        raise ValueError(f"Time out of range: '{value}'")
    return value


class ApiConfig(BaseModel):
    """Where the settings resource lives."""
    base_url: str = "http://localhost:5000"
    settings_path: str = "/api/admin/settings"
    auth_path: str = "/api/auth/me"
    timeout_seconds: float = 30.0
    token: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Require an absolute http(s) URL without trailing slash."""
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got '{value}'")
        return value.rstrip("/")

    @field_validator("settings_path", "auth_path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        if not value.startswith("/"):
            return f"/{value}"
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure the HTTP timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value


class DefaultsConfig(BaseModel):
    """Window used when the settings resource has no value or cannot be read."""
    opening_time: str = DEFAULT_OPENING_TIME
    closing_time: str = DEFAULT_CLOSING_TIME

    @field_validator("opening_time", "closing_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return validate_hhmm(v)

    @model_validator(mode="after")
    def validate_order(self) -> "DefaultsConfig":
        """Ensure the default window opens before it closes."""
        if to_minutes(self.closing_time) <= to_minutes(self.opening_time):
            raise ValueError("closing_time must be later than opening_time")
        return self

    def get_window(self) -> BookingWindow:
        return BookingWindow(opening_time=self.opening_time, closing_time=self.closing_time)


class AppConfig(BaseModel):
    """Application configuration."""
    api: ApiConfig = Field(default_factory=ApiConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log_level: {value}")
        return level

    def get_settings_url(self) -> str:
        """Get the absolute URL of the settings resource."""
        return f"{self.api.base_url}{self.api.settings_path}"

    def with_env_overrides(self) -> "AppConfig":
        """Apply ``BOOKINGWINDOW_*`` environment variables on top of the file."""
        updates = {}
        if os.environ.get(ENV_API_URL):
            updates["base_url"] = os.environ[ENV_API_URL]
        if os.environ.get(ENV_TOKEN):
            updates["token"] = os.environ[ENV_TOKEN]

        if not updates:
            return self

        api = ApiConfig(**{**self.api.model_dump(), **updates})
        return self.model_copy(update={"api": api})

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
