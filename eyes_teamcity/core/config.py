"""
Application configuration using pydantic-settings.
All environment variables are validated and typed.
"""

import logging
import os
from pydantic_settings import BaseSettings
from pydantic import field_validator

from eyes_teamcity.core.constants import DEFAULT_EYES_SERVER_URL


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Webhook server
    webhook_host: str = "0.0.0.0"
    webhook_port: int = 8081

    # Optional HMAC secret shared with the CI host
    webhook_secret: str | None = None

    # Eyes server used when a build feature leaves the URL empty
    default_server_url: str = DEFAULT_EYES_SERVER_URL

    # Appended to overview iframe URLs as agentId when set
    overview_agent_id: str | None = None

    # Builds remembered for the overview page
    max_known_builds: int = 1000

    log_level: str = "INFO"

    @field_validator("webhook_secret", "overview_agent_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @field_validator("default_server_url", mode="before")
    @classmethod
    def _normalize_server_url(cls, value: str | None) -> str:
        cleaned = str(value or "").strip().rstrip("/")
        return cleaned or DEFAULT_EYES_SERVER_URL

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = str(value).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]

    model_config = {
        "env_file": os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton settings instance
settings = Settings()
