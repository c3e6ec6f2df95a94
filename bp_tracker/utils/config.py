"""Configuration utilities for the BP Tracker client."""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bp_tracker.utils.logging_utils import setup_json_logging


class Settings(BaseSettings):
    """Client settings loaded from environment variables and `.env`."""

    # Service configuration
    service_env: str = Field("development", description="Environment (development, staging, production)")
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("json", description="Log output format (json or text)")

    # API configuration
    api_base_url: str = Field("http://localhost:8080", description="Base URL of the readings API")
    request_timeout_seconds: Optional[float] = Field(
        None, description="HTTP request timeout in seconds; unset keeps the transport default"
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """
        Validate the API base URL.

        Args:
            v: Configured base URL

        Returns:
            str: The URL without trailing slashes

        Raises:
            ValueError: If the URL has no http(s) scheme
        """
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must start with http:// or https://, got {v!r}")
        return v.rstrip("/")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"Unknown log level {v!r}")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Create and cache settings instance.

    Returns:
        Settings: Application settings
    """
    return Settings()


def setup_logging(level: str = "INFO", log_format: str = "json") -> logging.Logger:
    """Configure root logging as JSON lines or plain text."""
    numeric_level = logging.getLevelName(level.upper())
    if log_format == "json":
        return setup_json_logging(level=numeric_level)
    logger = logging.getLogger()
    logger.setLevel(numeric_level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s  %(message)s"))
    logger.addHandler(handler)
    return logger
