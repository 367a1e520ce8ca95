"""Configuration management for askit."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from askit.constants import DEFAULT_TIMESTAMP_TOLERANCE


class SkillSettings(BaseSettings):
    """Dispatcher settings."""

    model_config = SettingsConfigDict(
        env_prefix="ASKIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Identity
    application_id: str = Field(default="", description="Application id requests must carry")
    ignore_application_id: bool = Field(default=False, description="Skip the application id check")

    # Freshness
    ignore_timestamp: bool = Field(default=False, description="Skip the timestamp freshness check")
    timestamp_tolerance: int = Field(
        default=DEFAULT_TIMESTAMP_TOLERANCE,
        ge=0,
        description="Maximum seconds between the request timestamp and now",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")


def get_settings(**overrides: Any) -> SkillSettings:
    """Get dispatcher settings.

    Args:
        **overrides: Explicit values that win over the environment and ``.env``.
            ``None`` values are ignored so CLI options can be passed through.

    Returns:
        SkillSettings instance
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    return SkillSettings(**values)
