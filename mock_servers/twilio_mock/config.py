"""Settings for the Twilio mock server, loaded from environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MockSettings(BaseSettings):
    """Runtime settings (``TWILIO_MOCK_*`` env vars or ``.env``)."""

    # Host the served chat SDK talks back to, e.g. "localhost:4567"
    twilio_host: str = "localhost:4567"

    host: str = "127.0.0.1"
    port: int = 4567
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TWILIO_MOCK_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, level: str) -> str:
        normalized = str(level).upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Invalid log level {level!r}")
        return normalized


@lru_cache(maxsize=1)
def get_settings() -> MockSettings:
    return MockSettings()
