"""Process settings — loaded from environment variables, overridden by the CLI."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Central settings loaded from ``REHOST_*`` env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="REHOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    override: bool = False
    log_level: str = "INFO"
    fetch_timeout: float = 30.0

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            msg = f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{v}'."
            raise ValueError(msg)
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton process settings (cached after first call)."""
    return Settings()
