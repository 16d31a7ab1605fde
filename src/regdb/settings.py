"""Application settings using pydantic-settings.

Loads driver defaults (directories, log level) from environment variables
with .env file support. Builder output never depends on these values.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from ``REGDB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REGDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Register sources: <source_dir>/<manufacturer>/*.json
    source_dir: Path = Field(
        default=Path("registers"),
        description="Directory holding one sub-directory of JSON documents per manufacturer",
    )
    builds_dir: Path = Field(
        default=Path("builds"),
        description="Directory generated configurations are written to",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level for regdb loggers",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are loaded once and reused.
    """
    return Settings()
