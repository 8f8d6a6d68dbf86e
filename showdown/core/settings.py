"""Application settings and lazy settings loader."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from the environment and an optional `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Live mode: run against a real nexus-agents MCP server.
    NEXUS_LIVE: bool = False
    NEXUS_MCP_URL: str | None = None
    NEXUS_MCP_TIMEOUT_S: float = 120.0

    SHOWDOWN_TASK: str = "Implement a rate limiter with sliding window"
    REPORT_FORMAT: Literal["markdown", "json", "text"] = "text"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance (lazy-loaded)."""
    return Settings()
