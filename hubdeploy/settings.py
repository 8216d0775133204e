"""Runtime configuration for the hub deployment tool."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_context_file() -> str:
    return str(Path.home() / ".hubdeploy" / "context.json")


class Settings(BaseSettings):
    """Configuration values mapped from HUBDEPLOY_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HUBDEPLOY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field("Hub Deploy API")
    version: str = Field("0.3.0")
    log_level: str = Field("INFO")

    # Hub transport
    connect_timeout: float = Field(10.0)
    read_timeout: float = Field(10.0)
    user_agent: str = Field("hubdeploy/0.3 (python-httpx)")

    # Deploy context persistence
    context_file: str = Field(default_factory=_default_context_file)
    default_hub_address: Optional[str] = Field(None)

    # Append the source keyword heuristic to the kind resolver chain
    guess_kind_from_source: bool = Field(False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
