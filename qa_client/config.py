"""Client settings loaded from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Configuration for the conversation client."""

    relay_url: str = Field(default="http://localhost:5000/api/ask")
    request_timeout: float = Field(default=30.0, description="Seconds")
    storage_path: Path = Field(default=Path("~/.ai-qa-chat.json"))
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "warning"

    model_config = SettingsConfigDict(env_prefix="QA_", env_file=".env", extra="ignore")


@lru_cache
def get_client_settings() -> ClientSettings:
    """Return a cached instance of client settings."""

    return ClientSettings()
