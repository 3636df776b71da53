"""Relay settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed relay configuration."""

    gemini_api_key: str = Field(default="", alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.0-flash", alias="GEMINI_MODEL")
    temperature: float = Field(default=0.7, alias="TEMPERATURE")
    max_output_tokens: int = Field(default=1000, alias="MAX_OUTPUT_TOKENS")
    provider_timeout: float | None = Field(
        default=None, alias="PROVIDER_TIMEOUT", description="Seconds; unset means no timeout"
    )
    environment: str = Field(default="production", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=5000, alias="PORT")
    cors_origin: str = Field(default="http://localhost:3000", alias="CORS_ORIGIN")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
