"""Application configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DOBOT_LOG_LEVEL: str = Field(default="info")
    DOBOT_LOG_DIR: Path | None = Field(default=None)
    DOBOT_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")
    DATA_DIR: Path = Field(default=Path("data"))
    TASK_DB_FILENAME: str = Field(default="tasks.json")
    HEALTHCHECK_API_TOKEN: str | None = Field(default=None)
    ENABLE_HEALTHCHECK_AUTH: bool = Field(default=False)

    # Chat assistant behaviour
    RECENTLY_COMPLETED_LIMIT: int = Field(default=5)
    ASSISTANT_TASK_DESCRIPTION: str = Field(default="Tarea creada por el asistente IA")


settings = Settings()
config = settings  # Alias for backward compatibility


__all__ = ["Settings", "settings", "config"]
