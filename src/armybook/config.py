"""Lightweight configuration for the army book tools."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="ARMYBOOK_", env_file=".env", env_file_encoding="utf-8"
    )

    data_dir: Path = Field(
        default=BUNDLED_DATA_DIR, description="Directory holding one JSON file per faction"
    )
    strict_documents: bool = Field(
        default=False, description="Reject faction files that carry unknown keys"
    )
    log_level: str = Field(default="INFO", description="Root logging level for the CLI")
    api_host: str = Field(default="127.0.0.1", description="Interface the API server binds")
    api_port: int = Field(default=8000, ge=1, le=65535, description="API server TCP port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
