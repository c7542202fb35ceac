# app/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./tickets.db")
    APP_NAME: str = "Helpdesk"
    APP_DESC: str = "Lightweight IT support ticketing"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Where the ticket snapshot lives
    STORAGE_BACKEND: Literal["sql", "memory"] = "sql"
    STORAGE_KEY: str = "helpdesk_tickets_v1"

    # CORS origins, comma separated
    CORS_ORIGINS: str = "*"

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
