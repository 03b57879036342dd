"""
Glossary Service Core Configuration

This module manages all application configuration using Pydantic Settings.
Environment variables are loaded from .env file.
"""

import json
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = True
    log_level: str = "INFO"

    api_prefix: str = "/api/v1"

    # Glossary data source (http(s) URL, file:// URL or local path)
    glossary_data_url: str = "./data/glossary.json"
    data_load_timeout: float = 10.0
    # Locale used for term ordering; None keeps the Unicode-aware default
    sort_locale: Optional[str] = None

    # Navigation history storage
    history_backend: Literal["redis", "memory"] = "redis"
    history_storage_key: str = "glossary-navigation-history"
    session_ttl_seconds: int = Field(default=60 * 60 * 12, gt=0)

    # Redis
    redis_url: str = "redis://localhost:6379/0"
    redis_db: int = 0

    # Presentation side effects
    highlight_duration_seconds: float = Field(default=1.5, gt=0)
    scroll_delay_seconds: float = Field(default=0.1, ge=0)

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
        "http://localhost:8000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8080",
    ]
    cors_credentials: bool = True
    cors_methods: list[str] = ["*"]
    cors_headers: list[str] = ["*"]

    # Feature Flags
    enable_websocket: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: object) -> list[str]:
        """Parse CORS origins from string, list, or JSON string"""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            if isinstance(v, str):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v]
            return v
        return ["*"]

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, v: str) -> str:
        """Strip the trailing slash so routers can be mounted under it"""
        return v.rstrip("/")

    @property
    def use_redis_history(self) -> bool:
        """Check if navigation history is persisted in Redis"""
        return self.history_backend == "redis"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache for singleton pattern.
    """
    return Settings()


# Export singleton instance
settings = get_settings()
