"""Application settings using Pydantic BaseSettings."""

import os
import re

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_async_database_url(url: str | None = None) -> str:
    """Get database URL converted for an async driver."""
    url = url or os.environ.get("DATABASE_URL") or settings.database_url
    # Convert postgres:// to postgresql+asyncpg:// for SQLAlchemy async
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    # asyncpg doesn't support sslmode, it uses ssl parameter
    if "sslmode=" in url:
        url = re.sub(r'[?&]sslmode=[^&]*', '', url)
        url = url.rstrip('?&')
    return url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database (Postgres in production, SQLite for local dev)
    database_url: str = "sqlite+aiosqlite:///./locpages.db"

    # Public site
    public_base_url: str = "https://locraven.com"

    # LLM content writer
    llm_mode: str = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    content_writer_temperature: float = 0.4
    content_writer_max_tokens: int = 1200

    # Page lifecycle
    batch_failure_mode: str = "fail_open"  # fail_open | fail_closed
    upcoming_expiration_window_minutes: int = 60

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_v1_prefix: str = "/api/v1"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
