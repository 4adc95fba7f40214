"""
Application configuration loaded from environment variables.
Use .env file or export variables; DATABASE_URL is the only key needed to serve requests.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRENDING_PERIODS = ("day", "week", "month")


class Settings(BaseSettings):
    """Environment-based settings. Validates on load."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database: single URL for dev (local Postgres or SQLite) and prod
    database_url: str = ""
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_connect_timeout: int = 10

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    # CORS: comma-separated origins; "*" allows any
    cors_origins: str = "*"

    # Dev conveniences; production schema is managed by Alembic
    create_schema_on_startup: bool = False
    seed_on_startup: bool = True

    # Trending
    trending_default_period: str = "week"
    trending_overfetch_factor: int = 2  # usage candidates kept per requested slot before category filtering

    @field_validator("database_url")
    @classmethod
    def strip_database_url(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("trending_default_period")
    @classmethod
    def known_period(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if v not in TRENDING_PERIODS:
            raise ValueError(f"TRENDING_DEFAULT_PERIOD must be one of {', '.join(TRENDING_PERIODS)}")
        return v

    @field_validator("trending_overfetch_factor")
    @classmethod
    def overfetch_at_least_two(cls, v: int) -> int:
        if v < 2:
            raise ValueError("TRENDING_OVERFETCH_FACTOR must be at least 2")
        return v

    @property
    def database_configured(self) -> bool:
        """True if DATABASE_URL is set."""
        return bool(self.database_url)

    def get_database_url(self) -> str:
        """Database URL from DATABASE_URL. Normalizes postgres:// to postgresql:// for SQLAlchemy."""
        url = self.database_url
        if not url:
            raise ValueError("Database not configured. Set DATABASE_URL in .env")
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://") :]
        return url

    def get_cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance (env read once)."""
    return Settings()
