"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - No migration tooling: database_create_schema creates tables on startup for local runs
    - invoices_path is the single source for the invoice router prefix, the redirect
      target and the list cache key
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://invoices:invoices@db:5432/invoices"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_schema: bool = False

    # Views
    invoices_path: str = "/dashboard/invoices"
    list_cache_enabled: bool = True

    @field_validator("invoices_path")
    @classmethod
    def normalize_invoices_path(cls, v: str) -> str:
        """Router prefix and cache key: one leading slash, no trailing slash."""
        path = "/" + v.strip().strip("/")
        if path == "/":
            raise ValueError("invoices_path must not be the root path")
        return path

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
