"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (defaults are dev-only)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all settings: works out-of-the-box for local development
    - Admin bootstrap credentials configurable so deployments never keep admin/admin
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Record store
    data_dir: str = "data"

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["*"]
    host: str = "0.0.0.0"
    port: int = 3000

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """'/api/' and 'api' both become '/api'; empty stays empty (routes at root)."""
        if isinstance(v, str):
            v = v.strip().strip("/")
            return f"/{v}" if v else ""
        return v

    # Admin bootstrap (used only when no admin exists at startup)
    admin_username: str = "admin"
    admin_email: str = "admin@bazimn.local"
    admin_password: str = "admin"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
