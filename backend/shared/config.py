"""
Centralized configuration for the Costshare backend.

All settings are loaded from environment variables with sensible defaults.
Upstream admin API settings are plain names (BASE_URL, ADMIN_USERNAME, ...),
everything else is namespaced by concern (SNAPSHOT_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Costshare API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "info"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Upstream admin API
    base_url: str = ""
    admin_username: str = ""
    admin_password: str = ""
    upstream_timeout: float = 30.0
    upstream_login_retries: int = 3
    upstream_token_skew_seconds: int = 10

    # Snapshots
    snapshot_backend: Literal["memory", "supabase"] = "memory"
    snapshot_timezone: str = "Asia/Shanghai"

    # Supabase (used when snapshot_backend == "supabase")
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_schema: str = "public"
    supabase_timeout: float = 10.0
    supabase_db_url: str = ""  # direct Postgres URL, used by run_migrations.py only


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
