"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. GATEHOUSE_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path.cwd()


def get_config_dir() -> Path:
    """Get the config directory path (key files, .env files)."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. GATEHOUSE_ENV_FILE env var
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("GATEHOUSE_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Gatehouse"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/gatehouse.db"

    # JWT key pair (PEM files, read once at startup)
    jwt_private_keyfile: Path = Path("config/private_key.pem")
    jwt_public_keyfile: Path = Path("config/public_key.pem")

    # API (API_ prefix)
    api_host: str = "127.0.0.1"
    api_port: int = 8080
    api_cookie_secure: bool = True

    # Password hashing worker threads
    password_hash_workers: int = 4

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("password_hash_workers")
    @classmethod
    def _validate_password_hash_workers(cls, v: int) -> int:
        """At least one worker is needed to hash anything."""
        if v < 1:
            msg = "password_hash_workers must be at least 1"
            raise ValueError(msg)
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
