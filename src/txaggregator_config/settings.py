"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. TXAGG_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. TXAGG_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("TXAGG_ENV_FILE")
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

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "txaggregator"

    # Full URL override, e.g. sqlite+aiosqlite:///data/txaggregator.db
    db_url: str | None = None
    db_echo: bool = False

    # Import pipeline (IMPORT_ prefix)
    import_pool_core_size: int = 4
    import_pool_max_size: int = 8
    import_queue_capacity: int = 100
    import_chunk_size: int = 100
    import_worker_keep_alive_seconds: float = 60.0

    # Statistics cache
    statistics_cache_enabled: bool = True
    statistics_cache_ttl_seconds: float = 3600.0

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @model_validator(mode="after")
    def _validate_pool_sizes(self) -> Settings:
        if self.import_pool_core_size < 1:
            msg = "import_pool_core_size must be at least 1"
            raise ValueError(msg)
        if self.import_pool_max_size < self.import_pool_core_size:
            msg = "import_pool_max_size must be >= import_pool_core_size"
            raise ValueError(msg)
        if self.import_queue_capacity < 1:
            msg = "import_queue_capacity must be at least 1"
            raise ValueError(msg)
        if self.import_chunk_size < 1:
            msg = "import_chunk_size must be at least 1"
            raise ValueError(msg)
        return self

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Database URL: the explicit override or one built from components."""
        if self.db_url:
            return self.db_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def database_type(self) -> str:
        return "sqlite" if self.database_url.startswith("sqlite") else "postgresql"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
