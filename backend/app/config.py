from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Community Dashboard API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///data/community_dashboard.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Client-side storage backend: "local" (JSON slots on disk) or "remote" (RPC proxy)
    storage_backend: Literal["local", "remote"] = "local"
    local_store_dir: str = "data/store"
    remote_api_url: str = "http://localhost:8030/api/v1/rpc"

    # Audit trail ring-buffer size
    audit_log_capacity: int = 500

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore — outbound HTTP
    log_level_pipeline: str = "INFO"         # confirm → write → audit pipeline
    log_level_storage: str = "INFO"          # local slots, remote RPC client, SQL adapters

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
