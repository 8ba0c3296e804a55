import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Recordbook API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3020"]

    # Which journal this process serves (see domain.entities.journal_profile)
    journal_profile: str = "gratitude"

    # Persistence — "json" writes <data_dir>/<key>.json, "sqlite" uses database_url
    storage_backend: str = "json"
    data_dir: str = "data"
    database_url: str = "sqlite:///data/recordbook.db"

    # 0 keeps the journal profile's own threshold
    frequent_threshold: int = 0

    # When False, failed writes are logged and the in-memory state stays authoritative
    raise_on_persistence_error: bool = False

    # Logging — per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine — SQL statements
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_store: str = "INFO"            # RecordStore + storage adapters

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the default backend when an unknown one is configured."""
        if self.storage_backend not in {"json", "sqlite"}:
            _config_logger.warning(
                "Unknown storage_backend '%s' — using 'json'", self.storage_backend
            )
            object.__setattr__(self, "storage_backend", "json")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
