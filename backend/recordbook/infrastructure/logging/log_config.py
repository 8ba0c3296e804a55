"""Logging setup for the recordbook backend.

Each category below owns a group of loggers whose level comes from one
Settings field, so SQL echo or uvicorn access lines can be turned down
while the record store keeps logging at its own level.
"""

import logging
import sys

from recordbook.config import Settings, get_settings

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# category → (Settings field, logger names)
_CATEGORIES: dict[str, tuple[str, tuple[str, ...]]] = {
    "sql": ("log_level_sql", ("sqlalchemy.engine", "sqlalchemy.pool")),
    "uvicorn": ("log_level_uvicorn", ("uvicorn", "uvicorn.access", "uvicorn.error")),
    "store": (
        "log_level_store",
        (
            "RecordStore",
            "recordbook.application.services",
            "recordbook.infrastructure.storage",
            "recordbook.infrastructure.database",
        ),
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels and return them by category.

    Installs a stderr handler on the root logger only when nothing else
    (uvicorn, pytest) has attached one yet.
    """
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    applied = {"root": root.level}
    for category, (field_name, logger_names) in _CATEGORIES.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[category] = level

    logging.getLogger(__name__).debug(
        "Log levels: %s",
        ", ".join(f"{k}={logging.getLevelName(v)}" for k, v in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Map a level name to its number; unknown names mean INFO."""
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
