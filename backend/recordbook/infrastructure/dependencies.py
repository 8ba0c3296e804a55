"""Dependency wiring — builds the store once and hands it to the API layer."""

from fastapi import Request

from recordbook.application.interfaces import KeyValueStore
from recordbook.application.services import ChangeNotifier, RecordStore
from recordbook.config import Settings, get_settings
from recordbook.domain.entities import get_profile
from recordbook.infrastructure.database import SQLAlchemyKeyValueStore
from recordbook.infrastructure.storage.json_file_store import JsonFileKeyValueStore


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Pick the storage adapter named by ``settings.storage_backend``."""
    if settings.storage_backend == "sqlite":
        return SQLAlchemyKeyValueStore(settings.database_url)
    return JsonFileKeyValueStore(settings.data_dir)


def build_record_store(settings: Settings | None = None) -> RecordStore:
    """Construct the application's single RecordStore from settings.

    Called once from the FastAPI lifespan; the instance lives on
    ``app.state.record_store``.
    """
    settings = settings or get_settings()
    return RecordStore(
        storage=build_key_value_store(settings),
        profile=get_profile(settings.journal_profile),
        notifier=ChangeNotifier(),
        frequent_threshold=settings.frequent_threshold or None,
        raise_on_persistence_error=settings.raise_on_persistence_error,
    )


def get_record_store(request: Request) -> RecordStore:
    """FastAPI dependency — the RecordStore built at startup."""
    return request.app.state.record_store
