"""Concrete KeyValueStore implementation backed by SQLAlchemy."""

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from recordbook.application.interfaces import KeyValueStore
from recordbook.domain.exceptions import PersistenceError
from recordbook.infrastructure.database.base import Base
from recordbook.infrastructure.database.models import KeyValueEntryModel

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-based SQLite database."""
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port with one row per key.

    Uses a synchronous engine: the store is called from a single thread and
    every write is a full overwrite of one row.
    """

    def __init__(self, database_url: str | None = None, *, engine: Engine | None = None):
        if engine is None:
            if database_url is None:
                raise ValueError("Either database_url or engine is required")
            _ensure_sqlite_dir(database_url)
            engine = create_engine(database_url, future=True)
        self._engine = engine
        self._session_factory = sessionmaker(engine, class_=Session, expire_on_commit=False)
        Base.metadata.create_all(engine)

    def read(self, key: str) -> bytes | None:
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueEntryModel, key)
                return bytes(model.value) if model else None
        except SQLAlchemyError as exc:
            raise PersistenceError(key, str(exc)) from exc

    def write(self, key: str, value: bytes) -> None:
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueEntryModel, key)
                if model is None:
                    session.add(KeyValueEntryModel(key=key, value=value))
                else:
                    model.value = value
                session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError(key, str(exc)) from exc

        logger.debug("Wrote key '%s' (%d bytes)", key, len(value))

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
