from .base import Base
from .key_value_repository import SQLAlchemyKeyValueStore
from .models import KeyValueEntryModel

__all__ = [
    "Base",
    "SQLAlchemyKeyValueStore",
    "KeyValueEntryModel",
]
