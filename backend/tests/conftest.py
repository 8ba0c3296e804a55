"""Shared fixtures: an in-memory key-value store and a frozen clock."""

from datetime import datetime, timezone

import pytest

from recordbook.application.interfaces import KeyValueStore
from recordbook.application.services import RecordStore
from recordbook.domain.entities import JournalProfile, get_profile

# "Today" for every store built by these fixtures.
NOW = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed fake of the key-value port, counting writes."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self.data: dict[str, bytes] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> bytes | None:
        return self.data.get(key)

    def write(self, key: str, value: bytes) -> None:
        self.data[key] = value
        self.writes += 1


@pytest.fixture
def memory_storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def profile() -> JournalProfile:
    return get_profile("gratitude")


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def store(memory_storage: InMemoryKeyValueStore, profile: JournalProfile, clock) -> RecordStore:
    return RecordStore(memory_storage, profile, clock=clock)
