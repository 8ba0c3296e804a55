"""Unit tests for the RecordStore — CRUD, persistence mirror, observers, streaks."""

from datetime import date, datetime, timezone

import pytest

from recordbook.application.interfaces import KeyValueStore
from recordbook.application.services import (
    ChangeAction,
    ChangeNotifier,
    RecordChange,
    RecordStore,
    decode_records,
    encode_records,
)
from recordbook.domain.entities import Record, RecordFilter, SortOption, get_profile
from recordbook.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PersistenceError,
)

EARLIER = datetime(2023, 12, 1, 9, 0, tzinfo=timezone.utc)


class FailingKeyValueStore(KeyValueStore):
    """Fake storage whose writes always fail."""

    def read(self, key: str) -> bytes | None:
        return None

    def write(self, key: str, value: bytes) -> None:
        raise PersistenceError(key, "disk full")


def _record(name: str = "Morning walk", day: date = date(2024, 1, 2), **kwargs) -> Record:
    kwargs.setdefault("category", "nature")
    kwargs.setdefault("created_at", EARLIER)
    kwargs.setdefault("updated_at", EARLIER)
    return Record(name=name, date=day, **kwargs)


# ── add / get ────────────────────────────────────────────────────────


def test_add_then_get_returns_equal_record(store: RecordStore):
    record = _record(comment="Sunny and cold")
    added = store.add(record)

    assert store.get(added.id) == record
    assert len(store) == 1


def test_add_assigns_id_when_missing(store: RecordStore):
    added = store.add(_record(id=""))
    assert added.id
    assert added.id in store


def test_add_rejects_duplicate_id(store: RecordStore):
    first = store.add(_record())
    with pytest.raises(DuplicateEntityError):
        store.add(_record(name="Other", id=first.id))
    assert len(store) == 1


def test_add_keeps_newest_first_order(store: RecordStore):
    store.add(_record("middle", date(2024, 1, 2)))
    store.add(_record("oldest", date(2024, 1, 1)))
    store.add(_record("newest", date(2024, 1, 3)))

    assert [r.name for r in store.all()] == ["newest", "middle", "oldest"]


def test_get_unknown_id_returns_none(store: RecordStore):
    assert store.get("missing") is None


def test_returned_records_are_copies(store: RecordStore):
    added = store.add(_record())
    added.name = "mutated outside"
    store.all()[0].name = "mutated again"

    assert store.get(added.id).name == "Morning walk"


# ── update ───────────────────────────────────────────────────────────


def test_update_replaces_fields_and_bumps_updated_at(store: RecordStore):
    added = store.add(_record())
    edited = Record(
        id=added.id,
        name="Evening walk",
        category="health",
        date=date(2024, 1, 1),
        comment="Rainy",
        is_favorite=True,
    )

    updated = store.update(edited)

    assert updated.name == "Evening walk"
    assert updated.category == "health"
    assert updated.date == date(2024, 1, 1)
    assert updated.comment == "Rainy"
    assert updated.is_favorite is True
    assert updated.created_at == EARLIER
    assert updated.updated_at == datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


def test_update_unknown_id_leaves_collection_unchanged(store: RecordStore):
    store.add(_record())
    before = store.all()

    with pytest.raises(EntityNotFoundError):
        store.update(_record(name="Ghost", id="missing"))

    assert store.all() == before


# ── delete ───────────────────────────────────────────────────────────


def test_delete_removes_exactly_one(store: RecordStore):
    first = store.add(_record("first"))
    store.add(_record("second"))

    removed = store.delete(first.id)

    assert removed.id == first.id
    assert store.get(first.id) is None
    assert len(store) == 1


def test_delete_accepts_record(store: RecordStore):
    added = store.add(_record())
    store.delete(added)
    assert len(store) == 0


def test_delete_unknown_id_raises_and_keeps_collection(store: RecordStore):
    store.add(_record())
    with pytest.raises(EntityNotFoundError):
        store.delete("missing")
    assert len(store) == 1


def test_delete_many_skips_unknown_ids(store: RecordStore):
    a = store.add(_record("a"))
    b = store.add(_record("b"))
    store.add(_record("c"))

    assert store.delete_many([a.id, b.id, "missing"]) == 2
    assert [r.name for r in store.all()] == ["c"]
    assert store.delete_many(["missing"]) == 0


# ── persistence mirror ───────────────────────────────────────────────


def test_every_mutation_overwrites_persisted_collection(store: RecordStore, memory_storage, profile):
    added = store.add(_record())
    store.toggle_favorite(added.id)
    store.delete(added.id)

    assert memory_storage.writes == 3
    assert decode_records(memory_storage.data[profile.storage_key]) == []


def test_reload_from_storage_restores_collection(store: RecordStore, memory_storage, profile, clock):
    store.add(_record("one", date(2024, 1, 1)))
    store.add(_record("two", date(2024, 1, 2), is_favorite=True))

    reloaded = RecordStore(memory_storage, profile, clock=clock)

    assert reloaded.all() == store.all()


def test_unreadable_saved_collection_starts_empty(memory_storage, profile, clock):
    memory_storage.data[profile.storage_key] = b"not json at all"
    store = RecordStore(memory_storage, profile, clock=clock)
    assert len(store) == 0


def test_duplicate_ids_in_saved_collection_are_dropped(memory_storage, profile, clock):
    record = _record()
    memory_storage.data[profile.storage_key] = encode_records([record, record])

    store = RecordStore(memory_storage, profile, clock=clock)

    assert len(store) == 1


def test_out_of_range_epoch_in_saved_collection_starts_empty(memory_storage, profile, clock):
    memory_storage.data[profile.storage_key] = (
        b'[{"id": "a", "name": "x", "category": "people", "date": 1e20}]'
    )

    store = RecordStore(memory_storage, profile, clock=clock)

    assert len(store) == 0


def test_write_failure_keeps_memory_state(profile, clock):
    store = RecordStore(FailingKeyValueStore(), profile, clock=clock)

    added = store.add(_record())

    assert store.get(added.id) is not None
    assert isinstance(store.last_persistence_error, PersistenceError)


def test_write_failure_raises_when_strict(profile, clock):
    store = RecordStore(FailingKeyValueStore(), profile, clock=clock, raise_on_persistence_error=True)
    received: list[RecordChange] = []
    store.subscribe(received.append)

    with pytest.raises(PersistenceError):
        store.add(_record())

    assert len(store) == 1
    assert len(received) == 1


def test_successful_write_clears_previous_error(store: RecordStore, memory_storage):
    store.last_persistence_error = PersistenceError("key", "old failure")
    store.add(_record())
    assert store.last_persistence_error is None


def test_unencodable_record_is_reported_not_raised(store: RecordStore):
    received: list[RecordChange] = []
    store.subscribe(received.append)

    added = store.add(_record(name=None))

    assert added.id in store
    assert "encode failed" in str(store.last_persistence_error)
    assert [c.action for c in received] == [ChangeAction.ADDED]


# ── observers ────────────────────────────────────────────────────────


def test_subscribers_receive_each_change(memory_storage, profile, clock):
    notifier = ChangeNotifier()
    store = RecordStore(memory_storage, profile, notifier=notifier, clock=clock)
    received: list[RecordChange] = []
    unsubscribe = store.subscribe(received.append)

    added = store.add(_record())
    store.update(_record(name="Edited", id=added.id))
    store.delete(added.id)
    unsubscribe()
    store.add(_record())

    assert [c.action for c in received] == [
        ChangeAction.ADDED,
        ChangeAction.UPDATED,
        ChangeAction.DELETED,
    ]
    assert received[0].record_ids == (added.id,)
    assert notifier.subscriber_count == 0


# ── favorites / archive / duplicate ──────────────────────────────────


def test_toggle_favorite_and_list_favorites(store: RecordStore):
    liked = store.add(_record("liked"))
    store.add(_record("plain"))

    assert store.toggle_favorite(liked.id).is_favorite is True
    assert [r.name for r in store.favorites()] == ["liked"]

    store.toggle_favorite(liked.id)
    assert store.favorites() == []


def test_favorite_flag_follows_later_edits(store: RecordStore):
    liked = store.add(_record("liked", is_favorite=True))
    store.update(_record("renamed", id=liked.id, is_favorite=True))

    assert [r.name for r in store.favorites()] == ["renamed"]


def test_archive_and_unarchive(store: RecordStore):
    added = store.add(_record())

    archived = store.archive(added.id)
    assert archived.is_archived is True
    assert archived.archived_at == datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)
    assert store.filtered(RecordFilter(archived=False)) == []

    restored = store.unarchive(added.id)
    assert restored.is_archived is False
    assert restored.archived_at is None


def test_archive_unknown_id_raises(store: RecordStore):
    with pytest.raises(EntityNotFoundError):
        store.archive("missing")


def test_duplicate_creates_copy_with_new_id(store: RecordStore):
    source = store.add(_record("Sunset", comment="Orange sky", is_favorite=True))

    copy = store.duplicate(source.id)

    assert copy.id != source.id
    assert copy.name == "Sunset (Copy)"
    assert copy.comment == "Orange sky"
    assert copy.is_favorite is False
    assert len(store) == 2


# ── filtered ─────────────────────────────────────────────────────────


def test_filtered_without_predicates_returns_everything_in_default_order(store: RecordStore):
    store.add(_record("b", date(2024, 1, 1)))
    store.add(_record("a", date(2024, 1, 3)))

    assert [r.name for r in store.filtered()] == ["a", "b"]
    assert store.filtered(RecordFilter()) == store.all()


def test_filtered_uses_profile_default_sort(memory_storage, clock):
    store = RecordStore(memory_storage, get_profile("conversation_starters"), clock=clock)
    store.add(_record("What made you laugh today?", category="fun"))
    store.add(_record("Best childhood memory?", category="deep"))

    assert store.profile.default_sort is SortOption.ALPHABETICAL
    assert [r.name for r in store.filtered()] == [
        "Best childhood memory?",
        "What made you laugh today?",
    ]


# ── statistics & streaks ─────────────────────────────────────────────


def test_streak_scenario_with_deleted_middle_day(store: RecordStore):
    store.add(_record("d1", date(2024, 1, 1)))
    middle = store.add(_record("d2", date(2024, 1, 2)))
    store.add(_record("d3", date(2024, 1, 3)))

    assert store.current_streak() == 3

    store.delete(middle.id)

    assert store.current_streak() == 1
    assert store.best_streak() == 1


def test_best_streak_from_older_history(store: RecordStore):
    for day in range(1, 6):
        store.add(_record(f"dec {day}", date(2023, 12, day)))
    store.add(_record("yesterday", date(2024, 1, 2)))
    store.add(_record("today", date(2024, 1, 3)))

    assert store.current_streak() == 2
    assert store.best_streak() == 5


def test_frequency_threshold(store: RecordStore):
    for _ in range(3):
        store.add(_record("Argan oil"))
    for _ in range(2):
        store.add(_record("Dry shampoo"))

    classes = {item.name: item.classification.value for item in store.frequencies()}

    assert classes == {"Argan oil": "frequent", "Dry shampoo": "rare"}
    assert store.statistics().frequent_items == ["Argan oil"]


def test_frequency_threshold_override(memory_storage, profile, clock):
    store = RecordStore(memory_storage, profile, clock=clock, frequent_threshold=2)
    store.add(_record("Dry shampoo"))
    store.add(_record("Dry shampoo"))

    assert store.frequencies()[0].classification.value == "frequent"


def test_statistics_summary(store: RecordStore):
    store.add(_record("a", date(2024, 1, 1), category="people"))
    store.add(_record("b", date(2024, 1, 2), category="people", is_favorite=True))
    archived = store.add(_record("c", date(2024, 1, 3), category="nature"))
    store.archive(archived.id)

    stats = store.statistics()

    assert stats.total_count == 3
    assert stats.active_count == 2
    assert stats.archived_count == 1
    assert stats.favorite_count == 1
    assert stats.most_popular_category == "people"
    assert stats.current_streak == 3
    assert stats.best_streak == 3
    assert stats.total_days == 3
