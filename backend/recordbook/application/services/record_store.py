"""Application service — owns the record collection and mirrors it to storage.

The store keeps the whole collection in memory. Every mutation re-sorts it,
re-encodes all of it, overwrites the single persisted key and then tells
subscribers synchronously. Reads never touch storage.

Records handed out are copies, so callers cannot change the collection
except through these methods.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime, timezone
from uuid import uuid4

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from recordbook.application.interfaces import KeyValueStore
from recordbook.application.services.change_notifier import (
    ChangeAction,
    ChangeCallback,
    ChangeNotifier,
    RecordChange,
)
from recordbook.application.services.record_codec import decode_records, encode_records
from recordbook.application.services.record_statistics import (
    best_streak,
    compute_statistics,
    current_streak,
    item_frequencies,
)
from recordbook.application.services.record_views import filter_records, sort_records
from recordbook.domain.entities import (
    ItemFrequency,
    JournalProfile,
    Record,
    RecordFilter,
    RecordStatistics,
)
from recordbook.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PersistenceError,
)
from recordbook.infrastructure.logging.colored_logger import StoreLogger, StoreStage

plog = StoreLogger("RecordStore")

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """In-memory record collection for one journal, mirrored to a KeyValueStore.

    Construct one instance at startup and pass it to every consumer.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        profile: JournalProfile,
        *,
        notifier: ChangeNotifier | None = None,
        clock: Clock | None = None,
        frequent_threshold: int | None = None,
        raise_on_persistence_error: bool = False,
    ):
        self._storage = storage
        self._profile = profile
        self._notifier = notifier or ChangeNotifier()
        self._clock = clock or _utcnow
        self._frequent_threshold = frequent_threshold or profile.frequent_threshold
        self._raise_on_persistence_error = raise_on_persistence_error
        self._records: list[Record] = []
        self.last_persistence_error: PersistenceError | None = None
        self._load()

    # ── Properties ──────────────────────────────────────────────────

    @property
    def profile(self) -> JournalProfile:
        return self._profile

    @property
    def frequent_threshold(self) -> int:
        return self._frequent_threshold

    def today(self) -> date:
        return self._clock().date()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self._index(record_id) is not None

    # ── Reads ───────────────────────────────────────────────────────

    def get(self, record_id: str) -> Record | None:
        """Return a copy of the record, or None when the id is unknown."""
        index = self._index(record_id)
        return replace(self._records[index]) if index is not None else None

    def all(self) -> list[Record]:
        """The full collection in stored (default sort) order."""
        return [replace(r) for r in self._records]

    def filtered(self, record_filter: RecordFilter | None = None) -> list[Record]:
        """Records matching every predicate, in the filter's sort order.

        Without a filter the whole collection comes back in the journal's
        default order.
        """
        record_filter = record_filter or RecordFilter(sort=self._profile.default_sort)
        return [replace(r) for r in filter_records(self._records, record_filter, self.today())]

    def favorites(self) -> list[Record]:
        return self.filtered(RecordFilter(favorites_only=True, sort=self._profile.default_sort))

    def statistics(self) -> RecordStatistics:
        return compute_statistics(
            self._records,
            today=self.today(),
            categories=self._profile.categories,
            frequent_threshold=self._frequent_threshold,
        )

    def frequencies(self) -> list[ItemFrequency]:
        return item_frequencies(self._records, self._frequent_threshold)

    def current_streak(self) -> int:
        return current_streak((r.date for r in self._records), self.today())

    def best_streak(self) -> int:
        return best_streak(r.date for r in self._records)

    # ── Mutations ───────────────────────────────────────────────────

    def add(self, record: Record) -> Record:
        """Append a record, assigning a fresh id when it has none.

        Raises DuplicateEntityError when the id is already in the collection.
        """
        stored = replace(record)
        if not stored.id:
            stored.id = str(uuid4())
        if self._index(stored.id) is not None:
            raise DuplicateEntityError("Record", "id", stored.id)

        self._records.append(stored)
        self._sort()
        plog.step(StoreStage.ADD, "Added record", record_id=stored.id, total=len(self._records))
        self._commit(ChangeAction.ADDED, stored.id)
        return replace(stored)

    def update(self, record: Record) -> Record:
        """Replace all mutable fields of the stored record with the same id.

        Raises EntityNotFoundError (collection untouched) when the id is unknown.
        """
        existing = self._require(record.id)
        existing.apply(record, now=self._clock())
        self._sort()
        plog.step(StoreStage.UPDATE, "Updated record", record_id=existing.id)
        self._commit(ChangeAction.UPDATED, existing.id)
        return replace(existing)

    def delete(self, record_or_id: Record | str) -> Record:
        """Remove a record by id and return it.

        Raises EntityNotFoundError (collection untouched) when the id is unknown.
        """
        record_id = record_or_id.id if isinstance(record_or_id, Record) else record_or_id
        index = self._index(record_id)
        if index is None:
            raise EntityNotFoundError("Record", record_id)

        removed = self._records.pop(index)
        plog.step(StoreStage.DELETE, "Deleted record", record_id=record_id, total=len(self._records))
        self._commit(ChangeAction.DELETED, record_id)
        return removed

    def delete_many(self, record_ids: Iterable[str]) -> int:
        """Remove every listed id that exists; unknown ids are skipped."""
        wanted = set(record_ids)
        removed = tuple(r.id for r in self._records if r.id in wanted)
        if not removed:
            return 0

        self._records = [r for r in self._records if r.id not in wanted]
        plog.step(StoreStage.DELETE, "Deleted records", count=len(removed), total=len(self._records))
        self._commit(ChangeAction.DELETED, *removed)
        return len(removed)

    def toggle_favorite(self, record_id: str) -> Record:
        return self._mutate(record_id, Record.toggle_favorite, StoreStage.UPDATE)

    def archive(self, record_id: str) -> Record:
        return self._mutate(record_id, Record.archive, StoreStage.ARCHIVE)

    def unarchive(self, record_id: str) -> Record:
        return self._mutate(record_id, Record.unarchive, StoreStage.ARCHIVE)

    def duplicate(self, record_id: str) -> Record:
        """Add a copy of a record under a fresh id, named "<name> (Copy)"."""
        source = self._require(record_id)
        now = self._clock()
        return self.add(
            Record(
                name=f"{source.name} (Copy)",
                category=source.category,
                date=source.date,
                comment=source.comment,
                created_at=now,
                updated_at=now,
            )
        )

    # ── Observers ───────────────────────────────────────────────────

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a change observer; returns its unsubscribe function."""
        return self._notifier.subscribe(callback)

    # ── Internals ───────────────────────────────────────────────────

    def _index(self, record_id: str) -> int | None:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _require(self, record_id: str) -> Record:
        index = self._index(record_id)
        if index is None:
            raise EntityNotFoundError("Record", record_id)
        return self._records[index]

    def _mutate(
        self,
        record_id: str,
        change: Callable[[Record, datetime], None],
        stage: tuple[str, str, str],
    ) -> Record:
        record = self._require(record_id)
        change(record, self._clock())
        plog.step(stage, f"{change.__name__} applied", record_id=record_id)
        self._commit(ChangeAction.UPDATED, record_id)
        return replace(record)

    def _sort(self) -> None:
        self._records = sort_records(self._records, self._profile.default_sort)

    def _commit(self, action: ChangeAction, *record_ids: str) -> None:
        """Persist the whole collection, then notify subscribers."""
        error = self._persist()
        self._notifier.broadcast(RecordChange(action=action, record_ids=record_ids))
        if error is not None and self._raise_on_persistence_error:
            raise error

    def _persist(self) -> PersistenceError | None:
        key = self._profile.storage_key
        try:
            payload = encode_records(self._records)
            self._storage.write(key, payload)
        except (PydanticSerializationError, ValidationError) as exc:
            error = PersistenceError(key, f"encode failed: {exc}")
        except PersistenceError as exc:
            error = exc
        else:
            self.last_persistence_error = None
            plog.detail("Persisted collection", key=key, records=len(self._records), size=len(payload))
            return None

        self.last_persistence_error = error
        plog.failure(StoreStage.PERSIST, "Persisted copy is now stale", error=error)
        return error

    def _load(self) -> None:
        key = self._profile.storage_key
        try:
            raw = self._storage.read(key)
        except PersistenceError as exc:
            plog.failure(StoreStage.LOAD, "Could not read collection — starting empty", error=exc)
            return
        if raw is None:
            plog.step(StoreStage.LOAD, "No saved collection — starting empty", key=key)
            return

        try:
            records = decode_records(raw)
        except ValidationError as exc:
            plog.failure(StoreStage.LOAD, "Saved collection is unreadable — starting empty", error=exc)
            return

        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                plog.detail("Skipping duplicate id in saved collection", record_id=record.id)
                continue
            seen.add(record.id)
            self._records.append(record)

        self._sort()
        plog.step(StoreStage.LOAD, "Loaded collection", key=key, records=len(self._records))
