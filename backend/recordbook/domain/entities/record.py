"""Domain entity — a single user-created journal record."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Record:
    """Core domain entity for one entry in a journal.

    The identifier is assigned once at creation and never changes; every
    other field is replaced wholesale by ``apply`` when the record is edited.
    """

    name: str
    category: str
    date: date = field(default_factory=lambda: _utcnow().date())
    comment: str = ""
    is_favorite: bool = False
    is_archived: bool = False
    archived_at: datetime | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def apply(self, other: "Record", now: datetime | None = None) -> None:
        """Replace all mutable fields from ``other`` and refresh updated_at.

        ``id`` and ``created_at`` are kept from this record.
        """
        self.name = other.name
        self.category = other.category
        self.date = other.date
        self.comment = other.comment
        self.is_favorite = other.is_favorite
        self.is_archived = other.is_archived
        self.archived_at = other.archived_at
        self.updated_at = now or _utcnow()

    def toggle_favorite(self, now: datetime | None = None) -> None:
        self.is_favorite = not self.is_favorite
        self.updated_at = now or _utcnow()

    def archive(self, now: datetime | None = None) -> None:
        now = now or _utcnow()
        self.is_archived = True
        self.archived_at = now
        self.updated_at = now

    def unarchive(self, now: datetime | None = None) -> None:
        self.is_archived = False
        self.archived_at = None
        self.updated_at = now or _utcnow()

    def matches_text(self, needle: str) -> bool:
        """Case-insensitive substring match against name and comment."""
        needle = needle.casefold()
        return needle in self.name.casefold() or needle in self.comment.casefold()
