"""Pydantic model for the persisted record shape.

The whole collection is stored as one JSON array of these objects under a
single key. Keys are camelCase. Decoding is lenient: every field has a
default so blobs written by older versions (or by hand) still load.
"""

import datetime as dt
from typing import Any
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from recordbook.domain.entities import Record


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class RecordPayload(BaseModel):
    """One record object inside the persisted JSON array."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field("", validation_alias=AliasChoices("name", "content", "title"))
    category: str = ""
    date: dt.date | None = None
    comment: str = ""
    is_favorite: bool = False
    is_archived: bool = False
    archived_at: dt.datetime | None = None
    created_at: dt.datetime = Field(default_factory=_utcnow)
    updated_at: dt.datetime = Field(default_factory=_utcnow)

    @field_validator("id", mode="before")
    @classmethod
    def _fresh_id_when_blank(cls, value: Any) -> Any:
        if value is None or value == "":
            return str(uuid4())
        return value

    @field_validator("comment", mode="before")
    @classmethod
    def _null_comment(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        """Accept ISO dates, ISO datetimes and epoch seconds."""
        if value is None or value == "":
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc).date()
            except (OverflowError, OSError, ValueError) as exc:
                raise ValueError(f"epoch seconds out of range: {value}") from exc
        if isinstance(value, str) and "T" in value:
            return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        return value

    @field_validator("created_at", "updated_at", "archived_at", mode="after")
    @classmethod
    def _assume_utc(cls, value: dt.datetime | None) -> dt.datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value

    @classmethod
    def from_entity(cls, record: Record) -> "RecordPayload":
        """Map domain entity → persisted payload."""
        return cls(
            id=record.id,
            name=record.name,
            category=record.category,
            date=record.date,
            comment=record.comment,
            is_favorite=record.is_favorite,
            is_archived=record.is_archived,
            archived_at=record.archived_at,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_entity(self) -> Record:
        """Map persisted payload → domain entity."""
        return Record(
            id=self.id,
            name=self.name,
            category=self.category,
            date=self.date or self.created_at.date(),
            comment=self.comment,
            is_favorite=self.is_favorite,
            is_archived=self.is_archived,
            archived_at=self.archived_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
