"""Pydantic DTOs (Data Transfer Objects) for the Record feature."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, Field


class RecordCreate(BaseModel):
    """Schema for creating a new record.

    Blank names are rejected here, before anything reaches the store.
    """

    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=1, max_length=200, examples=["Coconut oil mask"])
    category: str = Field(..., min_length=1, max_length=50, examples=["mask"])
    date: dt.date | None = Field(None, description="Defaults to today")
    comment: str = Field("", max_length=2000)
    is_favorite: bool = False
    id: UUID | None = Field(None, description="Client-supplied UUID, optional")


class RecordUpdate(BaseModel):
    """Schema for updating an existing record — all fields optional."""

    model_config = {"str_strip_whitespace": True}

    name: str | None = Field(None, min_length=1, max_length=200)
    category: str | None = Field(None, min_length=1, max_length=50)
    date: dt.date | None = None
    comment: str | None = Field(None, max_length=2000)
    is_favorite: bool | None = None


class RecordResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    category: str
    date: dt.date
    comment: str
    is_favorite: bool
    is_archived: bool
    archived_at: dt.datetime | None
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(BaseModel):
    deleted: int
