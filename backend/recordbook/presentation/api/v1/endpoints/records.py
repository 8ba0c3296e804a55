"""Record CRUD endpoints."""

import datetime as dt
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Query, status

from recordbook.application.schemas import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    RecordCreate,
    RecordResponse,
    RecordUpdate,
)
from recordbook.application.services import RecordStore, build_export
from recordbook.domain.entities import FilterPeriod, Record, RecordFilter, SortOption
from recordbook.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    PersistenceError,
)
from recordbook.infrastructure.dependencies import get_record_store

router = APIRouter(prefix="/records", tags=["Records"])


def _to_response(record: Record) -> RecordResponse:
    return RecordResponse.model_validate(record, from_attributes=True)


def _not_found(exc: EntityNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _storage_unavailable(exc: PersistenceError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))


def _check_category(store: RecordStore, category: str) -> None:
    if not store.profile.has_category(category):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=(
                f"Unknown category '{category}' — expected one of: "
                f"{', '.join(store.profile.categories)}"
            ),
        )


def get_record_filter(
    category: list[str] | None = Query(None, description="Keep only these categories"),
    search: str = Query("", max_length=200, description="Case-insensitive text in name or comment"),
    period: FilterPeriod = Query(FilterPeriod.ALL),
    start_date: dt.date | None = Query(None, description="Lower bound for period=custom"),
    end_date: dt.date | None = Query(None, description="Upper bound for period=custom"),
    favorites_only: bool = Query(False),
    archived: bool | None = Query(None, description="Omit for both archived and active"),
    sort: SortOption | None = Query(None, description="Defaults to the journal's order"),
    store: RecordStore = Depends(get_record_store),
) -> RecordFilter:
    """Build a RecordFilter from query parameters."""
    return RecordFilter(
        categories=frozenset(category or ()),
        search_text=search,
        period=period,
        start_date=start_date,
        end_date=end_date,
        favorites_only=favorites_only,
        archived=archived,
        sort=sort or store.profile.default_sort,
    )


@router.get("", response_model=list[RecordResponse])
async def list_records(
    record_filter: RecordFilter = Depends(get_record_filter),
    store: RecordStore = Depends(get_record_store),
) -> list[RecordResponse]:
    """Retrieve the filtered, sorted list of records."""
    return [_to_response(r) for r in store.filtered(record_filter)]


@router.get("/export")
async def export_records(
    record_filter: RecordFilter = Depends(get_record_filter),
    store: RecordStore = Depends(get_record_store),
) -> dict:
    """Export the filtered records as a JSON document."""
    return build_export(store.filtered(record_filter), time_range=record_filter.period.value)


@router.get("/{record_id}", response_model=RecordResponse)
async def get_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Retrieve a single record by ID."""
    record = store.get(record_id)
    if record is None:
        raise _not_found(EntityNotFoundError("Record", record_id))
    return _to_response(record)


@router.post("", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    data: RecordCreate,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Create a new record."""
    _check_category(store, data.category)
    record = Record(
        name=data.name,
        category=data.category,
        date=data.date or store.today(),
        comment=data.comment,
        is_favorite=data.is_favorite,
    )
    if data.id:
        record.id = str(data.id)

    try:
        created = store.add(record)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PersistenceError as e:
        raise _storage_unavailable(e)
    return _to_response(created)


@router.put("/{record_id}", response_model=RecordResponse)
async def update_record(
    record_id: str,
    data: RecordUpdate,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Update an existing record; omitted fields keep their current value."""
    existing = store.get(record_id)
    if existing is None:
        raise _not_found(EntityNotFoundError("Record", record_id))
    if data.category is not None:
        _check_category(store, data.category)

    changes = data.model_dump(exclude_none=True)
    try:
        updated = store.update(replace(existing, **changes))
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)
    return _to_response(updated)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> None:
    """Delete a record by ID."""
    try:
        store.delete(record_id)
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_records(
    data: BulkDeleteRequest,
    store: RecordStore = Depends(get_record_store),
) -> BulkDeleteResponse:
    """Delete several records at once; unknown IDs are ignored."""
    try:
        deleted = store.delete_many(data.ids)
    except PersistenceError as e:
        raise _storage_unavailable(e)
    return BulkDeleteResponse(deleted=deleted)


@router.post("/{record_id}/favorite", response_model=RecordResponse)
async def toggle_favorite(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Flip the favorite flag of a record."""
    try:
        return _to_response(store.toggle_favorite(record_id))
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)


@router.post("/{record_id}/archive", response_model=RecordResponse)
async def archive_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    try:
        return _to_response(store.archive(record_id))
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)


@router.post("/{record_id}/unarchive", response_model=RecordResponse)
async def unarchive_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    try:
        return _to_response(store.unarchive(record_id))
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)


@router.post(
    "/{record_id}/duplicate",
    response_model=RecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_record(
    record_id: str,
    store: RecordStore = Depends(get_record_store),
) -> RecordResponse:
    """Create a copy of a record under a new ID."""
    try:
        return _to_response(store.duplicate(record_id))
    except EntityNotFoundError as e:
        raise _not_found(e)
    except PersistenceError as e:
        raise _storage_unavailable(e)
