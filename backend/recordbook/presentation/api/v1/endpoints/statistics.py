"""Statistics and journal profile endpoints — read-only views over the store."""

from fastapi import APIRouter, Depends

from recordbook.application.schemas import (
    ItemFrequencySchema,
    ProfileResponse,
    StatisticsResponse,
)
from recordbook.application.services import RecordStore
from recordbook.infrastructure.dependencies import get_record_store

router = APIRouter(tags=["Statistics"])


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(
    store: RecordStore = Depends(get_record_store),
) -> StatisticsResponse:
    """Totals, category shares, histograms and streaks for the journal."""
    return StatisticsResponse.model_validate(store.statistics(), from_attributes=True)


@router.get("/statistics/frequencies", response_model=list[ItemFrequencySchema])
async def get_frequencies(
    store: RecordStore = Depends(get_record_store),
) -> list[ItemFrequencySchema]:
    """How often each record name occurs, classified as frequent or rare."""
    return [
        ItemFrequencySchema.model_validate(item, from_attributes=True)
        for item in store.frequencies()
    ]


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    store: RecordStore = Depends(get_record_store),
) -> ProfileResponse:
    """The journal this server is configured for."""
    profile = store.profile
    return ProfileResponse(
        key=profile.key,
        title=profile.title,
        storage_key=profile.storage_key,
        categories=list(profile.categories),
        default_sort=profile.default_sort,
        frequent_threshold=store.frequent_threshold,
    )
