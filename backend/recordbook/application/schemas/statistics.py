"""Pydantic schemas for statistics and profile API responses."""

import datetime as dt

from pydantic import BaseModel

from recordbook.domain.entities import FrequencyClass, SortOption


class CategoryShareSchema(BaseModel):
    category: str
    count: int
    percentage: float

    model_config = {"from_attributes": True}


class ItemFrequencySchema(BaseModel):
    name: str
    count: int
    classification: FrequencyClass

    model_config = {"from_attributes": True}


class StatisticsResponse(BaseModel):
    """Aggregate counts, histograms and streaks for the active journal."""

    total_count: int
    active_count: int
    archived_count: int
    favorite_count: int
    category_shares: list[CategoryShareSchema]
    most_popular_category: str | None
    weekday_counts: dict[str, int]
    monthly_counts: list[tuple[str, int]]
    total_days: int
    current_streak: int
    best_streak: int
    first_date: dt.date | None
    last_date: dt.date | None
    days_since_first: int
    average_per_day: float
    frequent_items: list[str]

    model_config = {"from_attributes": True}


class ProfileResponse(BaseModel):
    key: str
    title: str
    storage_key: str
    categories: list[str]
    default_sort: SortOption
    frequent_threshold: int

    model_config = {"from_attributes": True}
