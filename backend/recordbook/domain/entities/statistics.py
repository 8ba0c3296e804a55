"""Domain value objects for derived statistics over a record collection."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class FrequencyClass(str, Enum):
    """Whether a named item shows up often enough to be called frequent."""

    FREQUENT = "frequent"
    RARE = "rare"


@dataclass
class CategoryShare:
    """Record count and share of the total for a single category."""

    category: str
    count: int
    percentage: float  # 0.0 – 100.0, one decimal


@dataclass
class ItemFrequency:
    """How many records carry the same name."""

    name: str
    count: int
    classification: FrequencyClass


@dataclass
class RecordStatistics:
    """Aggregate view of the whole collection."""

    total_count: int = 0
    active_count: int = 0
    archived_count: int = 0
    favorite_count: int = 0
    category_shares: list[CategoryShare] = field(default_factory=list)
    most_popular_category: str | None = None
    weekday_counts: dict[str, int] = field(default_factory=dict)
    monthly_counts: list[tuple[str, int]] = field(default_factory=list)
    total_days: int = 0
    current_streak: int = 0
    best_streak: int = 0
    first_date: date | None = None
    last_date: date | None = None
    days_since_first: int = 0
    average_per_day: float = 0.0
    frequent_items: list[str] = field(default_factory=list)
