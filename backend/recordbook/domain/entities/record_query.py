"""Domain value objects describing how a record list is filtered and sorted."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class SortOption(str, Enum):
    """Fixed set of orderings the presentation layer can request."""

    NEWEST = "newest"
    OLDEST = "oldest"
    ALPHABETICAL = "alphabetical"
    CATEGORY = "category"


class FilterPeriod(str, Enum):
    """Date windows relative to today."""

    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RecordFilter:
    """A conjunction of independent predicates plus one sort comparator.

    The default instance matches every record and sorts newest first.
    """

    categories: frozenset[str] = field(default_factory=frozenset)
    search_text: str = ""
    period: FilterPeriod = FilterPeriod.ALL
    start_date: date | None = None  # only used with FilterPeriod.CUSTOM
    end_date: date | None = None
    favorites_only: bool = False
    archived: bool | None = None  # None = archived and active records
    sort: SortOption = SortOption.NEWEST

    @property
    def is_active(self) -> bool:
        """True when any predicate narrows the collection."""
        return (
            bool(self.categories)
            or bool(self.search_text.strip())
            or self.period is not FilterPeriod.ALL
            or self.favorites_only
            or self.archived is not None
        )
