from .record import Record
from .record_query import FilterPeriod, RecordFilter, SortOption
from .statistics import CategoryShare, FrequencyClass, ItemFrequency, RecordStatistics
from .journal_profile import DEFAULT_FREQUENT_THRESHOLD, PROFILES, JournalProfile, get_profile

__all__ = [
    "Record",
    "FilterPeriod",
    "RecordFilter",
    "SortOption",
    "CategoryShare",
    "FrequencyClass",
    "ItemFrequency",
    "RecordStatistics",
    "DEFAULT_FREQUENT_THRESHOLD",
    "PROFILES",
    "JournalProfile",
    "get_profile",
]
