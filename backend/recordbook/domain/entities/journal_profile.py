"""Journal profiles — per-app configuration of the shared record store.

Every journal keeps one flat collection of records under its own storage
key. What differs between journals is the closed set of categories, the
default ordering and the threshold above which a repeated name counts as
frequent.
"""

from dataclasses import dataclass

from .record_query import SortOption

DEFAULT_FREQUENT_THRESHOLD = 3


@dataclass(frozen=True)
class JournalProfile:
    """Static description of one journal app."""

    key: str
    title: str
    storage_key: str
    categories: tuple[str, ...]
    default_sort: SortOption = SortOption.NEWEST
    frequent_threshold: int = DEFAULT_FREQUENT_THRESHOLD

    def has_category(self, category: str) -> bool:
        return category in self.categories


PROFILES: dict[str, JournalProfile] = {
    profile.key: profile
    for profile in (
        JournalProfile(
            key="hair_care",
            title="Hair Care Journal",
            storage_key="HairCareEntries",
            categories=("wash", "conditioning", "mask", "styling", "trim", "coloring", "treatment"),
        ),
        JournalProfile(
            key="purchases",
            title="Purchase Tracker",
            storage_key="SavedPurchases",
            categories=("clothing", "electronics", "groceries", "beauty", "home", "entertainment", "other"),
        ),
        JournalProfile(
            key="childhood_places",
            title="Childhood Places",
            storage_key="SavedPlaces",
            categories=("home", "school", "park", "vacation", "relatives", "neighborhood", "other"),
        ),
        JournalProfile(
            key="reflections",
            title="Daily Reflections",
            storage_key="SavedReflections",
            categories=("gratitude", "growth", "challenge", "joy", "lesson"),
        ),
        JournalProfile(
            key="gratitude",
            title="Gratitude Calendar",
            storage_key="GratitudeEntries",
            categories=("people", "nature", "health", "work", "moments", "other"),
        ),
        JournalProfile(
            key="conversation_starters",
            title="Conversation Starters",
            storage_key="FavoriteQuestions",
            categories=("deep", "fun", "romantic", "family", "friends", "work"),
            default_sort=SortOption.ALPHABETICAL,
        ),
    )
}


def get_profile(key: str) -> JournalProfile:
    """Look up a built-in profile, raising KeyError with the known keys."""
    try:
        return PROFILES[key]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise KeyError(f"Unknown journal profile '{key}' (known: {known})") from None
