"""Derived statistics over a record collection — pure functions, no I/O.

Streaks are measured in calendar days: a day counts once no matter how
many records it holds.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, timedelta

from recordbook.domain.entities import (
    DEFAULT_FREQUENT_THRESHOLD,
    CategoryShare,
    FrequencyClass,
    ItemFrequency,
    Record,
    RecordStatistics,
)

_ONE_DAY = timedelta(days=1)
WEEKDAYS: tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


# ── Streaks ─────────────────────────────────────────────────────────


def current_streak(dates: Iterable[date], today: date) -> int:
    """Consecutive days with a record, counted backward from ``today``.

    The first day without a record ends the streak, so a day with no
    record today yields 0.
    """
    days = set(dates)
    streak = 0
    day = today
    while day in days:
        streak += 1
        day -= _ONE_DAY
    return streak


def best_streak(dates: Iterable[date]) -> int:
    """Longest run of consecutive calendar days anywhere in the history."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0

    best = run = 1
    for previous, current in zip(ordered, ordered[1:]):
        if current - previous == _ONE_DAY:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


# ── Histograms ──────────────────────────────────────────────────────


def weekday_counts(records: Iterable[Record]) -> dict[str, int]:
    """Records per weekday, Monday first, every weekday present."""
    counts = Counter(r.date.weekday() for r in records)
    return {name: counts.get(index, 0) for index, name in enumerate(WEEKDAYS)}


def monthly_counts(records: Iterable[Record]) -> list[tuple[str, int]]:
    """Records per calendar month as ("YYYY-MM", count), oldest month first."""
    counts = Counter(r.date.strftime("%Y-%m") for r in records)
    return sorted(counts.items())


def category_shares(
    records: Sequence[Record], categories: Sequence[str] = ()
) -> list[CategoryShare]:
    """Count and percentage per category.

    Every known category is listed, even with zero records; categories
    found on records but unknown to the journal are appended after them.
    Ordered by count (descending), ties keep the journal's category order.
    """
    counts = Counter(r.category for r in records)
    total = len(records)

    ordered = list(categories) + sorted(c for c in counts if c not in categories)
    shares = [
        CategoryShare(
            category=category,
            count=counts.get(category, 0),
            percentage=round(counts.get(category, 0) / total * 100, 1) if total else 0.0,
        )
        for category in ordered
    ]
    shares.sort(key=lambda s: s.count, reverse=True)
    return shares


# ── Frequency classification ────────────────────────────────────────


def classify_frequency(count: int, threshold: int = DEFAULT_FREQUENT_THRESHOLD) -> FrequencyClass:
    return FrequencyClass.FREQUENT if count >= threshold else FrequencyClass.RARE


def item_frequencies(
    records: Iterable[Record], threshold: int = DEFAULT_FREQUENT_THRESHOLD
) -> list[ItemFrequency]:
    """Group records by name (trimmed, case-insensitive) and classify each group.

    The first spelling seen is used as the display name.
    """
    display: dict[str, str] = {}
    counts: Counter[str] = Counter()
    for record in records:
        name = record.name.strip()
        if not name:
            continue
        key = name.casefold()
        display.setdefault(key, name)
        counts[key] += 1

    items = [
        ItemFrequency(name=display[key], count=count, classification=classify_frequency(count, threshold))
        for key, count in counts.items()
    ]
    items.sort(key=lambda i: (-i.count, i.name.casefold()))
    return items


# ── Aggregate ───────────────────────────────────────────────────────


def compute_statistics(
    records: Sequence[Record],
    today: date,
    categories: Sequence[str] = (),
    frequent_threshold: int = DEFAULT_FREQUENT_THRESHOLD,
) -> RecordStatistics:
    """Build the full statistics view for a collection."""
    if not records:
        return RecordStatistics(
            category_shares=category_shares(records, categories),
            weekday_counts=weekday_counts(records),
        )

    dates = [r.date for r in records]
    first, last = min(dates), max(dates)
    days_since_first = max((today - first).days, 0)
    shares = category_shares(records, categories)

    return RecordStatistics(
        total_count=len(records),
        active_count=sum(1 for r in records if not r.is_archived),
        archived_count=sum(1 for r in records if r.is_archived),
        favorite_count=sum(1 for r in records if r.is_favorite),
        category_shares=shares,
        most_popular_category=shares[0].category if shares and shares[0].count else None,
        weekday_counts=weekday_counts(records),
        monthly_counts=monthly_counts(records),
        total_days=len(set(dates)),
        current_streak=current_streak(dates, today),
        best_streak=best_streak(dates),
        first_date=first,
        last_date=last,
        days_since_first=days_since_first,
        average_per_day=round(len(records) / max(days_since_first, 1), 2),
        frequent_items=[
            item.name
            for item in item_frequencies(records, frequent_threshold)
            if item.classification is FrequencyClass.FREQUENT
        ],
    )
