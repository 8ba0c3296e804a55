"""Pure filter/sort functions over a record collection.

Predicates are applied lazily as a generator chain; ``filter_records``
materialises the result into a fresh, sorted list on every call.
"""

from collections.abc import Callable, Iterable, Iterator
from datetime import date, timedelta

from recordbook.domain.entities import FilterPeriod, Record, RecordFilter, SortOption

Predicate = Callable[[Record], bool]


def period_bounds(
    period: FilterPeriod,
    today: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[date | None, date | None]:
    """Return the inclusive (start, end) window for a period; None = unbounded."""
    if period is FilterPeriod.TODAY:
        return today, today
    if period is FilterPeriod.WEEK:
        return today - timedelta(days=7), None
    if period is FilterPeriod.MONTH:
        return today.replace(day=1), None
    if period is FilterPeriod.CUSTOM:
        return start_date, end_date
    return None, None


def build_predicates(record_filter: RecordFilter, today: date) -> list[Predicate]:
    """Translate a RecordFilter into independent predicates (AND-ed together)."""
    predicates: list[Predicate] = []

    if record_filter.categories:
        categories = record_filter.categories
        predicates.append(lambda r: r.category in categories)

    needle = record_filter.search_text.strip()
    if needle:
        predicates.append(lambda r: r.matches_text(needle))

    start, end = period_bounds(
        record_filter.period, today, record_filter.start_date, record_filter.end_date
    )
    if start is not None:
        predicates.append(lambda r: r.date >= start)
    if end is not None:
        predicates.append(lambda r: r.date <= end)

    if record_filter.favorites_only:
        predicates.append(lambda r: r.is_favorite)

    if record_filter.archived is not None:
        archived = record_filter.archived
        predicates.append(lambda r: r.is_archived == archived)

    return predicates


def iter_matching(
    records: Iterable[Record], record_filter: RecordFilter, today: date
) -> Iterator[Record]:
    """Lazily yield records that satisfy every predicate of the filter."""
    predicates = build_predicates(record_filter, today)
    return (r for r in records if all(p(r) for p in predicates))


def sort_records(records: Iterable[Record], sort: SortOption) -> list[Record]:
    """Sort with one of the fixed comparators; ties fall back to newest first."""
    # Python's sort is stable, so sort by the tiebreaker first.
    newest = sorted(records, key=lambda r: (r.date, r.created_at), reverse=True)
    if sort is SortOption.NEWEST:
        return newest
    if sort is SortOption.OLDEST:
        return sorted(newest, key=lambda r: (r.date, r.created_at))
    if sort is SortOption.ALPHABETICAL:
        return sorted(newest, key=lambda r: r.name.casefold())
    if sort is SortOption.CATEGORY:
        return sorted(newest, key=lambda r: r.category.casefold())
    raise ValueError(f"Unsupported sort option: {sort!r}")


def filter_records(
    records: Iterable[Record], record_filter: RecordFilter, today: date
) -> list[Record]:
    """Apply all predicates, then the sort comparator."""
    return sort_records(iter_matching(records, record_filter, today), record_filter.sort)
