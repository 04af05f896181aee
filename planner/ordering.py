"""
Ordering, merging and filtering of per-date event lists.

Every list handed to the views is sorted the same way: timed entries by
start time, untimed entries after all timed ones, name as the secondary
key and id as the final tie-break.
"""

from typing import Iterable, Mapping, Sequence

from .event_model import CalendarEntry


ALL_CATEGORIES = "all"


def event_sort_key(entry: CalendarEntry) -> tuple:
    start = entry.start_time or ""
    return (start == "", start, entry.name, entry.id)


def sort_events(entries: Iterable[CalendarEntry]) -> list[CalendarEntry]:
    """Return a new list in display order."""
    return sorted(entries, key=event_sort_key)


def merge_events(
    one_off_by_date: Mapping[str, Sequence[CalendarEntry]],
    expanded_by_date: Mapping[str, Sequence[CalendarEntry]],
) -> dict[str, list[CalendarEntry]]:
    """
    Combine one-off events with expanded series instances.

    The order of each merged list comes from event_sort_key() alone, so
    the result does not depend on which side is listed first. Neither
    input is modified.
    """
    merged: dict[str, list[CalendarEntry]] = {}
    for source in (one_off_by_date, expanded_by_date):
        for key, entries in source.items():
            merged.setdefault(key, []).extend(entries)
    return {key: sort_events(entries) for key, entries in merged.items() if entries}


def events_for_date(
    events_by_date: Mapping[str, Sequence[CalendarEntry]], key: str
) -> list[CalendarEntry]:
    return list(events_by_date.get(key, ()))


# ==================== Category Filter ====================

def filter_by_categories(
    events_by_date: Mapping[str, Sequence[CalendarEntry]],
    disabled_categories: Iterable[str],
) -> dict[str, list[CalendarEntry]]:
    """Drop entries of disabled categories and any date left without entries."""
    disabled = set(disabled_categories)
    filtered: dict[str, list[CalendarEntry]] = {}
    for key, entries in events_by_date.items():
        kept = [entry for entry in entries if entry.category not in disabled]
        if kept:
            filtered[key] = kept
    return filtered


def is_category_active(
    category: str, disabled_categories: Sequence[str], all_categories: Sequence[str]
) -> bool:
    """
    Whether a filter button shows as active.

    "all" is active while at least one category is still enabled.
    """
    if category == ALL_CATEGORIES:
        return len(set(disabled_categories)) < len(all_categories)
    return category not in disabled_categories


def toggle_category(
    disabled_categories: Sequence[str], category: str, all_categories: Sequence[str]
) -> list[str]:
    """
    New disabled list after a filter button is pressed.

    Toggling "all" disables everything unless everything is already
    disabled, in which case it enables everything again.
    """
    if category == ALL_CATEGORIES:
        if len(set(disabled_categories)) < len(all_categories):
            return list(all_categories)
        return []
    if category in disabled_categories:
        return [c for c in disabled_categories if c != category]
    return [*disabled_categories, category]
