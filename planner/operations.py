"""
Create, update and delete operations on StoredEvents.

Every operation returns a new StoredEvents and leaves its input
untouched. Date lists are kept in display order and dates whose last
event goes away are removed. Operations on an unknown id return the
store unchanged.
"""

import uuid
from dataclasses import replace
from typing import Optional

from .event_model import CalendarEntry, Event, RecurringEvent, StoredEvents
from .ordering import sort_events
from .recurrence import RecurrenceRule


EVENT_FIELDS = {"name", "category", "date", "start_time", "end_time", "completed"}
SERIES_FIELDS = {"name", "category", "start_time", "end_time", "recurrence", "end_date"}


def generate_event_id() -> str:
    return str(uuid.uuid4())


def create_event(
    name: str,
    category: str,
    date: str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
) -> Event:
    return Event(
        id=generate_event_id(),
        name=name,
        category=category,
        date=date,
        start_time=start_time or None,
        end_time=end_time or None,
    )


def create_series(
    name: str,
    category: str,
    start_date: str,
    recurrence: RecurrenceRule,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    end_date: Optional[str] = None,
) -> RecurringEvent:
    return RecurringEvent(
        id=generate_event_id(),
        name=name,
        category=category,
        start_date=start_date,
        recurrence=recurrence,
        start_time=start_time or None,
        end_time=end_time or None,
        end_date=end_date or None,
    )


# ==================== Lookup ====================

def find_event(stored: StoredEvents, event_id: str) -> Optional[Event]:
    for events in stored.by_date.values():
        for event in events:
            if event.id == event_id:
                return event
    return None


def find_series(stored: StoredEvents, series_id: str) -> Optional[RecurringEvent]:
    for series in stored.recurring:
        if series.id == series_id:
            return series
    return None


def edit_target(stored: StoredEvents, entry: CalendarEntry):
    """
    What an edit of a displayed entry applies to.

    Editing a series instance edits the whole series. An instance whose
    series no longer exists resolves to None.
    """
    if entry.series_id:
        return find_series(stored, entry.series_id)
    return find_event(stored, entry.id)


# ==================== One-off Events ====================

def _without_event(by_date: dict, event_id: str) -> dict:
    result = {}
    for key, events in by_date.items():
        kept = [event for event in events if event.id != event_id]
        if kept:
            result[key] = kept
    return result


def _with_event(by_date: dict, event: Event) -> dict:
    result = dict(by_date)
    result[event.date] = sort_events([*result.get(event.date, []), event])
    return result


def add_event(stored: StoredEvents, event: Event) -> StoredEvents:
    return replace(stored, by_date=_with_event(stored.by_date, event))


def update_event(stored: StoredEvents, event_id: str, **changes) -> StoredEvents:
    """
    Partially update a one-off event.

    Accepts name, category, date, start_time, end_time and completed.
    Changing the date moves the event to the new date's list.
    """
    unknown = set(changes) - EVENT_FIELDS
    if unknown:
        raise TypeError(f"Unknown event fields: {sorted(unknown)}")

    event = find_event(stored, event_id)
    if event is None:
        return stored

    updated = replace(event, **changes)
    by_date = _with_event(_without_event(stored.by_date, event_id), updated)
    return replace(stored, by_date=by_date)


def delete_event(stored: StoredEvents, event_id: str) -> StoredEvents:
    if find_event(stored, event_id) is None:
        return stored
    return replace(stored, by_date=_without_event(stored.by_date, event_id))


def move_event(
    stored: StoredEvents,
    event_id: str,
    new_date: str,
    new_start_time: Optional[str] = None,
    new_end_time: Optional[str] = None,
) -> StoredEvents:
    """Move a one-off event to another date, optionally with new times."""
    changes = {"date": new_date}
    if new_start_time is not None:
        changes["start_time"] = new_start_time
    if new_end_time is not None:
        changes["end_time"] = new_end_time
    return update_event(stored, event_id, **changes)


# ==================== Series ====================

def add_series(stored: StoredEvents, series: RecurringEvent) -> StoredEvents:
    return replace(stored, recurring=[*stored.recurring, series])


def update_series(stored: StoredEvents, series_id: str, **changes) -> StoredEvents:
    """
    Partially update a series.

    Accepts name, category, start_time, end_time, recurrence and end_date.
    The start date of a series is fixed at creation.
    """
    unknown = set(changes) - SERIES_FIELDS
    if unknown:
        raise TypeError(f"Unknown series fields: {sorted(unknown)}")

    if find_series(stored, series_id) is None:
        return stored

    recurring = [
        replace(series, **changes) if series.id == series_id else series
        for series in stored.recurring
    ]
    return replace(stored, recurring=recurring)


def delete_series(stored: StoredEvents, series_id: str) -> StoredEvents:
    if find_series(stored, series_id) is None:
        return stored
    return replace(stored, recurring=[s for s in stored.recurring if s.id != series_id])


def delete_entry(stored: StoredEvents, entry_id: str) -> StoredEvents:
    """Delete by id, whether it names a series or a one-off event."""
    if find_series(stored, entry_id) is not None:
        return delete_series(stored, entry_id)
    return delete_event(stored, entry_id)


def merge_stores(base: StoredEvents, incoming: StoredEvents) -> tuple[StoredEvents, int]:
    """
    Add events and series from incoming that base does not have yet.

    Returns:
        (merged store, number of entries added)
    """
    merged = base
    added = 0
    for events in incoming.by_date.values():
        for event in events:
            if find_event(merged, event.id) is None:
                merged = add_event(merged, event)
                added += 1
    for series in incoming.recurring:
        if find_series(merged, series.id) is None:
            merged = add_series(merged, series)
            added += 1
    return merged, added
