"""
Time-grid layout for a single day.

Timed events that overlap are placed side by side. Each event gets a
column inside the group of events it overlaps with, sorted by start time
and id. At most max_columns columns are used; events beyond that share
the last column and overlap visually instead of shrinking further.

Vertical placement maps the visible day window (6:00-22:00 by default)
onto the 0..1 range.
"""

from dataclasses import dataclass
from typing import Sequence

from .event_model import CalendarEntry
from .time_utils import parse_time_to_minutes


MAX_COLUMNS = 3
MIN_HEIGHT_FRACTION = 0.02  # keeps very short events visible
DAY_START_HOUR = 6
DAY_END_HOUR = 22


@dataclass(frozen=True)
class EventLayout:
    """Horizontal placement as fractions of the day column width."""
    width_fraction: float
    left_fraction: float
    column: int = 0
    total_columns: int = 1


@dataclass(frozen=True)
class EventPosition:
    """Vertical placement as fractions of the day column height."""
    top_fraction: float
    height_fraction: float


FULL_WIDTH = EventLayout(width_fraction=1.0, left_fraction=0.0)


def _is_timed(entry: CalendarEntry) -> bool:
    return bool(entry.start_time and entry.end_time)


def events_overlap(e1: CalendarEntry, e2: CalendarEntry) -> bool:
    """
    Check if two events overlap in time.

    Intervals are half-open: an event ending at 10:00 does not overlap one
    starting at 10:00. Events without both times never overlap anything.
    """
    if not (_is_timed(e1) and _is_timed(e2)):
        return False
    s1 = parse_time_to_minutes(e1.start_time)
    end1 = parse_time_to_minutes(e1.end_time)
    s2 = parse_time_to_minutes(e2.start_time)
    end2 = parse_time_to_minutes(e2.end_time)
    return s1 < end2 and s2 < end1


def _column_sort_key(entry: CalendarEntry) -> tuple[str, str]:
    return (entry.start_time or "00:00", entry.id)


def calculate_event_layout(
    event: CalendarEntry,
    day_events: Sequence[CalendarEntry],
    max_columns: int = MAX_COLUMNS,
) -> EventLayout:
    """
    Calculate width and left offset for an event among the day's events.

    Args:
        event: The event to place
        day_events: All events of the same day (event itself may be included)
        max_columns: Upper bound on side-by-side columns

    Returns:
        EventLayout with fractions in 0..1
    """
    overlapping = [
        other for other in day_events
        if other.id != event.id and events_overlap(event, other)
    ]
    if not overlapping:
        return FULL_WIDTH

    group = sorted([event, *overlapping], key=_column_sort_key)
    column = next(i for i, e in enumerate(group) if e.id == event.id)

    total_columns = min(len(group), max_columns)
    width = 1.0 / total_columns
    column = min(column, total_columns - 1)

    return EventLayout(
        width_fraction=width,
        left_fraction=width * column,
        column=column,
        total_columns=total_columns,
    )


def calculate_event_position(
    start_time: str,
    end_time: str,
    day_start_hour: int = DAY_START_HOUR,
    day_end_hour: int = DAY_END_HOUR,
    min_height_fraction: float = MIN_HEIGHT_FRACTION,
) -> EventPosition:
    """Map an event's times onto the visible day window."""
    start = parse_time_to_minutes(start_time)
    end = parse_time_to_minutes(end_time)

    day_start = day_start_hour * 60
    window = day_end_hour * 60 - day_start

    top = max(0.0, (start - day_start) / window)
    height = max(min_height_fraction, (end - start) / window)

    return EventPosition(top_fraction=top, height_fraction=height)


def layout_day(
    day_events: Sequence[CalendarEntry],
    day_start_hour: int = DAY_START_HOUR,
    day_end_hour: int = DAY_END_HOUR,
    max_columns: int = MAX_COLUMNS,
    min_height_fraction: float = MIN_HEIGHT_FRACTION,
) -> list[tuple[CalendarEntry, EventLayout, EventPosition]]:
    """
    Lay out every timed event of one day.

    Untimed events are left out; they belong in the all-day area.
    """
    timed = [entry for entry in day_events if _is_timed(entry)]
    return [
        (
            entry,
            calculate_event_layout(entry, timed, max_columns),
            calculate_event_position(
                entry.start_time, entry.end_time,
                day_start_hour, day_end_hour, min_height_fraction,
            ),
        )
        for entry in timed
    ]
