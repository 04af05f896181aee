"""
Drag and drop support for the time grid.

Converts a pointer position into a snapped time and recomputes a dragged
event's times. Series instances cannot be dragged, and a drop that would
run past the day end is rejected without touching any state.
"""

from dataclasses import dataclass
from typing import Optional

from .config import LayoutConfig
from .event_model import CalendarEntry, StoredEvents
from .operations import move_event
from .time_utils import (
    DAY_END_MINUTES,
    calculate_event_duration,
    calculate_new_end_time,
    format_time,
    validate_time_within_bounds,
)


DRAG_SNAP_MINUTES = 15
WINDOW_HOURS = 16  # 6 AM to 10 PM


@dataclass(frozen=True)
class TimeSlot:
    hour: int
    minute: int

    def as_time(self) -> str:
        return format_time(self.hour, self.minute)


@dataclass(frozen=True)
class DropResult:
    """New placement of a dropped event."""
    date: str
    start_time: Optional[str]
    end_time: Optional[str]


def position_to_time(
    pixel_y: float,
    container_height: float,
    day_start_hour: int = 6,
    snap_minutes: int = DRAG_SNAP_MINUTES,
    window_hours: int = WINDOW_HOURS,
    layout: Optional[LayoutConfig] = None,
) -> TimeSlot:
    """
    Convert a Y position in the day column to a time, snapped to the interval.

    A layout, when given, supplies the day start, snap interval and window
    length. Positions outside the column are clamped to its edges; a column
    without height maps everything to the day start.
    """
    if layout is not None:
        day_start_hour = layout.day_start_hour
        snap_minutes = layout.drag_snap_minutes
        window_hours = layout.window_hours

    if container_height <= 0:
        fraction = 0.0
    else:
        fraction = max(0.0, min(1.0, pixel_y / container_height))
    total_minutes = int(fraction * window_hours * 60)

    # Half-way rounds up; 60 minutes rolls over into the next hour
    snapped = int(total_minutes / snap_minutes + 0.5) * snap_minutes
    snapped += day_start_hour * 60

    return TimeSlot(hour=snapped // 60, minute=snapped % 60)


def is_event_draggable(entry: CalendarEntry) -> bool:
    """Series instances are not draggable; only one-off events are."""
    return not entry.series_id


def resolve_drop(
    entry: CalendarEntry,
    target_date: str,
    target_time: Optional[TimeSlot] = None,
    day_end_minutes: int = DAY_END_MINUTES,
    layout: Optional[LayoutConfig] = None,
) -> Optional[DropResult]:
    """
    Work out where a dropped event ends up.

    With a target time (week view) the event keeps its duration. Without
    one (month view), or for an event lacking start or end time, only the
    date changes. A layout, when given, supplies the day end.

    Returns:
        The new placement, or None if the drop is not allowed.
    """
    if not is_event_draggable(entry):
        return None

    if layout is not None:
        day_end_minutes = layout.day_end_minutes

    start_time = entry.start_time
    end_time = entry.end_time

    if target_time is not None and entry.start_time and entry.end_time:
        duration = calculate_event_duration(entry.start_time, entry.end_time)
        start_time = target_time.as_time()
        if not validate_time_within_bounds(start_time, duration, day_end_minutes):
            return None
        end_time = calculate_new_end_time(start_time, duration)

    return DropResult(date=target_date, start_time=start_time, end_time=end_time)


def apply_drop(
    stored: StoredEvents,
    entry: CalendarEntry,
    target_date: str,
    target_time: Optional[TimeSlot] = None,
    day_end_minutes: int = DAY_END_MINUTES,
    layout: Optional[LayoutConfig] = None,
) -> tuple[StoredEvents, bool]:
    """
    Resolve a drop and move the event in the store.

    Returns:
        (store, accepted). A rejected drop returns the input store as is.
    """
    result = resolve_drop(entry, target_date, target_time, day_end_minutes, layout)
    if result is None:
        return stored, False
    moved = move_event(stored, entry.id, result.date, result.start_time, result.end_time)
    return moved, True
