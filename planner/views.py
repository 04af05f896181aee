"""
Month and week view assembly.

Ties the engine together for one render pass: pick the visible dates,
expand the series for exactly those dates, merge with the one-off events,
apply the category filter and, for the week view, lay out the time grid.
Nothing is cached; every call starts from the stored data.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from .config import LayoutConfig
from .date_utils import (
    date_keys,
    format_date,
    get_month_days,
    get_week_days,
    is_current_month,
    is_today,
)
from .event_model import CalendarEntry, StoredEvents
from .expansion import expand_recurring_events
from .holidays import HolidayCalendar
from .layout import EventLayout, EventPosition, layout_day
from .ordering import filter_by_categories, merge_events


MONTH = "month"
WEEK = "week"


@dataclass
class DayCell:
    """One day of a month or week grid."""
    date: date
    key: str
    events: list[CalendarEntry]
    is_today: bool
    is_current_month: bool
    holiday: Optional[str] = None
    # Week view only: (entry, layout, position) for timed entries
    timed_layout: list[tuple[CalendarEntry, EventLayout, EventPosition]] = field(default_factory=list)

    @property
    def all_day_events(self) -> list[CalendarEntry]:
        return [e for e in self.events if not (e.start_time and e.end_time)]


def visible_dates(mode: str, year: int, month: int, anchor: Optional[date] = None) -> list[date]:
    """Dates shown by a view; the week view needs an anchor date."""
    if mode == MONTH:
        return get_month_days(year, month)
    if mode == WEEK:
        if anchor is None:
            raise ValueError("Week view needs an anchor date")
        return get_week_days(year, month, anchor)
    raise ValueError(f"Unknown view mode: {mode!r}")


def build_events_by_date(
    stored: StoredEvents,
    keys: Iterable[str],
    disabled_categories: Iterable[str] = (),
) -> dict[str, list[CalendarEntry]]:
    """Expanded, merged, sorted and filtered entries for the given dates."""
    keys = list(keys)
    expanded = expand_recurring_events(stored.recurring, keys)
    wanted = set(keys)
    one_off = {key: events for key, events in stored.by_date.items() if key in wanted}
    return filter_by_categories(merge_events(one_off, expanded), disabled_categories)


def _build_cells(
    stored: StoredEvents,
    days: Sequence[date],
    month: int,
    reference: date,
    disabled_categories: Iterable[str],
    holidays: Optional[HolidayCalendar],
) -> list[DayCell]:
    events_by_date = build_events_by_date(stored, date_keys(days), disabled_categories)
    cells = []
    for day in days:
        key = format_date(day)
        cells.append(DayCell(
            date=day,
            key=key,
            events=events_by_date.get(key, []),
            is_today=is_today(day, reference),
            is_current_month=is_current_month(day, month),
            holiday=holidays.holiday_name(key) if holidays else None,
        ))
    return cells


def month_view(
    stored: StoredEvents,
    year: int,
    month: int,
    reference: date,
    disabled_categories: Iterable[str] = (),
    holidays: Optional[HolidayCalendar] = None,
) -> list[DayCell]:
    """The 42 cells of a month grid."""
    days = visible_dates(MONTH, year, month)
    return _build_cells(stored, days, month, reference, disabled_categories, holidays)


def week_view(
    stored: StoredEvents,
    anchor: date,
    reference: date,
    disabled_categories: Iterable[str] = (),
    holidays: Optional[HolidayCalendar] = None,
    layout: Optional[LayoutConfig] = None,
) -> list[DayCell]:
    """Seven cells, Monday first, each with its time-grid layout."""
    layout = layout or LayoutConfig()
    days = visible_dates(WEEK, anchor.year, anchor.month, anchor)
    cells = _build_cells(stored, days, anchor.month, reference, disabled_categories, holidays)
    for cell in cells:
        cell.timed_layout = layout_day(
            cell.events,
            day_start_hour=layout.day_start_hour,
            day_end_hour=layout.day_end_hour,
            max_columns=layout.max_columns,
            min_height_fraction=layout.min_height_fraction,
        )
    return cells
