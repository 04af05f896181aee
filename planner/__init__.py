"""
Monthly Planner Engine

This module provides the core functionality for planner operations:
- Time and date helpers (time_utils.py, date_utils.py)
- Event records (event_model.py) and recurrence rules (recurrence.py)
- Recurring expansion (expansion.py) and ordering/merging (ordering.py)
- Time-grid layout (layout.py) and drag/drop resolution (drag_drop.py)
- Store operations (operations.py) and JSON persistence (event_storage.py)
- iCalendar export/import (ics.py)
- Month/week view assembly (views.py)
"""

from .config import Config
from .event_model import Event, SeriesInstance, RecurringEvent, StoredEvents, CalendarEntry
from .recurrence import DayOfMonthRule, DayOfWeekRule, matches
from .expansion import expand_recurring_events, make_instance_id
from .ordering import merge_events, sort_events, filter_by_categories
from .layout import calculate_event_layout, calculate_event_position, events_overlap, layout_day
from .drag_drop import position_to_time, resolve_drop, is_event_draggable, apply_drop
from .event_storage import JsonEventStorage, create_storage_backend
from .views import month_view, week_view, build_events_by_date

__all__ = [
    'Config',
    'Event',
    'SeriesInstance',
    'RecurringEvent',
    'StoredEvents',
    'CalendarEntry',
    'DayOfMonthRule',
    'DayOfWeekRule',
    'matches',
    'expand_recurring_events',
    'make_instance_id',
    'merge_events',
    'sort_events',
    'filter_by_categories',
    'calculate_event_layout',
    'calculate_event_position',
    'events_overlap',
    'layout_day',
    'position_to_time',
    'resolve_drop',
    'is_event_draggable',
    'apply_drop',
    'JsonEventStorage',
    'create_storage_backend',
    'month_view',
    'week_view',
    'build_events_by_date',
]
