"""
Expansion of recurring series into per-date instances.

Only the dates currently visible are expanded. The work is
O(dates x series), which is fine for a month grid and a personal
calendar. Expansion is pure: the same series and dates always produce
the same instances with the same ids, so it can run on every render.
"""

from typing import Iterable, Sequence

from .date_utils import is_date_in_range, parse_iso_date
from .event_model import RecurringEvent, SeriesInstance
from .ordering import sort_events
from .recurrence import matches


def make_instance_id(series_id: str, date_key: str) -> str:
    """Stable id of a series occurrence on one date."""
    return f"{series_id}__{date_key}"


def create_instance(series: RecurringEvent, date_key: str) -> SeriesInstance:
    return SeriesInstance(
        id=make_instance_id(series.id, date_key),
        series_id=series.id,
        name=series.name,
        category=series.category,
        date=date_key,
        start_time=series.start_time,
        end_time=series.end_time,
    )


def expand_recurring_events(
    series_list: Sequence[RecurringEvent],
    date_keys: Iterable[str],
) -> dict[str, list[SeriesInstance]]:
    """
    Materialize every series occurrence that falls on one of date_keys.

    Args:
        series_list: Recurring series from storage
        date_keys: Visible dates as YYYY-MM-DD keys

    Returns:
        Mapping of date key to sorted instances. Dates without any
        occurrence are absent.
    """
    expanded: dict[str, list[SeriesInstance]] = {}

    # A key listed twice must not produce duplicate instances
    for key in dict.fromkeys(date_keys):
        day = None
        for series in series_list:
            if not is_date_in_range(key, series.start_date, series.end_date):
                continue
            if day is None:
                day = parse_iso_date(key)
            if not matches(series.recurrence, day):
                continue
            expanded.setdefault(key, []).append(create_instance(series, key))

    return {key: sort_events(instances) for key, instances in expanded.items()}
