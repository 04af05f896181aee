"""
Date utilities for Monthly Planner.

Formatting, parsing and comparing ISO date keys ("YYYY-MM-DD"), plus the
Monday-first grids used by the month and week views.
"""

from datetime import date, timedelta
from typing import Iterable, Optional


MONTH_GRID_CELLS = 42  # 6 rows x 7 days

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

WEEK_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_date(d: date) -> str:
    """Format a date as a zero-padded YYYY-MM-DD key."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_iso_date(key: str) -> date:
    """Parse a YYYY-MM-DD key into a calendar date."""
    year, month, day = (int(part) for part in key.split("-"))
    return date(year, month, day)


def compare_iso(a: str, b: str) -> int:
    """
    Compare two date keys.

    Plain string comparison is enough because the format is fixed width.
    Returns -1, 0 or 1.
    """
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def is_date_in_range(key: str, start: str, end: Optional[str] = None) -> bool:
    """Check start <= key <= end, where a missing end means open-ended."""
    if compare_iso(key, start) < 0:
        return False
    if end and compare_iso(key, end) > 0:
        return False
    return True


def sunday_based_weekday(d: date) -> int:
    """Weekday with 0 = Sunday ... 6 = Saturday, as stored in recurrence rules."""
    return (d.weekday() + 1) % 7


def get_week_start(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def get_month_days(year: int, month: int) -> list[date]:
    """
    Days shown in a month grid.

    Always 42 cells: starts at the Monday on or before the 1st and pads
    with days of the following month to complete six rows.

    Args:
        year: Calendar year
        month: Month, 1 = January
    """
    grid_start = get_week_start(date(year, month, 1))
    return [grid_start + timedelta(days=i) for i in range(MONTH_GRID_CELLS)]


def get_week_days(year: int, month: int, anchor: date) -> list[date]:
    """
    Monday through Sunday of the week containing anchor.

    year and month are accepted for symmetry with get_month_days() but the
    anchor alone decides the week.
    """
    week_start = get_week_start(anchor)
    return [week_start + timedelta(days=i) for i in range(7)]


def date_keys(days: Iterable[date]) -> list[str]:
    return [format_date(d) for d in days]


def is_today(d: date, reference: date) -> bool:
    """Check d against an explicitly supplied reference date."""
    return d == reference


def is_current_month(d: date, month: int) -> bool:
    return d.month == month


def month_name(month: int, names: Optional[list[str]] = None) -> str:
    """Month name for 1 = January; empty string when out of range."""
    names = names or MONTH_NAMES
    return names[month - 1] if 1 <= month <= len(names) else ""


def week_day_names(names: Optional[list[str]] = None) -> list[str]:
    """Abbreviated weekday names starting from Monday."""
    return list(names or WEEK_DAY_NAMES)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months, wrapping across years."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def shift_week(anchor: date, delta: int) -> date:
    """Move an anchor date by delta weeks."""
    return anchor + timedelta(weeks=delta)
