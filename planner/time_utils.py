"""
Time arithmetic for Monthly Planner.

All times are local wall-clock "HH:MM" strings. Arithmetic is done in
minutes since midnight; nothing here knows about dates or timezones.
"""

from typing import Optional, Union


DAY_END_MINUTES = 22 * 60  # 10 PM, last minute an event may end

MINUTE_OPTIONS: list[tuple[str, str]] = [
    ("00", "00"),
    ("15", "15"),
    ("30", "30"),
    ("45", "45"),
]


def parse_time_to_minutes(time: str) -> int:
    """
    Convert an "HH:MM" string to minutes since midnight.

    The format is not validated; callers must only pass times they
    already checked for presence.
    """
    hours, minutes = time.split(":")
    return int(hours) * 60 + int(minutes)


def format_time(hour: int, minute: int) -> str:
    """Format hour and minute as a zero-padded "HH:MM" string."""
    return f"{hour:02d}:{minute:02d}"


def split_time(time: Optional[str]) -> tuple[str, str]:
    """
    Split an "HH:MM" string into its hour and minute parts for form fields.

    An empty time yields an empty hour and "00" minutes.
    """
    if not time:
        return "", "00"
    hour, _, minute = time.partition(":")
    return hour, minute or "00"


def format_hour_display(hour: int) -> str:
    """Format an hour (0-23) for display, e.g. "6 AM" or "2 PM"."""
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def calculate_event_duration(start_time: str, end_time: str) -> int:
    """Duration in minutes; negative when the end lies before the start."""
    return parse_time_to_minutes(end_time) - parse_time_to_minutes(start_time)


def calculate_new_end_time(new_start_time: str, duration_minutes: int) -> str:
    """
    Compute the end time for a start time and a duration.

    There is no rollover past midnight: a result beyond 23:59 comes back
    with an hour of 24 or more. Use validate_time_within_bounds() first.
    """
    end_minutes = parse_time_to_minutes(new_start_time) + duration_minutes
    return format_time(end_minutes // 60, end_minutes % 60)


def validate_time_within_bounds(
    start_time: str,
    duration_minutes: int,
    day_end_minutes: int = DAY_END_MINUTES,
) -> bool:
    """Check that an event starting at start_time ends no later than the day end."""
    return parse_time_to_minutes(start_time) + duration_minutes <= day_end_minutes


def is_end_time_valid(
    start_hour: Union[int, str, None],
    start_minute: Union[int, str, None],
    end_hour: Union[int, str, None],
    end_minute: Union[int, str, None],
) -> bool:
    """
    Check that the end lies strictly after the start.

    When either hour is unset there is nothing to validate and the
    result is True.
    """
    if start_hour in (None, "") or end_hour in (None, ""):
        return True
    start = int(start_hour) * 60 + int(start_minute or 0)
    end = int(end_hour) * 60 + int(end_minute or 0)
    return end > start


def default_end_time(start_hour: str, start_minute: str, max_hour: int = 22) -> tuple[str, str]:
    """
    Suggest an end one hour after the start, clamped to max_hour.

    Returns:
        (hour, minute) strings; an empty start hour gives ("", "00").
    """
    if not start_hour:
        return "", "00"
    end_hour = min(int(start_hour) + 1, max_hour)
    return f"{end_hour:02d}", f"{int(start_minute or 0):02d}"


def hour_options(first_hour: int, last_hour: int) -> list[tuple[str, str]]:
    """(value, label) pairs for an hour selector, inclusive on both ends."""
    return [
        (f"{hour:02d}", format_hour_display(hour))
        for hour in range(first_hour, last_hour + 1)
    ]


# Events may start from 6 AM up to 9 PM and end from 6 AM up to 10 PM
START_HOUR_OPTIONS = hour_options(6, 21)
END_HOUR_OPTIONS = hour_options(6, 22)
