"""
Recurrence rules for Monthly Planner.

Two rule kinds are supported:
- day_of_month: fires on one day number of every month (no rollover, so
  day 31 never fires in a 30-day month)
- day_of_week: fires on a set of weekdays, 0 = Sunday ... 6 = Saturday

The stored "day" of a weekly rule may be a single integer or a list of
integers. It is normalized to a frozenset here and written back in the
form it was read from.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Union

from .date_utils import sunday_based_weekday


DAY_OF_MONTH = "day_of_month"
DAY_OF_WEEK = "day_of_week"

WEEKDAY_LABELS = [
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
]


@dataclass(frozen=True)
class DayOfMonthRule:
    """Fires when the date's day of month equals day."""
    day: int

    kind = DAY_OF_MONTH

    def __post_init__(self):
        if not 1 <= self.day <= 31:
            raise ValueError(f"day_of_month day out of range: {self.day}")


@dataclass(frozen=True)
class DayOfWeekRule:
    """Fires when the date's weekday (0 = Sunday) is one of days."""
    days: frozenset[int]
    single: bool = False  # stored as a bare integer rather than a list

    kind = DAY_OF_WEEK

    def __post_init__(self):
        if not self.days:
            raise ValueError("day_of_week rule needs at least one day")
        for day in self.days:
            if not 0 <= day <= 6:
                raise ValueError(f"day_of_week day out of range: {day}")
        if self.single and len(self.days) != 1:
            raise ValueError("single-day form needs exactly one day")

    @classmethod
    def of(cls, *days: int) -> "DayOfWeekRule":
        return cls(days=frozenset(days))


RecurrenceRule = Union[DayOfMonthRule, DayOfWeekRule]


def matches(rule: RecurrenceRule, d: date) -> bool:
    """
    Check whether a rule fires on a date.

    The series validity window is not checked here; callers test
    is_date_in_range() first.
    """
    if isinstance(rule, DayOfMonthRule):
        return d.day == rule.day
    if isinstance(rule, DayOfWeekRule):
        return sunday_based_weekday(d) in rule.days
    return False


# ==================== Wire Format ====================

def _as_int(value: Any) -> int:
    # bool is an int subclass but never a valid day
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Invalid recurrence day: {value!r}")
    return value


def rule_from_dict(data: dict) -> RecurrenceRule:
    """
    Build a rule from its stored form, e.g. {"kind": "day_of_week", "day": [1, 3]}.

    Raises:
        ValueError: for an unknown kind or an invalid day value
    """
    if not isinstance(data, dict):
        raise ValueError(f"Invalid recurrence rule: {data!r}")

    kind = data.get("kind")
    day = data.get("day")

    if kind == DAY_OF_MONTH:
        return DayOfMonthRule(day=_as_int(day))

    if kind == DAY_OF_WEEK:
        if isinstance(day, (list, tuple)):
            return DayOfWeekRule(days=frozenset(_as_int(d) for d in day))
        return DayOfWeekRule(days=frozenset([_as_int(day)]), single=True)

    raise ValueError(f"Unknown recurrence kind: {kind!r}")


def rule_to_dict(rule: RecurrenceRule) -> dict:
    """Serialize a rule back to its stored form."""
    if isinstance(rule, DayOfMonthRule):
        return {"kind": DAY_OF_MONTH, "day": rule.day}
    if rule.single:
        (day,) = rule.days
        return {"kind": DAY_OF_WEEK, "day": day}
    return {"kind": DAY_OF_WEEK, "day": sorted(rule.days)}


def describe_rule(rule: RecurrenceRule) -> str:
    """Short human readable description, e.g. "Every Monday, Wednesday"."""
    if isinstance(rule, DayOfMonthRule):
        return f"Monthly on day {rule.day}"
    # Monday-first reads more naturally than Sunday-first
    ordered = sorted(rule.days, key=lambda d: (d + 6) % 7)
    return "Every " + ", ".join(WEEKDAY_LABELS[d] for d in ordered)
