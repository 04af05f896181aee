"""
Event records for Monthly Planner.

Three kinds of records flow through the planner:
- Event: a one-off event owned and persisted by the storage layer
- RecurringEvent: a series definition (recurrence rule + validity window)
- SeriesInstance: one occurrence of a series on a concrete date. Instances
  are derived on every expansion and never persisted.

Event and SeriesInstance expose the same read attributes (id, name,
category, date, start_time, end_time, series_id), so ordering and layout
code can treat them alike.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .recurrence import RecurrenceRule, rule_from_dict, rule_to_dict


DEFAULT_CATEGORIES = ["work", "projects", "personal", "home", "finances", "other"]


def _require(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Missing or invalid field '{key}'")
    return value


def _optional_time(data: dict, key: str) -> Optional[str]:
    # Empty strings are how the forms represent "no time"
    value = data.get(key)
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class Event:
    """A one-off event stored under its date."""
    id: str
    name: str
    category: str
    date: str  # YYYY-MM-DD
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None  # HH:MM
    completed: bool = False

    @property
    def series_id(self) -> None:
        """One-off events never belong to a series."""
        return None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "date": self.date,
        }
        if self.start_time:
            data["startTime"] = self.start_time
        if self.end_time:
            data["endTime"] = self.end_time
        if self.completed:
            data["completed"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Event":
        return cls(
            id=_require(data, "id"),
            name=_require(data, "name"),
            category=_require(data, "category"),
            date=_require(data, "date"),
            start_time=_optional_time(data, "startTime"),
            end_time=_optional_time(data, "endTime"),
            completed=bool(data.get("completed", False)),
        )


@dataclass(frozen=True)
class SeriesInstance:
    """A recurring series materialized on one date."""
    id: str  # "<series_id>__<date>"
    series_id: str
    name: str
    category: str
    date: str
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def to_dict(self) -> dict:
        """Display form only; instances are never written to storage."""
        data = {
            "id": self.id,
            "seriesId": self.series_id,
            "name": self.name,
            "category": self.category,
            "date": self.date,
        }
        if self.start_time:
            data["startTime"] = self.start_time
        if self.end_time:
            data["endTime"] = self.end_time
        return data


CalendarEntry = Union[Event, SeriesInstance]


@dataclass(frozen=True)
class RecurringEvent:
    """A recurring series, valid from start_date through end_date (inclusive)."""
    id: str
    name: str
    category: str
    start_date: str
    recurrence: RecurrenceRule
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    end_date: Optional[str] = None  # None = open-ended

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "startDate": self.start_date,
            "recurrence": rule_to_dict(self.recurrence),
        }
        if self.start_time:
            data["startTime"] = self.start_time
        if self.end_time:
            data["endTime"] = self.end_time
        if self.end_date:
            data["endDate"] = self.end_date
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "RecurringEvent":
        return cls(
            id=_require(data, "id"),
            name=_require(data, "name"),
            category=_require(data, "category"),
            start_date=_require(data, "startDate"),
            recurrence=rule_from_dict(data.get("recurrence")),
            start_time=_optional_time(data, "startTime"),
            end_time=_optional_time(data, "endTime"),
            end_date=_optional_time(data, "endDate"),
        )


@dataclass(frozen=True)
class StoredEvents:
    """
    Everything the storage layer owns.

    Invariants: every Event in by_date[key] has date == key, and no key
    maps to an empty list.
    """
    by_date: dict[str, list[Event]] = field(default_factory=dict)
    recurring: list[RecurringEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "byDate": {
                key: [event.to_dict() for event in events]
                for key, events in sorted(self.by_date.items())
                if events
            },
            "recurring": [series.to_dict() for series in self.recurring],
        }

    @property
    def event_count(self) -> int:
        return sum(len(events) for events in self.by_date.values())
