"""Shared factories for the planner tests."""

from __future__ import annotations

import pytest

from planner.event_model import Event, RecurringEvent, SeriesInstance, StoredEvents
from planner.recurrence import DayOfMonthRule, DayOfWeekRule


def _make_event(
    *,
    event_id: str = "evt_1",
    name: str = "Test Event",
    category: str = "work",
    date: str = "2026-03-16",
    start_time: str | None = "09:00",
    end_time: str | None = "10:00",
    completed: bool = False,
) -> Event:
    return Event(
        id=event_id,
        name=name,
        category=category,
        date=date,
        start_time=start_time,
        end_time=end_time,
        completed=completed,
    )


def _make_series(
    *,
    series_id: str = "series_1",
    name: str = "Standup",
    category: str = "work",
    start_date: str = "2026-01-01",
    end_date: str | None = None,
    recurrence=None,
    start_time: str | None = "09:00",
    end_time: str | None = "09:30",
) -> RecurringEvent:
    return RecurringEvent(
        id=series_id,
        name=name,
        category=category,
        start_date=start_date,
        end_date=end_date,
        recurrence=recurrence if recurrence is not None else DayOfWeekRule.of(1),
        start_time=start_time,
        end_time=end_time,
    )


def _make_instance(
    *,
    series_id: str = "series_1",
    date: str = "2026-03-16",
    name: str = "Standup",
    start_time: str | None = "09:00",
    end_time: str | None = "09:30",
) -> SeriesInstance:
    return SeriesInstance(
        id=f"{series_id}__{date}",
        series_id=series_id,
        name=name,
        category="work",
        date=date,
        start_time=start_time,
        end_time=end_time,
    )


@pytest.fixture
def make_event():
    return _make_event


@pytest.fixture
def make_series():
    return _make_series


@pytest.fixture
def make_instance():
    return _make_instance


@pytest.fixture
def sample_store() -> StoredEvents:
    """Two one-off events in March 2026 plus a weekly and a monthly series."""
    return StoredEvents(
        by_date={
            "2026-03-16": [
                _make_event(event_id="dentist", name="Dentist", category="personal",
                            start_time="14:00", end_time="15:00"),
            ],
            "2026-03-18": [
                _make_event(event_id="groceries", name="Groceries", category="home",
                            date="2026-03-18", start_time=None, end_time=None),
            ],
        },
        recurring=[
            _make_series(series_id="standup", recurrence=DayOfWeekRule.of(1, 3)),
            _make_series(series_id="rent", name="Pay rent", category="finances",
                         recurrence=DayOfMonthRule(day=15),
                         start_time=None, end_time=None),
        ],
    )
