"""Tests for date keys and calendar grids."""

from datetime import date

import pytest

from planner.date_utils import (
    compare_iso,
    date_keys,
    format_date,
    get_month_days,
    get_week_days,
    get_week_start,
    is_current_month,
    is_date_in_range,
    is_today,
    month_name,
    parse_iso_date,
    shift_month,
    shift_week,
    sunday_based_weekday,
)


def test_format_and_parse():
    assert format_date(date(2026, 3, 5)) == "2026-03-05"
    assert parse_iso_date("2026-03-05") == date(2026, 3, 5)


def test_parse_rejects_impossible_date():
    with pytest.raises(ValueError):
        parse_iso_date("2026-02-30")


def test_compare_iso():
    assert compare_iso("2026-03-01", "2026-03-02") == -1
    assert compare_iso("2026-03-02", "2026-03-02") == 0
    assert compare_iso("2026-12-01", "2026-03-02") == 1


@pytest.mark.parametrize("key,start,end,expected", [
    ("2026-03-15", "2026-03-10", "2026-03-20", True),
    ("2026-03-10", "2026-03-10", "2026-03-20", True),
    ("2026-03-20", "2026-03-10", "2026-03-20", True),
    ("2026-03-09", "2026-03-10", "2026-03-20", False),
    ("2026-03-21", "2026-03-10", "2026-03-20", False),
    ("2030-01-01", "2026-03-10", None, True),
])
def test_is_date_in_range(key, start, end, expected):
    assert is_date_in_range(key, start, end) is expected


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2026, 3, 15)) == 0  # Sunday
    assert sunday_based_weekday(date(2026, 3, 16)) == 1  # Monday
    assert sunday_based_weekday(date(2026, 2, 28)) == 6  # Saturday


def test_week_start_is_monday():
    assert get_week_start(date(2026, 3, 18)) == date(2026, 3, 16)
    assert get_week_start(date(2026, 3, 15)) == date(2026, 3, 9)


class TestMonthGrid:
    def test_always_42_cells(self):
        for month in range(1, 13):
            assert len(get_month_days(2026, month)) == 42

    def test_starts_on_monday_before_first(self):
        days = get_month_days(2026, 3)
        assert days[0] == date(2026, 2, 23)
        assert days[-1] == date(2026, 4, 5)

    def test_month_starting_on_monday(self):
        assert get_month_days(2026, 6)[0] == date(2026, 6, 1)

    def test_february(self):
        days = get_month_days(2026, 2)
        assert days[0] == date(2026, 1, 26)
        assert date(2026, 2, 28) in days


def test_week_days():
    days = get_week_days(2026, 3, date(2026, 3, 18))
    assert days[0] == date(2026, 3, 16)
    assert days[-1] == date(2026, 3, 22)
    assert len(days) == 7


def test_date_keys():
    assert date_keys([date(2026, 3, 1), date(2026, 3, 2)]) == ["2026-03-01", "2026-03-02"]


def test_today_and_current_month():
    assert is_today(date(2026, 3, 16), date(2026, 3, 16))
    assert not is_today(date(2026, 3, 17), date(2026, 3, 16))
    assert is_current_month(date(2026, 3, 1), 3)
    assert not is_current_month(date(2026, 2, 28), 3)


def test_month_name():
    assert month_name(1) == "January"
    assert month_name(13) == ""


def test_shift_month_wraps_years():
    assert shift_month(2026, 12, 1) == (2027, 1)
    assert shift_month(2026, 1, -1) == (2025, 12)
    assert shift_month(2026, 3, 2) == (2026, 5)


def test_shift_week():
    assert shift_week(date(2026, 3, 16), -1) == date(2026, 3, 9)
