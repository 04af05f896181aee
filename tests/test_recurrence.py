"""Tests for recurrence rules."""

from datetime import date

import pytest

from planner.recurrence import (
    DayOfMonthRule,
    DayOfWeekRule,
    describe_rule,
    matches,
    rule_from_dict,
    rule_to_dict,
)


class TestMatches:
    def test_day_of_month(self):
        rule = DayOfMonthRule(day=15)
        assert matches(rule, date(2026, 3, 15))
        assert not matches(rule, date(2026, 3, 16))

    def test_day_31_never_rolls_over(self):
        rule = DayOfMonthRule(day=31)
        assert not matches(rule, date(2026, 4, 30))
        assert not matches(rule, date(2026, 5, 1))
        assert matches(rule, date(2026, 5, 31))

    def test_day_of_week_sunday_is_zero(self):
        assert matches(DayOfWeekRule.of(0), date(2026, 3, 15))
        assert not matches(DayOfWeekRule.of(0), date(2026, 3, 16))

    def test_day_of_week_set(self):
        rule = DayOfWeekRule.of(1, 3)
        assert matches(rule, date(2026, 3, 16))  # Monday
        assert matches(rule, date(2026, 3, 18))  # Wednesday
        assert not matches(rule, date(2026, 3, 17))


class TestValidation:
    @pytest.mark.parametrize("day", [0, 32])
    def test_month_day_out_of_range(self, day):
        with pytest.raises(ValueError):
            DayOfMonthRule(day=day)

    def test_weekday_out_of_range(self):
        with pytest.raises(ValueError):
            DayOfWeekRule.of(7)

    def test_empty_weekday_set(self):
        with pytest.raises(ValueError):
            DayOfWeekRule(days=frozenset())


class TestWireFormat:
    def test_single_weekday_keeps_int_form(self):
        rule = rule_from_dict({"kind": "day_of_week", "day": 1})
        assert rule.days == frozenset({1})
        assert rule.single
        assert rule_to_dict(rule) == {"kind": "day_of_week", "day": 1}

    def test_weekday_list_is_written_sorted(self):
        rule = rule_from_dict({"kind": "day_of_week", "day": [3, 1]})
        assert not rule.single
        assert rule_to_dict(rule) == {"kind": "day_of_week", "day": [1, 3]}

    def test_single_element_list_stays_a_list(self):
        rule = rule_from_dict({"kind": "day_of_week", "day": [5]})
        assert rule_to_dict(rule) == {"kind": "day_of_week", "day": [5]}

    def test_day_of_month(self):
        rule = rule_from_dict({"kind": "day_of_month", "day": 15})
        assert rule == DayOfMonthRule(day=15)
        assert rule_to_dict(rule) == {"kind": "day_of_month", "day": 15}

    @pytest.mark.parametrize("data", [
        {"kind": "day_of_year", "day": 1},
        {"kind": "day_of_month", "day": "15"},
        {"kind": "day_of_month", "day": True},
        {"kind": "day_of_week", "day": [1, None]},
        {"kind": "day_of_week"},
        "weekly",
        None,
    ])
    def test_invalid_rules(self, data):
        with pytest.raises(ValueError):
            rule_from_dict(data)


def test_describe_rule():
    assert describe_rule(DayOfMonthRule(day=15)) == "Monthly on day 15"
    assert describe_rule(DayOfWeekRule.of(0, 1, 3)) == "Every Monday, Wednesday, Sunday"
