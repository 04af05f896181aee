"""Tests for sorting, merging and category filtering."""

from planner.ordering import (
    events_for_date,
    filter_by_categories,
    is_category_active,
    merge_events,
    sort_events,
    toggle_category,
)

CATEGORIES = ["work", "projects", "personal", "home", "finances", "other"]


def test_timed_before_untimed(make_event):
    untimed_b = make_event(event_id="1", name="Beta", start_time=None, end_time=None)
    untimed_a = make_event(event_id="2", name="Alpha", start_time=None, end_time=None)
    ten = make_event(event_id="3", name="Zed", start_time="10:00", end_time="11:00")
    nine = make_event(event_id="4", name="Yak", start_time="09:00", end_time="09:30")

    ordered = sort_events([untimed_b, ten, untimed_a, nine])

    assert [e.id for e in ordered] == ["4", "3", "2", "1"]


def test_same_start_sorted_by_name_then_id(make_event):
    b = make_event(event_id="x", name="B")
    a2 = make_event(event_id="z", name="A")
    a1 = make_event(event_id="y", name="A")
    assert [e.id for e in sort_events([b, a2, a1])] == ["y", "z", "x"]


def test_merge_is_commutative(make_event, make_instance):
    one_off = {"2026-03-16": [make_event(event_id="dentist", start_time="14:00", end_time="15:00")]}
    expanded = {
        "2026-03-16": [make_instance(date="2026-03-16")],
        "2026-03-18": [make_instance(date="2026-03-18")],
    }
    assert merge_events(one_off, expanded) == merge_events(expanded, one_off)


def test_merge_orders_combined_lists(make_event, make_instance):
    one_off = {"2026-03-16": [make_event(event_id="dentist", start_time="14:00", end_time="15:00")]}
    expanded = {"2026-03-16": [make_instance(date="2026-03-16")]}
    merged = merge_events(one_off, expanded)
    assert [e.id for e in merged["2026-03-16"]] == ["series_1__2026-03-16", "dentist"]


def test_merge_leaves_inputs_alone(make_event, make_instance):
    events = [make_event()]
    one_off = {"2026-03-16": events}
    merge_events(one_off, {"2026-03-16": [make_instance()]})
    assert len(events) == 1


def test_merge_drops_empty_dates(make_event):
    merged = merge_events({"2026-03-16": []}, {"2026-03-17": [make_event(date="2026-03-17")]})
    assert list(merged) == ["2026-03-17"]


def test_events_for_date(make_event):
    event = make_event()
    assert events_for_date({"2026-03-16": [event]}, "2026-03-16") == [event]
    assert events_for_date({}, "2026-03-16") == []


def test_filter_by_categories(make_event):
    work = make_event(event_id="w", category="work")
    home = make_event(event_id="h", category="home", date="2026-03-17")
    filtered = filter_by_categories(
        {"2026-03-16": [work], "2026-03-17": [home]}, ["work"]
    )
    assert filtered == {"2026-03-17": [home]}


def test_filter_with_nothing_disabled(make_event):
    events = {"2026-03-16": [make_event()]}
    assert filter_by_categories(events, []) == events


class TestToggle:
    def test_toggle_single_category(self):
        assert toggle_category([], "work", CATEGORIES) == ["work"]
        assert toggle_category(["work", "home"], "work", CATEGORIES) == ["home"]

    def test_all_disables_everything(self):
        assert toggle_category(["work"], "all", CATEGORIES) == CATEGORIES

    def test_all_reenables_when_everything_disabled(self):
        assert toggle_category(list(CATEGORIES), "all", CATEGORIES) == []

    def test_active_state(self):
        assert is_category_active("work", [], CATEGORIES)
        assert not is_category_active("work", ["work"], CATEGORIES)
        assert is_category_active("all", ["work"], CATEGORIES)
        assert not is_category_active("all", list(CATEGORIES), CATEGORIES)
