"""
iCalendar export and import for Monthly Planner.

Export writes one VEVENT per one-off event and one per series. Series get
an RRULE:
- day_of_month -> FREQ=MONTHLY;BYMONTHDAY=n
- day_of_week  -> FREQ=WEEKLY;BYDAY=MO,WE,...
Times are floating (no timezone); untimed entries become all-day events.

Import turns representable RRULEs back into series. Anything else that
recurs (daily rules, intervals, counts, exceptions...) is expanded with
recurring_ical_events into one-off events inside a date window.
"""

import sys
from datetime import date, datetime, time, timedelta
from pathlib import Path
from typing import Optional

import pytz
from icalendar import Calendar as ICalCalendar, Event as ICalEvent
from recurring_ical_events import of as recurring_events_of

from .date_utils import format_date, parse_iso_date, sunday_based_weekday
from .event_model import Event, RecurringEvent, StoredEvents
from .ordering import sort_events
from .recurrence import DayOfMonthRule, DayOfWeekRule, RecurrenceRule, matches
from .time_utils import format_time


PRODID = '-//Monthly Planner//monthly-planner//'

# Sunday-based, matching the recurrence rule weekday numbers
ICAL_WEEKDAYS = ['SU', 'MO', 'TU', 'WE', 'TH', 'FR', 'SA']

X_START_DATE = 'X-PLANNER-START-DATE'
X_COMPLETED = 'X-PLANNER-COMPLETED'

DEFAULT_IMPORT_CATEGORY = 'other'


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] ICS: {msg}", file=sys.stderr)


def _new_calendar() -> ICalCalendar:
    cal = ICalCalendar()
    cal.add('prodid', PRODID)
    cal.add('version', '2.0')
    return cal


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(':')
    return time(int(hours), int(minutes))


# ==================== Export ====================

def _add_times(vevent: ICalEvent, day: date, start_time: Optional[str], end_time: Optional[str]):
    if start_time:
        start = datetime.combine(day, _parse_hhmm(start_time))
        vevent.add('dtstart', start)
        if end_time:
            vevent.add('dtend', datetime.combine(day, _parse_hhmm(end_time)))
    else:
        vevent.add('dtstart', day)
        vevent.add('dtend', day + timedelta(days=1))


def _first_occurrence(rule: RecurrenceRule, start: date) -> date:
    """First date on or after start on which the rule fires."""
    day = start
    # Every valid rule fires within two months
    for _ in range(62):
        if matches(rule, day):
            return day
        day += timedelta(days=1)
    return start


def _build_rrule(series: RecurringEvent) -> dict:
    """Build RRULE dict from a series recurrence."""
    rule = series.recurrence
    if isinstance(rule, DayOfMonthRule):
        rrule = {'freq': 'MONTHLY', 'bymonthday': rule.day}
    else:
        rrule = {'freq': 'WEEKLY', 'byday': [ICAL_WEEKDAYS[d] for d in sorted(rule.days)]}

    if series.end_date:
        end = parse_iso_date(series.end_date)
        # UNTIL must have the same value type as DTSTART
        rrule['until'] = datetime.combine(end, time(23, 59, 59)) if series.start_time else end
    return rrule


def event_to_vevent(event: Event) -> ICalEvent:
    vevent = ICalEvent()
    vevent.add('uid', event.id)
    vevent.add('summary', event.name)
    vevent.add('dtstamp', datetime.now(pytz.UTC))
    vevent.add('categories', [event.category])
    _add_times(vevent, parse_iso_date(event.date), event.start_time, event.end_time)
    if event.completed:
        vevent.add(X_COMPLETED, 'TRUE')
    return vevent


def series_to_vevent(series: RecurringEvent) -> ICalEvent:
    """
    Build the VEVENT for a series.

    DTSTART is moved to the first real occurrence, since iCalendar counts
    DTSTART as an occurrence even when the rule does not match it. The
    series start date is kept in X-PLANNER-START-DATE.
    """
    first = _first_occurrence(series.recurrence, parse_iso_date(series.start_date))

    vevent = ICalEvent()
    vevent.add('uid', series.id)
    vevent.add('summary', series.name)
    vevent.add('dtstamp', datetime.now(pytz.UTC))
    vevent.add('categories', [series.category])
    _add_times(vevent, first, series.start_time, series.end_time)
    vevent.add('rrule', _build_rrule(series))
    vevent.add(X_START_DATE, series.start_date)
    return vevent


def to_icalendar(stored: StoredEvents) -> ICalCalendar:
    """Convert all events and series to a VCALENDAR."""
    cal = _new_calendar()
    for key in sorted(stored.by_date):
        for event in stored.by_date[key]:
            cal.add_component(event_to_vevent(event))
    for series in stored.recurring:
        cal.add_component(series_to_vevent(series))
    return cal


def export_ics(stored: StoredEvents, path: Path) -> None:
    Path(path).write_bytes(to_icalendar(stored).to_ical())


# ==================== Import ====================

def _split_dt(value) -> tuple[date, Optional[str]]:
    """Calendar date and wall-clock "HH:MM" (None for all-day values)."""
    if isinstance(value, datetime):
        return value.date(), format_time(value.hour, value.minute)
    return value, None


def _category(vevent: ICalEvent) -> str:
    categories = vevent.get('CATEGORIES')
    if categories is None:
        return DEFAULT_IMPORT_CATEGORY
    if isinstance(categories, list):
        categories = categories[0]
    cats = getattr(categories, 'cats', None) or [str(categories)]
    return str(cats[0]) if cats else DEFAULT_IMPORT_CATEGORY


def _times(vevent: ICalEvent) -> tuple[date, Optional[str], Optional[str]]:
    day, start_time = _split_dt(vevent.get('DTSTART').dt)
    end_time = None
    dtend = vevent.get('DTEND')
    if start_time and dtend is not None:
        end_day, end_time = _split_dt(dtend.dt)
        if end_day != day:
            # Multi-day events are shown on their start date only
            end_time = None
    return day, start_time, end_time


def _rule_from_rrule(rrule, dtstart: date) -> Optional[RecurrenceRule]:
    """
    Map an RRULE onto a supported rule.

    Returns None when the RRULE cannot be expressed as day_of_month or
    day_of_week.
    """
    parts = {key.upper(): value for key, value in rrule.items()}
    freq = (parts.pop('FREQ', [None])[0] or '').upper()
    interval = parts.pop('INTERVAL', [1])[0]
    parts.pop('UNTIL', None)
    parts.pop('WKST', None)

    if interval != 1 or 'COUNT' in parts:
        return None

    if freq == 'MONTHLY':
        days = parts.pop('BYMONTHDAY', [dtstart.day])
        if parts or len(days) != 1 or not 1 <= days[0] <= 31:
            return None
        return DayOfMonthRule(day=days[0])

    if freq == 'WEEKLY':
        byday = parts.pop('BYDAY', [ICAL_WEEKDAYS[sunday_based_weekday(dtstart)]])
        if parts:
            return None
        weekdays = set()
        for code in byday:
            code = str(code).upper()
            if code not in ICAL_WEEKDAYS:
                # Prefixed forms like "1MO" only make sense for monthly rules
                return None
            weekdays.add(ICAL_WEEKDAYS.index(code))
        return DayOfWeekRule(days=frozenset(weekdays))

    return None


def _until_key(rrule) -> Optional[str]:
    until = rrule.get('UNTIL')
    if not until:
        return None
    value = until[0]
    return format_date(value.date() if isinstance(value, datetime) else value)


def _series_from_vevent(vevent: ICalEvent) -> Optional[RecurringEvent]:
    if 'EXDATE' in vevent or 'RDATE' in vevent:
        return None
    day, start_time, end_time = _times(vevent)
    rrule = vevent.get('RRULE')
    if isinstance(rrule, list):
        return None
    rule = _rule_from_rrule(rrule, day)
    if rule is None:
        return None

    start_date = str(vevent.get(X_START_DATE) or format_date(day))
    return RecurringEvent(
        id=str(vevent.get('UID')),
        name=str(vevent.get('SUMMARY') or 'Untitled'),
        category=_category(vevent),
        start_date=start_date,
        recurrence=rule,
        start_time=start_time,
        end_time=end_time,
        end_date=_until_key(rrule),
    )


def _event_from_vevent(vevent: ICalEvent, event_id: str) -> Event:
    day, start_time, end_time = _times(vevent)
    completed = str(vevent.get(X_COMPLETED, '')).upper() == 'TRUE'
    return Event(
        id=event_id,
        name=str(vevent.get('SUMMARY') or 'Untitled'),
        category=_category(vevent),
        date=format_date(day),
        start_time=start_time,
        end_time=end_time,
        completed=completed,
    )


def _expand_in_window(components: list, window_start: date, window_end: date) -> list[Event]:
    """Materialize recurring components as one-off events inside the window."""
    vcal = _new_calendar()
    for component in components:
        vcal.add_component(component)

    events = []
    for occurrence in recurring_events_of(vcal).between(window_start, window_end + timedelta(days=1)):
        day, _ = _split_dt(occurrence.get('DTSTART').dt)
        uid = str(occurrence.get('UID'))
        events.append(_event_from_vevent(occurrence, f"{uid}-{format_date(day)}"))
    return events


def from_icalendar(
    ical_text,
    window_start: date,
    window_end: date,
) -> StoredEvents:
    """
    Convert VCALENDAR text into StoredEvents.

    Args:
        ical_text: Raw iCalendar text (str or bytes)
        window_start: First date for which unsupported recurrences are expanded
        window_end: Last date (inclusive) for that expansion
    """
    cal = ICalCalendar.from_ical(ical_text)

    vevents = [c for c in cal.walk('VEVENT') if c.get('DTSTART') is not None]
    overridden = {str(c.get('UID')) for c in vevents if c.get('RECURRENCE-ID') is not None}

    by_date: dict[str, list[Event]] = {}
    recurring: list[RecurringEvent] = []
    to_expand = []

    for vevent in vevents:
        uid = str(vevent.get('UID') or '')
        if not uid:
            _debug_print("Skipping VEVENT without UID")
            continue

        if vevent.get('RRULE') is None and vevent.get('RECURRENCE-ID') is None:
            event = _event_from_vevent(vevent, uid)
            by_date.setdefault(event.date, []).append(event)
            continue

        if uid not in overridden and vevent.get('RRULE') is not None:
            series = _series_from_vevent(vevent)
            if series is not None:
                recurring.append(series)
                continue

        to_expand.append(vevent)

    if to_expand:
        _debug_print(f"Expanding {len(to_expand)} recurring components in window")
        for event in _expand_in_window(to_expand, window_start, window_end):
            by_date.setdefault(event.date, []).append(event)

    return StoredEvents(
        by_date={key: sort_events(events) for key, events in by_date.items()},
        recurring=recurring,
    )


def import_ics(path: Path, window_start: date, window_end: date) -> StoredEvents:
    return from_icalendar(Path(path).read_bytes(), window_start, window_end)
