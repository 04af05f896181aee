#!/usr/bin/env python3
"""
Monthly Planner - a personal event planner with recurring events.

This is the main entry point. It prints the month or week agenda from the
event store and can export/import the store as iCalendar.
"""

import sys
import argparse
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from planner.config import Config
from planner.date_utils import format_date, parse_iso_date, shift_month
from planner.event_model import CalendarEntry
from planner.event_storage import create_storage_backend
from planner.holidays import HolidayCalendar
from planner.ics import export_ics, import_ics
from planner.operations import merge_stores
from planner.recurrence import describe_rule
from planner.views import month_view, week_view


EXAMPLE_CONFIG = """
[General]
storage_file = ~/.local/share/monthly-planner/events.json

[Layout]
day_start_hour = 6
day_end_hour = 22
max_columns = 3
drag_snap_minutes = 15

[Categories]
names = ["work", "projects", "personal", "home", "finances", "other"]

[Holidays]
include_defaults = true
2026-03-19 = "Company day off"
"""


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Monthly Planner - a personal event planner with recurring events"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "--month",
        metavar="YYYY-MM",
        help="Show the agenda of a month (default: current month)"
    )
    view.add_argument(
        "--week",
        metavar="YYYY-MM-DD",
        help="Show the week containing this date"
    )
    parser.add_argument(
        "--today",
        metavar="YYYY-MM-DD",
        help="Reference date used as 'today' (default: system date)"
    )
    parser.add_argument(
        "--disable",
        action="append",
        default=[],
        metavar="CATEGORY",
        help="Hide a category (may be repeated)"
    )
    parser.add_argument(
        "--export-ics",
        type=Path,
        metavar="PATH",
        help="Write all events and series to an iCalendar file"
    )
    parser.add_argument(
        "--import-ics",
        type=Path,
        metavar="PATH",
        help="Add events from an iCalendar file to the store"
    )
    return parser.parse_args(argv)


def load_config(args) -> Config:
    """Explicit config paths must exist; a missing default file means defaults."""
    if args.config is None and not Config.get_default_config_path().exists():
        return Config.default()
    return Config.load(args.config)


def _format_entry(entry: CalendarEntry, series_rules: dict) -> str:
    if entry.start_time and entry.end_time:
        when = f"{entry.start_time}-{entry.end_time}"
    elif entry.start_time:
        when = f"{entry.start_time}      "
    else:
        when = "all day    "
    line = f"  {when}  {entry.name} ({entry.category})"
    if entry.series_id and entry.series_id in series_rules:
        line += f"  [{series_rules[entry.series_id]}]"
    elif getattr(entry, "completed", False):
        line += "  [done]"
    return line


def print_agenda(cells, config: Config, series_rules: dict, only_month: Optional[int] = None) -> None:
    for cell in cells:
        if only_month is not None and not cell.is_current_month:
            continue
        if not cell.events and not cell.holiday and not cell.is_today:
            continue
        day_name = config.localization.get_day_name(cell.date.weekday())
        header = f"{day_name} {cell.key}"
        if cell.is_today:
            header += "  (today)"
        if cell.holiday:
            header += f"  * {cell.holiday}"
        print(header)
        for entry in cell.events:
            print(_format_entry(entry, series_rules))


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = load_config(args)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("\nPlease create a configuration file at one of these locations:")
        print(f"  - {Config.get_default_config_path()}")
        print("\nExample configuration:")
        print(EXAMPLE_CONFIG)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error loading configuration: {e}")
        return 1

    if args.debug:
        print(f"Loaded configuration from: {args.config or Config.get_default_config_path()}")
        print(f"  Storage file: {config.storage_file}")
        print(f"  Categories: {', '.join(config.categories.names)}")

    try:
        today = parse_iso_date(args.today) if args.today else date.today()
        if args.week:
            anchor = parse_iso_date(args.week)
        if args.month:
            year, month = (int(part) for part in args.month.split("-"))
        else:
            year, month = today.year, today.month
        date(year, month, 1)
    except ValueError as e:
        print(f"Error: invalid date argument: {e}")
        return 1

    storage = create_storage_backend(config.storage_file)
    stored = storage.load()

    if args.import_ics:
        # Unsupported recurrences are expanded over the shown month and the next one
        window_start = date(year, month, 1)
        next_year, next_month = shift_month(year, month, 2)
        window_end = date(next_year, next_month, 1) - timedelta(days=1)
        try:
            imported = import_ics(args.import_ics, window_start, window_end)
        except (OSError, ValueError) as e:
            print(f"Error: cannot import {args.import_ics}: {e}")
            return 1
        stored, added = merge_stores(stored, imported)
        storage.save(stored)
        print(f"Imported {added} new entries from {args.import_ics}")

    if args.export_ics:
        try:
            export_ics(stored, args.export_ics)
        except OSError as e:
            print(f"Error: cannot export to {args.export_ics}: {e}")
            return 1
        print(f"Exported to {args.export_ics}")
        return 0

    holidays = HolidayCalendar.from_config(config.holidays)
    series_rules = {s.id: describe_rule(s.recurrence) for s in stored.recurring}

    if args.week:
        cells = week_view(
            stored, anchor, today,
            disabled_categories=args.disable,
            holidays=holidays,
            layout=config.layout,
        )
        print(f"Week of {format_date(cells[0].date)}")
        print_agenda(cells, config, series_rules)
    else:
        cells = month_view(
            stored, year, month, today,
            disabled_categories=args.disable,
            holidays=holidays,
        )
        print(f"{config.localization.get_month_name(month)} {year}")
        print_agenda(cells, config, series_rules, only_month=month)

    return 0


if __name__ == "__main__":
    sys.exit(main())
