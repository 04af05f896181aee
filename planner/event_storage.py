"""
Persistent Event Storage for Monthly Planner.

Abstract base class and a JSON implementation for storing one-off events
and recurring series on disk.

Older data files are migrated on load:
- a bare {date: [events]} mapping (no "byDate"/"recurring" keys)
- events with a single "time" field instead of "startTime"/"endTime"
Entries that cannot be parsed are skipped and reported on stderr.
"""

import json
import os
import sys
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from .event_model import Event, RecurringEvent, StoredEvents
from .ordering import sort_events


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] STORAGE: {msg}", file=sys.stderr)


def _migrate_event_dict(data: dict) -> dict:
    """Rename the legacy "time" field to "startTime"."""
    if "time" in data and "startTime" not in data:
        data = dict(data)
        data["startTime"] = data.pop("time")
    return data


def stored_events_from_dict(data: dict) -> StoredEvents:
    """
    Build StoredEvents from the decoded JSON document.

    Malformed entries are skipped. Events are filed under their own date,
    whatever key they were found under, so the by-date invariant holds
    even for hand-edited files.
    """
    if not isinstance(data, dict):
        _debug_print(f"Unexpected document type {type(data).__name__}, starting empty")
        return StoredEvents()

    if "byDate" in data or "recurring" in data:
        raw_by_date = data.get("byDate") or {}
        raw_recurring = data.get("recurring") or []
    else:
        _debug_print("Migrating legacy date-keyed event file")
        raw_by_date = data
        raw_recurring = []

    by_date: dict[str, list[Event]] = {}
    for key, raw_events in raw_by_date.items():
        if not isinstance(raw_events, list):
            _debug_print(f"Skipping date {key!r}: expected a list")
            continue
        for raw in raw_events:
            try:
                raw = {"date": key, **_migrate_event_dict(raw)}
                event = Event.from_dict(raw)
            except (ValueError, TypeError, AttributeError) as e:
                _debug_print(f"Error loading event under {key}: {e}")
                continue
            by_date.setdefault(event.date, []).append(event)

    recurring: list[RecurringEvent] = []
    for raw in raw_recurring:
        try:
            recurring.append(RecurringEvent.from_dict(raw))
        except (ValueError, TypeError, AttributeError) as e:
            _debug_print(f"Error loading recurring event: {e}")

    return StoredEvents(
        by_date={key: sort_events(events) for key, events in by_date.items()},
        recurring=recurring,
    )


class EventStorageBackend(ABC):
    """
    Abstract base class for event storage backends.

    Implementations must handle persistence (JSON, SQLite, etc).
    """

    @abstractmethod
    def load(self) -> StoredEvents:
        """Load all events and series."""
        pass

    @abstractmethod
    def save(self, stored: StoredEvents) -> None:
        """Replace the stored events and series."""
        pass


class JsonEventStorage(EventStorageBackend):
    """
    JSON file-based event storage.

    Structure:
    {"updated": ..., "byDate": {date: [event, ...]}, "recurring": [series, ...]}
    """

    def __init__(self, storage_file: Path):
        self.storage_file = Path(storage_file)
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)

        _debug_print(f"Initialized JSON storage at {self.storage_file}")

    def load(self) -> StoredEvents:
        """Load all events; a missing or unreadable file yields an empty store."""
        if not self.storage_file.exists():
            return StoredEvents()

        try:
            with open(self.storage_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            _debug_print(f"Error loading events from {self.storage_file}: {e}")
            return StoredEvents()

        stored = stored_events_from_dict(data)
        _debug_print(
            f"Loaded {stored.event_count} events and {len(stored.recurring)} series"
        )
        return stored

    def save(self, stored: StoredEvents) -> None:
        """Write the full store, replacing the file atomically."""
        data = {"updated": datetime.now().isoformat(), **stored.to_dict()}

        tmp_path = self.storage_file.with_suffix(self.storage_file.suffix + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.storage_file)

        _debug_print(
            f"Saved {stored.event_count} events and {len(stored.recurring)} series"
        )


def get_default_storage_path() -> Path:
    """Get the default storage file respecting XDG."""
    xdg_data = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(xdg_data) / 'monthly-planner' / 'events.json'


def create_storage_backend(storage_file: Optional[Path] = None) -> EventStorageBackend:
    """Factory function to create a storage backend."""
    if storage_file is None:
        storage_file = get_default_storage_path()

    return JsonEventStorage(storage_file)
