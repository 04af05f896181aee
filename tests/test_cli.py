"""Tests for the command line entry point."""

import json

import pytest

import monthly_planner
from planner.event_storage import JsonEventStorage

CONFIG_TOML = """
[General]
storage_file = "{storage}"

[Holidays]
include_defaults = false
2026-03-19 = "Company day off"
"""

DAILY_ICS = "\r\n".join([
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "PRODID:-//Test//EN",
    "BEGIN:VEVENT",
    "UID:walk",
    "SUMMARY:Walk",
    "DTSTART:20260316T070000",
    "DTEND:20260316T073000",
    "RRULE:FREQ=DAILY;COUNT=2",
    "END:VEVENT",
    "END:VCALENDAR",
]) + "\r\n"


@pytest.fixture
def storage_file(tmp_path):
    return tmp_path / "events.json"


@pytest.fixture
def config_file(tmp_path, storage_file):
    path = tmp_path / "config.toml"
    path.write_text(CONFIG_TOML.format(storage=storage_file), encoding="utf-8")
    return path


@pytest.fixture
def populated(storage_file, sample_store):
    JsonEventStorage(storage_file).save(sample_store)
    return storage_file


def run(config_file, *args):
    return monthly_planner.main(["--config", str(config_file), "--today", "2026-03-16", *args])


def test_month_agenda(config_file, populated, capsys):
    assert run(config_file, "--month", "2026-03") == 0
    out = capsys.readouterr().out
    assert "March 2026" in out
    assert "Mon 2026-03-16  (today)" in out
    assert "09:00-09:30  Standup (work)  [Every Monday, Wednesday]" in out
    assert "14:00-15:00  Dentist (personal)" in out
    assert "Pay rent (finances)  [Monthly on day 15]" in out
    assert "Thu 2026-03-19  * Company day off" in out
    # Padding days of the next month are not listed
    assert "2026-04-01" not in out


def test_disable_category(config_file, populated, capsys):
    assert run(config_file, "--month", "2026-03", "--disable", "work") == 0
    out = capsys.readouterr().out
    assert "Standup" not in out
    assert "Dentist" in out


def test_week_agenda(config_file, populated, capsys):
    assert run(config_file, "--week", "2026-03-18") == 0
    out = capsys.readouterr().out
    assert "Week of 2026-03-16" in out
    assert "Wed 2026-03-18" in out
    assert "all day      Groceries (home)" in out


def test_export(config_file, populated, tmp_path, capsys):
    out_path = tmp_path / "out.ics"
    assert run(config_file, "--export-ics", str(out_path)) == 0
    assert out_path.read_bytes().startswith(b"BEGIN:VCALENDAR")
    assert "Exported to" in capsys.readouterr().out


def test_import_merges_once(config_file, storage_file, tmp_path, capsys):
    ics_path = tmp_path / "in.ics"
    ics_path.write_text(DAILY_ICS, encoding="utf-8")

    assert run(config_file, "--month", "2026-03", "--import-ics", str(ics_path)) == 0
    assert "Imported 2 new entries" in capsys.readouterr().out

    data = json.loads(storage_file.read_text(encoding="utf-8"))
    assert sorted(data["byDate"]) == ["2026-03-16", "2026-03-17"]

    assert run(config_file, "--month", "2026-03", "--import-ics", str(ics_path)) == 0
    assert "Imported 0 new entries" in capsys.readouterr().out


def test_missing_config(tmp_path, capsys):
    assert monthly_planner.main(["--config", str(tmp_path / "missing.toml")]) == 1
    out = capsys.readouterr().out
    assert "Configuration file not found" in out
    assert "[General]" in out


@pytest.mark.parametrize("args", [
    ["--month", "2026-13"],
    ["--month", "March"],
    ["--week", "2026-02-30"],
])
def test_invalid_dates(config_file, args, capsys):
    assert run(config_file, *args) == 1
    assert "invalid date argument" in capsys.readouterr().out


def test_debug_prints_config_summary(config_file, populated, storage_file, capsys):
    assert run(config_file, "--debug", "--month", "2026-03") == 0
    assert f"Storage file: {storage_file}" in capsys.readouterr().out


def test_import_missing_file(config_file, tmp_path, capsys):
    assert run(config_file, "--import-ics", str(tmp_path / "nope.ics")) == 1
    assert "Error: cannot import" in capsys.readouterr().out


def test_import_not_a_calendar(config_file, storage_file, tmp_path, capsys):
    bad = tmp_path / "bad.ics"
    bad.write_text("not a calendar", encoding="utf-8")
    assert run(config_file, "--import-ics", str(bad)) == 1
    assert "Error: cannot import" in capsys.readouterr().out
    assert not storage_file.exists()
