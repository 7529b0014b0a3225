"""Shared fixtures for tests."""

from __future__ import annotations

import os
import tempfile
from datetime import date, datetime
from pathlib import Path
from typing import Generator

import pytest

# Set up test database before importing storage
_test_db_fd, _test_db_path = tempfile.mkstemp(suffix=".db")
os.environ["TIMESHEET_DB"] = _test_db_path


@pytest.fixture(scope="session", autouse=True)
def setup_test_db() -> Generator[Path, None, None]:
    """Set up a test database for the entire test session."""
    import storage

    storage.DB_PATH = Path(_test_db_path)
    storage.init_db()

    yield Path(_test_db_path)

    os.close(_test_db_fd)
    os.unlink(_test_db_path)


@pytest.fixture
def make_entry():
    """Factory for TimeEntry objects on a given day with "HH:MM" times."""
    from models import TimeEntry

    counter = {"n": 0}

    def _make(
        day: date,
        start: str = "09:00",
        end: str | None = "17:00",
        location: str = "Office",
        **kwargs,
    ) -> TimeEntry:
        counter["n"] += 1
        sh, sm = (int(p) for p in start.split(":"))
        start_time = datetime(day.year, day.month, day.day, sh, sm)
        end_time = None
        if end is not None:
            eh, em = (int(p) for p in end.split(":"))
            end_time = datetime(day.year, day.month, day.day, eh, em)
        return TimeEntry(
            id=kwargs.pop("id", f"e{counter['n']}"),
            user_id=kwargs.pop("user_id", "u1"),
            location=location,
            start_time=start_time,
            end_time=end_time,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_settings():
    """Create sample UserSettings for testing."""
    from models import UserSettings

    return UserSettings(
        default_work_hours=8,
        driver_compensation_percent=100,
        passenger_compensation_percent=80,
    )


@pytest.fixture
def march_entries(make_entry):
    """A small month of entries around the March 2026 DST change."""
    return [
        # Fri 27 Feb, borrowed by the first week of March
        make_entry(date(2026, 2, 27), "09:00", "17:00"),
        # Mon 2 Mar: 8h - 30m pause + 0.5h driver = 8h
        make_entry(date(2026, 3, 2), "09:00", "17:00", pause_duration=30, driver_time_hours=0.5),
        # Tue 3 Mar: duration-only 2.5h
        make_entry(date(2026, 3, 3), "12:00", None, duration_minutes=150, pause_duration=45),
        # Wed 4 Mar: sick leave, pause ignored
        make_entry(date(2026, 3, 4), "09:00", "17:00", location="SICK_LEAVE", pause_duration=60),
        # Mon 30 Mar (after DST change): 6h with 2h passenger
        make_entry(date(2026, 3, 30), "08:00", "14:00", passenger_time_hours=2),
        # Wed 1 Apr, borrowed by the last week of March
        make_entry(date(2026, 4, 1), "09:00", "12:00"),
    ]
