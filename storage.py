from __future__ import annotations

import logging
import os
import sqlite3
from calendar import monthrange
from datetime import date, datetime, timedelta
from pathlib import Path

from models import TimeEntry, UserSettings

logger = logging.getLogger(__name__)


def _get_db_path() -> Path:
    """Get database path from environment variable or default location."""
    if env_path := os.environ.get("TIMESHEET_DB"):
        return Path(env_path)
    return Path(__file__).parent / "data" / "timesheet.db"


DB_PATH = _get_db_path()


def get_connection() -> sqlite3.Connection:
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db():
    """Create tables if they don't exist."""
    conn = get_connection()
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS time_entries (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            location TEXT NOT NULL,
            day TEXT NOT NULL,
            start_time TEXT NOT NULL,
            end_time TEXT,
            duration_minutes REAL,
            pause_duration REAL DEFAULT 0,
            driver_time_hours REAL DEFAULT 0,
            passenger_time_hours REAL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_entries_day ON time_entries(day);
    """)
    conn.commit()
    conn.close()
    logger.debug("Initialised database at %s", DB_PATH)


def _parse_datetime(val: str | None) -> datetime | None:
    if not val:
        return None
    return datetime.fromisoformat(val)


def _format_datetime(dt: datetime | None) -> str | None:
    if not dt:
        return None
    return dt.isoformat(timespec="seconds")


def _row_to_entry(row: sqlite3.Row) -> TimeEntry:
    return TimeEntry(
        id=row["id"],
        user_id=row["user_id"],
        location=row["location"],
        start_time=_parse_datetime(row["start_time"]),
        end_time=_parse_datetime(row["end_time"]),
        duration_minutes=row["duration_minutes"],
        pause_duration=row["pause_duration"] or 0,
        driver_time_hours=row["driver_time_hours"] or 0,
        passenger_time_hours=row["passenger_time_hours"] or 0,
    )


def save_entry(entry: TimeEntry):
    """Insert or update a time entry."""
    conn = get_connection()
    conn.execute("""
        INSERT OR REPLACE INTO time_entries
        (id, user_id, location, day, start_time, end_time, duration_minutes,
         pause_duration, driver_time_hours, passenger_time_hours)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    """, (
        entry.id,
        entry.user_id,
        entry.location,
        entry.day.isoformat(),
        _format_datetime(entry.start_time),
        _format_datetime(entry.end_time),
        entry.duration_minutes,
        entry.pause_duration,
        entry.driver_time_hours,
        entry.passenger_time_hours,
    ))
    conn.commit()
    conn.close()


def get_entry(entry_id: str) -> TimeEntry | None:
    """Get a single entry by id."""
    conn = get_connection()
    row = conn.execute(
        "SELECT * FROM time_entries WHERE id = ?",
        (entry_id,)
    ).fetchone()
    conn.close()

    if row:
        return _row_to_entry(row)
    return None


def delete_entry(entry_id: str):
    conn = get_connection()
    conn.execute("DELETE FROM time_entries WHERE id = ?", (entry_id,))
    conn.commit()
    conn.close()


def get_entries_range(start: date, end: date) -> list[TimeEntry]:
    """Get entries between two days (inclusive)."""
    conn = get_connection()
    rows = conn.execute(
        "SELECT * FROM time_entries WHERE day >= ? AND day <= ? ORDER BY start_time, id",
        (start.isoformat(), end.isoformat())
    ).fetchall()
    conn.close()

    return [_row_to_entry(row) for row in rows]


def get_month_entries(year: int, month: int) -> list[TimeEntry]:
    """Get all entries for a calendar month."""
    start = date(year, month, 1)
    end = date(year, month, monthrange(year, month)[1])
    return get_entries_range(start, end)


def get_weeks_entries(year: int, month: int) -> list[TimeEntry]:
    """Entries of the month plus the days its edge weeks borrow."""
    start = date(year, month, 1)
    end = date(year, month, monthrange(year, month)[1])
    return get_entries_range(
        start - timedelta(days=start.weekday()),
        end + timedelta(days=6 - end.weekday()),
    )


def entries_for_day(day: date) -> list[TimeEntry]:
    return get_entries_range(day, day)


_FLOAT_FIELDS = (
    "default_work_hours",
    "driver_compensation_percent",
    "passenger_compensation_percent",
)
_TEXT_FIELDS = ("default_start_time", "default_end_time", "display_name", "company_name")


def get_settings() -> UserSettings:
    """Load user settings from database."""
    conn = get_connection()
    rows = conn.execute("SELECT key, value FROM settings").fetchall()
    conn.close()

    settings = UserSettings()
    for row in rows:
        key, value = row["key"], row["value"]
        if key in _FLOAT_FIELDS:
            setattr(settings, key, float(value))
        elif key in _TEXT_FIELDS:
            setattr(settings, key, value)
        elif key == "expected_monthly_hours":
            settings.expected_monthly_hours = float(value) if value else None

    return settings


def save_settings(settings: UserSettings):
    """Save user settings to database."""
    conn = get_connection()
    for key in _FLOAT_FIELDS + _TEXT_FIELDS:
        conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                     (key, str(getattr(settings, key))))
    expected = settings.expected_monthly_hours
    conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                 ("expected_monthly_hours", "" if expected is None else str(expected)))
    conn.commit()
    conn.close()
