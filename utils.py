"""Utility functions for time parsing, week grids and hour formatting."""

from __future__ import annotations

import math
import re
from calendar import monthrange
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Callable, Iterable

from models import TimeEntry

Week = list[date]
EntriesForDay = Callable[[date], list[TimeEntry]]

_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{2})$")

DAY_LABELS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


class InvalidTimeFormat(ValueError):
    """Raised when a "HH:mm" string cannot be parsed."""

    def __init__(self, text: str):
        super().__init__(f"Invalid time format: {text!r}")
        self.text = text


def parse_time_string(text: str, base_date: date | None = None) -> datetime:
    """Parse "HH:mm" into a datetime on the calendar day of base_date.

    The result is built from year/month/day components, so the host
    timezone never shifts the day or the hour.
    """
    match = _TIME_RE.match(text.strip()) if isinstance(text, str) else None
    if not match:
        raise InvalidTimeFormat(text)

    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise InvalidTimeFormat(text)

    base = base_date or date.today()
    return datetime(base.year, base.month, base.day, hour, minute)


def get_week_start(d: date) -> date:
    """Get the Monday that starts the week containing date d."""
    return d - timedelta(days=d.weekday())


def weeks_for_month(d: date) -> list[Week]:
    """Monday-first 7-day weeks covering every day of d's month.

    Edge weeks keep their days from the neighbouring months.
    """
    first_day = date(d.year, d.month, 1)
    last_day = date(d.year, d.month, monthrange(d.year, d.month)[1])

    weeks = []
    week_start = get_week_start(first_day)

    while week_start <= last_day:
        weeks.append([week_start + timedelta(days=i) for i in range(7)])
        week_start = week_start + timedelta(days=7)

    return weeks


def same_month(d: date, month: date) -> bool:
    return d.year == month.year and d.month == month.month


def entries_for_day_lookup(entries: Iterable[TimeEntry]) -> EntriesForDay:
    """Build an entries_for_day(day) callable over an in-memory list."""
    by_day: dict[date, list[TimeEntry]] = defaultdict(list)
    for entry in entries:
        by_day[entry.day].append(entry)

    def entries_for_day(day: date) -> list[TimeEntry]:
        return list(by_day.get(day, []))

    return entries_for_day


def format_duration(seconds: float) -> str:
    """Format seconds as HH:mm:ss."""
    if seconds is None or math.isnan(seconds) or seconds < 0:
        return "00:00:00"
    seconds = int(seconds)
    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_hours(hours: float | None) -> str:
    """Two-decimal hour figure shared by every timesheet consumer."""
    if not hours:
        return "0.00"
    return f"{hours:.2f}"


def format_decimal_hours(total_minutes: float | None) -> str:
    if not total_minutes:
        return "0.00"
    return format_hours(total_minutes / 60)


def time_string_to_minutes(time_str: str | None) -> int:
    """Lenient "HH:mm" to minutes; anything unparseable counts as 0."""
    if not time_str:
        return 0
    parts = time_str.split(":")
    if len(parts) != 2:
        return 0
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return 0
    return hours * 60 + minutes
