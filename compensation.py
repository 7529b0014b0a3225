"""Per-entry compensated time."""

from __future__ import annotations

from typing import Iterable

from models import PAID_SPECIAL_LOCATIONS, TIME_OFF_IN_LIEU, TimeEntry


def elapsed_minutes(entry: TimeEntry) -> int:
    """Whole minutes between start and end, truncated toward zero."""
    if entry.end_time is None:
        return 0
    return int((entry.end_time - entry.start_time).total_seconds() / 60)


def compensated_minutes(
    entry: TimeEntry,
    driver_percent: float = 100,
    passenger_percent: float = 100,
) -> float:
    """Payroll minutes for a single entry, never negative.

    Duration-only entries are already compensated time. Interval entries
    subtract the pause and add driver/passenger time at the given
    percentages, except for special locations. An entry with neither an
    end time nor a duration (a running timer) counts as 0.
    """
    if entry.location == TIME_OFF_IN_LIEU:
        return 0

    if entry.duration_minutes is not None:
        return max(entry.duration_minutes, 0)

    if entry.start_time is None or entry.end_time is None:
        return 0

    work = elapsed_minutes(entry)
    if entry.location in PAID_SPECIAL_LOCATIONS:
        return max(work, 0)

    compensated = (
        work
        - (entry.pause_duration or 0)
        + (entry.driver_time_hours or 0) * 60 * driver_percent / 100
        + (entry.passenger_time_hours or 0) * 60 * passenger_percent / 100
    )
    return max(compensated, 0)


def total_compensated_minutes(
    entries: Iterable[TimeEntry],
    driver_percent: float = 100,
    passenger_percent: float = 100,
) -> float:
    return sum(
        (compensated_minutes(e, driver_percent, passenger_percent) for e in entries),
        0,
    )
