"""Weekly and monthly totals of compensated time.

Driver time is compensated inline for every entry. Passenger time is left
out of the compensated totals and converted once per month instead, so it
can be reported as its own "after conversion" figure.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable

from compensation import compensated_minutes
from models import MonthlySummary, TimeEntry, UserSettings
from overtime import expected_monthly_hours, overtime, target_percentage
from utils import EntriesForDay, Week, same_month, weeks_for_month

DEFAULT_PASSENGER_PERCENT = 90


def _entry_order(entry: TimeEntry):
    return (entry.start_time, entry.id or "")


def day_entries(entries_for_day: EntriesForDay, day: date) -> list[TimeEntry]:
    """Entries of one day in chronological order, whatever the store returns."""
    return sorted(entries_for_day(day), key=_entry_order)


def driver_percent(settings: UserSettings) -> float:
    percent = settings.driver_compensation_percent
    return 100 if percent is None else percent


def week_compensated_minutes(
    week: Week,
    entries_for_day: EntriesForDay,
    settings: UserSettings | None,
    month_filter: date | None = None,
) -> float:
    if settings is None:
        return 0

    percent = driver_percent(settings)
    total = 0.0
    for day in week:
        if month_filter is not None and not same_month(day, month_filter):
            continue
        for entry in day_entries(entries_for_day, day):
            total += compensated_minutes(entry, percent, 0)
    return total


def week_compensated_hours(
    week: Week,
    entries_for_day: EntriesForDay,
    settings: UserSettings | None,
    month_filter: date | None = None,
) -> float:
    """Compensated hours of a week, optionally limited to one month's days.

    Returns 0 while settings are unavailable.
    """
    return week_compensated_minutes(week, entries_for_day, settings, month_filter) / 60


def month_compensated_hours(
    weeks: Iterable[Week],
    entries_for_day: EntriesForDay,
    settings: UserSettings | None,
    month: date,
) -> float:
    return sum(
        (week_compensated_hours(week, entries_for_day, settings, month) for week in weeks),
        0.0,
    )


def week_passenger_hours(
    week: Week,
    entries_for_day: EntriesForDay,
    month_filter: date | None = None,
) -> float:
    total = 0.0
    for day in week:
        if month_filter is not None and not same_month(day, month_filter):
            continue
        for entry in day_entries(entries_for_day, day):
            total += entry.passenger_time_hours or 0
    return total


def month_passenger_hours_raw(weeks: Iterable[Week], entries_for_day: EntriesForDay) -> float:
    """Unconverted passenger hours of every day in every week.

    No month filtering happens here; pass month-scoped weeks or entries.
    """
    return sum((week_passenger_hours(week, entries_for_day) for week in weeks), 0.0)


def converted_passenger_hours(raw_hours: float, settings: UserSettings | None) -> float:
    percent = DEFAULT_PASSENGER_PERCENT
    if settings is not None and settings.passenger_compensation_percent is not None:
        percent = settings.passenger_compensation_percent
    return raw_hours * percent / 100


def summarize_month(
    month: date,
    entries_for_day: EntriesForDay,
    settings: UserSettings | None,
) -> MonthlySummary:
    if settings is None:
        return MonthlySummary()

    weeks = weeks_for_month(month)
    compensated = month_compensated_hours(weeks, entries_for_day, settings, month)
    passenger_raw = sum(
        (week_passenger_hours(week, entries_for_day, month) for week in weeks),
        0.0,
    )
    passenger_converted = converted_passenger_hours(passenger_raw, settings)
    total = compensated + passenger_converted
    expected = expected_monthly_hours(settings)

    return MonthlySummary(
        compensated_hours=compensated,
        passenger_hours_raw=passenger_raw,
        passenger_hours_converted=passenger_converted,
        total_hours=total,
        expected_hours=expected,
        overtime=overtime(total, expected),
        percentage=target_percentage(total, expected),
    )
