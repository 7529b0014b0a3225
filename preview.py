"""Month timesheet preview shared by the terminal view and the exporter."""

from __future__ import annotations

from datetime import date

from rich.table import Table
from rich.text import Text

from aggregation import day_entries, driver_percent, summarize_month, week_compensated_hours
from compensation import compensated_minutes
from models import (
    SPECIAL_LOCATIONS,
    Timesheet,
    TimesheetRow,
    TimesheetWeek,
    TimeEntry,
    UserSettings,
)
from utils import (
    DAY_LABELS,
    EntriesForDay,
    Week,
    format_decimal_hours,
    format_hours,
    same_month,
    weeks_for_month,
)

COLUMNS = [
    "Day",
    "Date",
    "Location",
    "From",
    "To",
    "Pause",
    "Driver",
    "Passenger",
    "Compensated",
]

_LOCATION_LABELS = dict(SPECIAL_LOCATIONS)

SUNDAY = 6


def location_label(location: str) -> str:
    return _LOCATION_LABELS.get(location, location)


def week_has_content(week: Week, entries_for_day: EntriesForDay, month: date) -> bool:
    """A week is shown when it has an in-month working day or entry."""
    for day in week:
        if not same_month(day, month):
            continue
        if day.weekday() != SUNDAY or entries_for_day(day):
            return True
    return False


def _entry_row(day: date, entry: TimeEntry, driver_percent: float) -> TimesheetRow:
    if entry.is_duration_only:
        start = end = ""
    else:
        start = entry.start_time.strftime("%H:%M")
        end = entry.end_time.strftime("%H:%M") if entry.end_time else ""
    # Pause only counts for ordinary interval entries
    pause = 0 if entry.is_special or entry.is_duration_only else entry.pause_duration

    return TimesheetRow(
        day=day,
        day_label=DAY_LABELS[day.weekday()],
        location=location_label(entry.location),
        start=start,
        end=end,
        pause=format_decimal_hours(pause),
        driver=format_hours(entry.driver_time_hours),
        passenger=format_hours(entry.passenger_time_hours),
        compensated=format_decimal_hours(compensated_minutes(entry, driver_percent, 0)),
    )


def build_timesheet(
    month: date,
    entries_for_day: EntriesForDay,
    settings: UserSettings | None,
) -> Timesheet:
    month = date(month.year, month.month, 1)
    timesheet = Timesheet(month=month)
    if settings is None:
        return timesheet

    percent = driver_percent(settings)
    for week in weeks_for_month(month):
        if not week_has_content(week, entries_for_day, month):
            continue

        sheet_week = TimesheetWeek(days=week)
        for day in week:
            if not same_month(day, month):
                continue
            entries = day_entries(entries_for_day, day)
            for entry in entries:
                sheet_week.rows.append(_entry_row(day, entry, percent))
            if not entries and day.weekday() != SUNDAY:
                sheet_week.rows.append(TimesheetRow(day=day, day_label=DAY_LABELS[day.weekday()]))

        sheet_week.total = format_hours(
            week_compensated_hours(week, entries_for_day, settings, month)
        )
        timesheet.weeks.append(sheet_week)

    summary = summarize_month(month, entries_for_day, settings)
    timesheet.summary = summary
    timesheet.total_hours = format_hours(summary.compensated_hours)
    timesheet.total_after_conversion = format_hours(summary.total_hours)
    timesheet.expected_hours = format_hours(summary.expected_hours)
    timesheet.overtime = format_hours(summary.overtime)
    return timesheet


def overtime_text(timesheet: Timesheet) -> Text:
    """Overtime figure, green when ahead of target and red when behind."""
    value = timesheet.summary.overtime
    sign = "+" if value > 0 else ""
    style = "bold green" if value >= 0 else "bold red"
    return Text(f"{sign}{timesheet.overtime}h", style=style)


def render_timesheet(timesheet: Timesheet) -> Table:
    table = Table(title=f"Timesheet {timesheet.month.strftime('%B %Y')}")
    for name in COLUMNS:
        justify = "left" if name in ("Day", "Location") else "right"
        table.add_column(name, justify=justify)

    for week in timesheet.weeks:
        for row in week.rows:
            table.add_row(
                row.day_label,
                row.day.strftime("%d/%m/%Y"),
                row.location,
                row.start,
                row.end,
                row.pause,
                row.driver,
                row.passenger,
                row.compensated,
            )
        table.add_row(*[""] * 7, Text("Total per week", style="bold"), Text(week.total, style="bold"))
        table.add_section()

    table.add_row(*[""] * 7, "Total hours", timesheet.total_hours)
    table.add_row(*[""] * 7, "Total after conversion", timesheet.total_after_conversion)
    table.add_row(*[""] * 7, "Expected hours", timesheet.expected_hours)
    table.add_row(*[""] * 7, "Overtime", overtime_text(timesheet))
    return table
