from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

SICK_LEAVE = "SICK_LEAVE"
PTO = "PTO"
BANK_HOLIDAY = "BANK_HOLIDAY"
TIME_OFF_IN_LIEU = "TIME_OFF_IN_LIEU"

SPECIAL_LOCATIONS = [
    (SICK_LEAVE, "Sick Leave"),
    (PTO, "PTO"),
    (BANK_HOLIDAY, "Bank Holiday"),
    (TIME_OFF_IN_LIEU, "Time Off in Lieu"),
]

SPECIAL_LOCATION_KEYS = frozenset(code for code, _ in SPECIAL_LOCATIONS)

# Credited as plain elapsed time, no pause or travel adjustments.
PAID_SPECIAL_LOCATIONS = frozenset({SICK_LEAVE, PTO, BANK_HOLIDAY})

SPECIAL_ENTRY_START = time(9, 0)


@dataclass
class TimeEntry:
    id: str
    user_id: str
    location: str
    start_time: datetime
    end_time: datetime | None = None
    duration_minutes: float | None = None
    pause_duration: float = 0
    driver_time_hours: float = 0
    passenger_time_hours: float = 0

    @property
    def is_duration_only(self) -> bool:
        return self.duration_minutes is not None

    @property
    def is_special(self) -> bool:
        return self.location in SPECIAL_LOCATION_KEYS

    @property
    def day(self) -> date:
        """Calendar day the entry belongs to."""
        return self.start_time.date()


@dataclass
class UserSettings:
    default_work_hours: float = 8
    default_start_time: str = "09:00"
    default_end_time: str = "17:00"
    driver_compensation_percent: float = 100
    passenger_compensation_percent: float = 90
    expected_monthly_hours: float | None = None
    display_name: str = ""
    company_name: str = ""


@dataclass
class TeamSettings:
    enable_compensation_split: bool = True
    default_driver_compensation_percent: float | None = None
    default_passenger_compensation_percent: float | None = None
    allow_members_to_override_compensation: bool = True
    allow_members_to_override_work_hours: bool = True
    default_work_hours: float | None = None
    expected_monthly_hours: float | None = None
    company_name: str = ""


@dataclass
class MonthlySummary:
    compensated_hours: float = 0.0
    passenger_hours_raw: float = 0.0
    passenger_hours_converted: float = 0.0
    total_hours: float = 0.0
    expected_hours: float = 0.0
    overtime: float = 0.0
    percentage: float = 0.0


@dataclass
class PauseSuggestion:
    minutes: int
    time_string: str
    reason: str


@dataclass
class TimesheetRow:
    day: date
    day_label: str
    location: str = ""
    start: str = ""
    end: str = ""
    pause: str = ""
    driver: str = ""
    passenger: str = ""
    compensated: str = ""


@dataclass
class TimesheetWeek:
    days: list[date]
    rows: list[TimesheetRow] = field(default_factory=list)
    total: str = "0.00"


@dataclass
class Timesheet:
    month: date
    weeks: list[TimesheetWeek] = field(default_factory=list)
    summary: MonthlySummary = field(default_factory=MonthlySummary)
    total_hours: str = "0.00"
    total_after_conversion: str = "0.00"
    expected_hours: str = "0.00"
    overtime: str = "0.00"


def build_special_entry(
    location: str,
    day: date,
    settings: UserSettings,
    entry_id: str = "",
    user_id: str = "",
) -> TimeEntry:
    """Create a full-day special entry starting at 09:00.

    Time off in lieu gets a zero-length interval; the other special kinds
    last ``settings.default_work_hours``.
    """
    if location not in SPECIAL_LOCATION_KEYS:
        raise ValueError(f"Not a special location: {location!r}")

    hours = 0 if location == TIME_OFF_IN_LIEU else settings.default_work_hours
    start = datetime.combine(day, SPECIAL_ENTRY_START)
    return TimeEntry(
        id=entry_id,
        user_id=user_id,
        location=location,
        start_time=start,
        end_time=start + timedelta(minutes=hours * 60),
    )
