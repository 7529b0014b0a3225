"""Autocomplete suggestions ranked over the entry history."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Hashable, Iterable

from models import SPECIAL_LOCATION_KEYS, PauseSuggestion, TimeEntry
from utils import InvalidTimeFormat, parse_time_string

LONG_ACTIVITY_MINUTES = 9 * 60
MEDIUM_ACTIVITY_MINUTES = 6 * 60


def _rank(
    items: Iterable[tuple[Hashable, datetime]],
    recent_first: bool = False,
) -> list:
    """Distinct keys by count desc then last use desc.

    With recent_first, count is ignored. Remaining ties keep first-seen
    order, so equal input always yields equal output.
    """
    stats: dict = {}
    for key, used_at in items:
        if key in stats:
            count, last_used, seen = stats[key]
            stats[key] = (count + 1, max(last_used, used_at), seen)
        else:
            stats[key] = (1, used_at, len(stats))

    ordered = sorted(stats.items(), key=lambda kv: kv[1][2])
    ordered.sort(key=lambda kv: kv[1][1], reverse=True)
    if not recent_first:
        ordered.sort(key=lambda kv: kv[1][0], reverse=True)
    return [key for key, _ in ordered]


def suggest_locations(
    entries: Iterable[TimeEntry],
    limit: int = 5,
    recent_first: bool = False,
    filter_text: str | None = None,
) -> list[str]:
    ranked = _rank(
        ((e.location, e.start_time) for e in entries if e.location),
        recent_first=recent_first,
    )
    if filter_text:
        needle = filter_text.lower()
        ranked = [loc for loc in ranked if needle in loc.lower()]
    return ranked[:limit]


def _suggest_times(
    entries: Iterable[TimeEntry],
    pick: Callable[[TimeEntry], datetime | None],
    location: str | None,
    day_of_week: int | None,
    limit: int,
) -> list[str]:
    def qualifies(entry: TimeEntry) -> bool:
        moment = pick(entry)
        if moment is None:
            return False
        if location and entry.location != location:
            return False
        # 0 = Sunday .. 6 = Saturday
        if day_of_week is not None and moment.isoweekday() % 7 != day_of_week:
            return False
        return True

    ranked = _rank(
        (pick(e).strftime("%H:%M"), pick(e)) for e in entries if qualifies(e)
    )
    return ranked[:limit]


def suggest_start_times(
    entries: Iterable[TimeEntry],
    location: str | None = None,
    day_of_week: int | None = None,
    limit: int = 3,
) -> list[str]:
    """Most used "HH:mm" start times of interval entries."""
    return _suggest_times(
        entries,
        lambda e: None if e.is_duration_only else e.start_time,
        location,
        day_of_week,
        limit,
    )


def suggest_end_times(
    entries: Iterable[TimeEntry],
    location: str | None = None,
    day_of_week: int | None = None,
    limit: int = 3,
) -> list[str]:
    """Most used "HH:mm" end times, matched on the end time's weekday."""
    return _suggest_times(entries, lambda e: e.end_time, location, day_of_week, limit)


def _suggest_hours(
    entries: Iterable[TimeEntry],
    pick: Callable[[TimeEntry], float],
    location: str | None,
    limit: int,
) -> list[float]:
    ranked = _rank(
        (pick(e), e.start_time)
        for e in entries
        if (pick(e) or 0) > 0 and (not location or e.location == location)
    )
    return ranked[:limit]


def suggest_driver_times(
    entries: Iterable[TimeEntry],
    location: str | None = None,
    limit: int = 3,
) -> list[float]:
    return _suggest_hours(entries, lambda e: e.driver_time_hours, location, limit)


def suggest_passenger_times(
    entries: Iterable[TimeEntry],
    location: str | None = None,
    limit: int = 3,
) -> list[float]:
    return _suggest_hours(entries, lambda e: e.passenger_time_hours, location, limit)


def suggest_pause(
    start: str | datetime,
    end: str | datetime,
    driver_time_hours: float = 0,
    passenger_time_hours: float = 0,
    location: str | None = None,
) -> PauseSuggestion | None:
    """Recommended pause for a prospective entry, or None.

    Only the threshold matters: over 9 hours of work plus travel gets 45
    minutes, over 6 hours gets 30. Unparseable times give no suggestion.
    """
    if location in SPECIAL_LOCATION_KEYS:
        return None

    try:
        if isinstance(start, str):
            start = parse_time_string(start, end.date() if isinstance(end, datetime) else None)
        if isinstance(end, str):
            end = parse_time_string(end, start.date())
    except InvalidTimeFormat:
        return None

    if end <= start:
        return None

    work_minutes = (end - start).total_seconds() / 60
    travel_minutes = ((driver_time_hours or 0) + (passenger_time_hours or 0)) * 60
    total_activity = work_minutes + travel_minutes

    if total_activity > LONG_ACTIVITY_MINUTES:
        return PauseSuggestion(minutes=45, time_string="00:45", reason="9 hours")
    if total_activity > MEDIUM_ACTIVITY_MINUTES:
        return PauseSuggestion(minutes=30, time_string="00:30", reason="6 hours")
    return None
