"""Expected monthly hours and overtime."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from models import UserSettings

WORKING_DAYS_PER_YEAR = 260
MONTHS_PER_YEAR = 12


def expected_monthly_hours(settings: UserSettings | None) -> float:
    """Monthly target: the explicit figure, else derived from the work day.

    The derived figure is rounded half-up to a whole hour.
    """
    if settings is None:
        return 0
    if settings.expected_monthly_hours is not None:
        return settings.expected_monthly_hours

    derived = settings.default_work_hours * WORKING_DAYS_PER_YEAR / MONTHS_PER_YEAR
    return int(Decimal(str(derived)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def overtime(actual_hours: float, expected_hours: float) -> float:
    """Positive when ahead of target, negative when behind."""
    return round(actual_hours - expected_hours, 2)


def target_percentage(actual_hours: float, expected_hours: float) -> float:
    if expected_hours <= 0:
        return 0.0
    return actual_hours / expected_hours * 100
