"""Merge personal settings with team defaults into effective settings."""

from __future__ import annotations

from dataclasses import replace
from typing import Collection

from models import TeamSettings, UserSettings


def resolve_effective_settings(
    user: UserSettings,
    team: TeamSettings | None = None,
    user_overrides: Collection[str] = frozenset(),
) -> UserSettings:
    """Return the settings every calculation should use.

    ``user_overrides`` names the UserSettings fields the member set
    explicitly; only those may survive a team default, and only when the
    team allows overriding. Neither input is modified.
    """
    if team is None:
        return replace(user)

    changes: dict = {}
    keeps_comp = team.allow_members_to_override_compensation
    keeps_hours = team.allow_members_to_override_work_hours

    def member_keeps(name: str, allowed: bool) -> bool:
        return allowed and name in user_overrides

    if not team.enable_compensation_split:
        if not member_keeps("driver_compensation_percent", keeps_comp):
            rate = team.default_driver_compensation_percent
            rate = 100 if rate is None else rate
            changes["driver_compensation_percent"] = rate
            changes["passenger_compensation_percent"] = rate
    else:
        if (
            team.default_driver_compensation_percent is not None
            and not member_keeps("driver_compensation_percent", keeps_comp)
        ):
            changes["driver_compensation_percent"] = team.default_driver_compensation_percent
        if (
            team.default_passenger_compensation_percent is not None
            and not member_keeps("passenger_compensation_percent", keeps_comp)
        ):
            changes["passenger_compensation_percent"] = team.default_passenger_compensation_percent

    if team.default_work_hours is not None and not member_keeps("default_work_hours", keeps_hours):
        changes["default_work_hours"] = team.default_work_hours
    if (
        team.expected_monthly_hours is not None
        and not member_keeps("expected_monthly_hours", keeps_hours)
    ):
        changes["expected_monthly_hours"] = team.expected_monthly_hours

    if team.company_name:
        changes["company_name"] = team.company_name

    return replace(user, **changes)
