"""Tests for suggestions.py - history ranking and pause heuristic."""

from datetime import date, datetime

import pytest

from suggestions import (
    suggest_driver_times,
    suggest_end_times,
    suggest_locations,
    suggest_passenger_times,
    suggest_pause,
    suggest_start_times,
)


@pytest.fixture
def location_history(make_entry):
    """Office x3, Home x2, Client Site x1 with recency Office > Home > Client."""
    return [
        make_entry(date(2026, 3, 2), location="Client Site"),
        make_entry(date(2026, 3, 3), location="Home"),
        make_entry(date(2026, 3, 4), location="Office"),
        make_entry(date(2026, 3, 5), location="Office"),
        make_entry(date(2026, 3, 6), location="Home"),
        make_entry(date(2026, 3, 9), location="Office"),
    ]


class TestSuggestLocations:
    """Tests for suggest_locations function."""

    def test_frequency_ranking(self, location_history):
        assert suggest_locations(location_history) == ["Office", "Home", "Client Site"]

    def test_recent_first(self, make_entry, location_history):
        """Recent-first ignores frequency entirely."""
        history = location_history + [make_entry(date(2026, 3, 10), location="Client Site")]
        assert suggest_locations(history, recent_first=True) == ["Client Site", "Office", "Home"]
        # Home and Client Site now tie on count; Client Site was used last
        assert suggest_locations(history) == ["Office", "Client Site", "Home"]

    def test_ties_broken_by_recency(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), location="A"),
            make_entry(date(2026, 3, 4), location="B"),
        ]
        assert suggest_locations(history) == ["B", "A"]

    def test_filter_text_case_insensitive(self, location_history):
        assert suggest_locations(location_history, filter_text="O") == ["Office", "Home"]
        assert suggest_locations(location_history, filter_text="site") == ["Client Site"]

    def test_limit(self, location_history):
        assert suggest_locations(location_history, limit=2) == ["Office", "Home"]

    def test_empty_history(self):
        assert suggest_locations([]) == []

    def test_repeatable(self, location_history):
        """Calling twice gives the same freshly computed result."""
        first = suggest_locations(location_history)
        first.append("mutated")
        assert suggest_locations(location_history) == ["Office", "Home", "Client Site"]


class TestSuggestStartTimes:
    """Tests for suggest_start_times function."""

    def test_most_common_first(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), "08:00", "16:00"),
            make_entry(date(2026, 3, 3), "09:00", "17:00"),
            make_entry(date(2026, 3, 4), "09:00", "17:00"),
            make_entry(date(2026, 3, 5), "07:30", "15:30"),
        ]
        assert suggest_start_times(history) == ["09:00", "07:30", "08:00"]

    def test_skips_duration_only(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), "12:00", None, duration_minutes=120),
            make_entry(date(2026, 3, 3), "09:00", "17:00"),
        ]
        assert suggest_start_times(history) == ["09:00"]

    def test_location_filter(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), "08:00", location="Site"),
            make_entry(date(2026, 3, 3), "09:00", location="Office"),
        ]
        assert suggest_start_times(history, location="Site") == ["08:00"]

    def test_day_of_week_filter_sunday_is_zero(self, make_entry):
        """Day numbers run 0 = Sunday to 6 = Saturday."""
        history = [
            make_entry(date(2026, 3, 1), "10:00", "14:00"),  # Sunday
            make_entry(date(2026, 3, 2), "08:00", "16:00"),  # Monday
            make_entry(date(2026, 3, 7), "11:00", "15:00"),  # Saturday
        ]
        assert suggest_start_times(history, day_of_week=0) == ["10:00"]
        assert suggest_start_times(history, day_of_week=1) == ["08:00"]
        assert suggest_start_times(history, day_of_week=6) == ["11:00"]

    def test_default_limit_three(self, make_entry):
        history = [make_entry(date(2026, 3, 2), f"0{h}:00", "17:00") for h in range(5, 10)]
        assert len(suggest_start_times(history)) == 3


class TestSuggestEndTimes:
    """Tests for suggest_end_times function."""

    def test_requires_end_time(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), "09:00", None),
            make_entry(date(2026, 3, 3), "09:00", "17:30"),
            make_entry(date(2026, 3, 4), "09:00", "17:30"),
            make_entry(date(2026, 3, 5), "09:00", "16:00"),
        ]
        assert suggest_end_times(history) == ["17:30", "16:00"]

    def test_day_of_week_uses_end_time(self, make_entry):
        """A night shift ending on Tuesday matches Tuesday (2)."""
        entry = make_entry(date(2026, 3, 2), "22:00", "23:00")
        entry.end_time = datetime(2026, 3, 3, 6, 0)
        assert suggest_end_times([entry], day_of_week=2) == ["06:00"]
        assert suggest_end_times([entry], day_of_week=1) == []


class TestSuggestTravelTimes:
    """Tests for driver and passenger hour suggestions."""

    def test_driver_times(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), driver_time_hours=0.5),
            make_entry(date(2026, 3, 3), driver_time_hours=1),
            make_entry(date(2026, 3, 4), driver_time_hours=0.5),
            make_entry(date(2026, 3, 5)),
        ]
        assert suggest_driver_times(history) == [0.5, 1]

    def test_passenger_times_location_filter(self, make_entry):
        history = [
            make_entry(date(2026, 3, 2), location="Site", passenger_time_hours=2),
            make_entry(date(2026, 3, 3), location="Office", passenger_time_hours=1),
        ]
        assert suggest_passenger_times(history, location="Site") == [2]


class TestSuggestPause:
    """Tests for suggest_pause function."""

    def test_over_nine_hours(self):
        suggestion = suggest_pause("08:00", "17:30")
        assert suggestion.minutes == 45
        assert suggestion.time_string == "00:45"

    def test_over_six_hours(self):
        suggestion = suggest_pause("09:00", "15:30")
        assert suggestion.minutes == 30

    def test_exactly_six_hours_no_suggestion(self):
        assert suggest_pause("09:00", "15:00") is None

    def test_exactly_nine_hours_gets_thirty(self):
        assert suggest_pause("08:00", "17:00").minutes == 30

    def test_travel_time_counts(self):
        """5h of work plus 1.5h driving crosses the six hour mark."""
        assert suggest_pause("09:00", "14:00", driver_time_hours=1.5).minutes == 30

    def test_short_day(self):
        assert suggest_pause("09:00", "12:00") is None

    def test_end_before_start(self):
        assert suggest_pause("17:00", "09:00") is None

    def test_special_location(self):
        assert suggest_pause("08:00", "18:00", location="SICK_LEAVE") is None

    def test_invalid_time(self):
        assert suggest_pause("25:00", "18:00") is None

    def test_accepts_datetimes(self):
        start = datetime(2026, 3, 2, 7, 0)
        end = datetime(2026, 3, 2, 17, 0)
        assert suggest_pause(start, end).minutes == 45
