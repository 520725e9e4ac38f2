"""Tests for services/response_formatter.py"""

from datetime import date, time

import pytest

from models.entities import CivilMoment, SlotAvailability
from models.exceptions import InvalidTimeFormat
from services.response_formatter import ResponseFormatter


class TestTimeText:
    def test_long_date(self):
        assert ResponseFormatter.format_long_date(date(2025, 6, 16)) == "Monday, June 16, 2025"

    @pytest.mark.parametrize("value,expected", [
        ("00:00", "12:00 AM"),
        ("09:05", "9:05 AM"),
        ("12:00", "12:00 PM"),
        ("23:30", "11:30 PM"),
        (time(14, 0), "2:00 PM"),
    ])
    def test_time_display(self, value, expected):
        assert ResponseFormatter.format_time_display(value) == expected

    def test_time_display_rejects_garbage(self):
        with pytest.raises(InvalidTimeFormat):
            ResponseFormatter.format_time_display("noon")

    def test_working_hours(self):
        assert ResponseFormatter.format_working_hours("08:00", "17:00") == "8:00 AM - 5:00 PM"

    def test_time_range_same_day(self):
        start = CivilMoment(date(2025, 6, 16), time(9, 0))
        end = CivilMoment(date(2025, 6, 16), time(10, 0))
        assert ResponseFormatter.format_time_range(start, end) == "09:00 - 10:00"

    def test_time_range_crossing_midnight(self):
        start = CivilMoment(date(2025, 6, 16), time(23, 0))
        end = CivilMoment(date(2025, 6, 17), time(0, 0))
        assert ResponseFormatter.format_time_range(start, end) == "23:00 - 00:00+1"

    def test_day_indicator(self):
        assert ResponseFormatter.format_day_indicator(date(2025, 6, 16), date(2025, 6, 16)) == ""
        assert ResponseFormatter.format_day_indicator(date(2025, 6, 15), date(2025, 6, 16)) == " (2025-06-15)"


class TestBlocks:
    def test_section(self):
        text = ResponseFormatter.format_section("Team", ["- a", "- b"], icon="👥")
        assert text == "👥 Team\n\n- a\n- b"

    def test_error_with_suggestions(self):
        text = ResponseFormatter.format_error("Oops", "Something failed", suggestions=["Retry"])
        assert text == "❌ Oops\n\nSomething failed\n\nSuggestions:\n• Retry"

    def test_error_without_suggestions(self):
        assert ResponseFormatter.format_error("Oops", "Something failed") == "❌ Oops\n\nSomething failed"


class TestAvailabilityGrid:
    """Tests for the text table rendering of a grid."""

    def test_marks_and_star(self, alex, emma):
        day = date(2025, 6, 16)
        grid = [
            SlotAvailability(CivilMoment(day, time(9, 0)), {1: True, 2: True}, True),
            SlotAvailability(CivilMoment(day, time(10, 0)), {1: True, 2: False}, False, unknown=frozenset({2})),
            SlotAvailability(CivilMoment(day, time(18, 0)), {1: True, 2: False}, False),
        ]
        lines = ResponseFormatter.format_availability_grid(grid, [alex, emma]).splitlines()
        assert lines[0] == "Time  | Alex Johnson | Emma Davies"
        assert set(lines[1]) == {"-"}
        assert lines[2:] == [
            "09:00 | ✅ | ✅ ⭐",
            "10:00 | ✅ | ❓",
            "18:00 | ✅ | ❌",
        ]

    def test_empty_grid(self, alex):
        text = ResponseFormatter.format_availability_grid([], [alex])
        assert text.startswith("❌ No Time Slots")
