"""Tests for services/offset_resolver.py

Offsets and abbreviations must follow DST at the instant asked about; a
January instant in New York is EST even if the tests run in July.
"""

from datetime import date, datetime, time, timedelta

import pytest
import pytz

from models.entities import CivilMoment
from models.exceptions import UnknownZone
from services.offset_resolver import format_offset

JANUARY = datetime(2025, 1, 15, 12, 0, tzinfo=pytz.UTC)
JULY = datetime(2025, 7, 15, 12, 0, tzinfo=pytz.UTC)


class TestFormatOffset:
    @pytest.mark.parametrize("delta,expected", [
        (timedelta(0), "+00:00"),
        (timedelta(hours=9), "+09:00"),
        (timedelta(hours=-4), "-04:00"),
        (timedelta(hours=5, minutes=30), "+05:30"),
        (timedelta(hours=-3, minutes=-30), "-03:30"),
        (None, "+00:00"),
    ])
    def test_formats_signed_hours_and_minutes(self, delta, expected):
        assert format_offset(delta) == expected


class TestOffsetAt:
    """Tests for DST-sensitive UTC offsets."""

    def test_new_york_winter_and_summer(self, resolver):
        assert resolver.offset_at("America/New_York", JANUARY) == "-05:00"
        assert resolver.offset_at("America/New_York", JULY) == "-04:00"

    def test_southern_hemisphere_is_inverted(self, resolver):
        assert resolver.offset_at("Australia/Sydney", JANUARY) == "+11:00"
        assert resolver.offset_at("Australia/Sydney", JULY) == "+10:00"

    def test_half_hour_zones(self, resolver):
        assert resolver.offset_at("Asia/Kolkata", JULY) == "+05:30"
        assert resolver.offset_at("America/St_Johns", JANUARY) == "-03:30"

    def test_pseudo_city_uses_its_zone(self, resolver):
        assert resolver.offset_at("City/San_Francisco", JULY) == "-07:00"

    def test_naive_instant_is_utc(self, resolver):
        assert resolver.offset_at("Europe/London", datetime(2025, 7, 15, 12, 0)) == "+01:00"

    def test_changes_exactly_at_transition(self, resolver):
        """BST starts at 01:00 UTC on the last Sunday of March."""
        before = datetime(2025, 3, 30, 0, 59, tzinfo=pytz.UTC)
        after = datetime(2025, 3, 30, 1, 0, tzinfo=pytz.UTC)
        assert resolver.offset_at("Europe/London", before) == "+00:00"
        assert resolver.offset_at("Europe/London", after) == "+01:00"

    def test_unknown_zone(self, resolver):
        with pytest.raises(UnknownZone):
            resolver.offset_at("Mars/Olympus", JULY)


class TestAbbreviationAt:
    """Tests for DST-sensitive abbreviations."""

    def test_no_summer_label_in_winter(self, resolver):
        assert resolver.abbreviation_at("America/New_York", JANUARY) == "EST"
        assert resolver.abbreviation_at("America/New_York", JULY) == "EDT"

    @pytest.mark.parametrize("zone,expected", [
        ("Asia/Tokyo", "JST"),
        ("Europe/London", "BST"),
        ("City/San_Francisco", "PDT"),
        ("UTC", "UTC"),
    ])
    def test_summer_abbreviations(self, resolver, zone, expected):
        assert resolver.abbreviation_at(zone, JULY) == expected

    def test_numeric_abbreviation_is_spelled_as_offset(self, resolver):
        """tzdata labels Dubai "+04"; that is shown as an explicit UTC offset."""
        assert resolver.abbreviation_at("Asia/Dubai", JULY) == "UTC+04:00"

    def test_unknown_zone(self, resolver):
        with pytest.raises(UnknownZone):
            resolver.abbreviation_at("Nowhere/Land", JULY)


class TestCivilOffsets:
    """Tests for offsets looked up by a zone's own wall-clock time."""

    def test_london_offset_differs_across_bst_start(self, resolver):
        summer = CivilMoment(date(2025, 3, 30), time(14, 0))
        winter = CivilMoment(date(2025, 3, 1), time(14, 0))
        assert resolver.offset_at_civil("Europe/London", summer) == "+01:00"
        assert resolver.offset_at_civil("Europe/London", winter) == "+00:00"

    def test_abbreviation_at_civil(self, resolver):
        assert resolver.abbreviation_at_civil("America/New_York", CivilMoment(date(2025, 12, 1), time(9, 0))) == "EST"


class TestYearlyOffsets:
    """Tests for the DST diagnostics helpers."""

    def test_twelve_samples(self, resolver):
        samples = resolver.yearly_offsets("Europe/Paris", 2025)
        assert len(samples) == 12
        assert samples[0] == (date(2025, 1, 15), "+01:00")
        assert samples[6] == (date(2025, 7, 15), "+02:00")

    def test_has_dst(self, resolver):
        assert resolver.has_dst("Europe/London", 2025)
        assert resolver.has_dst("Australia/Sydney", 2025)
        assert not resolver.has_dst("Asia/Tokyo", 2025)
        assert not resolver.has_dst("UTC", 2025)
