"""Tests for services/calendar_export.py"""

from datetime import datetime

import httpx
import pytest
import pytz
from icalendar import Calendar

from models.entities import CalendarExport
from models.exceptions import UnknownZone
from services.calendar_export import build_ics, event_uid, google_calendar_url

STAMP = datetime(2025, 6, 1, 12, 0, tzinfo=pytz.UTC)


@pytest.fixture
def export() -> CalendarExport:
    return CalendarExport(
        title="Weekly Team Sync",
        date="2025-06-16",
        start_time="09:00",
        end_time="10:00",
        iana_zone="America/New_York",
        description="Agenda: roadmap"
    )


class TestGoogleCalendarUrl:
    """Tests for the "create event" link."""

    def test_query_parameters(self, export):
        url = httpx.URL(google_calendar_url(export))
        assert url.host == "calendar.google.com"
        assert url.path == "/calendar/render"
        assert url.params["action"] == "TEMPLATE"
        assert url.params["text"] == "Weekly Team Sync"
        assert url.params["dates"] == "20250616T090000/20250616T100000"
        assert url.params["details"] == "Agenda: roadmap"
        assert url.params["ctz"] == "America/New_York"

    def test_end_on_next_day(self, export):
        late = CalendarExport(
            title="Night", date="2025-06-16", start_time="23:30", end_time="00:30",
            iana_zone="Asia/Tokyo", end_date="2025-06-17"
        )
        url = httpx.URL(google_calendar_url(late))
        assert url.params["dates"] == "20250616T233000/20250617T003000"


class TestBuildIcs:
    """Tests for the iCalendar payload."""

    def test_event_carries_zone(self, export):
        payload = build_ics(export, stamp=STAMP)
        assert payload.startswith(b"BEGIN:VCALENDAR")
        assert b"SUMMARY:Weekly Team Sync" in payload
        assert b"DTSTART;TZID=America/New_York:20250616T090000" in payload
        assert b"DTEND;TZID=America/New_York:20250616T100000" in payload

    def test_parses_back(self, export):
        cal = Calendar.from_ical(build_ics(export, stamp=STAMP))
        [event] = cal.walk("VEVENT")
        assert str(event["summary"]) == "Weekly Team Sync"
        assert event.decoded("dtstart").astimezone(pytz.UTC) == datetime(2025, 6, 16, 13, 0, tzinfo=pytz.UTC)
        assert str(event["uid"]) == event_uid(export)

    def test_stable_for_same_meeting(self, export):
        assert build_ics(export, stamp=STAMP) == build_ics(export, stamp=STAMP)

    def test_uid_differs_per_meeting(self, export):
        other = CalendarExport("Weekly Team Sync", "2025-06-23", "09:00", "10:00", "America/New_York")
        assert event_uid(export) != event_uid(other)

    def test_unknown_zone(self):
        bad = CalendarExport("Sync", "2025-06-16", "09:00", "10:00", "Mars/Olympus")
        with pytest.raises(UnknownZone):
            build_ics(bad)
