"""Google Calendar links and iCalendar payloads for a proposed meeting."""

import hashlib
import logging
from datetime import datetime
from typing import Optional

import httpx
import pytz
from icalendar import Calendar, Event

from models.entities import CalendarExport
from models.exceptions import UnknownZone
from services.time_converter import parse_date, parse_time

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_URL = "https://calendar.google.com/calendar/render"
PRODID = "-//Meeting Time Planner//EN"


def _local_bounds(export: CalendarExport) -> tuple[datetime, datetime]:
    """Naive start/end datetimes of the export, in its own zone."""
    start = datetime.combine(parse_date(export.date), parse_time(export.start_time))
    end = datetime.combine(parse_date(export.end_date or export.date), parse_time(export.end_time))
    return start, end


def google_calendar_url(export: CalendarExport) -> str:
    """
    Build a Google Calendar "create event" link.

    Times are sent as floating local times with ``ctz`` set to the IANA zone,
    so Google applies its own DST rules.
    """
    start, end = _local_bounds(export)
    url = httpx.URL(GOOGLE_CALENDAR_URL, params={
        "action": "TEMPLATE",
        "text": export.title,
        "dates": f"{start:%Y%m%dT%H%M%S}/{end:%Y%m%dT%H%M%S}",
        "details": export.description,
        "ctz": export.iana_zone,
    })
    return str(url)


def event_uid(export: CalendarExport) -> str:
    """Stable UID so re-exporting the same meeting updates one calendar entry."""
    key = f"{export.title}|{export.date}T{export.start_time}|{export.iana_zone}"
    return f"{hashlib.sha1(key.encode('utf-8')).hexdigest()}@meeting-planner"


def build_ics(export: CalendarExport, stamp: Optional[datetime] = None) -> bytes:
    """
    Build .ics bytes for the meeting.

    DTSTART/DTEND carry the IANA zone as TZID.

    Raises:
        UnknownZone: If the export's zone is not in the tz database
    """
    try:
        tz = pytz.timezone(export.iana_zone)
    except pytz.UnknownTimeZoneError:
        raise UnknownZone(export.iana_zone)

    start, end = _local_bounds(export)

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")

    event = Event()
    event.add("uid", event_uid(export))
    event.add("summary", export.title)
    event.add("dtstart", tz.localize(start, is_dst=False))
    event.add("dtend", tz.localize(end, is_dst=False))
    event.add("dtstamp", stamp or datetime.now(pytz.UTC))
    if export.description:
        event.add("description", export.description)

    cal.add_component(event)
    logger.debug("Built iCalendar event %s for %r", event["uid"], export.title)
    return cal.to_ical()
