"""Domain models for the Meeting Time Planner."""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Optional


@dataclass(frozen=True)
class TimeZoneDescriptor:
    """A user-facing zone entry and the IANA zone behind it."""
    display_name: str
    civil_identifier: str  # catalog key, e.g. "City/San_Francisco"
    iana_name: str  # e.g. "America/Los_Angeles"
    flag: str = ""
    abbreviation_hint: str = ""  # display placeholder only, e.g. "PST/PDT"


@dataclass(frozen=True)
class Person:
    """A team member whose working hours constrain a meeting."""
    id: int
    display_name: str
    civil_identifier: str
    working_hours_start: str  # "HH:MM"
    working_hours_end: str  # "HH:MM", exclusive
    country: str = ""
    flag: str = ""


@dataclass(frozen=True)
class CivilMoment:
    """A wall-clock date and time with no zone attached."""
    date: date
    time: time

    @property
    def time_str(self) -> str:
        return self.time.strftime("%H:%M")

    @property
    def date_str(self) -> str:
        return self.date.isoformat()

    def __str__(self) -> str:
        return f"{self.date_str} {self.time_str}"


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a best-effort conversion.

    On success ``time``/``date`` are normalized "HH:MM"/"YYYY-MM-DD". When
    ``ok`` is False they are the caller's original values, untouched, and
    ``moment`` is the original input if it parsed at all.
    """
    time: str
    date: str
    ok: bool = True
    error: Optional[str] = None
    moment: Optional[CivilMoment] = None


@dataclass(frozen=True)
class SlotAvailability:
    """Availability of every person for one candidate slot."""
    slot_time: CivilMoment  # in the reference zone
    per_person: dict[int, bool]
    all_available: bool
    local_times: dict[int, CivilMoment] = field(default_factory=dict)
    unknown: frozenset[int] = frozenset()  # could not be determined, counted as unavailable


@dataclass(frozen=True)
class PersonStatus:
    """What time it currently is for a person, and whether they are working."""
    person_id: int
    local: CivilMoment
    is_working_hours: bool


@dataclass(frozen=True)
class PersonLocalTime:
    """A proposal row: the meeting as seen from one person's zone."""
    person_id: int
    display_name: str
    zone_label: str
    flag: str
    start: CivilMoment
    end: CivilMoment
    abbreviation: str
    utc_offset: str
    day_offset: int  # start date minus the reference date, in days
    converted: bool = True


@dataclass(frozen=True)
class Proposal:
    """A confirmed meeting slot projected into every participant's zone."""
    title: str
    reference_zone: TimeZoneDescriptor
    reference_moment: CivilMoment
    end_moment: CivilMoment
    duration_minutes: int
    reference_abbreviation: str
    reference_offset: str
    participants: tuple[PersonLocalTime, ...] = ()

    @property
    def per_person_local_times(self) -> dict[int, PersonLocalTime]:
        return {row.person_id: row for row in self.participants}


@dataclass(frozen=True)
class CalendarExport:
    """Fields handed to a calendar service, expressed in the reference zone."""
    title: str
    date: str  # "YYYY-MM-DD"
    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    iana_zone: str
    description: str = ""
    end_date: Optional[str] = None  # set when the meeting ends on a later day
