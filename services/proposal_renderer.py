"""Meeting proposal generation across participants' time zones."""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

from models.entities import CalendarExport, CivilMoment, Person, PersonLocalTime, Proposal
from services.availability_engine import require_unique_ids
from services.offset_resolver import OffsetResolver
from services.response_formatter import ResponseFormatter
from services.time_converter import CivilTimeConverter, DateInput, TimeInput, parse_date, parse_time
from services.timezone_catalog import TimeZoneCatalog

logger = logging.getLogger(__name__)


def add_minutes(moment: CivilMoment, minutes: int) -> CivilMoment:
    """Shift a civil moment by ``minutes``, rolling the date over as needed."""
    shifted = datetime.combine(moment.date, moment.time) + timedelta(minutes=minutes)
    return CivilMoment(shifted.date(), shifted.time())


class ProposalRenderer:
    """Builds a Proposal for a confirmed slot and renders it as text."""

    def __init__(
        self,
        catalog: TimeZoneCatalog,
        converter: Optional[CivilTimeConverter] = None,
        resolver: Optional[OffsetResolver] = None
    ):
        self.catalog = catalog
        self.converter = converter or CivilTimeConverter(catalog)
        self.resolver = resolver or OffsetResolver(catalog, self.converter)

    def render(
        self,
        title: str,
        reference_date: DateInput,
        start_time: TimeInput,
        duration_minutes: int,
        reference_zone: str,
        people: Iterable[Person]
    ) -> Proposal:
        """
        Project a meeting into every participant's zone.

        Args:
            title: Meeting title
            reference_date: Meeting date in the reference zone
            start_time: Start time in the reference zone ("14:00" or "2:00 PM")
            duration_minutes: Positive meeting length
            reference_zone: Civil identifier the start time is expressed in
            people: Participants, rendered in this order

        Returns:
            Proposal with one PersonLocalTime per person. A person whose zone
            cannot be converted keeps the reference times with ``converted=False``.

        Raises:
            ValueError: If duration_minutes is not a positive int or two people
                share an id
            InvalidTimeFormat, InvalidDateFormat, UnknownZone: On bad reference input
        """
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
            raise ValueError(f"duration_minutes must be a positive integer, got {duration_minutes!r}")
        people = list(people)
        require_unique_ids(people)

        reference = self.catalog.resolve(reference_zone)
        start = CivilMoment(parse_date(reference_date), parse_time(start_time))
        end = add_minutes(start, duration_minutes)

        # Offsets are read at the meeting's own instants, not at render time
        start_instant = self.converter.to_instant(start.time, start.date, reference_zone)
        end_instant = start_instant + timedelta(minutes=duration_minutes)
        reference_abbr = self.resolver.abbreviation_at(reference_zone, start_instant)
        reference_offset = self.resolver.offset_at(reference_zone, start_instant)

        placed = self.converter.now_in(reference_zone, start_instant)
        if placed != start:
            logger.warning(
                "%s does not exist in %s (skipped by a DST change); participants see it as %s there",
                start, reference_zone, placed
            )

        rows = []
        for person in people:
            rows.append(self._person_row(
                person, reference_zone, start, end, start_instant, end_instant, reference_abbr, reference_offset
            ))

        return Proposal(
            title=title,
            reference_zone=reference,
            reference_moment=start,
            end_moment=end,
            duration_minutes=duration_minutes,
            reference_abbreviation=reference_abbr,
            reference_offset=reference_offset,
            participants=tuple(rows)
        )

    def _person_row(
        self,
        person: Person,
        reference_zone: str,
        start: CivilMoment,
        end: CivilMoment,
        start_instant: datetime,
        end_instant: datetime,
        reference_abbr: str,
        reference_offset: str
    ) -> PersonLocalTime:
        local_start = self.converter.try_convert(start.time, start.date, reference_zone, person.civil_identifier)

        if not local_start.ok:
            logger.warning(
                "Showing reference time for %s: cannot convert to %s",
                person.display_name, person.civil_identifier
            )
            return PersonLocalTime(
                person_id=person.id,
                display_name=person.display_name,
                zone_label=person.civil_identifier,
                flag=person.flag,
                start=start,
                end=end,
                abbreviation=reference_abbr,
                utc_offset=reference_offset,
                day_offset=0,
                converted=False
            )

        if self.catalog.iana_name(person.civil_identifier) == self.catalog.iana_name(reference_zone):
            local_end = end
        else:
            # Other zones span the real meeting length even when the start is in a DST gap
            local_end = self.converter.now_in(person.civil_identifier, end_instant)

        descriptor = self.catalog.resolve(person.civil_identifier)
        return PersonLocalTime(
            person_id=person.id,
            display_name=person.display_name,
            zone_label=descriptor.display_name,
            flag=person.flag or descriptor.flag,
            start=local_start.moment,
            end=local_end,
            abbreviation=self.resolver.abbreviation_at(person.civil_identifier, start_instant),
            utc_offset=self.resolver.offset_at(person.civil_identifier, start_instant),
            day_offset=(local_start.moment.date - start.date).days
        )

    @staticmethod
    def to_text(proposal: Proposal, sender: str = "[Your Name]") -> str:
        """
        Render the proposal for the clipboard.

        Output depends only on the proposal and sender, so identical inputs
        give byte-identical text. People appear in the order they were given.
        """
        reference = proposal.reference_zone
        reference_date = proposal.reference_moment.date
        long_date = ResponseFormatter.format_long_date(reference_date)

        lines = [
            "Hi team,",
            "",
            f"I'm proposing we have {proposal.title} on {long_date}. "
            "Here are the times for each team member:",
            "",
            f"Date: {long_date}",
            f"Time: {ResponseFormatter.format_time_range(proposal.reference_moment, proposal.end_moment)} "
            f"{proposal.reference_abbreviation} (UTC{proposal.reference_offset}, {reference.display_name})",
            "",
            "Team Member Times:",
        ]

        if not proposal.participants:
            lines.append("- (no participants)")

        for row in proposal.participants:
            time_range = ResponseFormatter.format_time_range(row.start, row.end)
            if not row.converted:
                lines.append(
                    f"- ⚠️ {row.display_name} ({row.zone_label}): {time_range} {row.abbreviation} "
                    f"(UTC{row.utc_offset}) [could not convert, showing {reference.display_name} time]"
                )
                continue
            flag = f"{row.flag} " if row.flag else ""
            lines.append(
                f"- {flag}{row.display_name} ({row.zone_label}): {time_range} {row.abbreviation} "
                f"(UTC{row.utc_offset}){ResponseFormatter.format_day_indicator(row.start.date, reference_date)}"
            )

        lines.extend(["", "Please let me know if this time works for everyone.", "", "Best regards,", sender])
        return ResponseFormatter.format_section(proposal.title, lines, icon="📅")

    def export_payload(self, proposal: Proposal, description: Optional[str] = None) -> CalendarExport:
        """
        Calendar fields for the proposal, in the reference zone.

        The IANA name travels with the civil times so the calendar service
        resolves DST itself.
        """
        start, end = proposal.reference_moment, proposal.end_moment
        return CalendarExport(
            title=proposal.title,
            date=start.date_str,
            start_time=start.time_str,
            end_time=end.time_str,
            iana_zone=proposal.reference_zone.iana_name,
            description=self.to_text(proposal) if description is None else description,
            end_date=end.date_str if end.date != start.date else None
        )

    @staticmethod
    def meeting_record(proposal: Proposal) -> Dict[str, Any]:
        """The meeting record handed to the storage collaborator."""
        participants: List[Dict[str, Any]] = [
            {
                "teamMemberId": row.person_id,
                "localStartTime": row.start.time_str,
                "localEndTime": row.end.time_str,
                "localDate": row.start.date_str,
            }
            for row in proposal.participants
            if row.converted
        ]
        return {
            "title": proposal.title,
            "date": proposal.reference_moment.date_str,
            "startTime": proposal.reference_moment.time_str,
            "endTime": proposal.end_moment.time_str,
            "duration": proposal.duration_minutes,
            "timezone": proposal.reference_zone.civil_identifier,
            "participants": participants,
        }
