"""Wires the planner services together from Settings."""

from typing import Iterable, Optional, Sequence

from models.entities import CalendarExport, Person, Proposal, SlotAvailability
from services.availability_engine import AvailabilityEngine, generate_time_slots
from services.calendar_export import build_ics, google_calendar_url
from services.offset_resolver import OffsetResolver
from services.proposal_renderer import ProposalRenderer
from services.response_formatter import ResponseFormatter
from services.settings import Settings
from services.time_converter import CivilTimeConverter, DateInput, TimeInput
from services.timezone_catalog import TimeZoneCatalog


class MeetingPlanner:
    """Entry point for callers: availability grids and proposals with configured defaults."""

    def __init__(self, settings: Optional[Settings] = None, catalog: Optional[TimeZoneCatalog] = None):
        """Initialize services; the catalog is built once and shared."""
        self.settings = settings or Settings.from_env()
        self.catalog = catalog or TimeZoneCatalog(allow_iana_fallback=not self.settings.strict_zones)
        self.converter = CivilTimeConverter(self.catalog)
        self.resolver = OffsetResolver(self.catalog, self.converter)
        self.engine = AvailabilityEngine(self.converter)
        self.renderer = ProposalRenderer(self.catalog, self.converter, self.resolver)

    def get_services(self):
        """(catalog, converter, resolver, engine, renderer)"""
        return self.catalog, self.converter, self.resolver, self.engine, self.renderer

    def default_slots(self) -> list[str]:
        return generate_time_slots(
            self.settings.slot_start_hour,
            self.settings.slot_end_hour,
            self.settings.slot_step_minutes
        )

    def grid(
        self,
        reference_date: DateInput,
        people: Iterable[Person],
        reference_zone: Optional[str] = None,
        slot_times: Optional[Sequence[TimeInput]] = None
    ) -> list[SlotAvailability]:
        """Availability grid using the configured zone and slot range when omitted."""
        return self.engine.compute_grid(
            reference_date,
            reference_zone or self.settings.reference_zone,
            self.default_slots() if slot_times is None else slot_times,
            people
        )

    def propose(
        self,
        reference_date: DateInput,
        start_time: TimeInput,
        people: Iterable[Person],
        title: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        reference_zone: Optional[str] = None
    ) -> Proposal:
        """Proposal using the configured title, duration and zone when omitted."""
        return self.renderer.render(
            title or self.settings.meeting_title,
            reference_date,
            start_time,
            self.settings.meeting_duration if duration_minutes is None else duration_minutes,
            reference_zone or self.settings.reference_zone,
            people
        )

    def proposal_text(self, proposal: Proposal, sender: str = "[Your Name]") -> str:
        return self.renderer.to_text(proposal, sender)

    def export(self, proposal: Proposal, description: Optional[str] = None) -> CalendarExport:
        return self.renderer.export_payload(proposal, description)

    def google_calendar_url(self, proposal: Proposal) -> str:
        return google_calendar_url(self.export(proposal))

    def ics(self, proposal: Proposal) -> bytes:
        return build_ics(self.export(proposal))

    def grid_text(self, grid: Sequence[SlotAvailability], people: Sequence[Person]) -> str:
        return ResponseFormatter.format_availability_grid(grid, people)
