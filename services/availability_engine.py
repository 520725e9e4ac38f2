"""Working-hours availability for a grid of candidate meeting slots."""

import logging
from datetime import datetime, time
from typing import Iterable, Optional, Sequence

from models.entities import CivilMoment, Person, PersonStatus, SlotAvailability
from models.exceptions import InvalidTimeFormat, SchedulingError
from services.time_converter import CivilTimeConverter, DateInput, TimeInput, parse_date, parse_time

logger = logging.getLogger(__name__)


def working_window(person: Person) -> tuple[time, time]:
    """
    Parse a person's working-hours window.

    Raises:
        InvalidTimeFormat: If either bound is malformed or the window is not
            a same-day range (overnight windows are not supported)
    """
    start = parse_time(person.working_hours_start)
    end = parse_time(person.working_hours_end)
    if start >= end:
        raise InvalidTimeFormat(
            f"Working hours for {person.display_name} must start before they end "
            f"({person.working_hours_start}-{person.working_hours_end})"
        )
    return start, end


def require_unique_ids(people: Sequence[Person]) -> None:
    """
    Reject a participant list where two people share an id.

    Results are keyed by person id, so a duplicate would hide one person.

    Raises:
        ValueError: Naming the repeated id(s)
    """
    seen: set[int] = set()
    repeated = []
    for person in people:
        if person.id in seen and person.id not in repeated:
            repeated.append(person.id)
        seen.add(person.id)
    if repeated:
        raise ValueError(f"Duplicate person id(s): {', '.join(str(i) for i in repeated)}")


def is_within_working_hours(time_value: TimeInput, start: TimeInput, end: TimeInput) -> bool:
    """Half-open check: ``start`` is inclusive, ``end`` exclusive."""
    return parse_time(start) <= parse_time(time_value) < parse_time(end)


def generate_time_slots(start_hour: int = 6, end_hour: int = 23, step_minutes: int = 60) -> list[str]:
    """Slot labels "HH:MM" from start_hour (inclusive) to end_hour (exclusive)."""
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    if not 0 <= start_hour <= end_hour <= 24:
        raise ValueError(f"Invalid slot range {start_hour}-{end_hour}")

    slots = []
    minute = start_hour * 60
    while minute < end_hour * 60:
        slots.append(f"{minute // 60:02d}:{minute % 60:02d}")
        minute += step_minutes
    return slots


class AvailabilityEngine:
    """Computes per-slot, per-person availability against working hours."""

    def __init__(self, converter: CivilTimeConverter):
        """Initialize with the converter used to project slots into each zone."""
        self.converter = converter

    def compute_grid(
        self,
        reference_date: DateInput,
        reference_zone: str,
        slot_times: Sequence[TimeInput],
        people: Iterable[Person]
    ) -> list[SlotAvailability]:
        """
        Evaluate every slot for every person.

        Args:
            reference_date: Date the slots belong to, in the reference zone
            reference_zone: Civil identifier the slot times are expressed in
            slot_times: Ordered slot times in the reference zone
            people: Participants; each is judged on their own converted date

        Returns:
            One SlotAvailability per slot, in input order. A person whose
            availability cannot be determined is unavailable and listed in
            ``unknown``.

        Raises:
            InvalidDateFormat: If reference_date is malformed
            InvalidTimeFormat: If a slot time is malformed
            ValueError: If two people share an id
        """
        people = list(people)
        require_unique_ids(people)
        ref_date = parse_date(reference_date)

        # Bad windows make a person unknown for every slot rather than failing the grid
        windows: dict[int, Optional[tuple[time, time]]] = {}
        for person in people:
            try:
                windows[person.id] = working_window(person)
            except InvalidTimeFormat as e:
                logger.warning("Ignoring working hours for person %s: %s", person.id, e)
                windows[person.id] = None

        grid = []
        for slot in slot_times:
            slot_time = parse_time(slot)
            per_person: dict[int, bool] = {}
            local_times: dict[int, CivilMoment] = {}
            unknown: set[int] = set()

            for person in people:
                window = windows[person.id]
                result = self.converter.try_convert(slot_time, ref_date, reference_zone, person.civil_identifier)
                if not result.ok or window is None:
                    per_person[person.id] = False
                    unknown.add(person.id)
                    continue

                local_times[person.id] = result.moment
                start, end = window
                per_person[person.id] = start <= result.moment.time < end

            grid.append(SlotAvailability(
                slot_time=CivilMoment(ref_date, slot_time),
                per_person=per_person,
                all_available=all(per_person.values()),
                local_times=local_times,
                unknown=frozenset(unknown)
            ))

        return grid

    @staticmethod
    def fully_available_slots(grid: Iterable[SlotAvailability]) -> list[SlotAvailability]:
        """Slots that work for everyone, in grid order."""
        return [slot for slot in grid if slot.all_available]

    def current_status(self, people: Iterable[Person], now: Optional[datetime] = None) -> list[PersonStatus]:
        """
        Local time right now for each person and whether they are working.

        People whose zone or working hours cannot be read are skipped with a
        warning.
        """
        statuses = []
        for person in people:
            try:
                local = self.converter.now_in(person.civil_identifier, now)
                start, end = working_window(person)
            except SchedulingError as e:
                logger.warning("Cannot determine current status for person %s: %s", person.id, e)
                continue
            statuses.append(PersonStatus(
                person_id=person.id,
                local=local,
                is_working_hours=start <= local.time < end
            ))
        return statuses
