"""Plain-text formatting helpers shared by the proposal and grid renderers."""

from datetime import date
from typing import List, Optional, Sequence

from models.entities import CivilMoment, Person, SlotAvailability
from services.time_converter import TimeInput, parse_time


class ResponseFormatter:
    """Formats planner output in a consistent, structured manner."""

    @staticmethod
    def format_long_date(value: date) -> str:
        """Long date form, e.g. "Monday, June 16, 2025"."""
        return f"{value:%A}, {value:%B} {value.day}, {value.year}"

    @staticmethod
    def format_time_display(value: TimeInput) -> str:
        """12-hour display form, e.g. "2:00 PM"."""
        parsed = parse_time(value)
        period = "PM" if parsed.hour >= 12 else "AM"
        hour12 = parsed.hour % 12 or 12
        return f"{hour12}:{parsed.minute:02d} {period}"

    @staticmethod
    def format_working_hours(start: TimeInput, end: TimeInput) -> str:
        return f"{ResponseFormatter.format_time_display(start)} - {ResponseFormatter.format_time_display(end)}"

    @staticmethod
    def format_time_range(start: CivilMoment, end: CivilMoment) -> str:
        """E.g. "09:00 - 10:00"; an end on a later day gets a "+N" suffix."""
        text = f"{start.time_str} - {end.time_str}"
        days = (end.date - start.date).days
        if days:
            text += f"{days:+d}"
        return text

    @staticmethod
    def format_day_indicator(local_date: date, reference_date: date) -> str:
        """Suffix like " (2025-06-17)" when the local date differs from the reference date."""
        if local_date == reference_date:
            return ""
        return f" ({local_date.isoformat()})"

    @staticmethod
    def format_section(title: str, content: List[str], icon: str = "📋") -> str:
        """Format a section with title and content."""
        lines = [f"{icon} {title}", ""]
        lines.extend(content)
        return "\n".join(lines)

    @staticmethod
    def format_error(title: str, message: str, suggestions: Optional[List[str]] = None) -> str:
        """Format an error message."""
        lines = [
            f"❌ {title}",
            "",
            message
        ]

        if suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in suggestions:
                lines.append(f"• {suggestion}")

        return "\n".join(lines)

    @staticmethod
    def format_availability_grid(grid: Sequence[SlotAvailability], people: Sequence[Person]) -> str:
        """
        Render an availability grid as a text table.

        One row per slot: the slot time, a mark per person ("✅" available,
        "❌" unavailable, "❓" unknown) and a star when everyone is free.
        """
        if not grid:
            return ResponseFormatter.format_error(
                "No Time Slots",
                "There are no candidate time slots to compare.",
                suggestions=["Widen the slot range"]
            )

        header = "Time  | " + " | ".join(person.display_name for person in people)
        lines = [header, "-" * len(header)]

        for slot in grid:
            marks = []
            for person in people:
                if person.id in slot.unknown:
                    marks.append("❓")
                elif slot.per_person.get(person.id):
                    marks.append("✅")
                else:
                    marks.append("❌")
            row = f"{slot.slot_time.time_str} | " + " | ".join(marks)
            if slot.all_available and people:
                row += " ⭐"
            lines.append(row)

        return "\n".join(lines)
