"""Civil time conversion between time zones."""

import logging
import re
from datetime import date, datetime, time
from typing import Optional, Union

import pytz

from models.entities import CivilMoment, ConversionResult
from models.exceptions import (
    ConversionFailure,
    InvalidDateFormat,
    InvalidTimeFormat,
    SchedulingError,
)
from services.timezone_catalog import TimeZoneCatalog

logger = logging.getLogger(__name__)

_TIME_24H_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")
_TIME_12H_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AP]M)\s*$", re.IGNORECASE)
_DATE_RE = re.compile(r"^\s*(\d{4})[-.](\d{1,2})[-.](\d{1,2})\s*$")

TimeInput = Union[str, time]
DateInput = Union[str, date]


def parse_time(value: TimeInput) -> time:
    """
    Normalize a civil time to a ``datetime.time``.

    Accepts 24-hour "14:00" / "9:00" and 12-hour "2:00 PM" / "2:00PM".

    Raises:
        InvalidTimeFormat: If the value is not a recognizable time
    """
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected a time string, got {type(value).__name__}")

    match = _TIME_12H_RE.match(value)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        period = match.group(3).upper()
        if not 1 <= hour <= 12 or minute > 59:
            raise InvalidTimeFormat(f"Invalid 12-hour time: {value!r}")
        if period == "PM" and hour < 12:
            hour += 12
        if period == "AM" and hour == 12:
            hour = 0
        return time(hour, minute)

    match = _TIME_24H_RE.match(value)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            raise InvalidTimeFormat(f"Invalid 24-hour time: {value!r}")
        return time(hour, minute)

    raise InvalidTimeFormat(f"Unrecognized time format: {value!r}")


def parse_date(value: DateInput) -> date:
    """
    Normalize a calendar date. Accepts "YYYY-MM-DD" and "YYYY.MM.DD".

    Raises:
        InvalidDateFormat: If the value is not a valid calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateFormat(f"Expected a date string, got {type(value).__name__}")

    match = _DATE_RE.match(value)
    if not match:
        raise InvalidDateFormat(f"Unrecognized date format: {value!r}")
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError as e:
        raise InvalidDateFormat(f"Invalid date {value!r}: {e}")


class CivilTimeConverter:
    """
    Converts wall-clock times between zones using the pytz database.

    The source wall-clock time is localized in the source zone with the offset
    in force at that civil moment, then projected into the target zone.
    """

    def __init__(self, catalog: TimeZoneCatalog, strict_dst: bool = False):
        """
        Args:
            catalog: Zone registry used to resolve civil identifiers
            strict_dst: Raise ConversionFailure for a skipped or repeated local
                hour instead of resolving it as standard time
        """
        self.catalog = catalog
        self.strict_dst = strict_dst

    def to_instant(self, time_value: TimeInput, date_value: DateInput, zone: str) -> datetime:
        """Absolute instant (UTC) of a civil moment in ``zone``."""
        civil_time = parse_time(time_value)
        civil_date = parse_date(date_value)
        tz = self.catalog.tzinfo(zone)
        try:
            return self._localize(tz, datetime.combine(civil_date, civil_time)).astimezone(pytz.UTC)
        except (OverflowError, ValueError) as e:
            raise ConversionFailure(f"Cannot place {civil_date} {civil_time:%H:%M} in {zone}: {e}")

    def convert(
        self,
        time_value: TimeInput,
        date_value: DateInput,
        from_zone: str,
        to_zone: str
    ) -> CivilMoment:
        """
        Convert a civil time and date from one zone to another.

        Raises:
            InvalidTimeFormat, InvalidDateFormat: On malformed input
            UnknownZone: If either zone cannot be resolved
            ConversionFailure: If the tz database rejects the moment
        """
        civil_time = parse_time(time_value)
        civil_date = parse_date(date_value)

        source = self.catalog.resolve(from_zone)
        target = self.catalog.resolve(to_zone)
        if source.iana_name == target.iana_name:
            return CivilMoment(civil_date, civil_time)

        source_tz = self.catalog.tzinfo(from_zone)
        target_tz = self.catalog.tzinfo(to_zone)
        try:
            local = self._localize(source_tz, datetime.combine(civil_date, civil_time))
            projected = target_tz.normalize(local.astimezone(target_tz))
        except (OverflowError, ValueError) as e:
            raise ConversionFailure(
                f"Cannot convert {civil_date} {civil_time:%H:%M} from {from_zone} to {to_zone}: {e}"
            )

        return CivilMoment(projected.date(), projected.time().replace(second=0, microsecond=0))

    def try_convert(
        self,
        time_value: TimeInput,
        date_value: DateInput,
        from_zone: str,
        to_zone: str
    ) -> ConversionResult:
        """
        Best-effort convert(). On failure the original time and date come back
        unchanged with ``ok=False``; callers must treat that as "unknown".
        """
        try:
            moment = self.convert(time_value, date_value, from_zone, to_zone)
        except SchedulingError as e:
            logger.warning(
                "Error converting time %r on %r from %s to %s: %s",
                time_value, date_value, from_zone, to_zone, e
            )
            return ConversionResult(
                time=_echo(time_value, "%H:%M"),
                date=_echo(date_value, "%Y-%m-%d"),
                ok=False,
                error=str(e),
                moment=_original_moment(time_value, date_value)
            )
        return ConversionResult(time=moment.time_str, date=moment.date_str, moment=moment)

    def now_in(self, zone: str, now: Optional[datetime] = None) -> CivilMoment:
        """Current civil time in ``zone``; ``now`` is an instant, naive meaning UTC."""
        instant = now or datetime.now(pytz.UTC)
        if instant.tzinfo is None:
            instant = pytz.UTC.localize(instant)
        local = instant.astimezone(self.catalog.tzinfo(zone))
        return CivilMoment(local.date(), local.time().replace(second=0, microsecond=0))

    def _localize(self, tz, naive: datetime) -> datetime:
        if not self.strict_dst:
            return tz.localize(naive, is_dst=False)
        try:
            return tz.localize(naive, is_dst=None)
        except pytz.NonExistentTimeError:
            raise ConversionFailure(f"{naive:%Y-%m-%d %H:%M} does not exist in {tz.zone}")
        except pytz.AmbiguousTimeError:
            raise ConversionFailure(f"{naive:%Y-%m-%d %H:%M} is ambiguous in {tz.zone}")


def _original_moment(time_value: TimeInput, date_value: DateInput) -> Optional[CivilMoment]:
    """The caller's input as a CivilMoment, or None if it does not parse."""
    try:
        return CivilMoment(parse_date(date_value), parse_time(time_value))
    except SchedulingError:
        return None


def _echo(value, fmt: str) -> str:
    """A failed input as text: strings verbatim, time/date objects in "HH:MM" / "YYYY-MM-DD" form."""
    if isinstance(value, str):
        return value
    try:
        return value.strftime(fmt)
    except (AttributeError, ValueError):
        return str(value)
