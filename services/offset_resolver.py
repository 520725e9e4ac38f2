"""UTC offsets and zone abbreviations resolved at a specific instant."""

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional

import pytz

from models.entities import CivilMoment
from services.time_converter import CivilTimeConverter
from services.timezone_catalog import TimeZoneCatalog

logger = logging.getLogger(__name__)

# tzdata uses numeric "abbreviations" like "+04" for zones without a letter code
_NUMERIC_ABBR_RE = re.compile(r"^[+-]\d{2,4}$")


def format_offset(offset: Optional[timedelta]) -> str:
    """Render a utcoffset() as "+HH:MM" / "-HH:MM"."""
    total_minutes = int((offset or timedelta(0)).total_seconds() // 60)
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return pytz.UTC.localize(instant)
    return instant.astimezone(pytz.UTC)


class OffsetResolver:
    """
    Resolves a zone's UTC offset and abbreviation from the tz database.

    Every answer is computed for the instant asked about, so DST is honored;
    there is no static offset table behind this class.
    """

    def __init__(self, catalog: TimeZoneCatalog, converter: Optional[CivilTimeConverter] = None):
        self.catalog = catalog
        self.converter = converter or CivilTimeConverter(catalog)

    def _local(self, civil_identifier: str, instant: datetime) -> datetime:
        return _as_utc(instant).astimezone(self.catalog.tzinfo(civil_identifier))

    def offset_at(self, civil_identifier: str, instant: datetime) -> str:
        """UTC offset of the zone at ``instant``; naive instants are UTC."""
        return format_offset(self._local(civil_identifier, instant).utcoffset())

    def abbreviation_at(self, civil_identifier: str, instant: datetime) -> str:
        """Zone abbreviation at ``instant``, e.g. "PDT" or "JST"."""
        local = self._local(civil_identifier, instant)
        abbr = local.tzname() or ""
        if not abbr or _NUMERIC_ABBR_RE.match(abbr):
            return f"UTC{format_offset(local.utcoffset())}"
        return abbr

    def offset_at_civil(self, civil_identifier: str, moment: CivilMoment) -> str:
        """Offset in force at a civil moment expressed in that same zone."""
        instant = self.converter.to_instant(moment.time, moment.date, civil_identifier)
        return self.offset_at(civil_identifier, instant)

    def abbreviation_at_civil(self, civil_identifier: str, moment: CivilMoment) -> str:
        instant = self.converter.to_instant(moment.time, moment.date, civil_identifier)
        return self.abbreviation_at(civil_identifier, instant)

    def yearly_offsets(self, civil_identifier: str, year: int) -> list[tuple[date, str]]:
        """Offset at noon UTC on the 15th of every month, for spotting DST changes."""
        return [
            (date(year, month, 15), self.offset_at(civil_identifier, datetime(year, month, 15, 12, tzinfo=pytz.UTC)))
            for month in range(1, 13)
        ]

    def has_dst(self, civil_identifier: str, year: int) -> bool:
        """Whether the zone's offset changes at some point during ``year``."""
        offsets = {offset for _, offset in self.yearly_offsets(civil_identifier, year)}
        return len(offsets) > 1
