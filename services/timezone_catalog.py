"""Registry of user-facing time zones and the IANA zones behind them."""

import logging
from datetime import datetime
from typing import Iterable, Optional

import pytz

from models.entities import TimeZoneDescriptor
from models.exceptions import UnknownZone

logger = logging.getLogger(__name__)


# City-specific flags; anything else falls back to its region.
_ZONE_FLAGS: dict[str, str] = {
    "UTC": "🌐",
    "Europe/London": "🇬🇧",
    "Europe/Paris": "🇫🇷",
    "Europe/Berlin": "🇩🇪",
    "Europe/Rome": "🇮🇹",
    "Europe/Madrid": "🇪🇸",
    "Europe/Amsterdam": "🇳🇱",
    "Europe/Brussels": "🇧🇪",
    "Europe/Zurich": "🇨🇭",
    "Europe/Stockholm": "🇸🇪",
    "Europe/Oslo": "🇳🇴",
    "Europe/Helsinki": "🇫🇮",
    "Europe/Moscow": "🇷🇺",
    "Asia/Tokyo": "🇯🇵",
    "Asia/Seoul": "🇰🇷",
    "Asia/Shanghai": "🇨🇳",
    "Asia/Hong_Kong": "🇭🇰",
    "Asia/Taipei": "🇹🇼",
    "Asia/Singapore": "🇸🇬",
    "Asia/Kolkata": "🇮🇳",
    "Asia/Dubai": "🇦🇪",
    "Asia/Baku": "🇦🇿",
    "Australia/Sydney": "🇦🇺",
    "Australia/Melbourne": "🇦🇺",
    "Australia/Perth": "🇦🇺",
    "Pacific/Auckland": "🇳🇿",
    "America/New_York": "🇺🇸",
    "America/Chicago": "🇺🇸",
    "America/Denver": "🇺🇸",
    "America/Los_Angeles": "🇺🇸",
    "America/Toronto": "🇨🇦",
    "America/Vancouver": "🇨🇦",
    "America/Mexico_City": "🇲🇽",
    "America/Sao_Paulo": "🇧🇷",
}

_REGION_FLAGS: dict[str, str] = {
    "America": "🇺🇸",
    "Europe": "🇪🇺",
    "Australia": "🇦🇺",
    "Pacific": "🇳🇿",
    "Indian": "🇮🇳",
}

DEFAULT_ZONES: tuple[TimeZoneDescriptor, ...] = (
    TimeZoneDescriptor("UTC", "UTC", "UTC", "🌐", "UTC"),
    TimeZoneDescriptor("London", "Europe/London", "Europe/London", "🇬🇧", "GMT/BST"),
    TimeZoneDescriptor("Paris", "Europe/Paris", "Europe/Paris", "🇫🇷", "CET/CEST"),
    TimeZoneDescriptor("Zurich", "Europe/Zurich", "Europe/Zurich", "🇨🇭", "CET/CEST"),
    TimeZoneDescriptor("Dubai", "Asia/Dubai", "Asia/Dubai", "🇦🇪", "GST"),
    TimeZoneDescriptor("Singapore", "Asia/Singapore", "Asia/Singapore", "🇸🇬", "SGT"),
    TimeZoneDescriptor("Hong Kong", "Asia/Hong_Kong", "Asia/Hong_Kong", "🇭🇰", "HKT"),
    TimeZoneDescriptor("Shanghai", "Asia/Shanghai", "Asia/Shanghai", "🇨🇳", "CST"),
    TimeZoneDescriptor("Tokyo", "Asia/Tokyo", "Asia/Tokyo", "🇯🇵", "JST"),
    TimeZoneDescriptor("Sydney", "Australia/Sydney", "Australia/Sydney", "🇦🇺", "AEST/AEDT"),
    TimeZoneDescriptor("Melbourne", "Australia/Melbourne", "Australia/Melbourne", "🇦🇺", "AEST/AEDT"),
    TimeZoneDescriptor("Austin", "America/Chicago", "America/Chicago", "🇺🇸", "CST/CDT"),
    TimeZoneDescriptor("New York", "America/New_York", "America/New_York", "🇺🇸", "EST/EDT"),
    TimeZoneDescriptor("San Francisco", "City/San_Francisco", "America/Los_Angeles", "🇺🇸", "PST/PDT"),
    TimeZoneDescriptor("Los Angeles", "America/Los_Angeles", "America/Los_Angeles", "🇺🇸", "PST/PDT"),
)


def readable_zone_name(iana_name: str) -> str:
    """Turn "America/New_York" into "New York"."""
    last_part = iana_name.split("/")[-1]
    return last_part.replace("_", " ").strip() or iana_name


def flag_for(iana_name: str) -> str:
    """Best-effort flag emoji for a zone."""
    if iana_name in _ZONE_FLAGS:
        return _ZONE_FLAGS[iana_name]
    region = iana_name.split("/")[0]
    return _REGION_FLAGS.get(region, "🌍")


def is_valid_iana_name(name: str) -> bool:
    return name in pytz.all_timezones_set


class TimeZoneCatalog:
    """
    Read-only mapping from civil identifiers to TimeZoneDescriptors.

    A civil identifier is whatever key the UI stores for a person; usually it
    is an IANA name, but pseudo keys such as "City/San_Francisco" alias a real
    zone. When ``allow_iana_fallback`` is set, an identifier missing from the
    catalog that is itself a valid IANA name resolves to a synthesized entry.
    """

    def __init__(
        self,
        zones: Optional[Iterable[TimeZoneDescriptor]] = None,
        allow_iana_fallback: bool = True,
        built_at: Optional[datetime] = None
    ):
        """
        Build the catalog.

        Args:
            zones: Entries to register (defaults to DEFAULT_ZONES)
            allow_iana_fallback: Resolve raw IANA names missing from the catalog
            built_at: Instant used to order list() by UTC offset (defaults to now)

        Raises:
            ValueError: On a duplicate civil identifier or an invalid IANA name
        """
        self.allow_iana_fallback = allow_iana_fallback
        self._by_identifier: dict[str, TimeZoneDescriptor] = {}

        for descriptor in (DEFAULT_ZONES if zones is None else zones):
            if descriptor.civil_identifier in self._by_identifier:
                raise ValueError(f"Duplicate civil identifier: {descriptor.civil_identifier!r}")
            if not is_valid_iana_name(descriptor.iana_name):
                raise ValueError(
                    f"Invalid IANA name {descriptor.iana_name!r} for {descriptor.civil_identifier!r}"
                )
            self._by_identifier[descriptor.civil_identifier] = descriptor

        # Ordering is cosmetic; it is frozen at build time and never used for conversions
        instant = built_at or datetime.now(pytz.UTC)
        if instant.tzinfo is None:
            instant = pytz.UTC.localize(instant)
        self._ordered = tuple(sorted(
            self._by_identifier.values(),
            key=lambda d: (instant.astimezone(pytz.timezone(d.iana_name)).utcoffset(), d.display_name)
        ))
        logger.debug("Built timezone catalog with %d zones", len(self._ordered))

    def __contains__(self, civil_identifier: str) -> bool:
        return civil_identifier in self._by_identifier

    def __len__(self) -> int:
        return len(self._by_identifier)

    def resolve(self, civil_identifier: str) -> TimeZoneDescriptor:
        """Look up a civil identifier; raises UnknownZone if it cannot be resolved."""
        descriptor = self._by_identifier.get(civil_identifier)
        if descriptor is not None:
            return descriptor

        if self.allow_iana_fallback and isinstance(civil_identifier, str) and is_valid_iana_name(civil_identifier):
            return TimeZoneDescriptor(
                display_name=readable_zone_name(civil_identifier),
                civil_identifier=civil_identifier,
                iana_name=civil_identifier,
                flag=flag_for(civil_identifier),
            )

        raise UnknownZone(civil_identifier)

    def iana_name(self, civil_identifier: str) -> str:
        return self.resolve(civil_identifier).iana_name

    def tzinfo(self, civil_identifier: str):
        """The pytz zone for a civil identifier."""
        name = self.iana_name(civil_identifier)
        try:
            return pytz.timezone(name)
        except pytz.UnknownTimeZoneError:
            # Stale tz database on the host
            raise UnknownZone(civil_identifier)

    def list(self) -> list[TimeZoneDescriptor]:
        """All entries, ascending by UTC offset at build time, then display name."""
        return list(self._ordered)
