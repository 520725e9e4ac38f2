"""Shared test fixtures for the planner tests.

Provides a catalog built at a fixed instant, the services wired on top of it
and the sample team from the planner's demo data.
"""

from datetime import datetime

import pytest
import pytz

from models.entities import Person
from services.availability_engine import AvailabilityEngine
from services.offset_resolver import OffsetResolver
from services.proposal_renderer import ProposalRenderer
from services.time_converter import CivilTimeConverter
from services.timezone_catalog import TimeZoneCatalog


# ─────────────────────────────────────────────────────────────────────────────
# Service Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def catalog() -> TimeZoneCatalog:
    """Default catalog, ordered as of mid-January 2025."""
    return TimeZoneCatalog(built_at=datetime(2025, 1, 15, 12, tzinfo=pytz.UTC))


@pytest.fixture
def converter(catalog) -> CivilTimeConverter:
    return CivilTimeConverter(catalog)


@pytest.fixture
def resolver(catalog, converter) -> OffsetResolver:
    return OffsetResolver(catalog, converter)


@pytest.fixture
def engine(converter) -> AvailabilityEngine:
    return AvailabilityEngine(converter)


@pytest.fixture
def renderer(catalog, converter, resolver) -> ProposalRenderer:
    return ProposalRenderer(catalog, converter, resolver)


# ─────────────────────────────────────────────────────────────────────────────
# People
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def alex() -> Person:
    return Person(1, "Alex Johnson", "America/New_York", "08:00", "17:00", "United States", "🇺🇸")


@pytest.fixture
def emma() -> Person:
    return Person(2, "Emma Davies", "Europe/London", "08:00", "18:00", "United Kingdom", "🇬🇧")


@pytest.fixture
def hiroshi() -> Person:
    return Person(3, "Hiroshi Tanaka", "Asia/Tokyo", "09:00", "18:00", "Japan", "🇯🇵")


@pytest.fixture
def sarah() -> Person:
    return Person(4, "Sarah Miller", "Australia/Sydney", "09:00", "17:00", "Australia", "🇦🇺")


@pytest.fixture
def team(alex, emma, hiroshi, sarah) -> list[Person]:
    return [alex, emma, hiroshi, sarah]
