"""Errors raised by the scheduling services."""


class SchedulingError(Exception):
    """Base class for all planner errors."""


class InvalidTimeFormat(SchedulingError, ValueError):
    """A civil time string could not be parsed."""


class InvalidDateFormat(SchedulingError, ValueError):
    """A calendar date string could not be parsed."""


class UnknownZone(SchedulingError, LookupError):
    """A zone identifier is not in the catalog or the tz database."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Unknown timezone: {identifier!r}")


class ConversionFailure(SchedulingError):
    """The timezone database could not convert a civil moment."""
