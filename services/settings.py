"""Planner configuration loaded from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Defaults for grids and proposals."""
    reference_zone: str = "America/New_York"
    slot_start_hour: int = 6
    slot_end_hour: int = 23
    slot_step_minutes: int = 60
    meeting_duration: int = 60
    meeting_title: str = "Weekly Team Sync"
    strict_zones: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        if not 0 <= self.slot_start_hour <= self.slot_end_hour <= 24:
            raise ValueError(f"Invalid slot hours {self.slot_start_hour}-{self.slot_end_hour}")
        if self.slot_step_minutes <= 0:
            raise ValueError("SCHEDULER_SLOT_STEP_MINUTES must be positive")
        if self.meeting_duration <= 0:
            raise ValueError("SCHEDULER_MEETING_DURATION must be positive")

    @classmethod
    def from_env(cls) -> "Settings":
        """Read SCHEDULER_* variables, falling back to the defaults above."""
        return cls(
            reference_zone=os.getenv("SCHEDULER_REFERENCE_ZONE", cls.reference_zone),
            slot_start_hour=_int_env("SCHEDULER_SLOT_START_HOUR", cls.slot_start_hour),
            slot_end_hour=_int_env("SCHEDULER_SLOT_END_HOUR", cls.slot_end_hour),
            slot_step_minutes=_int_env("SCHEDULER_SLOT_STEP_MINUTES", cls.slot_step_minutes),
            meeting_duration=_int_env("SCHEDULER_MEETING_DURATION", cls.meeting_duration),
            meeting_title=os.getenv("SCHEDULER_MEETING_TITLE", cls.meeting_title),
            strict_zones=_bool_env("SCHEDULER_STRICT_ZONES", cls.strict_zones),
            log_level=os.getenv("SCHEDULER_LOG_LEVEL", cls.log_level).upper(),
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Apply a basic logging setup; ``level`` defaults to SCHEDULER_LOG_LEVEL."""
    level_name = (level or os.getenv("SCHEDULER_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
