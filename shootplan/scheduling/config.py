"""
Configuration for the shooting-schedule optimizer.

Every tuning constant used by the packer and the timeline lives here so the
behaviour can be changed per deployment through environment variables:

- SCHEDULER_SHOOTING_RATIO: real shooting minutes per on-screen minute
- SCHEDULER_DAILY_CAP_MINUTES: shooting budget of one day (shooting + rehearsal + setup)
- SCHEDULER_DAY_START: wall-clock start of a shooting day ("HH:MM")
"""

import re
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def clock_to_minutes(value: str) -> int:
    """Convert an "HH:MM" clock string to minutes after midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class SchedulerConfig(BaseSettings):
    """Tuning constants for the schedule optimizer."""

    # Duration estimation
    shooting_ratio: float = 60.0
    fallback_on_screen_minutes: float = 5.0

    # Daily packing
    daily_cap_minutes: int = 360
    rehearsal_ratio: float = 0.2
    setup_minutes: int = 30
    max_scenes_per_day: int = 6

    # Timeline
    day_start: str = "06:00"
    assembly_minutes: int = 60
    travel_minutes: int = 60
    lunch_at: str = "12:00"
    dinner_at: str = "18:00"
    meal_minutes: int = 60
    meal_window_minutes: int = 60
    wrap_minutes: int = 60

    # Scoring
    long_scene_minutes: float = 8.0
    efficiency_reference_score: int = 2000

    class Config:
        env_prefix = "SCHEDULER_"
        case_sensitive = False

    @field_validator("shooting_ratio", "fallback_on_screen_minutes")
    @classmethod
    def _positive_float(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("daily_cap_minutes", "max_scenes_per_day", "efficiency_reference_score")
    @classmethod
    def _positive_int(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator(
        "setup_minutes",
        "assembly_minutes",
        "travel_minutes",
        "meal_minutes",
        "meal_window_minutes",
        "wrap_minutes",
    )
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("rehearsal_ratio")
    @classmethod
    def _ratio_range(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("must be between 0 and 1")
        return value

    @field_validator("day_start", "lunch_at", "dinner_at")
    @classmethod
    def _clock(cls, value: str) -> str:
        if not CLOCK_PATTERN.match(value):
            raise ValueError(f"expected HH:MM, got {value!r}")
        return value

    @model_validator(mode="after")
    def _meals_in_order(self) -> "SchedulerConfig":
        if clock_to_minutes(self.lunch_at) >= clock_to_minutes(self.dinner_at):
            raise ValueError("lunch_at must be earlier than dinner_at")
        return self

    @property
    def day_start_minute(self) -> int:
        return clock_to_minutes(self.day_start)

    @property
    def lunch_minute(self) -> int:
        return clock_to_minutes(self.lunch_at)

    @property
    def dinner_minute(self) -> int:
        return clock_to_minutes(self.dinner_at)


@lru_cache(maxsize=1)
def get_scheduler_config() -> SchedulerConfig:
    """Get cached scheduler configuration from environment.

    Raises pydantic.ValidationError when a constant is out of range, which
    aborts application startup.
    """
    return SchedulerConfig()
