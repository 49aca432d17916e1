"""
Shooting-schedule optimizer.

Builds a multi-day physical shooting schedule from storyboard scenes:
- Duration estimation (on-screen minutes -> shooting minutes)
- Location resolution against the project's location registry
- Location-group-first grouping and greedy daily packing
- Per-day wall-clock timelines, resource breakdowns and CSV exports
"""

from shootplan.scheduling.breakdown import generate_breakdown
from shootplan.scheduling.config import SchedulerConfig, get_scheduler_config
from shootplan.scheduling.export import breakdown_csv, schedule_csv
from shootplan.scheduling.models import (
    Breakdown,
    Day,
    EnrichedScene,
    LocationResolution,
    Schedule,
    Scene,
    TimeBlock,
)
from shootplan.scheduling.optimizer import (
    assign_dates,
    build_schedule,
    generate_schedule,
    parse_scenes,
    scene_fingerprint,
)
from shootplan.scheduling.resolver import (
    HttpLocationResolver,
    LocationNameResolver,
    LocationResolver,
    StaticLocationResolver,
)

__all__ = [
    "Breakdown",
    "Day",
    "EnrichedScene",
    "HttpLocationResolver",
    "LocationNameResolver",
    "LocationResolution",
    "LocationResolver",
    "Schedule",
    "SchedulerConfig",
    "Scene",
    "StaticLocationResolver",
    "TimeBlock",
    "assign_dates",
    "breakdown_csv",
    "build_schedule",
    "generate_breakdown",
    "generate_schedule",
    "get_scheduler_config",
    "parse_scenes",
    "scene_fingerprint",
    "schedule_csv",
]
