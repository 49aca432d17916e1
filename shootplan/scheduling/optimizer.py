"""
Shooting-schedule optimizer.

Turns a flat list of storyboard scenes into a multi-day shooting schedule:
scenes are ingested, their durations estimated, their locations resolved
(the only step that touches the network), then grouped, packed into days and
laid out on a wall-clock timeline.
"""

import hashlib
import json
from datetime import date, timedelta
from typing import Any

import structlog

from shootplan.scheduling.config import SchedulerConfig, get_scheduler_config
from shootplan.scheduling.duration import parse_on_screen_minutes, to_shooting_minutes
from shootplan.scheduling.grouping import combination_score, group_scenes
from shootplan.scheduling.models import (
    Day,
    EnrichedScene,
    LocationResolution,
    OptimizationScore,
    Schedule,
    Scene,
)
from shootplan.scheduling.packer import pack_days
from shootplan.scheduling.resolver import LocationResolver, resolve_locations
from shootplan.scheduling.timeline import build_timeline

logger = structlog.get_logger()

NO_SCENES_MESSAGE = "촬영할 씬이 없습니다."
NO_LIVE_ACTION_MESSAGE = "실사 촬영용 씬이 없습니다."

# Scene types that are shot on set; scenes without a type count as live action
LIVE_ACTION_TYPES = {"live_action", "LIVE_ACTION", "실사 촬영용"}


def parse_scenes(raw: list[Any]) -> list[Scene]:
    """
    Ingest raw scene payloads.

    Mappings always produce a Scene (bad fields fall back to defaults);
    anything else in the list is dropped with a warning.
    """
    scenes: list[Scene] = []
    for index, item in enumerate(raw):
        if isinstance(item, Scene):
            scenes.append(item)
        elif isinstance(item, dict):
            scenes.append(Scene.model_validate(item))
        else:
            logger.warning("Dropping non-object scene entry", index=index, entry_type=type(item).__name__)
    return scenes


def is_live_action(scene: Scene) -> bool:
    return scene.scene_type is None or scene.scene_type in LIVE_ACTION_TYPES


def enrich_scene(
    scene: Scene,
    resolution: LocationResolution,
    config: SchedulerConfig,
) -> EnrichedScene:
    """Attach duration estimates and the resolved location to a scene."""
    on_screen = parse_on_screen_minutes(scene.on_screen_duration_text, config.fallback_on_screen_minutes)
    return EnrichedScene(
        **scene.model_dump(),
        on_screen_minutes=on_screen,
        shooting_minutes=to_shooting_minutes(on_screen, config.shooting_ratio),
        location_group_id=resolution.location_group_id,
        location_group_name=resolution.group_name,
        real_location_id=resolution.real_location_id,
        real_location_name=resolution.real_location_name,
        location_resolved=resolution.resolved,
    )


def scene_fingerprint(scenes: list[Scene]) -> str:
    """SHA-256 over the canonical JSON of the ingested scenes."""
    payload = json.dumps(
        [scene.model_dump(mode="json") for scene in scenes],
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def calculate_optimization_score(days: list[Day], config: SchedulerConfig) -> OptimizationScore:
    """
    Advisory quality score of a packed schedule.

    A schedule of one day holding one scene has no adjacency to score, so its
    efficiency is graded by the scene's on-screen length instead.
    """
    if not days:
        return OptimizationScore()

    total = sum(day.optimization_score for day in days)
    average = total / len(days)

    if len(days) == 1 and len(days[0].scenes) == 1:
        minutes = days[0].scenes[0].on_screen_minutes
        if minutes < 30:
            efficiency = 60
        elif minutes <= 60:
            efficiency = 70
        else:
            efficiency = 80
    else:
        efficiency = min(100, round(average / config.efficiency_reference_score * 100))

    return OptimizationScore(total=total, average=round(average, 2), efficiency_percent=efficiency)


def build_schedule(enriched: list[EnrichedScene], config: SchedulerConfig) -> Schedule:
    """
    Pure scheduling phase: group, pack, lay out timelines and score.

    Deterministic for a given input; safe to call repeatedly.
    """
    groups = group_scenes(enriched)
    days = pack_days(groups, config)

    for day in days:
        day.timeline = build_timeline(day, config)
        day.optimization_score = combination_score(day.scenes, config)

    return Schedule(
        days=days,
        total_days=len(days),
        total_scenes=sum(len(day.scenes) for day in days),
        total_shooting_minutes=sum(day.total_shooting_minutes for day in days),
        optimization_score=calculate_optimization_score(days, config),
    )


async def generate_schedule(
    scenes: list[Any],
    resolver: LocationResolver,
    config: SchedulerConfig | None = None,
    project_id: str = "",
    max_concurrent: int = 10,
    timeout: float = 5.0,
) -> Schedule:
    """
    Generate a complete shooting schedule.

    Args:
        scenes: Scene objects or raw scene mappings
        resolver: Location registry collaborator
        config: Scheduler constants (defaults to the environment configuration)
        project_id: Project the scenes belong to, forwarded to the resolver
        max_concurrent: Maximum location lookups in flight
        timeout: Seconds allowed per location lookup

    Returns:
        Schedule; an empty one with `message` set when nothing can be shot
    """
    config = config or get_scheduler_config()
    parsed = parse_scenes(scenes)

    if not parsed:
        logger.info("No scenes to schedule")
        return Schedule(message=NO_SCENES_MESSAGE)

    live_action = [scene for scene in parsed if is_live_action(scene)]
    if not live_action:
        logger.info("No live-action scenes to schedule", scenes=len(parsed))
        return Schedule(message=NO_LIVE_ACTION_MESSAGE, fingerprint=scene_fingerprint(parsed))

    resolutions = await resolve_locations(
        live_action,
        resolver,
        project_id=project_id,
        max_concurrent=max_concurrent,
        timeout=timeout,
    )
    enriched = [
        enrich_scene(scene, resolution, config)
        for scene, resolution in zip(live_action, resolutions)
    ]

    schedule = build_schedule(enriched, config)
    schedule.fingerprint = scene_fingerprint(parsed)
    schedule.warnings = [
        f"씬 {scene.scene_number}: 촬영 장소를 확인하지 못해 단독 일정으로 배치했습니다."
        for scene in enriched
        if not scene.location_resolved
    ]

    logger.info(
        "Schedule generated",
        project_id=project_id,
        total_days=schedule.total_days,
        total_scenes=schedule.total_scenes,
        skipped=len(parsed) - len(live_action),
        unresolved=len(schedule.warnings),
    )
    return schedule


def assign_dates(schedule: Schedule, start_date: date) -> Schedule:
    """Copy of the schedule with consecutive ISO calendar dates per day."""
    dated = schedule.model_copy(deep=True)
    for offset, day in enumerate(dated.days):
        day.date = (start_date + timedelta(days=offset)).isoformat()
    return dated
