"""
Wall-clock timeline of a shooting day.

Blocks are laid out by successive addition from the day start:
집합 -> 이동 -> 리허설 -> (meal / 세팅 / 촬영 per scene) -> 정리.
"""

import structlog

from shootplan.scheduling.config import SchedulerConfig
from shootplan.scheduling.models import ActivityType, Day, EnrichedScene, TimeBlock

logger = structlog.get_logger()

MINUTES_PER_DAY = 24 * 60


def format_clock(minute: int) -> str:
    """Format minutes after midnight as "HH:MM", wrapping past midnight."""
    minute %= MINUTES_PER_DAY
    return f"{minute // 60:02d}:{minute % 60:02d}"


def _block(
    start: int,
    duration: int,
    activity: ActivityType,
    description: str = "",
    scene_number: int | None = None,
) -> TimeBlock:
    return TimeBlock(
        start_time=format_clock(start),
        end_time=format_clock(start + duration),
        start_minute=start,
        end_minute=start + duration,
        activity=activity,
        description=description,
        scene_number=scene_number,
    )


def _meal_due(clock: int, meal_at: int, upcoming: int, config: SchedulerConfig) -> bool:
    """
    A meal is due when the clock has reached the meal hour, or is inside the
    window before it and the next scene would run past it.
    """
    if clock >= meal_at:
        return True
    return clock >= meal_at - config.meal_window_minutes and clock + upcoming > meal_at


def _scene_label(scene: EnrichedScene) -> str:
    label = f"씬 {scene.scene_number}"
    if scene.title:
        label = f"{label} {scene.title}"
    return label


def build_timeline(day: Day, config: SchedulerConfig) -> list[TimeBlock]:
    """
    Expand a packed day into contiguous wall-clock blocks.

    Args:
        day: Packed day (scenes in shooting order)
        config: Clock, block lengths and meal hours

    Returns:
        Blocks in chronological order; each block starts where the previous ends
    """
    clock = config.day_start_minute
    blocks: list[TimeBlock] = []

    def append(duration: int, activity: ActivityType, description: str = "", scene_number: int | None = None):
        nonlocal clock
        blocks.append(_block(clock, duration, activity, description, scene_number))
        clock += duration

    append(config.assembly_minutes, ActivityType.ASSEMBLY, "스태프 및 배우 집합")
    append(config.travel_minutes, ActivityType.TRAVEL, day.location_group_name or "촬영지 이동")
    if day.rehearsal_minutes > 0:
        append(day.rehearsal_minutes, ActivityType.REHEARSAL, "전체 리허설")

    lunch_taken = False
    dinner_taken = False
    previous: EnrichedScene | None = None

    for scene in day.scenes:
        needs_setup = previous is not None and previous.real_location_id != scene.real_location_id
        upcoming = scene.shooting_minutes + (config.setup_minutes if needs_setup else 0)

        if not dinner_taken and _meal_due(clock, config.dinner_minute, upcoming, config):
            # Once dinner is due a missed lunch is dropped
            lunch_taken = True
            dinner_taken = True
            append(config.meal_minutes, ActivityType.DINNER, "저녁 식사")
        elif not lunch_taken and _meal_due(clock, config.lunch_minute, upcoming, config):
            lunch_taken = True
            append(config.meal_minutes, ActivityType.LUNCH, "점심 식사")
            if not dinner_taken and _meal_due(clock, config.dinner_minute, upcoming, config):
                dinner_taken = True
                append(config.meal_minutes, ActivityType.DINNER, "저녁 식사")

        if needs_setup:
            append(
                config.setup_minutes,
                ActivityType.SETUP,
                scene.real_location_name or scene.location or "장소 세팅",
                scene.scene_number,
            )

        append(scene.shooting_minutes, ActivityType.SHOOTING, _scene_label(scene), scene.scene_number)
        previous = scene

    append(config.wrap_minutes, ActivityType.WRAP, "장비 정리 및 해산")

    if clock >= MINUTES_PER_DAY:
        logger.warning("Timeline runs past midnight", day_index=day.day_index, end=format_clock(clock))

    return blocks
