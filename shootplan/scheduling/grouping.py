"""
Grouping and ordering of enriched scenes.

Scenes are clustered by location group first, then by real location and
time-of-day bucket, so the packer sees every building's work back to back.
"""

from collections import defaultdict
from dataclasses import dataclass, field

import structlog

from shootplan.scheduling import classification
from shootplan.scheduling.classification import DAY_BUCKET, NIGHT_BUCKET, UNDECIDED
from shootplan.scheduling.config import SchedulerConfig
from shootplan.scheduling.models import EnrichedScene

logger = structlog.get_logger()

# Day scenes before night scenes; scenes without a usable preference last
TIME_BUCKET_ORDER = [DAY_BUCKET, NIGHT_BUCKET, UNDECIDED]

# Adjacency bonuses of the combination score
SAME_LOCATION_BONUS = 1000
SHARED_CAST_BONUS = 500
SAME_TIME_SLOT_BONUS = 200
SHARED_EQUIPMENT_BONUS = 100
LONG_SCENES_BONUS = 50


@dataclass
class SceneGroup:
    """Scenes sharing a location group, in shooting order."""

    location_group_id: str
    location_group_name: str
    scenes: list[EnrichedScene] = field(default_factory=list)
    resolved: bool = True


def order_group(scenes: list[EnrichedScene]) -> list[EnrichedScene]:
    """
    Order the scenes of one location group.

    Real locations keep their first-encountered order; inside a real location
    scenes run 낮 -> 밤 -> 미정, each bucket by ascending scene number.
    """
    by_real_location: dict[str, list[EnrichedScene]] = defaultdict(list)
    for scene in scenes:
        by_real_location[scene.real_location_id].append(scene)

    ordered: list[EnrichedScene] = []
    for bucket in by_real_location.values():
        ordered.extend(
            sorted(
                bucket,
                key=lambda s: (
                    TIME_BUCKET_ORDER.index(classification.time_slot_bucket(s)),
                    s.scene_number,
                ),
            )
        )
    return ordered


def group_scenes(scenes: list[EnrichedScene]) -> list[SceneGroup]:
    """
    Cluster enriched scenes by location group.

    Groups appear in order of their lowest scene number. Unresolved scenes
    each form their own group and are never merged with one another.
    """
    groups: list[SceneGroup] = []
    by_id: dict[str, SceneGroup] = {}

    for scene in sorted(scenes, key=lambda s: s.scene_number):
        if not scene.location_resolved:
            groups.append(
                SceneGroup(
                    location_group_id=scene.location_group_id,
                    location_group_name=scene.location_group_name,
                    scenes=[scene],
                    resolved=False,
                )
            )
            continue

        group = by_id.get(scene.location_group_id)
        if group is None:
            group = SceneGroup(
                location_group_id=scene.location_group_id,
                location_group_name=scene.location_group_name,
            )
            by_id[scene.location_group_id] = group
            groups.append(group)
        group.scenes.append(scene)

    for group in groups:
        group.scenes = order_group(group.scenes)

    logger.info(
        "Scenes grouped",
        groups=len(groups),
        unresolved=sum(1 for group in groups if not group.resolved),
    )
    return groups


def _location_key(scene: EnrichedScene) -> str:
    if scene.location_resolved:
        return scene.real_location_id
    return classification.location(scene)


def combination_score(scenes: list[EnrichedScene], config: SchedulerConfig) -> int:
    """
    Heuristic score of a scene ordering, rewarding adjacent scenes that share
    location, cast, time slot, equipment, or are both long.
    """
    score = 0
    for prev, curr in zip(scenes, scenes[1:]):
        if _location_key(prev) == _location_key(curr):
            score += SAME_LOCATION_BONUS

        if set(classification.cast(prev)) & set(classification.cast(curr)):
            score += SHARED_CAST_BONUS

        prev_slot = classification.time_of_day(prev)
        if prev_slot == classification.time_of_day(curr) and prev_slot != UNDECIDED:
            score += SAME_TIME_SLOT_BONUS

        if set(classification.equipment(prev)) & set(classification.equipment(curr)):
            score += SHARED_EQUIPMENT_BONUS

        if (
            prev.on_screen_minutes >= config.long_scene_minutes
            and curr.on_screen_minutes >= config.long_scene_minutes
        ):
            score += LONG_SCENES_BONUS

    return score
