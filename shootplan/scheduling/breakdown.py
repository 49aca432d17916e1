"""
Resource breakdown: which scenes need which location, actor, slot or item.
"""

from collections.abc import Iterable

import structlog

from shootplan.scheduling import classification
from shootplan.scheduling.models import Breakdown, Scene, SceneRef

logger = structlog.get_logger()


def _add(bucket: dict[str, list[SceneRef]], keys: Iterable[str], ref: SceneRef) -> None:
    for key in dict.fromkeys(keys):
        bucket.setdefault(key, []).append(ref)


def generate_breakdown(scenes: list[Scene]) -> Breakdown:
    """
    Classify scenes by every resource category.

    Each scene lands once per item it uses (an actor listed twice in one
    scene still counts once). Buckets keep insertion order.
    """
    breakdown = Breakdown()

    for scene in scenes:
        ref = SceneRef(id=scene.id, scene_number=scene.scene_number, title=scene.title)

        _add(breakdown.locations, [classification.location(scene)], ref)
        _add(breakdown.actors, classification.cast(scene), ref)
        _add(breakdown.time_slots, [classification.time_of_day(scene)], ref)
        _add(breakdown.equipment, classification.equipment(scene), ref)
        _add(breakdown.crew, classification.crew(scene), ref)
        _add(breakdown.props, classification.props(scene), ref)
        _add(breakdown.costumes, classification.costumes(scene), ref)
        _add(breakdown.cameras, [classification.camera(scene).key], ref)

    logger.info(
        "Breakdown generated",
        scenes=len(scenes),
        locations=len(breakdown.locations),
        actors=len(breakdown.actors),
    )
    return breakdown
