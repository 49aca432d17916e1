"""
Greedy daily packing of ordered scene groups.

Each location group is consumed in order; a day accumulates scenes until the
next one would push shooting + rehearsal + setup past the daily cap or the
per-day scene limit is reached. The scene that overflows opens the next day.
"""

from dataclasses import dataclass, field

import structlog

from shootplan.scheduling import classification
from shootplan.scheduling.config import SchedulerConfig
from shootplan.scheduling.duration import rehearsal_minutes
from shootplan.scheduling.grouping import SceneGroup
from shootplan.scheduling.models import Day, EnrichedScene

logger = structlog.get_logger()


@dataclass
class _OpenDay:
    """Day still accumulating scenes."""

    group: SceneGroup
    scenes: list[EnrichedScene] = field(default_factory=list)
    shooting_minutes: int = 0
    rehearsal_minutes: int = 0
    setup_minutes: int = 0

    @property
    def running_total(self) -> int:
        return self.shooting_minutes + self.rehearsal_minutes + self.setup_minutes

    def setup_for(self, scene: EnrichedScene, config: SchedulerConfig) -> int:
        if self.scenes and self.scenes[-1].real_location_id != scene.real_location_id:
            return config.setup_minutes
        return 0

    def add(self, scene: EnrichedScene, config: SchedulerConfig) -> None:
        self.setup_minutes += self.setup_for(scene, config)
        self.rehearsal_minutes += rehearsal_minutes(scene.shooting_minutes, config.rehearsal_ratio)
        self.shooting_minutes += scene.shooting_minutes
        self.scenes.append(scene)

    def close(self, day_index: int) -> Day:
        return Day(
            day_index=day_index,
            location_group_id=self.group.location_group_id,
            location_group_name=self.group.location_group_name,
            scenes=list(self.scenes),
            total_shooting_minutes=self.shooting_minutes,
            rehearsal_minutes=self.rehearsal_minutes,
            setup_minutes=self.setup_minutes,
            required_crew=classification.required_crew(self.scenes),
            required_equipment=classification.required_equipment(self.scenes),
        )


def pack_days(groups: list[SceneGroup], config: SchedulerConfig) -> list[Day]:
    """
    Pack ordered scene groups into shooting days.

    A day never spans two location groups and always holds at least one
    scene. A scene whose own time exceeds the cap occupies a day alone.

    Args:
        groups: Location groups in shooting order
        config: Scheduler constants (daily cap, rehearsal ratio, setup, limits)

    Returns:
        Days with `day_index` assigned sequentially from 1 (timelines empty)
    """
    days: list[Day] = []

    for group in groups:
        current = _OpenDay(group=group)

        for scene in group.scenes:
            needed = (
                scene.shooting_minutes
                + rehearsal_minutes(scene.shooting_minutes, config.rehearsal_ratio)
                + current.setup_for(scene, config)
            )
            over_cap = current.running_total + needed > config.daily_cap_minutes
            full = len(current.scenes) >= config.max_scenes_per_day

            if current.scenes and (over_cap or full):
                days.append(current.close(len(days) + 1))
                logger.debug(
                    "Day closed",
                    day=len(days),
                    group=group.location_group_id,
                    reason="cap" if over_cap else "scene_limit",
                )
                current = _OpenDay(group=group)

            current.add(scene, config)

            if current.running_total > config.daily_cap_minutes:
                logger.warning(
                    "Scene exceeds daily cap on its own",
                    scene_number=scene.scene_number,
                    minutes=current.running_total,
                    cap=config.daily_cap_minutes,
                )

        if current.scenes:
            days.append(current.close(len(days) + 1))

    logger.info("Days packed", days=len(days), groups=len(groups))
    return days
