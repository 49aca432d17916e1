"""
Per-scene classification for scheduling and breakdown reports.

Each extractor is total: it returns a documented default when the scene
carries no usable metadata and never raises.
"""

from pydantic import BaseModel

from shootplan.scheduling.models import Scene

UNDECIDED = "미정"
DEFAULT_TIME_OF_DAY = "오후"

DEFAULT_EQUIPMENT = ["카메라", "조명", "마이크"]
DEFAULT_CREW = ["감독", "촬영감독", "카메라맨"]
DEFAULT_PROPS = ["기본 소품"]
DEFAULT_COSTUMES = ["기본 의상"]

DAY_SLOTS = {"낮", "오전", "오후", "아침", "day", "morning", "afternoon"}
NIGHT_SLOTS = {"밤", "저녁", "새벽", "night", "evening", "dawn"}

DAY_BUCKET = "낮"
NIGHT_BUCKET = "밤"

# Keywords in a scene description that pull extra people onto the call sheet
CREW_KEYWORDS = [
    "배우", "엑스트라", "스턴트", "메이크업", "의상", "소품",
    "actor", "extra", "stunt", "makeup", "costume", "prop",
]

# Keywords in a scene description that require extra gear
EQUIPMENT_KEYWORDS = [
    "크레인", "돌리", "스테디캠", "그린스크린", "스탠드",
    "crane", "dolly", "steadicam", "greenscreen", "stand",
]


class CameraInfo(BaseModel):
    """Camera setup of a scene for the camera breakdown."""

    model: str = "기본 카메라"
    lens: str = "기본 렌즈"
    settings: str = "기본 설정"
    movement: str = "고정"
    angle: str = ""
    work: str = ""

    @property
    def key(self) -> str:
        return f"{self.model} - {self.lens}"


def location(scene: Scene) -> str:
    """Shooting location name, "미정" when not chosen yet."""
    return scene.location or UNDECIDED


def time_of_day(scene: Scene) -> str:
    """Time-of-day preference, "오후" when not given."""
    return scene.time_of_day or DEFAULT_TIME_OF_DAY


def time_slot_bucket(scene: Scene) -> str:
    """Collapse the time-of-day preference into 낮 / 밤 / 미정."""
    slot = time_of_day(scene).lower()
    if slot in DAY_SLOTS:
        return DAY_BUCKET
    if slot in NIGHT_SLOTS:
        return NIGHT_BUCKET
    return UNDECIDED


def cast(scene: Scene) -> list[str]:
    return list(scene.cast)


def equipment(scene: Scene) -> list[str]:
    return list(scene.equipment) or list(DEFAULT_EQUIPMENT)


def crew(scene: Scene) -> list[str]:
    return list(scene.crew) or list(DEFAULT_CREW)


def props(scene: Scene) -> list[str]:
    return list(scene.props) or list(DEFAULT_PROPS)


def costumes(scene: Scene) -> list[str]:
    return list(scene.costumes) or list(DEFAULT_COSTUMES)


def camera(scene: Scene) -> CameraInfo:
    """Camera model, lens and movement, taken from the cinematography department."""
    info = CameraInfo(angle=scene.camera_angle, work=scene.camera_work)
    if scene.cameras:
        info.model = scene.cameras[0]
    if scene.lenses:
        info.lens = scene.lenses[0]
    if scene.filters:
        info.settings = ", ".join(scene.filters)
    if scene.supports:
        info.movement = scene.supports[0]
    return info


def _keywords_in(text: str, keywords: list[str]) -> list[str]:
    lowered = text.lower()
    return [keyword for keyword in keywords if keyword.lower() in lowered]


def required_crew(scenes: list[Scene]) -> list[str]:
    """
    People needed for a set of scenes.

    Union of the baseline crew, every scene's crew list and the crew keywords
    found in scene descriptions, sorted for stable output.
    """
    needed = set(DEFAULT_CREW)
    for scene in scenes:
        needed.update(scene.crew)
        needed.update(_keywords_in(scene.description, CREW_KEYWORDS))
    return sorted(needed)


def required_equipment(scenes: list[Scene]) -> list[str]:
    """Gear needed for a set of scenes (baseline + listed + description keywords)."""
    needed = set(DEFAULT_EQUIPMENT)
    for scene in scenes:
        needed.update(scene.equipment)
        needed.update(_keywords_in(scene.description, EQUIPMENT_KEYWORDS))
    return sorted(needed)
