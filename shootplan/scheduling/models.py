"""
Data models for the shooting-schedule optimizer.

Defines the input (Scene, as stored by the storyboard editor), the enriched
scene used by the packer, and the output schedule/breakdown schemas.
"""

import math
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

# Keys of the loosely-typed keyword bag and the Scene field each one fills
KEYWORD_FIELDS: dict[str, str] = {
    "location": "location",
    "cast": "cast",
    "timeOfDay": "time_of_day",
    "time_of_day": "time_of_day",
    "props": "props",
    "costumes": "costumes",
    "equipment": "equipment",
    "specialRequirements": "special_requirements",
}

# Placeholder the storyboard editor writes when no location was chosen
PLACEHOLDER_LOCATIONS = {"기본 장소"}

# scheduling.crew roles and the placeholder the editor stores when a role is unassigned
SCHEDULING_CREW_PLACEHOLDERS = {
    "director": "감독",
    "cinematographer": "촬영감독",
    "cameraOperator": "카메라맨",
    "lightingDirector": "조명감독",
    "makeupArtist": "메이크업",
    "costumeDesigner": "의상",
    "soundEngineer": "음향감독",
    "artDirector": "미술감독",
}

# scheduling.equipment lists, in call-sheet order
SCHEDULING_EQUIPMENT_KEYS = ["cameras", "lenses", "lighting", "audio", "grip", "special"]

# scheduling.camera fields and their placeholders
SCHEDULING_CAMERA_PLACEHOLDERS = {
    "model": "기본 카메라",
    "lens": "기본 렌즈",
    "settings": "기본 설정",
    "movement": "고정",
}


class ActivityType(str, Enum):
    """Kinds of blocks in a day's timeline."""

    ASSEMBLY = "집합"
    TRAVEL = "이동"
    REHEARSAL = "리허설"
    SETUP = "세팅"
    SHOOTING = "촬영"
    LUNCH = "점심"
    DINNER = "저녁"
    WRAP = "정리"


def _flatten(value: Any) -> list[str]:
    """Flatten strings, lists and departmental dicts into a list of names."""
    if value is None or isinstance(value, bool):
        return []
    if isinstance(value, str):
        text = value.strip()
        return [text] if text else []
    if isinstance(value, (int, float)):
        return [str(value)]
    if isinstance(value, dict):
        items: list[str] = []
        for nested in value.values():
            items.extend(_flatten(nested))
        return items
    if isinstance(value, (list, tuple, set)):
        items = []
        for nested in value:
            items.extend(_flatten(nested))
        return items
    return []


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _assigned(section: dict, placeholders: dict[str, str]) -> dict[str, str]:
    """Fields of a scheduling section that hold something other than their placeholder."""
    values = {}
    for key, placeholder in placeholders.items():
        value = section.get(key)
        if isinstance(value, str) and value.strip() and value.strip() != placeholder:
            values[key] = value.strip()
    return values


def _apply_scheduling(data: dict, scheduling: dict) -> None:
    """
    Fill crew, equipment and camera fields from the editor's `scheduling`
    object when the scene leaves them empty.
    """
    crew = scheduling.get("crew")
    if isinstance(crew, dict) and _is_empty(data.get("crew")):
        names = list(_assigned(crew, SCHEDULING_CREW_PLACEHOLDERS).values())
        names.extend(_flatten(crew.get("additionalCrew")))
        if names:
            data["crew"] = _unique(names)

    equipment = scheduling.get("equipment")
    equipment = equipment if isinstance(equipment, dict) else {}
    camera = scheduling.get("camera")
    camera = _assigned(camera, SCHEDULING_CAMERA_PLACEHOLDERS) if isinstance(camera, dict) else {}

    if _is_empty(data.get("equipment")):
        items: list[str] = []
        for key in SCHEDULING_EQUIPMENT_KEYS:
            items.extend(_flatten(equipment.get(key)))
        items.extend(camera[key] for key in ("model", "lens", "movement") if key in camera)
        if items:
            data["equipment"] = _unique(items)

    # Scene field -> (scheduling.camera key, scheduling.equipment list)
    camera_fields = {
        "cameras": ("model", "cameras"),
        "lenses": ("lens", "lenses"),
        "filters": ("settings", None),
        "supports": ("movement", None),
    }
    for field_name, (camera_key, equipment_key) in camera_fields.items():
        if not _is_empty(data.get(field_name)):
            continue
        values = [camera[camera_key]] if camera_key in camera else []
        if equipment_key:
            values.extend(_flatten(equipment.get(equipment_key)))
        if values:
            data[field_name] = _unique(values)


class Scene(BaseModel):
    """
    A storyboard scene as handed to the optimizer.

    Accepts snake_case, camelCase and the legacy storyboard keys. Wrong-typed
    fields fall back to their defaults instead of failing validation, so a
    mapping always produces a Scene.
    """

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id", "sceneId"))
    scene_number: int = Field(
        default=0, validation_alias=AliasChoices("scene_number", "sceneNumber", "scene")
    )
    title: str = ""
    description: str = ""
    on_screen_duration_text: str = Field(
        default="",
        validation_alias=AliasChoices(
            "on_screen_duration_text", "onScreenDurationText", "estimatedDuration", "duration"
        ),
    )
    location: str = ""
    cast: list[str] = Field(default_factory=list)
    time_of_day: str = Field(default="", validation_alias=AliasChoices("time_of_day", "timeOfDay"))
    equipment: list[str] = Field(default_factory=list)
    crew: list[str] = Field(default_factory=list)
    props: list[str] = Field(default_factory=list)
    costumes: list[str] = Field(default_factory=list)
    special_requirements: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("special_requirements", "specialRequirements"),
    )
    scene_type: str | None = Field(default=None, validation_alias=AliasChoices("scene_type", "type"))

    # Camera details (taken from the cinematography department when present)
    cameras: list[str] = Field(default_factory=list)
    lenses: list[str] = Field(default_factory=list)
    filters: list[str] = Field(default_factory=list)
    supports: list[str] = Field(default_factory=list)
    camera_angle: str = Field(default="", validation_alias=AliasChoices("camera_angle", "cameraAngle"))
    camera_work: str = Field(default="", validation_alias=AliasChoices("camera_work", "cameraWork"))

    @model_validator(mode="before")
    @classmethod
    def _ingest(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        # Keyword bag only fills fields the scene itself leaves empty
        keywords = data.pop("keywords", None)
        if isinstance(keywords, dict):
            for key, field_name in KEYWORD_FIELDS.items():
                if key in keywords and all(
                    _is_empty(data.get(alias)) for alias in _aliases(field_name)
                ):
                    data[field_name] = keywords[key]

        location = data.get("location")
        if isinstance(location, dict):
            data["location"] = location.get("name") or ""
        if isinstance(data.get("location"), str) and data["location"].strip() in PLACEHOLDER_LOCATIONS:
            data["location"] = ""

        equipment = data.get("equipment")
        if isinstance(equipment, dict):
            cinematography = equipment.get("cinematography")
            if isinstance(cinematography, dict):
                for key in ("cameras", "lenses", "filters", "supports"):
                    if _is_empty(data.get(key)):
                        data[key] = cinematography.get(key)
            art = equipment.get("art")
            if isinstance(art, dict) and _is_empty(data.get("costumes")):
                data["costumes"] = art.get("costumes")

        scheduling = data.pop("scheduling", None)
        if isinstance(scheduling, dict):
            _apply_scheduling(data, scheduling)

        return data

    @field_validator(
        "id",
        "title",
        "description",
        "on_screen_duration_text",
        "location",
        "time_of_day",
        "camera_angle",
        "camera_work",
        mode="before",
    )
    @classmethod
    def _as_text(cls, value: Any) -> str:
        if value is None or isinstance(value, bool):
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, (int, float)):
            return str(value)
        return ""

    @field_validator("scene_type", mode="before")
    @classmethod
    def _as_optional_text(cls, value: Any) -> str | None:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    @field_validator(
        "cast",
        "equipment",
        "crew",
        "props",
        "costumes",
        "special_requirements",
        "cameras",
        "lenses",
        "filters",
        "supports",
        mode="before",
    )
    @classmethod
    def _as_text_list(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return _flatten(value)

    @field_validator("scene_number", mode="before")
    @classmethod
    def _as_scene_number(cls, value: Any) -> int:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value
        try:
            if isinstance(value, float):
                number = value
            elif isinstance(value, str):
                number = float(value.strip())
            else:
                return 0
        except (ValueError, OverflowError):
            return 0
        # NaN, "inf" and "1e999" carry no usable scene number
        if not math.isfinite(number):
            return 0
        return int(number)


def _aliases(field_name: str) -> list[str]:
    """All input keys that populate a Scene field."""
    alias = Scene.model_fields[field_name].validation_alias
    if isinstance(alias, AliasChoices):
        return [str(choice) for choice in alias.choices]
    return [field_name]


class LocationResolution(BaseModel):
    """Result of a location-registry lookup for one scene."""

    location_group_id: str
    real_location_id: str
    group_name: str = ""
    real_location_name: str = ""
    resolved: bool = True


class EnrichedScene(Scene):
    """Scene with duration estimates and resolved location ids."""

    on_screen_minutes: float
    shooting_minutes: int = Field(ge=1)
    location_group_id: str
    location_group_name: str = ""
    real_location_id: str
    real_location_name: str = ""
    location_resolved: bool = True


class TimeBlock(BaseModel):
    """One block of a day's wall-clock timeline."""

    start_time: str  # "HH:MM"
    end_time: str  # "HH:MM"
    start_minute: int  # minutes after the day's midnight, never wraps
    end_minute: int
    activity: ActivityType
    description: str = ""
    scene_number: int | None = None


class Day(BaseModel):
    """A single shooting day."""

    day_index: int
    date: str | None = None
    location_group_id: str
    location_group_name: str = ""
    scenes: list[EnrichedScene]
    total_shooting_minutes: int
    rehearsal_minutes: int
    setup_minutes: int = 0
    required_crew: list[str] = Field(default_factory=list)
    required_equipment: list[str] = Field(default_factory=list)
    timeline: list[TimeBlock] = Field(default_factory=list)
    optimization_score: int = 0

    @property
    def total_minutes(self) -> int:
        """Shooting time plus rehearsal and setup overhead."""
        return self.total_shooting_minutes + self.rehearsal_minutes + self.setup_minutes


class OptimizationScore(BaseModel):
    """Advisory quality score of a schedule."""

    total: int = 0
    average: float = 0.0
    efficiency_percent: int = 0


class Schedule(BaseModel):
    """Complete multi-day shooting schedule."""

    days: list[Day] = Field(default_factory=list)
    total_days: int = 0
    total_scenes: int = 0
    total_shooting_minutes: int = 0
    optimization_score: OptimizationScore = Field(default_factory=OptimizationScore)
    message: str | None = None
    warnings: list[str] = Field(default_factory=list)
    fingerprint: str = ""


class SceneRef(BaseModel):
    """Compact reference to a scene inside a breakdown bucket."""

    id: str
    scene_number: int
    title: str = ""


class Breakdown(BaseModel):
    """Scenes classified by resource category, independent of the day packing."""

    locations: dict[str, list[SceneRef]] = Field(default_factory=dict)
    actors: dict[str, list[SceneRef]] = Field(default_factory=dict)
    time_slots: dict[str, list[SceneRef]] = Field(default_factory=dict)
    equipment: dict[str, list[SceneRef]] = Field(default_factory=dict)
    crew: dict[str, list[SceneRef]] = Field(default_factory=dict)
    props: dict[str, list[SceneRef]] = Field(default_factory=dict)
    costumes: dict[str, list[SceneRef]] = Field(default_factory=dict)
    cameras: dict[str, list[SceneRef]] = Field(default_factory=dict)
