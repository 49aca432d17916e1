"""
Sample inputs for testing the schedule optimizer.

Scenes are raw storyboard payloads as the editor stores them (camelCase keys,
free-text durations), plus registry answers for a StaticLocationResolver.
"""

from shootplan.scheduling.models import EnrichedScene, LocationResolution


# Sample Project ID (would come from the storyboard editor in production)
SAMPLE_PROJECT_ID = "proj_cafe_001"

CAFE = LocationResolution(
    location_group_id="grp_cafe_street",
    real_location_id="loc_cafe",
    group_name="연남동 카페거리",
    real_location_name="카페 온도",
)
BOOKSTORE = LocationResolution(
    location_group_id="grp_cafe_street",
    real_location_id="loc_bookstore",
    group_name="연남동 카페거리",
    real_location_name="책방 서가",
)
PARK = LocationResolution(
    location_group_id="grp_park",
    real_location_id="loc_park",
    group_name="경의선 숲길",
    real_location_name="숲길 벤치",
)


def get_sample_scenes() -> list[dict]:
    """Five storyboard scenes; scene 5 is an animation insert."""
    return [
        {
            "id": "s1",
            "sceneNumber": 1,
            "title": "첫 만남",
            "onScreenDurationText": "2분",
            "location": "카페",
            "cast": ["민수", "지영"],
            "timeOfDay": "낮",
        },
        {
            "id": "s2",
            "sceneNumber": 2,
            "title": "공원 산책",
            "onScreenDurationText": "1분",
            "location": "공원",
            "cast": ["지영"],
            "timeOfDay": "밤",
            "description": "스테디캠으로 따라가는 롱테이크",
        },
        {
            "id": "s3",
            "sceneNumber": 3,
            "title": "재회",
            "onScreenDurationText": "1.5분",
            "location": "카페",
            "cast": ["민수"],
            "timeOfDay": "낮",
        },
        {
            "id": "s4",
            "sceneNumber": 4,
            "title": "책방",
            "onScreenDurationText": "1분",
            "location": "책방",
            "cast": ["민수", "지영"],
            "timeOfDay": "낮",
        },
        {
            "id": "s5",
            "sceneNumber": 5,
            "title": "회상",
            "type": "animation",
            "onScreenDurationText": "1분",
        },
    ]


def get_sample_resolutions() -> dict[str, LocationResolution]:
    """Registry answers keyed by scene id."""
    return {"s1": CAFE, "s2": PARK, "s3": CAFE, "s4": BOOKSTORE}


def make_enriched(
    scene_number: int,
    shooting_minutes: int = 60,
    group: str = "grp_a",
    real: str = "loc_a",
    time_of_day: str = "낮",
    on_screen_minutes: float = 1.0,
    resolved: bool = True,
    **fields,
) -> EnrichedScene:
    """Build an EnrichedScene directly, bypassing duration parsing and lookup."""
    return EnrichedScene(
        id=f"s{scene_number}",
        scene_number=scene_number,
        time_of_day=time_of_day,
        on_screen_minutes=on_screen_minutes,
        shooting_minutes=shooting_minutes,
        location_group_id=group,
        location_group_name=group,
        real_location_id=real,
        real_location_name=real,
        location_resolved=resolved,
        **fields,
    )
