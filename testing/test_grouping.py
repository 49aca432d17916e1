"""Tests for location-group-first grouping, in-group ordering and the combination score."""

from shootplan.scheduling.config import SchedulerConfig
from shootplan.scheduling.grouping import combination_score, group_scenes
from testing.sample_inputs import make_enriched


def _numbers(group):
    return [scene.scene_number for scene in group.scenes]


def test_groups_follow_lowest_scene_number():
    scenes = [
        make_enriched(3, group="grp_b"),
        make_enriched(1, group="grp_a"),
        make_enriched(2, group="grp_b"),
        make_enriched(4, group="grp_a"),
    ]

    groups = group_scenes(scenes)

    assert [g.location_group_id for g in groups] == ["grp_a", "grp_b"]
    assert _numbers(groups[0]) == [1, 4]
    assert _numbers(groups[1]) == [2, 3]


def test_unresolved_scenes_are_never_merged():
    scenes = [
        make_enriched(7, group="unknown_scene_7", real="unknown_scene_7", resolved=False),
        make_enriched(8, group="grp_a"),
        make_enriched(9, group="unknown_scene_9", real="unknown_scene_9", resolved=False),
    ]

    groups = group_scenes(scenes)

    assert [g.location_group_id for g in groups] == ["unknown_scene_7", "grp_a", "unknown_scene_9"]
    assert [g.resolved for g in groups] == [False, True, False]
    assert all(len(g.scenes) == 1 for g in groups)


def test_real_locations_then_day_before_night():
    scenes = [
        make_enriched(5, real="loc_cafe", time_of_day="낮"),
        make_enriched(2, real="loc_cafe", time_of_day="밤"),
        make_enriched(3, real="loc_books", time_of_day="낮"),
        make_enriched(1, real="loc_cafe", time_of_day="오전"),
        make_enriched(6, real="loc_cafe", time_of_day="황혼"),
    ]

    (group,) = group_scenes(scenes)

    # loc_cafe first (scene 1), 낮 [1, 5] then 밤 [2] then 미정 [6]; loc_books after
    assert _numbers(group) == [1, 5, 2, 6, 3]


def test_grouping_is_deterministic():
    scenes = [make_enriched(n, group=f"grp_{n % 3}", real=f"loc_{n % 2}") for n in range(10, 0, -1)]
    first = [_numbers(g) for g in group_scenes(scenes)]
    second = [_numbers(g) for g in group_scenes(list(reversed(scenes)))]
    assert first == second


def test_combination_score_rewards_shared_resources():
    config = SchedulerConfig()
    scenes = [
        make_enriched(1, on_screen_minutes=8, cast=["민수", "지영"]),
        make_enriched(2, on_screen_minutes=10, cast=["지영"]),
    ]
    # location 1000 + cast 500 + time slot 200 + default equipment 100 + long scenes 50
    assert combination_score(scenes, config) == 1850


def test_combination_score_without_overlap():
    config = SchedulerConfig()
    scenes = [
        make_enriched(1, real="loc_a", time_of_day="미정", equipment=["크레인"], cast=["민수"]),
        make_enriched(2, real="loc_b", time_of_day="미정", equipment=["드론"], cast=["지영"]),
    ]
    assert combination_score(scenes, config) == 0


def test_combination_score_of_single_scene():
    assert combination_score([make_enriched(1)], SchedulerConfig()) == 0
