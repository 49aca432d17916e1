"""
Tests for on-screen duration parsing and shooting-time conversion.

Usage:
    pytest testing/test_duration.py
"""

import pytest

from shootplan.scheduling.duration import (
    parse_on_screen_minutes,
    rehearsal_minutes,
    to_shooting_minutes,
)

FALLBACK = 5.0


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2분", 2.0),
        ("1.5 분", 1.5),
        ("약 2분 30초", 2.0),
        ("3min", 3.0),
        ("4 minutes", 4.0),
        ("3", 3.0),
        (7, 7.0),
        (2.5, 2.5),
    ],
)
def test_parses_durations(text, expected):
    assert parse_on_screen_minutes(text, FALLBACK) == expected


@pytest.mark.parametrize(
    "text",
    ["", None, "미정", "0분", "0", 0, -3, float("nan"), float("inf"), True],
)
def test_unusable_durations_fall_back(text):
    assert parse_on_screen_minutes(text, FALLBACK) == FALLBACK


def test_shooting_minutes_use_ratio():
    assert to_shooting_minutes(2.0, 60) == 120
    assert to_shooting_minutes(3.0, 60) == 180
    assert to_shooting_minutes(1.5, 60) == 90


def test_shooting_minutes_never_below_one():
    assert to_shooting_minutes(0.001, 60) == 1


def test_rehearsal_rounds_up():
    assert rehearsal_minutes(120, 0.2) == 24
    assert rehearsal_minutes(121, 0.2) == 25
    assert rehearsal_minutes(15, 0.2) == 3
    assert rehearsal_minutes(0, 0.2) == 0
