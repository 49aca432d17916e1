"""Tests for scheduler and service configuration."""

import pytest
from pydantic import ValidationError

from shootplan.config import get_settings
from shootplan.scheduling.config import (
    SchedulerConfig,
    clock_to_minutes,
    get_scheduler_config,
)


def test_defaults():
    config = SchedulerConfig()
    assert config.shooting_ratio == 60
    assert config.daily_cap_minutes == 360
    assert config.fallback_on_screen_minutes == 5
    assert config.day_start_minute == 6 * 60
    assert config.lunch_minute == 12 * 60
    assert config.dinner_minute == 18 * 60


@pytest.mark.parametrize(
    "overrides",
    [
        {"daily_cap_minutes": 0},
        {"daily_cap_minutes": -60},
        {"shooting_ratio": 0},
        {"rehearsal_ratio": 1.5},
        {"max_scenes_per_day": 0},
        {"setup_minutes": -1},
        {"day_start": "25:00"},
        {"lunch_at": "noon"},
        {"lunch_at": "19:00"},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        SchedulerConfig(**overrides)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCHEDULER_DAILY_CAP_MINUTES", "480")
    monkeypatch.setenv("SCHEDULER_SHOOTING_RATIO", "45")

    config = get_scheduler_config()

    assert config.daily_cap_minutes == 480
    assert config.shooting_ratio == 45
    assert get_scheduler_config() is config


def test_invalid_environment_fails_fast(monkeypatch):
    monkeypatch.setenv("SCHEDULER_DAILY_CAP_MINUTES", "0")

    with pytest.raises(ValidationError):
        get_scheduler_config()


def test_clock_to_minutes():
    assert clock_to_minutes("00:00") == 0
    assert clock_to_minutes("18:30") == 18 * 60 + 30


def test_settings_cache_switch(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    assert get_settings().cache_enabled is False

    get_settings.cache_clear()
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "service-key")
    assert get_settings().cache_enabled is True
