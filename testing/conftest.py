import pytest

from shootplan.config import get_settings
from shootplan.scheduling.config import get_scheduler_config


@pytest.fixture(autouse=True)
def clear_config_caches():
    """Settings are lru-cached; tests that patch the environment need fresh ones."""
    get_settings.cache_clear()
    get_scheduler_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_scheduler_config.cache_clear()
