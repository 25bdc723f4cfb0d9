"""
Unit tests for settings loading.
"""

from datetime import time

from dayplanner.core.config import Settings
from dayplanner.models.scheduler_config import SchedulerConfig


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.TIMEZONE == "UTC"
    assert settings.DAY_START == "06:00"
    assert settings.DAY_END == "23:00"
    assert settings.SLOT_MINUTES == 30
    assert settings.REST_BETWEEN_INTENSE_TASKS is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DAY_START", "08:30")
    monkeypatch.setenv("SLOT_MINUTES", "15")
    monkeypatch.setenv("MAX_CONTINUOUS_WORK_MINUTES", "60")

    config = SchedulerConfig.from_settings(Settings(_env_file=None))

    assert config.day_start == time(8, 30)
    assert config.day_end == time(23, 0)
    assert config.slot_minutes == 15
    assert config.breaks.max_continuous_work_minutes == 60
