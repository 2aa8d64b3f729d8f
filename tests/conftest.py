import os
from datetime import datetime, timezone

import pytest

from memwright.application.scheduling.sm2 import SM2Config, SM2Scheduler


@pytest.fixture
def sm2_config():
    """The standard preset, spelled out so tests read against concrete numbers."""
    return SM2Config(
        initial_ease_factor=2.5,
        min_ease_factor=1.3,
        max_ease_factor=3.0,
        ease_decrement=0.2,
        ease_increment=0.15,
        easy_bonus_multiplier=1.3,
        graduating_interval=1,
        mastered_threshold=21,
    )


@pytest.fixture
def scheduler(sm2_config):
    return SM2Scheduler(sm2_config)


@pytest.fixture
def now():
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("MEMWRIGHT_"):
            monkeypatch.delenv(key)
    return home
