import json

import pytest

from memwright.application.config import AppConfig, config_files, resolve_config
from memwright.application.scheduling.sm2 import SM2Config
from memwright.domain.scheduling.errors import InvalidConfigError


def test_defaults(mock_home):
    config = resolve_config()

    assert config.default_algorithm == "sm2"
    assert config.sm2 == SM2Config.standard()
    assert config.timezone == "UTC"
    assert config.verbose == 1


def test_overrides_ignore_none(mock_home):
    config = resolve_config({"timezone": "Europe/Paris", "verbose": None})

    assert config.timezone == "Europe/Paris"
    assert config.verbose == 1


def test_env_vars(mock_home, monkeypatch):
    sm2 = SM2Config.standard().model_copy(update={"graduating_interval": 2})
    monkeypatch.setenv("MEMWRIGHT_DEFAULT_ALGORITHM", " SM2 ")
    monkeypatch.setenv("MEMWRIGHT_SM2", sm2.model_dump_json())

    config = resolve_config()

    assert config.default_algorithm == "sm2"
    assert config.sm2.graduating_interval == 2
    assert config.sm2.mastered_threshold == 21


def test_toml_file(mock_home):
    cfg_dir = mock_home / ".config/memwright"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.toml").write_text(
        'timezone = "Asia/Tokyo"\n'
        "\n"
        "[sm2]\n"
        "initial_ease_factor = 2.3\n"
        "min_ease_factor = 1.3\n"
        "max_ease_factor = 2.8\n"
        "ease_decrement = 0.2\n"
        "ease_increment = 0.1\n"
        "easy_bonus_multiplier = 1.5\n"
        "graduating_interval = 2\n"
        "mastered_threshold = 30\n"
    )

    config = resolve_config()

    assert config_files()[0].exists()
    assert config.timezone == "Asia/Tokyo"
    assert config.sm2.max_ease_factor == pytest.approx(2.8)
    assert config.sm2.mastered_threshold == 30


def test_cli_overrides_beat_env(mock_home, monkeypatch):
    monkeypatch.setenv("MEMWRIGHT_TIMEZONE", "Asia/Tokyo")

    assert resolve_config({"timezone": "UTC"}).timezone == "UTC"


def test_invalid_sm2_section_rejected(mock_home, monkeypatch):
    sm2 = SM2Config.standard().model_dump()
    sm2["graduating_interval"] = 0
    monkeypatch.setenv("MEMWRIGHT_SM2", json.dumps(sm2))

    with pytest.raises(InvalidConfigError, match="graduating_interval"):
        resolve_config()


def test_incomplete_sm2_section_rejected(mock_home, monkeypatch):
    monkeypatch.setenv("MEMWRIGHT_SM2", json.dumps({"initial_ease_factor": 2.5}))

    with pytest.raises(InvalidConfigError, match="Invalid memwright configuration"):
        resolve_config()


def test_unparseable_sm2_env_rejected(mock_home, monkeypatch):
    monkeypatch.setenv("MEMWRIGHT_SM2", "{not json")

    with pytest.raises(InvalidConfigError):
        resolve_config()


def test_fallback_options(mock_home):
    options = AppConfig().fallback_options()

    assert options.sm2 == SM2Config.standard()
