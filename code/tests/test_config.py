import pytest
from pydantic import ValidationError

from staggerline.config import Settings, StaggerConfig, get_settings
from staggerline.pipeline.constants import (
    DEFAULT_PURIFY_TOLERANCE_MS,
    DEFAULT_ZOOM_WINDOW_MS,
)


def test_default_settings_have_sane_defaults():
    settings = Settings(_env_file=None)
    assert settings.stagger.purify_ability_id == 119582
    assert settings.stagger.purify_match_tolerance_ms == 500
    assert settings.stagger.zoom_window_ms == 10000
    assert settings.stagger.strict_stream is False
    assert settings.api_key == ""
    assert settings.log_level == "INFO"


def test_env_override(monkeypatch):
    monkeypatch.setenv("STAGGER__PURIFY_ABILITY_ID", "343743")
    monkeypatch.setenv("STAGGER__STRICT_STREAM", "true")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    settings = Settings(_env_file=None)
    assert settings.stagger.purify_ability_id == 343743
    assert settings.stagger.strict_stream is True
    assert settings.log_level == "DEBUG"


def test_non_positive_tolerance_rejected(monkeypatch):
    monkeypatch.setenv("STAGGER__PURIFY_MATCH_TOLERANCE_MS", "0")
    with pytest.raises(ValidationError, match="PURIFY_MATCH_TOLERANCE_MS"):
        Settings(_env_file=None)


def test_non_positive_zoom_window_rejected():
    with pytest.raises(ValidationError, match="ZOOM_WINDOW_MS"):
        Settings(_env_file=None, stagger=StaggerConfig(zoom_window_ms=-1))


def test_get_settings_returns_same_instance():
    get_settings.cache_clear()
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2
    get_settings.cache_clear()


def test_stagger_defaults_come_from_constants():
    cfg = StaggerConfig()
    assert cfg.purify_match_tolerance_ms == DEFAULT_PURIFY_TOLERANCE_MS
    assert cfg.zoom_window_ms == DEFAULT_ZOOM_WINDOW_MS


def test_settings_has_no_debug_flag():
    assert "debug" not in Settings.model_fields
