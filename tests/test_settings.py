"""Tests for pydantic settings."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from wallclimb.config.settings import GameSettings, Settings, get_settings


def test_game_defaults():
    game = GameSettings()
    assert game.max_time_ms == 3000
    assert game.hold_spacing == 120
    assert game.scroll_duration_ms == 400
    assert game.frame_rate == 24
    assert game.arm_damping_ms == 200
    assert (game.viewport_width, game.viewport_height) == (360, 640)


def test_env_overrides_game(monkeypatch):
    monkeypatch.setenv("WALLCLIMB_GAME_MAX_TIME_MS", "1500")
    monkeypatch.setenv("WALLCLIMB_GAME_HOLD_SPACING", "100")
    game = GameSettings()
    assert game.max_time_ms == 1500
    assert game.hold_spacing == 100


def test_env_overrides_app(monkeypatch):
    monkeypatch.setenv("WALLCLIMB_STYLE", "sprite")
    monkeypatch.setenv("WALLCLIMB_SEED", "99")
    monkeypatch.setenv("WALLCLIMB_ENV", "headless")
    settings = Settings()
    assert settings.style == "sprite"
    assert settings.seed == 99
    assert settings.is_simulator is False


@pytest.mark.parametrize(
    "field, value",
    [
        ("max_time_ms", 0),
        ("hold_spacing", -1),
        ("scroll_duration_ms", 0),
        ("frame_rate", 0),
        ("viewport_height", 0),
        ("settle_epsilon", 1.5),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        GameSettings(**{field: value})


def test_invalid_style_rejected():
    with pytest.raises(ValidationError):
        Settings(style="ascii")


def test_get_settings_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
