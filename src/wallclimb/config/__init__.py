"""Configuration for WALLCLIMB."""

from wallclimb.config.settings import DisplaySettings, GameSettings, Settings, get_settings

__all__ = ["Settings", "GameSettings", "DisplaySettings", "get_settings"]
