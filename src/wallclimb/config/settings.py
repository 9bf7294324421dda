"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GameSettings(BaseSettings):
    """Gameplay tuning."""

    model_config = SettingsConfigDict(env_prefix="WALLCLIMB_GAME_")

    # Turn timing (milliseconds)
    max_time_ms: float = Field(default=3000.0, gt=0)
    scroll_duration_ms: float = Field(default=400.0, gt=0)

    # Wall geometry (pixels)
    hold_spacing: int = Field(default=120, gt=0)
    viewport_width: int = Field(default=360, gt=0)
    viewport_height: int = Field(default=640, gt=0)

    # Sprite animation
    frame_rate: int = Field(default=24, gt=0)
    frames_per_row: int = Field(default=24, gt=0)

    # Arm easing
    arm_damping_ms: float = Field(default=200.0, gt=0)
    settle_epsilon: float = Field(default=0.05, gt=0.0, lt=1.0)


class DisplaySettings(BaseSettings):
    """Host window settings."""

    model_config = SettingsConfigDict(env_prefix="WALLCLIMB_DISPLAY_")

    fps: int = Field(default=60, gt=0)
    scale: int = Field(default=1, ge=1, le=4)
    title: str = "WALLCLIMB"

    # Extra room around the playfield for the on-screen controls
    controls_height: int = 90


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="WALLCLIMB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False

    # Presentation back end
    style: Literal["vector", "sprite"] = "vector"
    sprite_sheet: Optional[Path] = None

    # Fixed seed makes hold sequences reproducible
    seed: Optional[int] = None

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with a pygame window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
