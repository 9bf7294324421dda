"""Rendering back ends for WALLCLIMB.

A back end pairs a scene renderer with the animator whose poses it
understands.
"""

from dataclasses import dataclass
import logging

from wallclimb.animation.base import Animator
from wallclimb.animation.continuous import ContinuousAnimator
from wallclimb.animation.frames import FrameAnimator
from wallclimb.config.settings import Settings
from wallclimb.render.base import SceneRenderer
from wallclimb.render.hud import draw_hud
from wallclimb.render.sprite import SpriteRenderer
from wallclimb.render.sprites import ParallaxLayers, SpriteSheet, SpriteSheetError
from wallclimb.render.vector import VectorRenderer

logger = logging.getLogger(__name__)


@dataclass
class Backend:
    style: str
    renderer: SceneRenderer
    animator: Animator


def create_backend(style: str, settings: Settings) -> Backend:
    """Build the renderer/animator pair for ``style`` ("vector" or "sprite")."""
    game = settings.game
    width, height = game.viewport_width, game.viewport_height

    if style == "vector":
        renderer = VectorRenderer(width, height, game.hold_spacing)
        animator = ContinuousAnimator(
            damping_ms=game.arm_damping_ms,
            settle_epsilon=game.settle_epsilon,
        )
    elif style == "sprite":
        sheet = None
        if settings.sprite_sheet is not None:
            try:
                sheet = SpriteSheet.load(settings.sprite_sheet)
            except SpriteSheetError as e:
                logger.error(f"{e}; falling back to generated sprites")
        if sheet is None:
            sheet = SpriteSheet.generate(frames_per_row=game.frames_per_row)

        layers = None
        if settings.sprite_sheet is not None:
            try:
                layers = ParallaxLayers.load(settings.sprite_sheet.parent, width, height)
            except SpriteSheetError as e:
                logger.error(f"{e}; falling back to generated backgrounds")
        if layers is None:
            layers = ParallaxLayers.generate(width, height)

        renderer = SpriteRenderer(width, height, game.hold_spacing, sheet=sheet, layers=layers)
        animator = FrameAnimator(
            frame_rate=game.frame_rate,
            frames_per_row=sheet.frames_per_row,
        )
    else:
        raise ValueError(f"Unknown render style: {style!r}")

    logger.info(f"Using {style} back end ({width}x{height})")
    return Backend(style=style, renderer=renderer, animator=animator)


__all__ = [
    "Backend",
    "create_backend",
    "draw_hud",
    "SceneRenderer",
    "VectorRenderer",
    "SpriteRenderer",
    "SpriteSheet",
    "SpriteSheetError",
    "ParallaxLayers",
]
