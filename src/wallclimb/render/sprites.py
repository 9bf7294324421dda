"""
Sprite-sheet and parallax assets for the sprite back end.

Both can be loaded from image files with Pillow or generated procedurally
with numpy, so the game runs without any art on disk.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union
import logging
import math

import numpy as np
from numpy.typing import NDArray

from wallclimb.graphics.primitives import (
    Color,
    draw_circle,
    draw_rect,
    draw_vertical_gradient,
    hex_to_rgb,
    scale_nearest,
)

logger = logging.getLogger(__name__)

SHEET_ROWS = 5


class SpriteSheetError(Exception):
    """Sprite sheet missing, unreadable or too small for its grid."""


def _load_rgba(path: Path) -> NDArray[np.uint8]:
    from PIL import Image, UnidentifiedImageError

    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError) as e:
        raise SpriteSheetError(f"Cannot read image {path}: {e}") from e


def _rgba_from_rgb(rgb: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Pure black pixels become transparent."""
    alpha = np.where(rgb.any(axis=2), 255, 0).astype(np.uint8)
    return np.dstack([rgb, alpha])


@dataclass
class SpriteSheet:
    """Five rows of square frames.

    The grid is derived from the image: ``frame_height = height / 5`` and
    ``cols = width // frame_height``.
    """

    image: NDArray[np.uint8]
    rows: int = SHEET_ROWS
    frame_height: float = field(init=False)
    frame_width: float = field(init=False)
    cols: int = field(init=False)

    def __post_init__(self) -> None:
        if self.image.ndim != 3 or self.image.shape[2] not in (3, 4):
            raise SpriteSheetError("Sprite sheet must be an RGB or RGBA image")
        height, width = self.image.shape[:2]
        if height < self.rows:
            raise SpriteSheetError(
                f"Sprite sheet is {height}px tall, need at least {self.rows} rows"
            )
        self.frame_height = height / self.rows
        self.cols = int(width // self.frame_height)
        if self.cols < 1:
            raise SpriteSheetError(
                f"Sprite sheet {width}x{height} is narrower than one square frame"
            )
        self.frame_width = width / self.cols

    @property
    def frames_per_row(self) -> int:
        return self.cols

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SpriteSheet":
        path = Path(path)
        if not path.is_file():
            raise SpriteSheetError(f"Sprite sheet not found: {path}")
        sheet = cls(_load_rgba(path))
        logger.info(
            f"Loaded sprite sheet {path.name}: {sheet.cols} frames x {sheet.rows} rows "
            f"({sheet.frame_width:.0f}x{sheet.frame_height:.0f}px)"
        )
        return sheet

    @classmethod
    def generate(cls, frames_per_row: int = 24, frame_size: int = 48) -> "SpriteSheet":
        """Build a placeholder sheet with a simple climber in every frame."""
        image = np.zeros((frame_size * SHEET_ROWS, frame_size * frames_per_row, 4), dtype=np.uint8)
        for row in range(SHEET_ROWS):
            for col in range(frames_per_row):
                t = col / max(1, frames_per_row - 1)
                frame = _draw_placeholder_frame(row, t, frame_size)
                y0, x0 = row * frame_size, col * frame_size
                image[y0:y0 + frame_size, x0:x0 + frame_size] = frame
        logger.debug(f"Generated placeholder sprite sheet ({frames_per_row} frames per row)")
        return cls(image)

    def frame(self, row: int, col: int) -> NDArray[np.uint8]:
        row = max(0, min(row, self.rows - 1))
        col = max(0, min(col, self.cols - 1))
        x1 = int(round(col * self.frame_width))
        x2 = int(round((col + 1) * self.frame_width))
        y1 = int(round(row * self.frame_height))
        y2 = int(round((row + 1) * self.frame_height))
        return self.image[y1:y2, x1:x2]


# Placeholder climber colors
_BODY = hex_to_rgb("#2f6f99")
_SKIN = hex_to_rgb("#f7bf85")
_LEGS = hex_to_rgb("#3e444d")


def _draw_placeholder_frame(row: int, t: float, size: int) -> NDArray[np.uint8]:
    """One frame of the placeholder climber; ``t`` runs 0..1 across the row."""
    rgb = np.zeros((size, size, 3), dtype=np.uint8)
    u = size / 48.0

    lift = 0.0
    reach = 0.0
    drop = 0.0
    if row == 0:
        reach = 0.1 * math.sin(t * math.pi * 2)
    elif row == 1:
        reach = t
    elif row == 2:
        reach = 1.0
        lift = t * 8 * u
    elif row == 3:
        reach = 1.0 - t
        drop = t * 4 * u
    elif row == 4:
        drop = 4 * u + t * 40 * u

    top = 14 * u - lift + drop
    cx = size / 2

    draw_rect(rgb, cx - 5 * u, top + 16 * u, 4 * u, 14 * u, _LEGS)
    draw_rect(rgb, cx + 1 * u, top + 16 * u, 4 * u, 14 * u, _LEGS)
    draw_rect(rgb, cx - 7 * u, top, 14 * u, 17 * u, _BODY)
    draw_circle(rgb, cx, top - 5 * u, 5 * u, _SKIN)

    # Reaching arm on the left, resting arm on the right; mirrored for
    # right-hand moves at draw time
    reach_top = top - reach * 12 * u
    draw_rect(rgb, cx - 10 * u, reach_top, 3 * u, 12 * u, _SKIN)
    draw_rect(rgb, cx + 7 * u, top + 2 * u, 3 * u, 12 * u, _SKIN)

    return _rgba_from_rgb(rgb)


# Day/night art as (top, bottom) gradient stops and silhouette colors
_SKY = {
    True: (hex_to_rgb("#bfe9ff"), hex_to_rgb("#e6f6ff")),
    False: (hex_to_rgb("#0a1931"), hex_to_rgb("#0c2340")),
}
_MOUNTAINS = {True: hex_to_rgb("#8aa6bf"), False: hex_to_rgb("#1d2f4f")}
_TREES = {True: hex_to_rgb("#4f7a4a"), False: hex_to_rgb("#14281f")}
_ROCK = hex_to_rgb("#bfa98b")
_ROCK_SHADOW = hex_to_rgb("#9e8868")

# Files looked up by ParallaxLayers.load
LAYER_FILES = {
    True: ("sky_day.png", "mountains_day.png", "treeline_day.png", "rock_edge.png"),
    False: ("sky_night.png", "mountains_night.png", "treeline_night.png", "rock_edge.png"),
}


@dataclass
class ParallaxLayers:
    """Four background layers per theme, back to front.

    Each layer scrolls at its own ratio of the wall scroll and tiles
    vertically to cover the viewport.
    """

    day: List[NDArray[np.uint8]]
    night: List[NDArray[np.uint8]]
    ratios: tuple = (0.3, 0.6, 0.8, 1.0)

    def layers(self, is_day: bool) -> List[NDArray[np.uint8]]:
        return self.day if is_day else self.night

    @staticmethod
    def tile_offset(scroll_offset: float, ratio: float, height: int) -> float:
        """Top of the first tile, in ``(-height, 0]``."""
        offset = -((scroll_offset * ratio) % height)
        return offset

    @classmethod
    def generate(cls, width: int, height: int) -> "ParallaxLayers":
        return cls(
            day=_generate_theme(width, height, True),
            night=_generate_theme(width, height, False),
        )

    @classmethod
    def load(cls, directory: Union[str, Path], width: int, height: int) -> "ParallaxLayers":
        """Load the eight background images from ``directory``.

        Missing files are replaced with the generated layer.
        """
        directory = Path(directory)
        generated = cls.generate(width, height)
        themes: Dict[bool, List[NDArray[np.uint8]]] = {}
        for is_day, names in LAYER_FILES.items():
            layers = []
            for index, name in enumerate(names):
                path = directory / name
                if path.is_file():
                    layers.append(scale_nearest(_load_rgba(path), width, height))
                else:
                    logger.warning(f"Background layer {name} not found, using generated art")
                    layers.append(generated.layers(is_day)[index])
            themes[is_day] = layers
        return cls(day=themes[True], night=themes[False])


def _generate_theme(width: int, height: int, is_day: bool) -> List[NDArray[np.uint8]]:
    sky = np.zeros((height, width, 3), dtype=np.uint8)
    draw_vertical_gradient(sky, *_SKY[is_day])

    ys, xs = np.ogrid[:height, :width]

    # Mountain ridge: sum of two waves, repeating every viewport height
    ridge = height * 0.55 + height * 0.08 * np.sin(xs / width * math.pi * 3) \
        + height * 0.04 * np.sin(xs / width * math.pi * 7 + 1.3)
    mountains = _silhouette(ys >= ridge, _MOUNTAINS[is_day], height, width)

    # Treeline: saw-tooth crowns near the bottom
    tooth = 18
    crowns = height * 0.78 - (tooth - np.abs((xs % (2 * tooth)) - tooth))
    treeline = _silhouette(ys >= crowns, _TREES[is_day], height, width)

    rock = np.zeros((height, width, 4), dtype=np.uint8)
    edge_x = width - 80
    rock[:, edge_x:, :3] = _ROCK
    rock[:, edge_x:edge_x + 6, :3] = _ROCK_SHADOW
    rock[:, edge_x:, 3] = 255

    return [sky, mountains, treeline, rock]


def _silhouette(mask: NDArray[np.bool_], color: Color, height: int, width: int) -> NDArray[np.uint8]:
    layer = np.zeros((height, width, 4), dtype=np.uint8)
    mask = np.broadcast_to(mask, (height, width))
    layer[mask, :3] = color
    layer[mask, 3] = 255
    return layer
