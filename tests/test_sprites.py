"""Tests for sprite sheet loading and grid derivation."""
from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from wallclimb.config.settings import Settings
from wallclimb.render import create_backend
from wallclimb.render.sprite import SpriteRenderer
from wallclimb.render.sprites import ParallaxLayers, SpriteSheet, SpriteSheetError


def test_grid_from_image_size():
    sheet = SpriteSheet(np.zeros((100, 480, 4), dtype=np.uint8))
    assert sheet.frame_height == 20
    assert sheet.cols == 24
    assert sheet.frames_per_row == 24
    assert sheet.frame_width == 20


def test_partial_column_dropped():
    sheet = SpriteSheet(np.zeros((50, 105, 3), dtype=np.uint8))
    assert sheet.cols == 10
    assert sheet.frame_width == pytest.approx(10.5)


@pytest.mark.parametrize(
    "shape",
    [(4, 10, 3), (100, 10, 4), (100, 480)],
)
def test_unusable_sheets_rejected(shape):
    with pytest.raises(SpriteSheetError):
        SpriteSheet(np.zeros(shape, dtype=np.uint8))


def test_load_png(tmp_path):
    path = tmp_path / "climber.png"
    Image.new("RGBA", (240, 50), (10, 20, 30, 255)).save(path)

    sheet = SpriteSheet.load(path)

    assert sheet.cols == 24
    assert sheet.image.shape == (50, 240, 4)
    assert tuple(sheet.frame(0, 0)[0, 0]) == (10, 20, 30, 255)


def test_load_missing_file(tmp_path):
    with pytest.raises(SpriteSheetError):
        SpriteSheet.load(tmp_path / "nope.png")


def test_load_garbage_file(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(SpriteSheetError):
        SpriteSheet.load(path)


def test_generated_sheet_frames():
    sheet = SpriteSheet.generate(frames_per_row=6, frame_size=16)
    assert sheet.image.shape == (80, 96, 4)
    assert sheet.cols == 6
    assert sheet.frame(1, 2).shape == (16, 16, 4)
    # Out-of-range indices clamp to the last frame
    assert sheet.frame(9, 99).shape == (16, 16, 4)
    # Each frame draws something
    assert sheet.frame(0, 0)[..., 3].any()


def test_layers_loaded_with_fallback(tmp_path):
    Image.new("RGB", (36, 64), (1, 2, 3)).save(tmp_path / "sky_day.png")

    layers = ParallaxLayers.load(tmp_path, 360, 640)

    assert len(layers.day) == len(layers.night) == 4
    sky = layers.layers(True)[0]
    assert sky.shape == (640, 360, 4)
    assert tuple(sky[0, 0]) == (1, 2, 3, 255)
    assert layers.layers(False)[0].shape == (640, 360, 3)


def test_sprite_backend_falls_back_to_generated(tmp_path):
    settings = Settings(style="sprite", sprite_sheet=tmp_path / "missing.png")
    backend = create_backend("sprite", settings)

    assert isinstance(backend.renderer, SpriteRenderer)
    assert backend.renderer.corner_radius == 10
    assert backend.animator.frames_per_row == 24


def test_sprite_backend_uses_sheet_columns(tmp_path):
    path = tmp_path / "climber.png"
    Image.new("RGBA", (120, 50), (200, 100, 50, 255)).save(path)

    backend = create_backend("sprite", Settings(style="sprite", sprite_sheet=path))

    assert backend.animator.frames_per_row == 12
