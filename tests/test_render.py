"""Tests for the renderers and the HUD."""
from __future__ import annotations

import numpy as np
import pytest

from wallclimb.animation.frames import FrameAnimator
from wallclimb.config.settings import Settings
from wallclimb.game.holds import HoldShape
from wallclimb.game.session import GameSession
from wallclimb.graphics.primitives import draw_rounded_rect, hex_to_rgb, new_buffer
from wallclimb.render import create_backend, draw_hud
from wallclimb.render.sprite import SPRITE_PALETTE, SpriteRenderer
from wallclimb.render.sprites import ParallaxLayers, SpriteSheet
from wallclimb.render.vector import ROCK_EDGE, VectorRenderer

from conftest import ScriptedGenerator


@pytest.fixture
def vector_session(settings):
    return GameSession(settings, generator=ScriptedGenerator())


@pytest.fixture
def sprite_renderer():
    return SpriteRenderer(
        360, 640,
        sheet=SpriteSheet.generate(frames_per_row=4, frame_size=16),
        layers=ParallaxLayers.generate(360, 640),
    )


def test_vector_output_shape(vector_session):
    renderer = VectorRenderer(360, 640)
    frame = renderer.render(vector_session.snapshot())
    assert frame.shape == (640, 360, 3)
    assert frame.dtype == np.uint8


def test_vector_day_night_sky(vector_session):
    renderer = VectorRenderer(360, 640)

    day = renderer.render(vector_session.snapshot()).copy()
    vector_session.toggle_day_night()
    night = renderer.render(vector_session.snapshot()).copy()

    assert tuple(day[0, 0]) == hex_to_rgb("#bfe9ff")
    assert tuple(night[0, 0]) == hex_to_rgb("#0a1931")
    assert not np.array_equal(day, night)


def test_vector_rock_edge(vector_session):
    frame = VectorRenderer(360, 640).render(vector_session.snapshot())
    assert tuple(frame[5, 355]) == ROCK_EDGE


def test_vector_holds_use_their_color(vector_session):
    snap = vector_session.snapshot()
    frame = VectorRenderer(360, 640).render(snap)
    hold = next(h for h in snap.holds if h.y == 120.0)
    cx = int(hold.x + hold.width / 2)
    cy = int(hold.y + hold.height / 2)
    assert tuple(frame[cy, cx]) == hold.color


def test_sprite_output_and_palette(sprite_renderer, settings):
    session = GameSession(
        settings,
        generator=ScriptedGenerator(),
        animator=FrameAnimator(frames_per_row=4),
    )
    snap = session.snapshot()
    frame = sprite_renderer.render(snap)

    assert frame.shape == (640, 360, 3)
    hold = next(h for h in snap.holds if h.y == 120.0)
    cx = int(hold.x + hold.width / 2)
    cy = int(hold.y + hold.height / 2)
    assert tuple(frame[cy, cx]) == SPRITE_PALETTE[hold.hold_class]


def test_sprite_day_night_differ(sprite_renderer, settings):
    session = GameSession(settings, generator=ScriptedGenerator(), animator=FrameAnimator())
    day = sprite_renderer.render(session.snapshot()).copy()
    session.toggle_day_night()
    night = sprite_renderer.render(session.snapshot()).copy()

    assert tuple(day[0, 0]) == hex_to_rgb("#bfe9ff")
    assert not np.array_equal(day, night)


def test_parallax_tile_offset():
    assert ParallaxLayers.tile_offset(0.0, 0.3, 640) == 0.0
    assert ParallaxLayers.tile_offset(100.0, 0.3, 640) == pytest.approx(-30.0)
    assert ParallaxLayers.tile_offset(1000.0, 1.0, 640) == pytest.approx(-360.0)


def test_hud_game_over_overlay_darkens(vector_session):
    renderer = VectorRenderer(360, 640)
    vector_session.move(vector_session.hold_queue.active.side.opposite)
    while not vector_session.snapshot().game_over:
        vector_session.advance(50)

    snap = vector_session.snapshot()
    plain = renderer.render(snap).copy()
    with_hud = plain.copy()
    draw_hud(with_hud, snap)

    # Bottom-left corner is far from any overlay text
    assert with_hud[630, 2].sum() < plain[630, 2].sum()


def test_create_backend_pairs():
    vector = create_backend("vector", Settings())
    assert isinstance(vector.renderer, VectorRenderer)
    assert vector.renderer.corner_radius == 8

    with pytest.raises(ValueError):
        create_backend("ascii", Settings())


def test_rounded_rect_corners_cut():
    buffer = new_buffer(40, 40)
    draw_rounded_rect(buffer, 0, 0, 40, 40, 10, (255, 255, 255))
    assert tuple(buffer[20, 20]) == (255, 255, 255)
    assert tuple(buffer[0, 0]) == (0, 0, 0)
    assert tuple(buffer[0, 20]) == (255, 255, 255)


def test_hold_shapes_cover_both_kinds(vector_session):
    shapes = {h.shape for h in vector_session.snapshot().holds}
    assert shapes <= {HoldShape.CIRCLE, HoldShape.ROUNDED_RECT}
