"""Sprite back end: parallax background and a climber blitted from a sheet."""

from typing import Optional

from wallclimb.animation.base import FramePose
from wallclimb.game.holds import HoldClass
from wallclimb.game.snapshot import GameSnapshot
from wallclimb.graphics.primitives import Buffer, draw_image, hex_to_rgb, scale_nearest
from wallclimb.render.base import SceneRenderer
from wallclimb.render.sprites import ParallaxLayers, SpriteSheet

SPRITE_PALETTE = {
    HoldClass.SMALL: hex_to_rgb("#cda66e"),
    HoldClass.MEDIUM: hex_to_rgb("#b59569"),
    HoldClass.LARGE: hex_to_rgb("#a88250"),
    HoldClass.ROUNDED: hex_to_rgb("#ba9771"),
}

# On-screen climber size and distance from the bottom edge
CHAR_W, CHAR_H = 80, 200
CHAR_BOTTOM_MARGIN = 80


class SpriteRenderer(SceneRenderer):
    """Blits sheet frames over four parallax layers."""

    name = "sprite"
    corner_radius = 10
    palette = SPRITE_PALETTE

    def __init__(
        self,
        width: int,
        height: int,
        hold_spacing: int = 120,
        sheet: Optional[SpriteSheet] = None,
        layers: Optional[ParallaxLayers] = None,
    ):
        super().__init__(width, height, hold_spacing)
        self.sheet = sheet or SpriteSheet.generate()
        self.layers = layers or ParallaxLayers.generate(width, height)
        self._frame_cache: dict = {}

    def draw_background(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        for layer, ratio in zip(self.layers.layers(snapshot.is_day), self.layers.ratios):
            offset = ParallaxLayers.tile_offset(snapshot.scroll_offset, ratio, self.height)
            top = int(round(offset))
            draw_image(buffer, layer, 0, top)
            draw_image(buffer, layer, 0, top + self.height)

    def _scaled_frame(self, row: int, col: int):
        key = (row, col)
        frame = self._frame_cache.get(key)
        if frame is None:
            frame = scale_nearest(self.sheet.frame(row, col), CHAR_W, CHAR_H)
            self._frame_cache[key] = frame
        return frame

    def draw_climber(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        pose = snapshot.pose
        if not isinstance(pose, FramePose):
            pose = FramePose()

        char_x = self.width // 2 - CHAR_W // 2
        char_y = self.height - CHAR_H - CHAR_BOTTOM_MARGIN
        frame = self._scaled_frame(pose.row, pose.frame)
        draw_image(buffer, frame, char_x, char_y, flip=pose.flip)
