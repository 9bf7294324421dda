"""Renderer strategy shared by the vector and sprite back ends."""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import numpy as np

from wallclimb.game.holds import HoldClass, HoldShape
from wallclimb.game.snapshot import GameSnapshot, HoldView
from wallclimb.graphics.primitives import (
    Buffer,
    Color,
    draw_circle,
    draw_rounded_rect,
)


class SceneRenderer(ABC):
    """Draws a snapshot into an RGB buffer of the viewport's size.

    Subclasses supply the background and the climber; holds are drawn
    here using the subclass's palette and corner radius.
    """

    name: str = "base"
    corner_radius: float = 8
    # None means use the hold's own color
    palette: Optional[Dict[HoldClass, Color]] = None

    def __init__(self, width: int, height: int, hold_spacing: int = 120):
        self.width = width
        self.height = height
        self.hold_spacing = hold_spacing
        self.buffer: Buffer = np.zeros((height, width, 3), dtype=np.uint8)

    def render(self, snapshot: GameSnapshot) -> Buffer:
        self.draw_background(self.buffer, snapshot)
        for hold in snapshot.holds:
            self.draw_hold(self.buffer, hold)
        self.draw_climber(self.buffer, snapshot)
        return self.buffer

    def hold_color(self, hold: HoldView) -> Color:
        if self.palette is not None:
            return self.palette[hold.hold_class]
        return hold.color

    def draw_hold(self, buffer: Buffer, hold: HoldView) -> None:
        color = self.hold_color(hold)
        if hold.shape is HoldShape.CIRCLE:
            draw_circle(
                buffer,
                hold.x + hold.width / 2,
                hold.y + hold.height / 2,
                hold.width / 2,
                color,
            )
        else:
            draw_rounded_rect(
                buffer, hold.x, hold.y, hold.width, hold.height,
                self.corner_radius, color,
            )

    @abstractmethod
    def draw_background(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        pass

    @abstractmethod
    def draw_climber(self, buffer: Buffer, snapshot: GameSnapshot) -> None:
        pass
