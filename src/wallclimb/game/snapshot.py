"""Read-only per-tick view of a game session."""

from dataclasses import dataclass
from typing import Optional, Tuple

from wallclimb.animation.base import Pose
from wallclimb.core.state import TurnOutcome, TurnPhase
from wallclimb.game.holds import HoldClass, HoldShape, HoldSide

# Holds this far outside the viewport are dropped from the view
CULL_MARGIN = 10


@dataclass(frozen=True)
class HoldView:
    """A hold placed in screen space."""

    side: HoldSide
    hold_class: HoldClass
    shape: HoldShape
    color: Tuple[int, int, int]
    width: int
    height: int
    x: float
    y: float
    is_active: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs for one frame."""

    phase: TurnPhase
    outcome: Optional[TurnOutcome]
    score: int
    best_score: int
    time_left: float
    time_fraction: float
    scroll_offset: float
    holds: Tuple[HoldView, ...]
    active_side: HoldSide
    pose: Pose
    is_day: bool
    viewport: Tuple[int, int]
    final_score: Optional[int] = None

    @property
    def game_over(self) -> bool:
        return self.phase is TurnPhase.GAME_OVER

    @property
    def accepting_input(self) -> bool:
        return self.phase is TurnPhase.READY


def lane_center(side: HoldSide, viewport_width: int) -> float:
    """Horizontal centre of a lane: 25% or 75% of the width."""
    return viewport_width * (0.25 if side is HoldSide.LEFT else 0.75)


def hold_y(index: int, hold_spacing: int, scroll_offset: float) -> float:
    return index * hold_spacing - hold_spacing + scroll_offset


def is_visible(y: float, height: int, viewport_height: int) -> bool:
    return not (y + height < -CULL_MARGIN or y > viewport_height + CULL_MARGIN)
