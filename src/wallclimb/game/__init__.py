"""Game core for WALLCLIMB.

Only the leaf modules are re-exported here; import the session from
``wallclimb.game.session``.
"""

from wallclimb.game.holds import (
    Hold,
    HoldClass,
    HoldGenerator,
    HoldQueue,
    HoldShape,
    HoldSide,
    HoldSpec,
    HOLD_SPECS,
    hold_count,
    init_queue,
)
from wallclimb.game.timer import TimerController

__all__ = [
    "Hold",
    "HoldClass",
    "HoldGenerator",
    "HoldQueue",
    "HoldShape",
    "HoldSide",
    "HoldSpec",
    "HOLD_SPECS",
    "hold_count",
    "init_queue",
    "TimerController",
]
