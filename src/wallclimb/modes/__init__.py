"""Game modes for WALLCLIMB."""

from wallclimb.modes.base import BaseMode, ModeContext, ModeResult, ModePhase
from wallclimb.modes.climb import ClimbMode

__all__ = [
    "BaseMode",
    "ModeContext",
    "ModeResult",
    "ModePhase",
    "ClimbMode",
]
