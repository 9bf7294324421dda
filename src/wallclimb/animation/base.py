"""Shared contract for climber animators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from wallclimb.game.holds import HoldSide


@dataclass(frozen=True)
class ArmPose:
    """Continuous pose: arm raise and fall progress, each in [0, 1]."""

    left_arm: float = 0.0
    right_arm: float = 0.0
    fall: float = 0.0
    fall_side: Optional[HoldSide] = None


@dataclass(frozen=True)
class FramePose:
    """Sprite pose: sheet row, frame column and horizontal mirror flag."""

    row: int = 0
    frame: int = 0
    flip: bool = False


Pose = Union[ArmPose, FramePose]


class Animator(ABC):
    """Advances the climber animation toward its current sequence.

    A sequence is started by ``play_climb`` or ``play_fall``. When it
    finishes, ``consume_complete`` returns True exactly once.
    """

    def __init__(self) -> None:
        self._sequence_active = False
        self._completed = False

    @property
    def busy(self) -> bool:
        """True while a climb or fall sequence is still playing."""
        return self._sequence_active

    def consume_complete(self) -> bool:
        """Take the completion signal of the last sequence, if raised."""
        if self._completed:
            self._completed = False
            return True
        return False

    def _begin_sequence(self) -> None:
        self._sequence_active = True
        self._completed = False

    def _finish_sequence(self) -> None:
        if self._sequence_active:
            self._sequence_active = False
            self._completed = True

    @abstractmethod
    def play_climb(self, side: HoldSide) -> None:
        """Start the climb sequence toward ``side``."""
        pass

    @abstractmethod
    def play_fall(self, side: Optional[HoldSide]) -> None:
        """Start the fall sequence; ``side`` is None on timeout."""
        pass

    @abstractmethod
    def return_to_neutral(self) -> None:
        """Head back to the idle pose without raising completion."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Jump straight to the idle pose and drop any sequence."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance by ``dt`` milliseconds."""
        pass

    @abstractmethod
    def pose(self) -> Pose:
        """Current renderable pose."""
        pass
