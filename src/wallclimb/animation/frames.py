"""Fixed-rate sprite frame sequencing."""

from typing import List, Optional, Sequence
import logging

from wallclimb.animation.base import Animator, FramePose
from wallclimb.game.holds import HoldSide

logger = logging.getLogger(__name__)


class FrameAnimator(Animator):
    """Plays queued sprite-sheet rows at ``frame_rate`` frames per second.

    Sheet layout (one row per clip):
        0: idle
        1, 2: climb (reach, pull up)
        3, 4: fall (slip, drop)

    When the last queued row runs out of frames the animator drops back to
    the idle row and raises completion.
    """

    ROW_COUNT = 5
    IDLE_ROW = 0
    CLIMB_ROWS = (1, 2)
    FALL_ROWS = (3, 4)

    def __init__(self, frame_rate: int = 24, frames_per_row: int = 24):
        super().__init__()
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive")
        if frames_per_row <= 0:
            raise ValueError("frames_per_row must be positive")
        self.frame_duration = 1000.0 / frame_rate
        self.frames_per_row = frames_per_row

        self._row = self.IDLE_ROW
        self._frame = 0
        self._queue: List[int] = []
        self._time_acc = 0.0
        self._flip = False

    @property
    def row(self) -> int:
        return self._row

    @property
    def frame(self) -> int:
        return self._frame

    @property
    def queued_rows(self) -> List[int]:
        return list(self._queue)

    def _play(self, rows: Sequence[int], flip: bool) -> None:
        self._row = rows[0]
        self._queue = list(rows[1:])
        self._frame = 0
        self._time_acc = 0.0
        self._flip = flip
        self._begin_sequence()
        logger.debug(f"Playing rows {list(rows)} (flip={flip})")

    def play_climb(self, side: HoldSide) -> None:
        self._play(self.CLIMB_ROWS, flip=side is HoldSide.RIGHT)

    def play_fall(self, side: Optional[HoldSide]) -> None:
        # Timeouts carry no side and never mirror the fall.
        self._play(self.FALL_ROWS, flip=side is HoldSide.RIGHT)

    def return_to_neutral(self) -> None:
        self._queue.clear()
        if self._sequence_active:
            self._row = self.IDLE_ROW
            self._frame = 0
            self._sequence_active = False

    def reset(self) -> None:
        self._row = self.IDLE_ROW
        self._frame = 0
        self._queue = []
        self._time_acc = 0.0
        self._flip = False
        self._sequence_active = False
        self._completed = False

    def update(self, dt: float) -> None:
        if dt <= 0:
            return
        self._time_acc += dt
        while self._time_acc >= self.frame_duration:
            self._time_acc -= self.frame_duration
            self._step_frame()

    def _step_frame(self) -> None:
        self._frame += 1
        if self._frame < self.frames_per_row:
            return

        finished = self._row
        self._frame = 0
        if self._queue:
            self._row = self._queue.pop(0)
        else:
            self._row = self.IDLE_ROW
            if self._sequence_active:
                logger.debug(f"Sequence finished on row {finished}")
            self._finish_sequence()

    def pose(self) -> FramePose:
        return FramePose(row=self._row, frame=self._frame, flip=self._flip)
