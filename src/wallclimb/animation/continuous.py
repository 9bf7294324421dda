"""Exponential ease-toward-target animation for the vector climber."""

from dataclasses import dataclass
from typing import Dict, Optional
import logging

from wallclimb.animation.base import Animator, ArmPose
from wallclimb.game.holds import HoldSide

logger = logging.getLogger(__name__)


@dataclass
class Channel:
    """One independently eased value."""

    progress: float = 0.0
    target: float = 0.0

    def update(self, blend: float) -> None:
        self.progress += (self.target - self.progress) * blend
        self.progress = max(0.0, min(1.0, self.progress))

    def settled(self, epsilon: float) -> bool:
        return abs(self.target - self.progress) <= epsilon


class ContinuousAnimator(Animator):
    """Arms and fall offset eased with ``min(1, dt / damping_ms)`` per tick.

    A sequence counts as finished once every channel is within
    ``settle_epsilon`` of its target.
    """

    CHANNELS = ("left_arm", "right_arm", "fall")

    def __init__(self, damping_ms: float = 200.0, settle_epsilon: float = 0.05):
        super().__init__()
        if damping_ms <= 0:
            raise ValueError("damping_ms must be positive")
        self.damping_ms = damping_ms
        self.settle_epsilon = settle_epsilon
        self._channels: Dict[str, Channel] = {name: Channel() for name in self.CHANNELS}
        self._fall_side: Optional[HoldSide] = None

    def channel(self, name: str) -> Channel:
        return self._channels[name]

    def _set_targets(self, left_arm: float, right_arm: float, fall: float) -> None:
        self._channels["left_arm"].target = left_arm
        self._channels["right_arm"].target = right_arm
        self._channels["fall"].target = fall

    def play_climb(self, side: HoldSide) -> None:
        if side is HoldSide.LEFT:
            self._set_targets(1.0, 0.0, 0.0)
            raising = "left_arm"
        else:
            self._set_targets(0.0, 1.0, 0.0)
            raising = "right_arm"
        # Every climb reaches up from the shoulder
        self._channels[raising].progress = 0.0
        self._fall_side = None
        self._begin_sequence()
        logger.debug(f"Arm climb toward {side.value}")

    def play_fall(self, side: Optional[HoldSide]) -> None:
        self._set_targets(0.0, 0.0, 1.0)
        self._fall_side = side
        self._begin_sequence()
        logger.debug(f"Fall sequence (side={side.value if side else None})")

    def return_to_neutral(self) -> None:
        self._set_targets(0.0, 0.0, 0.0)
        self._sequence_active = False

    def reset(self) -> None:
        for channel in self._channels.values():
            channel.progress = 0.0
            channel.target = 0.0
        self._fall_side = None
        self._sequence_active = False
        self._completed = False

    def update(self, dt: float) -> None:
        if dt > 0:
            blend = min(1.0, dt / self.damping_ms)
            for channel in self._channels.values():
                channel.update(blend)

        if self._sequence_active and all(
            c.settled(self.settle_epsilon) for c in self._channels.values()
        ):
            self._finish_sequence()

    def pose(self) -> ArmPose:
        return ArmPose(
            left_arm=self._channels["left_arm"].progress,
            right_arm=self._channels["right_arm"].progress,
            fall=self._channels["fall"].progress,
            fall_side=self._fall_side,
        )
