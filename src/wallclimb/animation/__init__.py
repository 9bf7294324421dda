"""Animation module for WALLCLIMB."""

from wallclimb.animation.base import Animator, ArmPose, FramePose, Pose
from wallclimb.animation.continuous import Channel, ContinuousAnimator
from wallclimb.animation.frames import FrameAnimator

__all__ = [
    "Animator",
    "ArmPose",
    "FramePose",
    "Pose",
    "Channel",
    "ContinuousAnimator",
    "FrameAnimator",
]
