"""Wall holds and the procedural hold generator."""

import math
import random
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Protocol

logger = logging.getLogger(__name__)


class HoldSide(Enum):
    """Lane a hold occupies."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "HoldSide":
        return HoldSide.RIGHT if self is HoldSide.LEFT else HoldSide.LEFT


class HoldShape(Enum):
    CIRCLE = "circle"
    ROUNDED_RECT = "rounded"


class HoldClass(Enum):
    """Size/shape class of a hold."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ROUNDED = "rounded"


@dataclass(frozen=True)
class HoldSpec:
    """Fixed geometry and default color for a hold class."""

    width: int
    height: int
    shape: HoldShape
    color: tuple


HOLD_SPECS = {
    HoldClass.SMALL: HoldSpec(40, 40, HoldShape.CIRCLE, (0xD1, 0xB1, 0x82)),
    HoldClass.MEDIUM: HoldSpec(60, 30, HoldShape.ROUNDED_RECT, (0xBF, 0xA9, 0x8B)),
    HoldClass.LARGE: HoldSpec(80, 40, HoldShape.ROUNDED_RECT, (0x9E, 0x88, 0x68)),
    HoldClass.ROUNDED: HoldSpec(50, 50, HoldShape.CIRCLE, (0xC5, 0xA3, 0x77)),
}


@dataclass(frozen=True)
class Hold:
    """One grip on the wall."""

    side: HoldSide
    hold_class: HoldClass

    @property
    def spec(self) -> HoldSpec:
        return HOLD_SPECS[self.hold_class]

    @property
    def width(self) -> int:
        return self.spec.width

    @property
    def height(self) -> int:
        return self.spec.height

    @property
    def shape(self) -> HoldShape:
        return self.spec.shape

    @property
    def color(self) -> tuple:
        return self.spec.color


class HoldSource(Protocol):
    """Anything that can produce the next hold."""

    def generate(self) -> Hold:
        ...


class HoldQueue:
    """Fixed-length ordered wall segment.

    Index 0 is the top of the visible wall; the last hold is the active one,
    the hold the next input must match.
    """

    def __init__(self, holds: List[Hold]):
        if not holds:
            raise ValueError("HoldQueue needs at least one hold")
        self._holds = list(holds)
        self._length = len(self._holds)

    @property
    def active(self) -> Hold:
        return self._holds[-1]

    @property
    def length(self) -> int:
        """Length fixed at construction."""
        return self._length

    def advance(self, new_hold: Hold) -> Hold:
        """Drop the active hold and add ``new_hold`` at the top.

        Returns the consumed hold.
        """
        consumed = self._holds.pop()
        self._holds.insert(0, new_hold)
        assert len(self._holds) == self._length, "hold queue length changed"
        return consumed

    def __len__(self) -> int:
        return len(self._holds)

    def __iter__(self) -> Iterator[Hold]:
        return iter(self._holds)

    def __getitem__(self, index: int) -> Hold:
        return self._holds[index]


def hold_count(viewport_height: int, hold_spacing: int) -> int:
    """Visible holds plus one lookahead above and one below."""
    return math.ceil(viewport_height / hold_spacing) + 2


class HoldGenerator:
    """Random holds: side and class chosen uniformly."""

    SIDES = (HoldSide.LEFT, HoldSide.RIGHT)
    CLASSES = (HoldClass.SMALL, HoldClass.MEDIUM, HoldClass.LARGE, HoldClass.ROUNDED)

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(self) -> Hold:
        side = self.SIDES[0] if self._rng.random() < 0.5 else self.SIDES[1]
        hold_class = self._rng.choice(self.CLASSES)
        return Hold(side=side, hold_class=hold_class)


def init_queue(source: HoldSource, n: int) -> HoldQueue:
    """Build the initial wall of ``n`` holds, active hold last."""
    holds = [source.generate() for _ in range(n)]
    logger.debug(f"Generated wall of {n} holds, active side {holds[-1].side.value}")
    return HoldQueue(holds)
