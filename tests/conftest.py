"""Shared fixtures for WALLCLIMB tests."""
from __future__ import annotations

from typing import Callable, Iterable

import pytest

from wallclimb.config.settings import GameSettings
from wallclimb.core.events import EventBus
from wallclimb.game.holds import Hold, HoldClass, HoldSide
from wallclimb.game.session import GameSession


class ScriptedGenerator:
    """Hands out holds on the given sides, then repeats ``default``."""

    def __init__(self, sides: Iterable[HoldSide] = (), default: HoldSide = HoldSide.LEFT):
        self._sides = list(sides)
        self._default = default
        self.generated = 0

    def generate(self) -> Hold:
        self.generated += 1
        side = self._sides.pop(0) if self._sides else self._default
        return Hold(side=side, hold_class=HoldClass.MEDIUM)


def run_until(
    session: GameSession,
    predicate: Callable[[GameSession], bool],
    dt: float = 16.0,
    limit: int = 2000,
) -> int:
    """Advance in ``dt`` steps until ``predicate`` holds; returns the tick count."""
    for tick in range(1, limit + 1):
        session.advance(dt)
        if predicate(session):
            return tick
    raise AssertionError("condition not reached")


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture
def session(settings, generator, bus) -> GameSession:
    return GameSession(settings, generator=generator, event_bus=bus)
