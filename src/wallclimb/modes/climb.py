"""Climb - pick the side of the next hold before the timer runs out."""

import random
from typing import Callable, List, Optional

import numpy as np
from numpy.typing import NDArray

from wallclimb.core.events import Event, EventType
from wallclimb.game.holds import HoldSide
from wallclimb.game.session import GameSession
from wallclimb.modes.base import BaseMode, ModeContext, ModePhase, ModeResult
from wallclimb.render import Backend, create_backend, draw_hud


class ClimbMode(BaseMode):
    name = "climb"
    display_name = "WALLCLIMB"
    description = "Match each hold's side before time runs out"

    INPUT_EVENTS = (
        EventType.MOVE_LEFT,
        EventType.MOVE_RIGHT,
        EventType.TOGGLE_DAY_NIGHT,
        EventType.RESTART,
    )

    def __init__(
        self,
        context: ModeContext,
        backend: Optional[Backend] = None,
        session: Optional[GameSession] = None,
    ):
        super().__init__(context)
        settings = context.settings
        self.backend = backend or create_backend(settings.style, settings)

        rng = random.Random(settings.seed) if settings.seed is not None else None
        self.session = session or GameSession(
            settings.game,
            animator=self.backend.animator,
            event_bus=context.event_bus,
            rng=rng,
        )
        self._unsubscribers: List[Callable[[], None]] = []

    def on_enter(self) -> None:
        bus = self.context.event_bus
        self._unsubscribers = [
            bus.subscribe(EventType.GAME_OVER, self._on_game_over),
            bus.subscribe(EventType.GAME_RESTARTED, self._on_restarted),
        ]
        self.change_phase(ModePhase.ACTIVE)

    def on_exit(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

        self._result = ModeResult(
            mode_name=self.name,
            success=self.session.best_score > 0,
            data={
                "score": self.session.score,
                "best_score": self.session.best_score,
                "games_played": self.session.games_played,
            },
            display_text=f"BEST {self.session.best_score}",
        )

    def on_input(self, event: Event) -> bool:
        if event.type == EventType.MOVE_LEFT:
            self.session.move(HoldSide.LEFT)
        elif event.type == EventType.MOVE_RIGHT:
            self.session.move(HoldSide.RIGHT)
        elif event.type == EventType.TOGGLE_DAY_NIGHT:
            self.session.toggle_day_night()
        elif event.type == EventType.RESTART:
            self.session.restart()
        else:
            return False
        return True

    def on_update(self, delta_ms: float) -> None:
        self.session.advance(delta_ms)

    def _on_game_over(self, event: Event) -> None:
        self.change_phase(ModePhase.RESULT)

    def _on_restarted(self, event: Event) -> None:
        self.change_phase(ModePhase.ACTIVE)

    def render_main(self, buffer: NDArray[np.uint8]) -> None:
        snapshot = self.session.snapshot()
        buffer[:, :] = self.backend.renderer.render(snapshot)
        draw_hud(buffer, snapshot)
