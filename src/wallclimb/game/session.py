"""
Game session: the turn loop shared by every presentation back end.

One session owns the hold queue, the countdown, the scroll and the
animator. The host feeds it moves and frame deltas and reads snapshots
back; drawing happens elsewhere.
"""

from typing import Any, Optional, Union
import logging
import random

from wallclimb.animation.base import Animator
from wallclimb.animation.continuous import ContinuousAnimator
from wallclimb.config.settings import GameSettings
from wallclimb.core.events import Event, EventBus, EventType
from wallclimb.core.state import StateMachine, TurnContext, TurnOutcome, TurnPhase
from wallclimb.game.holds import (
    HoldGenerator,
    HoldQueue,
    HoldSide,
    HoldSource,
    hold_count,
    init_queue,
)
from wallclimb.game.snapshot import (
    GameSnapshot,
    HoldView,
    hold_y,
    is_visible,
    lane_center,
)
from wallclimb.game.timer import TimerController

logger = logging.getLogger(__name__)

# Float slack when comparing summed frame deltas to the scroll duration
_SCROLL_EPSILON = 1e-9


class GameSession:
    """
    A single climbing run, restartable in place.

    Turn flow:
        READY --correct side--> RESOLVING(CLIMB) --done--> SCROLLING --done--> READY
        READY --wrong side / timeout--> RESOLVING(FALL) --done--> GAME_OVER

    Moves outside READY are ignored. ``advance`` applies at most one phase
    change per call.
    """

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        generator: Optional[HoldSource] = None,
        animator: Optional[Animator] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or GameSettings()
        self.generator: HoldSource = generator or HoldGenerator(rng)
        self.animator = animator or ContinuousAnimator(
            damping_ms=self.settings.arm_damping_ms,
            settle_epsilon=self.settings.settle_epsilon,
        )
        self.event_bus = event_bus

        self.timer = TimerController(self.settings.max_time_ms)
        self.queue_length = hold_count(
            self.settings.viewport_height, self.settings.hold_spacing
        )

        # Survive restarts
        self.is_day = True
        self.best_score = 0
        self.games_played = 0

        self._machine = StateMachine()
        self._reset_run()
        self._machine.add_listener(self._on_phase_change)

        logger.info(
            f"Session ready: {self.queue_length} holds, "
            f"{self.settings.max_time_ms:.0f}ms per turn"
        )

    # Read-only state

    @property
    def phase(self) -> TurnPhase:
        return self._machine.state

    @property
    def outcome(self) -> Optional[TurnOutcome]:
        return self._machine.context.outcome

    @property
    def context(self) -> TurnContext:
        return self._machine.context

    @property
    def score(self) -> int:
        return self._score

    @property
    def final_score(self) -> Optional[int]:
        return self._final_score

    @property
    def hold_queue(self) -> HoldQueue:
        return self._hold_queue

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    # Commands

    def move(self, side: Union[HoldSide, str]) -> None:
        """Resolve a left/right input against the active hold."""
        if self.phase is not TurnPhase.READY:
            logger.debug(f"Ignoring move during {self.phase.name}")
            return

        side = HoldSide(side)
        active = self._hold_queue.active
        self.timer.reset()

        if side is active.side:
            self._score += 1
            self.animator.play_climb(side)
            self._machine.transition(
                TurnPhase.RESOLVING,
                outcome=TurnOutcome.CLIMB,
                input_side=side,
            )
            logger.info(f"Turn {self._turn}: climbed {side.value}, score {self._score}")
            self._emit(EventType.SCORE_CHANGED, score=self._score)
        else:
            self.animator.play_fall(side)
            self._machine.transition(
                TurnPhase.RESOLVING,
                outcome=TurnOutcome.FALL,
                input_side=side,
            )
            logger.info(
                f"Turn {self._turn}: pressed {side.value}, "
                f"hold was {active.side.value}"
            )

        self._emit(
            EventType.TURN_RESOLVED,
            outcome=self.outcome,
            side=side,
            score=self._score,
        )
        self._check_invariants()

    def toggle_day_night(self) -> None:
        self.is_day = not self.is_day
        logger.debug(f"Day/night toggled (day={self.is_day})")
        self._emit(EventType.DAY_NIGHT_TOGGLED, is_day=self.is_day)

    def restart(self) -> None:
        """Throw away the current run and start a fresh one."""
        self._reset_run()
        self._machine.reset()
        logger.info(f"Game restarted (best {self.best_score}, played {self.games_played})")
        self._emit(EventType.GAME_RESTARTED, score=self._score)
        self._emit(EventType.SCORE_CHANGED, score=self._score)

    def advance(self, dt: float) -> None:
        """Advance the session by ``dt`` milliseconds."""
        if self.phase is TurnPhase.GAME_OVER:
            return

        dt = max(0.0, dt)
        self.animator.update(dt)

        phase = self.phase
        if phase is TurnPhase.RESOLVING:
            if self.animator.consume_complete():
                if self.outcome is TurnOutcome.CLIMB:
                    self._begin_scroll()
                else:
                    self._end_game()
        elif phase is TurnPhase.SCROLLING:
            self._advance_scroll(dt)
        elif phase is TurnPhase.READY:
            if self.timer.tick(dt):
                self._on_timeout()

        self._check_invariants()

    def snapshot(self) -> GameSnapshot:
        width = self.settings.viewport_width
        height = self.settings.viewport_height
        spacing = self.settings.hold_spacing
        last = len(self._hold_queue) - 1

        views = []
        for index, hold in enumerate(self._hold_queue):
            y = hold_y(index, spacing, self._scroll_offset)
            if not is_visible(y, hold.height, height):
                continue
            views.append(HoldView(
                side=hold.side,
                hold_class=hold.hold_class,
                shape=hold.shape,
                color=hold.color,
                width=hold.width,
                height=hold.height,
                x=lane_center(hold.side, width) - hold.width / 2,
                y=y,
                is_active=index == last,
            ))

        return GameSnapshot(
            phase=self.phase,
            outcome=self.outcome,
            score=self._score,
            best_score=self.best_score,
            time_left=self.timer.display,
            time_fraction=self.timer.fraction,
            scroll_offset=self._scroll_offset,
            holds=tuple(views),
            active_side=self._hold_queue.active.side,
            pose=self.animator.pose(),
            is_day=self.is_day,
            viewport=(width, height),
            final_score=self._final_score,
        )

    # Internals

    def _reset_run(self) -> None:
        self._score = 0
        self._final_score: Optional[int] = None
        self._turn = 1
        self._scroll_offset = 0.0
        self._scroll_elapsed = 0.0
        self._hold_queue = init_queue(self.generator, self.queue_length)
        self.timer.reset()
        self.animator.reset()

    def _on_timeout(self) -> None:
        self.timer.reset()
        self.animator.play_fall(None)
        self._machine.transition(
            TurnPhase.RESOLVING,
            outcome=TurnOutcome.FALL,
            input_side=None,
        )
        logger.info(f"Turn {self._turn}: time ran out")
        self._emit(
            EventType.TURN_RESOLVED,
            outcome=TurnOutcome.FALL,
            side=None,
            score=self._score,
        )

    def _begin_scroll(self) -> None:
        self._scroll_elapsed = 0.0
        self._scroll_offset = 0.0
        self._machine.transition(TurnPhase.SCROLLING)

    def _advance_scroll(self, dt: float) -> None:
        duration = self.settings.scroll_duration_ms
        self._scroll_elapsed += dt
        progress = min(1.0, self._scroll_elapsed / duration)
        self._scroll_offset = self.settings.hold_spacing * progress

        if self._scroll_elapsed + _SCROLL_EPSILON >= duration:
            self._finish_scroll()

    def _finish_scroll(self) -> None:
        self._scroll_offset = 0.0
        self._scroll_elapsed = 0.0
        consumed = self._hold_queue.advance(self.generator.generate())
        self.animator.return_to_neutral()
        self.timer.reset()
        self._turn += 1
        self._machine.transition(TurnPhase.READY, outcome=None, turn=self._turn)
        self._emit(
            EventType.HOLDS_ADVANCED,
            consumed=consumed,
            active_side=self._hold_queue.active.side,
        )

    def _end_game(self) -> None:
        self._final_score = self._score
        self.best_score = max(self.best_score, self._score)
        self.games_played += 1
        self._machine.transition(TurnPhase.GAME_OVER)
        logger.info(f"Game over: score {self._final_score}, best {self.best_score}")
        self._emit(
            EventType.GAME_OVER,
            final_score=self._final_score,
            best_score=self.best_score,
        )

    def _on_phase_change(
        self, old: TurnPhase, new: TurnPhase, context: TurnContext
    ) -> None:
        self._emit(
            EventType.PHASE_CHANGED,
            old=old,
            new=new,
            outcome=context.outcome,
        )

    def _emit(self, event_type: EventType, **data: Any) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="session"))

    def _check_invariants(self) -> None:
        assert len(self._hold_queue) == self.queue_length, "hold queue length changed"
        assert 0.0 <= self.timer.display <= self.timer.max_time_ms
        assert self._score >= 0
        assert 0.0 <= self._scroll_offset <= self.settings.hold_spacing
