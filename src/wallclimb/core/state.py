"""
Turn phase state machine for WALLCLIMB.

Phases:
    READY: Waiting for the player to pick a side (countdown running)
    RESOLVING: Climb or fall sequence playing after an input or timeout
    SCROLLING: Wall shifting down by one hold spacing after a climb
    GAME_OVER: Run finished, scene frozen until restart
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    """Game phases."""
    READY = auto()
    RESOLVING = auto()
    SCROLLING = auto()
    GAME_OVER = auto()


class TurnOutcome(Enum):
    """Sub-path of the RESOLVING phase."""
    CLIMB = auto()
    FALL = auto()


@dataclass
class TurnContext:
    """Context data carried across phase changes."""
    outcome: TurnOutcome | None = None
    input_side: Any = None
    turn: int = 0


class StateMachine:
    """
    Tracks the current turn phase and enforces valid transitions.

    Listeners are notified on every successful transition and on reset.
    """

    VALID_TRANSITIONS: list[tuple[TurnPhase, TurnPhase]] = [
        # Input or timeout
        (TurnPhase.READY, TurnPhase.RESOLVING),

        # Sequence finished
        (TurnPhase.RESOLVING, TurnPhase.SCROLLING),
        (TurnPhase.RESOLVING, TurnPhase.GAME_OVER),

        # Scroll finished
        (TurnPhase.SCROLLING, TurnPhase.READY),
    ]

    def __init__(self, initial_state: TurnPhase = TurnPhase.READY) -> None:
        self._state = initial_state
        self._context = TurnContext()
        self._listeners: list[Callable[[TurnPhase, TurnPhase, TurnContext], None]] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> TurnPhase:
        """Get current phase."""
        return self._state

    @property
    def context(self) -> TurnContext:
        """Get current context."""
        return self._context

    def can_transition(self, to_state: TurnPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: TurnPhase, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_state: Target phase
            **context_updates: Context attributes to overwrite

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.debug(f"Phase transition: {old_state.name} -> {to_state.name}")

        self._notify(old_state, to_state)
        return True

    def add_listener(
        self,
        callback: Callable[[TurnPhase, TurnPhase, TurnContext], None]
    ) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(
        self,
        callback: Callable[[TurnPhase, TurnPhase, TurnContext], None]
    ) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset to READY with a fresh context, from any phase."""
        old_state = self._state
        self._state = TurnPhase.READY
        self._context = TurnContext()
        self._notify(old_state, TurnPhase.READY)
        logger.debug("StateMachine reset to READY")

    def _notify(self, old_state: TurnPhase, new_state: TurnPhase) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
