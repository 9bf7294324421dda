"""Base class for WALLCLIMB modes."""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum, auto
import logging

from wallclimb.config.settings import Settings
from wallclimb.core.events import EventBus, Event

logger = logging.getLogger(__name__)


class ModePhase(Enum):
    """Phases within a mode's lifecycle."""

    INTRO = auto()       # Entry
    ACTIVE = auto()      # Main interaction
    RESULT = auto()      # Showing result
    OUTRO = auto()       # Exit


@dataclass
class ModeResult:
    """Result from a completed mode session."""

    mode_name: str
    success: bool = True
    data: Dict[str, Any] = field(default_factory=dict)
    display_text: str = ""
    error: Optional[str] = None


@dataclass
class ModeContext:
    """Shared context passed to modes."""

    event_bus: EventBus
    settings: Settings


class BaseMode(ABC):
    """Abstract base class for modes.

    Lifecycle:
        1. on_enter() - Initialize mode
        2. on_update(delta) - Per-frame logic while active
        3. on_input(event) - Handle user input
        4. on_exit() - Cleanup, prepare result
    """

    name: str = "base"
    display_name: str = "Base Mode"
    description: str = "Base mode class"

    def __init__(self, context: ModeContext):
        self.context = context
        self.phase = ModePhase.INTRO
        self._active = False
        self._result: Optional[ModeResult] = None
        logger.debug(f"Mode created: {self.name}")

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def result(self) -> Optional[ModeResult]:
        """Get the mode result (available after exit)."""
        return self._result

    def enter(self) -> None:
        """Called when mode becomes active."""
        self._active = True
        self.phase = ModePhase.INTRO
        self._result = None

        logger.info(f"Entering mode: {self.name}")
        self.on_enter()

    def exit(self) -> ModeResult:
        """Called when mode is deactivated."""
        logger.info(f"Exiting mode: {self.name}")
        self.on_exit()
        self._active = False
        self.change_phase(ModePhase.OUTRO)

        if self._result is None:
            self._result = ModeResult(
                mode_name=self.name,
                success=False,
                error="Mode exited without result"
            )

        return self._result

    def update(self, delta_ms: float) -> None:
        """Update mode state each frame.

        Args:
            delta_ms: Time since last update in milliseconds
        """
        if not self._active:
            return

        self.on_update(delta_ms)

    def handle_input(self, event: Event) -> bool:
        """Process input event. Returns True if event was handled."""
        if not self._active:
            return False

        return self.on_input(event)

    def change_phase(self, new_phase: ModePhase) -> None:
        old_phase = self.phase
        self.phase = new_phase

        logger.debug(f"Mode {self.name}: {old_phase.name} -> {new_phase.name}")

    @abstractmethod
    def on_enter(self) -> None:
        pass

    @abstractmethod
    def on_update(self, delta_ms: float) -> None:
        pass

    @abstractmethod
    def on_input(self, event: Event) -> bool:
        """Handle user input. Return True if handled."""
        pass

    @abstractmethod
    def on_exit(self) -> None:
        pass

    def render_main(self, buffer) -> None:
        """Render into the viewport buffer. Override for custom rendering."""
        pass

