"""Keyboard bindings for the simulator window."""

from typing import Optional

import pygame

from wallclimb.core.events import Event, EventType

KEY_BINDINGS: dict[int, EventType] = {
    # Moves
    pygame.K_LEFT: EventType.MOVE_LEFT,
    pygame.K_a: EventType.MOVE_LEFT,
    pygame.K_RIGHT: EventType.MOVE_RIGHT,
    pygame.K_d: EventType.MOVE_RIGHT,

    # Cosmetic
    pygame.K_t: EventType.TOGGLE_DAY_NIGHT,

    # Restart
    pygame.K_r: EventType.RESTART,
    pygame.K_SPACE: EventType.RESTART,
    pygame.K_RETURN: EventType.RESTART,

    # System
    pygame.K_ESCAPE: EventType.QUIT,
    pygame.K_q: EventType.QUIT,
}


def event_for_key(key: int, source: str = "keyboard") -> Optional[Event]:
    """Translate a pygame key code into a game event, if bound."""
    event_type = KEY_BINDINGS.get(key)
    if event_type is None:
        return None
    return Event(event_type, source=source)
