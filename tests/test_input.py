"""Tests for simulator key bindings and button hit-testing."""
from __future__ import annotations

import pygame
import pytest

from wallclimb.core.events import EventBus, EventType
from wallclimb.simulator.input import KEY_BINDINGS, event_for_key
from wallclimb.simulator.window import SimulatorWindow, WindowConfig


@pytest.mark.parametrize(
    "key, expected",
    [
        (pygame.K_LEFT, EventType.MOVE_LEFT),
        (pygame.K_a, EventType.MOVE_LEFT),
        (pygame.K_RIGHT, EventType.MOVE_RIGHT),
        (pygame.K_d, EventType.MOVE_RIGHT),
        (pygame.K_t, EventType.TOGGLE_DAY_NIGHT),
        (pygame.K_r, EventType.RESTART),
        (pygame.K_SPACE, EventType.RESTART),
        (pygame.K_ESCAPE, EventType.QUIT),
    ],
)
def test_key_bindings(key, expected):
    event = event_for_key(key)
    assert event is not None
    assert event.type is expected
    assert event.source == "keyboard"


def test_unbound_key_ignored():
    assert pygame.K_z not in KEY_BINDINGS
    assert event_for_key(pygame.K_z) is None


def test_buttons_publish_moves():
    bus = EventBus()
    received = []
    bus.subscribe_all(lambda event: received.append((event.type, event.source)))

    window = SimulatorWindow(lambda buffer: None, WindowConfig(), event_bus=bus)
    window._calculate_layout()

    # Controls strip starts below the 640px playfield
    y = 640 + 45
    assert window.button_at((30, y)) == "left"
    assert window.button_at((180, y)) == "restart"
    assert window.button_at((330, y)) == "right"
    assert window.button_at((180, 100)) is None

    window._handle_click((30, y))
    window._handle_click((330, y))
    window._handle_click((180, 100))

    assert received == [
        (EventType.MOVE_LEFT, "pointer"),
        (EventType.MOVE_RIGHT, "pointer"),
    ]


def test_quit_event_stops_window():
    bus = EventBus()
    window = SimulatorWindow(lambda buffer: None, event_bus=bus)
    window._running = True

    bus.emit(event_for_key(pygame.K_q))

    assert window._running is False
