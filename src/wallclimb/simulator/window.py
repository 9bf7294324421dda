"""
Desktop window for WALLCLIMB using pygame.

Shows the playfield with the on-screen controls underneath it.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from wallclimb.core.events import EventBus, EventType, Event, tick_event
from wallclimb.simulator.input import event_for_key

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    viewport_width: int = 360
    viewport_height: int = 640
    controls_height: int = 90
    scale: int = 1
    title: str = "WALLCLIMB"
    fps: int = 60

    # Colors
    bg_color: tuple[int, int, int] = (20, 20, 30)
    button_color: tuple[int, int, int] = (47, 111, 153)
    button_pressed: tuple[int, int, int] = (244, 122, 48)
    text_color: tuple[int, int, int] = (230, 235, 245)

    @property
    def width(self) -> int:
        return self.viewport_width * self.scale

    @property
    def height(self) -> int:
        return (self.viewport_height + self.controls_height) * self.scale


class SimulatorWindow:
    """
    Window hosting the playfield. Input is published on the event bus;
    ``render`` fills the playfield buffer every frame.

    Keyboard Mapping:
        LEFT / A: Move left
        RIGHT / D: Move right
        T: Toggle day/night
        R / SPACE / ENTER: Restart
        ESC / Q: Exit

    Mouse: the LEFT, RESTART and RIGHT buttons under the playfield.
    """

    BUTTONS = (
        ("left", "< LEFT", EventType.MOVE_LEFT),
        ("restart", "RESTART", EventType.RESTART),
        ("right", "RIGHT >", EventType.MOVE_RIGHT),
    )

    def __init__(
        self,
        render: Callable[[np.ndarray], None],
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.render_playfield = render
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        self.buffer = np.zeros(
            (self.config.viewport_height, self.config.viewport_width, 3),
            dtype=np.uint8,
        )
        self._buttons: dict[str, pygame.Rect] = {}
        self._pressed: Optional[str] = None

        self.event_bus.subscribe(EventType.QUIT, self._on_quit)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            pygame.DOUBLEBUF,
        )
        self._clock = pygame.time.Clock()
        pygame.font.init()
        self._font = pygame.font.Font(None, 24 * self.config.scale)
        self._calculate_layout()
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Three buttons side by side in the controls strip."""
        scale = self.config.scale
        top = self.config.viewport_height * scale
        strip_h = self.config.controls_height * scale
        margin = 12 * scale
        count = len(self.BUTTONS)
        button_w = (self.config.width - margin * (count + 1)) // count
        button_h = strip_h - 2 * margin

        self._buttons = {}
        for index, (name, _label, _event_type) in enumerate(self.BUTTONS):
            x = margin + index * (button_w + margin)
            self._buttons[name] = pygame.Rect(x, top + margin, button_w, button_h)

    def button_at(self, pos: tuple[int, int]) -> Optional[str]:
        for name, rect in self._buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._pressed = None

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        game_event = event_for_key(event.key)
        if game_event is None:
            return
        self._dispatch(game_event)

    def _handle_click(self, pos: tuple[int, int]) -> None:
        name = self.button_at(pos)
        if name is None:
            return
        self._pressed = name
        for button, _label, event_type in self.BUTTONS:
            if button == name:
                self._dispatch(Event(event_type, source="pointer"))
                break

    def _dispatch(self, event: Event) -> None:
        self.event_bus.emit(event)

    def _on_quit(self, event: Event) -> None:
        self._running = False

    def _render(self) -> None:
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        self.render_playfield(self.buffer)
        surface = pygame.surfarray.make_surface(self.buffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(
                surface,
                (self.config.width, self.config.viewport_height * self.config.scale),
            )
        self._screen.blit(surface, (0, 0))

        self._render_controls()
        pygame.display.flip()

    def _render_controls(self) -> None:
        for name, label, _event_type in self.BUTTONS:
            rect = self._buttons[name]
            color = self.config.button_pressed if name == self._pressed else self.config.button_color
            pygame.draw.rect(self._screen, color, rect, border_radius=10)
            if self._font:
                text_surface = self._font.render(label, True, self.config.text_color)
                self._screen.blit(text_surface, text_surface.get_rect(center=rect.center))

    async def run(self) -> None:
        """Main loop: input, tick, render."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            if self._clock:
                delta = self._clock.get_time() / 1000.0
                self.event_bus.emit(tick_event(delta, self._frame_count))

            await self.event_bus.process_queue()

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        self._running = False
