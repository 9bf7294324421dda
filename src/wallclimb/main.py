"""
Main entry point for WALLCLIMB.

Runs the game in a pygame window, or headless with a scripted player
when ``WALLCLIMB_ENV=headless``.
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Optional, Sequence

from wallclimb.config.settings import Settings, get_settings
from wallclimb.core.events import Event, EventBus, EventType, move_event, tick_event
from wallclimb.modes.base import ModeContext
from wallclimb.modes.climb import ClimbMode

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console (and optional file) logging."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    if not debug:
        logging.getLogger("wallclimb.animation").setLevel(logging.INFO)


class WallclimbApp:
    """Wires the event bus, the climb mode and the window together."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.event_bus = EventBus()
        self.context = ModeContext(event_bus=self.event_bus, settings=settings)
        self.mode = ClimbMode(self.context)
        self._setup_event_handlers()

    def _setup_event_handlers(self) -> None:
        for event_type in ClimbMode.INPUT_EVENTS:
            self.event_bus.subscribe(event_type, self.mode.handle_input)
        self.event_bus.subscribe(EventType.TICK, self._on_tick)

    def _on_tick(self, event: Event) -> None:
        delta = event.data.get("delta", 0.016)  # Default 60fps
        self.mode.update(delta * 1000)

    async def run_window(self) -> None:
        from wallclimb.simulator.window import SimulatorWindow, WindowConfig

        display = self.settings.display
        config = WindowConfig(
            viewport_width=self.settings.game.viewport_width,
            viewport_height=self.settings.game.viewport_height,
            controls_height=display.controls_height,
            scale=display.scale,
            title=display.title,
            fps=display.fps,
        )
        window = SimulatorWindow(
            render=self.mode.render_main,
            config=config,
            event_bus=self.event_bus,
        )

        self.mode.enter()
        try:
            await window.run()
        finally:
            result = self.mode.exit()
            logger.info(f"Session result: {result.data}")

    async def run_headless(self, max_frames: int = 36000, miss_chance: float = 0.05) -> int:
        """Play with a scripted player until game over; returns the final score.

        The player answers after a random reaction time and picks the
        wrong side with probability ``miss_chance``.
        """
        rng = random.Random(self.settings.seed)
        session = self.mode.session
        frame_ms = 1000.0 / self.settings.display.fps
        reaction_ms = 0.0
        wait_ms = rng.uniform(150, 900)

        self.mode.enter()
        try:
            for frame in range(max_frames):
                snapshot = session.snapshot()
                if snapshot.game_over:
                    break
                if snapshot.accepting_input:
                    reaction_ms += frame_ms
                    if reaction_ms >= wait_ms:
                        side = snapshot.active_side
                        if rng.random() < miss_chance:
                            side = side.opposite
                        self.event_bus.emit(move_event(side.value, source="autoplay"))
                        reaction_ms = 0.0
                        wait_ms = rng.uniform(150, 900)

                self.event_bus.emit(tick_event(frame_ms / 1000.0, frame))
                await self.event_bus.process_queue()
                await asyncio.sleep(0)
        finally:
            self.mode.exit()

        logger.info(f"Headless run finished with score {session.score}")
        return session.score


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wallclimb",
        description="Reflex climbing game: match each hold's side before time runs out.",
    )
    parser.add_argument("--style", choices=["vector", "sprite"], help="Presentation back end")
    parser.add_argument("--seed", type=int, help="Seed for reproducible hold sequences")
    parser.add_argument("--sprite-sheet", type=Path, help="Five-row sprite sheet image")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment settings with command-line overrides applied."""
    settings = get_settings()
    overrides = {}
    if args.style:
        overrides["style"] = args.style
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.sprite_sheet:
        overrides["sprite_sheet"] = args.sprite_sheet
    if args.headless:
        overrides["env"] = "headless"
    if args.debug:
        overrides["debug"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    args = parse_args(argv)
    settings = build_settings(args)
    setup_logging(settings.debug, args.log_file)

    logger.info("WALLCLIMB starting...")
    logger.info("Controls: LEFT/A, RIGHT/D climb | T day/night | R restart | Q quit")

    try:
        app = WallclimbApp(settings)
        if settings.is_simulator:
            asyncio.run(app.run_window())
        else:
            asyncio.run(app.run_headless())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("WALLCLIMB stopped")


if __name__ == "__main__":
    main()
