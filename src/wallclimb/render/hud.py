"""Score, countdown bar and game-over overlay drawn over the scene."""

from wallclimb.game.snapshot import GameSnapshot
from wallclimb.graphics.primitives import (
    Buffer,
    draw_centered_text,
    draw_rect,
    draw_text,
    shade,
)

TEXT_DAY = (40, 50, 70)
TEXT_NIGHT = (230, 235, 245)
BAR_BG = (60, 60, 80)
BAR_FULL = (46, 204, 113)
BAR_LOW = (231, 76, 60)
OVERLAY_TEXT = (255, 255, 255)
OVERLAY_ACCENT = (247, 191, 79)

BAR_HEIGHT = 10
MARGIN = 12


def bar_color(fraction: float):
    """Green when full, blending to red as time runs out."""
    fraction = max(0.0, min(1.0, fraction))
    return tuple(
        int(low + (full - low) * fraction)
        for full, low in zip(BAR_FULL, BAR_LOW)
    )


def draw_hud(buffer: Buffer, snapshot: GameSnapshot) -> None:
    width = buffer.shape[1]
    text_color = TEXT_DAY if snapshot.is_day else TEXT_NIGHT

    # Countdown bar across the top
    bar_w = width - 2 * MARGIN
    draw_rect(buffer, MARGIN, MARGIN, bar_w, BAR_HEIGHT, BAR_BG)
    filled = int(bar_w * snapshot.time_fraction)
    if filled > 0:
        draw_rect(buffer, MARGIN, MARGIN, filled, BAR_HEIGHT, bar_color(snapshot.time_fraction))

    draw_text(buffer, f"SCORE {snapshot.score}", MARGIN, MARGIN + BAR_HEIGHT + 8, text_color, scale=3)
    if snapshot.best_score:
        draw_text(buffer, f"BEST {snapshot.best_score}", MARGIN, MARGIN + BAR_HEIGHT + 30, text_color, scale=2)

    if snapshot.game_over:
        draw_game_over(buffer, snapshot)


def draw_game_over(buffer: Buffer, snapshot: GameSnapshot) -> None:
    height, width = buffer.shape[:2]
    shade(buffer, 0, 0, width, height, 0.6)

    cx = width // 2
    top = height // 3
    draw_centered_text(buffer, "GAME OVER", cx, top, OVERLAY_ACCENT, scale=5)
    draw_centered_text(buffer, f"SCORE {snapshot.final_score}", cx, top + 50, OVERLAY_TEXT, scale=4)
    draw_centered_text(buffer, f"BEST {snapshot.best_score}", cx, top + 90, OVERLAY_TEXT, scale=3)
    draw_centered_text(buffer, "PRESS R TO RESTART", cx, top + 130, OVERLAY_TEXT, scale=2)
