"""Graphics module for WALLCLIMB."""

from wallclimb.graphics.primitives import (
    Buffer,
    Color,
    draw_centered_text,
    draw_circle,
    draw_ellipse,
    draw_image,
    draw_line,
    draw_rect,
    draw_rounded_rect,
    draw_text,
    draw_vertical_gradient,
    hex_to_rgb,
    new_buffer,
    scale_nearest,
    shade,
    text_width,
)

__all__ = [
    "Buffer",
    "Color",
    "draw_centered_text",
    "draw_circle",
    "draw_ellipse",
    "draw_image",
    "draw_line",
    "draw_rect",
    "draw_rounded_rect",
    "draw_text",
    "draw_vertical_gradient",
    "hex_to_rgb",
    "new_buffer",
    "scale_nearest",
    "shade",
    "text_width",
]
