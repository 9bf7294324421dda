"""Drawing primitives on numpy RGB buffers of shape (height, width, 3)."""

from typing import Optional, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def hex_to_rgb(value: str) -> Color:
    """'#d1b182' -> (209, 177, 130)."""
    value = value.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def _clip_box(buffer: Buffer, x1: float, y1: float, x2: float, y2: float):
    h, w = buffer.shape[:2]
    return (
        max(0, min(int(np.floor(x1)), w)),
        max(0, min(int(np.floor(y1)), h)),
        max(0, min(int(np.ceil(x2)), w)),
        max(0, min(int(np.ceil(y2)), h)),
    )


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a filled axis-aligned rectangle, clipped to the buffer."""
    x1, y1, x2, y2 = _clip_box(buffer, round(x), round(y), round(x + width), round(y + height))
    if x2 > x1 and y2 > y1:
        buffer[y1:y2, x1:x2] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    upper_half: bool = False,
) -> None:
    """Draw a filled ellipse.

    Only pixels inside the ellipse's bounding box are tested, so large
    buffers stay cheap. ``upper_half`` keeps the part above ``cy``.
    """
    if rx <= 0 or ry <= 0:
        return
    x1, y1, x2, y2 = _clip_box(buffer, cx - rx, cy - ry, cx + rx + 1, cy + ry + 1)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    mask = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2 <= 1.0
    if upper_half:
        mask = mask & (ys <= cy)
    buffer[y1:y2, x1:x2][mask] = color


def draw_circle(buffer: Buffer, cx: float, cy: float, radius: float, color: Color) -> None:
    """Draw a filled circle."""
    draw_ellipse(buffer, cx, cy, radius, radius, color)


def draw_rounded_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    radius: float,
    color: Color,
) -> None:
    """Draw a filled rectangle with rounded corners."""
    r = max(0.0, min(radius, width / 2, height / 2))
    x1, y1, x2, y2 = _clip_box(buffer, x, y, x + width, y + height)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    # Distance from the inner rectangle shrunk by r; inside when <= r
    dx = np.maximum(np.maximum(x + r - (xs + 0.5), (xs + 0.5) - (x + width - r)), 0)
    dy = np.maximum(np.maximum(y + r - (ys + 0.5), (ys + 0.5) - (y + height - r)), 0)
    mask = dx ** 2 + dy ** 2 <= r ** 2 + 1e-9
    buffer[y1:y2, x1:x2][mask] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a line using Bresenham's algorithm."""
    h, w = buffer.shape[:2]
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy
    half = thickness // 2

    x, y = x1, y1
    while True:
        bx1, by1 = max(0, x - half), max(0, y - half)
        bx2, by2 = min(w, x - half + thickness), min(h, y - half + thickness)
        if bx2 > bx1 and by2 > by1:
            buffer[by1:by2, bx1:bx2] = color

        if x == x2 and y == y2:
            break

        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def draw_vertical_gradient(buffer: Buffer, top: Color, bottom: Color) -> None:
    """Fill the buffer with a linear top-to-bottom gradient."""
    h = buffer.shape[0]
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    top_arr = np.array(top, dtype=np.float32)
    bottom_arr = np.array(bottom, dtype=np.float32)
    rows = top_arr * (1.0 - t) + bottom_arr * t
    buffer[:, :] = rows[:, None, :].astype(np.uint8)


def scale_nearest(image: NDArray, width: int, height: int) -> NDArray:
    """Nearest-neighbour resize, keeping the channel count."""
    src_h, src_w = image.shape[:2]
    if (src_w, src_h) == (width, height):
        return image
    cols = (np.arange(width) * src_w // max(1, width)).clip(0, src_w - 1)
    rows = (np.arange(height) * src_h // max(1, height)).clip(0, src_h - 1)
    return image[rows][:, cols]


def draw_image(
    buffer: Buffer,
    image: NDArray,
    x: int,
    y: int,
    alpha: float = 1.0,
    flip: bool = False,
) -> None:
    """Draw an RGB or RGBA image onto the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        image: Source image array (height, width, 3 or 4)
        x: Top-left x coordinate
        y: Top-left y coordinate
        alpha: Global alpha multiplier (0.0 to 1.0)
        flip: Mirror the image horizontally
    """
    if flip:
        image = image[:, ::-1]
    x, y = int(x), int(y)

    buf_h, buf_w = buffer.shape[:2]
    img_h, img_w = image.shape[:2]

    src_x1 = max(0, -x)
    src_y1 = max(0, -y)
    src_x2 = min(img_w, buf_w - x)
    src_y2 = min(img_h, buf_h - y)
    if src_x2 <= src_x1 or src_y2 <= src_y1:
        return

    dst_x1 = max(0, x)
    dst_y1 = max(0, y)
    dst_x2 = dst_x1 + (src_x2 - src_x1)
    dst_y2 = dst_y1 + (src_y2 - src_y1)

    src_region = image[src_y1:src_y2, src_x1:src_x2]

    if alpha >= 1.0 and image.shape[2] == 3:
        buffer[dst_y1:dst_y2, dst_x1:dst_x2] = src_region
        return

    dst_region = buffer[dst_y1:dst_y2, dst_x1:dst_x2].astype(np.float32)
    if image.shape[2] == 4:
        img_alpha = (src_region[:, :, 3:4].astype(np.float32) / 255.0) * alpha
        src_rgb = src_region[:, :, :3].astype(np.float32)
    else:
        img_alpha = alpha
        src_rgb = src_region.astype(np.float32)

    blended = src_rgb * img_alpha + dst_region * (1 - img_alpha)
    buffer[dst_y1:dst_y2, dst_x1:dst_x2] = blended.astype(np.uint8)


def shade(buffer: Buffer, x: int, y: int, width: int, height: int, amount: float) -> None:
    """Darken a region by ``amount`` (0 = untouched, 1 = black)."""
    x1, y1, x2, y2 = _clip_box(buffer, x, y, x + width, y + height)
    if x2 <= x1 or y2 <= y1:
        return
    region = buffer[y1:y2, x1:x2].astype(np.float32) * (1.0 - amount)
    buffer[y1:y2, x1:x2] = region.astype(np.uint8)


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    font: Optional[dict] = None,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using a bitmap font.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    if font is None:
        font = _get_default_font()

    h, w = buffer.shape[:2]
    cursor_x = x
    char_height = 5 * scale

    for char in text:
        glyph = font.get(char.upper())
        if glyph is None:
            cursor_x += 4 * scale
            continue

        mask = np.kron(np.array(glyph, dtype=bool), np.ones((scale, scale), dtype=bool))
        gh, gw = mask.shape
        x1, y1 = max(0, cursor_x), max(0, y)
        x2, y2 = min(w, cursor_x + gw), min(h, y + gh)
        if x2 > x1 and y2 > y1:
            sub = mask[y1 - y:y2 - y, x1 - cursor_x:x2 - cursor_x]
            buffer[y1:y2, x1:x2][sub] = color

        cursor_x += (len(glyph[0]) + 1) * scale

    return cursor_x - x, char_height


def text_width(text: str, scale: int = 1) -> int:
    font = _get_default_font()
    width = 0
    for char in text:
        glyph = font.get(char.upper())
        width += (len(glyph[0]) + 1) * scale if glyph else 4 * scale
    return width


def draw_centered_text(
    buffer: Buffer,
    text: str,
    cx: int,
    y: int,
    color: Color,
    scale: int = 1,
) -> None:
    draw_text(buffer, text, cx - text_width(text, scale) // 2, y, color, scale=scale)


def _get_default_font() -> dict:
    """Return a 3x5 bitmap font covering the HUD's characters."""
    return {
        'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
        'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
        'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
        'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
        'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
        'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
        'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
        'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
        'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
        'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
        'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
        'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
        'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
        'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
        'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
        'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
        'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
        'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
        '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
        '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
        '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
        '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
        '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
        '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
        '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
        '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
        '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
        '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
        '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
        ':': [[0,0,0], [0,1,0], [0,0,0], [0,1,0], [0,0,0]],
        '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
        '/': [[0,0,1], [0,0,1], [0,1,0], [1,0,0], [1,0,0]],
        '<': [[0,0,1], [0,1,0], [1,0,0], [0,1,0], [0,0,1]],
        '>': [[1,0,0], [0,1,0], [0,0,1], [0,1,0], [1,0,0]],
    }
