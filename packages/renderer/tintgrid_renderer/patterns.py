"""Deterministic test patterns and image sampling into a terminal."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .colors import HSV, RGB
from .terminal import BLANK_PROBE


PATTERNS = (
    "black",
    "white",
    "red",
    "green",
    "blue",
    "quadrants",
    "h-gradient",
    "v-gradient",
    "checkerboard",
    "hue-sweep",
    "hsv-plane",
)


def _to_pixel(color: HSV) -> tuple[int, int, int]:
    rgb = color.to_rgb()
    return (int(rgb.red * 255), int(rgb.green * 255), int(rgb.blue * 255))


def build_test_pattern(name: str, width: int, height: int, cell: int = 4) -> Image.Image:
    if name not in PATTERNS:
        raise ValueError(f"Unknown pattern: {name}")
    img = Image.new("RGB", (width, height), (0, 0, 0))
    px = img.load()

    for y in range(height):
        for x in range(width):
            if name == "black":
                c = (0, 0, 0)
            elif name == "white":
                c = (255, 255, 255)
            elif name == "red":
                c = (255, 0, 0)
            elif name == "green":
                c = (0, 255, 0)
            elif name == "blue":
                c = (0, 0, 255)
            elif name == "quadrants":
                if x < width // 2 and y < height // 2:
                    c = (255, 0, 0)
                elif x >= width // 2 and y < height // 2:
                    c = (0, 255, 0)
                elif x < width // 2 and y >= height // 2:
                    c = (0, 0, 255)
                else:
                    c = (255, 255, 255)
            elif name == "h-gradient":
                v = int(255 * (x / max(width - 1, 1)))
                c = (v, v, v)
            elif name == "v-gradient":
                v = int(255 * (y / max(height - 1, 1)))
                c = (v, v, v)
            elif name == "checkerboard":
                c = (255, 255, 255) if ((x // cell + y // cell) % 2 == 0) else (0, 0, 0)
            elif name == "hue-sweep":
                c = _to_pixel(HSV(x / max(width, 1) * 360.0, 1.0, 1.0))
            else:
                # saturation left to right, value top to bottom
                s = x / max(width - 1, 1)
                v = 1.0 - y / max(height - 1, 1)
                c = _to_pixel(HSV(0.0, s, v))
            px[x, y] = c
    return img


def blit_image(terminal, image: Image.Image, x: int = 0, y: int = 0) -> int:
    """Paint ``image`` into cell backgrounds, one pixel per cell.

    Cells are written as blank probe glyphs through the terminal cursor so a
    dithered terminal maps them through its dither table. Pixels falling
    outside the terminal are dropped. Returns the number of cells written.
    """
    if image.mode != "RGB":
        image = image.convert("RGB")
    pixels = np.asarray(image, dtype=np.float64) / 255.0

    saved = terminal.background_color
    rows = min(pixels.shape[0], terminal.height - y)
    cols = min(pixels.shape[1], terminal.width - x)
    written = 0
    try:
        for row in range(max(rows, 0)):
            terminal.set_cursor_position(x, y + row)
            for col in range(max(cols, 0)):
                r, g, b = pixels[row, col]
                terminal.background_color = RGB(float(r), float(g), float(b))
                terminal.write_char(BLANK_PROBE)
                written += 1
    finally:
        terminal.background_color = saved
    return written
