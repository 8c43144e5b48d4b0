"""Line and rectangle helpers built on ``TerminalBuffer.set_point``."""

from __future__ import annotations

from .buffers import TerminalBuffer
from .colors import Color
from .errors import BoundsError


def _ordered(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


def _check_span(name: str, start: int, end: int, limit: int) -> None:
    if start < 0 or end >= limit:
        raise BoundsError(f"Given {name} range ({start}, {end}) is outside of the buffer extent {limit}")


def draw_horizontal_line(
    buffer: TerminalBuffer, start_x: int, end_x: int, y: int, ch: str, foreground: Color, background: Color
) -> None:
    start_x, end_x = _ordered(start_x, end_x)
    _check_span("x", start_x, end_x, buffer.width)
    _check_span("y", y, y, buffer.height)
    for x in range(start_x, end_x + 1):
        buffer.set_point(x, y, ch, foreground, background)


def draw_vertical_line(
    buffer: TerminalBuffer, x: int, start_y: int, end_y: int, ch: str, foreground: Color, background: Color
) -> None:
    start_y, end_y = _ordered(start_y, end_y)
    _check_span("y", start_y, end_y, buffer.height)
    _check_span("x", x, x, buffer.width)
    for y in range(start_y, end_y + 1):
        buffer.set_point(x, y, ch, foreground, background)


def draw_rectangle(
    buffer: TerminalBuffer,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    ch: str,
    foreground: Color,
    background: Color,
) -> None:
    """Outline only; corners are drawn by the vertical edges."""
    start_x, end_x = _ordered(start_x, end_x)
    start_y, end_y = _ordered(start_y, end_y)
    if end_x - start_x >= 2:
        draw_horizontal_line(buffer, start_x + 1, end_x - 1, start_y, ch, foreground, background)
        draw_horizontal_line(buffer, start_x + 1, end_x - 1, end_y, ch, foreground, background)
    draw_vertical_line(buffer, start_x, start_y, end_y, ch, foreground, background)
    draw_vertical_line(buffer, end_x, start_y, end_y, ch, foreground, background)


def fill_rectangle(
    buffer: TerminalBuffer,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    ch: str,
    foreground: Color,
    background: Color,
) -> None:
    start_x, end_x = _ordered(start_x, end_x)
    start_y, end_y = _ordered(start_y, end_y)
    _check_span("x", start_x, end_x, buffer.width)
    _check_span("y", start_y, end_y, buffer.height)
    for y in range(start_y, end_y + 1):
        for x in range(start_x, end_x + 1):
            buffer.set_point(x, y, ch, foreground, background)


def draw_line(
    buffer: TerminalBuffer,
    start_x: int,
    start_y: int,
    end_x: int,
    end_y: int,
    ch: str,
    foreground: Color,
    background: Color,
) -> None:
    for px, py, label in ((start_x, start_y, "Start"), (end_x, end_y, "End")):
        if not (0 <= px < buffer.width and 0 <= py < buffer.height):
            raise BoundsError(f"{label} point ({px}, {py}) is outside of the buffer")

    dx = end_x - start_x
    dy = end_y - start_y
    steps = max(abs(dx), abs(dy))
    if steps == 0:
        buffer.set_point(start_x, start_y, ch, foreground, background)
        return

    step_x = dx / steps
    step_y = dy / steps
    x, y = float(start_x), float(start_y)
    for _ in range(steps + 1):
        buffer.set_point(int(round(x)), int(round(y)), ch, foreground, background)
        x += step_x
        y += step_y
