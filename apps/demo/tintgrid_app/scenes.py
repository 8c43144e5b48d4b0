"""Frame painters used by the ``demo`` command."""

from __future__ import annotations

import math

from tintgrid_renderer import HSV, RGB, Color24, Terminal, draw_line, draw_rectangle

SCENES = ("color-space", "lines", "bounce")


def color_space(terminal: Terminal, frame: int) -> None:
    """HSV plane whose hue drifts with the frame index, over a hue strip."""
    terminal.clear()
    seconds = frame / 30.0
    rows = terminal.height - 1
    for y in range(rows):
        for x in range(0, terminal.width, 2):
            a = x / max(terminal.width - 1, 1)
            b = 1.0 - y / max(rows - 1, 1)
            if (int(seconds) // 24) % 2 == 0:
                terminal.background_color = HSV(60 * seconds, a, b)
            else:
                terminal.background_color = RGB(a, b, math.sin(seconds / 2) / 2 + 0.5)
            terminal.set_cursor_position(x, y)
            terminal.write("  "[: terminal.width - x])

    terminal.set_cursor_position(0, terminal.height - 1)
    for x in range(terminal.width):
        terminal.background_color = HSV(x / terminal.width * 360.0, 1.0, 1.0)
        terminal.write_char(" ")

    terminal.reset_color()
    label = f" {terminal.color_mode.value} / {terminal.backend_name} "
    if terminal.width > len(label) + 1 and terminal.height > 2:
        terminal.set_cursor_position(1, 1)
        terminal.write(label)


def lines(terminal: Terminal, frame: int) -> None:
    """Fan of hue-colored lines from the top left corner, one more per frame."""
    terminal.clear()
    black = Color24.named("black")
    count = terminal.width + terminal.height
    for i in range(min(frame + 1, count)):
        color = HSV(i / count * 360.0, 1.0, 1.0)
        if i < terminal.width:
            draw_line(terminal, 0, 0, i, terminal.height - 1, " ", black, color)
        else:
            draw_line(terminal, 0, 0, terminal.width - 1, count - i - 1, " ", black, color)


def bounce(terminal: Terminal, frame: int, size: int = 10) -> None:
    """Rectangle outline bouncing off the edges."""
    terminal.clear()
    w = min(size, terminal.width - 1)
    h = min(size, terminal.height - 1)
    x = _bounce_position(frame, terminal.width - 1 - w)
    y = _bounce_position(frame, terminal.height - 1 - h)
    draw_rectangle(terminal, x, y, x + w, y + h, " ", Color24.named("black"), Color24.named("cornflowerblue"))


def _bounce_position(step: int, span: int) -> int:
    if span <= 0:
        return 0
    period = 2 * span
    pos = step % period
    return pos if pos <= span else period - pos


def scene(name: str):
    if name == "color-space":
        return color_space
    if name == "lines":
        return lines
    if name == "bounce":
        return bounce
    raise ValueError(f"Unknown scene: {name}")
