"""Cell grid contract and the escape-sequence text backend."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TextIO

from tintgrid_console import enable_vt_processing, is_windows

from .colors import Color, Color4, Color8, Color24, ConsoleColor
from .errors import BoundsError, DimensionError
from .escape_codes import RESET, background, cursor_position, foreground
from .models import Cell, FlushStats


logger = logging.getLogger("tintgrid.renderer")

DEFAULT_COLOR = Color4(ConsoleColor.BLACK)


class TerminalBuffer(ABC):
    """Two dimensional grid of (character, foreground, background) cells.

    Rows and columns are numbered from the top left starting at zero. Each
    implementation stores a single canonical color variant and converts
    every incoming color at the call boundary. Not thread-safe.
    """

    backend_name = "abstract"

    def __init__(self, width: int, height: int, checked: bool = True) -> None:
        if width <= 0 or height <= 0:
            raise DimensionError(f"Buffer dimensions must be positive, ({width}, {height}) given")
        self._width = int(width)
        self._height = int(height)
        self.checked = checked

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _check(self, x: int, y: int) -> None:
        if self.checked and not (0 <= x < self._width and 0 <= y < self._height):
            raise BoundsError(f"Point ({x}, {y}) is outside of the {self._width}x{self._height} buffer")

    def set_point(self, x: int, y: int, ch: str, foreground: Color, background: Color) -> None:
        self.set_char(x, y, ch)
        self.set_foreground(x, y, foreground)
        self.set_background(x, y, background)

    def cell(self, x: int, y: int) -> Cell:
        return Cell(self.get_char(x, y), self.get_foreground(x, y), self.get_background(x, y))

    def clear(self, ch: str = " ", foreground: Color | None = None, background: Color | None = None) -> None:
        """Fill every cell; colors default to black."""
        foreground = DEFAULT_COLOR if foreground is None else foreground
        background = DEFAULT_COLOR if background is None else background
        for y in range(self._height):
            for x in range(self._width):
                self.set_point(x, y, ch, foreground, background)

    def close(self) -> None:
        """Release platform resources held by the buffer."""

    @abstractmethod
    def set_char(self, x: int, y: int, ch: str) -> None: ...

    @abstractmethod
    def set_foreground(self, x: int, y: int, color: Color) -> None: ...

    @abstractmethod
    def set_background(self, x: int, y: int, color: Color) -> None: ...

    @abstractmethod
    def get_char(self, x: int, y: int) -> str: ...

    @abstractmethod
    def get_foreground(self, x: int, y: int) -> Color: ...

    @abstractmethod
    def get_background(self, x: int, y: int) -> Color: ...

    @abstractmethod
    def flush(self, output: TextIO | None, offset_x: int = 0, offset_y: int = 0) -> FlushStats:
        """Render the whole grid with its top left corner at (offset_x, offset_y)."""


def _single_char(ch: str) -> str:
    if not isinstance(ch, str) or len(ch) != 1:
        raise ValueError(f"Expected a single character, {ch!r} given")
    return ch


class AnsiFrameBuffer(TerminalBuffer):
    """Buffer rendered as text with SGR color and CSI cursor sequences.

    A color sequence is only emitted when it differs from the previously
    emitted one, so output size grows with the number of color changes
    instead of the number of cells.
    """

    backend_name = "ansi"

    def __init__(
        self,
        width: int,
        height: int,
        color_type: type = Color24,
        checked: bool = True,
        strict_platform: bool = True,
    ) -> None:
        super().__init__(width, height, checked=checked)
        if color_type not in (Color4, Color8, Color24):
            raise TypeError(f"Unsupported buffer color type: {color_type!r}")
        self.color_type = color_type

        size = self._width * self._height
        self._chars: list[str] = [" "] * size
        self._foreground: list[Color4 | Color8 | Color24] = []
        self._background: list[Color4 | Color8 | Color24] = []
        self.clear()

        if is_windows():
            enable_vt_processing(strict=strict_platform)
        logger.debug(
            "ansi buffer created %dx%d %s",
            self._width,
            self._height,
            color_type.__name__,
            extra={"event": "buffer_created"},
        )

    def clear(self, ch: str = " ", foreground: Color | None = None, background: Color | None = None) -> None:
        ch = _single_char(ch)
        fg = self.color_type.approximate(DEFAULT_COLOR if foreground is None else foreground)
        bg = self.color_type.approximate(DEFAULT_COLOR if background is None else background)
        size = self._width * self._height
        self._chars = [ch] * size
        self._foreground = [fg] * size
        self._background = [bg] * size

    def set_char(self, x: int, y: int, ch: str) -> None:
        self._check(x, y)
        self._chars[x + y * self._width] = _single_char(ch)

    def set_foreground(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self._foreground[x + y * self._width] = self.color_type.approximate(color)

    def set_background(self, x: int, y: int, color: Color) -> None:
        self._check(x, y)
        self._background[x + y * self._width] = self.color_type.approximate(color)

    def get_char(self, x: int, y: int) -> str:
        self._check(x, y)
        return self._chars[x + y * self._width]

    def get_foreground(self, x: int, y: int) -> Color:
        self._check(x, y)
        return self._foreground[x + y * self._width]

    def get_background(self, x: int, y: int) -> Color:
        self._check(x, y)
        return self._background[x + y * self._width]

    def render(self, offset_x: int = 0, offset_y: int = 0) -> tuple[str, int]:
        """Assemble the output text and count the color sequences in it."""
        last_fg = foreground(self._foreground[0])
        last_bg = background(self._background[0])
        parts = [last_fg, last_bg]
        escapes = 2

        width = self._width
        for y in range(self._height):
            parts.append(cursor_position(offset_x, offset_y + y))
            row = y * width
            for i in range(row, row + width):
                fg = foreground(self._foreground[i])
                if fg != last_fg:
                    parts.append(fg)
                    last_fg = fg
                    escapes += 1
                bg = background(self._background[i])
                if bg != last_bg:
                    parts.append(bg)
                    last_bg = bg
                    escapes += 1
                parts.append(self._chars[i])

        parts.append(RESET)
        return "".join(parts), escapes

    def flush(self, output: TextIO | None, offset_x: int = 0, offset_y: int = 0) -> FlushStats:
        if output is None:
            raise TypeError("output must not be None")
        start = time.perf_counter()
        text, escapes = self.render(offset_x, offset_y)
        output.write(text)

        stats = FlushStats(
            backend=self.backend_name,
            cells=self._width * self._height,
            escapes=escapes,
            chars_written=len(text),
            duration_s=time.perf_counter() - start,
        )
        logger.debug("ansi flush %d chars, %d escapes", stats.chars_written, escapes, extra={"event": "flush"})
        return stats
