"""Cursor-driven text writer over a swappable color buffer."""

from __future__ import annotations

import logging
import shutil
import sys
from enum import Enum
from typing import Any, TextIO

from tintgrid_console import console_api_available

from .buffers import AnsiFrameBuffer, TerminalBuffer
from .colors import COLOR_TYPES, Color, Color4, Color8, Color24, ConsoleColor
from .console_buffer import ConsoleFrameBuffer
from .dither import DitherMapping, default_mapping
from .errors import BoundsError
from .models import FlushStats


logger = logging.getLogger("tintgrid.terminal")

BLANK_PROBE = " "
BLOCK_PROBE = "█"
TAB_WIDTH = 4
DEFAULT_DITHER_RESOLUTION = 8


class ColorMode(str, Enum):
    PLAIN_4BIT = "plain4"
    DITHER_4BIT = "dither4"
    PLAIN_8BIT = "plain8"
    PLAIN_24BIT = "plain24"


_ANSI_COLOR_TYPES = {
    ColorMode.PLAIN_4BIT: Color4,
    ColorMode.DITHER_4BIT: Color4,
    ColorMode.PLAIN_8BIT: Color8,
    ColorMode.PLAIN_24BIT: Color24,
}


def uses_console_api(mode: ColorMode, prefer_console_api: bool = True, console_transport: Any | None = None) -> bool:
    """Whether ``mode`` renders through the native console surface."""
    if ColorMode(mode) not in (ColorMode.PLAIN_4BIT, ColorMode.DITHER_4BIT) or not prefer_console_api:
        return False
    return console_transport is not None or console_api_available()


def create_buffer(
    width: int,
    height: int,
    mode: ColorMode,
    prefer_console_api: bool = True,
    console_transport: Any | None = None,
    checked: bool = True,
    strict_platform: bool = True,
) -> TerminalBuffer:
    """Pick the buffer implementation that suits ``mode`` on this platform.

    The 16-color modes use the native console surface when it is available
    (or a transport is supplied); everything else renders escape sequences.
    """
    mode = ColorMode(mode)
    if uses_console_api(mode, prefer_console_api, console_transport):
        return ConsoleFrameBuffer(width, height, transport=console_transport, checked=checked)
    return AnsiFrameBuffer(
        width,
        height,
        color_type=_ANSI_COLOR_TYPES[mode],
        checked=checked,
        strict_platform=strict_platform,
    )


class Terminal:
    """A colored text buffer written through a cursor. Not thread-safe.

    Control characters move the cursor like a classic terminal. In
    ``DITHER_4BIT`` mode the blank and full block glyphs are replaced by the
    dither combination closest to the background or foreground color.
    """

    def __init__(
        self,
        width: int | None = None,
        height: int | None = None,
        color_mode: ColorMode = ColorMode.PLAIN_24BIT,
        *,
        out: TextIO | None = None,
        dither: DitherMapping | None = None,
        prefer_console_api: bool = True,
        console_transport: Any | None = None,
        checked: bool = True,
        strict_platform: bool = True,
        dither_resolution: int = DEFAULT_DITHER_RESOLUTION,
    ) -> None:
        if width is None or height is None:
            size = shutil.get_terminal_size()
            width = size.columns if width is None else width
            height = size.lines if height is None else height

        self.out: TextIO | None = sys.stdout if out is None else out
        self.dither = dither if dither is not None else default_mapping()
        self.dither_resolution = dither_resolution
        self.prefer_console_api = prefer_console_api
        self.console_transport = console_transport
        self.checked = checked
        self.strict_platform = strict_platform

        self._foreground: Color = Color4(ConsoleColor.GRAY)
        self._background: Color = Color4(ConsoleColor.BLACK)
        self._cursor_x = 0
        self._cursor_y = 0
        self._color_mode = ColorMode(color_mode)
        self._buffer = self._create_buffer(width, height, self._color_mode)

    def _create_buffer(self, width: int, height: int, mode: ColorMode) -> TerminalBuffer:
        return create_buffer(
            width,
            height,
            mode,
            prefer_console_api=self.prefer_console_api,
            console_transport=self.console_transport,
            checked=self.checked,
            strict_platform=self.strict_platform,
        )

    @property
    def buffer(self) -> TerminalBuffer:
        return self._buffer

    @property
    def backend_name(self) -> str:
        return self._buffer.backend_name

    @property
    def width(self) -> int:
        return self._buffer.width

    @property
    def height(self) -> int:
        return self._buffer.height

    @property
    def color_mode(self) -> ColorMode:
        return self._color_mode

    @color_mode.setter
    def color_mode(self, mode: ColorMode) -> None:
        """Switch modes; the new buffer starts blank and the old one is closed."""
        mode = ColorMode(mode)
        previous = self._buffer
        self._buffer = self._create_buffer(self.width, self.height, mode)
        previous.close()
        self._color_mode = mode
        logger.info(
            "color mode set to %s (%s backend)",
            mode.value,
            self._buffer.backend_name,
            extra={"event": "mode_switch"},
        )

    def _cursor_value(self, value: int, limit: int, name: str) -> int:
        if 0 <= value < limit:
            return value
        if self.checked:
            raise BoundsError(f"Cursor {name} position must be at least 0 and smaller than {limit}, {value} given")
        return max(0, min(limit - 1, value))

    @property
    def cursor_left(self) -> int:
        return self._cursor_x

    @cursor_left.setter
    def cursor_left(self, value: int) -> None:
        self._cursor_x = self._cursor_value(value, self.width, "left")

    @property
    def cursor_top(self) -> int:
        return self._cursor_y

    @cursor_top.setter
    def cursor_top(self, value: int) -> None:
        self._cursor_y = self._cursor_value(value, self.height, "top")

    def set_cursor_position(self, left: int, top: int) -> None:
        self.cursor_left = left
        self.cursor_top = top

    @staticmethod
    def _require_color(color: Color) -> Color:
        if not isinstance(color, COLOR_TYPES):
            raise TypeError(f"Expected a color, {color!r} given")
        return color

    @property
    def foreground_color(self) -> Color:
        return self._foreground

    @foreground_color.setter
    def foreground_color(self, color: Color) -> None:
        self._foreground = self._require_color(color)

    @property
    def background_color(self) -> Color:
        return self._background

    @background_color.setter
    def background_color(self, color: Color) -> None:
        self._background = self._require_color(color)

    def reset_color(self) -> None:
        self._foreground = Color4(ConsoleColor.GRAY)
        self._background = Color4(ConsoleColor.BLACK)

    def precompute_dither(self) -> None:
        if not self.dither.is_computed:
            self.dither.precompute(self.dither_resolution)

    def write_char(self, ch: str) -> None:
        if ord(ch) < 0x20:
            if ch == "\r":
                self._cursor_x = 0
            elif ch == "\n":
                self._cursor_y += 1
                self._cursor_x = 0
            elif ch == "\t":
                self.write_char(" ")
                while self._cursor_x % TAB_WIDTH != 0:
                    self.write_char(" ")
            else:
                self.write_char("?")
        else:
            if self._color_mode is ColorMode.DITHER_4BIT and ch in (BLANK_PROBE, BLOCK_PROBE):
                self.precompute_dither()
                target = self._background if ch == BLANK_PROBE else self._foreground
                cell = self.dither.lookup(target)
                self._buffer.set_point(self._cursor_x, self._cursor_y, cell.glyph, cell.foreground, cell.background)
            else:
                self._buffer.set_point(self._cursor_x, self._cursor_y, ch, self._foreground, self._background)
            self._cursor_x += 1

        if self._cursor_x == self.width:
            self._cursor_x = 0
            self._cursor_y += 1
        if self._cursor_y == self.height:
            self._cursor_y = 0

    def write(self, text: str) -> int:
        for ch in text:
            self.write_char(ch)
        return len(text)

    def write_line(self, text: str = "") -> int:
        return self.write(text + "\n")

    def set_char(self, x: int, y: int, ch: str) -> None:
        self._buffer.set_char(x, y, ch)

    def set_foreground(self, x: int, y: int, color: Color) -> None:
        self._buffer.set_foreground(x, y, color)

    def set_background(self, x: int, y: int, color: Color) -> None:
        self._buffer.set_background(x, y, color)

    def set_point(self, x: int, y: int, ch: str, foreground: Color, background: Color) -> None:
        self._buffer.set_point(x, y, ch, foreground, background)

    def clear(self, ch: str | None = None, foreground: Color | None = None, background: Color | None = None) -> None:
        """Fill the buffer; without arguments it is blanked and the cursor goes home."""
        if ch is None and foreground is None and background is None:
            self._buffer.clear()
            self.set_cursor_position(0, 0)
            return
        self._buffer.clear(" " if ch is None else ch, foreground, background)

    def close(self) -> None:
        """Release the active buffer's platform resources."""
        self._buffer.close()

    def flush(self, output: TextIO | None = None, offset_x: int = 0, offset_y: int = 0) -> FlushStats | None:
        """Render the buffer to ``output`` (or ``out``) with its corner at the given offset."""
        target = output if output is not None else self.out
        if target is None:
            return None
        stats = self._buffer.flush(target, offset_x, offset_y)
        flush = getattr(target, "flush", None)
        if callable(flush):
            flush()
        return stats
