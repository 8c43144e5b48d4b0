"""Packed cell buffer written to the native console in one bulk call."""

from __future__ import annotations

import logging
import time
from typing import Any, TextIO

from tintgrid_console import (
    CHAR_INFO_SIZE,
    ConsoleTransport,
    RegionWrite,
    SmallRect,
    decode_glyph,
    encode_glyph,
    pack_char_info,
    unpack_char_info,
)
from tintgrid_console.models import pack_into

from .buffers import DEFAULT_COLOR, TerminalBuffer
from .colors import Color, Color4
from .models import FlushStats


logger = logging.getLogger("tintgrid.renderer")


class ConsoleFrameBuffer(TerminalBuffer):
    """16-color buffer stored as CHAR_INFO records.

    Each record holds a legacy char code and an attribute byte of
    ``background << 4 | foreground``. Flushing bypasses escape sequence
    interpretation entirely, so ``output`` is ignored.
    """

    backend_name = "console"

    def __init__(self, width: int, height: int, transport: Any | None = None, checked: bool = True) -> None:
        super().__init__(width, height, checked=checked)
        self.transport = transport if transport is not None else ConsoleTransport()
        self._records = bytearray(self._width * self._height * CHAR_INFO_SIZE)
        self.clear()

    @property
    def records(self) -> bytes:
        return bytes(self._records)

    def clear(self, ch: str = " ", foreground: Color | None = None, background: Color | None = None) -> None:
        fg = Color4.approximate(DEFAULT_COLOR if foreground is None else foreground)
        bg = Color4.approximate(DEFAULT_COLOR if background is None else background)
        record = pack_char_info(encode_glyph(ch), (bg.index << 4) | fg.index)
        self._records = bytearray(record * (self._width * self._height))

    def _record(self, x: int, y: int) -> tuple[int, int, int]:
        self._check(x, y)
        index = x + y * self._width
        code, attributes = unpack_char_info(self._records, index)
        return index, code, attributes

    def set_char(self, x: int, y: int, ch: str) -> None:
        index, _, attributes = self._record(x, y)
        pack_into(self._records, index, encode_glyph(ch), attributes)

    def set_foreground(self, x: int, y: int, color: Color) -> None:
        index, code, attributes = self._record(x, y)
        fg = Color4.approximate(color).index
        pack_into(self._records, index, code, (attributes & 0xF0) | fg)

    def set_background(self, x: int, y: int, color: Color) -> None:
        index, code, attributes = self._record(x, y)
        bg = Color4.approximate(color).index
        pack_into(self._records, index, code, (attributes & 0x0F) | (bg << 4))

    def get_char(self, x: int, y: int) -> str:
        _, code, _ = self._record(x, y)
        return decode_glyph(code)

    def get_foreground(self, x: int, y: int) -> Color:
        _, _, attributes = self._record(x, y)
        return Color4(attributes & 0x0F)

    def get_background(self, x: int, y: int) -> Color:
        _, _, attributes = self._record(x, y)
        return Color4((attributes >> 4) & 0x0F)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if callable(close):
            close()

    def flush(self, output: TextIO | None = None, offset_x: int = 0, offset_y: int = 0) -> FlushStats:
        start = time.perf_counter()
        region = RegionWrite(
            rect=SmallRect.for_region(offset_x, offset_y, self._width, self._height),
            width=self._width,
            height=self._height,
            records=bytes(self._records),
        )
        written = self.transport.write_region(region)
        stats = FlushStats(
            backend=self.backend_name,
            cells=self._width * self._height,
            chars_written=int(written),
            duration_s=time.perf_counter() - start,
        )
        logger.debug("console flush %d bytes", stats.chars_written, extra={"event": "flush"})
        return stats
