"""Renderer package: color model, cell buffers, dithering and the terminal facade."""

from .buffers import AnsiFrameBuffer, TerminalBuffer
from .colors import (
    COLOR_TYPES,
    HSV,
    RGB,
    Color,
    Color4,
    Color8,
    Color24,
    ConsoleColor,
    convert,
    to_hsv,
    to_rgb,
)
from .console_buffer import ConsoleFrameBuffer
from .dither import DEFAULT_PRESET, DitherCell, DitherMapping, default_mapping
from .drawing import draw_horizontal_line, draw_line, draw_rectangle, draw_vertical_line, fill_rectangle
from .errors import BoundsError, ColorRangeError, DimensionError, DitherStateError, PlatformError, TintGridError
from .models import Cell, FlushStats
from .terminal import ColorMode, Terminal, create_buffer, uses_console_api
from .patterns import PATTERNS, blit_image, build_test_pattern

__all__ = [
    "AnsiFrameBuffer",
    "BoundsError",
    "COLOR_TYPES",
    "Cell",
    "Color",
    "Color4",
    "Color8",
    "Color24",
    "ColorMode",
    "ColorRangeError",
    "ConsoleColor",
    "ConsoleFrameBuffer",
    "DEFAULT_PRESET",
    "DimensionError",
    "DitherCell",
    "DitherMapping",
    "DitherStateError",
    "FlushStats",
    "HSV",
    "PATTERNS",
    "PlatformError",
    "RGB",
    "TerminalBuffer",
    "Terminal",
    "TintGridError",
    "blit_image",
    "build_test_pattern",
    "convert",
    "create_buffer",
    "default_mapping",
    "draw_horizontal_line",
    "draw_line",
    "draw_rectangle",
    "draw_vertical_line",
    "fill_rectangle",
    "to_hsv",
    "to_rgb",
    "uses_console_api",
]
