"""SGR color and CSI cursor sequences.

See https://en.wikipedia.org/wiki/ANSI_escape_code for the sequence families.
"""

from __future__ import annotations

from functools import lru_cache

from .colors import Color4, Color8, Color24

ESC = "\x1b"
CSI = ESC + "["
RESET = CSI + "0m"

# indexed by ConsoleColor
FOREGROUND_16 = (
    "\x1b[30m",
    "\x1b[34m",
    "\x1b[32m",
    "\x1b[36m",
    "\x1b[31m",
    "\x1b[35m",
    "\x1b[33m",
    "\x1b[37m",
    "\x1b[90m",
    "\x1b[94m",
    "\x1b[92m",
    "\x1b[96m",
    "\x1b[91m",
    "\x1b[95m",
    "\x1b[93m",
    "\x1b[97m",
)

BACKGROUND_16 = (
    "\x1b[40m",
    "\x1b[44m",
    "\x1b[42m",
    "\x1b[46m",
    "\x1b[41m",
    "\x1b[45m",
    "\x1b[43m",
    "\x1b[47m",
    "\x1b[100m",
    "\x1b[104m",
    "\x1b[102m",
    "\x1b[106m",
    "\x1b[101m",
    "\x1b[105m",
    "\x1b[103m",
    "\x1b[107m",
)


@lru_cache(maxsize=4096, typed=True)
def foreground(color: Color4 | Color8 | Color24) -> str:
    """Sequence that sets the foreground to ``color`` in its own palette."""
    if isinstance(color, Color4):
        return FOREGROUND_16[color.index]
    if isinstance(color, Color8):
        return f"{CSI}38;5;{color.index}m"
    if isinstance(color, Color24):
        return f"{CSI}38;2;{color.red};{color.green};{color.blue}m"
    raise TypeError(f"No escape sequence for {type(color).__name__}")


@lru_cache(maxsize=4096, typed=True)
def background(color: Color4 | Color8 | Color24) -> str:
    """Sequence that sets the background to ``color`` in its own palette."""
    if isinstance(color, Color4):
        return BACKGROUND_16[color.index]
    if isinstance(color, Color8):
        return f"{CSI}48;5;{color.index}m"
    if isinstance(color, Color24):
        return f"{CSI}48;2;{color.red};{color.green};{color.blue}m"
    raise TypeError(f"No escape sequence for {type(color).__name__}")


def reset() -> str:
    return RESET


def cursor_position(x: int, y: int) -> str:
    """Move the cursor to column ``x``, row ``y``; the top left corner is (0, 0)."""
    return f"{CSI}{y + 1};{x + 1}H"
