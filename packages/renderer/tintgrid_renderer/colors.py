"""Continuous and palette color variants with lossy conversions between them.

Every variant is an immutable value. ``to_rgb``/``to_hsv`` are total: out of
range and NaN channels are clamped rather than rejected. ``approximate``
builds the best representation of an arbitrary color in the receiving
variant.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from .errors import ColorRangeError


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    if value != value:  # NaN
        return lo
    return min(hi, max(lo, value))


def _normalize_hue(hue: float) -> float:
    hue = float(hue)
    if not math.isfinite(hue):
        return 0.0
    hue %= 360.0
    # -1e-20 % 360 rounds up to 360.0
    return 0.0 if hue >= 360.0 else hue


@dataclass(frozen=True)
class RGB:
    """Red, green and blue channels, nominally in [0, 1]."""

    red: float
    green: float
    blue: float

    def to_rgb(self) -> "RGB":
        return self

    def to_hsv(self) -> "HSV":
        r, g, b = clamp(self.red), clamp(self.green), clamp(self.blue)

        if r > g and r > b:
            c_max, c_min, hue, offset = r, min(g, b), g - b, 0
        elif r <= g and g > b:
            c_max, c_min, hue, offset = g, min(r, b), b - r, 2
        else:
            c_max, c_min, hue, offset = b, min(r, g), r - g, 4

        delta = c_max - c_min
        hue = 60.0 * ((hue / delta + offset) % 6) if delta > 0 else 0.0
        saturation = delta / c_max if c_max > 0 else 0.0
        return HSV(hue, saturation, c_max)

    @classmethod
    def approximate(cls, color: "Color") -> "RGB":
        return to_rgb(color)

    def dot(self, other: "RGB") -> float:
        return self.red * other.red + self.green * other.green + self.blue * other.blue

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def sqrt(self) -> "RGB":
        return RGB(math.sqrt(max(0.0, self.red)), math.sqrt(max(0.0, self.green)), math.sqrt(max(0.0, self.blue)))

    def __add__(self, other: "RGB") -> "RGB":
        return RGB(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __sub__(self, other: "RGB") -> "RGB":
        return RGB(self.red - other.red, self.green - other.green, self.blue - other.blue)

    def __mul__(self, other: "RGB | float") -> "RGB":
        if isinstance(other, RGB):
            return RGB(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return RGB(self.red * other, self.green * other, self.blue * other)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> "RGB":
        return RGB(self.red / scale, self.green / scale, self.blue / scale)

    def __str__(self) -> str:
        return f"RGB: {self.red:.2f} {self.green:.2f} {self.blue:.2f}"


@dataclass(frozen=True)
class HSV:
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""

    hue: float
    saturation: float
    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "hue", _normalize_hue(self.hue))
        object.__setattr__(self, "saturation", clamp(float(self.saturation)))
        object.__setattr__(self, "value", clamp(float(self.value)))

    def to_hsv(self) -> "HSV":
        return self

    def to_rgb(self) -> RGB:
        c = self.saturation * self.value
        x = c * (1 - abs((self.hue / 60) % 2 - 1))
        m = self.value - c

        sector = int(self.hue // 60)
        if sector == 0:
            r, g, b = c, x, 0.0
        elif sector == 1:
            r, g, b = x, c, 0.0
        elif sector == 2:
            r, g, b = 0.0, c, x
        elif sector == 3:
            r, g, b = 0.0, x, c
        elif sector == 4:
            r, g, b = x, 0.0, c
        else:
            r, g, b = c, 0.0, x
        return RGB(r + m, g + m, b + m)

    @classmethod
    def approximate(cls, color: "Color") -> "HSV":
        return to_hsv(color)

    def __str__(self) -> str:
        return f"HSV: {self.hue:g} {self.saturation:.2f} {self.value:.2f}"


class ConsoleColor(IntEnum):
    BLACK = 0
    DARK_BLUE = 1
    DARK_GREEN = 2
    DARK_CYAN = 3
    DARK_RED = 4
    DARK_MAGENTA = 5
    DARK_YELLOW = 6
    GRAY = 7
    DARK_GRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15


_HUES: dict[ConsoleColor, float] = {
    ConsoleColor.DARK_RED: 0.0,
    ConsoleColor.RED: 0.0,
    ConsoleColor.DARK_YELLOW: 60.0,
    ConsoleColor.YELLOW: 60.0,
    ConsoleColor.DARK_GREEN: 120.0,
    ConsoleColor.GREEN: 120.0,
    ConsoleColor.DARK_CYAN: 180.0,
    ConsoleColor.CYAN: 180.0,
    ConsoleColor.DARK_BLUE: 240.0,
    ConsoleColor.BLUE: 240.0,
    ConsoleColor.DARK_MAGENTA: 300.0,
    ConsoleColor.MAGENTA: 300.0,
}

_GRAYS: dict[ConsoleColor, float] = {
    ConsoleColor.BLACK: 0.0,
    ConsoleColor.DARK_GRAY: 0.5,
    ConsoleColor.GRAY: 0.75,
    ConsoleColor.WHITE: 1.0,
}

# (dark, light) variant per hue sector of round(hue / 60) % 6
_SECTORS = (
    (ConsoleColor.DARK_RED, ConsoleColor.RED),
    (ConsoleColor.DARK_YELLOW, ConsoleColor.YELLOW),
    (ConsoleColor.DARK_GREEN, ConsoleColor.GREEN),
    (ConsoleColor.DARK_CYAN, ConsoleColor.CYAN),
    (ConsoleColor.DARK_BLUE, ConsoleColor.BLUE),
    (ConsoleColor.DARK_MAGENTA, ConsoleColor.MAGENTA),
)


def _palette_hsv(color: ConsoleColor) -> HSV:
    if color in _GRAYS:
        return HSV(0.0, 0.0, _GRAYS[color])
    dark = color < ConsoleColor.GRAY
    return HSV(_HUES[color], 1.0, 0.5 if dark else 1.0)


class _IndexedColor:
    """Equality shared by the palette variants.

    Same-variant operands compare component values. Any other color is first
    approximated into the receiver's variant.

    The hash covers the variant and its components only, so a cross-variant
    pair that compares equal still hashes apart. Sets and dict keys treat
    ``Color4(RED)`` and ``Color24(255, 0, 0)`` as distinct entries; convert to
    one variant first when mixing them in a hashed container.
    """

    def _key(self) -> tuple:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._key() == other._key()  # type: ignore[attr-defined]
        if isinstance(other, COLOR_TYPES):
            return self._key() == type(self).approximate(other)._key()  # type: ignore[attr-defined]
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())


@dataclass(frozen=True, eq=False)
class Color4(_IndexedColor):
    """A color of the 16-color console palette."""

    index: ConsoleColor = ConsoleColor.BLACK

    def __post_init__(self) -> None:
        if not 0 <= int(self.index) <= 15:
            raise ColorRangeError(f"16-color index must be in range [0..15], {self.index} given")
        object.__setattr__(self, "index", ConsoleColor(int(self.index)))

    def _key(self) -> tuple:
        return (int(self.index),)

    def to_hsv(self) -> HSV:
        return _palette_hsv(self.index)

    def to_rgb(self) -> RGB:
        return self.to_hsv().to_rgb()

    @classmethod
    def approximate(cls, color: "Color") -> "Color4":
        """Classify ``color`` into the palette by HSV thresholds.

        This is a cheap heuristic, not a nearest-neighbour search. Use
        ``closest_to`` when the true nearest palette entry is required.
        """
        if isinstance(color, Color4):
            return color

        hsv = to_hsv(color)
        if hsv.value < 0.30:
            return cls(ConsoleColor.BLACK)

        if hsv.saturation < 1.3 * (hsv.value - 0.25) and hsv.saturation < 0.4:
            value = hsv.value - hsv.saturation * 0.3
            if value < 0.625:
                return cls(ConsoleColor.DARK_GRAY)
            if value < 0.875:
                return cls(ConsoleColor.GRAY)
            return cls(ConsoleColor.WHITE)

        dark, light = _SECTORS[int(round(hsv.hue / 60)) % 6]
        return cls(dark if hsv.value <= 0.75 else light)

    @classmethod
    def closest_to(cls, color: "Color") -> "Color4":
        """Exhaustive search for the palette entry nearest in squared-RGB space."""
        rgb = to_rgb(color)
        target = rgb * rgb

        best = ConsoleColor.BLACK
        best_dist = math.inf
        for candidate in ConsoleColor:
            c = _PALETTE_RGB[candidate]
            dist = (c * c - target).length()
            if dist < best_dist:
                best_dist = dist
                best = candidate
        return cls(best)

    def __str__(self) -> str:
        return self.index.name


_PALETTE_RGB: dict[ConsoleColor, RGB] = {c: _palette_hsv(c).to_rgb() for c in ConsoleColor}

# ANSI order of the first 16 entries of the 256-color palette
ANSI_TO_CONSOLE = (
    ConsoleColor.BLACK,
    ConsoleColor.DARK_RED,
    ConsoleColor.DARK_GREEN,
    ConsoleColor.DARK_YELLOW,
    ConsoleColor.DARK_BLUE,
    ConsoleColor.DARK_MAGENTA,
    ConsoleColor.DARK_CYAN,
    ConsoleColor.GRAY,
    ConsoleColor.DARK_GRAY,
    ConsoleColor.RED,
    ConsoleColor.GREEN,
    ConsoleColor.YELLOW,
    ConsoleColor.BLUE,
    ConsoleColor.MAGENTA,
    ConsoleColor.CYAN,
    ConsoleColor.WHITE,
)

CUBE_BASE = 16
GRAY_BASE = 232
GRAY_STEPS = 24
GRAY_GAMMA = 0.9
WHITE_INDEX = 15


@dataclass(frozen=True, eq=False)
class Color8(_IndexedColor):
    """A color of the 256-color palette: 16 basic colors, a 6x6x6 cube, a 24-step gray ramp."""

    index: int = 0

    def __post_init__(self) -> None:
        if not 0 <= int(self.index) <= 255:
            raise ColorRangeError(f"256-color index must be in range [0..255], {self.index} given")
        object.__setattr__(self, "index", int(self.index))

    @classmethod
    def from_cube(cls, r: int, g: int, b: int) -> "Color8":
        if not (0 <= r <= 5 and 0 <= g <= 5 and 0 <= b <= 5):
            raise ColorRangeError(f"(R,G,B) values must be in range [0..5], ({r},{g},{b}) given")
        return cls(CUBE_BASE + 36 * r + 6 * g + b)

    def _key(self) -> tuple:
        return (self.index,)

    def to_rgb(self) -> RGB:
        if self.index < CUBE_BASE:
            return _PALETTE_RGB[ANSI_TO_CONSOLE[self.index]]
        if self.index < GRAY_BASE:
            i = self.index - CUBE_BASE
            return RGB(i // 36 / 5, i // 6 % 6 / 5, i % 6 / 5)
        level = ((self.index - GRAY_BASE) / GRAY_STEPS) ** (1 / GRAY_GAMMA)
        return RGB(level, level, level)

    def to_hsv(self) -> HSV:
        return self.to_rgb().to_hsv()

    @classmethod
    def approximate(cls, color: "Color") -> "Color8":
        if isinstance(color, Color8):
            return color

        hsv = to_hsv(color)
        if hsv.saturation == 0.0:
            index = int(hsv.value ** GRAY_GAMMA * 24.999 + GRAY_BASE)
            # the ramp ends at 255; brighter grays wrap to palette white
            if index > 255:
                index = WHITE_INDEX
            return cls(index)

        rgb = to_rgb(color)
        r = int(clamp(rgb.red) * 255.999)
        g = int(clamp(rgb.green) * 255.999)
        b = int(clamp(rgb.blue) * 255.999)
        return cls.from_cube(r * 6 // 256, g * 6 // 256, b * 6 // 256)

    def __str__(self) -> str:
        return f"Color8: {self.index}"


@dataclass(frozen=True, eq=False)
class Color24(_IndexedColor):
    """A 24-bit truecolor value with byte channels."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = int(getattr(self, name))
            if not 0 <= value <= 255:
                raise ColorRangeError(f"{name} must be in range [0..255], {value} given")
            object.__setattr__(self, name, value)

    @classmethod
    def from_hex(cls, value: str) -> "Color24":
        digits = value.lstrip("#")
        if len(digits) != 6:
            raise ColorRangeError(f"Expected #RRGGBB, {value!r} given")
        return cls(*(int(digits[i : i + 2], 16) for i in (0, 2, 4)))

    @classmethod
    def named(cls, name: str) -> "Color24":
        key = name.replace(" ", "").replace("_", "").lower()
        if key not in WEB_COLORS:
            raise KeyError(f"Unknown color name: {name}")
        return cls(*WEB_COLORS[key])

    def _key(self) -> tuple:
        return (self.red, self.green, self.blue)

    def to_rgb(self) -> RGB:
        return RGB(self.red / 255, self.green / 255, self.blue / 255)

    def to_hsv(self) -> HSV:
        return self.to_rgb().to_hsv()

    @classmethod
    def approximate(cls, color: "Color") -> "Color24":
        if isinstance(color, Color24):
            return color
        rgb = to_rgb(color)
        return cls(int(clamp(rgb.red) * 255), int(clamp(rgb.green) * 255), int(clamp(rgb.blue) * 255))

    def hex(self) -> str:
        return f"#{self.red:02X}{self.green:02X}{self.blue:02X}"

    def __str__(self) -> str:
        return f"Color24: {self.red} {self.green} {self.blue}"


# source: https://en.wikipedia.org/wiki/Web_colors
WEB_COLORS: dict[str, tuple[int, int, int]] = {
    "mediumvioletred": (199, 21, 133),
    "deeppink": (255, 20, 147),
    "hotpink": (255, 105, 180),
    "pink": (255, 192, 203),
    "darkred": (139, 0, 0),
    "red": (255, 0, 0),
    "firebrick": (178, 34, 34),
    "crimson": (220, 20, 60),
    "indianred": (205, 92, 92),
    "salmon": (250, 128, 114),
    "orangered": (255, 69, 0),
    "tomato": (255, 99, 71),
    "darkorange": (255, 140, 0),
    "coral": (255, 127, 80),
    "orange": (255, 165, 0),
    "gold": (255, 215, 0),
    "khaki": (240, 230, 140),
    "yellow": (255, 255, 0),
    "maroon": (128, 0, 0),
    "brown": (165, 42, 42),
    "saddlebrown": (139, 69, 19),
    "chocolate": (210, 105, 30),
    "goldenrod": (218, 165, 32),
    "tan": (210, 180, 140),
    "rosybrown": (188, 143, 143),
    "wheat": (245, 222, 179),
    "darkgreen": (0, 100, 0),
    "green": (0, 128, 0),
    "forestgreen": (34, 139, 34),
    "seagreen": (46, 139, 87),
    "olive": (128, 128, 0),
    "lime": (0, 255, 0),
    "springgreen": (0, 255, 127),
    "chartreuse": (127, 255, 0),
    "teal": (0, 128, 128),
    "darkcyan": (0, 139, 139),
    "turquoise": (64, 224, 208),
    "cyan": (0, 255, 255),
    "aquamarine": (127, 255, 212),
    "navy": (0, 0, 128),
    "darkblue": (0, 0, 139),
    "blue": (0, 0, 255),
    "midnightblue": (25, 25, 112),
    "royalblue": (65, 105, 225),
    "cornflowerblue": (100, 149, 237),
    "steelblue": (70, 130, 180),
    "dodgerblue": (30, 144, 255),
    "deepskyblue": (0, 191, 255),
    "skyblue": (135, 206, 235),
    "indigo": (75, 0, 130),
    "purple": (128, 0, 128),
    "darkviolet": (148, 0, 211),
    "blueviolet": (138, 43, 226),
    "magenta": (255, 0, 255),
    "orchid": (218, 112, 214),
    "violet": (238, 130, 238),
    "plum": (221, 160, 221),
    "lavender": (230, 230, 250),
    "beige": (245, 245, 220),
    "ivory": (255, 255, 240),
    "white": (255, 255, 255),
    "black": (0, 0, 0),
    "darkslategray": (47, 79, 79),
    "dimgray": (105, 105, 105),
    "slategray": (112, 128, 144),
    "gray": (128, 128, 128),
    "darkgray": (169, 169, 169),
    "silver": (192, 192, 192),
    "lightgray": (211, 211, 211),
    "gainsboro": (220, 220, 220),
}


Color = Union[RGB, HSV, Color4, Color8, Color24]
COLOR_TYPES = (RGB, HSV, Color4, Color8, Color24)
INDEXED_TYPES = (Color4, Color8, Color24)


def to_rgb(color: Color) -> RGB:
    if not isinstance(color, COLOR_TYPES):
        raise TypeError(f"Not a color: {color!r}")
    return color.to_rgb()


def to_hsv(color: Color) -> HSV:
    if not isinstance(color, COLOR_TYPES):
        raise TypeError(f"Not a color: {color!r}")
    return color.to_hsv()


def convert(color: Color, target: type) -> Color:
    """Approximate ``color`` in the ``target`` variant."""
    if target not in COLOR_TYPES:
        raise TypeError(f"Not a color type: {target!r}")
    return target.approximate(color)
