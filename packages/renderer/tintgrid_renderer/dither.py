"""Approximate arbitrary colors with 16 colors and partially opaque glyphs.

A glyph such as ``▒`` printed in a foreground color over a background color
is perceived as a mix of the two. ``DitherMapping`` searches every
(background, foreground, glyph) combination for the mix closest to a target
color and caches the winners on a regular grid over the RGB cube.
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

import numpy as np

from .colors import RGB, Color, Color4, ConsoleColor, clamp, to_rgb
from .errors import ColorRangeError, DitherStateError


logger = logging.getLogger("tintgrid.dither")

DEFAULT_PRESET: Mapping[str, float] = MappingProxyType(
    {
        " ": 0 / 4,
        "░": 1 / 4,
        "▒": 2 / 4,
        "▓": 3 / 4,
    }
)
DEFAULT_RESOLUTION = 6
_CHUNK = 256


class DitherCell(NamedTuple):
    foreground: Color4
    background: Color4
    glyph: str


class DitherMapping:
    """A dithering glyph set with an optional precomputed lookup table."""

    def __init__(self, preset: Mapping[str, float] | Iterable[tuple[str, float]] = DEFAULT_PRESET) -> None:
        items = dict(preset)
        if not items:
            raise ColorRangeError("Dither preset must contain at least one glyph")
        for glyph, opacity in items.items():
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise ColorRangeError(f"Dither glyphs must be single characters, {glyph!r} given")
            if not 0.0 <= float(opacity) <= 1.0:
                raise ColorRangeError(f"Opacity of {glyph!r} must be in range [0, 1], {opacity} given")
        self._opacity: Mapping[str, float] = MappingProxyType({g: float(o) for g, o in items.items()})
        self._glyphs = tuple(self._opacity)
        self._table: np.ndarray | None = None
        self._cells: list[DitherCell] = []
        self._resolution = 0

    @property
    def opacities(self) -> Mapping[str, float]:
        return self._opacity

    @property
    def is_computed(self) -> bool:
        return self._table is not None

    @property
    def resolution(self) -> int:
        if self._table is None:
            raise DitherStateError("Dither mapping has not been precomputed")
        return self._resolution

    def mix(self, foreground: RGB, background: RGB, glyph: str) -> RGB:
        """Perceived color of ``glyph`` printed with the given colors.

        Channels are blended in squared space.
        """
        amount = self._opacity[glyph]
        if amount == 1.0:
            return foreground
        if amount == 0.0:
            return background
        return ((foreground * foreground) * amount + (background * background) * (1 - amount)).sqrt()

    def _candidates(self) -> tuple[np.ndarray, list[DitherCell]]:
        """Squared mixed colors of every combination, background-major."""
        palette = [Color4(c) for c in ConsoleColor]
        squared: list[tuple[float, float, float]] = []
        cells: list[DitherCell] = []
        for bg in palette:
            for fg in palette:
                for glyph in self._glyphs:
                    mixed = self.mix(fg.to_rgb(), bg.to_rgb(), glyph)
                    squared.append((mixed.red**2, mixed.green**2, mixed.blue**2))
                    cells.append(DitherCell(fg, bg, glyph))
        return np.asarray(squared, dtype=np.float64), cells

    def find_closest(self, color: Color) -> DitherCell:
        """Search every combination for the best approximation of ``color``."""
        rgb = to_rgb(color)
        squared, cells = self._candidates()
        target = np.asarray([rgb.red**2, rgb.green**2, rgb.blue**2], dtype=np.float64)
        dist = np.linalg.norm(squared - target, axis=1)
        return cells[int(np.argmin(dist))]

    def precompute(self, resolution: int = DEFAULT_RESOLUTION) -> None:
        """Build a ``resolution``³ table of best combinations over the RGB cube.

        Cost grows with resolution³·256·len(glyphs); 6 to 8 keeps it quick.
        """
        if self._table is not None:
            raise DitherStateError("Dither mapping already precomputed")
        if resolution < 2:
            raise ColorRangeError(f"Resolution must be at least 2, {resolution} given")

        start = time.perf_counter()
        squared, cells = self._candidates()

        axis = np.linspace(0.0, 1.0, resolution) ** 2
        r, g, b = np.meshgrid(axis, axis, axis, indexing="ij")
        grid = np.stack([r.ravel(), g.ravel(), b.ravel()], axis=1)

        # argmin keeps the first minimum, matching the candidate ordering
        winners = np.empty(len(grid), dtype=np.intp)
        for offset in range(0, len(grid), _CHUNK):
            chunk = grid[offset : offset + _CHUNK]
            dist = np.linalg.norm(chunk[:, None, :] - squared[None, :, :], axis=2)
            winners[offset : offset + _CHUNK] = np.argmin(dist, axis=1)
        winners = winners.reshape(resolution, resolution, resolution)

        self._cells = cells
        self._resolution = resolution
        self._table = winners
        logger.info(
            "dither table precomputed resolution=%d in %.3fs",
            resolution,
            time.perf_counter() - start,
            extra={"event": "dither_precompute"},
        )

    def lookup(self, color: Color) -> DitherCell:
        """Nearest precomputed combination for ``color``."""
        if self._table is None:
            raise DitherStateError("Dither mapping has not been precomputed")
        rgb = to_rgb(color)
        size = self._resolution - 1
        r = int(round(clamp(rgb.red) * size))
        g = int(round(clamp(rgb.green) * size))
        b = int(round(clamp(rgb.blue) * size))
        return self._cells[int(self._table[r, g, b])]


@lru_cache(maxsize=None)
def default_mapping() -> DitherMapping:
    """Process-wide mapping for ``DEFAULT_PRESET``, shared so it is computed once."""
    return DitherMapping(DEFAULT_PRESET)
