"""Error taxonomy shared by buffers, colors and the dither engine."""

from __future__ import annotations

from tintgrid_console.models import PlatformError


class TintGridError(Exception):
    """Base class for contract violations raised by tintgrid."""


class DimensionError(TintGridError, ValueError):
    """Buffer dimensions are not positive."""


class BoundsError(TintGridError, IndexError):
    """A coordinate lies outside the buffer."""


class ColorRangeError(TintGridError, ValueError):
    """A palette or cube component is outside its domain."""


class DitherStateError(TintGridError, RuntimeError):
    """Dither table used before precompute, or precomputed twice."""


__all__ = [
    "BoundsError",
    "ColorRangeError",
    "DimensionError",
    "DitherStateError",
    "PlatformError",
    "TintGridError",
]
