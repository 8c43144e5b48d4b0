"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

from .colors import Color


@dataclass(frozen=True)
class Cell:
    character: str
    foreground: Color
    background: Color


@dataclass
class FlushStats:
    backend: str
    cells: int = 0
    escapes: int = 0
    chars_written: int = 0
    duration_s: float = 0.0
