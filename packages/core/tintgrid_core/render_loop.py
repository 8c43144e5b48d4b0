"""Lock-guarded frame loop around a single terminal."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable

from tintgrid_renderer import ColorMode, FlushStats, Terminal

from .logging_setup import get_logger


DrawFn = Callable[[Terminal, int], None]


@dataclass
class FrameStatus:
    frames: int = 0
    fps: float = 0.0
    last_frame_s: float = 0.0
    last_flush: FlushStats | None = None
    last_error: str | None = None


class RenderLoop:
    """Serializes drawing and flushing of one terminal.

    All access to the terminal goes through ``lock``; other threads that
    touch the terminal must hold it too.
    """

    def __init__(self, terminal: Terminal, draw: DrawFn, fps: float = 0.0, offset_x: int = 0, offset_y: int = 0) -> None:
        self.terminal = terminal
        self.draw = draw
        self.fps = fps
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.lock = threading.RLock()
        self._status = FrameStatus()
        self._ewma_fps = 0.0
        self._logger = get_logger()

    @property
    def status(self) -> FrameStatus:
        return self._status

    def prepare(self) -> None:
        """Precompute the dither table now instead of on the first dithered write."""
        with self.lock:
            if self.terminal.color_mode is ColorMode.DITHER_4BIT:
                self.terminal.precompute_dither()

    def render_frame(self) -> FlushStats | None:
        with self.lock:
            start = time.perf_counter()
            index = self._status.frames
            try:
                self.draw(self.terminal, index)
                stats = self.terminal.flush(offset_x=self.offset_x, offset_y=self.offset_y)
            except Exception as exc:
                self._status.last_error = str(exc)
                self._logger.error("frame %d failed: %s", index, exc, extra={"event": "frame_failed"})
                raise

            elapsed = time.perf_counter() - start
            instant = 1.0 / elapsed if elapsed > 0 else 0.0
            self._ewma_fps = instant if self._ewma_fps == 0 else (self._ewma_fps * 0.8 + instant * 0.2)

            self._status.frames += 1
            self._status.fps = self._ewma_fps
            self._status.last_frame_s = elapsed
            self._status.last_flush = stats
            self._status.last_error = None
            return stats

    def run(self, frames: int) -> FrameStatus:
        self.prepare()
        interval = 1.0 / self.fps if self.fps > 0 else 0.0
        for _ in range(frames):
            started = time.perf_counter()
            self.render_frame()
            if interval:
                remaining = interval - (time.perf_counter() - started)
                if remaining > 0:
                    time.sleep(remaining)
        self._logger.info(
            "render loop finished frames=%d fps=%.1f",
            self._status.frames,
            self._status.fps,
            extra={"event": "render_loop_done"},
        )
        return self._status
