"""Build terminals from an ``AppConfig``."""

from __future__ import annotations

from typing import Any, TextIO

from tintgrid_renderer import ColorMode, DitherMapping, Terminal

from .config import AppConfig
from .logging_setup import get_logger


def create_terminal(
    cfg: AppConfig,
    out: TextIO | None = None,
    dither: DitherMapping | None = None,
    console_transport: Any | None = None,
) -> Terminal:
    terminal = Terminal(
        cfg.render.width,
        cfg.render.height,
        ColorMode(cfg.render.color_mode),
        out=out,
        dither=dither,
        prefer_console_api=cfg.render.prefer_console_api,
        console_transport=console_transport,
        checked=cfg.render.checked,
        strict_platform=cfg.platform.strict_vt,
        dither_resolution=cfg.dither.resolution,
    )
    if cfg.dither.eager and terminal.color_mode is ColorMode.DITHER_4BIT:
        terminal.precompute_dither()
    get_logger().info(
        "terminal created %dx%d mode=%s backend=%s",
        terminal.width,
        terminal.height,
        terminal.color_mode.value,
        terminal.backend_name,
        extra={"event": "terminal_created"},
    )
    return terminal
