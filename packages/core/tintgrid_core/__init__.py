"""Core services: settings, logging, terminal construction, diagnostics and the render loop."""

from .config import AppConfig, config_to_dict, load_config
from .diagnostics import build_doctor_payload
from .factory import create_terminal
from .logging_setup import configure_logging, get_logger
from .render_loop import FrameStatus, RenderLoop

__all__ = [
    "AppConfig",
    "FrameStatus",
    "RenderLoop",
    "build_doctor_payload",
    "config_to_dict",
    "configure_logging",
    "create_terminal",
    "get_logger",
    "load_config",
]
