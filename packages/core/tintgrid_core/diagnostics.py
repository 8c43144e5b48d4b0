"""Environment report for support and bug triage."""

from __future__ import annotations

import os
import platform
import sys
from datetime import datetime, timezone
from typing import Any

from tintgrid_console import console_api_available, is_windows
from tintgrid_renderer import ColorMode, uses_console_api

from .config import AppConfig, config_to_dict


def _backend_for(mode: ColorMode, cfg: AppConfig) -> str:
    return "console" if uses_console_api(mode, cfg.render.prefer_console_api) else "ansi"


def build_doctor_payload(cfg: AppConfig) -> dict[str, Any]:
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "windows": is_windows(),
        "console_api": console_api_available(),
        "stdout_isatty": bool(getattr(sys.stdout, "isatty", lambda: False)()),
        "term": os.environ.get("TERM"),
        "colorterm": os.environ.get("COLORTERM"),
        "backends": {mode.value: _backend_for(mode, cfg) for mode in ColorMode},
        "config": config_to_dict(cfg),
    }
