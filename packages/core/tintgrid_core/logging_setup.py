"""Structured logging setup for the tintgrid logger tree."""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import platform
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


_LOGGER_NAME = "tintgrid"


def _state_root() -> Path:
    if platform.system() == "Windows":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return base / "tintgrid"
    if platform.system() == "Darwin":
        return Path.home() / "Library" / "Logs" / "tintgrid"
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state")) / "tintgrid"


def log_dir() -> Path:
    path = _state_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        if hasattr(record, "event"):
            payload["event"] = getattr(record, "event")
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(
    level: str | int = logging.WARNING,
    console: bool = True,
    json_output: bool = True,
    log_file: bool = False,
    keep_files: int = 7,
) -> logging.Logger:
    """Attach handlers to the ``tintgrid`` logger once; later calls only adjust the level."""
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    if console:
        stream_handler = logging.StreamHandler()
        if json_output:
            stream_handler.setFormatter(JsonFormatter())
        else:
            stream_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(stream_handler)

    if log_file:
        handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_dir() / "tintgrid.log"),
            when="midnight",
            backupCount=max(2, keep_files),
            encoding="utf-8",
        )
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)

    logger.debug("logging configured", extra={"event": "logging_configured"})
    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)
