"""Runtime settings schema, read from defaults and TINTGRID_* environment variables."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping


CONFIG_VERSION = 1
ENV_PREFIX = "TINTGRID_"

COLOR_MODES = ("plain4", "dither4", "plain8", "plain24")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RenderConfig:
    color_mode: str = "plain24"
    width: int | None = None
    height: int | None = None
    prefer_console_api: bool = True
    checked: bool = True


@dataclass
class DitherConfig:
    resolution: int = 8
    eager: bool = False


@dataclass
class PlatformConfig:
    strict_vt: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    json: bool = True
    log_file: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    dither: DitherConfig = field(default_factory=DitherConfig)
    platform: PlatformConfig = field(default_factory=PlatformConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


DEFAULT_CONFIG = AppConfig()

# environment variable suffix -> (section, key)
_ENV_KEYS: dict[str, tuple[str, str]] = {
    "COLOR_MODE": ("render", "color_mode"),
    "WIDTH": ("render", "width"),
    "HEIGHT": ("render", "height"),
    "CONSOLE_API": ("render", "prefer_console_api"),
    "CHECKED": ("render", "checked"),
    "DITHER_RESOLUTION": ("dither", "resolution"),
    "DITHER_EAGER": ("dither", "eager"),
    "STRICT_VT": ("platform", "strict_vt"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_JSON": ("logging", "json"),
    "LOG_FILE": ("logging", "log_file"),
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_optional_int(value: str) -> int | None:
    value = value.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _coerce(section: str, key: str, value: str) -> Any:
    default = getattr(getattr(DEFAULT_CONFIG, section), key)
    if isinstance(default, bool):
        return _parse_bool(value)
    if isinstance(default, int) or default is None and key in ("width", "height"):
        return _parse_optional_int(value)
    return value.strip()


def _normalize_render(cfg: AppConfig) -> None:
    mode = str(cfg.render.color_mode).lower()
    cfg.render.color_mode = mode if mode in COLOR_MODES else "plain24"
    for name in ("width", "height"):
        value = getattr(cfg.render, name)
        if value is not None and value <= 0:
            setattr(cfg.render, name, None)


def _normalize_dither(cfg: AppConfig) -> None:
    resolution = cfg.dither.resolution
    if resolution is None:
        resolution = DitherConfig().resolution
    cfg.dither.resolution = max(2, min(16, int(resolution)))


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in LOG_LEVELS else "WARNING"


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env

    raw: dict[str, dict[str, Any]] = {}
    for suffix, (section, key) in _ENV_KEYS.items():
        value = env.get(ENV_PREFIX + suffix)
        if value is None:
            continue
        raw.setdefault(section, {})[key] = _coerce(section, key, value)

    cfg = AppConfig(
        render=_merge(RenderConfig, raw.get("render", {})),
        dither=_merge(DitherConfig, raw.get("dither", {})),
        platform=_merge(PlatformConfig, raw.get("platform", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_render(cfg)
    _normalize_dither(cfg)
    _normalize_logging(cfg)
    return cfg


def config_to_dict(cfg: AppConfig) -> dict[str, Any]:
    return asdict(cfg)
