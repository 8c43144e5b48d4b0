"""Native console transport for bulk cell writes and VT enablement."""

from __future__ import annotations

import ctypes
import logging
import platform
from dataclasses import dataclass
from typing import Any

from .models import CHAR_INFO_SIZE, PlatformError, RegionWrite


logger = logging.getLogger("tintgrid.console")

STD_OUTPUT_HANDLE = -11
ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
GENERIC_WRITE = 0x40000000
FILE_SHARE_WRITE = 0x00000002
OPEN_EXISTING = 3
INVALID_HANDLE_VALUE = -1

_vt_enabled = False


def is_windows() -> bool:
    return platform.system() == "Windows"


def console_api_available() -> bool:
    return is_windows() and hasattr(ctypes, "WinDLL")


class _Coord(ctypes.Structure):
    _fields_ = [("X", ctypes.c_short), ("Y", ctypes.c_short)]


class _SmallRect(ctypes.Structure):
    _fields_ = [
        ("Left", ctypes.c_short),
        ("Top", ctypes.c_short),
        ("Right", ctypes.c_short),
        ("Bottom", ctypes.c_short),
    ]


class _CharInfo(ctypes.Structure):
    _fields_ = [("Char", ctypes.c_uint16), ("Attributes", ctypes.c_uint16)]


def _kernel32() -> Any:
    if not console_api_available():
        raise PlatformError("Console API is only available on Windows")
    return ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]


def _valid_handle(handle: int | None) -> bool:
    return handle is not None and handle != ctypes.c_void_p(INVALID_HANDLE_VALUE).value


def enable_vt_processing(strict: bool = True) -> bool:
    """Turn on escape sequence interpretation for stdout, once per process.

    Returns True when escape sequences will be interpreted. Failures raise
    ``PlatformError`` when ``strict`` is set and are otherwise only logged.
    """
    global _vt_enabled
    if _vt_enabled or not is_windows():
        _vt_enabled = True
        return True

    try:
        kernel32 = _kernel32()
        kernel32.GetStdHandle.restype = ctypes.c_void_p
        handle = kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
        mode = ctypes.c_uint32()
        if _valid_handle(handle) and kernel32.GetConsoleMode(ctypes.c_void_p(handle), ctypes.byref(mode)):
            new_mode = ctypes.c_uint32(mode.value | ENABLE_VIRTUAL_TERMINAL_PROCESSING)
            if kernel32.SetConsoleMode(ctypes.c_void_p(handle), new_mode):
                _vt_enabled = True
                logger.info("vt processing enabled", extra={"event": "vt_enabled"})
                return True
        error = PlatformError("Failed to enable VT processing", ctypes.get_last_error())
    except PlatformError as exc:
        error = exc

    if strict:
        raise error
    logger.warning("vt processing unavailable: %s", error, extra={"event": "vt_unavailable"})
    return False


@dataclass
class ConsoleConfig:
    device: str = "CONOUT$"


class ConsoleTransport:
    """Thin wrapper over WriteConsoleOutputA for whole-region cell writes."""

    def __init__(self) -> None:
        self._kernel32: Any | None = None
        self._handle: Any | None = None
        self.config: ConsoleConfig | None = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self, device: str = "CONOUT$") -> None:
        if self.is_open:
            return
        kernel32 = _kernel32()
        kernel32.CreateFileW.restype = ctypes.c_void_p
        handle = kernel32.CreateFileW(device, GENERIC_WRITE, FILE_SHARE_WRITE, None, OPEN_EXISTING, 0, None)
        if not _valid_handle(handle):
            raise PlatformError(f"Cannot open console device {device}", ctypes.get_last_error())
        self._kernel32 = kernel32
        self._handle = handle
        self.config = ConsoleConfig(device=device)

    def close(self) -> None:
        if self._handle is not None and self._kernel32 is not None:
            self._kernel32.CloseHandle(ctypes.c_void_p(self._handle))
        self._handle = None
        self._kernel32 = None

    def write_region(self, region: RegionWrite) -> int:
        width, height, rect = region.width, region.height, region.rect
        records = region.records
        if len(records) != width * height * CHAR_INFO_SIZE:
            raise ValueError(f"Record data must be {width * height * CHAR_INFO_SIZE} bytes")
        if not self.is_open:
            self.open()

        buffer = (_CharInfo * (width * height)).from_buffer_copy(records)
        target = _SmallRect(rect.left, rect.top, rect.right, rect.bottom)
        ok = self._kernel32.WriteConsoleOutputA(
            ctypes.c_void_p(self._handle),
            buffer,
            _Coord(width, height),
            _Coord(0, 0),
            ctypes.byref(target),
        )
        if not ok:
            raise PlatformError("WriteConsoleOutputA failed", ctypes.get_last_error())
        return len(records)
