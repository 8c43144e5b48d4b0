"""Typed models for the native console surface."""

from __future__ import annotations

import struct
from dataclasses import dataclass


CHAR_INFO_SIZE = 4
_CHAR_INFO = struct.Struct("<HH")


class PlatformError(OSError):
    """An OS console API call failed."""

    def __init__(self, message: str, winerror: int | None = None) -> None:
        super().__init__(message if winerror is None else f"{message} (winerror={winerror})")
        self.winerror = winerror


@dataclass(frozen=True)
class SmallRect:
    left: int
    top: int
    right: int
    bottom: int

    @classmethod
    def for_region(cls, x: int, y: int, width: int, height: int) -> "SmallRect":
        if min(x, y) < 0:
            raise ValueError("Offsets must be non-negative")
        return cls(left=x, top=y, right=x + width - 1, bottom=y + height - 1)


@dataclass
class RegionWrite:
    rect: SmallRect
    width: int
    height: int
    records: bytes


def pack_char_info(char_code: int, attributes: int) -> bytes:
    return _CHAR_INFO.pack(char_code & 0xFFFF, attributes & 0xFFFF)


def unpack_char_info(records: bytes | bytearray, index: int) -> tuple[int, int]:
    return _CHAR_INFO.unpack_from(records, index * CHAR_INFO_SIZE)


def pack_into(records: bytearray, index: int, char_code: int, attributes: int) -> None:
    _CHAR_INFO.pack_into(records, index * CHAR_INFO_SIZE, char_code & 0xFFFF, attributes & 0xFFFF)
