"""Native console surface package for packed cell output."""

from .codepage import CP437, FALLBACK_CODE, decode_glyph, encode_glyph
from .models import CHAR_INFO_SIZE, PlatformError, RegionWrite, SmallRect, pack_char_info, unpack_char_info
from .transport import ConsoleTransport, console_api_available, enable_vt_processing, is_windows

__all__ = [
    "CHAR_INFO_SIZE",
    "CP437",
    "ConsoleTransport",
    "FALLBACK_CODE",
    "PlatformError",
    "RegionWrite",
    "SmallRect",
    "console_api_available",
    "decode_glyph",
    "enable_vt_processing",
    "encode_glyph",
    "is_windows",
    "pack_char_info",
    "unpack_char_info",
]
