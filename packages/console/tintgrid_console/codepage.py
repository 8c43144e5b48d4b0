"""Legacy OEM code page 437 glyph table used by the native console surface."""

from __future__ import annotations

CP437 = (
    "\0☺☻♥♦♣♠•◘○\n♂♀\r♫☼►◄↕‼¶§▬↨↑↓→←∟↔▲▼ !\"#$%&'()*+,-./0123456789:;<=>?@"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_`abcdefghijklmnopqrstuvwxyz{|}~⌂"
    "ÇüéâäàåçêëèïîìÄÅÉæÆôöòûùÿÖÜ¢£¥₧ƒáíóúñÑªº¿⌐¬½¼¡«»░▒▓│┤╡╢╖╕╣║╗╝╜╛┐"
    "└┴┬├─┼╞╟╚╔╩╦╠═╬╧╨╤╥╙╘╒╓╫╪┘┌█▄▌▐▀αßΓπΣσµτΦΘΩδ∞φε∩≡±≥≤⌠⌡÷≈°∙·√ⁿ²■ "
)

_INDEX: dict[str, int] = {}
for _i, _ch in enumerate(CP437):
    _INDEX.setdefault(_ch, _i)

FALLBACK_CODE = _INDEX["?"]


def encode_glyph(ch: str) -> int:
    """Return the record char code for ``ch``.

    ASCII characters are stored as-is. Anything else is replaced by its
    position in the CP437 table, or by the position of ``?`` when the glyph
    has no legacy equivalent. The console reads codes above 0x7F in the OEM
    code page, so Latin-1 code points cannot be stored directly.
    """
    code = ord(ch)
    if code < 0x80:
        return code
    return _INDEX.get(ch, FALLBACK_CODE)


def decode_glyph(code: int) -> str:
    """Glyph the console shows for a stored char code."""
    if code < 0x80:
        return chr(code)
    return CP437[code & 0xFF]
