"""Color conversion between ASS tokens and FFmpeg drawtext colors.

WHY: The palette is stored once, in the ASS subtitle format's native
encoding (``&HBBGGRR&``, blue first). The subtitles filter wants packed
``&HAABBGGRR`` style colors, while drawtext wants forward ``0xRRGGBB``.
Getting the byte order wrong silently swaps red and blue.

HOW: parse_ass_color() extracts the hex digits between the ``&H`` and
trailing ``&`` delimiters. Six digits are BBGGRR; eight digits are
AABBGGRR. Everything else is derived from the parsed (r, g, b, alpha).

RULES:
- ASS alpha is inverted: 0x00 is opaque, 0xFF is fully transparent
- ass_to_hex() drops alpha; callers carry opacity separately
- Malformed tokens raise ValueError (tables are static, so this is a bug)
"""

from __future__ import annotations

import re

_ASS_TOKEN_RE = re.compile(r"^&H([0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})&?$")
_HEX_RE = re.compile(r"^(?:0x|#)([0-9A-Fa-f]{6})$")


def parse_ass_color(token: str) -> tuple[int, int, int, int]:
    """Parse an ASS color token into ``(r, g, b, alpha)``.

    Accepts ``&HBBGGRR&``, ``&HAABBGGRR&`` and the same without the
    trailing ampersand. Missing alpha means opaque (0).
    """
    match = _ASS_TOKEN_RE.match(token.strip())
    if not match:
        raise ValueError("Not an ASS color token: {!r}".format(token))

    digits = match.group(1).upper()
    alpha = 0
    if len(digits) == 8:
        alpha = int(digits[0:2], 16)
        digits = digits[2:]

    blue = int(digits[0:2], 16)
    green = int(digits[2:4], 16)
    red = int(digits[4:6], 16)
    return red, green, blue, alpha


def is_ass_color(token: str) -> bool:
    """True if the string looks like an ASS color token."""
    return bool(_ASS_TOKEN_RE.match(token.strip()))


def ass_to_hex(token: str) -> str:
    """Convert an ASS color token to drawtext's ``0xRRGGBB`` form."""
    red, green, blue, _ = parse_ass_color(token)
    return "0x{:02X}{:02X}{:02X}".format(red, green, blue)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Decode ``0xRRGGBB`` (or ``#RRGGBB``) into an ``(r, g, b)`` triple."""
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError("Not a hex RGB color: {!r}".format(value))
    digits = match.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def ass_style_color(token: str, alpha: int | None = None) -> str:
    """Pack a token as a ``&HAABBGGRR`` value for an ASS Style line.

    ``alpha`` overrides the token's own alpha when given.
    """
    red, green, blue, token_alpha = parse_ass_color(token)
    if alpha is None:
        alpha = token_alpha
    return "&H{:02X}{:02X}{:02X}{:02X}".format(alpha, blue, green, red)


def alpha_to_opacity(alpha: int) -> float:
    """Convert ASS alpha (0 opaque … 255 clear) to drawtext opacity (1 … 0)."""
    return round(1.0 - alpha / 255.0, 2)


def with_opacity(hex_color: str, opacity: float) -> str:
    """Append drawtext's ``@opacity`` suffix unless fully opaque."""
    if opacity >= 1.0:
        return hex_color
    return "{}@{:.2f}".format(hex_color, max(opacity, 0.0))
