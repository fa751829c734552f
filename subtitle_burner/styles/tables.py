"""Static style lookup tables and the silent-fallback lookup helper.

WHY: The upload form offers closed sets of named options (colors,
positions, backgrounds, presets, animations). The values behind those names
are plain data, not logic, so they live here as constants that humans and
tools can edit confidently.

HOW: Each table is a read-only mapping (MappingProxyType) built once at
import. Colors are stored as ASS tokens in blue-green-red order
(``&HBBGGRR&``); backgrounds carry an alpha byte (``&HAABBGGRR&``) for their
implied opacity. lookup_or_default() is the one place that turns an
unknown key into the table's default.

RULES:
- Tables are frozen; never mutate them at runtime
- Every table has a documented default key used for unknown input
- Position codes follow the ASS numpad layout: bottom row 1–3, middle
  row 4–6, top row 7–9, left to right
- "rainbow" has no single-color equivalent and maps to magenta
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Container, Mapping, Tuple

DEFAULT_COLOR = "white"
DEFAULT_OUTLINE_COLOR = "black"
DEFAULT_EFFECT_COLOR = "gold"
DEFAULT_POSITION = "bottom-center"
DEFAULT_BACKGROUND = "none"
DEFAULT_PRESET = "classic"
DEFAULT_ANIMATION = "none"

DEFAULT_FONT_SIZE = 24
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 200

# ASS BorderStyle codes
BORDER_STYLE_OUTLINE = 1
BORDER_STYLE_OPAQUE_BOX = 3

COLORS: Mapping[str, str] = MappingProxyType({
    "white": "&HFFFFFF&",
    "yellow": "&H00FFFF&",
    "cyan": "&HFFFF00&",
    "red": "&H0000FF&",
    "green": "&H00FF00&",
    "blue": "&HFF0000&",
    "purple": "&HFF00FF&",
    "orange": "&H0080FF&",
    "pink": "&HFF80FF&",
    "gold": "&H00D7FF&",
    "silver": "&HC0C0C0&",
    "rainbow": "&HFF00FF&",
})

OUTLINE_COLORS: Mapping[str, str] = MappingProxyType({
    "black": "&H000000&",
    **COLORS,
})

# (Alignment, MarginV, MarginL, MarginR)
POSITIONS: Mapping[str, Tuple[int, int, int, int]] = MappingProxyType({
    "bottom-left": (1, 30, 30, 0),
    "bottom-center": (2, 30, 0, 0),
    "bottom-right": (3, 30, 0, 30),
    "middle-left": (4, 0, 30, 0),
    "middle-center": (5, 0, 0, 0),
    "middle-right": (6, 0, 0, 30),
    "top-left": (7, 30, 30, 0),
    "top-center": (8, 30, 0, 0),
    "top-right": (9, 30, 0, 30),
})

# None means "no background box"
BACKGROUNDS: Mapping[str, Any] = MappingProxyType({
    "none": None,
    "black": "&H80000000&",
    "solid-black": "&H00000000&",
    "white": "&H80FFFFFF&",
    "solid-white": "&H00FFFFFF&",
    "gray": "&H80808080&",
    "dark-gray": "&H80404040&",
    "blue": "&H80FF0000&",
    "red": "&H800000FF&",
    "green": "&H8000FF00&",
    "yellow": "&H8000FFFF&",
    "purple": "&H80FF00FF&",
})

PRESETS: Mapping[str, Mapping[str, Any]] = MappingProxyType({
    "classic": MappingProxyType({"bold": False, "outline": 2, "shadow": 1, "box": False, "extra_margin": 0}),
    "modern": MappingProxyType({"bold": True, "outline": 3, "shadow": 0, "box": False, "extra_margin": 0}),
    "minimal": MappingProxyType({"bold": False, "outline": 1, "shadow": 2, "box": False, "extra_margin": 0}),
    "bold": MappingProxyType({"bold": True, "outline": 4, "shadow": 0, "box": False, "extra_margin": 0}),
    "neon": MappingProxyType({"bold": True, "outline": 2, "shadow": 3, "box": False, "extra_margin": 0}),
    "boxed": MappingProxyType({"bold": False, "outline": 0, "shadow": 0, "box": True, "extra_margin": 10}),
})

BOXED_DEFAULT_BACKGROUND = "black"
"""Background used by the boxed preset when the caller picked none."""

ANIMATION_NAMES: frozenset = frozenset({
    "none",
    "fade-in",
    "slide-up",
    "slide-left",
    "bounce",
    "typewriter",
    "word-reveal",
    "word-color",
    "word-fill",
    "word-highlight",
    "stroke",
    "fire-text",
    "ice-text",
    "glitch",
})


def resolve_key(table: Container[str], key: Any, default_key: str) -> str:
    """Return ``key`` if the table has it, otherwise ``default_key``.

    Keys are compared after trimming and lowercasing; non-string input
    falls back to the default.
    """
    if isinstance(key, str):
        normalized = key.strip().lower()
        if normalized in table:
            return normalized
    return default_key


def lookup_or_default(table: Mapping[str, Any], key: Any, default_key: str) -> Any:
    """Look up ``key`` in ``table``, falling back to ``table[default_key]``.

    RULES:
    - Never raises for unknown keys (the default key must exist)
    - The single fallback idiom for every enumerated option
    """
    return table[resolve_key(table, key, default_key)]
