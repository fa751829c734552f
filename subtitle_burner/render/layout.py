"""Approximate text layout math for drawtext placement.

WHY: drawtext places each command independently, so per-word effects need
every word's x offset inside its line, and multi-line effects need the
height of the whole block to anchor it. FFmpeg gives no measurement API at
filter-build time.

HOW: Widths are approximated from a fixed average character width
(0.52 × font size) and a fixed inter-word space (0.5 × font size). This is
a deliberate approximation, not glyph metrics; the positioning constants
below were tuned against it, so do not swap in real font measurement
without retuning them. Positions are emitted as FFmpeg expressions over the
frame size variables ``w`` and ``h`` so the video never has to be probed.

RULES:
- Offsets start at 0 and grow left to right
- total_width = rightmost extent minus trailing space, floored at 1
- Block height = line count × round(font size × line-height factor)
- Vertical anchor: "top" → 50px, "middle" → centered, otherwise 50px above
  the bottom edge
- Horizontal anchor: "left"/"right" → 30px from that edge, otherwise centered
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

CHAR_WIDTH_RATIO = 0.52
SPACE_WIDTH_RATIO = 0.5

TOP_MARGIN_PX = 50
BOTTOM_MARGIN_PX = 50
SIDE_MARGIN_PX = 30

MOTION_LINE_HEIGHT = 1.3
WORD_LINE_HEIGHT = 1.2


@dataclass(frozen=True)
class WordLayout:
    """Per-word x offsets of one line and the line's approximate width."""

    offsets: List[Tuple[str, int]]
    total_width: int


def fmt_num(value: float) -> str:
    """Format a number for an FFmpeg expression: 3 decimals, no trailing zeros."""
    text = "{:.3f}".format(value).rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def word_pixel_offsets(words: Sequence[str], font_size: int) -> WordLayout:
    """Compute left-to-right x offsets for words on one line.

    Args:
        words: Words in display order.
        font_size: Font size in pixels.

    Returns:
        WordLayout with (word, x offset) pairs and the line width.
    """
    char_width = font_size * CHAR_WIDTH_RATIO
    space_width = font_size * SPACE_WIDTH_RATIO

    offsets: List[Tuple[str, int]] = []
    cursor = 0.0
    for word in words:
        offsets.append((word, int(round(cursor))))
        cursor += len(word) * char_width + space_width

    total_width = max(int(round(cursor - space_width)), 1)
    return WordLayout(offsets=offsets, total_width=total_width)


def line_height(font_size: int, factor: float) -> int:
    return int(round(font_size * factor))


def line_block_height(line_count: int, font_size: int, factor: float) -> int:
    """Total height of ``line_count`` stacked lines."""
    return line_count * line_height(font_size, factor)


def vertical_anchor(position: str, block_height: int) -> str:
    """FFmpeg y expression for the top edge of a text block."""
    if "top" in position:
        return str(TOP_MARGIN_PX)
    if "middle" in position:
        return "(h-{})/2".format(block_height)
    return "h-{}-{}".format(block_height, BOTTOM_MARGIN_PX)


def line_x(position: str) -> str:
    """FFmpeg x expression for a whole line measured by drawtext (text_w)."""
    if position.endswith("left"):
        return str(SIDE_MARGIN_PX)
    if position.endswith("right"):
        return "w-text_w-{}".format(SIDE_MARGIN_PX)
    return "(w-text_w)/2"


def line_start_x(position: str, total_width: int) -> str:
    """FFmpeg x expression for the left edge of a line of approximate width."""
    if position.endswith("left"):
        return str(SIDE_MARGIN_PX)
    if position.endswith("right"):
        return "w-{}-{}".format(total_width, SIDE_MARGIN_PX)
    return "w/2-{}".format(fmt_num(total_width / 2))


def offset_expr(base: str, offset: float) -> str:
    """Add a constant pixel offset to an expression."""
    if not offset:
        return base
    if offset < 0:
        return "{}-{}".format(base, fmt_num(-offset))
    return "{}+{}".format(base, fmt_num(offset))
