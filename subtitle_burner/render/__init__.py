"""Pure rendering helpers: color encodings, layout math, filter escaping.

RULES:
- Stateless functions only; no FFmpeg calls
- Every literal inserted into a filter graph goes through render.escape
"""

from subtitle_burner.render.colors import ass_to_hex, parse_ass_color
from subtitle_burner.render.layout import line_block_height, word_pixel_offsets

__all__ = ["ass_to_hex", "parse_ass_color", "line_block_height", "word_pixel_offsets"]
