"""Per-word animations: reveal, color, fill, highlight, stroke.

WHY: Karaoke-style captions change how each word looks while it is being
spoken. drawtext has no notion of words, so every word becomes its own
command (or stack of commands) placed at an approximate x offset.

HOW: WordAnimation walks the placed words of each line; each class below
decides which commands to stack for one word. Commands are emitted bottom
to top, so a later command paints over an earlier one.

RULES:
- Word windows come from derive_word_timings() (real or synthesized)
- word-reveal: word appears at its start and stays until the cue ends
- word-color: base color before, effect color during, base color after
- word-fill: base color before, effect color from the word onward
- word-highlight: base text for the whole cue plus an effect-colored box
  painted only during the word
- stroke: faint fill with a thick base-color outline before the word,
  solid effect-colored fill from the word onward
"""

from __future__ import annotations

from typing import List

from subtitle_burner.compilers.base import (
    DrawText,
    PlacedLine,
    PlacedWord,
    WordAnimation,
    between,
    restyle,
    styled_text,
)
from subtitle_burner.core.ir import Cue, ResolvedStyle
from subtitle_burner.render.colors import with_opacity
from subtitle_burner.render.layout import WORD_LINE_HEIGHT

HIGHLIGHT_BOX_BORDER_PX = 6
STROKE_FILL_OPACITY = 0.2
STROKE_MIN_WIDTH = 3


class _PerWord(WordAnimation):
    line_height_factor = WORD_LINE_HEIGHT

    def text(self, style: ResolvedStyle, line: PlacedLine, word: PlacedWord, start: float, end: float,
             fontcolor: str | None = None) -> DrawText:
        return styled_text(style, word.timing.word, word.x, line.y, between(start, end), fontcolor=fontcolor)


class WordReveal(_PerWord):
    @property
    def name(self) -> str:
        return "word-reveal"

    def word_commands(self, cue: Cue, line: PlacedLine, word: PlacedWord, style: ResolvedStyle) -> List[DrawText]:
        return [self.text(style, line, word, word.timing.start, cue.end_time)]


class WordColor(_PerWord):
    @property
    def name(self) -> str:
        return "word-color"

    def word_commands(self, cue: Cue, line: PlacedLine, word: PlacedWord, style: ResolvedStyle) -> List[DrawText]:
        timing = word.timing
        return [
            self.text(style, line, word, cue.start_time, timing.start),
            self.text(style, line, word, timing.start, timing.end, fontcolor=style.effect_hex),
            self.text(style, line, word, timing.end, cue.end_time),
        ]


class WordFill(_PerWord):
    @property
    def name(self) -> str:
        return "word-fill"

    def word_commands(self, cue: Cue, line: PlacedLine, word: PlacedWord, style: ResolvedStyle) -> List[DrawText]:
        timing = word.timing
        return [
            self.text(style, line, word, cue.start_time, timing.start),
            self.text(style, line, word, timing.start, cue.end_time, fontcolor=style.effect_hex),
        ]


class WordHighlight(_PerWord):
    @property
    def name(self) -> str:
        return "word-highlight"

    def word_commands(self, cue: Cue, line: PlacedLine, word: PlacedWord, style: ResolvedStyle) -> List[DrawText]:
        base = self.text(style, line, word, cue.start_time, cue.end_time)
        highlight = restyle(
            self.text(style, line, word, word.timing.start, word.timing.end),
            box=True,
            boxcolor=style.effect_hex,
            boxborderw=HIGHLIGHT_BOX_BORDER_PX,
        )
        return [base, highlight]


class Stroke(_PerWord):
    @property
    def name(self) -> str:
        return "stroke"

    def word_commands(self, cue: Cue, line: PlacedLine, word: PlacedWord, style: ResolvedStyle) -> List[DrawText]:
        timing = word.timing
        outlined = restyle(
            self.text(style, line, word, cue.start_time, timing.start),
            fontcolor=with_opacity(style.text_hex, STROKE_FILL_OPACITY),
            borderw=max(style.outline, STROKE_MIN_WIDTH),
            bordercolor=style.text_hex,
        )
        filled = self.text(style, line, word, timing.start, cue.end_time, fontcolor=style.effect_hex)
        return [outlined, filled]
