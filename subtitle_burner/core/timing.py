"""Per-word timing derivation and line grouping.

WHY: Per-word animations (reveal, highlight, fill) need a start/end for
every word. Transcribed cues carry real word timestamps; hand-typed cues
do not, so timings are synthesized by evenly dividing the cue.

HOW: derive_word_timings() passes external timings through untouched or
synthesizes them: a 5% buffer is trimmed from both ends of the cue and the
remaining span is split evenly across the words. chunk_words() groups an
already-timed word list into lines.

RULES:
- Words are whitespace-delimited tokens; empty tokens are dropped
- External timings are used verbatim (never re-aligned to the text)
- Synthesized timings are monotonic and lie inside [start_time, end_time]
- Zero words → empty list; callers skip the cue
- Line wrapping always works on the timing list, never on re-split text,
  so wrapping can not desynchronize words from their timings
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

from subtitle_burner.core.ir import Cue, WordTiming

T = TypeVar("T")

EDGE_BUFFER_RATIO = 0.05
"""Fraction of the cue duration kept free at each end when synthesizing."""


def split_words(text: str) -> list[str]:
    """Split cue text into words on any whitespace."""
    return [w for w in text.split() if w]


def derive_word_timings(cue: Cue) -> list[WordTiming]:
    """Return the per-word timing table for a cue.

    RULES:
    - cue.word_timings present and non-empty → returned as a new list
    - Otherwise: buffer = duration × 0.05, per-word = (duration − 2×buffer) / N,
      word i spans [start + buffer + i×per, start + buffer + (i+1)×per]
    - No words → []

    Args:
        cue: The cue to time.

    Returns:
        Ordered WordTiming list, one entry per word.
    """
    if cue.word_timings:
        return list(cue.word_timings)

    words = split_words(cue.text)
    if not words:
        return []

    duration = cue.end_time - cue.start_time
    buffer = duration * EDGE_BUFFER_RATIO
    effective_start = cue.start_time + buffer
    per_word = (duration - 2 * buffer) / len(words)

    return [
        WordTiming(
            word=word,
            start=effective_start + i * per_word,
            end=effective_start + (i + 1) * per_word,
        )
        for i, word in enumerate(words)
    ]


def chunk_words(items: Sequence[T], words_per_line: int) -> List[List[T]]:
    """Group items into lines of ``words_per_line`` (0 ⇒ a single line).

    Order is preserved and nothing is dropped; the last line takes the
    remainder. An empty input gives no lines.
    """
    if not items:
        return []
    size = words_per_line if words_per_line > 0 else len(items)
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def wrap_text(text: str, words_per_line: int) -> list[str]:
    """Wrap plain text into lines of at most ``words_per_line`` words."""
    return [" ".join(line) for line in chunk_words(split_words(text), words_per_line)]
