"""Soniox sub-word token assembly into timed words.

WHY: Soniox uses BPE tokenization, splitting words like "fantastic" into
[" fan", "tastic"]. Captions need whole words with one start and one end,
and a comma or full stop belongs on the word it follows rather than being
drawn as a word of its own.

HOW: A leading space in token.text starts a new word; tokens without one
continue the current word. Punctuation-only tokens are appended to the
preceding word's text without changing its timing. Translation tokens and
tokens without timestamps are dropped first.

RULES:
- Leading space → new word (the space is stripped)
- No leading space + existing word → continuation (end extends, text appends)
- Punctuation-only token → attached to the previous word; dropped if none
- First token → new word (even without a leading space)
- Confidence of a word is the minimum across its tokens
- Timestamps: ms → seconds
"""

from __future__ import annotations

import re
from typing import List, Optional

from subtitle_burner.api.models import SonioxToken, TranscriptResponse
from subtitle_burner.transcription.models import RawTranscript, TimedWord

# Tokens consisting entirely of punctuation characters.
_PUNCTUATION_RE = re.compile(r"^[.,!?;:…—–\-\"')\]]+$")


def filter_timed_tokens(tokens: List[SonioxToken]) -> List[SonioxToken]:
    """Keep tokens aligned to audio: no translations, no missing timestamps."""
    return [
        t for t in tokens
        if t.translation_status != "translation" and t.is_timed
    ]


def assemble_words(tokens: List[SonioxToken]) -> List[TimedWord]:
    """Assemble sub-word tokens into whole timed words.

    Args:
        tokens: Flat token list from the transcript response.

    Returns:
        Words in spoken order with punctuation attached.
    """
    words: List[TimedWord] = []

    current_text: Optional[str] = None
    current_start_ms = 0
    current_end_ms = 0
    current_confidence = 1.0

    def _flush_current() -> None:
        nonlocal current_text
        if current_text:
            words.append(TimedWord(
                text=current_text,
                start=current_start_ms / 1000.0,
                end=current_end_ms / 1000.0,
                confidence=current_confidence,
            ))
        current_text = None

    for token in filter_timed_tokens(tokens):
        text = token.text

        if _PUNCTUATION_RE.match(text.strip()):
            if current_text is not None:
                current_text += text.strip()
            elif words:
                last = words[-1]
                words[-1] = TimedWord(last.text + text.strip(), last.start, last.end, last.confidence)
            continue

        if text.startswith(" ") or current_text is None:
            _flush_current()
            current_text = text.strip()
            current_start_ms = token.start_ms
            current_end_ms = token.end_ms
            current_confidence = token.confidence
        else:
            current_text += text
            current_end_ms = token.end_ms
            current_confidence = min(current_confidence, token.confidence)

    _flush_current()
    return words


def transcript_from_response(response: TranscriptResponse) -> RawTranscript:
    """Reduce a Soniox transcript to the service-neutral record.

    Soniox returns word-level data, so ``segments`` stays empty; ``text`` is
    kept for the plain-text fallback when no token carries timing.
    """
    return RawTranscript(
        words=assemble_words(response.tokens),
        text=response.text.strip(),
    )
