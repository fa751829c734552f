"""Service-neutral transcript records consumed by the cue builder.

WHY: The cue builder should not depend on one vendor's token format. The
Soniox adapter (and any future source, or a saved transcript file) reduces
its response to these three tiers of detail; the cue builder picks the
richest tier that is present.

RULES:
- Times are float seconds from the start of the media
- words: whole words with punctuation already attached
- segments: phrase-level spans without per-word timing
- text: untimed plain text, the last resort
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TimedWord:
    text: str
    start: float
    end: float
    confidence: float = 1.0


@dataclass(frozen=True)
class TimedSegment:
    text: str
    start: float
    end: float


@dataclass
class RawTranscript:
    """Everything a transcription source returned, by level of detail."""

    words: list[TimedWord] = field(default_factory=list)
    segments: list[TimedSegment] = field(default_factory=list)
    text: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> RawTranscript:
        """Load a saved transcript (``{"words": [...], "segments": [...], "text": ...}``)."""
        return cls(
            words=[TimedWord(w["text"], float(w["start"]), float(w["end"]), float(w.get("confidence", 1.0)))
                   for w in data.get("words") or []],
            segments=[TimedSegment(s["text"], float(s["start"]), float(s["end"]))
                      for s in data.get("segments") or []],
            text=data.get("text") or "",
        )
