"""Group transcribed words into caption cues.

WHY: A raw transcript is one long stream of words. Captions read best in
short chunks that start and stop with the speech, so words are grouped into
cues of a few words and a pause in speech always starts a new cue.

HOW: build_cues() tries the richest tier of a RawTranscript first:
word-level timings, then segment-level spans, then plain text spread over
the media duration. The duration is only requested when the last tier is
needed, since finding it costs an ffprobe call.

RULES:
- At most 6 words per cue
- A gap of more than 0.5s between words starts a new cue
- Word-level cues carry their word timings (used by per-word animations)
- Segment cues and the plain-text cue carry no word timings
- Every cue satisfies end > start; zero-length spans are widened to 0.1s
- Nothing usable → TranscriptionError
"""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from subtitle_burner.api.client import TranscriptionError
from subtitle_burner.core.ir import Cue, WordTiming
from subtitle_burner.transcription.models import RawTranscript, TimedSegment, TimedWord

logger = logging.getLogger(__name__)

MAX_WORDS_PER_CUE = 6
MAX_GAP_SECONDS = 0.5
MIN_CUE_SECONDS = 0.1


def _span(start: float, end: float) -> tuple[float, float]:
    start = max(start, 0.0)
    return start, max(end, start + MIN_CUE_SECONDS)


def cues_from_words(
    words: Sequence[TimedWord],
    max_words: int = MAX_WORDS_PER_CUE,
    max_gap: float = MAX_GAP_SECONDS,
) -> List[Cue]:
    """Group timed words into cues of up to ``max_words`` words."""
    groups: List[List[TimedWord]] = []
    for word in words:
        if not word.text.strip():
            continue
        if groups and len(groups[-1]) < max_words and word.start - groups[-1][-1].end <= max_gap:
            groups[-1].append(word)
        else:
            groups.append([word])

    cues = []
    for group in groups:
        start, end = _span(group[0].start, group[-1].end)
        cues.append(Cue(
            text=" ".join(w.text for w in group),
            start_time=start,
            end_time=end,
            word_timings=[WordTiming(w.text, max(w.start, start), min(max(w.end, w.start), end)) for w in group],
        ))
    return cues


def cues_from_segments(segments: Sequence[TimedSegment]) -> List[Cue]:
    """One cue per non-empty segment."""
    cues = []
    for segment in segments:
        text = " ".join(segment.text.split())
        if not text:
            continue
        start, end = _span(segment.start, segment.end)
        cues.append(Cue(text=text, start_time=start, end_time=end))
    return cues


def build_cues(transcript: RawTranscript, duration: Callable[[], float]) -> List[Cue]:
    """Turn a transcript into cues using the best available timing.

    Args:
        transcript: Words, segments and/or text from the transcription source.
        duration: Returns the media duration in seconds; called only for
            the plain-text fallback.

    Raises:
        TranscriptionError: The transcript contains no text at all.
    """
    cues = cues_from_words(transcript.words)
    if cues:
        logger.info("Built %d cue(s) from word timings", len(cues))
        return cues

    cues = cues_from_segments(transcript.segments)
    if cues:
        logger.info("No word timings; built %d cue(s) from segments", len(cues))
        return cues

    text = " ".join(transcript.text.split())
    if not text:
        raise TranscriptionError("Transcription returned no speech")

    total = duration()
    logger.info("No timings at all; one cue spanning %.2fs", total)
    start, end = _span(0.0, total)
    return [Cue(text=text, start_time=start, end_time=end)]
