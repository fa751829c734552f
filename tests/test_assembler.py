"""Unit tests for the Soniox token assembler.

WHY: The assembler turns Soniox's flat BPE token array into whole words.
Wrong assembly shows up directly on screen: split words, stray punctuation
cues, or word windows that do not match the speech.

HOW: Tests cover each assembly rule:
  - Leading-space word boundary detection
  - Continuation token joining
  - Punctuation attachment
  - First-token edge case
  - Confidence aggregation (minimum strategy)
  - Translation and untimed token filtering
  - Timestamp conversion (ms → seconds)

RULES:
- Floating-point comparisons use pytest.approx with default tolerance.
"""

import pytest

from subtitle_burner.api.models import SonioxToken, TranscriptResponse
from subtitle_burner.transcription.assembler import (
    assemble_words,
    filter_timed_tokens,
    transcript_from_response,
)


def tokens_from(*raw):
    return [SonioxToken.from_dict(t) for t in raw]


class TestLeadingSpaceWordBoundary:

    def test_leading_space_starts_new_word(self):
        words = assemble_words(tokens_from(
            {"text": "Hello", "start_ms": 0, "end_ms": 100},
            {"text": " world", "start_ms": 110, "end_ms": 200},
        ))
        assert [w.text for w in words] == ["Hello", "world"]

    def test_first_token_without_space_starts_word(self):
        words = assemble_words(tokens_from({"text": "Hi", "start_ms": 0, "end_ms": 100}))
        assert [w.text for w in words] == ["Hi"]


class TestContinuationTokenJoining:

    def test_two_part_word(self):
        words = assemble_words(tokens_from(
            {"text": " fan", "start_ms": 960, "end_ms": 1100, "confidence": 0.90},
            {"text": "tastic", "start_ms": 1100, "end_ms": 1350, "confidence": 0.93},
        ))
        assert len(words) == 1
        assert words[0].text == "fantastic"
        assert words[0].start == pytest.approx(0.960)
        assert words[0].end == pytest.approx(1.350)

    def test_three_part_word(self):
        words = assemble_words(tokens_from(
            {"text": "Beau", "start_ms": 300, "end_ms": 420},
            {"text": "ti", "start_ms": 420, "end_ms": 540},
            {"text": "ful", "start_ms": 540, "end_ms": 780},
        ))
        assert [w.text for w in words] == ["Beautiful"]
        assert words[0].end == pytest.approx(0.780)


class TestPunctuationAttachment:

    def test_punctuation_joins_previous_word_without_timing_change(self):
        words = assemble_words(tokens_from(
            {"text": " you", "start_ms": 390, "end_ms": 510},
            {"text": "?", "start_ms": 510, "end_ms": 530},
        ))
        assert len(words) == 1
        assert words[0].text == "you?"
        assert words[0].end == pytest.approx(0.510)

    def test_spaced_punctuation_still_attaches(self):
        words = assemble_words(tokens_from(
            {"text": " wait", "start_ms": 0, "end_ms": 200},
            {"text": " ...", "start_ms": 200, "end_ms": 260},
        ))
        assert [w.text for w in words] == ["wait..."]

    def test_leading_punctuation_dropped(self):
        words = assemble_words(tokens_from(
            {"text": "\"", "start_ms": 0, "end_ms": 10},
            {"text": " ok", "start_ms": 20, "end_ms": 100},
        ))
        assert [w.text for w in words] == ["ok"]


class TestConfidence:

    def test_minimum_across_tokens(self):
        words = assemble_words(tokens_from(
            {"text": " fan", "start_ms": 0, "end_ms": 100, "confidence": 0.90},
            {"text": "tastic", "start_ms": 100, "end_ms": 200, "confidence": 0.70},
        ))
        assert words[0].confidence == pytest.approx(0.70)


class TestFiltering:

    def test_translation_tokens_removed(self):
        tokens = tokens_from(
            {"text": " hola", "start_ms": 0, "end_ms": 100, "translation_status": "original"},
            {"text": " hello", "translation_status": "translation"},
        )
        assert [t.text for t in filter_timed_tokens(tokens)] == [" hola"]

    def test_untimed_tokens_removed(self):
        tokens = tokens_from({"text": " x", "start_ms": None, "end_ms": None})
        assert assemble_words(tokens) == []


class TestSampleTranscript:

    def test_full_sample(self, sample_transcript_response):
        transcript = transcript_from_response(TranscriptResponse.from_dict(sample_transcript_response))
        assert [w.text for w in transcript.words] == [
            "How", "are", "you?", "I", "am", "fantastic,", "thank", "you.",
        ]
        assert transcript.words[5].start == pytest.approx(1.39)
        assert transcript.words[5].end == pytest.approx(1.78)
        assert transcript.words[5].confidence == pytest.approx(0.90)
        assert transcript.segments == []
        assert transcript.text == "How are you? I am fantastic, thank you."
