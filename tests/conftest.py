"""Shared test fixtures for the subtitle_burner test suite.

WHY: Many test modules need the same small cues, the default resolved
style, and a sample Soniox transcript. Centralizing them keeps the
expected values in one place.

HOW: Plain pytest fixtures. SAMPLE_TOKENS is a short Soniox-style token
array with a split word, attached punctuation and a pause long enough to
start a new cue.

RULES:
- No fixture touches the network or runs FFmpeg
- Scratch directories are redirected to tmp_path by ``scratch_dirs``
"""

from typing import Any, Dict, List

import pytest

from subtitle_burner import config
from subtitle_burner.core.ir import Cue, StyleOptions
from subtitle_burner.styles.resolver import resolve


# ---------------------------------------------------------------------------
# Sample Soniox tokens
# ---------------------------------------------------------------------------

SAMPLE_TOKENS: List[Dict[str, Any]] = [
    {"text": "How",     "start_ms": 120,  "end_ms": 250,  "confidence": 0.97},
    {"text": " are",    "start_ms": 260,  "end_ms": 380,  "confidence": 0.95},
    {"text": " you",    "start_ms": 390,  "end_ms": 510,  "confidence": 0.96},
    {"text": "?",       "start_ms": 510,  "end_ms": 530,  "confidence": 0.99},
    {"text": " I",      "start_ms": 1200, "end_ms": 1260, "confidence": 0.98},
    {"text": " am",     "start_ms": 1270, "end_ms": 1380, "confidence": 0.97},
    {"text": " fan",    "start_ms": 1390, "end_ms": 1520, "confidence": 0.90},
    {"text": "tastic",  "start_ms": 1520, "end_ms": 1780, "confidence": 0.93},
    {"text": ",",       "start_ms": 1780, "end_ms": 1800, "confidence": 0.98},
    {"text": " thank",  "start_ms": 1810, "end_ms": 1950, "confidence": 0.96},
    {"text": " you",    "start_ms": 1960, "end_ms": 2100, "confidence": 0.97},
    {"text": ".",       "start_ms": 2100, "end_ms": 2120, "confidence": 0.99},
]


@pytest.fixture
def sample_tokens():
    return [dict(t) for t in SAMPLE_TOKENS]


@pytest.fixture
def sample_transcript_response():
    """A finished-transcript body as returned by Soniox."""
    return {
        "id": "tr-123",
        "text": "How are you? I am fantastic, thank you.",
        "tokens": [dict(t) for t in SAMPLE_TOKENS],
    }


# ---------------------------------------------------------------------------
# Cues and styles
# ---------------------------------------------------------------------------


@pytest.fixture
def hello_cue():
    return Cue(text="Hello World", start_time=0.0, end_time=2.5)


@pytest.fixture
def four_word_cue():
    return Cue(text="a b c d", start_time=10.0, end_time=14.0)


@pytest.fixture
def default_style():
    return resolve(StyleOptions())


@pytest.fixture
def scratch_dirs(tmp_path, monkeypatch):
    """Point the upload and output directories at tmp_path."""
    uploads = tmp_path / "uploads"
    outputs = tmp_path / "outputs"
    uploads.mkdir()
    outputs.mkdir()
    monkeypatch.setattr(config, "UPLOAD_DIR", uploads)
    monkeypatch.setattr(config, "OUTPUT_DIR", outputs)
    return uploads, outputs


# ---------------------------------------------------------------------------
# FFmpeg filter graph syntax
# ---------------------------------------------------------------------------

_WHITESPACES = " \n\t\r"


def _get_token(buf, pos, term):
    """Read one token the way FFmpeg's av_get_token() does.

    Quotes are stripped, a backslash outside quotes takes the next
    character literally, and reading stops at any character in ``term``.
    """
    while pos < len(buf) and buf[pos] in _WHITESPACES:
        pos += 1
    out = []
    end = 0
    while pos < len(buf) and buf[pos] not in term:
        c = buf[pos]
        pos += 1
        if c == "\\" and pos < len(buf):
            out.append(buf[pos])
            pos += 1
            end = len(out)
        elif c == "'":
            while pos < len(buf) and buf[pos] != "'":
                out.append(buf[pos])
                pos += 1
            if pos < len(buf):
                pos += 1
                end = len(out)
        else:
            out.append(c)
    while len(out) > end and out[-1] in _WHITESPACES:
        out.pop()
    return "".join(out), pos


def _parse_options(opts):
    """Split ``key=value:key=value`` as the filter option parser does."""
    options = {}
    pos = 0
    while pos < len(opts):
        eq = opts.index("=", pos)
        key = opts[pos:eq]
        value, pos = _get_token(opts, eq + 1, ":")
        options[key] = value
        if pos < len(opts):
            pos += 1
    return options


def parse_filter_chain(graph):
    """Parse a linear filter chain into ``[(name, {option: value}), ...]``."""
    filters = []
    pos = 0
    while True:
        name, pos = _get_token(graph, pos, "=,;[")
        opts = ""
        if pos < len(graph) and graph[pos] == "=":
            opts, pos = _get_token(graph, pos + 1, "[],;")
        filters.append((name, _parse_options(opts)))
        if pos >= len(graph):
            return filters
        assert graph[pos] == ",", "unexpected {!r} at {} in filter graph".format(graph[pos], pos)
        pos += 1


def expand_drawtext(text):
    """Apply drawtext's own escape handling to a parsed ``text`` value."""
    out = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i + 1 < len(text):
            out.append(text[i + 1])
            i += 2
            continue
        assert c != "%", "stray % in drawtext text {!r}".format(text)
        out.append(c)
        i += 1
    return "".join(out)


@pytest.fixture
def filter_chain():
    """Parser for a compiled ``-vf`` chain, FFmpeg quoting rules applied."""
    return parse_filter_chain


@pytest.fixture
def expand_text():
    """drawtext's expansion of a parsed ``text`` value."""
    return expand_drawtext
