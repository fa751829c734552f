"""Intermediate representation dataclasses for cues and styles.

WHY: Cues arrive from two very different places (a manual-entry form and
the transcription service) and are consumed by two very different
compilers (ASS document and drawtext overlays). A small set of typed
records keeps both sides honest about field names and units.

HOW: Four dataclasses:
  WordTiming   : one word with absolute start/end seconds
  Cue          : one timed text entry, optionally with word timings
  StyleOptions : the user-facing enumerated options (all defaulted)
  ResolvedStyle: format-specific parameters derived from StyleOptions

RULES:
- All times are float seconds from the start of the video
- StyleOptions never validates enum values; the resolver degrades them
- ResolvedStyle carries colors in both target encodings: packed ASS
  (&HAABBGGRR) for the track document, 0xRRGGBB for drawtext
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WordTiming:
    """Sub-cue timing for a single word.

    RULES:
    - start <= end
    - Produced by the transcription service (authoritative) or synthesized
      by core.timing (even subdivision)
    """

    word: str
    start: float
    end: float


@dataclass
class Cue:
    """One timed text entry.

    WHY: The unit of work for every compiler. A cue is created by the cue
    parser or the transcription cue builder and consumed once per render.

    RULES:
    - end_time > start_time
    - text is non-empty after trimming (enforced by core.cues for input)
    - word_timings, when present, is ordered and within the cue span
    """

    text: str
    start_time: float
    end_time: float
    word_timings: list[WordTiming] | None = None

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass
class StyleOptions:
    """User-facing style options, all defaulted.

    WHY: A request that carries only cue text and timing must still render.
    Every field has the default the upload form uses.

    RULES:
    - preset: one of styles.tables.PRESETS (unknown → classic)
    - color / outline_color / shadow_color: palette names
    - effect_color: palette name or raw ``&HBBGGRR&`` token
    - position: ``{top,middle,bottom}-{left,center,right}``
    - background: "none" or a styles.tables.BACKGROUNDS key
    - outline_thickness / shadow_depth: None means "use the preset default"
    - words_per_line: 0 disables forced wrapping
    """

    preset: str = "classic"
    font_family: str = "Arial"
    font_size: int = 24
    color: str = "white"
    position: str = "bottom-center"
    background: str = "none"
    animation: str = "none"
    effect_color: str = "gold"
    words_per_line: int = 0
    outline_color: str = "black"
    outline_thickness: int | None = None
    shadow_color: str = "black"
    shadow_depth: int | None = None


@dataclass(frozen=True)
class ResolvedStyle:
    """Format-specific parameter bundle derived from StyleOptions.

    RULES:
    - alignment: ASS numpad code 1–9 (bottom row 1–3, top row 7–9)
    - border_style: 1 = outline + drop shadow, 3 = opaque box
    - background set ⇒ outline == 0 and shadow == 0
    - *_ass fields are ``&HAABBGGRR`` strings, *_hex fields ``0xRRGGBB``
    - background_hex is None when no background box is drawn
    """

    font_name: str
    font_size: int
    bold: bool
    alignment: int
    margin_v: int
    margin_l: int
    margin_r: int
    primary_ass: str
    outline_ass: str
    back_ass: str
    outline: int
    shadow: int
    border_style: int
    text_hex: str
    outline_hex: str
    shadow_hex: str
    effect_hex: str
    background_hex: str | None
    background_opacity: float
    position: str
    words_per_line: int
    animation: str

    @property
    def has_background(self) -> bool:
        return self.background_hex is not None
