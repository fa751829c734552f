"""Track document compiler: cues + ResolvedStyle → ASS subtitle document.

WHY: When no animation is requested, FFmpeg's subtitles filter (libass) can
burn a standard ASS track in one pass. libass handles outline, shadow, box
and alignment natively, so the static path is just a text document.

HOW: A fixed [Script Info] header with a 1920×1080 reference canvas, one
"Default" style record built from the ResolvedStyle, and one Dialogue event
per cue in input order. Without words_per_line the cue text is used as
written; with it, the text is rewrapped from the cue's word-timing list and
joined with the ``\\N`` hard line break.

RULES:
- Timestamps are ``H:MM:SS.CC`` (centiseconds, rounded)
- Cues with no words produce no event
- Literal braces are escaped so cue text never opens an override block
- Same input gives byte-identical output
- Bold is -1 (true) or 0 (false), as the ASS format defines it
"""

from __future__ import annotations

from typing import Iterable, List

from subtitle_burner.core.ir import Cue, ResolvedStyle
from subtitle_burner.core.timing import chunk_words, derive_word_timings

PLAY_RES_X = 1920
PLAY_RES_Y = 1080
STYLE_NAME = "Default"

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, "
    "OutlineColour, BackColour, Bold, Italic, Underline, StrikeOut, "
    "ScaleX, ScaleY, Spacing, Angle, BorderStyle, Outline, Shadow, "
    "Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def format_ass_time(seconds: float) -> str:
    """Format seconds as an ASS timestamp, e.g. 2.5 → ``0:00:02.50``."""
    centis = max(int(round(seconds * 100)), 0)
    hours, centis = divmod(centis, 360000)
    minutes, centis = divmod(centis, 6000)
    secs, centis = divmod(centis, 100)
    return "{}:{:02d}:{:02d}.{:02d}".format(hours, minutes, secs, centis)


def style_line(style: ResolvedStyle) -> str:
    """Build the ``Style:`` record for the single Default style."""
    fields = [
        STYLE_NAME,
        style.font_name.replace(",", " "),
        str(style.font_size),
        style.primary_ass,
        style.primary_ass,
        style.outline_ass,
        style.back_ass,
        "-1" if style.bold else "0",
        "0",
        "0",
        "0",
        "100",
        "100",
        "0",
        "0",
        str(style.border_style),
        str(style.outline),
        str(style.shadow),
        str(style.alignment),
        str(style.margin_l),
        str(style.margin_r),
        str(style.margin_v),
        "1",
    ]
    return "Style: " + ",".join(fields)


def escape_ass_text(text: str) -> str:
    """Escape the braces libass would read as an override block."""
    return text.replace("{", "\\{").replace("}", "\\}")


def dialogue_text(cue: Cue, words_per_line: int) -> str:
    """Cue text with forced line breaks, or "" when the cue has no words."""
    if words_per_line <= 0:
        text = cue.text.strip()
        for newline in ("\r\n", "\n", "\r"):
            text = text.replace(newline, "\\N")
        return escape_ass_text(text)
    timings = derive_word_timings(cue)
    lines = chunk_words([w.word for w in timings], words_per_line)
    return escape_ass_text("\\N".join(" ".join(line) for line in lines))


def build_ass_document(cues: Iterable[Cue], style: ResolvedStyle) -> str:
    """Compile cues into a complete ASS document.

    Args:
        cues: Cues in display order.
        style: The resolved style shared by every event.

    Returns:
        The document text, newline-terminated.
    """
    lines: List[str] = [
        "[Script Info]",
        "ScriptType: v4.00+",
        "PlayResX: {}".format(PLAY_RES_X),
        "PlayResY: {}".format(PLAY_RES_Y),
        "ScaledBorderAndShadow: yes",
        "WrapStyle: 0",
        "",
        "[V4+ Styles]",
        STYLE_FORMAT,
        style_line(style),
        "",
        "[Events]",
        EVENT_FORMAT,
    ]

    for cue in cues:
        text = dialogue_text(cue, style.words_per_line)
        if not text:
            continue
        lines.append("Dialogue: 0,{},{},{},,0,0,0,,{}".format(
            format_ass_time(cue.start_time),
            format_ass_time(cue.end_time),
            STYLE_NAME,
            text,
        ))

    return "\n".join(lines) + "\n"
