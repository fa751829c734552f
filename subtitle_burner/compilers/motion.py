"""Whole-line motion animations: fade-in, slide-up, slide-left, bounce, typewriter.

WHY: These effects move or fade a complete line of text; they never look
at individual word timings, so one drawtext command per line is enough.

HOW: Each class fills in the x, y or alpha expression of a styled line.
The expressions are functions of the frame clock ``t`` relative to the cue
start S; once the entrance finishes, the expression settles on the line's
resting position (or full opacity) for the rest of the cue.

RULES:
- Every command is gated by ``between(t,S,E)`` for the cue window
- fade-in: alpha ramps 0 → 1 over 0.5s
- slide-up: y travels from ``h-50`` to the resting y over 0.8s
- slide-left: x travels from ``w`` (off-frame right) to the resting x over 0.8s
- bounce: y is lifted by ``30*sin(6*(t-S))`` during the first 0.5s
- typewriter: alpha ramps over min(max(0.08s × chars, 0.5s), 0.8 × duration)
"""

from __future__ import annotations

from typing import List

from subtitle_burner.compilers.base import DrawText, LineAnimation, PlacedLine, between, styled_text
from subtitle_burner.core.ir import Cue, ResolvedStyle
from subtitle_burner.render.layout import fmt_num

FADE_SECONDS = 0.5
SLIDE_SECONDS = 0.8
SLIDE_UP_FROM = "h-50"
SLIDE_LEFT_FROM = "w"
BOUNCE_SECONDS = 0.5
BOUNCE_AMPLITUDE = 30
BOUNCE_FREQUENCY = 6
TYPEWRITER_SECONDS_PER_CHAR = 0.08
TYPEWRITER_MIN_SECONDS = 0.5
TYPEWRITER_MAX_SHARE = 0.8


def ramp(start: float, seconds: float) -> str:
    """Opacity expression rising linearly from 0 at ``start`` to 1."""
    return "if(lt(t,{end}),(t-{s})/{d},1)".format(
        end=fmt_num(start + seconds),
        s=fmt_num(start),
        d=fmt_num(seconds),
    )


def travel(start: float, seconds: float, origin: str, target: str) -> str:
    """Expression moving linearly from ``origin`` to ``target``."""
    return "if(lt(t,{end}),({o})+(({t})-({o}))*(t-{s})/{d},{t})".format(
        end=fmt_num(start + seconds),
        o=origin,
        t=target,
        s=fmt_num(start),
        d=fmt_num(seconds),
    )


class FadeIn(LineAnimation):
    @property
    def name(self) -> str:
        return "fade-in"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        return [styled_text(
            style, line.text, line.x, line.y,
            enable=between(cue.start_time, cue.end_time),
            alpha=ramp(cue.start_time, FADE_SECONDS),
        )]


class SlideUp(LineAnimation):
    @property
    def name(self) -> str:
        return "slide-up"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        return [styled_text(
            style, line.text, line.x,
            travel(cue.start_time, SLIDE_SECONDS, SLIDE_UP_FROM, line.y),
            enable=between(cue.start_time, cue.end_time),
        )]


class SlideLeft(LineAnimation):
    @property
    def name(self) -> str:
        return "slide-left"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        return [styled_text(
            style, line.text,
            travel(cue.start_time, SLIDE_SECONDS, SLIDE_LEFT_FROM, line.x),
            line.y,
            enable=between(cue.start_time, cue.end_time),
        )]


class Bounce(LineAnimation):
    @property
    def name(self) -> str:
        return "bounce"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        start = fmt_num(cue.start_time)
        y = "({y})-if(lt(t-{s},{d}),{a}*sin({f}*(t-{s})),0)".format(
            y=line.y,
            s=start,
            d=fmt_num(BOUNCE_SECONDS),
            a=BOUNCE_AMPLITUDE,
            f=BOUNCE_FREQUENCY,
        )
        return [styled_text(
            style, line.text, line.x, y,
            enable=between(cue.start_time, cue.end_time),
        )]


def typewriter_seconds(char_count: int, cue_duration: float) -> float:
    """Reveal duration scaled to text length, capped at 80% of the cue."""
    reveal = max(TYPEWRITER_SECONDS_PER_CHAR * char_count, TYPEWRITER_MIN_SECONDS)
    return min(reveal, TYPEWRITER_MAX_SHARE * cue_duration)


class Typewriter(LineAnimation):
    """Progressive reveal approximated by an opacity ramp.

    drawtext cannot clip text per character, so the reveal is a fade whose
    length follows the number of characters on the line.
    """

    @property
    def name(self) -> str:
        return "typewriter"

    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        seconds = typewriter_seconds(len(line.text), cue.duration)
        alpha = ramp(cue.start_time, seconds) if seconds > 0 else None
        return [styled_text(
            style, line.text, line.x, line.y,
            enable=between(cue.start_time, cue.end_time),
            alpha=alpha,
        )]
