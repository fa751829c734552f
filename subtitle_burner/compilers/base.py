"""Draw-command model, shared multi-line layout, and the animation base classes.

WHY: Every animated style needs the same groundwork before it can emit a
single drawtext command: split the cue into timed words, group them into
lines, anchor the block vertically, and place each line (and each word)
horizontally. Doing that once here means an animation only has to say what
it draws for one line or one word.

HOW: DrawText models one FFmpeg drawtext filter and renders itself with all
literals escaped. MultiLineLayout turns a cue into PlacedLine objects
(timed words, x/y expressions, per-word x expressions). BaseAnimation is
the strategy interface; LineAnimation and WordAnimation are the two
visitor shapes: one callback per line or one per word.

RULES:
- Animations never re-split cue text: lines come from the word-timing list
- A cue with no words yields no lines and therefore no commands
- Command order is draw order: later commands draw on top
- Numbers in expressions go through fmt_num() so output is deterministic
- To add an animation: subclass LineAnimation or WordAnimation, implement
  ``name`` and the per-line/per-word method, register it in ANIMATIONS
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import List, Optional

from subtitle_burner.core.ir import Cue, ResolvedStyle, WordTiming
from subtitle_burner.core.timing import chunk_words, derive_word_timings
from subtitle_burner.render.colors import with_opacity
from subtitle_burner.render.escape import drawtext_text_option, font_name_option
from subtitle_burner.render.layout import (
    MOTION_LINE_HEIGHT,
    fmt_num,
    line_height,
    line_start_x,
    line_x,
    offset_expr,
    vertical_anchor,
    word_pixel_offsets,
)

BOX_BORDER_PX = 8


def between(start: float, end: float) -> str:
    """Visibility predicate for the window ``[start, end]``."""
    return "between(t,{},{})".format(fmt_num(start), fmt_num(end))


@dataclass(frozen=True)
class DrawText:
    """One timed FFmpeg drawtext command.

    RULES:
    - text is raw; escaping happens in to_filter()
    - x, y, alpha and enable are FFmpeg expressions (quoted on output)
    - fontcolor / bordercolor / boxcolor are ``0xRRGGBB[@opacity]``
    """

    text: str
    font: str
    font_size: int
    fontcolor: str
    x: str
    y: str
    enable: str
    alpha: Optional[str] = None
    borderw: int = 0
    bordercolor: str = "0x000000"
    shadow: int = 0
    shadowcolor: str = "0x000000"
    box: bool = False
    boxcolor: str = "0x000000"
    boxborderw: int = BOX_BORDER_PX

    def to_filter(self) -> str:
        """Render as a ``drawtext=...`` filter string."""
        options = [
            "text={}".format(drawtext_text_option(self.text)),
            "font={}".format(font_name_option(self.font)),
            "fontsize={}".format(self.font_size),
            "fontcolor={}".format(self.fontcolor),
            "x='{}'".format(self.x),
            "y='{}'".format(self.y),
        ]
        if self.alpha is not None:
            options.append("alpha='{}'".format(self.alpha))
        if self.borderw > 0:
            options.append("borderw={}".format(self.borderw))
            options.append("bordercolor={}".format(self.bordercolor))
        if self.shadow > 0:
            options.append("shadowx={}".format(self.shadow))
            options.append("shadowy={}".format(self.shadow))
            options.append("shadowcolor={}".format(self.shadowcolor))
        if self.box:
            options.append("box=1")
            options.append("boxcolor={}".format(self.boxcolor))
            options.append("boxborderw={}".format(self.boxborderw))
        options.append("enable='{}'".format(self.enable))
        return "drawtext=" + ":".join(options)


def styled_text(
    style: ResolvedStyle,
    text: str,
    x: str,
    y: str,
    enable: str,
    fontcolor: Optional[str] = None,
    alpha: Optional[str] = None,
) -> DrawText:
    """Build a DrawText carrying the resolved outline, shadow and box."""
    return DrawText(
        text=text,
        font=style.font_name,
        font_size=style.font_size,
        fontcolor=fontcolor or style.text_hex,
        x=x,
        y=y,
        enable=enable,
        alpha=alpha,
        borderw=style.outline,
        bordercolor=style.outline_hex,
        shadow=style.shadow,
        shadowcolor=style.shadow_hex,
        box=style.has_background,
        boxcolor=with_opacity(style.background_hex or "0x000000", style.background_opacity),
    )


def restyle(command: DrawText, **changes) -> DrawText:
    """Copy a command with some fields replaced."""
    return replace(command, **changes)


@dataclass(frozen=True)
class PlacedWord:
    """A timed word with its x expression inside its line."""

    timing: WordTiming
    x: str
    index: int


@dataclass(frozen=True)
class PlacedLine:
    """One wrapped line of a cue, anchored in the frame.

    Attributes:
        index: Line number within the cue, 0 at the top.
        text: Words of the line joined by single spaces.
        x: x expression for the whole line (drawtext measures text_w).
        y: y expression for the line's top edge.
        words: The line's words with approximate per-word x expressions.
    """

    index: int
    text: str
    x: str
    y: str
    words: List[PlacedWord] = field(default_factory=list)


class MultiLineLayout:
    """Split a cue into anchored lines and words.

    The vertical anchor is computed for the whole block so that a 3-line
    cue at the bottom grows upward and a centered cue stays centered.
    """

    def __init__(self, style: ResolvedStyle, line_height_factor: float = MOTION_LINE_HEIGHT) -> None:
        self.style = style
        self.line_height_factor = line_height_factor

    def lay_out(self, cue: Cue) -> List[PlacedLine]:
        timings = derive_word_timings(cue)
        if not timings:
            return []

        style = self.style
        groups = chunk_words(timings, style.words_per_line)
        step = line_height(style.font_size, self.line_height_factor)
        anchor = vertical_anchor(style.position, step * len(groups))

        lines: List[PlacedLine] = []
        word_index = 0
        for index, group in enumerate(groups):
            layout = word_pixel_offsets([w.word for w in group], style.font_size)
            start_x = line_start_x(style.position, layout.total_width)

            placed: List[PlacedWord] = []
            for timing, (_, offset) in zip(group, layout.offsets):
                placed.append(PlacedWord(
                    timing=timing,
                    x=offset_expr(start_x, offset),
                    index=word_index,
                ))
                word_index += 1

            lines.append(PlacedLine(
                index=index,
                text=" ".join(w.word for w in group),
                x=line_x(style.position),
                y=offset_expr(anchor, index * step),
                words=placed,
            ))
        return lines


class BaseAnimation(ABC):
    """Strategy interface: compile one cue into draw commands."""

    line_height_factor: float = MOTION_LINE_HEIGHT

    @property
    @abstractmethod
    def name(self) -> str:
        """Animation key as used in requests, e.g. ``"fade-in"``."""

    def compile(self, cue: Cue, style: ResolvedStyle) -> List[DrawText]:
        """Compile a cue into draw commands (empty for a wordless cue)."""
        lines = MultiLineLayout(style, self.line_height_factor).lay_out(cue)
        commands: List[DrawText] = []
        for line in lines:
            commands.extend(self.render_line(cue, line, style))
        return commands

    @abstractmethod
    def render_line(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        """Emit the commands for one placed line."""


class LineAnimation(BaseAnimation):
    """An animation applied to whole lines."""

    def render_line(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        return self.line_commands(cue, line, style)

    @abstractmethod
    def line_commands(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        """Commands for one line, visible within the cue window."""


class WordAnimation(BaseAnimation):
    """An animation driven by each word's own timing window."""

    def render_line(self, cue: Cue, line: PlacedLine, style: ResolvedStyle) -> List[DrawText]:
        commands: List[DrawText] = []
        for word in line.words:
            commands.extend(self.word_commands(cue, line, word, style))
        return commands

    @abstractmethod
    def word_commands(
        self,
        cue: Cue,
        line: PlacedLine,
        word: PlacedWord,
        style: ResolvedStyle,
    ) -> List[DrawText]:
        """Commands for one word (stacked in draw order)."""
