"""Filter graph assembly: pick the render path and build the -vf string.

WHY: A render is either static (libass burns an ASS track) or animated
(a chain of drawtext commands). The pipeline should not care which; it asks
for a CompiledOverlay, writes the track document if there is one, and gets
back a single filter string for FFmpeg.

HOW: compile_overlay() resolves the style and dispatches on the animation
name. A registered animation compiles every cue into drawtext commands;
"none" or an unknown name builds the ASS document instead.
assemble_filter_graph() turns either result into the video filter string.

RULES:
- Static path: ``subtitles=filename='<quoted path>'`` (+ ``fontsdir``)
- Animated path: commands joined with "," in cue order; later ones draw on top
- An animated overlay with no commands yields the pass-through ``null`` filter
- The static path needs the on-disk path of the written track document
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from subtitle_burner.compilers import get_animation
from subtitle_burner.compilers.ass_document import build_ass_document
from subtitle_burner.compilers.base import DrawText
from subtitle_burner.core.ir import Cue, ResolvedStyle, StyleOptions
from subtitle_burner.render.escape import filter_path_option
from subtitle_burner.styles.resolver import resolve

logger = logging.getLogger(__name__)

NULL_FILTER = "null"


@dataclass
class CompiledOverlay:
    """Result of compiling cues for one render.

    Attributes:
        style: The resolved style used for compilation.
        commands: drawtext commands (animated path only).
        ass_document: Track document text (static path only).
    """

    style: ResolvedStyle
    commands: List[DrawText] = field(default_factory=list)
    ass_document: Optional[str] = None

    @property
    def is_animated(self) -> bool:
        return self.ass_document is None


def compile_overlay(cues: Iterable[Cue], options: Optional[StyleOptions] = None) -> CompiledOverlay:
    """Compile cues with the requested style into an overlay."""
    cues = list(cues)
    style = resolve(options)
    animation = get_animation(style.animation)

    if animation is None:
        logger.debug("Static subtitle track for %d cue(s)", len(cues))
        return CompiledOverlay(style=style, ass_document=build_ass_document(cues, style))

    commands: List[DrawText] = []
    for cue in cues:
        commands.extend(animation.compile(cue, style))
    logger.debug("Animation %s: %d drawtext command(s) for %d cue(s)",
                 animation.name, len(commands), len(cues))
    return CompiledOverlay(style=style, commands=commands)


def assemble_filter_graph(
    overlay: CompiledOverlay,
    subtitle_path: Optional[str] = None,
    fonts_dir: Optional[str] = None,
) -> str:
    """Build the ``-vf`` filter string for an overlay.

    Args:
        overlay: Output of compile_overlay().
        subtitle_path: Where the ASS document was written (static path).
        fonts_dir: Optional font directory for libass.

    Raises:
        ValueError: Static overlay without a subtitle_path.
    """
    if overlay.is_animated:
        if not overlay.commands:
            return NULL_FILTER
        return ",".join(command.to_filter() for command in overlay.commands)

    if not subtitle_path:
        raise ValueError("A subtitle track path is required for a static overlay")

    graph = "subtitles=filename={}".format(filter_path_option(str(subtitle_path)))
    if fonts_dir:
        graph += ":fontsdir={}".format(filter_path_option(str(fonts_dir)))
    return graph
