"""Render orchestration: cues + style + video → captioned video.

WHY: The HTTP endpoint and the CLI run the same steps for a render. Keeping
them in one function means both surfaces log, clean up and fail the same
way.

HOW: Compile the overlay, write the track document when the static path
was chosen, assemble the filter graph, and hand it to FFmpeg. The track
document is a scratch file and is removed whatever the outcome; a partial
output is removed when FFmpeg fails.

RULES:
- Compilation never touches the filesystem; only this module writes
- MediaEngineError propagates to the caller after cleanup
- Blocking: run in a worker thread from async code
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from subtitle_burner import config
from subtitle_burner.compilers.filter_graph import assemble_filter_graph, compile_overlay
from subtitle_burner.core.ir import Cue, StyleOptions
from subtitle_burner.engine.ffmpeg import MediaEngineError, render_video

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """What a finished render produced."""

    output_path: Path
    animation: str
    command_count: int


def compile_filter_graph(
    cues: Iterable[Cue],
    options: Optional[StyleOptions] = None,
    subtitle_path: Optional[Path] = None,
    fonts_dir: Optional[str] = None,
) -> str:
    """Compile cues into a filter string, writing the track document if needed."""
    overlay = compile_overlay(cues, options)
    if overlay.ass_document is not None:
        if subtitle_path is None:
            raise ValueError("subtitle_path is required when no animation is selected")
        Path(subtitle_path).write_text(overlay.ass_document, encoding="utf-8")
    return assemble_filter_graph(overlay, str(subtitle_path) if subtitle_path else None, fonts_dir)


def render_with_cues(
    video_path: Path,
    cues: Iterable[Cue],
    options: Optional[StyleOptions],
    output_path: Path,
    subtitle_path: Path,
    fonts_dir: Optional[str] = config.FONTS_DIR,
) -> RenderResult:
    """Burn cues into a video.

    Args:
        video_path: Source video.
        cues: Validated cues.
        options: Style options (None means defaults).
        output_path: Destination video.
        subtitle_path: Scratch location for the track document.
        fonts_dir: Optional font directory for the subtitles filter.

    Raises:
        MediaEngineError: FFmpeg failed.
    """
    cues = list(cues)
    overlay = compile_overlay(cues, options)
    style = overlay.style
    logger.info(
        "Render %s: %d cue(s), animation=%s, font=%s %dpx, position=%s",
        Path(video_path).name, len(cues), style.animation, style.font_name,
        style.font_size, style.position,
    )

    try:
        if overlay.ass_document is not None:
            Path(subtitle_path).write_text(overlay.ass_document, encoding="utf-8")
            graph = assemble_filter_graph(overlay, str(subtitle_path), fonts_dir)
        else:
            graph = assemble_filter_graph(overlay)
        logger.debug("Filter graph: %s", graph)

        render_video(video_path, graph, output_path)
    except MediaEngineError:
        Path(output_path).unlink(missing_ok=True)
        raise
    finally:
        Path(subtitle_path).unlink(missing_ok=True)

    return RenderResult(
        output_path=Path(output_path),
        animation=style.animation,
        command_count=len(overlay.commands),
    )
