"""FFmpeg / ffprobe subprocess wrapper.

WHY: Rendering, audio extraction and duration probing all shell out to the
same two binaries. One wrapper gives them a uniform command shape, one
place to log the exact command, and one exception type for callers.

HOW: Commands are built as argument lists (no shell) and run with
subprocess.run(capture_output=True, text=True). A non-zero exit raises
MediaEngineError carrying the tail of FFmpeg's stderr, which is where the
useful diagnostics live. A missing binary is reported the same way.

RULES:
- Output files are always overwritten (-y)
- The original audio stream is copied unchanged when rendering
- Audio for transcription is mono, 16 kHz, 32 kbit/s MP3
- Blocking: async callers must run these in a worker thread
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from subtitle_burner import config

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

STDERR_TAIL_LINES = 20
AUDIO_SAMPLE_RATE = 16000
AUDIO_BITRATE = "32k"


class MediaEngineError(RuntimeError):
    """FFmpeg or ffprobe failed.

    Attributes:
        details: The last lines of the tool's stderr (may be empty).
    """

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message)
        self.details = details


def check_ffmpeg() -> bool:
    """True if both the FFmpeg and ffprobe binaries can be found."""
    return (
        shutil.which(config.FFMPEG_BINARY) is not None
        and shutil.which(config.FFPROBE_BINARY) is not None
    )


def _stderr_tail(stderr: Optional[str]) -> str:
    if not stderr:
        return ""
    lines = stderr.strip().splitlines()
    return "\n".join(lines[-STDERR_TAIL_LINES:])


def _run(cmd: List[str], what: str) -> subprocess.CompletedProcess:
    logger.debug("Running %s: %s", what, " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise MediaEngineError(
            "{} binary not found: {}".format(what, cmd[0]),
            details=str(exc),
        ) from exc

    if result.returncode != 0:
        details = _stderr_tail(result.stderr)
        logger.error("%s exited with code %d: %s", what, result.returncode, details)
        raise MediaEngineError(
            "{} failed with exit code {}".format(what, result.returncode),
            details=details,
        )
    return result


def render_video(input_path: PathLike, filter_graph: str, output_path: PathLike) -> Path:
    """Burn a filter graph into a video.

    Args:
        input_path: Source video.
        filter_graph: The ``-vf`` filter string.
        output_path: Destination file (overwritten).

    Returns:
        The output path.

    Raises:
        MediaEngineError: FFmpeg is missing or exited non-zero.
    """
    cmd = [
        config.FFMPEG_BINARY,
        "-y",
        "-i", str(input_path),
        "-vf", filter_graph,
        "-c:a", "copy",
        str(output_path),
    ]
    _run(cmd, "FFmpeg")
    logger.info("Rendered %s", output_path)
    return Path(output_path)


def extract_audio(input_path: PathLike, output_path: PathLike) -> Path:
    """Extract a speech-friendly MP3 track from a video."""
    cmd = [
        config.FFMPEG_BINARY,
        "-y",
        "-i", str(input_path),
        "-vn",
        "-ac", "1",
        "-ar", str(AUDIO_SAMPLE_RATE),
        "-b:a", AUDIO_BITRATE,
        "-f", "mp3",
        str(output_path),
    ]
    _run(cmd, "FFmpeg")
    return Path(output_path)


def probe_duration(path: PathLike) -> float:
    """Media duration in seconds, read with ffprobe.

    Raises:
        MediaEngineError: ffprobe failed or printed no usable duration.
    """
    cmd = [
        config.FFPROBE_BINARY,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(path),
    ]
    result = _run(cmd, "ffprobe")
    try:
        return float(result.stdout.strip())
    except ValueError as exc:
        raise MediaEngineError(
            "ffprobe returned no duration for {}".format(path),
            details=result.stdout.strip(),
        ) from exc
