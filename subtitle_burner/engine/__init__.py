"""Media engine: FFmpeg and ffprobe invocations."""

from subtitle_burner.engine.ffmpeg import (
    MediaEngineError,
    check_ffmpeg,
    extract_audio,
    probe_duration,
    render_video,
)

__all__ = ["MediaEngineError", "check_ffmpeg", "extract_audio", "probe_duration", "render_video"]
