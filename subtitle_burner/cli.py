"""Command-line interface for Subtitle Burner.

WHY: Rendering and transcription are useful without the web form: in
scripts, batch jobs, or to inspect exactly which filter graph a style
produces. The CLI drives the same pipeline the HTTP API uses.

HOW: argparse with four subcommands:
  render      VIDEO --cues FILE [style flags] [-o OUT]   burn captions
  compile     --cues FILE [style flags]                  print the filter graph
  transcribe  VIDEO [-o FILE]                            derive a cue list
  serve       [--host HOST] [--port PORT]                run the HTTP API
Status messages go to stderr; the compile graph and transcribe JSON go to
stdout so they can be piped.

RULES:
- Cue files use the same JSON format as the API's ``subtitles`` field
- Output naming: {stem}-subtitled.mp4, numeric suffix for conflicts
  (-subtitled-2.mp4); never overwrites an existing file unless -o is given
- Unknown style values are accepted and resolve to defaults, as in the API
- Exit codes: 0 success, 1 failure, 130 interrupted
- Python 3.9+ compatible: no match/case, no X | Y unions
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from subtitle_burner import __version__, config
from subtitle_burner.api.client import SonioxAPIError, TranscriptionError, TranscriptionTimeoutError
from subtitle_burner.compilers import ANIMATIONS
from subtitle_burner.core.cues import CueValidationError, cues_to_payload, parse_cue_list
from subtitle_burner.core.ir import Cue, StyleOptions
from subtitle_burner.engine.ffmpeg import MediaEngineError
from subtitle_burner.pipeline import compile_filter_graph, render_with_cues
from subtitle_burner.server.scratch import timestamp_name
from subtitle_burner.styles.tables import BACKGROUNDS, COLORS, POSITIONS, PRESETS
from subtitle_burner.transcription.service import transcribe_video

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the CLI and the API server."""
    logging.basicConfig(
        level=(level or config.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str, details: Optional[str] = None) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    if details:
        print(details, file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Return {stem}{suffix} in output_dir, or the first free -2, -3, ... variant."""
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    suffix_name, suffix_ext = (suffix[:dot_idx], suffix[dot_idx:]) if dot_idx > 0 else (suffix, "")

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _load_cues(path: str) -> List[Cue]:
    cue_path = Path(path)
    if not cue_path.exists():
        _fail("Cue file not found: {}".format(cue_path))
    try:
        return parse_cue_list(cue_path.read_text(encoding="utf-8"))
    except CueValidationError as exc:
        _fail(str(exc))
    return []  # unreachable; _fail exits


def _style_options(args: argparse.Namespace) -> StyleOptions:
    return StyleOptions(
        preset=args.preset,
        font_family=args.font,
        font_size=args.font_size,
        color=args.color,
        position=args.position,
        background=args.background,
        animation=args.animation,
        effect_color=args.effect_color,
        words_per_line=args.words_per_line,
        outline_color=args.outline_color,
        outline_thickness=args.outline_thickness,
        shadow_color=args.shadow_color,
        shadow_depth=args.shadow_depth,
    )


def _check_video(path: str) -> Path:
    video = Path(path)
    if not video.exists():
        _fail("File not found: {}".format(video))
    if video.suffix.lower() not in config.SUPPORTED_VIDEO_FORMATS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            video.suffix, ", ".join(sorted(config.SUPPORTED_VIDEO_FORMATS))))
    return video


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def cmd_render(args: argparse.Namespace) -> None:
    video = _check_video(args.video)
    cues = _load_cues(args.cues)

    if args.output:
        output_path = Path(args.output)
    else:
        output_path = _resolve_output_path(video.stem, "-subtitled.mp4", video.parent)
    subtitle_path = output_path.parent / timestamp_name("subtitles-", ".ass")

    _status("Rendering {} cue(s) into {}...".format(len(cues), output_path))
    try:
        result = render_with_cues(video, cues, _style_options(args), output_path, subtitle_path)
    except MediaEngineError as exc:
        _fail("Video processing failed: {}".format(exc), exc.details)
        return
    _status("Done! Saved {} (animation: {})".format(result.output_path, result.animation))


def cmd_compile(args: argparse.Namespace) -> None:
    cues = _load_cues(args.cues)
    graph = compile_filter_graph(cues, _style_options(args), subtitle_path=Path(args.ass_out))
    print(graph)


def cmd_transcribe(args: argparse.Namespace) -> None:
    video = _check_video(args.video)
    audio_path = video.parent / timestamp_name("{}-audio-".format(video.stem), ".mp3")

    _status("Transcribing {}...".format(video.name))
    try:
        cues = asyncio.run(transcribe_video(video, audio_path, on_status=_status))
    except MediaEngineError as exc:
        _fail("Audio extraction failed: {}".format(exc), exc.details)
        return
    except (SonioxAPIError, TranscriptionError, TranscriptionTimeoutError, httpx.HTTPError, ValueError) as exc:
        _fail("Transcription failed: {}".format(exc))
        return

    payload = json.dumps(cues_to_payload(cues), indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        _status("Saved {} cue(s) to {}".format(len(cues), args.output))
    else:
        print(payload)


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from subtitle_burner.server.app import app

    uvicorn.run(app, host=args.host, port=args.port)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_style_arguments(parser: argparse.ArgumentParser) -> None:
    defaults = StyleOptions()
    group = parser.add_argument_group("style")
    group.add_argument("--preset", default=defaults.preset,
                       help="Preset: {} (default: %(default)s).".format(", ".join(sorted(PRESETS))))
    group.add_argument("--font", default=defaults.font_family, help="Font family (default: %(default)s).")
    group.add_argument("--font-size", type=int, default=defaults.font_size,
                       help="Font size in px, clamped to 8-200 (default: %(default)s).")
    group.add_argument("--color", default=defaults.color,
                       help="Text color: {} (default: %(default)s).".format(", ".join(sorted(COLORS))))
    group.add_argument("--position", default=defaults.position,
                       help="Position: {} (default: %(default)s).".format(", ".join(sorted(POSITIONS))))
    group.add_argument("--background", default=defaults.background,
                       help="Background box: {} (default: %(default)s).".format(", ".join(sorted(BACKGROUNDS))))
    group.add_argument("--animation", default=defaults.animation,
                       help="Animation: none, {} (default: %(default)s).".format(", ".join(sorted(ANIMATIONS))))
    group.add_argument("--effect-color", default=defaults.effect_color,
                       help="Effect color name or &HBBGGRR& token (default: %(default)s).")
    group.add_argument("--words-per-line", type=int, default=defaults.words_per_line,
                       help="Words per line; 0 disables wrapping (default: %(default)s).")
    group.add_argument("--outline-color", default=defaults.outline_color, help="Outline color (default: %(default)s).")
    group.add_argument("--outline-thickness", type=int, default=None, help="Outline width in px (default: preset).")
    group.add_argument("--shadow-color", default=defaults.shadow_color, help="Shadow color (default: %(default)s).")
    group.add_argument("--shadow-depth", type=int, default=None, help="Shadow offset in px (default: preset).")


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser (kept separate from main() for tests)."""
    parser = argparse.ArgumentParser(
        prog="subtitle-burner",
        description="Burn styled, optionally animated captions into videos with FFmpeg.",
    )
    parser.add_argument("--version", action="version", version="%(prog)s {}".format(__version__))
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL or INFO).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Burn a cue list into a video.")
    render.add_argument("video", help="Input video file.")
    render.add_argument("--cues", required=True, help="JSON cue list file.")
    render.add_argument("-o", "--output", default=None,
                        help="Output video (default: {stem}-subtitled.mp4 next to the input).")
    _add_style_arguments(render)
    render.set_defaults(func=cmd_render)

    compile_cmd = subparsers.add_parser("compile", help="Print the FFmpeg filter graph for a cue list.")
    compile_cmd.add_argument("--cues", required=True, help="JSON cue list file.")
    compile_cmd.add_argument("--ass-out", default="subtitles.ass",
                             help="Where to write the track document when no animation is used "
                                  "(default: %(default)s).")
    _add_style_arguments(compile_cmd)
    compile_cmd.set_defaults(func=cmd_compile)

    transcribe = subparsers.add_parser("transcribe", help="Derive a cue list from a video's speech.")
    transcribe.add_argument("video", help="Input video file.")
    transcribe.add_argument("-o", "--output", default=None, help="Write the cue list here instead of stdout.")
    transcribe.set_defaults(func=cmd_transcribe)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=config.SERVER_HOST, help="Bind address (default: %(default)s).")
    serve.add_argument("--port", type=int, default=config.SERVER_PORT, help="Port (default: %(default)s).")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``subtitle-burner`` and ``python -m subtitle_burner``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    try:
        args.func(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
