"""FastAPI application: burn-in and transcription endpoints.

WHY: The captioning front-end posts a video plus a cue list and style
choices, and downloads the rendered result. It can also ask for a draft
cue list generated from the video's audio. Both are one-shot requests, so
the API is two POST endpoints plus static downloads.

HOW: Each request gets its own ScratchFiles set. The upload is written to
the upload directory, blocking FFmpeg work runs in a worker thread via
asyncio.to_thread, and failures are raised as RequestFailed, which one
exception handler turns into the ``{"success": false, ...}`` body.

RULES:
- 400: missing or unsupported video, missing or invalid cue list
- 500: FFmpeg failed ("Video processing failed"), partial output removed
- 502: the transcription service failed ("Transcription failed")
- Unknown style values never fail a request; they resolve to defaults
- Scratch files are always removed; the output survives only on success
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import httpx
from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from subtitle_burner import __version__, config
from subtitle_burner.api.client import SonioxAPIError, TranscriptionError, TranscriptionTimeoutError
from subtitle_burner.compilers import ANIMATIONS
from subtitle_burner.core.cues import CueValidationError, cues_to_payload, parse_cue_list
from subtitle_burner.core.ir import StyleOptions
from subtitle_burner.engine.ffmpeg import MediaEngineError, check_ffmpeg
from subtitle_burner.pipeline import render_with_cues
from subtitle_burner.server.models import ErrorResponse, HealthResponse, RenderResponse, TranscribeResponse
from subtitle_burner.server.scratch import ScratchFiles
from subtitle_burner.styles.tables import BACKGROUNDS, COLORS, POSITIONS, PRESETS
from subtitle_burner.transcription.service import transcribe_video

logger = logging.getLogger(__name__)

TRANSCRIPTION_FAILURES = (
    SonioxAPIError,
    TranscriptionError,
    TranscriptionTimeoutError,
    httpx.HTTPError,
    ValueError,
)


class RequestFailed(Exception):
    """A request failed; rendered as an ErrorResponse with ``status_code``."""

    def __init__(self, status_code: int, error: str, details: Any = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Subtitle Burner API",
    description=(
        "Burn styled, optionally animated captions into an uploaded video, "
        "or derive a draft caption list from the video's speech."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

config.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/outputs", StaticFiles(directory=str(config.OUTPUT_DIR)), name="outputs")


@app.exception_handler(RequestFailed)
async def request_failed_handler(request: Request, exc: RequestFailed) -> JSONResponse:
    body = ErrorResponse(error=exc.error, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_supported_video(upload: Optional[UploadFile]) -> bool:
    """Accept the upload if either its extension or its MIME type is a video we handle."""
    if upload is None or not upload.filename:
        return False
    ext = Path(upload.filename).suffix.lower()
    return ext in config.SUPPORTED_VIDEO_FORMATS or upload.content_type in config.SUPPORTED_VIDEO_MIME_TYPES


async def _save_upload(upload: UploadFile, scratch: ScratchFiles) -> Path:
    ext = Path(upload.filename or "").suffix.lower() or ".mp4"
    path = scratch.path(config.UPLOAD_DIR, suffix=ext)
    content = await upload.read()
    path.write_bytes(content)
    return path


def _optional_int(value: Optional[str]) -> Optional[int]:
    """Form fields arrive as strings; blank, non-numeric or non-finite means "not given"."""
    if value is None or not str(value).strip():
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def build_style_options(
    style: Optional[str] = None,
    font: Optional[str] = None,
    font_size: Optional[str] = None,
    color: Optional[str] = None,
    position: Optional[str] = None,
    bg_color: Optional[str] = None,
    animation: Optional[str] = None,
    effect_color: Optional[str] = None,
    words_per_line: Optional[str] = None,
    outline_color: Optional[str] = None,
    outline_thickness: Optional[str] = None,
    shadow_color: Optional[str] = None,
    shadow_depth: Optional[str] = None,
) -> StyleOptions:
    """Map raw form values onto StyleOptions, keeping defaults for blanks."""
    defaults = StyleOptions()
    size = _optional_int(font_size)
    return StyleOptions(
        preset=style or defaults.preset,
        font_family=font or defaults.font_family,
        font_size=size if size is not None else defaults.font_size,
        color=color or defaults.color,
        position=position or defaults.position,
        background=bg_color or defaults.background,
        animation=animation or defaults.animation,
        effect_color=effect_color or defaults.effect_color,
        words_per_line=_optional_int(words_per_line) or 0,
        outline_color=outline_color or defaults.outline_color,
        outline_thickness=_optional_int(outline_thickness),
        shadow_color=shadow_color or defaults.shadow_color,
        shadow_depth=_optional_int(shadow_depth),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.post(
    "/api/add-subtitles",
    response_model=RenderResponse,
    tags=["render"],
    summary="Burn captions into a video",
    responses={
        400: {"model": ErrorResponse, "description": "Missing video or invalid cue list"},
        500: {"model": ErrorResponse, "description": "FFmpeg failed"},
    },
)
async def add_subtitles(
    video: Annotated[Optional[UploadFile], File(description="Video file (mp4, avi, mov, mkv).")] = None,
    subtitles: Annotated[Optional[str], Form(description="JSON cue list: [{text, startTime, endTime, wordTimings?}].")] = None,
    style: Annotated[Optional[str], Form(description="Preset: classic, modern, minimal, bold, neon, boxed.")] = None,
    font: Annotated[Optional[str], Form(description="Font family name.")] = None,
    fontSize: Annotated[Optional[str], Form(description="Font size in px (8-200).")] = None,
    color: Annotated[Optional[str], Form(description="Text color name.")] = None,
    position: Annotated[Optional[str], Form(description="e.g. bottom-center, top-left.")] = None,
    bgColor: Annotated[Optional[str], Form(description="Background box color, or 'none'.")] = None,
    animation: Annotated[Optional[str], Form(description="Animation name, or 'none' for a static track.")] = None,
    effectColor: Annotated[Optional[str], Form(description="Effect color name or &HBBGGRR& token.")] = None,
    wordsPerLine: Annotated[Optional[str], Form(description="Words per line; 0 disables wrapping.")] = None,
    outlineColor: Annotated[Optional[str], Form(description="Outline color name.")] = None,
    outlineThickness: Annotated[Optional[str], Form(description="Outline width in px.")] = None,
    shadowColor: Annotated[Optional[str], Form(description="Shadow color name.")] = None,
    shadowDepth: Annotated[Optional[str], Form(description="Shadow offset in px.")] = None,
) -> RenderResponse:
    if not _is_supported_video(video):
        raise RequestFailed(400, "No video file uploaded")

    try:
        cues = parse_cue_list(subtitles)
    except CueValidationError as exc:
        raise RequestFailed(400, str(exc))

    options = build_style_options(
        style, font, fontSize, color, position, bgColor, animation, effectColor,
        wordsPerLine, outlineColor, outlineThickness, shadowColor, shadowDepth,
    )

    scratch = ScratchFiles()
    output_path = scratch.path(config.OUTPUT_DIR, prefix="output-", suffix=".mp4")
    succeeded = False
    try:
        video_path = await _save_upload(video, scratch)
        subtitle_path = scratch.path(config.UPLOAD_DIR, prefix="subtitles-", suffix=".ass")
        await asyncio.to_thread(render_with_cues, video_path, cues, options, output_path, subtitle_path)
        succeeded = True
    except MediaEngineError as exc:
        raise RequestFailed(500, "Video processing failed", exc.details or str(exc))
    except Exception as exc:
        logger.exception("Render pipeline failed")
        raise RequestFailed(500, "Server error", str(exc))
    finally:
        scratch.cleanup(keep=output_path if succeeded else None)

    return RenderResponse(outputUrl="/outputs/{}".format(output_path.name))


@app.post(
    "/api/transcribe",
    response_model=TranscribeResponse,
    tags=["transcription"],
    summary="Derive a cue list from a video's speech",
    responses={
        400: {"model": ErrorResponse, "description": "Missing or unsupported video"},
        500: {"model": ErrorResponse, "description": "Audio extraction failed"},
        502: {"model": ErrorResponse, "description": "Transcription service failed"},
    },
)
async def transcribe(
    video: Annotated[Optional[UploadFile], File(description="Video file (mp4, avi, mov, mkv).")] = None,
) -> TranscribeResponse:
    if not _is_supported_video(video):
        raise RequestFailed(400, "No video file uploaded")

    scratch = ScratchFiles()
    try:
        video_path = await _save_upload(video, scratch)
        audio_path = scratch.path(config.UPLOAD_DIR, prefix="audio-", suffix=".mp3")
        cues = await transcribe_video(video_path, audio_path)
    except MediaEngineError as exc:
        raise RequestFailed(500, "Audio extraction failed", exc.details or str(exc))
    except TRANSCRIPTION_FAILURES as exc:
        logger.error("Transcription failed: %s", exc)
        raise RequestFailed(502, "Transcription failed", str(exc))
    except Exception as exc:
        logger.exception("Transcription pipeline failed")
        raise RequestFailed(500, "Server error", str(exc))
    finally:
        scratch.cleanup()

    return TranscribeResponse(subtitles=cues_to_payload(cues))


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=__version__,
        ffmpeg=check_ffmpeg(),
        options={
            "style": sorted(PRESETS),
            "color": sorted(COLORS),
            "position": sorted(POSITIONS),
            "bgColor": sorted(BACKGROUNDS),
            "animation": ["none"] + sorted(ANIMATIONS),
        },
    )


def run_api() -> None:
    """Entry point for the subtitle-burner-api console script."""
    import uvicorn

    from subtitle_burner.cli import configure_logging

    configure_logging()
    uvicorn.run(app, host=config.SERVER_HOST, port=config.SERVER_PORT)
