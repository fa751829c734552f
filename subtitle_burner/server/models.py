"""Pydantic response models for the HTTP API.

WHY: The browser form that drives this service expects a small, fixed set
of JSON shapes. Typed response models pin those shapes down and document
them in the generated OpenAPI schema.

HOW: One model per response kind. Field names keep the camelCase the
front-end reads (``outputUrl``); every field has a description.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Every body carries ``success`` so the client can branch on one field
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RenderResponse(BaseModel):
    """Successful render: where to download the captioned video."""

    success: bool = Field(default=True, description="Always true for this response.")
    outputUrl: str = Field(description="Path of the rendered video, e.g. '/outputs/output-1718000000000-3fa9c2.mp4'.")


class CueWordTiming(BaseModel):
    word: str = Field(description="The word as displayed.")
    start: float = Field(description="Word start in seconds.")
    end: float = Field(description="Word end in seconds.")


class CuePayload(BaseModel):
    """One cue in the wire format shared with /api/add-subtitles."""

    text: str = Field(description="Cue text.")
    startTime: float = Field(description="Cue start in seconds.")
    endTime: float = Field(description="Cue end in seconds.")
    wordTimings: Optional[List[CueWordTiming]] = Field(
        default=None,
        description="Per-word timings from the transcription service, when available.",
    )


class TranscribeResponse(BaseModel):
    """Successful transcription: a cue list ready for editing and rendering."""

    success: bool = Field(default=True, description="Always true for this response.")
    subtitles: List[CuePayload] = Field(description="Derived cues in spoken order.")


class ErrorResponse(BaseModel):
    """Any failed request."""

    success: bool = Field(default=False, description="Always false for this response.")
    error: str = Field(description="Short error summary, e.g. 'Video processing failed'.")
    details: Optional[Any] = Field(
        default=None,
        description="Diagnostics: validation messages or the tail of FFmpeg's stderr.",
    )


class HealthResponse(BaseModel):
    status: str = Field(description="'ok' when the service is up.")
    version: str = Field(description="Package version.")
    ffmpeg: bool = Field(description="Whether FFmpeg and ffprobe were found on PATH.")
    options: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Accepted values for the enumerated style fields.",
    )
