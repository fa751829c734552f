"""Soniox API client package: async HTTP interface to the transcription service.

RULES:
- All Soniox HTTP calls go through SonioxClient (no direct httpx usage elsewhere)
- Authentication is a Bearer token loaded from config
"""

from subtitle_burner.api.client import (
    SonioxAPIError,
    SonioxClient,
    TranscriptionError,
    TranscriptionTimeoutError,
)
from subtitle_burner.api.models import SonioxToken, TranscriptionStatus, TranscriptResponse

__all__ = [
    "SonioxAPIError",
    "SonioxClient",
    "SonioxToken",
    "TranscriptionError",
    "TranscriptionStatus",
    "TranscriptionTimeoutError",
    "TranscriptResponse",
]
