"""Configuration constants, directory locations, and .env loading.

WHY: Binary paths, scratch directories, the Soniox endpoint and the server
address differ between a laptop and a deployment. Keeping them in one module
as plain constants makes them easy to find and override.

HOW: python-dotenv loads the .env file on import. Every value has a default
and can be overridden through an environment variable of the same name.
load_api_key() gives a clear error when the Soniox key is missing.

RULES:
- Never hardcode the API key
- Directories are Path objects; they are created lazily by their users
- SUPPORTED_VIDEO_FORMATS / SUPPORTED_VIDEO_MIME_TYPES mirror the upload filter
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Media engine
# ---------------------------------------------------------------------------

FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")
FFPROBE_BINARY = os.getenv("FFPROBE_BINARY", "ffprobe")

FONTS_DIR = os.getenv("FONTS_DIR") or None
"""Optional directory handed to the subtitles filter as ``fontsdir``."""

# ---------------------------------------------------------------------------
# Scratch and output directories
# ---------------------------------------------------------------------------

UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads"))
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "outputs"))

SUPPORTED_VIDEO_FORMATS: set[str] = {".mp4", ".avi", ".mov", ".mkv"}
"""Accepted video file extensions (lowercase, with dot)."""

SUPPORTED_VIDEO_MIME_TYPES: set[str] = {
    "video/mp4",
    "video/avi",
    "video/quicktime",
    "video/x-msvideo",
    "video/x-matroska",
}

# ---------------------------------------------------------------------------
# Transcription (Soniox)
# ---------------------------------------------------------------------------

SONIOX_BASE_URL = os.getenv("SONIOX_BASE_URL", "https://api.soniox.com/v1")
SONIOX_MODEL = os.getenv("SONIOX_MODEL", "stt-async-v4")
TRANSCRIPTION_LANGUAGE_HINTS: list[str] = [
    code.strip()
    for code in os.getenv("TRANSCRIPTION_LANGUAGE_HINTS", "en").split(",")
    if code.strip()
]

# ---------------------------------------------------------------------------
# HTTP server and logging
# ---------------------------------------------------------------------------

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.getenv("SERVER_PORT", "3001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def load_api_key() -> str:
    """Load the Soniox API key from the environment.

    RULES:
    - Raises ValueError if the key is missing or empty
    - Never returns a placeholder value
    """
    key = os.getenv("SONIOX_API_KEY", "").strip()
    if not key:
        raise ValueError(
            "Soniox API key not configured. "
            "Add SONIOX_API_KEY to the .env file to enable transcription."
        )
    return key
