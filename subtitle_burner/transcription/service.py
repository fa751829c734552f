"""Video → cue list transcription service.

WHY: Typing captions by hand is the slow part of captioning a video. This
service turns an uploaded video into a draft cue list the user can edit
before rendering.

HOW: Extract a small mono MP3 with FFmpeg (in a worker thread), send it
through the Soniox workflow, assemble the tokens into words, and group the
words into cues. The extracted audio is always deleted afterwards.

RULES:
- FFmpeg failures surface as MediaEngineError; Soniox failures as
  SonioxAPIError / TranscriptionError / TranscriptionTimeoutError
- A missing API key raises ValueError before any work is done
- The media duration is probed only for the plain-text fallback
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional

from subtitle_burner import config
from subtitle_burner.api.client import SonioxClient
from subtitle_burner.core.ir import Cue
from subtitle_burner.engine.ffmpeg import extract_audio, probe_duration
from subtitle_burner.transcription.assembler import transcript_from_response
from subtitle_burner.transcription.cue_builder import build_cues

logger = logging.getLogger(__name__)


async def transcribe_video(
    video_path: Path,
    audio_path: Path,
    client: Optional[SonioxClient] = None,
    language_hints: Optional[List[str]] = None,
    on_status: Optional[Callable[[str], None]] = None,
) -> List[Cue]:
    """Transcribe a video into cues.

    Args:
        video_path: The uploaded video.
        audio_path: Scratch location for the extracted audio (deleted after).
        client: A SonioxClient to use; a default one is built from config.
        language_hints: ISO 639-1 codes; defaults to the configured hints.
        on_status: Called with a progress line on every poll of the job.

    Returns:
        Cues in spoken order.
    """
    if client is None:
        client = SonioxClient()
    if language_hints is None:
        language_hints = config.TRANSCRIPTION_LANGUAGE_HINTS

    try:
        await asyncio.to_thread(extract_audio, video_path, audio_path)
        logger.info("Extracted audio from %s", Path(video_path).name)

        async with client:
            response = await client.transcribe_file(
                audio_path, language_hints=language_hints, on_status=on_status,
            )
    finally:
        Path(audio_path).unlink(missing_ok=True)

    transcript = transcript_from_response(response)
    # may call ffprobe
    return await asyncio.to_thread(build_cues, transcript, lambda: probe_duration(video_path))
