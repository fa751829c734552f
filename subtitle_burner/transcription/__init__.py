"""Transcription path: audio → Soniox tokens → words → cues."""

from subtitle_burner.transcription.cue_builder import build_cues
from subtitle_burner.transcription.service import transcribe_video

__all__ = ["build_cues", "transcribe_video"]
