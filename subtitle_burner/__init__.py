"""Subtitle Burner: burn styled, animated captions into video with FFmpeg.

WHY: Editors want captions that are part of the picture (social clips,
kiosk loops, platforms without sidecar subtitle support). FFmpeg can draw
them, but its filter grammar is hostile to hand-editing. This package turns
a handful of human-friendly style options into a valid filter graph.

HOW: Four-stage pipeline. Resolve style options into format-specific
parameters, compile cues into an ASS document or a list of drawtext
commands, assemble the filter graph, hand it to FFmpeg. An optional
transcription path (Soniox) produces the cues from the video's audio.

RULES:
- Compilation is pure: same cues + options → byte-identical output
- Unknown option values degrade to documented defaults, never raise
- FFmpeg and Soniox are black boxes behind engine/ and api/
"""

__version__ = "0.1.0"
