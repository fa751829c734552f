"""Cue list parsing and validation for the JSON wire format.

WHY: Cues reach the service as a JSON-encoded form field (manual entry) or
a JSON file (CLI). A malformed list must be rejected before any upload is
processed or FFmpeg is started, with a message that says what is wrong.

HOW: Two passes. jsonschema validates the payload shape (array of objects
with text/startTime/endTime and optional wordTimings). A semantic pass then
checks what a schema can not express: finite times, endTime > startTime and
non-blank text. Valid entries become Cue objects.

RULES:
- Wire format is camelCase: text, startTime, endTime, wordTimings[{word,start,end}]
- Any failure raises CueValidationError (a ValueError)
- Cue text is trimmed; order of the input list is preserved
- cues_to_payload() is the inverse used by the transcription endpoint
"""

from __future__ import annotations

import json
import math
from typing import Any

import jsonschema

from subtitle_burner.core.ir import Cue, WordTiming

CUE_LIST_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["text", "startTime", "endTime"],
        "properties": {
            "text": {"type": "string"},
            "startTime": {"type": "number", "minimum": 0},
            "endTime": {"type": "number", "minimum": 0},
            "wordTimings": {
                "type": ["array", "null"],
                "items": {
                    "type": "object",
                    "required": ["word", "start", "end"],
                    "properties": {
                        "word": {"type": "string"},
                        "start": {"type": "number"},
                        "end": {"type": "number"},
                    },
                },
            },
        },
    },
}


class CueValidationError(ValueError):
    """Raised when a cue list is missing, unparseable, or inconsistent."""


def parse_cue_list(raw: str | None) -> list[Cue]:
    """Parse and validate a JSON-encoded cue list.

    Args:
        raw: The JSON text, e.g. the ``subtitles`` form field.

    Returns:
        Cue objects in input order.

    Raises:
        CueValidationError: On missing input, invalid JSON, schema
            violations, non-positive durations or blank text.
    """
    if raw is None or not raw.strip():
        raise CueValidationError("No subtitles provided")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CueValidationError("Invalid subtitle format: {}".format(exc.msg)) from exc

    return cues_from_payload(data)


def cues_from_payload(data: Any) -> list[Cue]:
    """Validate already-decoded JSON data and build Cue objects."""
    try:
        jsonschema.validate(instance=data, schema=CUE_LIST_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise CueValidationError(
            "Invalid subtitle format at {}: {}".format(location, exc.message)
        ) from exc

    cues: list[Cue] = []
    for index, item in enumerate(data):
        text = item["text"].strip()
        start = float(item["startTime"])
        end = float(item["endTime"])

        if not text:
            raise CueValidationError("Subtitle {} has no text".format(index + 1))
        if not (math.isfinite(start) and math.isfinite(end)):
            raise CueValidationError("Subtitle {} has a non-finite time".format(index + 1))
        if end <= start:
            raise CueValidationError(
                "Subtitle {} ends before it starts ({} <= {})".format(index + 1, end, start)
            )

        timings = None
        if item.get("wordTimings"):
            timings = [
                WordTiming(word=w["word"], start=float(w["start"]), end=float(w["end"]))
                for w in item["wordTimings"]
            ]
            if not all(math.isfinite(w.start) and math.isfinite(w.end) for w in timings):
                raise CueValidationError(
                    "Subtitle {} has a non-finite word timing".format(index + 1)
                )

        cues.append(Cue(text=text, start_time=start, end_time=end, word_timings=timings))

    return cues


def cues_to_payload(cues: list[Cue]) -> list[dict[str, Any]]:
    """Serialize cues back to the camelCase wire format."""
    payload = []
    for cue in cues:
        item: dict[str, Any] = {
            "text": cue.text,
            "startTime": round(cue.start_time, 3),
            "endTime": round(cue.end_time, 3),
        }
        if cue.word_timings:
            item["wordTimings"] = [
                {"word": w.word, "start": round(w.start, 3), "end": round(w.end, 3)}
                for w in cue.word_timings
            ]
        payload.append(item)
    return payload
