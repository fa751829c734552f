"""Soniox API response dataclasses.

WHY: The Soniox async API answers with flat JSON objects for job status
and for the finished transcript. Typed records keep the client and the
assembler honest about field names and units.

HOW: Each dataclass maps one Soniox JSON object and has a from_dict()
factory for raw responses. Fields that only appear with optional features
are typed as Optional.

RULES:
- Token timings are integer milliseconds; None only on translation tokens
- The assembler, not the client, drops translation tokens
- TranscriptResponse.text is the service's own plain-text rendering and is
  what the plain-text fallback uses
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SonioxToken:
    """One sub-word token from a finished transcript.

    RULES:
    - text keeps its leading space; a leading space starts a new word
    - start_ms/end_ms are None only for translation tokens
    """

    text: str
    start_ms: int | None
    end_ms: int | None
    confidence: float = 1.0
    translation_status: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SonioxToken:
        return cls(
            text=data["text"],
            start_ms=data.get("start_ms"),
            end_ms=data.get("end_ms"),
            confidence=data.get("confidence", 1.0),
            translation_status=data.get("translation_status"),
        )

    @property
    def is_timed(self) -> bool:
        return self.start_ms is not None and self.end_ms is not None


@dataclass
class TranscriptionStatus:
    """Polling response from GET /transcriptions/{id}.

    status is one of "queued", "processing", "completed", "error".
    """

    id: str
    status: str
    error_message: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptionStatus:
        return cls(
            id=data["id"],
            status=data["status"],
            error_message=data.get("error_message"),
        )


@dataclass
class TranscriptResponse:
    """Finished transcript from GET /transcriptions/{id}/transcript."""

    id: str
    text: str = ""
    tokens: list[SonioxToken] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> TranscriptResponse:
        return cls(
            id=data["id"],
            text=data.get("text") or "",
            tokens=[SonioxToken.from_dict(t) for t in data.get("tokens") or []],
        )
