"""Async HTTP client for the Soniox non-realtime speech-to-text API.

WHY: Auto-captioning needs five HTTP calls against Soniox: upload the
extracted audio, create a job, poll it, fetch the tokens, and delete both
server-side resources. This module hides that workflow behind one class so
the transcription service never touches HTTP details.

HOW: SonioxClient wraps httpx.AsyncClient and is used as an async context
manager. Each API step is its own method; transcribe_file() runs them in
order and always attempts cleanup, even when a step fails.

RULES:
- Always use the async context manager (async with SonioxClient(...) as client:)
- Polling uses exponential backoff: 2s initial, 1.5x factor, 15s max, 60min timeout
- Non-2xx responses raise SonioxAPIError; a failed job raises TranscriptionError
- Cleanup is best-effort: failures are logged, never raised
- ``transport`` is passed to httpx (tests use httpx.MockTransport)
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from pathlib import Path

import httpx

from subtitle_burner.api.models import TranscriptionStatus, TranscriptResponse
from subtitle_burner.config import SONIOX_BASE_URL, SONIOX_MODEL, load_api_key

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_POLL_INITIAL_INTERVAL_S = 2.0
_POLL_BACKOFF_FACTOR = 1.5
_POLL_MAX_INTERVAL_S = 15.0
_POLL_TIMEOUT_S = 60 * 60  # 60 minutes


class SonioxAPIError(Exception):
    """The Soniox API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status of the failed call.
        message: Response body text.
    """

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Soniox API error {status_code}: {message}")


class TranscriptionError(Exception):
    """A transcription job failed, or produced nothing usable."""


class TranscriptionTimeoutError(TimeoutError):
    """Polling exceeded the maximum wait."""


class SonioxClient:
    """Async client for the Soniox non-realtime transcription API.

    RULES:
    - api_key defaults to load_api_key() from .env (ValueError if missing)
    - base_url / model default to the config values
    - poll_interval overrides the initial backoff (tests use 0)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        poll_interval: float = _POLL_INITIAL_INTERVAL_S,
    ) -> None:
        self._api_key = api_key or load_api_key()
        self._base_url = (base_url or SONIOX_BASE_URL).rstrip("/")
        self._model = model or SONIOX_MODEL
        self._transport = transport
        self._poll_interval = poll_interval
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> SonioxClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=httpx.Timeout(300.0, connect=30.0),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError(
                "SonioxClient must be used as an async context manager: "
                "async with SonioxClient() as client: ..."
            )
        return self._client

    # ------------------------------------------------------------------
    # Workflow steps
    # ------------------------------------------------------------------

    async def upload_file(self, file_path: Path) -> str:
        """Upload an audio file and return its Soniox file_id."""
        client = self._ensure_client()
        file_path = Path(file_path)
        with open(file_path, "rb") as f:
            resp = await client.post("/files", files={"file": (file_path.name, f)})

        if resp.status_code not in (200, 201):
            raise SonioxAPIError(resp.status_code, resp.text)
        return resp.json()["id"]

    async def create_transcription(self, file_id: str, language_hints: list[str] | None = None) -> str:
        """Create a transcription job for an uploaded file and return its ID."""
        client = self._ensure_client()
        body: dict = {"model": self._model, "file_id": file_id}
        if language_hints:
            body["language_hints"] = language_hints

        resp = await client.post("/transcriptions", json=body)
        if resp.status_code not in (200, 201):
            raise SonioxAPIError(resp.status_code, resp.text)
        return resp.json()["id"]

    async def poll_until_complete(
        self,
        transcription_id: str,
        on_status: Callable[[str], None] | None = None,
    ) -> TranscriptionStatus:
        """Poll a job until it completes.

        Raises:
            TranscriptionError: The job reported status "error".
            TranscriptionTimeoutError: No terminal status within 60 minutes.
        """
        client = self._ensure_client()
        interval = self._poll_interval
        start_time = time.monotonic()

        while True:
            elapsed = time.monotonic() - start_time
            if elapsed > _POLL_TIMEOUT_S:
                raise TranscriptionTimeoutError(
                    f"Transcription {transcription_id} timed out after "
                    f"{elapsed:.0f}s (limit: {_POLL_TIMEOUT_S}s)"
                )

            resp = await client.get(f"/transcriptions/{transcription_id}")
            if resp.status_code != 200:
                raise SonioxAPIError(resp.status_code, resp.text)

            status = TranscriptionStatus.from_dict(resp.json())
            if on_status:
                on_status(f"Transcription {status.status} ({int(elapsed)}s)")

            if status.status == "completed":
                return status
            if status.status == "error":
                raise TranscriptionError(f"Transcription failed: {status.error_message}")

            await asyncio.sleep(interval)
            interval = min(max(interval, 0.0) * _POLL_BACKOFF_FACTOR, _POLL_MAX_INTERVAL_S)

    async def fetch_transcript(self, transcription_id: str) -> TranscriptResponse:
        """Fetch the finished transcript (tokens plus plain text)."""
        client = self._ensure_client()
        resp = await client.get(f"/transcriptions/{transcription_id}/transcript")
        if resp.status_code != 200:
            raise SonioxAPIError(resp.status_code, resp.text)
        return TranscriptResponse.from_dict(resp.json())

    async def cleanup(self, transcription_id: str | None, file_id: str | None) -> None:
        """Delete the job and the uploaded file from Soniox (best-effort)."""
        client = self._ensure_client()
        targets = []
        if transcription_id:
            targets.append(f"/transcriptions/{transcription_id}")
        if file_id:
            targets.append(f"/files/{file_id}")

        for target in targets:
            try:
                await client.delete(target)
            except httpx.HTTPError as exc:
                logger.warning("Soniox cleanup of %s failed: %s", target, exc)

    # ------------------------------------------------------------------
    # Full workflow
    # ------------------------------------------------------------------

    async def transcribe_file(
        self,
        file_path: Path,
        language_hints: list[str] | None = None,
        on_status: Callable[[str], None] | None = None,
    ) -> TranscriptResponse:
        """Upload, transcribe, fetch and clean up in one call."""
        file_id = None
        transcription_id = None
        try:
            file_id = await self.upload_file(file_path)
            transcription_id = await self.create_transcription(file_id, language_hints)
            logger.info("Soniox transcription %s created", transcription_id)
            await self.poll_until_complete(transcription_id, on_status=on_status)
            return await self.fetch_transcript(transcription_id)
        finally:
            await self.cleanup(transcription_id, file_id)
