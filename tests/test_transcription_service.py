"""Tests for the video → cues transcription service (FFmpeg and Soniox mocked)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from subtitle_burner.api.client import TranscriptionError
from subtitle_burner.api.models import TranscriptResponse
from subtitle_burner.engine.ffmpeg import MediaEngineError
from subtitle_burner.transcription.service import transcribe_video


def fake_client(response):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.transcribe_file = AsyncMock(return_value=response)
    return client


def touch_audio(video_path, audio_path):
    audio_path.write_bytes(b"ID3")


class TestTranscribeVideo:

    @patch("subtitle_burner.transcription.service.extract_audio", side_effect=touch_audio)
    def test_returns_cues_and_removes_audio(self, _extract, tmp_path, sample_transcript_response):
        audio = tmp_path / "audio.mp3"
        client = fake_client(TranscriptResponse.from_dict(sample_transcript_response))

        cues = asyncio.run(transcribe_video(tmp_path / "in.mp4", audio, client=client, language_hints=["sv"]))

        assert [c.text for c in cues] == ["How are you?", "I am fantastic, thank you."]
        assert not audio.exists()
        assert client.transcribe_file.call_args.kwargs["language_hints"] == ["sv"]

    @patch("subtitle_burner.transcription.service.extract_audio", side_effect=touch_audio)
    def test_status_callback_reaches_client(self, _extract, tmp_path, sample_transcript_response):
        client = fake_client(TranscriptResponse.from_dict(sample_transcript_response))
        messages = []

        asyncio.run(transcribe_video(tmp_path / "in.mp4", tmp_path / "a.mp3", client=client,
                                     on_status=messages.append))

        assert client.transcribe_file.call_args.kwargs["on_status"] == messages.append

    @patch("subtitle_burner.transcription.service.probe_duration", return_value=8.0)
    @patch("subtitle_burner.transcription.service.extract_audio", side_effect=touch_audio)
    def test_untimed_transcript_uses_duration(self, _extract, mock_probe, tmp_path):
        client = fake_client(TranscriptResponse(id="tr-1", text="only text"))
        cues = asyncio.run(transcribe_video(tmp_path / "in.mp4", tmp_path / "a.mp3", client=client))
        assert len(cues) == 1
        assert cues[0].end_time == 8.0
        mock_probe.assert_called_once()

    @patch("subtitle_burner.transcription.service.extract_audio", side_effect=touch_audio)
    def test_empty_transcript_raises(self, _extract, tmp_path):
        client = fake_client(TranscriptResponse(id="tr-1"))
        with pytest.raises(TranscriptionError):
            asyncio.run(transcribe_video(tmp_path / "in.mp4", tmp_path / "a.mp3", client=client))

    @patch("subtitle_burner.transcription.service.extract_audio",
           side_effect=MediaEngineError("FFmpeg failed with exit code 1"))
    def test_extraction_failure_skips_soniox(self, _extract, tmp_path):
        client = fake_client(TranscriptResponse(id="tr-1"))
        with pytest.raises(MediaEngineError):
            asyncio.run(transcribe_video(tmp_path / "in.mp4", tmp_path / "a.mp3", client=client))
        client.transcribe_file.assert_not_called()

    def test_missing_key_fails_before_extraction(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SONIOX_API_KEY", raising=False)
        with patch("subtitle_burner.transcription.service.extract_audio") as mock_extract:
            with pytest.raises(ValueError):
                asyncio.run(transcribe_video(tmp_path / "in.mp4", tmp_path / "a.mp3"))
        mock_extract.assert_not_called()
