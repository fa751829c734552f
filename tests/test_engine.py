"""Tests for the FFmpeg subprocess wrapper (subprocess mocked)."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from subtitle_burner.engine.ffmpeg import (
    MediaEngineError,
    check_ffmpeg,
    extract_audio,
    probe_duration,
    render_video,
)


def completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestRenderVideo:

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run")
    def test_command_shape(self, mock_run):
        mock_run.return_value = completed()
        result = render_video("in.mp4", "null", "out.mp4")
        assert result == Path("out.mp4")
        cmd = mock_run.call_args[0][0]
        assert cmd == ["ffmpeg", "-y", "-i", "in.mp4", "-vf", "null", "-c:a", "copy", "out.mp4"]

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run")
    def test_non_zero_exit_carries_stderr_tail(self, mock_run):
        stderr = "\n".join("line {}".format(i) for i in range(30))
        mock_run.return_value = completed(returncode=1, stderr=stderr)
        with pytest.raises(MediaEngineError) as exc_info:
            render_video("in.mp4", "null", "out.mp4")
        details = exc_info.value.details.splitlines()
        assert len(details) == 20
        assert details[-1] == "line 29"

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run", side_effect=FileNotFoundError("ffmpeg"))
    def test_missing_binary(self, _mock_run):
        with pytest.raises(MediaEngineError, match="not found"):
            render_video("in.mp4", "null", "out.mp4")


class TestExtractAudio:

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run")
    def test_speech_settings(self, mock_run):
        mock_run.return_value = completed()
        extract_audio("in.mp4", "audio.mp3")
        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("-ac") + 1] == "1"
        assert cmd[cmd.index("-ar") + 1] == "16000"
        assert cmd[cmd.index("-b:a") + 1] == "32k"
        assert "-vn" in cmd
        assert cmd[-1] == "audio.mp3"


class TestProbeDuration:

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run")
    def test_parses_seconds(self, mock_run):
        mock_run.return_value = completed(stdout="12.345000\n")
        assert probe_duration("in.mp4") == pytest.approx(12.345)
        assert mock_run.call_args[0][0][0] == "ffprobe"

    @patch("subtitle_burner.engine.ffmpeg.subprocess.run")
    def test_unparseable_output(self, mock_run):
        mock_run.return_value = completed(stdout="N/A\n")
        with pytest.raises(MediaEngineError, match="no duration"):
            probe_duration("in.mp4")


class TestCheckFfmpeg:

    @patch("subtitle_burner.engine.ffmpeg.shutil.which", return_value="/usr/bin/x")
    def test_found(self, _which):
        assert check_ffmpeg() is True

    @patch("subtitle_burner.engine.ffmpeg.shutil.which", side_effect=lambda name: None if name == "ffprobe" else "/x")
    def test_ffprobe_missing(self, _which):
        assert check_ffmpeg() is False
