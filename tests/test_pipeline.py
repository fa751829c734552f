"""Tests for render orchestration (FFmpeg mocked at the pipeline seam)."""

from unittest.mock import patch

import pytest

from subtitle_burner.core.ir import StyleOptions
from subtitle_burner.engine.ffmpeg import MediaEngineError
from subtitle_burner.pipeline import compile_filter_graph, render_with_cues


class TestRenderWithCues:

    @patch("subtitle_burner.pipeline.render_video")
    def test_static_render_writes_and_removes_track(self, mock_render, tmp_path, hello_cue):
        subtitle_path = tmp_path / "subs.ass"
        seen = {}

        def fake_render(video, graph, output):
            seen["graph"] = graph
            seen["document"] = subtitle_path.read_text(encoding="utf-8")

        mock_render.side_effect = fake_render
        result = render_with_cues(tmp_path / "in.mp4", [hello_cue], None, tmp_path / "out.mp4", subtitle_path,
                                  fonts_dir=None)

        assert seen["graph"].startswith("subtitles=filename='")
        assert "Hello World" in seen["document"]
        assert not subtitle_path.exists()
        assert result.animation == "none"
        assert result.command_count == 0
        assert result.output_path == tmp_path / "out.mp4"

    @patch("subtitle_burner.pipeline.render_video")
    def test_animated_render_skips_track(self, mock_render, tmp_path, four_word_cue):
        subtitle_path = tmp_path / "subs.ass"
        result = render_with_cues(tmp_path / "in.mp4", [four_word_cue], StyleOptions(animation="word-color"),
                                  tmp_path / "out.mp4", subtitle_path)

        graph = mock_render.call_args[0][1]
        assert graph.count("drawtext=") == 12
        assert not subtitle_path.exists()
        assert result.command_count == 12
        assert result.animation == "word-color"

    @patch("subtitle_burner.pipeline.render_video")
    def test_engine_failure_removes_partial_output(self, mock_render, tmp_path, hello_cue):
        output_path = tmp_path / "out.mp4"
        subtitle_path = tmp_path / "subs.ass"

        def fail(video, graph, output):
            output_path.write_bytes(b"partial")
            raise MediaEngineError("FFmpeg failed with exit code 1", details="boom")

        mock_render.side_effect = fail
        with pytest.raises(MediaEngineError):
            render_with_cues(tmp_path / "in.mp4", [hello_cue], None, output_path, subtitle_path)

        assert not output_path.exists()
        assert not subtitle_path.exists()


class TestCompileFilterGraph:

    def test_static_writes_document(self, tmp_path, hello_cue):
        subtitle_path = tmp_path / "subtitles.ass"
        graph = compile_filter_graph([hello_cue], None, subtitle_path=subtitle_path)
        assert subtitle_path.read_text(encoding="utf-8").startswith("[Script Info]")
        assert "subtitles.ass" in graph

    def test_static_without_path(self, hello_cue):
        with pytest.raises(ValueError):
            compile_filter_graph([hello_cue])

    def test_animated_needs_no_path(self, hello_cue):
        graph = compile_filter_graph([hello_cue], StyleOptions(animation="bounce"))
        assert graph.startswith("drawtext=")
