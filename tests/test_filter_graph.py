"""Tests for render path selection and filter graph assembly."""

import pytest

from subtitle_burner.compilers.filter_graph import NULL_FILTER, assemble_filter_graph, compile_overlay
from subtitle_burner.core.ir import Cue, StyleOptions


class TestCompileOverlay:

    def test_no_animation_takes_static_path(self, hello_cue):
        overlay = compile_overlay([hello_cue])
        assert not overlay.is_animated
        assert overlay.commands == []
        assert "Hello World" in overlay.ass_document

    def test_unknown_animation_falls_back_to_static(self, hello_cue):
        overlay = compile_overlay([hello_cue], StyleOptions(animation="spin"))
        assert not overlay.is_animated
        assert overlay.style.animation == "none"

    def test_animation_compiles_every_cue(self, hello_cue, four_word_cue):
        overlay = compile_overlay([hello_cue, four_word_cue], StyleOptions(animation="word-reveal"))
        assert overlay.is_animated
        assert overlay.ass_document is None
        assert [c.text for c in overlay.commands] == ["Hello", "World", "a", "b", "c", "d"]

    def test_wordless_cues_yield_no_commands(self):
        overlay = compile_overlay([Cue(" ", 0, 1)], StyleOptions(animation="fade-in"))
        assert overlay.commands == []


class TestAssembleFilterGraph:

    def test_static_graph(self, hello_cue):
        graph = assemble_filter_graph(compile_overlay([hello_cue]), "/tmp/subs-1.ass")
        assert graph == "subtitles=filename='/tmp/subs-1.ass'"

    def test_static_graph_escapes_windows_path_and_fonts_dir(self, hello_cue):
        graph = assemble_filter_graph(compile_overlay([hello_cue]), "C:\\work\\subs.ass", fonts_dir="/fonts")
        assert graph == "subtitles=filename='C\\:/work/subs.ass':fontsdir='/fonts'"

    def test_static_graph_needs_path(self, hello_cue):
        with pytest.raises(ValueError):
            assemble_filter_graph(compile_overlay([hello_cue]))

    def test_animated_graph_joins_commands(self, hello_cue):
        graph = assemble_filter_graph(compile_overlay([hello_cue], StyleOptions(animation="fire-text")))
        assert graph.count("drawtext=") == 6
        assert graph.startswith("drawtext=text='Hello World'")
        assert ",drawtext=" in graph

    def test_empty_animated_graph_is_null(self):
        overlay = compile_overlay([], StyleOptions(animation="glitch"))
        assert assemble_filter_graph(overlay) == NULL_FILTER

    def test_text_delimiters_cannot_break_chain(self):
        overlay = compile_overlay([Cue("a,b:c", 0, 1)], StyleOptions(animation="fade-in"))
        graph = assemble_filter_graph(overlay)
        assert "text='a,b\\:c'" in graph


class TestFilterGraphSyntax:
    """Compiled graphs are read back with FFmpeg's quoting rules.

    Cue text is user input, so each cue must come back out of the parser
    as exactly one drawtext filter carrying exactly the original text.
    """

    AWKWARD = ["don't stop", "50% off: [now], ok; \\o/"]

    def test_quotes_and_percent_survive_every_level(self, filter_chain, expand_text):
        cues = [Cue(text, i * 2, i * 2 + 1.5) for i, text in enumerate(self.AWKWARD)]
        overlay = compile_overlay(cues, StyleOptions(animation="fade-in", font_family="Odd:Font's"))
        filters = filter_chain(assemble_filter_graph(overlay))

        assert [name for name, _ in filters] == ["drawtext", "drawtext"]
        assert [expand_text(opts["text"]) for _, opts in filters] == self.AWKWARD
        assert {opts["font"] for _, opts in filters} == {"Odd:Font's"}
        assert [opts["enable"] for _, opts in filters] == ["between(t,0,1.5)", "between(t,2,3.5)"]

    @pytest.mark.parametrize("animation", ["word-highlight", "typewriter", "glitch"])
    def test_per_word_chains_keep_one_filter_per_command(self, filter_chain, expand_text, animation):
        overlay = compile_overlay([Cue("it's 100% 'quoted', ok", 0, 3)], StyleOptions(animation=animation))
        filters = filter_chain(assemble_filter_graph(overlay))

        assert len(filters) == len(overlay.commands)
        assert all(name == "drawtext" for name, _ in filters)
        assert [expand_text(opts["text"]) for _, opts in filters] == [c.text for c in overlay.commands]

    def test_static_path_round_trips(self, filter_chain, hello_cue):
        graph = assemble_filter_graph(compile_overlay([hello_cue]), "/tmp/it's a:b,[c].ass", fonts_dir="D:\\fonts")
        assert filter_chain(graph) == [
            ("subtitles", {"filename": "/tmp/it's a:b,[c].ass", "fontsdir": "D:/fonts"}),
        ]
