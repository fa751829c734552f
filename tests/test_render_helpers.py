"""Tests for color conversion, layout math and filter escaping.

WHY: Every compiler leans on these helpers. A swapped byte order turns red
captions blue; a missed escape breaks the whole FFmpeg command.

RULES:
- Color tokens are checked in both directions against the palette
- Escapes are checked one parser level at a time
"""

import pytest

from subtitle_burner.render.colors import (
    alpha_to_opacity,
    ass_style_color,
    ass_to_hex,
    hex_to_rgb,
    is_ass_color,
    parse_ass_color,
    with_opacity,
)
from subtitle_burner.render.escape import (
    drawtext_text_option,
    escape_option_value,
    escape_text_expansion,
    filter_path_option,
    font_name_option,
    quote_graph_value,
)
from subtitle_burner.render.layout import (
    fmt_num,
    line_block_height,
    line_start_x,
    line_x,
    offset_expr,
    vertical_anchor,
    word_pixel_offsets,
)
from subtitle_burner.styles.tables import BACKGROUNDS, COLORS


class TestColors:

    def test_parse_gold_is_blue_green_red(self):
        assert parse_ass_color("&H00D7FF&") == (255, 215, 0, 0)

    def test_ass_to_hex_gold(self):
        assert ass_to_hex("&H00D7FF&") == "0xFFD700"

    def test_red_and_blue_not_swapped(self):
        assert ass_to_hex(COLORS["red"]) == "0xFF0000"
        assert ass_to_hex(COLORS["blue"]) == "0x0000FF"

    def test_eight_digit_token_carries_alpha(self):
        assert parse_ass_color("&H80000000&") == (0, 0, 0, 128)

    def test_trailing_ampersand_optional(self):
        assert parse_ass_color("&H0000FF") == parse_ass_color("&H0000FF&")

    def test_malformed_token_raises(self):
        with pytest.raises(ValueError):
            parse_ass_color("red")
        assert not is_ass_color("0xFF0000")

    @pytest.mark.parametrize("name", sorted(COLORS))
    def test_palette_round_trip(self, name):
        token = COLORS[name]
        assert hex_to_rgb(ass_to_hex(token)) == parse_ass_color(token)[:3]

    def test_style_color_packing(self):
        assert ass_style_color("&HFFFFFF&") == "&H00FFFFFF"
        assert ass_style_color("&H0000FF&") == "&H000000FF"
        assert ass_style_color("&H80000000&") == "&H80000000"
        assert ass_style_color("&HFFFFFF&", alpha=0x40) == "&H40FFFFFF"

    def test_background_opacity(self):
        _, _, _, alpha = parse_ass_color(BACKGROUNDS["black"])
        assert alpha_to_opacity(alpha) == 0.5
        _, _, _, alpha = parse_ass_color(BACKGROUNDS["solid-black"])
        assert alpha_to_opacity(alpha) == 1.0

    def test_with_opacity(self):
        assert with_opacity("0x000000", 0.5) == "0x000000@0.50"
        assert with_opacity("0x000000", 1.0) == "0x000000"

    def test_hex_to_rgb_accepts_hash(self):
        assert hex_to_rgb("#FF8000") == (255, 128, 0)


class TestLayout:

    def test_fmt_num(self):
        assert fmt_num(2.5) == "2.5"
        assert fmt_num(0) == "0"
        assert fmt_num(10.0) == "10"
        assert fmt_num(1.23456) == "1.235"
        assert fmt_num(-0.0001) == "0"

    def test_word_offsets(self):
        layout = word_pixel_offsets(["ab", "cde"], 10)
        assert layout.offsets == [("ab", 0), ("cde", 15)]
        assert layout.total_width == 31

    def test_single_empty_line_width_floor(self):
        assert word_pixel_offsets([], 24).total_width == 1

    def test_block_height(self):
        assert line_block_height(3, 24, 1.3) == 93
        assert line_block_height(1, 24, 1.2) == 29

    def test_vertical_anchor(self):
        assert vertical_anchor("top-center", 100) == "50"
        assert vertical_anchor("middle-left", 62) == "(h-62)/2"
        assert vertical_anchor("bottom-center", 31) == "h-31-50"

    def test_horizontal_anchor(self):
        assert line_x("bottom-left") == "30"
        assert line_x("top-right") == "w-text_w-30"
        assert line_x("middle-center") == "(w-text_w)/2"
        assert line_start_x("bottom-center", 31) == "w/2-15.5"
        assert line_start_x("bottom-right", 100) == "w-100-30"

    def test_offset_expr(self):
        assert offset_expr("h-31-50", 0) == "h-31-50"
        assert offset_expr("50", 31) == "50+31"


class TestEscaping:

    @pytest.mark.parametrize("raw,escaped", [
        ("50%", "50\\%"),
        ("a\\b", "a\\\\b"),
        ("one\ntwo\tthree", "one two three"),
        ("a:b, [c]; 'd'", "a:b, [c]; 'd'"),
    ])
    def test_text_expansion_level(self, raw, escaped):
        assert escape_text_expansion(raw) == escaped

    @pytest.mark.parametrize("raw,escaped", [
        ("a:b", "a\\:b"),
        ("it's", "it\\'s"),
        ("a\\b", "a\\\\b"),
        ("x,[y];z", "x,[y];z"),
    ])
    def test_option_level(self, raw, escaped):
        assert escape_option_value(raw) == escaped

    def test_graph_quote_closes_and_reopens(self):
        assert quote_graph_value("it\\'s") == "'it\\'\\''s'"

    def test_apostrophe_in_text(self):
        assert drawtext_text_option("don't") == "'don\\'\\''t'"

    def test_percent_escaped_for_both_levels(self):
        assert drawtext_text_option("50%") == "'50\\\\%'"

    def test_windows_path(self):
        assert filter_path_option("C:\\subs\\a.ass") == "'C\\:/subs/a.ass'"

    def test_path_quote(self):
        assert filter_path_option("/tmp/it's.ass") == "'/tmp/it\\'\\''s.ass'"

    def test_font_name(self):
        assert font_name_option("DejaVu Sans") == "'DejaVu Sans'"
        assert font_name_option("Odd:Font") == "'Odd\\:Font'"
