"""
Tests for ANSI serialization of styled segments.
"""

import pytest

from cc_statusline.models import StyledSegment
from cc_statusline.styling import CLEAR_TO_EOL, RESET, color_codes, render_segment, render_segments
from tests.utils.ansi_helpers import strip_ansi


class TestColorCodes:
    """Test color_codes."""

    def test_rgb_foreground(self):
        assert color_codes((1, 2, 3)) == "38;2;1;2;3"

    def test_rgb_background(self):
        assert color_codes((1, 2, 3), background=True) == "48;2;1;2;3"

    def test_palette_index(self):
        assert color_codes(196) == "38;5;196"
        assert color_codes(46, background=True) == "48;5;46"

    @pytest.mark.parametrize(
        ("name", "background", "expected"),
        [
            ("cyan", False, "36"),
            ("white", False, "37"),
            ("white", True, "47"),
            ("bright_black", True, "100"),
            ("bright_red", False, "91"),
        ],
    )
    def test_named_colors(self, name, background, expected):
        assert color_codes(name, background=background) == expected

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown color"):
            color_codes("chartreuse")


class TestRenderSegment:
    """Test render_segment and render_segments."""

    def test_plain_text_unchanged(self):
        assert render_segment(StyledSegment("hello")) == "hello"

    def test_bold_foreground(self):
        assert render_segment(StyledSegment("x", foreground="cyan", bold=True)) == "\x1b[1;36mx\x1b[0m"

    def test_dim(self):
        assert render_segment(StyledSegment("│", foreground="white", dim=True)) == "\x1b[2;37m│\x1b[0m"

    def test_foreground_and_background(self):
        segment = StyledSegment("ϟ", foreground=(255, 0, 0), background="bright_black")
        assert render_segment(segment) == "\x1b[38;2;255;0;0;100mϟ\x1b[0m"

    def test_empty_text_renders_nothing(self):
        assert render_segment(StyledSegment("", foreground="red", bold=True)) == ""

    def test_every_styled_segment_is_reset(self):
        text = render_segments([StyledSegment("a", foreground="red"), StyledSegment("b", foreground=46)])

        assert text.count(RESET) == 2
        assert strip_ansi(text) == "ab"

    def test_clear_to_end_of_line(self):
        assert CLEAR_TO_EOL == "\x1b[K"
