"""Tests for link text escaping."""

from src.muse_markup.escaping import escape_link_text, unescape_link_text


class TestEscaping:
    """Test escape_link_text and unescape_link_text."""

    def test_escape_brackets(self):
        assert escape_link_text("a[b]c") == "a%5Bb%5Dc"
        assert escape_link_text("[[x]]") == "%5B%5Bx%5D%5D"
        assert escape_link_text("plain") == "plain"

    def test_unescape_brackets(self):
        assert unescape_link_text("a%5Bb%5Dc") == "a[b]c"
        assert unescape_link_text("nothing here") == "nothing here"

    def test_none_gives_empty_string(self):
        assert escape_link_text(None) == ""
        assert unescape_link_text(None) == ""

    def test_round_trip(self):
        for text in ["", "plain", "[x]", "a]]b[[c", "Page [draft] (v2)"]:
            assert unescape_link_text(escape_link_text(text)) == text

    def test_literal_encoded_forms_do_not_round_trip(self):
        """Text that already holds %5B is indistinguishable from an escaped bracket."""
        text = "already %5B encoded"

        assert unescape_link_text(escape_link_text(text)) == "already [ encoded"

    def test_escape_after_unescape_is_not_identity(self):
        """Mixed literal and encoded brackets collapse into one form."""
        text = "[%5B"

        assert escape_link_text(unescape_link_text(text)) == "%5B%5B"
