"""
Unit tests for chatcmd/parsing/tokenizer.py
"""

from chatcmd.parsing.tokenizer import split_command, split_remainder, tokenize


# ============================================================
# tokenize tests
# ============================================================


class TestTokenize:
    """Tests for tokenize function."""

    def test_collapses_delimiter_runs(self):
        """Runs of spaces should not produce empty tokens."""
        assert tokenize("cmd  arg1   arg2") == ["cmd", "arg1", "arg2"]

    def test_leading_and_trailing_delimiters(self):
        """Leading and trailing delimiters should be ignored."""
        assert tokenize("  a b  ") == ["a", "b"]

    def test_custom_delimiter(self):
        """Any single character can be the delimiter."""
        assert tokenize("a,b,,c", ",") == ["a", "b", "c"]

    def test_custom_delimiter_keeps_spaces(self):
        """Spaces are ordinary characters for a non-space delimiter."""
        assert tokenize("hello world,foo", ",") == ["hello world", "foo"]

    def test_empty_text(self):
        """Empty or delimiter-only text has no tokens."""
        assert tokenize("") == []
        assert tokenize("    ") == []

    def test_preserves_order(self):
        """Tokens should keep their order."""
        assert tokenize("3 1 2") == ["3", "1", "2"]


# ============================================================
# split_remainder tests
# ============================================================


class TestSplitRemainder:
    """Tests for split_remainder function."""

    def test_skip_zero_returns_stripped_text(self):
        """With nothing skipped the whole text is returned."""
        assert split_remainder("  hello world ") == "hello world"

    def test_preserves_inner_spacing(self):
        """Inner delimiters of the remainder should be kept."""
        assert split_remainder("a  b   c", skip=1) == "b   c"

    def test_skip_past_end(self):
        """Skipping every token leaves an empty remainder."""
        assert split_remainder("a b", skip=2) == ""
        assert split_remainder("a b", skip=5) == ""

    def test_custom_delimiter(self):
        """Custom delimiters should be honoured."""
        assert split_remainder("x,,y, z", ",", skip=1) == "y, z"


# ============================================================
# split_command tests
# ============================================================


class TestSplitCommand:
    """Tests for split_command function."""

    def test_name_and_arguments(self):
        """First token is the name, the rest is raw argument text."""
        assert split_command("ban  <@1> spam  spam") == ("ban", "<@1> spam  spam")

    def test_name_only(self):
        """A bare name has empty argument text."""
        assert split_command("ping") == ("ping", "")

    def test_leading_spaces(self):
        """Spaces between prefix and name are skipped."""
        assert split_command("   ping now") == ("ping", "now")

    def test_empty(self):
        """Whitespace-only text has no command."""
        assert split_command("   ") == ("", "")
