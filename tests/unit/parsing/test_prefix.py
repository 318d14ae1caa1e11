"""
Unit tests for chatcmd/parsing/prefix.py
"""

import pytest

from chatcmd.parsing.prefix import DefaultPrefixProvider, mention_prefixes, resolve_prefix
from tests.fixtures.messages import BOT_ID


# ============================================================
# resolve_prefix tests
# ============================================================


class TestResolvePrefix:
    """Tests for resolve_prefix function."""

    def test_matching_prefix(self):
        """Content starting with a prefix should match it."""
        assert resolve_prefix("!ping", ["!"]) == "!"

    def test_no_matching_prefix(self):
        """Content without any prefix should not match."""
        assert resolve_prefix("ping", ["!", "?"]) is None

    def test_content_equal_to_prefix(self):
        """A message that is only the prefix is not an invocation."""
        assert resolve_prefix("!", ["!"]) is None

    def test_first_listed_prefix_wins(self):
        """Prefixes are tried in the given order."""
        assert resolve_prefix("!!ping", ["!", "!!"]) == "!"
        assert resolve_prefix("!!ping", ["!!", "!"]) == "!!"

    def test_empty_prefix_ignored(self):
        """An empty prefix never matches."""
        assert resolve_prefix("ping", ["", "!"]) is None

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("?help", "?"),
            (">>help", ">>"),
            ("help", None),
            ("", None),
        ],
    )
    def test_several_prefixes(self, content, expected):
        """Each configured prefix should be recognised."""
        assert resolve_prefix(content, ["?", ">>"]) == expected


# ============================================================
# DefaultPrefixProvider tests
# ============================================================


class TestDefaultPrefixProvider:
    """Tests for DefaultPrefixProvider class."""

    def test_includes_mentions(self, make_message):
        """Mention prefixes follow the literal ones."""
        provider = DefaultPrefixProvider(["!"])
        prefixes = provider.provide(make_message())

        assert prefixes == ["!", f"<@{BOT_ID}> ", f"<@!{BOT_ID}> "]

    def test_mentions_disabled(self, make_message):
        """Only literal prefixes when mentions are disabled."""
        provider = DefaultPrefixProvider(["!"], allow_mention_prefix=False)

        assert provider.provide(make_message()) == ["!"]

    def test_without_self_id(self, make_message):
        """Without the bot id no mention prefix can be built."""
        provider = DefaultPrefixProvider(["!"])

        assert provider.provide(make_message(self_id=None)) == ["!"]

    def test_platform_mentions_replace_id_form(self, make_message):
        """Gateway supplied mention forms are used instead of the id form."""
        provider = DefaultPrefixProvider(["/"])
        message = make_message("@test_bot ping", self_mentions=("@test_bot ",))

        assert provider.provide(message) == ["/", "@test_bot "]
        assert resolve_prefix(message.content, provider.provide(message)) == "@test_bot "

    def test_platform_mentions_respect_toggle(self, make_message):
        """Disabling mentions also drops gateway supplied forms."""
        provider = DefaultPrefixProvider(["/"], allow_mention_prefix=False)

        assert provider.provide(make_message(self_mentions=("@test_bot ",))) == ["/"]

    def test_mention_resolves(self, make_message):
        """A mention prefix should resolve like any other prefix."""
        provider = DefaultPrefixProvider(["!"])
        message = make_message(f"<@!{BOT_ID}> ping")

        assert resolve_prefix(message.content, provider.provide(message)) == f"<@!{BOT_ID}> "

    def test_mention_prefixes(self):
        """Both mention forms should be produced."""
        assert mention_prefixes(5) == ["<@5> ", "<@!5> "]
