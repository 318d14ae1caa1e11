"""
Unit tests for chatcmd/parsing/registry.py
"""

import pytest

from chatcmd.parsing.registry import ArgumentParserRegistry, ParseResult, type_key
from chatcmd.parsing.types import ArgumentType


@pytest.fixture
def registry():
    """Create an empty ArgumentParserRegistry."""
    return ArgumentParserRegistry()


# ============================================================
# register / get tests
# ============================================================


class TestRegister:
    """Tests for registering parsers."""

    def test_enum_and_string_keys_are_equivalent(self, registry):
        """ArgumentType members and their values address the same parser."""
        registry.register(ArgumentType.INTEGER, lambda ctx, token: int(token))

        assert ArgumentType.INTEGER in registry
        assert "integer" in registry
        assert registry.get("integer") is registry.get(ArgumentType.INTEGER)

    def test_register_replaces(self, registry):
        """Registering a type twice keeps the latest parser."""
        first = lambda ctx, token: 1  # noqa: E731
        second = lambda ctx, token: 2  # noqa: E731
        registry.register("thing", first)
        registry.register("thing", second)

        assert registry.get("thing") is second
        assert registry.types == ["thing"]

    def test_get_missing(self, registry):
        """Unknown types have no parser."""
        assert registry.get("nope") is None
        assert "nope" not in registry
        assert 42 not in registry

    def test_type_key(self):
        """type_key should normalise enums to their value."""
        assert type_key(ArgumentType.URL) == "url"
        assert type_key("custom") == "custom"


# ============================================================
# parse tests
# ============================================================


class TestParse:
    """Tests for ArgumentParserRegistry.parse."""

    def test_success(self, registry, make_context):
        """A converted value becomes a successful result."""
        registry.register("double_it", lambda ctx, token: int(token) * 2)

        result = registry.parse("double_it", make_context(), "21")

        assert result == ParseResult.success(42)
        assert result.ok is True

    def test_none_is_failure(self, registry, make_context):
        """Returning None means the token did not convert."""
        registry.register("never", lambda ctx, token: None)

        result = registry.parse("never", make_context(), "x")

        assert result.ok is False
        assert result.error == "'x' is not a valid never"

    def test_exception_is_failure(self, registry, make_context):
        """A raising parser should not propagate its exception."""

        def boom(ctx, token):
            raise ValueError("bad token")

        registry.register("boom", boom)

        result = registry.parse("boom", make_context(), "x")

        assert result.ok is False
        assert result.error == "bad token"

    def test_unregistered_type(self, registry, make_context):
        """Parsing an unknown type fails instead of raising."""
        result = registry.parse("missing", make_context(), "x")

        assert result.ok is False
        assert "no parser registered" in result.error

    def test_parser_receives_context(self, registry, make_context):
        """Parsers get the invocation context."""
        registry.register("author", lambda ctx, token: ctx.author_id)
        ctx = make_context()

        assert registry.parse("author", ctx, "me").value == ctx.author_id
