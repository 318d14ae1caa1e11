"""
Unit tests for chatcmd/parsing/parsers/entities.py
"""

from unittest.mock import MagicMock

import pytest

from chatcmd.parsing.parsers import register_default_parsers
from chatcmd.parsing.parsers.entities import EntityKind, EntityParser, IdentityResolver
from chatcmd.parsing.registry import ArgumentParserRegistry
from chatcmd.parsing.types import ArgumentType

USER_ID = 123456789012345678


class DictResolver(IdentityResolver):
    """Resolver backed by a dict of (kind, id) -> entity."""

    def __init__(self, entities: dict):
        self.entities = entities
        self.calls = []

    def resolve(self, kind, ctx, token, entity_id):
        self.calls.append((kind, token, entity_id))
        if entity_id is None:
            # name lookups
            return self.entities.get((kind, token))
        return self.entities.get((kind, entity_id))


@pytest.fixture
def resolver():
    """Resolver knowing one user and one role."""
    return DictResolver(
        {
            (EntityKind.USER, USER_ID): "user:alice",
            (EntityKind.MEMBER, USER_ID): "member:alice",
            (EntityKind.ROLE, USER_ID): "role:mods",
            (EntityKind.TEXT_CHANNEL, "general"): "channel:general",
        }
    )


# ============================================================
# EntityParser tests
# ============================================================


class TestEntityParser:
    """Tests for EntityParser class."""

    def test_resolves_mention(self, resolver, make_context):
        """A user mention resolves through the resolver."""
        parser = EntityParser(EntityKind.USER, resolver)

        assert parser(make_context(), f"<@!{USER_ID}>") == "user:alice"
        assert resolver.calls == [(EntityKind.USER, f"<@!{USER_ID}>", USER_ID)]

    def test_resolves_bare_id(self, resolver, make_context):
        """A bare id resolves without a mention type check."""
        parser = EntityParser(EntityKind.ROLE, resolver)

        assert parser(make_context(), str(USER_ID)) == "role:mods"

    def test_mismatched_mention(self, resolver, make_context):
        """A role mention is not a user."""
        parser = EntityParser(EntityKind.USER, resolver)

        assert parser(make_context(), f"<@&{USER_ID}>") is None
        assert resolver.calls == []

    def test_name_lookup(self, resolver, make_context):
        """Tokens that are not ids are passed on for name lookups."""
        parser = EntityParser(EntityKind.TEXT_CHANNEL, resolver)

        assert parser(make_context(), "general") == "channel:general"

    def test_guild_entity_in_direct_message(self, resolver, make_context):
        """Members, roles and channels need a guild."""
        parser = EntityParser(EntityKind.MEMBER, resolver)

        assert parser(make_context(guild_id=None), f"<@{USER_ID}>") is None

    def test_user_in_direct_message(self, resolver, make_context):
        """Users can be resolved outside guilds."""
        parser = EntityParser(EntityKind.USER, resolver)

        assert parser(make_context(guild_id=None), f"<@{USER_ID}>") == "user:alice"

    def test_resolver_error(self, make_context):
        """A failing resolver becomes a parse failure."""
        failing = MagicMock(spec=IdentityResolver)
        failing.resolve.side_effect = RuntimeError("api down")
        parser = EntityParser(EntityKind.USER, failing)

        assert parser(make_context(), f"<@{USER_ID}>") is None


# ============================================================
# Registration tests
# ============================================================


class TestEntityRegistration:
    """Tests for registering entity parsers."""

    def test_registered_with_resolver(self, resolver, make_context):
        """Every entity type gets a parser when a resolver is given."""
        registry = register_default_parsers(ArgumentParserRegistry(), resolver)

        for type_id in (
            ArgumentType.USER, ArgumentType.MEMBER, ArgumentType.ROLE,
            ArgumentType.TEXT_CHANNEL, ArgumentType.VOICE_CHANNEL,
        ):
            assert type_id in registry

        result = registry.parse(ArgumentType.MEMBER, make_context(), f"<@{USER_ID}>")
        assert result.value == "member:alice"

    def test_unknown_entity_fails(self, resolver, make_context):
        """An unknown id is an invalid value."""
        registry = register_default_parsers(ArgumentParserRegistry(), resolver)

        result = registry.parse(ArgumentType.USER, make_context(), "999999999999999999")

        assert result.ok is False
