"""
Dispatcher Builder Module.

Fluent wiring of a Dispatcher from individual options or from Settings.

    dispatcher = (
        DispatcherBuilder()
        .set_prefixes("!", "?")
        .set_owner_ids(1234)
        .add_commands(ping, ban)
        .set_pooled(8)
        .build()
    )
"""

from typing import Any, Optional

from loguru import logger

from chatcmd.commands.base import CommandDefinition
from chatcmd.commands.decorators import collect_commands
from chatcmd.commands.help import HELP_COMMAND_NAME, build_help_command
from chatcmd.commands.registry import CommandRegistry
from chatcmd.config.settings import Settings
from chatcmd.dispatch.dispatcher import Dispatcher
from chatcmd.dispatch.execution import ExecutionStrategy, InlineExecution, PooledExecution
from chatcmd.dispatch.hooks import CommandEventAdapter
from chatcmd.gating.cooldowns import CooldownProvider
from chatcmd.gating.permissions import PermissionGate
from chatcmd.gating.providers import DefaultCooldownProvider
from chatcmd.jobs.scheduler import DEFAULT_PRUNE_INTERVAL
from chatcmd.parsing.parsers import IdentityResolver, parse_string, register_default_parsers
from chatcmd.parsing.prefix import DefaultPrefixProvider, PrefixProvider
from chatcmd.parsing.registry import ArgumentParserRegistry, Parser, TypeId
from chatcmd.parsing.types import ArgumentType

builder_log = logger.bind(module="Builder")


class DispatcherBuilder:
    """Collects configuration and assembles a Dispatcher."""

    def __init__(self):
        """Initialize builder with default options."""
        self._prefixes: list[str] = ["!"]
        self._allow_mention_prefix = True
        self._prefix_provider: Optional[PrefixProvider] = None
        self._cooldown_provider: Optional[CooldownProvider] = None
        self._permission_gate: Optional[PermissionGate] = None
        self._execution: Optional[ExecutionStrategy] = None
        self._workers: Optional[int] = None
        self._ignore_bots = True
        self._owner_ids: set[int] = set()
        self._event_adapters: list[CommandEventAdapter] = []

        self._default_parsers = False
        self._resolver: Optional[IdentityResolver] = None
        self._id_parser: Optional[Parser] = None
        self._custom_parsers: list[tuple[TypeId, Parser]] = []

        self._help_enabled = True
        self._help_show_types = True
        self._prune_interval: Optional[float] = DEFAULT_PRUNE_INTERVAL
        self._commands: list[CommandDefinition] = []

    @classmethod
    def from_settings(cls, settings: Settings) -> "DispatcherBuilder":
        """
        Create a builder pre-configured from settings.

        Commands, parsers and adapters still need to be added.

        Args:
            settings: Application settings

        Returns:
            Configured builder
        """
        dispatcher = settings.dispatcher
        builder = (
            cls()
            .set_prefixes(*dispatcher.prefixes)
            .set_allow_mention_prefix(dispatcher.allow_mention_prefix)
            .set_ignore_bots(dispatcher.ignore_bots)
            .set_owner_ids(*dispatcher.owner_ids)
            .configure_help(settings.help.enabled, settings.help.show_parameter_types)
            .set_cooldown_provider(DefaultCooldownProvider(settings.cooldown, settings.redis))
            .set_prune_interval(settings.cooldown.prune_interval_seconds)
            .register_default_parsers()
        )
        if dispatcher.execution_strategy == "pooled":
            builder.set_pooled(dispatcher.worker_count)
        return builder

    # ========== Prefixes ==========

    def set_prefixes(self, *prefixes: str) -> "DispatcherBuilder":
        """Set literal prefixes, in priority order."""
        self._prefixes = list(prefixes)
        return self

    def set_allow_mention_prefix(self, allow: bool) -> "DispatcherBuilder":
        """Accept the bot's mention as a prefix."""
        self._allow_mention_prefix = allow
        return self

    def set_prefix_provider(self, provider: PrefixProvider) -> "DispatcherBuilder":
        """Use a custom provider; overrides set_prefixes and the mention option."""
        self._prefix_provider = provider
        return self

    # ========== Gating ==========

    def set_cooldown_provider(self, provider: CooldownProvider) -> "DispatcherBuilder":
        self._cooldown_provider = provider
        return self

    def set_permission_gate(self, gate: PermissionGate) -> "DispatcherBuilder":
        self._permission_gate = gate
        return self

    def set_ignore_bots(self, ignore: bool) -> "DispatcherBuilder":
        self._ignore_bots = ignore
        return self

    def set_owner_ids(self, *ids: int | str) -> "DispatcherBuilder":
        """Set developer ids; strings are converted to int."""
        self._owner_ids = {int(owner_id) for owner_id in ids}
        return self

    def set_prune_interval(self, seconds: Optional[float]) -> "DispatcherBuilder":
        """Seconds between background cooldown prunes, None to disable."""
        self._prune_interval = seconds
        return self

    # ========== Parsers ==========

    def register_default_parsers(
        self, resolver: Optional[IdentityResolver] = None
    ) -> "DispatcherBuilder":
        """
        Register the built-in parsers.

        Args:
            resolver: Enables user/member/role/channel parsers
        """
        self._default_parsers = True
        if resolver is not None:
            self._resolver = resolver
        return self

    def set_identity_resolver(self, resolver: IdentityResolver) -> "DispatcherBuilder":
        self._resolver = resolver
        return self

    def set_id_parser(self, parser: Parser) -> "DispatcherBuilder":
        """Parse platform identifiers with this parser instead of parse_snowflake."""
        self._id_parser = parser
        return self

    def add_custom_parser(self, type_id: TypeId, parser: Parser) -> "DispatcherBuilder":
        """Add a parser; custom parsers replace built-ins of the same type."""
        self._custom_parsers.append((type_id, parser))
        return self

    # ========== Execution ==========

    def set_execution(self, strategy: ExecutionStrategy) -> "DispatcherBuilder":
        self._execution = strategy
        self._workers = None
        return self

    def set_pooled(self, workers: int = 4) -> "DispatcherBuilder":
        """Run handlers on a pool of worker threads."""
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._execution = None
        self._workers = workers
        return self

    # ========== Commands & Hooks ==========

    def add_event_adapters(self, *adapters: CommandEventAdapter) -> "DispatcherBuilder":
        self._event_adapters.extend(adapters)
        return self

    def add_commands(self, *commands: CommandDefinition) -> "DispatcherBuilder":
        self._commands.extend(commands)
        return self

    def add_command_sources(self, *sources: Any) -> "DispatcherBuilder":
        """Add every decorated command found on the given objects."""
        self._commands.extend(collect_commands(*sources))
        return self

    def configure_help(
        self, enabled: bool = True, show_parameter_types: bool = True
    ) -> "DispatcherBuilder":
        """Toggle the built-in help command."""
        self._help_enabled = enabled
        self._help_show_types = show_parameter_types
        return self

    # ========== Build ==========

    def _build_parsers(self) -> ArgumentParserRegistry:
        parsers = ArgumentParserRegistry()
        if self._default_parsers:
            register_default_parsers(parsers, self._resolver, self._id_parser)
        for type_id, parser in self._custom_parsers:
            parsers.register(type_id, parser)
        # help takes a string argument
        if self._help_enabled and ArgumentType.STRING not in parsers:
            parsers.register(ArgumentType.STRING, parse_string)
        return parsers

    def _build_commands(self) -> CommandRegistry:
        registry = CommandRegistry()
        registry.register_all(self._commands)
        if self._help_enabled and HELP_COMMAND_NAME not in registry:
            registry.register(build_help_command(registry, self._help_show_types))
        return registry

    def _build_execution(self) -> ExecutionStrategy:
        if self._execution is not None:
            return self._execution
        if self._workers is not None:
            return PooledExecution(max_workers=self._workers)
        return InlineExecution()

    def build(self) -> Dispatcher:
        """
        Assemble the dispatcher.

        Raises:
            DuplicateCommandError: If two commands share a name or alias
        """
        prefix_provider = self._prefix_provider or DefaultPrefixProvider(
            self._prefixes, self._allow_mention_prefix
        )
        commands = self._build_commands()
        dispatcher = Dispatcher(
            commands=commands,
            parsers=self._build_parsers(),
            prefix_provider=prefix_provider,
            cooldown_provider=self._cooldown_provider,
            permission_gate=self._permission_gate,
            execution=self._build_execution(),
            event_adapters=self._event_adapters,
            owner_ids=self._owner_ids,
            ignore_bots=self._ignore_bots,
            prune_interval=self._prune_interval,
        )
        builder_log.info(
            f"Dispatcher built: {len(commands)} commands, "
            f"{len(dispatcher.parsers.types)} parsers"
        )
        return dispatcher
