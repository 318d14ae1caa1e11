"""
Command Dispatcher Module.

Routes inbound messages through prefix detection, command lookup,
permission and cooldown gating and argument binding, then invokes the
command handler.

    "!ban <@1234...> spamming"
        -> prefix "!"            (PrefixProvider / resolve_prefix)
        -> "ban", ["<@1234...>", "spamming"]   (tokenizer)
        -> CommandDefinition "ban"             (CommandRegistry)
        -> allowed                             (PermissionGate)
        -> slot acquired                       (CooldownTracker)
        -> [Snowflake(...), "spamming"]        (bind_arguments)
        -> handler(ctx, *values)               (ExecutionStrategy)

Messages without a prefix, or naming an unknown command, are dropped
silently. Every other message produces exactly one Outcome.
"""

import asyncio
import inspect
import time
from concurrent.futures import Future
from functools import partial
from typing import Any, Iterable, Optional, Sequence

from loguru import logger

from chatcmd.commands.registry import CommandRegistry
from chatcmd.context import ChatMessage, InvocationContext
from chatcmd.dispatch.execution import ExecutionStrategy, InlineExecution, completed_future
from chatcmd.dispatch.hooks import CommandEventAdapter, hook_for
from chatcmd.gating.cooldowns import (
    CooldownKey,
    CooldownProvider,
    CooldownTracker,
    FixedWindowCooldownTracker,
    StaticCooldownProvider,
)
from chatcmd.gating.permissions import PermissionGate
from chatcmd.jobs.scheduler import DEFAULT_PRUNE_INTERVAL, PruneScheduler
from chatcmd.outcomes import (
    Completed,
    CooldownActive,
    ExecutionFailure,
    Outcome,
    ParseFailure,
    PermissionDenied,
)
from chatcmd.parsing.binder import ParsedArguments, bind_arguments
from chatcmd.parsing.prefix import PrefixProvider, resolve_prefix
from chatcmd.parsing.registry import ArgumentParserRegistry
from chatcmd.parsing.tokenizer import split_command, tokenize

dispatch_log = logger.bind(module="Dispatcher")


class Dispatcher:
    """
    End-to-end command pipeline.

    Resolution, gating and parsing always run on the calling thread;
    only the handler is handed to the execution strategy.
    """

    def __init__(
        self,
        commands: CommandRegistry,
        parsers: ArgumentParserRegistry,
        prefix_provider: PrefixProvider,
        cooldown_provider: Optional[CooldownProvider] = None,
        permission_gate: Optional[PermissionGate] = None,
        execution: Optional[ExecutionStrategy] = None,
        event_adapters: Sequence[CommandEventAdapter] = (),
        owner_ids: Iterable[int] = (),
        ignore_bots: bool = True,
        prune_interval: Optional[float] = DEFAULT_PRUNE_INTERVAL,
    ):
        """
        Initialize dispatcher.

        Args:
            commands: Registry of command definitions
            parsers: Registry of argument parsers
            prefix_provider: Supplies candidate prefixes per message
            cooldown_provider: Supplies the cooldown tracker (in-memory fixed window by default)
            permission_gate: Permission policy (PermissionGate by default)
            execution: Where handlers run (inline by default)
            event_adapters: Hooks notified of every outcome
            owner_ids: Developer ids; they pass every permission check
            ignore_bots: Drop messages sent by automated accounts
            prune_interval: Seconds between background cooldown prunes, None to disable
        """
        self.commands = commands
        self.parsers = parsers
        self.prefix_provider = prefix_provider
        provider = cooldown_provider or StaticCooldownProvider(FixedWindowCooldownTracker())
        self.cooldowns: CooldownTracker = provider.provide()
        self.permission_gate = permission_gate or PermissionGate()
        self.execution = execution or InlineExecution()
        self.event_adapters = list(event_adapters)
        self.owner_ids = frozenset(owner_ids)
        self.ignore_bots = ignore_bots

        self._prune_interval = prune_interval
        self._pruner: Optional[PruneScheduler] = None

    # ========== Lifecycle ==========

    def start(self) -> None:
        """Start background cooldown pruning, if configured."""
        if self._prune_interval and self._pruner is None:
            self._pruner = PruneScheduler(self.cooldowns, self._prune_interval)
            self._pruner.start()

    def close(self, wait: bool = True) -> None:
        """
        Stop background jobs and the execution strategy, then close the
        cooldown tracker.

        Args:
            wait: Wait for running handlers to finish
        """
        if self._pruner is not None:
            self._pruner.shutdown()
            self._pruner = None
        self.execution.shutdown(wait=wait)
        self.cooldowns.close()

    def __enter__(self) -> "Dispatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ========== Dispatch ==========

    def dispatch(self, message: ChatMessage) -> Optional["Future[Outcome]"]:
        """
        Handle one inbound message.

        Args:
            message: The inbound message

        Returns:
            None if the message is not a command invocation, otherwise a
            future resolving to the Outcome. The future is already done
            for inline execution and for invocations refused before the
            handler runs.
        """
        ctx = self._resolve(message)
        if ctx is None:
            return None

        failure, arguments = self._gate_and_bind(ctx)
        if failure is not None:
            self._notify(failure)
            return completed_future(failure)

        try:
            return self.execution.submit(partial(self._invoke, ctx, arguments))
        except RuntimeError as e:
            # pool already shut down
            dispatch_log.error(f"Could not schedule command {ctx.command.name}: {e}")
            outcome = ExecutionFailure(ctx, e)
            self._notify(outcome)
            return completed_future(outcome)

    def _resolve(self, message: ChatMessage) -> Optional[InvocationContext]:
        """Match a prefix and a command; None means drop silently."""
        if self.ignore_bots and message.author_is_bot:
            return None

        try:
            prefixes = self.prefix_provider.provide(message)
        except Exception as e:
            dispatch_log.error(f"Prefix provider failed: {e}")
            return None

        prefix = resolve_prefix(message.content, prefixes)
        if prefix is None:
            return None

        name, arg_text = split_command(message.content[len(prefix):])
        command = self.commands.resolve(name)
        if command is None:
            dispatch_log.debug(f"Unknown command: {name!r}")
            return None

        return InvocationContext(
            message=message,
            prefix=prefix,
            invoked_with=name,
            command=command,
            args=tokenize(arg_text, command.arg_delimiter),
            arg_text=arg_text,
            is_developer=message.author_id in self.owner_ids,
            metadata={"received_at": time.perf_counter()},
        )

    def _gate_and_bind(
        self, ctx: InvocationContext
    ) -> tuple[Optional[Outcome], Optional[ParsedArguments]]:
        """
        Run permission, cooldown and argument binding, in that order.

        The cooldown slot is held while arguments bind and is released
        if binding fails, so a concurrent call on the same key can see
        CooldownActive during that window.
        """
        command = ctx.command
        try:
            denial = self.permission_gate.check(ctx)
            if denial is not None:
                return PermissionDenied(ctx, denial), None

            spec = command.cooldown
            key: Optional[CooldownKey] = None
            if spec is not None:
                key = CooldownKey.for_invocation(ctx, spec)
                decision = self.cooldowns.acquire(key, spec)
                if not decision.allowed:
                    return CooldownActive(ctx, decision.remaining_ms), None

            bound = bind_arguments(ctx, self.parsers)
            if isinstance(bound, ParseFailure):
                # failed parses do not use up a cooldown slot
                if key is not None:
                    self.cooldowns.release(key, spec)
                return bound, None
        except Exception as e:
            dispatch_log.opt(exception=e).error(f"Pre-invoke checks failed for {command.name}")
            return ExecutionFailure(ctx, e), None

        return None, bound

    def _invoke(self, ctx: InvocationContext, arguments: ParsedArguments) -> Outcome:
        """Run the handler and report the outcome."""
        self._emit("on_command_pre_invoke", ctx)
        try:
            result = run_handler(ctx, arguments)
            outcome: Outcome = Completed(ctx, result)
        except Exception as e:
            dispatch_log.opt(exception=e).error(f"Command {ctx.command.name} raised {e.__class__.__name__}")
            outcome = ExecutionFailure(ctx, e)
        self._notify(outcome)
        return outcome

    # ========== Event Adapters ==========

    def _notify(self, outcome: Outcome) -> None:
        self._emit(hook_for(outcome), outcome)

    def _emit(self, hook: str, payload: Any) -> None:
        for adapter in self.event_adapters:
            try:
                getattr(adapter, hook)(payload)
            except Exception as e:
                dispatch_log.opt(exception=e).warning(
                    f"Event adapter {adapter.__class__.__name__}.{hook} raised"
                )


def run_handler(ctx: InvocationContext, arguments: ParsedArguments) -> Any:
    """
    Call a command handler with its bound arguments.

    Coroutine handlers are run to completion on a fresh event loop, so
    they need pooled execution when dispatching from inside a running
    loop.

    Args:
        ctx: Invocation context
        arguments: Bound parameter values

    Returns:
        Whatever the handler returned
    """
    result = ctx.command.handler(ctx, *arguments.values)
    if inspect.iscoroutine(result):
        try:
            return asyncio.run(result)
        except RuntimeError:
            result.close()
            raise
    return result
