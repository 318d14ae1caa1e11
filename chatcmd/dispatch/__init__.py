"""
Dispatch Module.

The end-to-end message pipeline, its execution strategies and hooks.
"""

from chatcmd.dispatch.dispatcher import Dispatcher, run_handler
from chatcmd.dispatch.execution import (
    ExecutionStrategy,
    InlineExecution,
    PooledExecution,
    completed_future,
)
from chatcmd.dispatch.hooks import CommandEventAdapter, hook_for

__all__ = [
    "CommandEventAdapter",
    "Dispatcher",
    "ExecutionStrategy",
    "InlineExecution",
    "PooledExecution",
    "completed_future",
    "hook_for",
    "run_handler",
]
