"""
Execution Strategy Module.

Where command handlers run: on the calling thread, or on a bounded
pool of worker threads.
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from loguru import logger

T = TypeVar("T")

exec_log = logger.bind(module="Execution")


def completed_future(value: Any) -> Future:
    """Create an already resolved future."""
    future: Future = Future()
    future.set_result(value)
    return future


class ExecutionStrategy(ABC):
    """Runs a unit of work and returns a future for its result."""

    @abstractmethod
    def submit(self, fn: Callable[[], T]) -> "Future[T]":
        pass

    def shutdown(self, wait: bool = True) -> None:
        """Release any resources held by the strategy."""


class InlineExecution(ExecutionStrategy):
    """Run work synchronously on the calling thread."""

    def submit(self, fn: Callable[[], T]) -> "Future[T]":
        future: Future = Future()
        try:
            future.set_result(fn())
        except Exception as e:
            future.set_exception(e)
        return future


class PooledExecution(ExecutionStrategy):
    """Run work on a bounded ThreadPoolExecutor."""

    def __init__(self, max_workers: int = 4, thread_name_prefix: str = "chatcmd-worker"):
        """
        Initialize pool.

        Args:
            max_workers: Maximum number of worker threads
            thread_name_prefix: Name prefix of worker threads
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=thread_name_prefix,
        )
        exec_log.info(f"Worker pool started with {max_workers} workers")

    def submit(self, fn: Callable[[], T]) -> "Future[T]":
        return self._executor.submit(fn)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
        exec_log.info("Worker pool stopped")
