"""
Logging Module.

Configures loguru and logs every dispatch outcome with its duration.
"""

import logging
import sys
import time

from loguru import logger

from chatcmd.context import InvocationContext
from chatcmd.dispatch.hooks import CommandEventAdapter
from chatcmd.outcomes import (
    Completed,
    CooldownActive,
    ExecutionFailure,
    Outcome,
    ParseFailure,
    PermissionDenied,
)

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]: <14}</cyan> | <level>{message}</level>"
)

# stdlib loggers of our dependencies
INTERCEPTED_LOGGERS = ("apscheduler", "telegram", "httpx")


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_logging(level: str = "INFO") -> None:
    """
    Configure loguru output and route stdlib logging into it.

    Args:
        level: Minimum log level
    """
    logger.configure(extra={"module": "App"})
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


class LoggingEventAdapter(CommandEventAdapter):
    """Event adapter that logs each outcome with its duration."""

    def __init__(self):
        """Initialize adapter."""
        self._log = logger.bind(module="Commands")

    def _duration_ms(self, ctx: InvocationContext) -> float:
        received_at = ctx.metadata.get("received_at")
        if received_at is None:
            return 0.0
        return (time.perf_counter() - received_at) * 1000

    def _summary(self, outcome: Outcome) -> str:
        ctx = outcome.context
        return (
            f"{ctx.prefix}{ctx.invoked_with} by {ctx.author_id} in {ctx.channel_id} "
            f"({self._duration_ms(ctx):.0f}ms)"
        )

    def on_command_completed(self, outcome: Completed) -> None:
        self._log.info(f"Completed {self._summary(outcome)}")

    def on_permission_denied(self, outcome: PermissionDenied) -> None:
        self._log.info(f"Denied [{outcome.reason.value}] {self._summary(outcome)}")

    def on_cooldown_active(self, outcome: CooldownActive) -> None:
        self._log.info(f"Cooldown [{outcome.remaining_ms}ms left] {self._summary(outcome)}")

    def on_parse_failure(self, outcome: ParseFailure) -> None:
        self._log.info(f"Bad arguments [{outcome.describe()}] {self._summary(outcome)}")

    def on_command_error(self, outcome: ExecutionFailure) -> None:
        self._log.error(f"Failed [{outcome.cause!r}] {self._summary(outcome)}")
