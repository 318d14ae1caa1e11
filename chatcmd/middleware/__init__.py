"""
Middleware Module.

Logging setup and the logging event adapter.
"""

from chatcmd.middleware.logging import (
    InterceptHandler,
    LoggingEventAdapter,
    configure_logging,
)

__all__ = ["InterceptHandler", "LoggingEventAdapter", "configure_logging"]
