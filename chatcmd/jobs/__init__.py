"""Jobs module for background tasks."""

from chatcmd.jobs.scheduler import PruneScheduler

__all__ = ["PruneScheduler"]
