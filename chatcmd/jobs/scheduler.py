"""
Job Scheduler Module.

Periodically prunes expired cooldown state in the background.
"""

from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from chatcmd.gating.cooldowns import CooldownTracker

scheduler_log = logger.bind(module="Scheduler")

DEFAULT_PRUNE_INTERVAL = 60.0


class PruneScheduler:
    """Runs ``tracker.prune()`` on a fixed interval."""

    JOB_ID = "cooldown_prune"

    def __init__(
        self,
        tracker: CooldownTracker,
        interval_seconds: float = DEFAULT_PRUNE_INTERVAL,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        """
        Initialize scheduler.

        Args:
            tracker: Tracker to prune
            interval_seconds: Seconds between prune runs
            scheduler: Scheduler to use (a private BackgroundScheduler by default)
        """
        self._tracker = tracker
        self._interval = interval_seconds
        self._scheduler = scheduler or BackgroundScheduler(daemon=True)

    def run_prune_job(self) -> int:
        """
        Scheduled job to drop expired cooldown entries.

        Returns:
            Number of entries removed
        """
        try:
            removed = self._tracker.prune()
        except Exception as e:
            scheduler_log.error(f"Cooldown prune job failed: {e}")
            return 0

        if removed:
            scheduler_log.debug(f"Cooldown prune removed {removed} entries")
        return removed

    def start(self) -> None:
        """Schedule the prune job and start the scheduler."""
        self._scheduler.add_job(
            self.run_prune_job,
            IntervalTrigger(seconds=self._interval),
            id=self.JOB_ID,
            name=f"Cooldown prune (every {self._interval}s)",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        if not self._scheduler.running:
            self._scheduler.start()
        scheduler_log.info(f"Scheduler started: cooldown prune every {self._interval}s")

    def shutdown(self) -> None:
        """Shutdown the scheduler."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            scheduler_log.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._scheduler.running
