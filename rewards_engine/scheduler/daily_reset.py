"""
Background scheduler for daily rollover.

Periodically compares the engine clock with the last check. When the local
calendar date has changed it asks the rewards service to:
- reset daily challenges (and weekly/monthly ones when the ISO week or
  month changed too)
- prune activity history older than the retention window
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from rewards_engine import config

logger = logging.getLogger(__name__)


class DailyResetScheduler:
    """
    Background task driving the daily rollover.

    The rollover itself runs under the service lock, so it never interleaves
    with activity processing.
    """

    def __init__(
        self,
        service,
        check_interval: int = config.RESET_CHECK_INTERVAL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            service: RewardsService to roll over
            check_interval: How often to check for a date change (in seconds)
            clock: Defaults to the service clock
        """
        self.service = service
        self.check_interval = check_interval
        self.clock = clock or service.clock
        self._last_check: Optional[datetime] = None
        self._running = False
        self._task = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self):
        """Start the background rollover task."""
        if self._running:
            logger.warning("Daily reset scheduler is already running")
            return

        self._last_check = self.clock()
        self._running = True
        self._task = asyncio.create_task(self._check_loop())
        logger.info(f"Daily reset scheduler started (interval: {self.check_interval}s)")

    async def stop(self):
        """Stop the background rollover task."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        logger.info("Daily reset scheduler stopped")

    async def _check_loop(self):
        """Main check loop."""
        while self._running:
            await asyncio.sleep(self.check_interval)
            try:
                await self.tick()
            except Exception as e:
                logger.error(f"Error during daily rollover: {e}", exc_info=True)

    async def tick(self) -> Optional[Dict[str, int]]:
        """
        Run one check.

        The first check only records the current time. Later checks roll over
        when the local date moved forward since the previous check.

        Returns:
            Rollover summary, or None if no rollover happened
        """
        now = self.clock()
        previous = self._last_check
        self._last_check = now

        if previous is None:
            return None

        if now.date() <= previous.date():
            return None

        new_week = now.isocalendar()[:2] != previous.isocalendar()[:2]
        new_month = (now.year, now.month) != (previous.year, previous.month)

        logger.info(
            f"Date changed {previous.date()} -> {now.date()} "
            f"(new_week={new_week}, new_month={new_month})"
        )
        return await self.service.perform_daily_rollover(
            now,
            reset_weekly=new_week,
            reset_monthly=new_month,
        )
