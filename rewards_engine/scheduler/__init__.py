"""Background scheduling for the rewards engine"""

from rewards_engine.scheduler.daily_reset import DailyResetScheduler

__all__ = ["DailyResetScheduler"]
