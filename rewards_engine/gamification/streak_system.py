"""
Per-Activity Streak Tracking System

Tracks one continuity streak per activity type. Transitions are keyed on the
calendar-day gap between the new activity and the last recorded one:

- gap 0 (same day): streak unchanged
- gap 1 (next day): streak + 1
- gap 2 (one missed day): grace period, streak + 1
- larger gap, first activity, or an activity dated before the last one:
  streak restarts at 1

Streaks must be fed in non-decreasing time order per activity type. A
backdated activity older than the last recorded one resets the streak.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List

from rewards_engine.models.activity import ActivityStreak, ActivityType

logger = logging.getLogger(__name__)

GRACE_PERIOD_DAYS = 2


class StreakTracker:
    """Owns the streak for every activity type, created lazily on first activity"""

    def __init__(self):
        self._streaks: Dict[ActivityType, ActivityStreak] = {}

    def advance(self, activity_type: ActivityType, occurred_at: datetime) -> ActivityStreak:
        """
        Apply an admitted activity to its streak

        Args:
            activity_type: Type of activity
            occurred_at: When the activity happened (local time)

        Returns:
            Copy of the updated streak
        """
        streak = self._streaks.get(activity_type)

        if streak is None or streak.last_activity_date is None:
            streak = ActivityStreak.initial(activity_type)
            streak.current_streak = 1
            self._streaks[activity_type] = streak
            logger.debug(f"Started {activity_type.value} streak")
        else:
            gap_days = (occurred_at.date() - streak.last_activity_date.date()).days
            old_streak = streak.current_streak

            if gap_days == 0:
                pass
            elif gap_days == 1:
                streak.current_streak += 1
            elif gap_days == GRACE_PERIOD_DAYS:
                streak.current_streak += 1
                logger.info(
                    f"{activity_type.value} streak kept by grace period: Day {streak.current_streak}"
                )
            else:
                streak.current_streak = 1
                if gap_days < 0:
                    logger.warning(
                        f"{activity_type.value} activity dated {occurred_at} precedes last "
                        f"activity {streak.last_activity_date}; streak reset"
                    )
                else:
                    logger.info(
                        f"{activity_type.value} streak broken. Was {old_streak}, "
                        f"gap was {gap_days} days"
                    )

        streak.last_activity_date = occurred_at

        if streak.current_streak > streak.longest_streak:
            streak.longest_streak = streak.current_streak

        return streak.copy()

    def streak_for(self, activity_type: ActivityType) -> ActivityStreak:
        """Current streak for an activity type (zero streak if never active)"""
        streak = self._streaks.get(activity_type)
        if streak is None:
            return ActivityStreak.initial(activity_type)
        return streak.copy()

    def all_streaks(self) -> List[ActivityStreak]:
        """All tracked streaks, longest current streak first"""
        streaks = [s.copy() for s in self._streaks.values()]
        streaks.sort(key=lambda s: s.current_streak, reverse=True)
        return streaks

    def max_current_streak(self) -> int:
        return max((s.current_streak for s in self._streaks.values()), default=0)

    def restore(self, streaks: Iterable[ActivityStreak]) -> None:
        """Replace tracked streaks with previously saved ones"""
        self._streaks = {s.activity_type: s.copy() for s in streaks}
