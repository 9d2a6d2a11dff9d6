"""
Progress Ledger

Counts admitted activities (lifetime and per calendar year), holds the user's
level and unlocked rewards, and detects level changes.

Counters track occurrences, not volume: a steps activity adds 1 regardless of
its step count.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from rewards_engine.gamification.xp_system import level_for_streak
from rewards_engine.models.activity import ActivityType
from rewards_engine.models.reward import LevelInfo, LevelUpEvent, UserProgress, UserReward

logger = logging.getLogger(__name__)

LevelCurve = Callable[[int], LevelInfo]


class ProgressLedger:
    """Lifetime/yearly counters, level and unlocked rewards"""

    def __init__(self, level_curve: LevelCurve = level_for_streak):
        self.level_curve = level_curve
        self._lifetime_totals: Dict[ActivityType, int] = defaultdict(int)
        self._yearly_totals: Dict[ActivityType, Dict[int, int]] = defaultdict(lambda: defaultdict(int))

        initial = level_curve(0)
        self.progress = UserProgress(
            current_level=initial.level,
            days_to_next_level=initial.days_to_next_level,
            level_progress=initial.level_progress,
        )

    def apply_event(
        self,
        activity_type: ActivityType,
        payload: Mapping[str, Any],
        now: datetime
    ) -> UserProgress:
        """
        Count one admitted activity

        Args:
            activity_type: Type of activity
            payload: Activity fields (not used for counting)
            now: Engine time; its year selects the yearly bucket

        Returns:
            Current user progress
        """
        self._lifetime_totals[activity_type] += 1
        self._yearly_totals[activity_type][now.year] += 1

        logger.debug(
            f"{activity_type.value} totals: lifetime={self._lifetime_totals[activity_type]}, "
            f"{now.year}={self._yearly_totals[activity_type][now.year]}"
        )
        return self.progress

    def check_level_up(self, max_streak: int) -> Optional[LevelUpEvent]:
        """
        Re-derive the level from the longest current streak

        Args:
            max_streak: Largest current streak across activity types

        Returns:
            LevelUpEvent if the level changed, None otherwise
        """
        info = self.level_curve(max_streak)
        old_level = self.progress.current_level

        self.progress.days_to_next_level = info.days_to_next_level
        self.progress.level_progress = info.level_progress

        if info.level == old_level:
            return None

        self.progress.current_level = info.level
        logger.info(f"Level changed from {old_level.title} to {info.level.title} (streak {max_streak})")

        return LevelUpEvent(old_level=old_level, new_level=info.level, total_xp=0)

    def record_rewards(self, rewards: Iterable[UserReward]) -> None:
        """Append newly unlocked rewards to the user's progress"""
        self.progress.unlocked_rewards.extend(rewards)

    def lifetime_total(self, activity_type: ActivityType) -> int:
        return self._lifetime_totals.get(activity_type, 0)

    def yearly_total(self, activity_type: ActivityType, year: int) -> int:
        return self._yearly_totals.get(activity_type, {}).get(year, 0)

    def lifetime_totals(self) -> Dict[ActivityType, int]:
        return dict(self._lifetime_totals)

    def yearly_totals(self) -> Dict[ActivityType, Dict[int, int]]:
        return {t: dict(years) for t, years in self._yearly_totals.items()}

    def restore(
        self,
        progress: UserProgress,
        lifetime_totals: Mapping[ActivityType, int],
        yearly_totals: Mapping[ActivityType, Mapping[int, int]],
    ) -> None:
        """Replace ledger state with previously saved state"""
        self.progress = progress.model_copy(deep=True)
        self._lifetime_totals = defaultdict(int, lifetime_totals)
        self._yearly_totals = defaultdict(lambda: defaultdict(int))
        for activity_type, years in yearly_totals.items():
            self._yearly_totals[activity_type].update(years)
