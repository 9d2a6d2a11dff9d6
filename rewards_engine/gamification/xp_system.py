"""
XP and Leveling System

Maps activities to XP awards and streak lengths to levels.

XP Award Rules (base XP per admitted activity):
- Meal logging: 10 XP
- Exercise: 20 XP
- Calorie goal met: 20 XP
- Steps: 5 XP (per pre-normalized unit, typically 1000 steps)
- Weight check-in: 15 XP
- Meditation: 15 XP
- Daily goal completion: 50 XP

Streak Multipliers (highest satisfied tier only, no stacking):
- 365+ days: x2.0
- 100+ days: x1.5
- 30+ days: x1.2
- 7+ days: x1.1

Leveling Curve (by longest current streak, in days):
- Beginner 0, Rookie 3, Enthusiast 7, Champion 14, Master 30,
  Legend 60, Titan 100, Immortal 180, Deity 365
"""

import logging
import math
from typing import Dict, List, Tuple, Union

from rewards_engine.models.activity import ActivityStreak, ActivityType
from rewards_engine.models.reward import LevelInfo, UserLevel

logger = logging.getLogger(__name__)


BASE_XP: Dict[ActivityType, int] = {
    ActivityType.MEAL_LOGGING: 10,
    ActivityType.EXERCISE: 20,
    ActivityType.CALORIE_GOAL: 20,
    ActivityType.STEPS: 5,
    ActivityType.WEIGHT_CHECK_IN: 15,
    ActivityType.MEDITATION: 15,
    ActivityType.DAILY_GOAL_COMPLETION: 50,
}

# Highest threshold first
STREAK_MULTIPLIERS: List[Tuple[int, float]] = [
    (365, 2.0),
    (100, 1.5),
    (30, 1.2),
    (7, 1.1),
]

LEVEL_THRESHOLDS: List[Tuple[UserLevel, int]] = [
    (UserLevel.BEGINNER, 0),
    (UserLevel.ROOKIE, 3),
    (UserLevel.ENTHUSIAST, 7),
    (UserLevel.CHAMPION, 14),
    (UserLevel.MASTER, 30),
    (UserLevel.LEGEND, 60),
    (UserLevel.TITAN, 100),
    (UserLevel.IMMORTAL, 180),
    (UserLevel.DEITY, 365),
]


def get_streak_multiplier(streak_days: int) -> float:
    """Multiplier for the highest streak tier reached"""
    for threshold, multiplier in STREAK_MULTIPLIERS:
        if streak_days >= threshold:
            return multiplier
    return 1.0


def calculate_xp(
    activity_type: ActivityType,
    streak: Union[ActivityStreak, int]
) -> int:
    """
    Calculate XP for an activity

    Args:
        activity_type: Type of activity
        streak: The activity's streak, or its current length in days

    Returns:
        XP amount, rounded half up
    """
    streak_days = streak.current_streak if isinstance(streak, ActivityStreak) else streak
    base_xp = BASE_XP[activity_type]
    multiplier = get_streak_multiplier(streak_days)

    # Half-up rounding: 22.5 -> 23
    return int(math.floor(base_xp * multiplier + 0.5))


def level_for_streak(streak_days: int) -> LevelInfo:
    """
    Default leveling curve: level from a streak length

    Returns:
        LevelInfo with the level, days until the next level and progress
        through the current level (0..1, 1.0 at the top level)
    """
    index = 0
    for i, (_, min_days) in enumerate(LEVEL_THRESHOLDS):
        if streak_days >= min_days:
            index = i

    level, level_min = LEVEL_THRESHOLDS[index]

    if index == len(LEVEL_THRESHOLDS) - 1:
        return LevelInfo(level=level, days_to_next_level=0, level_progress=1.0)

    next_min = LEVEL_THRESHOLDS[index + 1][1]
    progress = (streak_days - level_min) / (next_min - level_min)

    return LevelInfo(
        level=level,
        days_to_next_level=next_min - streak_days,
        level_progress=min(max(progress, 0.0), 1.0),
    )
