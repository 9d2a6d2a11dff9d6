"""
Gamification system for the rewards engine

This module implements the reward mechanics:
- Anti-gaming validation
- Per-activity streak tracking
- XP calculation and streak-based levels
- Catalog-driven rewards
- Daily, weekly and monthly challenges
"""

from rewards_engine.gamification.xp_system import calculate_xp, get_streak_multiplier, level_for_streak
from rewards_engine.gamification.streak_system import StreakTracker
from rewards_engine.gamification.validation import ActivityValidator
from rewards_engine.gamification.achievement_system import RewardCatalogEvaluator
from rewards_engine.gamification.challenges import ChallengeTracker
from rewards_engine.gamification.progress_ledger import ProgressLedger

__all__ = [
    "calculate_xp",
    "get_streak_multiplier",
    "level_for_streak",
    "StreakTracker",
    "ActivityValidator",
    "RewardCatalogEvaluator",
    "ChallengeTracker",
    "ProgressLedger",
]
