"""Pydantic and dataclass models for the rewards engine"""

from rewards_engine.models.activity import ActivityEvent, ActivityStreak, ActivityType
from rewards_engine.models.challenge import Challenge, ChallengePeriod, ChallengeProgress
from rewards_engine.models.result import ActivityResult
from rewards_engine.models.reward import (
    BadgeCategory,
    CriteriaType,
    LevelInfo,
    LevelUpEvent,
    RewardCriteria,
    RewardDefinition,
    RewardType,
    UserLevel,
    UserProgress,
    UserReward,
)
from rewards_engine.models.snapshot import EngineSnapshot

__all__ = [
    "ActivityEvent",
    "ActivityStreak",
    "ActivityType",
    "Challenge",
    "ChallengePeriod",
    "ChallengeProgress",
    "ActivityResult",
    "BadgeCategory",
    "CriteriaType",
    "LevelInfo",
    "LevelUpEvent",
    "RewardCriteria",
    "RewardDefinition",
    "RewardType",
    "UserLevel",
    "UserProgress",
    "UserReward",
    "EngineSnapshot",
]
