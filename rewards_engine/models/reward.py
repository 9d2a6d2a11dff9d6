"""Reward, level and progress models for gamification"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from rewards_engine.models.activity import ActivityType


class RewardType(str, Enum):
    """Reward families"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    MILESTONE = "milestone"
    SPECIAL = "special"
    STREAK = "streak"
    CHALLENGE = "challenge"


class BadgeCategory(str, Enum):
    """Badge categories used for grouping in the UI"""
    LOGGING = "logging"
    NUTRITION = "nutrition"
    EXERCISE = "exercise"
    WATER = "water"
    CONSISTENCY = "consistency"
    ACHIEVEMENT = "achievement"
    SLEEP = "sleep"
    WEIGHT = "weight"
    MEDITATION = "meditation"
    STEPS = "steps"


class CriteriaType(str, Enum):
    """How a reward's unlock condition is evaluated"""
    STREAK = "streak"                      # Triggering activity's streak >= value
    ANY_STREAK = "any_streak"              # Best current streak of any activity >= value
    LIFETIME_COUNT = "lifetime_count"      # Lifetime occurrences of activity >= value
    YEARLY_COUNT = "yearly_count"          # Occurrences of activity this year >= value
    FIRST_OCCURRENCE = "first_occurrence"  # The very first event of activity
    DAILY_SUMMARY = "daily_summary"        # Needs daily-summary history (not available)


class UserLevel(str, Enum):
    """User levels, lowest first"""
    BEGINNER = "beginner"
    ROOKIE = "rookie"
    ENTHUSIAST = "enthusiast"
    CHAMPION = "champion"
    MASTER = "master"
    LEGEND = "legend"
    TITAN = "titan"
    IMMORTAL = "immortal"
    DEITY = "deity"

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @property
    def emoji(self) -> str:
        return _LEVEL_EMOJI[self]


_LEVEL_EMOJI = {
    UserLevel.BEGINNER: "🌱",
    UserLevel.ROOKIE: "🔰",
    UserLevel.ENTHUSIAST: "💪",
    UserLevel.CHAMPION: "🏆",
    UserLevel.MASTER: "👑",
    UserLevel.LEGEND: "⭐",
    UserLevel.TITAN: "⚡",
    UserLevel.IMMORTAL: "🌟",
    UserLevel.DEITY: "✨",
}


class RewardCriteria(BaseModel):
    """Data form of a reward's unlock predicate"""
    type: CriteriaType
    value: Optional[int] = Field(None, ge=1)
    activity: Optional[ActivityType] = None
    rule: Optional[str] = None

    @model_validator(mode='after')
    def check_required_fields(self) -> "RewardCriteria":
        """Ensure each criteria type carries the fields it is evaluated with"""
        needs_value = {
            CriteriaType.STREAK,
            CriteriaType.ANY_STREAK,
            CriteriaType.LIFETIME_COUNT,
            CriteriaType.YEARLY_COUNT,
        }
        needs_activity = {
            CriteriaType.LIFETIME_COUNT,
            CriteriaType.YEARLY_COUNT,
            CriteriaType.FIRST_OCCURRENCE,
        }
        if self.type in needs_value and self.value is None:
            raise ValueError(f"Criteria '{self.type.value}' requires a 'value'")
        if self.type in needs_activity and self.activity is None:
            raise ValueError(f"Criteria '{self.type.value}' requires an 'activity'")
        if self.type == CriteriaType.DAILY_SUMMARY and not self.rule:
            raise ValueError("Criteria 'daily_summary' requires a 'rule'")
        return self


class RewardDefinition(BaseModel):
    """Static reward catalog entry"""
    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    emoji: str = "🏅"
    points: int = Field(0, ge=0)
    type: RewardType
    category: Optional[BadgeCategory] = None
    criteria: RewardCriteria

    model_config = {"frozen": True}


class UserReward(BaseModel):
    """An unlocked reward"""
    reward: RewardDefinition
    earned_at: datetime

    @property
    def id(self) -> str:
        return self.reward.id


class UserProgress(BaseModel):
    """Level and unlocked rewards for the single tracked user"""
    current_level: UserLevel = UserLevel.BEGINNER
    days_to_next_level: int = Field(0, ge=0)
    level_progress: float = Field(0.0, ge=0.0, le=1.0)
    unlocked_rewards: list[UserReward] = Field(default_factory=list)

    @property
    def unlocked_reward_ids(self) -> set[str]:
        return {reward.id for reward in self.unlocked_rewards}


@dataclass(frozen=True)
class LevelInfo:
    """Output of the leveling curve for a streak length"""
    level: UserLevel
    days_to_next_level: int
    level_progress: float


@dataclass(frozen=True)
class LevelUpEvent:
    """Emitted on the submission where the level changes"""
    old_level: UserLevel
    new_level: UserLevel
    total_xp: int = 0  # Leveling follows streak length, not accumulated XP
