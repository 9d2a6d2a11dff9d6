"""Activity processing result"""
from dataclasses import dataclass, field
from typing import Optional

from rewards_engine.models.activity import ActivityStreak
from rewards_engine.models.challenge import ChallengeProgress
from rewards_engine.models.reward import LevelUpEvent, UserReward


@dataclass
class ActivityResult:
    """Returned to the caller for every submission, admitted or not"""
    success: bool
    message: str
    xp_earned: int = 0
    new_rewards: list[UserReward] = field(default_factory=list)
    level_up: Optional[LevelUpEvent] = None
    streak: Optional[ActivityStreak] = None
    completed_challenges: list[ChallengeProgress] = field(default_factory=list)

    @classmethod
    def rejected(cls, message: str = "Invalid activity data detected") -> "ActivityResult":
        return cls(success=False, message=message)
