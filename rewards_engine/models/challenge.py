"""Challenge models"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from rewards_engine.models.activity import ActivityType


class ChallengePeriod(str, Enum):
    """How often a challenge instance starts over"""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Challenge(BaseModel):
    """Challenge definition"""
    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    period: ChallengePeriod
    required_activity: ActivityType
    target_value: int = Field(..., ge=1)
    xp_reward: int = Field(0, ge=0)

    model_config = {"frozen": True}


@dataclass
class ChallengeProgress:
    """Progress of one challenge instance in the current period"""
    challenge: Challenge
    current_progress: int = 0
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    def update_progress(self, now: datetime) -> bool:
        """
        Count one matching activity

        Returns:
            True if this call completed the challenge
        """
        if self.is_completed:
            return False

        self.current_progress += 1
        if self.current_progress >= self.challenge.target_value:
            self.is_completed = True
            self.completed_at = now
            return True
        return False

    def reset(self) -> None:
        self.current_progress = 0
        self.is_completed = False
        self.completed_at = None
