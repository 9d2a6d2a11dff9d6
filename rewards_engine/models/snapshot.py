"""Serializable engine state handed to the snapshot store"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from rewards_engine.models.activity import ActivityStreak, ActivityType
from rewards_engine.models.challenge import ChallengeProgress
from rewards_engine.models.reward import UserProgress


class EngineSnapshot(BaseModel):
    """Progress, streaks, counters and challenge state at one point in time"""
    progress: UserProgress = Field(default_factory=UserProgress)
    streaks: list[ActivityStreak] = Field(default_factory=list)
    lifetime_totals: dict[ActivityType, int] = Field(default_factory=dict)
    yearly_totals: dict[ActivityType, dict[int, int]] = Field(default_factory=dict)
    challenges: list[ChallengeProgress] = Field(default_factory=list)
    saved_at: Optional[datetime] = None
