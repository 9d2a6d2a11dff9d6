"""Activity models for the rewards engine"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    """Activity types that can earn rewards"""
    MEAL_LOGGING = "mealLogging"
    EXERCISE = "exercise"
    CALORIE_GOAL = "calorieGoal"
    STEPS = "steps"
    WEIGHT_CHECK_IN = "weightCheckIn"
    MEDITATION = "meditation"
    DAILY_GOAL_COMPLETION = "dailyGoalCompletion"


class ActivityEvent(BaseModel):
    """One admissible activity occurrence, consumed once by the engine"""
    activity_type: ActivityType
    payload: dict[str, Any] = Field(default_factory=dict)
    occurred_at: datetime


@dataclass
class ActivityStreak:
    """Continuity streak for one activity type"""
    activity_type: ActivityType
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: Optional[datetime] = None

    @classmethod
    def initial(cls, activity_type: ActivityType) -> "ActivityStreak":
        return cls(activity_type=activity_type)

    def copy(self) -> "ActivityStreak":
        return replace(self)
