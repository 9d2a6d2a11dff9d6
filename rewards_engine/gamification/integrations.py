"""
Rewards Integration Hooks

Integration functions that connect the rewards engine with health tracking
features. Call these after a health action (meal logged, workout saved, ...)
to build the activity payload and submit it.

Usage:
    from rewards_engine.gamification.integrations import process_meal_logging

    # After saving the meal
    result = await process_meal_logging(service, "lunch", 650, logged_at)
"""

import logging
from datetime import datetime
from typing import Mapping, Optional

from rewards_engine.models.activity import ActivityType
from rewards_engine.models.result import ActivityResult

logger = logging.getLogger(__name__)


def _log_outcome(activity_type: ActivityType, result: ActivityResult) -> None:
    if not result.success:
        logger.info(f"[REWARDS] {activity_type.value} not rewarded: {result.message}")
        return

    for reward in result.new_rewards:
        logger.info(f"[REWARDS] Unlocked {reward.reward.emoji} {reward.reward.title}")
    if result.level_up is not None:
        logger.info(
            f"[REWARDS] Level up: {result.level_up.old_level.title} -> "
            f"{result.level_up.new_level.title}"
        )


async def _submit(
    service,
    activity_type: ActivityType,
    payload: dict,
    timestamp: Optional[datetime],
) -> ActivityResult:
    result = await service.submit_activity(activity_type, payload, occurred_at=timestamp)
    _log_outcome(activity_type, result)
    return result


async def process_meal_logging(
    service,
    meal_type: str,
    calories: int,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """
    Submit a logged meal

    Args:
        service: RewardsService instance
        meal_type: breakfast/lunch/dinner/snack
        calories: Meal calories
        timestamp: When the meal was eaten (defaults to now)
    """
    payload = {"mealType": meal_type, "calories": calories}
    return await _submit(service, ActivityType.MEAL_LOGGING, payload, timestamp)


async def process_exercise(
    service,
    exercise_type: str,
    calories_burned: int,
    duration_minutes: int,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """
    Submit an exercise session

    Calories burned are submitted as "calories", the field checked against
    the plausibility bound.
    """
    payload = {
        "exerciseType": exercise_type,
        "calories": calories_burned,
        "durationMinutes": duration_minutes,
    }
    return await _submit(service, ActivityType.EXERCISE, payload, timestamp)


async def process_steps(
    service,
    steps: int,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """Submit a steps reading"""
    return await _submit(service, ActivityType.STEPS, {"steps": steps}, timestamp)


async def process_weight_check_in(
    service,
    weight: float,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """Submit a weight check-in"""
    return await _submit(service, ActivityType.WEIGHT_CHECK_IN, {"weight": weight}, timestamp)


async def process_meditation(
    service,
    duration_minutes: int,
    meditation_type: str,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """Submit a meditation session"""
    payload = {"durationMinutes": duration_minutes, "meditationType": meditation_type}
    return await _submit(service, ActivityType.MEDITATION, payload, timestamp)


async def process_calorie_goal_achievement(
    service,
    target_calories: int,
    actual_calories: int,
    timestamp: Optional[datetime] = None
) -> ActivityResult:
    """
    Submit a calorie goal check

    The activity is submitted either way; "achieved" records whether actual
    calories stayed within the target.
    """
    payload = {
        "targetCalories": target_calories,
        "actualCalories": actual_calories,
        "achieved": actual_calories <= target_calories,
    }
    return await _submit(service, ActivityType.CALORIE_GOAL, payload, timestamp)


async def process_daily_goal_completion(
    service,
    goals: Mapping[str, bool],
    timestamp: Optional[datetime] = None
) -> Optional[ActivityResult]:
    """
    Submit a daily goal completion, only if every goal is complete

    Returns:
        ActivityResult, or None if some goal is still open (nothing submitted)
    """
    if not all(goals.values()):
        open_goals = [name for name, done in goals.items() if not done]
        logger.debug(f"[REWARDS] Daily goals not complete yet: {open_goals}")
        return None

    payload = {"goals": dict(goals), "allCompleted": True}
    return await _submit(service, ActivityType.DAILY_GOAL_COMPLETION, payload, timestamp)
