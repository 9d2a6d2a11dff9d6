"""Unit tests for rewards engine models"""
import pytest
from datetime import datetime
from pydantic import ValidationError

from rewards_engine.models import (
    ActivityResult,
    ActivityType,
    Challenge,
    ChallengePeriod,
    ChallengeProgress,
    RewardCriteria,
    UserLevel,
)


def test_activity_type_values():
    assert ActivityType("mealLogging") is ActivityType.MEAL_LOGGING
    assert ActivityType.DAILY_GOAL_COMPLETION.value == "dailyGoalCompletion"


def test_user_level_display():
    assert UserLevel.CHAMPION.title == "Champion"
    assert UserLevel.DEITY.emoji == "✨"


def test_daily_summary_criteria_needs_rule():
    with pytest.raises(ValidationError):
        RewardCriteria(type="daily_summary")


def test_first_occurrence_needs_activity():
    with pytest.raises(ValidationError):
        RewardCriteria(type="first_occurrence")


def test_challenge_progress_completion():
    challenge = Challenge(
        id="two_walks",
        title="Two Walks",
        period=ChallengePeriod.DAILY,
        required_activity=ActivityType.STEPS,
        target_value=2,
    )
    progress = ChallengeProgress(challenge=challenge)
    now = datetime(2024, 3, 13, 18, 0)

    assert progress.update_progress(now) is False
    assert progress.update_progress(now) is True
    assert progress.update_progress(now) is False
    assert progress.current_progress == 2
    assert progress.completed_at == now

    progress.reset()
    assert progress.current_progress == 0
    assert progress.completed_at is None


def test_rejected_result():
    result = ActivityResult.rejected()

    assert result.success is False
    assert result.xp_earned == 0
    assert result.new_rewards == []
    assert result.level_up is None
