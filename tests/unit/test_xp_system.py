"""Unit tests for XP System (rewards_engine/gamification/xp_system.py)"""
import pytest

from rewards_engine.gamification.xp_system import (
    BASE_XP,
    calculate_xp,
    get_streak_multiplier,
    level_for_streak,
)
from rewards_engine.models.activity import ActivityStreak, ActivityType
from rewards_engine.models.reward import UserLevel


# ============================================================================
# XP Calculation Tests
# ============================================================================

@pytest.mark.parametrize("streak_days,expected", [
    (0, 10),
    (6, 10),
    (7, 11),
    (30, 12),
    (100, 15),
    (365, 20),
    (1000, 20),
])
def test_meal_logging_xp_by_streak(streak_days, expected):
    """Test meal XP follows the highest streak tier reached"""
    assert calculate_xp(ActivityType.MEAL_LOGGING, streak_days) == expected


def test_calculate_xp_accepts_streak_object():
    streak = ActivityStreak(activity_type=ActivityType.EXERCISE, current_streak=30)
    assert calculate_xp(ActivityType.EXERCISE, streak) == 24


def test_xp_rounds_half_up():
    """Test 16.5 and 5.5 round up"""
    assert calculate_xp(ActivityType.WEIGHT_CHECK_IN, 7) == 17
    assert calculate_xp(ActivityType.STEPS, 7) == 6


def test_every_activity_type_has_base_xp():
    assert set(BASE_XP) == set(ActivityType)
    assert BASE_XP[ActivityType.DAILY_GOAL_COMPLETION] == 50


def test_multipliers_do_not_stack():
    assert get_streak_multiplier(0) == 1.0
    assert get_streak_multiplier(7) == 1.1
    assert get_streak_multiplier(99) == 1.2
    assert get_streak_multiplier(365) == 2.0


# ============================================================================
# Leveling Curve Tests
# ============================================================================

@pytest.mark.parametrize("streak_days,expected_level", [
    (0, UserLevel.BEGINNER),
    (2, UserLevel.BEGINNER),
    (3, UserLevel.ROOKIE),
    (7, UserLevel.ENTHUSIAST),
    (14, UserLevel.CHAMPION),
    (30, UserLevel.MASTER),
    (60, UserLevel.LEGEND),
    (100, UserLevel.TITAN),
    (180, UserLevel.IMMORTAL),
    (365, UserLevel.DEITY),
])
def test_level_for_streak(streak_days, expected_level):
    assert level_for_streak(streak_days).level == expected_level


def test_level_progress_within_level():
    """Test days to next level and progress fraction"""
    info = level_for_streak(10)

    assert info.level == UserLevel.ENTHUSIAST
    assert info.days_to_next_level == 4
    assert info.level_progress == pytest.approx(3 / 7)


def test_top_level_is_complete():
    info = level_for_streak(500)

    assert info.level == UserLevel.DEITY
    assert info.days_to_next_level == 0
    assert info.level_progress == 1.0
