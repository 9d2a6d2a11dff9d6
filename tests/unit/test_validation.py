"""Unit tests for anti-gaming validation (rewards_engine/gamification/validation.py)"""
import pytest
from datetime import datetime, timedelta

from rewards_engine.gamification.validation import ActivityValidator, ExercisePayload
from rewards_engine.models.activity import ActivityType


NOW = datetime(2024, 3, 13, 12, 0, 0)


@pytest.fixture
def validator():
    return ActivityValidator(
        max_per_hour=10,
        max_retroactive_entries=3,
        retroactive_window=timedelta(hours=24),
        history_limit=100,
    )


# ============================================================================
# Plausibility Tests
# ============================================================================

def test_exercise_calories_above_bound_rejected(validator):
    """Test exercise with 6000 calories is implausible"""
    assert validator.validate(ActivityType.EXERCISE, {"calories": 6000}, NOW, NOW) is False
    assert validator.history_for(ActivityType.EXERCISE) == []


def test_exercise_calories_at_bound_accepted(validator):
    """Test the bound itself is still plausible"""
    assert validator.validate(ActivityType.EXERCISE, {"calories": 5000}, NOW, NOW) is True


def test_exercise_without_calories_accepted(validator):
    """Test payloads without calories pass the bounds check"""
    assert validator.validate(ActivityType.EXERCISE, {"exerciseType": "run"}, NOW, NOW) is True


def test_other_activity_types_have_no_bounds(validator):
    """Test calorie bound applies to exercise only"""
    assert validator.validate(ActivityType.MEAL_LOGGING, {"calories": 6000}, NOW, NOW) is True


def test_exercise_payload_keeps_extra_fields():
    payload = ExercisePayload.model_validate({"calories": 300, "durationMinutes": 45})
    assert payload.calories == 300
    assert payload.model_extra == {"durationMinutes": 45}


# ============================================================================
# Burst Limit Tests
# ============================================================================

def test_eleventh_activity_within_hour_rejected(validator):
    """Test 10 activities per hour are admitted and the 11th is rejected"""
    now = NOW
    for _ in range(10):
        assert validator.validate(ActivityType.EXERCISE, {}, now, now) is True
        now += timedelta(minutes=5)

    assert validator.validate(ActivityType.EXERCISE, {}, now, now) is False
    assert len(validator.history_for(ActivityType.EXERCISE)) == 10


def test_burst_limit_is_per_activity_type(validator):
    """Test a busy activity type doesn't block another type"""
    for _ in range(10):
        validator.validate(ActivityType.EXERCISE, {}, NOW, NOW)

    assert validator.validate(ActivityType.EXERCISE, {}, NOW, NOW) is False
    assert validator.validate(ActivityType.MEAL_LOGGING, {}, NOW, NOW) is True


def test_burst_limit_window_slides(validator):
    """Test activities older than an hour no longer count toward the limit"""
    for _ in range(10):
        validator.validate(ActivityType.STEPS, {}, NOW, NOW)

    later = NOW + timedelta(hours=1)
    assert validator.validate(ActivityType.STEPS, {}, later, later) is True


# ============================================================================
# Retroactive Quota Tests
# ============================================================================

def test_retroactive_quota(validator):
    """Test only 3 entries backdated beyond the window are admitted"""
    backdated = NOW - timedelta(days=2)

    for i in range(3):
        assert validator.validate(
            ActivityType.MEAL_LOGGING, {}, backdated + timedelta(hours=i), NOW
        ) is True

    assert validator.validate(ActivityType.MEAL_LOGGING, {}, backdated, NOW) is False


def test_recent_backdating_not_limited(validator):
    """Test entries within the retroactive window don't use the quota"""
    backdated = NOW - timedelta(days=2)
    for i in range(3):
        validator.validate(ActivityType.MEAL_LOGGING, {}, backdated + timedelta(hours=i), NOW)

    five_hours_ago = NOW - timedelta(hours=5)
    assert validator.validate(ActivityType.MEAL_LOGGING, {}, five_hours_ago, NOW) is True


# ============================================================================
# History Tests
# ============================================================================

def test_history_is_bounded():
    """Test only the most recent entries are kept per type"""
    validator = ActivityValidator(max_per_hour=1000, history_limit=5)
    for i in range(8):
        validator.validate(ActivityType.STEPS, {}, NOW + timedelta(seconds=i), NOW)

    history = validator.history_for(ActivityType.STEPS)
    assert len(history) == 5
    assert history[0] == NOW + timedelta(seconds=3)


def test_prune_removes_old_entries(validator):
    """Test prune drops entries older than the retention window"""
    old = NOW - timedelta(days=10)
    validator.validate(ActivityType.MEDITATION, {}, old, NOW)
    validator.validate(ActivityType.MEDITATION, {}, NOW, NOW)

    removed = validator.prune(NOW, timedelta(days=7))

    assert removed == 1
    assert validator.history_for(ActivityType.MEDITATION) == [NOW]


def test_prune_keeps_history_bounded(validator):
    """Test pruned histories still drop their oldest entries at the limit"""
    validator.validate(ActivityType.STEPS, {}, NOW, NOW)
    validator.prune(NOW, timedelta(days=7))

    history = validator._recent_activities[ActivityType.STEPS]
    assert history.maxlen == 100
