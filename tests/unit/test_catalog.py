"""Unit tests for catalog loading (rewards_engine/gamification/catalog.py)"""
import json
import pytest

from rewards_engine.exceptions import CatalogError, ConfigurationError
from rewards_engine.gamification.catalog import load_challenge_catalog, load_reward_catalog
from rewards_engine.models.reward import CriteriaType, RewardType


def _reward(reward_id="r1", **criteria):
    return {
        "id": reward_id,
        "title": "Reward",
        "type": "milestone",
        "criteria": criteria or {"type": "lifetime_count", "activity": "exercise", "value": 5},
    }


# ============================================================================
# Packaged Catalog Tests
# ============================================================================

def test_packaged_reward_catalog_loads():
    rewards = load_reward_catalog()
    by_id = {r.id: r for r in rewards}

    assert len(by_id) == len(rewards)
    assert by_id["first_meal"].criteria.type == CriteriaType.FIRST_OCCURRENCE
    assert by_id["meals_100"].criteria.value == 100
    assert by_id["streak_7"].type == RewardType.STREAK


def test_packaged_challenge_catalog_loads():
    challenges = load_challenge_catalog()
    assert {c.id: c.target_value for c in challenges} == {
        "daily_meal": 1,
        "weekly_calorie": 5,
        "monthly_perfect": 20,
    }


# ============================================================================
# Error Tests
# ============================================================================

def test_missing_file_raises(tmp_path):
    with pytest.raises(CatalogError) as exc_info:
        load_reward_catalog(tmp_path / "missing.json")

    assert exc_info.value.catalog_path.endswith("missing.json")
    assert isinstance(exc_info.value, ConfigurationError)


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "rewards.json"
    path.write_text("[{not json", encoding="utf-8")

    with pytest.raises(CatalogError):
        load_reward_catalog(path)


def test_top_level_must_be_list(tmp_path):
    path = tmp_path / "challenges.json"
    path.write_text(json.dumps({"id": "x"}), encoding="utf-8")

    with pytest.raises(CatalogError):
        load_challenge_catalog(path)


def test_unknown_activity_type_raises():
    with pytest.raises(CatalogError):
        load_reward_catalog([_reward(type="lifetime_count", activity="juggling", value=3)])


def test_unknown_criteria_type_raises():
    with pytest.raises(CatalogError):
        load_reward_catalog([_reward(type="moon_phase", value=3)])


def test_criteria_missing_value_raises():
    with pytest.raises(CatalogError):
        load_reward_catalog([_reward(type="lifetime_count", activity="exercise")])


def test_duplicate_ids_raise():
    with pytest.raises(CatalogError) as exc_info:
        load_reward_catalog([_reward("dup"), _reward("dup")])

    assert exc_info.value.entry_id == "dup"


def test_challenge_target_must_be_positive():
    with pytest.raises(CatalogError):
        load_challenge_catalog([{
            "id": "c1",
            "title": "Zero",
            "period": "daily",
            "required_activity": "steps",
            "target_value": 0,
        }])


def test_catalog_from_file(tmp_path):
    path = tmp_path / "rewards.json"
    path.write_text(json.dumps([_reward("custom")]), encoding="utf-8")

    rewards = load_reward_catalog(str(path))
    assert [r.id for r in rewards] == ["custom"]
