"""Tests for the event replay entry point (rewards_engine/main.py)"""
import json
import pytest

from rewards_engine.main import parse_args, replay_events
from rewards_engine.models.activity import ActivityType


@pytest.mark.asyncio
async def test_replay_events(service, clock, tmp_path):
    events = tmp_path / "events.jsonl"
    lines = [
        {"activity_type": "mealLogging", "payload": {"calories": 500},
         "occurred_at": clock().isoformat()},
        {"activity_type": "exercise", "payload": {"calories": 9000},
         "occurred_at": clock().isoformat()},
    ]
    events.write_text(
        "\n".join(json.dumps(line) for line in lines) + "\n\nnot json\n",
        encoding="utf-8",
    )

    admitted = await replay_events(service, events)

    assert admitted == 1
    assert service.lifetime_total(ActivityType.MEAL_LOGGING) == 1
    assert service.lifetime_total(ActivityType.EXERCISE) == 0


def test_parse_args(tmp_path):
    args = parse_args(["--events", str(tmp_path / "e.jsonl")])
    assert args.events.name == "e.jsonl"
    assert parse_args([]).events is None


@pytest.mark.asyncio
async def test_replay_events_with_utc_timestamps(service, tmp_path):
    events = tmp_path / "events.jsonl"
    events.write_text(
        json.dumps({"activity_type": "mealLogging", "payload": {},
                    "occurred_at": "2024-03-13T11:00:00Z"}) + "\n"
        + json.dumps({"activity_type": "steps", "payload": {"steps": 7000},
                      "occurred_at": "2024-03-13T11:30:00+00:00"}) + "\n",
        encoding="utf-8",
    )

    admitted = await replay_events(service, events)

    assert admitted == 2
    assert service.lifetime_total(ActivityType.MEAL_LOGGING) == 1
