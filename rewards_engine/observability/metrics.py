"""
Prometheus metrics definitions for the rewards engine.

Metrics by category:
- Activity metrics: submissions by type and outcome
- Gamification metrics: XP awarded, rewards unlocked, challenges completed,
  active streaks, daily rollovers

Metrics live in the default prometheus_client registry; exposing them is up
to the host application.
"""

import logging
from prometheus_client import Counter, Gauge

from rewards_engine import config

logger = logging.getLogger(__name__)

# =============================================================================
# Activity Metrics
# =============================================================================

activities_processed_total = Counter(
    "rewards_activities_processed_total",
    "Total activity submissions processed",
    ["activity_type", "status"],  # status: admitted/rejected
)

# =============================================================================
# Gamification Metrics
# =============================================================================

xp_awarded_total = Counter(
    "rewards_xp_awarded_total",
    "Total XP awarded",
    ["activity_type"],
)

rewards_unlocked_total = Counter(
    "rewards_unlocked_total",
    "Total rewards unlocked",
    ["reward_type"],
)

challenges_completed_total = Counter(
    "rewards_challenges_completed_total",
    "Total challenge instances completed",
    ["period"],
)

streaks_active = Gauge(
    "rewards_streaks_active",
    "Current streak length in days",
    ["activity_type"],
)

daily_rollovers_total = Counter(
    "rewards_daily_rollovers_total",
    "Total daily rollovers performed by the scheduler",
)


def record_activity(activity_type: str, admitted: bool, xp: int = 0) -> None:
    """Record one processed submission"""
    if not config.ENABLE_PROMETHEUS:
        return

    activities_processed_total.labels(
        activity_type=activity_type,
        status="admitted" if admitted else "rejected",
    ).inc()
    if admitted and xp:
        xp_awarded_total.labels(activity_type=activity_type).inc(xp)


def record_streak(activity_type: str, current_streak: int) -> None:
    if not config.ENABLE_PROMETHEUS:
        return
    streaks_active.labels(activity_type=activity_type).set(current_streak)


def record_reward_unlocked(reward_type: str) -> None:
    if not config.ENABLE_PROMETHEUS:
        return
    rewards_unlocked_total.labels(reward_type=reward_type).inc()


def record_challenge_completed(period: str) -> None:
    if not config.ENABLE_PROMETHEUS:
        return
    challenges_completed_total.labels(period=period).inc()


def record_daily_rollover() -> None:
    if not config.ENABLE_PROMETHEUS:
        return
    daily_rollovers_total.inc()
