"""
Reward Catalog Evaluation

Checks the static reward catalog after every admitted activity and unlocks
rewards whose criteria became satisfied. Criteria categories:
- Streaks (triggering activity, or any activity)
- Lifetime and yearly milestones (activity occurrence counts)
- One-shot firsts (first logged meal)
- Daily-summary rewards (perfect week, early bird, night owl restraint)

Rewards are unlocked at most once: ids already in the user's progress are
skipped before any criteria is evaluated.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence
from datetime import datetime
import logging

from rewards_engine.gamification.progress_ledger import ProgressLedger
from rewards_engine.gamification.streak_system import StreakTracker
from rewards_engine.models.activity import ActivityType
from rewards_engine.models.reward import CriteriaType, RewardCriteria, RewardDefinition, UserReward

logger = logging.getLogger(__name__)


class RewardCatalogEvaluator:
    """Evaluates reward criteria against ledger counters and streaks"""

    def __init__(
        self,
        catalog: Sequence[RewardDefinition],
        ledger: ProgressLedger,
        streaks: StreakTracker,
    ):
        self.catalog = tuple(catalog)
        self.ledger = ledger
        self.streaks = streaks
        self._by_id = {reward.id: reward for reward in self.catalog}

    def evaluate(
        self,
        activity_type: ActivityType,
        payload: Mapping[str, Any],
        now: datetime
    ) -> List[UserReward]:
        """
        Unlock rewards newly satisfied by an activity

        Args:
            activity_type: Type of the triggering activity
            payload: Activity fields
            now: Engine time, recorded as earned_at

        Returns:
            Newly unlocked rewards (already recorded in the ledger)
        """
        unlocked_ids = self.ledger.progress.unlocked_reward_ids
        newly_unlocked = []

        for reward in self.catalog:
            # Skip if already unlocked
            if reward.id in unlocked_ids:
                continue

            if self.is_satisfied(reward.criteria, activity_type, now):
                newly_unlocked.append(UserReward(reward=reward, earned_at=now))
                logger.info(
                    f"Unlocked reward: {reward.id} ({reward.title}) +{reward.points} points"
                )

        if newly_unlocked:
            self.ledger.record_rewards(newly_unlocked)

        return newly_unlocked

    def is_satisfied(
        self,
        criteria: RewardCriteria,
        activity_type: ActivityType,
        now: datetime
    ) -> bool:
        """Check one criteria for the triggering activity"""
        if criteria.type == CriteriaType.STREAK:
            return self.streaks.streak_for(activity_type).current_streak >= criteria.value

        elif criteria.type == CriteriaType.ANY_STREAK:
            return self.streaks.max_current_streak() >= criteria.value

        elif criteria.type == CriteriaType.LIFETIME_COUNT:
            return self.ledger.lifetime_total(criteria.activity) >= criteria.value

        elif criteria.type == CriteriaType.YEARLY_COUNT:
            return self.ledger.yearly_total(criteria.activity, now.year) >= criteria.value

        elif criteria.type == CriteriaType.FIRST_OCCURRENCE:
            return (
                activity_type == criteria.activity
                and self.ledger.lifetime_total(criteria.activity) == 1
            )

        elif criteria.type == CriteriaType.DAILY_SUMMARY:
            return _check_daily_summary(criteria.rule)

        return False

    def progress_toward(self, reward_id: str, now: datetime) -> Dict[str, Any]:
        """
        Calculate progress toward a reward

        Streak criteria are unlocked by whichever activity reaches the
        value, so their progress is the best current streak of any activity.

        Returns:
            {
                'current': int,
                'required': int,
                'percentage': int,
                'description': str
            }

        Raises:
            KeyError: If the reward id is not in the catalog
        """
        criteria = self._by_id[reward_id].criteria

        current = 0
        required = criteria.value or 1

        if reward_id in self.ledger.progress.unlocked_reward_ids:
            current = required

        elif criteria.type in (CriteriaType.STREAK, CriteriaType.ANY_STREAK):
            current = self.streaks.max_current_streak()

        elif criteria.type == CriteriaType.LIFETIME_COUNT:
            current = self.ledger.lifetime_total(criteria.activity)

        elif criteria.type == CriteriaType.YEARLY_COUNT:
            current = self.ledger.yearly_total(criteria.activity, now.year)

        elif criteria.type == CriteriaType.FIRST_OCCURRENCE:
            current = min(self.ledger.lifetime_total(criteria.activity), 1)

        percentage = min(100, int(current / required * 100))

        return {
            'current': current,
            'required': required,
            'percentage': percentage,
            'description': f"{current}/{required}"
        }


def _check_daily_summary(rule: Optional[str]) -> bool:
    """
    Rewards that need the daily-summary history (perfect_week, early_bird,
    night_owl_restraint). That history is owned outside the engine and is
    not available here, so these rewards are never unlocked.
    """
    return False
